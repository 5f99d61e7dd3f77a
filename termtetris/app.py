"""Curses front end: window layout, drawing, key handling and the game loop."""

from __future__ import annotations

import curses
import sys
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Optional

from termtetris.blocks import BLOCK_LIST, Block
from termtetris.logic import COLUMNS, ROWS, GameState

MIN_HEIGHT = 23
MIN_WIDTH = 48
DOUBLE_SIZE_HEIGHT = 43
NORMAL_DROP_MS = 500
FAST_DROP_MS = 50
FRAME_DELAY_S = 0.01
TOO_SMALL_MESSAGE = "Too small, make terminal bigger!"
COLOR_UNSUPPORTED_MESSAGE = "Can't change color!"


class TerminalTooSmallError(ValueError):
    """Raised when the terminal cannot fit the game windows."""


class ColorUnsupportedError(RuntimeError):
    """Raised when the terminal cannot display or change colours."""


@dataclass(frozen=True)
class WindowGeometry:
    """Size and position of one window: height, width, top row, left column."""

    height: int
    width: int
    y: int
    x: int


@dataclass(frozen=True)
class Layout:
    """Geometry of every game window for a given terminal size."""

    double_size: bool
    game_board: WindowGeometry
    score_board: WindowGeometry
    first_preview: WindowGeometry
    second_preview: WindowGeometry
    third_preview: WindowGeometry
    change_box: WindowGeometry


def compute_layout(terminal_height: int, terminal_width: int) -> Layout:
    """Place the board centred with score and previews right and the hold box left."""
    if terminal_height < MIN_HEIGHT or terminal_width < MIN_WIDTH:
        raise TerminalTooSmallError(TOO_SMALL_MESSAGE)

    double_size = terminal_height > DOUBLE_SIZE_HEIGHT
    game_height, game_width = ROWS, COLUMNS * 2
    score_height, score_width = 3, 10
    preview_height, preview_width = 4, 10
    if double_size:
        game_height *= 2
        game_width *= 2
        score_height += 2
        score_width *= 2
        preview_height *= 2
        preview_width *= 2

    game_height += 2
    game_width += 2
    score_height += 2
    score_width += 2
    preview_height += 2
    preview_width += 2

    top = terminal_height // 2 - game_height // 2
    left = terminal_width // 2 - game_width // 2
    right = terminal_width // 2 + game_width // 2

    def preview(index: int) -> WindowGeometry:
        return WindowGeometry(
            preview_height, preview_width, top + score_height + preview_height * index, right
        )

    return Layout(
        double_size=double_size,
        game_board=WindowGeometry(game_height, game_width, top, left),
        score_board=WindowGeometry(score_height, score_width, top, right),
        first_preview=preview(0),
        second_preview=preview(1),
        third_preview=preview(2),
        change_box=WindowGeometry(preview_height, preview_width, top, left - preview_width),
    )


def help_text() -> str:
    """Text printed for the -h option."""
    return "Controls:\nq - closes tetris\n"


def version_text() -> str:
    """Text printed for the -v option."""
    return "Versions:\nblablabla!\n"


def refresh_all(windows: Iterable[Any]) -> None:
    """Refresh every window."""
    for window in windows:
        window.refresh()


def borders_all(windows: Iterable[Any], ignore: Any = None) -> None:
    """Draw a bold border around every window except the ignored one."""
    for window in windows:
        if window is ignore:
            continue
        window.attron(curses.A_BOLD)
        window.box()
        window.attroff(curses.A_BOLD)


def draw_dots(window: Any, height: int, width: int, double: bool) -> None:
    """Fill the inside of the board window with the empty-cell dot pattern."""
    window.attroff(curses.A_STANDOUT)
    rows = (height - 2) // 2 if double else height - 2
    columns = (width - 2) // 4 if double else (width - 2) // 2
    for i in range(rows):
        for j in range(columns):
            y = i * 2 + 2 if double else i + 1
            x = j * 4 + 1 if double else j * 2 + 1
            window.addstr(y, x, ". ")


def draw_block(window: Any, value: int, row: int, column: int) -> None:
    """Draw one occupied cell in standout at its board position."""
    window.attron(curses.A_STANDOUT)
    window.addstr(row + 1, column * 2 + 1, ". ")


def draw_board(window: Any, double: bool, state: GameState) -> None:
    """Draw every occupied cell of the combined board."""
    for row, line in enumerate(state.entire_game):
        for column, value in enumerate(line):
            if value:
                draw_block(window, value, row, column)


def _spawn_next(state: GameState, blocks: Sequence[Block]) -> None:
    state.lock_falling_block()
    state.clear_falling_block()
    state.add_falling_block(state.get_next(blocks))


def handle_key(state: GameState, key: int, blocks: Sequence[Block] = BLOCK_LIST) -> Optional[int]:
    """Apply a key press; return the drop interval in ms, or None when the key quits."""
    if key == ord("q"):
        return None
    if key == ord("a"):
        state.move_left()
    elif key == ord("d"):
        state.move_right()
    elif key == ord("w"):
        state.rotate_right()
    elif key == ord("\n"):
        state.lock_falling_block()
    elif key == ord(" "):
        while not state.fall_further_down():
            pass
        _spawn_next(state, blocks)
    elif key == ord("s"):
        return FAST_DROP_MS
    elif key == ord("e"):
        state.change_hold(blocks)
    return NORMAL_DROP_MS


def _new_window(geometry: WindowGeometry) -> Any:
    return curses.newwin(geometry.height, geometry.width, geometry.y, geometry.x)


def _set_up_colors() -> None:
    curses.start_color()
    red, green, blue = (
        min(max(value + 200, 0), 1000) for value in curses.color_content(curses.COLOR_RED)
    )
    try:
        curses.init_color(curses.COLOR_RED, red, green, blue)
        curses.init_pair(1, curses.COLOR_RED, -1)
    except curses.error:
        pass


def run(stdscr: Any) -> int:
    """Play a game on an initialised curses screen; return the exit status."""
    curses.noecho()
    try:
        curses.curs_set(0)
    except curses.error:
        pass

    terminal_height, terminal_width = stdscr.getmaxyx()
    whole_screen = curses.newwin(terminal_height, terminal_width, 0, 0)

    try:
        layout = compute_layout(terminal_height, terminal_width)
    except TerminalTooSmallError:
        try:
            whole_screen.addstr(
                terminal_height // 2,
                max(terminal_width // 2 - len(TOO_SMALL_MESSAGE) // 2, 0),
                TOO_SMALL_MESSAGE,
            )
            whole_screen.refresh()
        except curses.error:
            pass
        time.sleep(5)
        return 1

    if not curses.has_colors() or not curses.can_change_color():
        raise ColorUnsupportedError(COLOR_UNSUPPORTED_MESSAGE)

    double = layout.double_size
    game_board = _new_window(layout.game_board)
    score_board = _new_window(layout.score_board)
    first_preview = _new_window(layout.first_preview)
    second_preview = _new_window(layout.second_preview)
    third_preview = _new_window(layout.third_preview)
    change_box = _new_window(layout.change_box)
    windows = [
        whole_screen,
        game_board,
        score_board,
        first_preview,
        second_preview,
        third_preview,
        change_box,
    ]

    whole_screen.nodelay(True)
    borders_all(windows, whole_screen)

    score_board.addstr(2 if double else 1, 1, "Current:" if double else "C:")
    score_board.addstr(4 if double else 3, 1, "High:" if double else "H:")

    titles = (
        (score_board, " SCORE ", " SCORE "),
        (first_preview, " I PREVIEW ", " I "),
        (second_preview, " II PREVIEW ", " II "),
        (third_preview, " III PREVIEW ", " III "),
        (change_box, " NEXT PIECE ", " NEXT "),
    )
    for window, long_title, short_title in titles:
        window.attron(curses.A_STANDOUT)
        window.addstr(0, 1, long_title if double else short_title)

    refresh_all(windows)
    _set_up_colors()

    state = GameState()
    state.set_up(BLOCK_LIST)
    state.add_falling_block(state.get_next(BLOCK_LIST))

    last_drop = time.monotonic()
    while (key := whole_screen.getch()) != 0:
        drop_interval_ms = handle_key(state, key, BLOCK_LIST)
        if drop_interval_ms is None:
            return 0

        now = time.monotonic()
        elapsed_ms = (now - last_drop) * 1000
        state.check_and_clear_line()
        if state.is_game_over():
            return 0
        if elapsed_ms >= drop_interval_ms:
            if state.fall_further_down():
                _spawn_next(state, BLOCK_LIST)
            last_drop = now

        state.combine_frames()
        draw_dots(game_board, layout.game_board.height, layout.game_board.width, double)
        draw_board(game_board, double, state)
        game_board.refresh()

        time.sleep(FRAME_DELAY_S)
    return 0


def _option_letters(argument: str) -> Iterable[str]:
    """Yield option letters of a single argument, stopping at an option that takes a value."""
    if not argument.startswith("-") or argument in ("-", "--"):
        return
    for letter in argument[1:]:
        yield letter
        if letter in "oic":
            return


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Handle -h and -v, otherwise play the game; return the exit status."""
    arguments = list(sys.argv[1:] if argv is None else argv)
    if len(arguments) == 1:
        for letter in _option_letters(arguments[0]):
            if letter == "h":
                sys.stdout.write(help_text())
                return 0
            if letter == "v":
                sys.stdout.write(version_text())
                return 0

    try:
        return curses.wrapper(run)
    except ColorUnsupportedError:
        sys.stdout.write(COLOR_UNSUPPORTED_MESSAGE)
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
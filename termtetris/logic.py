"""Board state and the rules that move, rotate, lock and clear blocks."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from termtetris.blocks import Block

ROWS = 20
COLUMNS = 10

Matrix = list[list[int]]


def empty_matrix() -> Matrix:
    """Return a ROWS x COLUMNS matrix of zeros."""
    return [[0] * COLUMNS for _ in range(ROWS)]


def format_matrix(matrix: Sequence[Sequence[int]]) -> str:
    """Format a matrix as space separated rows followed by a blank line."""
    lines = ("".join(f"{value} " for value in row) + "\n" for row in matrix)
    return "".join(lines) + "\n"


def _shift_row(row: Sequence[int], way: int) -> list[int]:
    if way < 0:
        return list(row[1:]) + [0]
    if way > 0:
        return [0] + list(row[:-1])
    return list(row)


def _overlaps(first: Sequence[Sequence[int]], second: Sequence[Sequence[int]]) -> bool:
    return any(a and b for row_a, row_b in zip(first, second) for a, b in zip(row_a, row_b))


@dataclass
class Point:
    """Board coordinate: x is the column, y the row, top left is (0, 0)."""

    x: int = 0
    y: int = 0


@dataclass
class GameState:
    """Locked blocks, the falling block and the queue of upcoming blocks."""

    game_frame: Matrix = field(default_factory=empty_matrix)
    falling_frame: Matrix = field(default_factory=empty_matrix)
    entire_game: Matrix = field(default_factory=empty_matrix)
    null_point: Point = field(default_factory=Point)
    orientation: int = 0
    block: Optional[Block] = None
    next_block: Optional[Block] = None
    next_next_block: Optional[Block] = None
    holds_block: bool = False
    holding_block: Optional[Block] = None
    score: int = 0
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def _current(self) -> Block:
        if self.block is None:
            raise RuntimeError("no falling block")
        return self.block

    def _place(self) -> None:
        """Write the current orientation into the falling frame at the null point."""
        block = self._current()
        origin_x, origin_y = self.null_point.x, self.null_point.y
        for i, line in enumerate(block.shape(self.orientation)):
            for j, value in enumerate(line):
                row, column = i + origin_y, j + origin_x
                if 0 <= row < ROWS and 0 <= column < COLUMNS:
                    self.falling_frame[row][column] = value

    def has_hit_rock_bottom(self) -> bool:
        """Whether the falling block rests on the floor or on a locked block."""
        if any(self.falling_frame[-1]):
            return True
        return _overlaps(self.falling_frame[:-1], self.game_frame[1:])

    def fall_further_down(self) -> bool:
        """Move the falling block down one row; return True if it has landed instead."""
        if self.has_hit_rock_bottom():
            return True
        self.null_point.y += 1
        self.falling_frame.pop()
        self.falling_frame.insert(0, [0] * COLUMNS)
        return False

    def will_collide(self, matrix: Sequence[Sequence[int]]) -> bool:
        """Whether a shape placed at the null point overlaps locked blocks or leaves the board."""
        dimension = self._current().dimension
        for i, line in enumerate(matrix[:dimension]):
            for j, value in enumerate(line[:dimension]):
                if not value:
                    continue
                row, column = i + self.null_point.y, j + self.null_point.x
                if not (0 <= row < ROWS and 0 <= column < COLUMNS):
                    return True
                if self.game_frame[row][column]:
                    return True
        return False

    def rotate_right(self) -> bool:
        """Rotate clockwise unless that would collide; return whether it rotated."""
        block = self._current()
        if self.will_collide(block.shape(self.orientation + 1)):
            return False
        self.clear_falling_block()
        self.orientation += 1
        self._place()
        return True

    def rotate_left(self) -> None:
        """Rotate anticlockwise without checking for collisions."""
        self._current()
        self.clear_falling_block()
        self.orientation -= 1
        self._place()

    def will_collide_horizontal(self, way: int) -> bool:
        """Whether shifting the falling block sideways by way would hit a locked block."""
        shifted = [_shift_row(row, way) for row in self.falling_frame]
        return _overlaps(shifted, self.game_frame)

    def move_right(self) -> bool:
        """Shift the falling block one column right; return whether it moved."""
        block = self._current()
        if any(row[-1] for row in self.falling_frame):
            return False
        if self.will_collide_horizontal(1):
            return False
        if self.null_point.x != COLUMNS - block.dimension:
            self.null_point.x += 1
        self.falling_frame = [_shift_row(row, 1) for row in self.falling_frame]
        return True

    def move_left(self) -> bool:
        """Shift the falling block one column left; return whether it moved."""
        self._current()
        if any(row[0] for row in self.falling_frame):
            return False
        if self.will_collide_horizontal(-1):
            return False
        if self.null_point.x != 0:
            self.null_point.x -= 1
        self.falling_frame = [_shift_row(row, -1) for row in self.falling_frame]
        return True

    def add_falling_block(self, block: Block) -> None:
        """Spawn a block in its flat orientation at the top left corner."""
        for i, line in enumerate(block.flat):
            self.falling_frame[i][: block.dimension] = list(line)
        self.null_point = Point(0, 0)
        self.block = block
        self.orientation = 0

    def clear_falling_block(self) -> None:
        """Empty the falling frame."""
        self.falling_frame = empty_matrix()

    def lock_falling_block(self) -> None:
        """Copy the falling block's cells into the locked frame."""
        for locked, falling in zip(self.game_frame, self.falling_frame):
            for column, value in enumerate(falling):
                if value:
                    locked[column] = value

    def combine_frames(self) -> None:
        """Merge falling and locked frames into entire_game, falling cells on top."""
        self.entire_game = [
            [falling or locked for falling, locked in zip(falling_row, locked_row)]
            for falling_row, locked_row in zip(self.falling_frame, self.game_frame)
        ]

    def render(self) -> str:
        """Combine the frames and return the whole board as text."""
        self.combine_frames()
        return format_matrix(self.entire_game)

    def check_and_clear_line(self) -> None:
        """Remove full rows, drop the rows above them and add to the score."""
        kept = [row for row in self.game_frame if not all(row)]
        cleared = ROWS - len(kept)
        self.score += COLUMNS * cleared
        self.game_frame = [[0] * COLUMNS for _ in range(cleared)] + kept

    def set_up(self, blocks: Sequence[Block], rng: Optional[random.Random] = None) -> None:
        """Pick the first two queued blocks at random."""
        if rng is not None:
            self.rng = rng
        self.next_block = self.rng.choice(blocks)
        self.next_next_block = self.rng.choice(blocks)

    def get_next(self, blocks: Sequence[Block]) -> Block:
        """Take the next block from the queue and queue a new random one."""
        if self.next_block is None:
            raise RuntimeError("game has not been set up")
        upcoming = self.next_block
        self.next_block = self.next_next_block
        self.next_next_block = self.rng.choice(blocks)
        return upcoming

    def is_game_over(self) -> bool:
        """Whether a locked block reaches the top row."""
        return any(self.game_frame[0])

    def change_hold(self, blocks: Sequence[Block]) -> None:
        """Swap the falling block with the held one, or hold it and spawn the next."""
        current = self._current()
        if self.holds_block:
            held = self.holding_block
            self.holding_block = current
            self.clear_falling_block()
            self.add_falling_block(held)
        else:
            self.holding_block = current
            self.clear_falling_block()
            self.add_falling_block(self.get_next(blocks))
            self.holds_block = True
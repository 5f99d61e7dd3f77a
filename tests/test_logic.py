import copy
import random

import pytest

from termtetris.blocks import BLOCK_LIST, LINE, O_BLOCK, T_SQUARE
from termtetris.logic import (
    COLUMNS,
    ROWS,
    GameState,
    Point,
    empty_matrix,
    format_matrix,
)


def spawn(block):
    state = GameState()
    state.add_falling_block(block)
    return state


def top_left(matrix, size):
    return tuple(tuple(row[:size]) for row in matrix[:size])


def test_empty_matrix_dimensions():
    matrix = empty_matrix()
    assert len(matrix) == ROWS
    assert all(row == [0] * COLUMNS for row in matrix)
    matrix[0][0] = 1
    assert matrix[1][0] == 0


def test_format_matrix_layout():
    text = format_matrix(empty_matrix())
    lines = text.split("\n")
    assert lines[:ROWS] == ["0 " * COLUMNS] * ROWS
    assert text.endswith("\n\n")


def test_rock_bottom_on_locked_row():
    state = GameState()
    for column in range(COLUMNS):
        state.game_frame[ROWS - 1][column] = 1
        state.falling_frame[ROWS - 2][column] = 1
    assert state.has_hit_rock_bottom() is True
    for column in range(COLUMNS):
        state.game_frame[ROWS - 1][column] = 0
    assert state.has_hit_rock_bottom() is False


def test_rock_bottom_on_floor():
    state = GameState()
    state.falling_frame[ROWS - 1][1] = 1
    assert state.has_hit_rock_bottom() is True


def test_fall_until_floor():
    state = GameState()
    state.falling_frame[0][1] = 1
    falls = 0
    while not state.fall_further_down():
        falls += 1
    assert falls == ROWS - 1
    assert state.falling_frame[ROWS - 1][1] == 1
    assert sum(map(sum, state.falling_frame)) == 1
    assert state.null_point.y == ROWS - 1


def test_add_falling_block():
    state = spawn(T_SQUARE)
    assert top_left(state.falling_frame, 3) == T_SQUARE.flat
    assert state.null_point == Point(0, 0)
    assert state.orientation == 0
    assert state.block == T_SQUARE


def test_lock_and_stack():
    state = spawn(T_SQUARE)
    while not state.fall_further_down():
        pass
    state.lock_falling_block()
    state.clear_falling_block()
    assert state.falling_frame == empty_matrix()
    locked_cells = sum(1 for row in state.game_frame for value in row if value)
    assert locked_cells == len(T_SQUARE.cells(0))

    state.add_falling_block(T_SQUARE)
    while not state.fall_further_down():
        pass
    assert state.has_hit_rock_bottom()
    overlap = any(
        f and g for fr, gr in zip(state.falling_frame, state.game_frame) for f, g in zip(fr, gr)
    )
    assert not overlap
    assert not any(state.falling_frame[ROWS - 1])


def test_rotate_right_cycles():
    state = spawn(T_SQUARE)
    original = copy.deepcopy(state.falling_frame)
    for orientation in range(1, 5):
        assert state.rotate_right() is True
        assert top_left(state.falling_frame, 3) == T_SQUARE.shape(orientation)
    assert state.falling_frame == original


def test_rotate_left_sequence():
    state = spawn(T_SQUARE)
    expected = [T_SQUARE.twoseventy, T_SQUARE.inverted, T_SQUARE.ninety]
    for shape in expected:
        state.rotate_left()
        assert top_left(state.falling_frame, 3) == shape


def test_rotate_right_then_left_is_identity():
    state = spawn(LINE)
    original = copy.deepcopy(state.falling_frame)
    state.rotate_right()
    state.rotate_left()
    assert state.falling_frame == original
    assert state.orientation % 4 == 0


def test_rotate_right_blocked_by_locked_cell():
    state = spawn(T_SQUARE)
    state.game_frame[2][1] = 9
    before = copy.deepcopy(state.falling_frame)
    assert state.rotate_right() is False
    assert state.falling_frame == before
    assert state.orientation == 0


def test_rotate_right_blocked_at_floor():
    state = spawn(T_SQUARE)
    while not state.fall_further_down():
        pass
    before = copy.deepcopy(state.falling_frame)
    assert state.rotate_right() is False
    assert state.falling_frame == before


def test_will_collide_checks_shape():
    state = spawn(T_SQUARE)
    assert state.will_collide(T_SQUARE.ninety) is False
    state.game_frame[1][2] = 5
    assert state.will_collide(T_SQUARE.ninety) is True


def test_rotation_requires_block():
    with pytest.raises(RuntimeError):
        GameState().rotate_right()
    with pytest.raises(RuntimeError):
        GameState().rotate_left()


def test_move_right_to_wall():
    state = spawn(T_SQUARE)
    moves = [state.move_right() for _ in range(9)]
    assert moves.count(True) == COLUMNS - T_SQUARE.dimension
    assert state.null_point.x == COLUMNS - T_SQUARE.dimension
    assert any(row[-1] for row in state.falling_frame)
    assert state.move_right() is False


def test_move_left_at_wall():
    state = spawn(T_SQUARE)
    before = copy.deepcopy(state.falling_frame)
    assert state.move_left() is False
    assert state.falling_frame == before


def test_move_right_then_left_is_identity():
    state = spawn(T_SQUARE)
    original = copy.deepcopy(state.falling_frame)
    for _ in range(3):
        state.move_right()
    for _ in range(3):
        state.move_left()
    assert state.falling_frame == original
    assert state.null_point == Point(0, 0)


def test_move_blocked_by_locked_cell():
    state = spawn(O_BLOCK)
    state.game_frame[0][2] = 3
    assert state.will_collide_horizontal(1) is True
    assert state.move_right() is False
    assert state.will_collide_horizontal(-1) is False


def test_combine_frames_and_render():
    state = spawn(T_SQUARE)
    state.game_frame[ROWS - 1][0] = 4
    text = state.render()
    assert state.entire_game[ROWS - 1][0] == 4
    assert top_left(state.entire_game, 3) == T_SQUARE.flat
    assert text == format_matrix(state.entire_game)


def test_check_and_clear_line():
    state = GameState()
    state.game_frame[ROWS - 1] = [1] * COLUMNS
    state.game_frame[ROWS - 2][3] = 2
    state.check_and_clear_line()
    assert state.score == COLUMNS
    assert state.game_frame[ROWS - 1][3] == 2
    assert sum(map(sum, state.game_frame)) == 2
    assert len(state.game_frame) == ROWS


def test_check_and_clear_multiple_lines():
    state = GameState()
    state.game_frame[ROWS - 1] = [1] * COLUMNS
    state.game_frame[ROWS - 3] = [1] * COLUMNS
    state.game_frame[ROWS - 2][0] = 6
    state.check_and_clear_line()
    assert state.score == 2 * COLUMNS
    assert state.game_frame[ROWS - 1][0] == 6
    assert sum(map(sum, state.game_frame)) == 6


def test_is_game_over():
    state = GameState()
    assert state.is_game_over() is False
    state.game_frame[0][5] = 1
    assert state.is_game_over() is True


def test_set_up_is_deterministic_with_seed():
    first, second = GameState(), GameState()
    first.set_up(BLOCK_LIST, random.Random(5))
    second.set_up(BLOCK_LIST, random.Random(5))
    assert first.next_block in BLOCK_LIST
    assert first.next_next_block in BLOCK_LIST
    assert (first.next_block, first.next_next_block) == (
        second.next_block,
        second.next_next_block,
    )


def test_get_next_shifts_queue():
    state = GameState()
    state.set_up(BLOCK_LIST, random.Random(1))
    expected_next, expected_after = state.next_block, state.next_next_block
    assert state.get_next(BLOCK_LIST) == expected_next
    assert state.next_block == expected_after
    assert state.next_next_block in BLOCK_LIST


def test_get_next_without_set_up():
    with pytest.raises(RuntimeError):
        GameState().get_next(BLOCK_LIST)


def test_change_hold_swaps():
    state = GameState()
    state.set_up(BLOCK_LIST, random.Random(2))
    state.add_falling_block(state.get_next(BLOCK_LIST))
    first = state.block
    queued = state.next_block

    state.change_hold(BLOCK_LIST)
    assert state.holds_block is True
    assert state.holding_block == first
    assert state.block == queued
    assert top_left(state.falling_frame, queued.dimension) == queued.flat

    state.change_hold(BLOCK_LIST)
    assert state.block == first
    assert state.holding_block == queued
    assert top_left(state.falling_frame, first.dimension) == first.flat
"""Tetromino definitions with their four clockwise orientations."""

from __future__ import annotations

from dataclasses import dataclass

Shape = tuple[tuple[int, ...], ...]


@dataclass(frozen=True)
class Block:
    """A tetromino: its type number, bounding size and the four orientations."""

    block_type: int
    dimension: int
    flat: Shape
    ninety: Shape
    inverted: Shape
    twoseventy: Shape

    def shape(self, orientation: int) -> Shape:
        """Return the matrix for an orientation counted in clockwise quarter turns."""
        return (self.flat, self.ninety, self.inverted, self.twoseventy)[orientation % 4]

    def cells(self, orientation: int) -> list[tuple[int, int, int]]:
        """Return (row, column, value) for every filled cell of an orientation."""
        return [
            (row, column, value)
            for row, line in enumerate(self.shape(orientation))
            for column, value in enumerate(line)
            if value
        ]


T_SQUARE = Block(
    block_type=1,
    dimension=3,
    flat=((0, 1, 0), (1, 1, 1), (0, 0, 0)),
    ninety=((0, 1, 0), (0, 1, 1), (0, 1, 0)),
    inverted=((0, 0, 0), (1, 1, 1), (0, 1, 0)),
    twoseventy=((0, 1, 0), (1, 1, 0), (0, 1, 0)),
)

LINE = Block(
    block_type=2,
    dimension=4,
    flat=((0, 0, 0, 0), (2, 2, 2, 2), (0, 0, 0, 0), (0, 0, 0, 0)),
    ninety=((0, 0, 2, 0), (0, 0, 2, 0), (0, 0, 2, 0), (0, 0, 2, 0)),
    inverted=((0, 0, 0, 0), (0, 0, 0, 0), (2, 2, 2, 2), (0, 0, 0, 0)),
    twoseventy=((0, 2, 0, 0), (0, 2, 0, 0), (0, 2, 0, 0), (0, 2, 0, 0)),
)

S_BLOCK = Block(
    block_type=3,
    dimension=3,
    flat=((0, 3, 3), (3, 3, 0), (0, 0, 0)),
    ninety=((0, 3, 0), (0, 3, 3), (0, 0, 3)),
    inverted=((0, 3, 3), (3, 3, 0), (0, 0, 0)),
    twoseventy=((0, 3, 0), (0, 3, 3), (0, 0, 3)),
)

Z_BLOCK = Block(
    block_type=4,
    dimension=3,
    flat=((4, 4, 0), (0, 4, 4), (0, 0, 0)),
    ninety=((0, 4, 0), (4, 4, 0), (4, 0, 0)),
    inverted=((4, 4, 0), (0, 4, 4), (0, 0, 0)),
    twoseventy=((0, 4, 0), (4, 4, 0), (4, 0, 0)),
)

L_BLOCK = Block(
    block_type=5,
    dimension=3,
    flat=((0, 5, 0), (0, 5, 0), (0, 5, 5)),
    ninety=((0, 0, 5), (5, 5, 5), (0, 0, 0)),
    inverted=((5, 5, 0), (0, 5, 0), (0, 5, 0)),
    twoseventy=((5, 5, 5), (5, 0, 0), (0, 0, 0)),
)

J_BLOCK = Block(
    block_type=6,
    dimension=3,
    flat=((0, 6, 0), (0, 6, 0), (6, 6, 0)),
    ninety=((6, 0, 0), (6, 6, 6), (0, 0, 0)),
    inverted=((0, 6, 6), (0, 6, 0), (0, 6, 0)),
    twoseventy=((6, 6, 6), (0, 0, 6), (0, 0, 0)),
)

O_BLOCK = Block(
    block_type=7,
    dimension=2,
    flat=((7, 7), (7, 7)),
    ninety=((7, 7), (7, 7)),
    inverted=((7, 7), (7, 7)),
    twoseventy=((7, 7), (7, 7)),
)

BLOCK_LIST: tuple[Block, ...] = (T_SQUARE, LINE, S_BLOCK, Z_BLOCK, L_BLOCK, J_BLOCK, O_BLOCK)
TOTAL_BLOCKS = len(BLOCK_LIST)
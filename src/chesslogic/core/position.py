"""Board coordinates and direction vectors.

Layout (row 0 is Black's back rank, row 7 is Red's)::

    row 0  a8 b8 ... h8
    row 1  a7 b7 ... h7
    ...
    row 7  a1 b1 ... h1
"""

from __future__ import annotations

from dataclasses import dataclass

from chesslogic.core.enums import SquareColor

BOARD_SIZE = 8
_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True)
class Direction:
    """Offset between two positions."""

    row_delta: int
    column_delta: int

    def __add__(self, other: Direction) -> Direction:
        return Direction(
            self.row_delta + other.row_delta,
            self.column_delta + other.column_delta,
        )

    def __rmul__(self, scalar: int) -> Direction:
        return Direction(scalar * self.row_delta, scalar * self.column_delta)


NORTH = Direction(-1, 0)
SOUTH = Direction(1, 0)
EAST = Direction(0, 1)
WEST = Direction(0, -1)
NORTH_EAST = NORTH + EAST
NORTH_WEST = NORTH + WEST
SOUTH_EAST = SOUTH + EAST
SOUTH_WEST = SOUTH + WEST


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable (row, column) coordinate. May lie outside the board."""

    row: int
    column: int

    def __add__(self, direction: Direction) -> Position:
        return Position(
            self.row + direction.row_delta,
            self.column + direction.column_delta,
        )

    @property
    def is_inside(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.column < BOARD_SIZE

    @property
    def square_color(self) -> SquareColor:
        """a8 (row 0, column 0) is a light square."""
        if (self.row + self.column) % 2 == 0:
            return SquareColor.LIGHT
        return SquareColor.DARK

    @property
    def name(self) -> str:
        """Algebraic name, e.g. Position(6, 4) -> 'e2'."""
        if not self.is_inside:
            return f"({self.row},{self.column})"
        return _FILES[self.column] + str(BOARD_SIZE - self.row)

    def __repr__(self) -> str:
        return f"Position({self.row}, {self.column})"


def parse_position(name: str) -> Position:
    """Parse an algebraic square name, e.g. 'e4' -> Position(4, 4)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Position(BOARD_SIZE - int(name[1]), _FILES.index(name[0]))

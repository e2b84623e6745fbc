"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Player(IntEnum):
    """Side to play. Red starts at the bottom (rows 6-7)."""

    RED = 0
    BLACK = 1

    @property
    def opponent(self) -> Player:
        return Player(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveType(IntEnum):
    """Move variant tag."""

    NORMAL = 0
    DOUBLE_STEP = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5


class SquareColor(IntEnum):
    """Light/dark square classification."""

    LIGHT = 0
    DARK = 1

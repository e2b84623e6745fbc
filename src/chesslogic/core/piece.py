"""Piece value object and per-type move geometry."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from chesslogic.core.enums import Player, PieceType
from chesslogic.core.position import (
    EAST,
    NORTH,
    NORTH_EAST,
    NORTH_WEST,
    SOUTH,
    SOUTH_EAST,
    SOUTH_WEST,
    WEST,
    Direction,
    Position,
)

if TYPE_CHECKING:
    from chesslogic.core.board import Board

# FEN-style character ↔ (Player, PieceType)
_CHAR_MAP: dict[str, tuple[Player, PieceType]] = {
    "P": (Player.RED, PieceType.PAWN),
    "N": (Player.RED, PieceType.KNIGHT),
    "B": (Player.RED, PieceType.BISHOP),
    "R": (Player.RED, PieceType.ROOK),
    "Q": (Player.RED, PieceType.QUEEN),
    "K": (Player.RED, PieceType.KING),
    "p": (Player.BLACK, PieceType.PAWN),
    "n": (Player.BLACK, PieceType.KNIGHT),
    "b": (Player.BLACK, PieceType.BISHOP),
    "r": (Player.BLACK, PieceType.ROOK),
    "q": (Player.BLACK, PieceType.QUEEN),
    "k": (Player.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Player, PieceType], str] = {
    (Player.RED, PieceType.PAWN): "♙",
    (Player.RED, PieceType.KNIGHT): "♘",
    (Player.RED, PieceType.BISHOP): "♗",
    (Player.RED, PieceType.ROOK): "♖",
    (Player.RED, PieceType.QUEEN): "♕",
    (Player.RED, PieceType.KING): "♔",
    (Player.BLACK, PieceType.PAWN): "♟",
    (Player.BLACK, PieceType.KNIGHT): "♞",
    (Player.BLACK, PieceType.BISHOP): "♝",
    (Player.BLACK, PieceType.ROOK): "♜",
    (Player.BLACK, PieceType.QUEEN): "♛",
    (Player.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Player, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

KNIGHT_OFFSETS: tuple[Direction, ...] = (
    Direction(-2, -1),
    Direction(-2, 1),
    Direction(-1, -2),
    Direction(-1, 2),
    Direction(1, -2),
    Direction(1, 2),
    Direction(2, -1),
    Direction(2, 1),
)

BISHOP_DIRS: tuple[Direction, ...] = (NORTH_WEST, NORTH_EAST, SOUTH_WEST, SOUTH_EAST)
ROOK_DIRS: tuple[Direction, ...] = (NORTH, SOUTH, WEST, EAST)
QUEEN_DIRS: tuple[Direction, ...] = BISHOP_DIRS + ROOK_DIRS
KING_OFFSETS: tuple[Direction, ...] = QUEEN_DIRS

PAWN_FORWARD: dict[Player, Direction] = {Player.RED: NORTH, Player.BLACK: SOUTH}
PAWN_START_ROW: dict[Player, int] = {Player.RED: 6, Player.BLACK: 1}
PAWN_PROMOTION_ROW: dict[Player, int] = {Player.RED: 0, Player.BLACK: 7}


@dataclass(slots=True)
class Piece:
    """A chess piece owned by exactly one board cell.

    ``has_moved`` only matters for castling rights.
    """

    color: Player
    piece_type: PieceType
    has_moved: bool = False

    # ── Geometry ─────────────────────────────────────────────────────────

    def candidate_destinations(self, from_pos: Position, board: Board) -> set[Position]:
        """Squares reachable by geometry alone (self-check is not considered)."""
        return _DESTINATIONS[self.piece_type](self, from_pos, board)

    def capture_destinations(self, from_pos: Position, board: Board) -> set[Position]:
        """Squares this piece threatens."""
        if self.piece_type == PieceType.PAWN:
            return set(_pawn_diagonals(self.color, from_pos))
        return self.candidate_destinations(from_pos, board)

    def can_capture_opponent_king(self, from_pos: Position, board: Board) -> bool:
        for pos in self.capture_destinations(from_pos, board):
            target = board[pos]
            if (
                target is not None
                and target.color != self.color
                and target.piece_type == PieceType.KING
            ):
                return True
        return False

    def copy(self) -> Piece:
        return replace(self)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = red, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → red knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]


# -- Geometry per piece type -------------------------------------------------


def _is_free_or_enemy(board: Board, pos: Position, color: Player) -> bool:
    target = board[pos]
    return target is None or target.color != color


def _step_targets(
    piece: Piece, from_pos: Position, board: Board, offsets: tuple[Direction, ...]
) -> set[Position]:
    targets: set[Position] = set()
    for offset in offsets:
        to_pos = from_pos + offset
        if to_pos.is_inside and _is_free_or_enemy(board, to_pos, piece.color):
            targets.add(to_pos)
    return targets


def _ray(from_pos: Position, direction: Direction) -> Iterator[Position]:
    pos = from_pos + direction
    while pos.is_inside:
        yield pos
        pos = pos + direction


def _sliding_targets(
    piece: Piece, from_pos: Position, board: Board, directions: tuple[Direction, ...]
) -> set[Position]:
    targets: set[Position] = set()
    for direction in directions:
        for to_pos in _ray(from_pos, direction):
            target = board[to_pos]
            if target is None:
                targets.add(to_pos)
                continue
            if target.color != piece.color:
                targets.add(to_pos)
            break
    return targets


def _pawn_diagonals(color: Player, from_pos: Position) -> Iterator[Position]:
    forward = PAWN_FORWARD[color]
    for side in (WEST, EAST):
        to_pos = from_pos + forward + side
        if to_pos.is_inside:
            yield to_pos


def _pawn_targets(piece: Piece, from_pos: Position, board: Board) -> set[Position]:
    targets: set[Position] = set()
    forward = PAWN_FORWARD[piece.color]

    one_step = from_pos + forward
    if one_step.is_inside and board.is_empty(one_step):
        targets.add(one_step)
        two_step = one_step + forward
        if from_pos.row == PAWN_START_ROW[piece.color] and board.is_empty(two_step):
            targets.add(two_step)

    for to_pos in _pawn_diagonals(piece.color, from_pos):
        target = board[to_pos]
        if target is not None and target.color != piece.color:
            targets.add(to_pos)
    return targets


_DESTINATIONS: dict[PieceType, Callable[[Piece, Position, Board], set[Position]]] = {
    PieceType.PAWN: _pawn_targets,
    PieceType.KNIGHT: lambda p, pos, b: _step_targets(p, pos, b, KNIGHT_OFFSETS),
    PieceType.BISHOP: lambda p, pos, b: _sliding_targets(p, pos, b, BISHOP_DIRS),
    PieceType.ROOK: lambda p, pos, b: _sliding_targets(p, pos, b, ROOK_DIRS),
    PieceType.QUEEN: lambda p, pos, b: _sliding_targets(p, pos, b, QUEEN_DIRS),
    PieceType.KING: lambda p, pos, b: _step_targets(p, pos, b, KING_OFFSETS),
}

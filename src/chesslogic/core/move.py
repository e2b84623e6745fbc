"""Move value object: legality tests and board application per move variant."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chesslogic.core.enums import MoveType, PieceType
from chesslogic.core.piece import (
    PAWN_FORWARD,
    PAWN_PROMOTION_ROW,
    PAWN_START_ROW,
    Piece,
)
from chesslogic.core.position import EAST, WEST, Position

if TYPE_CHECKING:
    from chesslogic.core.board import Board

_LOGGER = logging.getLogger(__name__)

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

_KING_COLUMN = 4
# move type -> (king destination column, rook start column, rook destination column)
_CASTLE_COLUMNS: dict[MoveType, tuple[int, int, int]] = {
    MoveType.CASTLE_KINGSIDE: (6, 7, 5),
    MoveType.CASTLE_QUEENSIDE: (2, 0, 3),
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable move; ``move_type`` selects the variant.

    Castles are expressed as the king's move; the rook squares are derived.
    """

    from_pos: Position
    to_pos: Position
    move_type: MoveType = MoveType.NORMAL
    promotion: PieceType | None = None

    # ── Derived squares ──────────────────────────────────────────────────

    @property
    def is_castle(self) -> bool:
        return self.move_type in _CASTLE_COLUMNS

    @property
    def rook_from(self) -> Position | None:
        if not self.is_castle:
            return None
        return Position(self.from_pos.row, _CASTLE_COLUMNS[self.move_type][1])

    @property
    def rook_to(self) -> Position | None:
        if not self.is_castle:
            return None
        return Position(self.from_pos.row, _CASTLE_COLUMNS[self.move_type][2])

    @property
    def captured_position(self) -> Position:
        """Square of the piece this move would capture."""
        if self.move_type == MoveType.EN_PASSANT:
            return Position(self.from_pos.row, self.to_pos.column)
        return self.to_pos

    @property
    def skipped_position(self) -> Position | None:
        """Square a double-stepping pawn passes over."""
        if self.move_type != MoveType.DOUBLE_STEP:
            return None
        return Position((self.from_pos.row + self.to_pos.row) // 2, self.from_pos.column)

    # ── Legality ─────────────────────────────────────────────────────────

    def is_pseudo_legal(self, board: Board) -> bool:
        """Variant rules only; ignores whether the mover ends up in check."""
        if not (self.from_pos.is_inside and self.to_pos.is_inside):
            return False
        piece = board[self.from_pos]
        if piece is None:
            return False

        if self.move_type == MoveType.NORMAL:
            return self._is_valid_normal(piece, board)
        if self.move_type == MoveType.DOUBLE_STEP:
            return self._is_valid_double_step(piece, board)
        if self.move_type == MoveType.EN_PASSANT:
            return self._is_valid_en_passant(piece, board)
        if self.move_type == MoveType.PROMOTION:
            return self._is_valid_promotion(piece, board)
        return self._is_valid_castle(piece, board)

    def is_legal(self, board: Board) -> bool:
        """Pseudo-legal and does not leave the mover's own king in check."""
        if not self.is_pseudo_legal(board):
            return False
        return not self.leaves_king_in_check(board)

    def leaves_king_in_check(self, board: Board) -> bool:
        piece = board[self.from_pos]
        assert piece is not None
        trial = board.copy()
        self.apply(trial)
        return trial.is_in_check(piece.color)

    def _is_valid_normal(self, piece: Piece, board: Board) -> bool:
        if self.to_pos not in piece.candidate_destinations(self.from_pos, board):
            return False
        if piece.piece_type != PieceType.PAWN:
            return True
        if self.to_pos.row == PAWN_PROMOTION_ROW[piece.color]:
            return False
        return abs(self.to_pos.row - self.from_pos.row) == 1

    def _is_valid_double_step(self, piece: Piece, board: Board) -> bool:
        if piece.piece_type != PieceType.PAWN:
            return False
        if self.from_pos.row != PAWN_START_ROW[piece.color]:
            return False
        forward = PAWN_FORWARD[piece.color]
        middle = self.from_pos + forward
        return (
            self.to_pos == middle + forward
            and board.is_empty(middle)
            and board.is_empty(self.to_pos)
        )

    def _is_valid_en_passant(self, piece: Piece, board: Board) -> bool:
        if piece.piece_type != PieceType.PAWN:
            return False
        forward = PAWN_FORWARD[piece.color]
        ahead = self.from_pos + forward
        if self.to_pos not in (ahead + WEST, ahead + EAST):
            return False
        if not board.is_empty(self.to_pos):
            return False
        if self.to_pos != board.get_pawn_skip_position(piece.color.opponent):
            return False
        captured = board[self.captured_position]
        return (
            captured is not None
            and captured.color != piece.color
            and captured.piece_type == PieceType.PAWN
        )

    def _is_valid_promotion(self, piece: Piece, board: Board) -> bool:
        return (
            piece.piece_type == PieceType.PAWN
            and self.promotion in PROMOTION_TYPES
            and self.to_pos.row == PAWN_PROMOTION_ROW[piece.color]
            and self.to_pos in piece.candidate_destinations(self.from_pos, board)
        )

    def _is_valid_castle(self, piece: Piece, board: Board) -> bool:
        if piece.piece_type != PieceType.KING:
            return False
        color = piece.color
        if self.move_type == MoveType.CASTLE_KINGSIDE:
            has_right = board.castle_right_kingside(color)
        else:
            has_right = board.castle_right_queenside(color)
        if not has_right:
            return False

        row = self.from_pos.row
        king_to, rook_from, rook_to = _CASTLE_COLUMNS[self.move_type]
        if self.from_pos.column != _KING_COLUMN or self.to_pos != Position(row, king_to):
            return False

        step = 1 if rook_from > _KING_COLUMN else -1
        for column in range(_KING_COLUMN + step, rook_from, step):
            if not board.is_empty(Position(row, column)):
                return False

        if board.is_in_check(color):
            return False

        # The king may not pass through an attacked square.
        transit = board.copy()
        transit[Position(row, rook_to)] = transit[self.from_pos]
        transit[self.from_pos] = None
        return not transit.is_in_check(color)

    # ── Application ──────────────────────────────────────────────────────

    def apply(self, board: Board) -> None:
        """Play this move on *board* in place. Legality is not re-checked."""
        piece = board[self.from_pos]
        if piece is None:
            _LOGGER.warning("Cannot apply %s: %s is empty", self, self.from_pos.name)
            raise ValueError(f"No piece on {self.from_pos.name}")
        if self.move_type == MoveType.PROMOTION and self.promotion not in PROMOTION_TYPES:
            raise ValueError(f"Invalid promotion piece: {self.promotion!r}")
        if not self.to_pos.is_inside:
            raise ValueError(f"Position out of bounds: {self.to_pos.name}")

        rook: Piece | None = None
        if self.is_castle:
            assert self.rook_from is not None
            rook = board[self.rook_from]
            if rook is None:
                raise ValueError(f"No rook on {self.rook_from.name} to castle with")

        # All checks done; nothing below raises.
        board.clear_pawn_skip_positions()

        if self.move_type == MoveType.EN_PASSANT:
            board[self.captured_position] = None

        board[self.from_pos] = None
        if self.move_type == MoveType.PROMOTION:
            assert self.promotion is not None
            placed = Piece(piece.color, self.promotion, has_moved=True)
        else:
            placed = piece
            placed.has_moved = True
        board[self.to_pos] = placed

        if rook is not None:
            assert self.rook_from is not None and self.rook_to is not None
            board[self.rook_from] = None
            rook.has_moved = True
            board[self.rook_to] = rook

        if self.move_type == MoveType.DOUBLE_STEP:
            board.set_pawn_skip_position(piece.color, self.skipped_position)

        _LOGGER.debug("Applied %s (%s)", self, self.move_type.name)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_pos.name}{self.to_pos.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesslogic.core.enums import MoveType, Player, PieceType
from chesslogic.core.move import PROMOTION_TYPES, Move
from chesslogic.core.piece import PAWN_FORWARD, PAWN_PROMOTION_ROW
from chesslogic.core.position import EAST, WEST, Position

if TYPE_CHECKING:
    from chesslogic.core.board import Board
    from chesslogic.core.piece import Piece

_CASTLE_TYPES: tuple[MoveType, ...] = (
    MoveType.CASTLE_KINGSIDE,
    MoveType.CASTLE_QUEENSIDE,
)
_CASTLE_TARGET_COLUMN: dict[MoveType, int] = {
    MoveType.CASTLE_KINGSIDE: 6,
    MoveType.CASTLE_QUEENSIDE: 2,
}


class MoveGenerator:
    """Builds :class:`Move` objects from piece geometry.

    Moves are built pseudo-legal; the legal variants are filtered through
    :meth:`Move.leaves_king_in_check`, which plays each one on a board copy.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self, player: Player) -> list[Move]:
        """All strictly legal moves for *player*."""
        board = self._board
        return [
            move
            for move in self.generate_moves(player)
            if not move.leaves_king_in_check(board)
        ]

    def generate_moves(self, player: Player) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check), row-major."""
        moves: list[Move] = []
        for pos in self._board.occupied_squares_for(player):
            moves.extend(self.moves_from(pos))
        return moves

    def has_legal_moves(self, player: Player) -> bool:
        board = self._board
        return any(
            not move.leaves_king_in_check(board) for move in self.generate_moves(player)
        )

    def moves_from(self, pos: Position) -> list[Move]:
        """Pseudo-legal moves of the piece on *pos*; [] for an empty square."""
        piece = self._board[pos]
        if piece is None:
            return []
        if piece.piece_type == PieceType.PAWN:
            return self._gen_pawn(pos, piece)

        moves = [Move(pos, to_pos) for to_pos in self._sorted_destinations(pos, piece)]
        if piece.piece_type == PieceType.KING:
            self._gen_castling(pos, moves)
        return moves

    # -- Piece-specific generators (private) -------------------------------

    def _sorted_destinations(self, pos: Position, piece: Piece) -> list[Position]:
        destinations = piece.candidate_destinations(pos, self._board)
        return sorted(destinations, key=lambda p: (p.row, p.column))

    def _gen_pawn(self, pos: Position, piece: Piece) -> list[Move]:
        moves: list[Move] = []
        for to_pos in self._sorted_destinations(pos, piece):
            if to_pos.row == PAWN_PROMOTION_ROW[piece.color]:
                for pt in PROMOTION_TYPES:
                    moves.append(Move(pos, to_pos, MoveType.PROMOTION, pt))
            elif abs(to_pos.row - pos.row) == 2:
                moves.append(Move(pos, to_pos, MoveType.DOUBLE_STEP))
            else:
                moves.append(Move(pos, to_pos))

        skip_pos = self._board.get_pawn_skip_position(piece.color.opponent)
        if skip_pos is not None:
            forward = PAWN_FORWARD[piece.color]
            for side in (WEST, EAST):
                if pos + forward + side == skip_pos:
                    move = Move(pos, skip_pos, MoveType.EN_PASSANT)
                    if move.is_pseudo_legal(self._board):
                        moves.append(move)
        return moves

    def _gen_castling(self, king_pos: Position, moves: list[Move]) -> None:
        for move_type in _CASTLE_TYPES:
            to_pos = Position(king_pos.row, _CASTLE_TARGET_COLUMN[move_type])
            move = Move(king_pos, to_pos, move_type)
            if move.is_pseudo_legal(self._board):
                moves.append(move)

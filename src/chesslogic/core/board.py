"""Board - piece placement on an 8x8 grid plus en-passant memory."""

from __future__ import annotations

from collections.abc import Iterator

from chesslogic.core.counting import Counting
from chesslogic.core.enums import MoveType, Player, PieceType
from chesslogic.core.move import Move
from chesslogic.core.piece import Piece
from chesslogic.core.position import (
    BOARD_SIZE,
    NORTH_EAST,
    NORTH_WEST,
    SOUTH_EAST,
    SOUTH_WEST,
    Position,
)

_BACK_ROW: dict[Player, int] = {Player.RED: 7, Player.BLACK: 0}
_PAWN_ROW: dict[Player, int] = {Player.RED: 6, Player.BLACK: 1}
_KING_COLUMN = 4
_KINGSIDE_ROOK_COLUMN = 7
_QUEENSIDE_ROOK_COLUMN = 0

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

Key = Position | tuple[int, int]


class Board:
    """Mutable 8x8 board.

    Besides the cells, the board remembers for each player the square its
    pawn skipped over on the most recent double step (``None`` otherwise).
    """

    __slots__ = ("_cells", "_pawn_skip_positions")

    def __init__(self) -> None:
        self._cells: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self._pawn_skip_positions: dict[Player, Position | None] = {
            Player.RED: None,
            Player.BLACK: None,
        }

    @staticmethod
    def _coords(key: Key) -> tuple[int, int]:
        row, column = (key.row, key.column) if isinstance(key, Position) else key
        if not (0 <= row < BOARD_SIZE and 0 <= column < BOARD_SIZE):
            raise ValueError(f"Position out of bounds: ({row}, {column})")
        return row, column

    # -- Element access -----------------------------------------------------

    def __getitem__(self, key: Key) -> Piece | None:
        row, column = self._coords(key)
        return self._cells[row][column]

    def __setitem__(self, key: Key, piece: Piece | None) -> None:
        row, column = self._coords(key)
        self._cells[row][column] = piece

    @staticmethod
    def is_inside(pos: Position) -> bool:
        return pos.is_inside

    def is_empty(self, pos: Position) -> bool:
        return self[pos] is None

    # -- En-passant memory --------------------------------------------------

    def get_pawn_skip_position(self, player: Player) -> Position | None:
        return self._pawn_skip_positions[player]

    def set_pawn_skip_position(self, player: Player, pos: Position | None) -> None:
        self._pawn_skip_positions[player] = pos

    def clear_pawn_skip_positions(self) -> None:
        for player in Player:
            self._pawn_skip_positions[player] = None

    # -- Query helpers ------------------------------------------------------

    def occupied_squares(self) -> Iterator[Position]:
        """Every occupied square, row-major."""
        for row in range(BOARD_SIZE):
            for column in range(BOARD_SIZE):
                if self._cells[row][column] is not None:
                    yield Position(row, column)

    def occupied_squares_for(self, player: Player) -> Iterator[Position]:
        """Squares occupied by *player*'s pieces, row-major."""
        for pos in self.occupied_squares():
            piece = self[pos]
            if piece is not None and piece.color == player:
                yield pos

    def find_piece(self, player: Player, piece_type: PieceType) -> Position | None:
        for pos in self.occupied_squares_for(player):
            piece = self[pos]
            if piece is not None and piece.piece_type == piece_type:
                return pos
        return None

    def king_position(self, player: Player) -> Position | None:
        return self.find_piece(player, PieceType.KING)

    def is_in_check(self, player: Player) -> bool:
        """Can any of the opponent's pieces capture *player*'s king?"""
        for pos in self.occupied_squares_for(player.opponent):
            piece = self[pos]
            if piece is not None and piece.can_capture_opponent_king(pos, self):
                return True
        return False

    # -- Castling / en passant ----------------------------------------------

    def _is_unmoved_king_and_rook(self, player: Player, rook_column: int) -> bool:
        row = _BACK_ROW[player]
        king = self[row, _KING_COLUMN]
        rook = self[row, rook_column]
        if king is None or rook is None:
            return False
        return (
            king.piece_type == PieceType.KING
            and rook.piece_type == PieceType.ROOK
            and king.color == player
            and rook.color == player
            and not king.has_moved
            and not rook.has_moved
        )

    def castle_right_kingside(self, player: Player) -> bool:
        return self._is_unmoved_king_and_rook(player, _KINGSIDE_ROOK_COLUMN)

    def castle_right_queenside(self, player: Player) -> bool:
        return self._is_unmoved_king_and_rook(player, _QUEENSIDE_ROOK_COLUMN)

    def can_capture_en_passant(self, player: Player) -> bool:
        """Can *player* capture the pawn the opponent just double-stepped?"""
        skip_pos = self.get_pawn_skip_position(player.opponent)
        if skip_pos is None:
            return False

        if player == Player.RED:
            pawn_positions = (skip_pos + SOUTH_EAST, skip_pos + SOUTH_WEST)
        else:
            pawn_positions = (skip_pos + NORTH_EAST, skip_pos + NORTH_WEST)

        for pos in pawn_positions:
            if not pos.is_inside:
                continue
            piece = self[pos]
            if piece is None or piece.piece_type != PieceType.PAWN:
                continue
            if piece.color != player:
                continue
            if Move(pos, skip_pos, MoveType.EN_PASSANT).is_legal(self):
                return True
        return False

    # -- Material -----------------------------------------------------------

    def count_pieces(self) -> Counting:
        counting = Counting()
        for pos in self.occupied_squares():
            piece = self[pos]
            assert piece is not None
            counting.increment(piece.color, piece.piece_type)
        return counting

    @staticmethod
    def is_king_vs_king(counting: Counting) -> bool:
        return counting.total_count == 2

    @staticmethod
    def is_king_bishop_vs_king(counting: Counting) -> bool:
        return counting.total_count == 3 and (
            counting.red(PieceType.BISHOP) == 1 or counting.black(PieceType.BISHOP) == 1
        )

    @staticmethod
    def is_king_knight_vs_king(counting: Counting) -> bool:
        return counting.total_count == 3 and (
            counting.red(PieceType.KNIGHT) == 1 or counting.black(PieceType.KNIGHT) == 1
        )

    def is_king_bishop_vs_king_bishop(self, counting: Counting) -> bool:
        """One bishop each, both on squares of the same colour."""
        if counting.total_count != 4:
            return False
        if counting.red(PieceType.BISHOP) != 1 or counting.black(PieceType.BISHOP) != 1:
            return False

        red_bishop = self.find_piece(Player.RED, PieceType.BISHOP)
        black_bishop = self.find_piece(Player.BLACK, PieceType.BISHOP)
        if red_bishop is None or black_bishop is None:
            return False
        return red_bishop.square_color == black_bishop.square_color

    def insufficient_material(self) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-colour bishops)."""
        counting = self.count_pieces()
        return (
            self.is_king_vs_king(counting)
            or self.is_king_bishop_vs_king(counting)
            or self.is_king_knight_vs_king(counting)
            or self.is_king_bishop_vs_king_bishop(counting)
        )

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        """Deep copy: pieces, ``has_moved`` flags and skip memory."""
        b = Board()
        for pos in self.occupied_squares():
            piece = self[pos]
            assert piece is not None
            b[pos] = piece.copy()
        b._pawn_skip_positions = self._pawn_skip_positions.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for player in Player:
            for column, pt in enumerate(_BACK_RANK):
                b[_BACK_ROW[player], column] = Piece(player, pt)
            for column in range(BOARD_SIZE):
                b[_PAWN_ROW[player], column] = Piece(player, PieceType.PAWN)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._cells == other._cells
            and self._pawn_skip_positions == other._pawn_skip_positions
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = [str(p) if p else "." for p in self._cells[row]]
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

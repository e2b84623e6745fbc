"""Tests for Move legality and application."""

import logging

import pytest

from chesslogic.core.board import Board
from chesslogic.core.enums import MoveType, Player, PieceType
from chesslogic.core.move import Move
from chesslogic.core.piece import Piece
from chesslogic.core.position import Position, parse_position
from conftest import BoardFactory


def _move(uci: str, move_type: MoveType = MoveType.NORMAL, promotion: PieceType | None = None) -> Move:
    return Move(parse_position(uci[:2]), parse_position(uci[2:4]), move_type, promotion)


class TestDerivedSquares:
    def test_castle_rook_squares(self) -> None:
        ks = _move("e1g1", MoveType.CASTLE_KINGSIDE)
        qs = _move("e8c8", MoveType.CASTLE_QUEENSIDE)
        assert (ks.rook_from, ks.rook_to) == (parse_position("h1"), parse_position("f1"))
        assert (qs.rook_from, qs.rook_to) == (parse_position("a8"), parse_position("d8"))
        assert _move("e2e4").rook_from is None

    def test_en_passant_captured_square(self) -> None:
        move = _move("d5c6", MoveType.EN_PASSANT)
        assert move.captured_position == parse_position("c5")
        assert _move("d5c6").captured_position == parse_position("c6")

    def test_skipped_square(self) -> None:
        assert _move("e2e4", MoveType.DOUBLE_STEP).skipped_position == parse_position("e3")
        assert _move("e2e3").skipped_position is None

    def test_str(self) -> None:
        assert str(_move("e2e4")) == "e2e4"
        assert str(_move("e7e8", MoveType.PROMOTION, PieceType.QUEEN)) == "e7e8q"


class TestNormal:
    def test_legal_developing_move(self) -> None:
        assert _move("g1f3").is_legal(Board.initial())

    def test_destination_outside_geometry(self) -> None:
        assert not _move("g1g3").is_legal(Board.initial())

    def test_empty_source(self) -> None:
        assert not _move("e4e5").is_legal(Board.initial())

    def test_pawn_double_advance_needs_double_step(self) -> None:
        assert not _move("e2e4").is_pseudo_legal(Board.initial())

    def test_pawn_to_last_rank_needs_promotion(self, make_board: BoardFactory) -> None:
        board = make_board("k7/4P3/8/8/8/8/8/4K3")
        assert not _move("e7e8").is_pseudo_legal(board)

    def test_capture_removes_piece(self, make_board: BoardFactory) -> None:
        board = make_board("4k3/8/8/3p4/4P3/8/8/4K3")
        move = _move("e4d5")
        assert move.is_legal(board)
        move.apply(board)
        assert board[parse_position("d5")] == Piece(Player.RED, PieceType.PAWN, has_moved=True)
        assert board.is_empty(parse_position("e4"))
        assert board.count_pieces().black(PieceType.PAWN) == 0

    def test_move_transfers_the_same_piece(self) -> None:
        board = Board.initial()
        knight = board[parse_position("g1")]
        _move("g1f3").apply(board)
        assert board[parse_position("f3")] is knight
        assert knight is not None and knight.has_moved

    def test_pinned_piece_cannot_move(self, make_board: BoardFactory) -> None:
        board = make_board("4k3/8/8/8/4r3/8/4N3/4K3")
        move = _move("e2c3")
        assert move.is_pseudo_legal(board)
        assert not move.is_legal(board)

    def test_king_cannot_step_next_to_king(self, make_board: BoardFactory) -> None:
        board = make_board("8/8/8/3k4/8/4K3/8/8")
        assert not _move("e3e4").is_legal(board)
        assert _move("e3e2").is_legal(board)

    def test_legality_check_leaves_board_untouched(self) -> None:
        board = Board.initial()
        before = board.copy()
        _move("g1f3").is_legal(board)
        assert board == before
        knight = board[parse_position("g1")]
        assert knight is not None and not knight.has_moved


class TestDoubleStep:
    def test_legal_from_start(self) -> None:
        assert _move("e2e4", MoveType.DOUBLE_STEP).is_legal(Board.initial())
        assert _move("d7d5", MoveType.DOUBLE_STEP).is_legal(Board.initial())

    def test_not_from_third_rank(self, make_board: BoardFactory) -> None:
        board = make_board("4k3/8/8/8/8/4P3/8/4K3")
        assert not _move("e3e5", MoveType.DOUBLE_STEP).is_legal(board)

    def test_blocked_middle_square(self, make_board: BoardFactory) -> None:
        board = make_board("4k3/8/8/8/8/4n3/4P3/4K3")
        assert not _move("e2e4", MoveType.DOUBLE_STEP).is_legal(board)

    def test_sets_own_skip_and_clears_opponent(self) -> None:
        board = Board.initial()
        board.set_pawn_skip_position(Player.BLACK, parse_position("a6"))
        _move("e2e4", MoveType.DOUBLE_STEP).apply(board)
        assert board.get_pawn_skip_position(Player.RED) == parse_position("e3")
        assert board.get_pawn_skip_position(Player.BLACK) is None

    def test_reply_double_step_replaces_window(self) -> None:
        board = Board.initial()
        _move("e2e4", MoveType.DOUBLE_STEP).apply(board)
        _move("d7d5", MoveType.DOUBLE_STEP).apply(board)
        assert board.get_pawn_skip_position(Player.RED) is None
        assert board.get_pawn_skip_position(Player.BLACK) == parse_position("d6")


class TestEnPassant:
    def _board(self, make_board: BoardFactory) -> Board:
        board = make_board("4k3/2p5/8/3P4/8/8/8/4K3")
        _move("c7c5", MoveType.DOUBLE_STEP).apply(board)
        return board

    def test_capture(self, make_board: BoardFactory) -> None:
        board = self._board(make_board)
        move = _move("d5c6", MoveType.EN_PASSANT)
        assert move.is_legal(board)
        move.apply(board)
        assert board[parse_position("c6")] == Piece(Player.RED, PieceType.PAWN, has_moved=True)
        assert board.is_empty(parse_position("c5"))
        assert board.is_empty(parse_position("d5"))

    def test_requires_matching_skip(self, make_board: BoardFactory) -> None:
        board = self._board(make_board)
        board.set_pawn_skip_position(Player.BLACK, None)
        assert not _move("d5c6", MoveType.EN_PASSANT).is_legal(board)

    def test_expires_after_one_ply(self, make_board: BoardFactory) -> None:
        board = self._board(make_board)
        _move("e1d1").apply(board)
        _move("e8d8").apply(board)
        assert not _move("d5c6", MoveType.EN_PASSANT).is_legal(board)

    def test_wrong_direction(self, make_board: BoardFactory) -> None:
        board = make_board("4k3/8/8/8/8/2pP4/8/4K3")
        board.set_pawn_skip_position(Player.BLACK, parse_position("c2"))
        assert not _move("d3c2", MoveType.EN_PASSANT).is_pseudo_legal(board)


class TestCastle:
    CASTLE_FEN = "r3k2r/8/8/8/8/8/8/R3K2R"

    def test_kingside(self, make_board: BoardFactory) -> None:
        board = make_board(self.CASTLE_FEN)
        move = _move("e1g1", MoveType.CASTLE_KINGSIDE)
        assert move.is_legal(board)
        move.apply(board)
        king = board[parse_position("g1")]
        rook = board[parse_position("f1")]
        assert king == Piece(Player.RED, PieceType.KING, has_moved=True)
        assert rook == Piece(Player.RED, PieceType.ROOK, has_moved=True)
        assert board.is_empty(parse_position("e1"))
        assert board.is_empty(parse_position("h1"))

    def test_queenside(self, make_board: BoardFactory) -> None:
        board = make_board(self.CASTLE_FEN)
        move = _move("e8c8", MoveType.CASTLE_QUEENSIDE)
        assert move.is_legal(board)
        move.apply(board)
        assert board[parse_position("c8")] == Piece(Player.BLACK, PieceType.KING, has_moved=True)
        assert board[parse_position("d8")] == Piece(Player.BLACK, PieceType.ROOK, has_moved=True)
        assert board.is_empty(parse_position("a8"))

    def test_blocked(self, make_board: BoardFactory) -> None:
        board = make_board("r3k2r/8/8/8/8/8/8/RN2K2R")
        assert not _move("e1c1", MoveType.CASTLE_QUEENSIDE).is_legal(board)
        assert _move("e1g1", MoveType.CASTLE_KINGSIDE).is_legal(board)

    def test_not_out_of_check(self, make_board: BoardFactory) -> None:
        board = make_board("r3k2r/8/8/8/8/8/4q3/R3K2R")
        assert board.is_in_check(Player.RED)
        assert not _move("e1g1", MoveType.CASTLE_KINGSIDE).is_legal(board)

    def test_not_through_attacked_square(self, make_board: BoardFactory) -> None:
        board = make_board("r3kr2/8/8/8/8/8/8/R3K2R")
        assert not _move("e1g1", MoveType.CASTLE_KINGSIDE).is_legal(board)
        assert _move("e1c1", MoveType.CASTLE_QUEENSIDE).is_legal(board)

    def test_not_into_check(self, make_board: BoardFactory) -> None:
        board = make_board("r3k1r1/8/8/8/8/8/8/R3K2R")
        assert not _move("e1g1", MoveType.CASTLE_KINGSIDE).is_legal(board)

    def test_attacked_b_file_square_is_allowed(self, make_board: BoardFactory) -> None:
        board = make_board("1r2k3/8/8/8/8/8/8/R3K3")
        assert _move("e1c1", MoveType.CASTLE_QUEENSIDE).is_legal(board)

    def test_moved_rook(self, make_board: BoardFactory) -> None:
        board = make_board(self.CASTLE_FEN)
        rook = board[parse_position("h1")]
        assert rook is not None
        rook.has_moved = True
        assert not _move("e1g1", MoveType.CASTLE_KINGSIDE).is_legal(board)

    def test_castle_right_lost_after_king_moves(self, make_board: BoardFactory) -> None:
        board = make_board(self.CASTLE_FEN)
        _move("e1e2").apply(board)
        _move("e2e1").apply(board)
        assert not board.castle_right_kingside(Player.RED)
        assert not board.castle_right_queenside(Player.RED)


class TestPromotion:
    def test_promote_to_queen(self, make_board: BoardFactory) -> None:
        board = make_board("k7/4P3/8/8/8/8/8/4K3")
        move = _move("e7e8", MoveType.PROMOTION, PieceType.QUEEN)
        assert move.is_legal(board)
        move.apply(board)
        assert board[parse_position("e8")] == Piece(Player.RED, PieceType.QUEEN, has_moved=True)
        assert board.is_empty(parse_position("e7"))

    def test_capture_promotion_for_black(self, make_board: BoardFactory) -> None:
        board = make_board("4k3/8/8/8/8/8/3p4/2R1K3")
        move = _move("d2c1", MoveType.PROMOTION, PieceType.KNIGHT)
        assert move.is_legal(board)
        move.apply(board)
        assert board[parse_position("c1")] == Piece(Player.BLACK, PieceType.KNIGHT, has_moved=True)

    def test_cannot_promote_to_king(self, make_board: BoardFactory) -> None:
        board = make_board("k7/4P3/8/8/8/8/8/4K3")
        assert not _move("e7e8", MoveType.PROMOTION, PieceType.KING).is_legal(board)
        with pytest.raises(ValueError, match="Invalid promotion piece"):
            _move("e7e8", MoveType.PROMOTION, PieceType.KING).apply(board)

    def test_not_before_last_rank(self, make_board: BoardFactory) -> None:
        board = make_board("k7/8/4P3/8/8/8/8/4K3")
        assert not _move("e6e7", MoveType.PROMOTION, PieceType.QUEEN).is_legal(board)


class TestApplyErrors:
    def test_empty_source_raises(self, caplog: pytest.LogCaptureFixture) -> None:
        board = Board.initial()
        with caplog.at_level(logging.WARNING, logger="chesslogic.core.move"):
            with pytest.raises(ValueError, match="No piece on e4"):
                _move("e4e5").apply(board)
        assert "e4 is empty" in caplog.text

    def test_apply_logs_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        board = Board.initial()
        with caplog.at_level(logging.DEBUG, logger="chesslogic.core.move"):
            _move("e2e3").apply(board)
        assert "Applied e2e3 (NORMAL)" in caplog.text

    def test_off_board_destination_leaves_board_untouched(
        self, make_board: BoardFactory
    ) -> None:
        board = make_board("4k3/8/8/8/8/8/8/4K3")
        before = board.copy()
        with pytest.raises(ValueError, match="out of bounds"):
            Move(parse_position("e1"), Position(8, 4)).apply(board)
        assert board == before

    def test_castle_without_rook_leaves_board_untouched(
        self, make_board: BoardFactory
    ) -> None:
        board = make_board("4k3/8/8/8/8/8/8/4K3")
        board.set_pawn_skip_position(Player.BLACK, parse_position("d6"))
        before = board.copy()
        with pytest.raises(ValueError, match="No rook on h1"):
            _move("e1g1", MoveType.CASTLE_KINGSIDE).apply(board)
        assert board == before
        assert board.get_pawn_skip_position(Player.BLACK) == parse_position("d6")

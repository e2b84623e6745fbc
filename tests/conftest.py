"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chesslogic.core.board import Board
from chesslogic.core.piece import Piece
from chesslogic.core.position import Position

BoardFactory = Callable[[str], Board]


def board_from_placement(placement: str) -> Board:
    """Build a board from a FEN-style placement field.

    Ranks are listed from row 0 (rank 8) to row 7 (rank 1); upper case is
    Red, lower case Black. All pieces start unmoved.
    """
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Expected 8 ranks, got {len(ranks)}: {placement!r}")

    board = Board()
    for row, rank in enumerate(ranks):
        column = 0
        for char in rank:
            if char.isdigit():
                column += int(char)
                continue
            board[Position(row, column)] = Piece.from_char(char)
            column += 1
        if column != 8:
            raise ValueError(f"Rank {rank!r} does not span 8 columns")
    return board


@pytest.fixture
def make_board() -> BoardFactory:
    """Factory turning a placement string into a fresh :class:`Board`."""
    return board_from_placement

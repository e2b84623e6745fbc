"""Core domain layer — chess rules with zero external dependencies.

Quick start::

    from chesslogic.core import Board, MoveGenerator, Player

    board = Board.initial()
    gen = MoveGenerator(board)
    for move in gen.generate_legal_moves(Player.RED):
        print(move)
"""

from chesslogic.core.board import Board
from chesslogic.core.counting import Counting
from chesslogic.core.enums import MoveType, Player, PieceType, SquareColor
from chesslogic.core.move import PROMOTION_TYPES, Move
from chesslogic.core.move_generator import MoveGenerator
from chesslogic.core.piece import Piece
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
    parse_position,
)

__all__ = [
    # Enums
    "MoveType",
    "Player",
    "PieceType",
    "SquareColor",
    # Coordinates
    "Direction",
    "Position",
    "parse_position",
    "NORTH",
    "SOUTH",
    "EAST",
    "WEST",
    "NORTH_EAST",
    "NORTH_WEST",
    "SOUTH_EAST",
    "SOUTH_WEST",
    # Domain objects
    "Board",
    "Counting",
    "Move",
    "MoveGenerator",
    "Piece",
    "PROMOTION_TYPES",
]

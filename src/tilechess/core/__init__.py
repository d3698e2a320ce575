"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from tilechess.core import Board, legal_destinations

    board = Board.initial()
    knight = board.get("knight-white-1")
    print(legal_destinations(knight, board))
"""

from tilechess.core.board import Board
from tilechess.core.enums import Color, Direction, GameResult, Maneuver, PieceType
from tilechess.core.legality import legal_destinations
from tilechess.core.movement import calculate_movement
from tilechess.core.moves import MoveRecord, apply_move
from tilechess.core.notation import STARTING_PLACEMENT, board_from_placement, board_to_placement
from tilechess.core.piece import Piece
from tilechess.core.rules import Rules
from tilechess.core.special_moves import (
    castling_destinations,
    castling_options,
    double_advance_destination,
    en_passant_option,
    special_destinations,
)
from tilechess.core.threats import attacked_squares, pin_line, threat_squares, threateners
from tilechess.core.types import BOARD_SIZE, Coordinate, is_valid, parse_tile, tile_name

__all__ = [
    # Enums
    "Color",
    "Direction",
    "GameResult",
    "Maneuver",
    "PieceType",
    # Types / helpers
    "BOARD_SIZE",
    "Coordinate",
    "is_valid",
    "parse_tile",
    "tile_name",
    # Domain objects
    "Board",
    "MoveRecord",
    "Piece",
    "Rules",
    # Movement / rules
    "apply_move",
    "attacked_squares",
    "calculate_movement",
    "castling_destinations",
    "castling_options",
    "double_advance_destination",
    "en_passant_option",
    "legal_destinations",
    "pin_line",
    "special_destinations",
    "threat_squares",
    "threateners",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_placement",
    "board_to_placement",
]

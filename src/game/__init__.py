"""
Reversi game module.
This package contains the core game logic for Reversi and its console front end.
"""

from .board import Board, BoardSizeError, Coordinate, Player
from .game import ReversiGame, MoveRecord, create, legal_moves, apply_move, is_over, winner

__all__ = [
    'Board', 'BoardSizeError', 'Coordinate', 'Player',
    'ReversiGame', 'MoveRecord', 'create', 'legal_moves', 'apply_move', 'is_over', 'winner',
]

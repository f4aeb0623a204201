"""
Reversi game module.
Handles game flow, move history and the public representation of a game.
"""
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional, Tuple
import logging
import numpy as np

from .board import Board, Coordinate, Player

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    """One accepted move."""
    player: Player
    move: Coordinate
    flipped: Tuple[Coordinate, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player': int(self.player),
            'move': list(self.move),
            'flipped': [list(c) for c in self.flipped],
        }


class ReversiGame:
    """
    Main game class for Reversi that manages the game state and flow.
    """

    def __init__(self, size: int = 8):
        """
        Initialize a new Reversi game.

        Args:
            size: Size of the board (default: 8 for standard Reversi)
        """
        self.board = Board(size)
        self.size = size
        self.move_history: List[MoveRecord] = []

    @classmethod
    def from_board(cls, board: Board) -> 'ReversiGame':
        """Wrap an existing board position in a game with an empty history."""
        game = cls.__new__(cls)
        game.board = board
        game.size = board.size
        game.move_history = []
        return game

    def reset(self) -> None:
        """Reset the game to its initial state."""
        self.board = Board(self.size)
        self.move_history = []

    def make_move(self, row: int, col: int) -> bool:
        """
        Make a move on the board for the side to move.

        Args:
            row: Row of the move (0-based)
            col: Column of the move (0-based)

        Returns:
            bool: True if the move was valid and made, False otherwise
        """
        player = self.board.current_player
        if not self.board.make_move(row, col):
            return False

        self.move_history.append(MoveRecord(player, Coordinate(row, col), self.board.last_flipped))
        logger.debug("%s plays (%d, %d), flipping %d", player.label, row, col,
                     len(self.board.last_flipped))

        if self.board.game_over:
            black, white = self.board.get_score()
            logger.info("Game over after %d moves. Black: %d, White: %d",
                        len(self.move_history), black, white)
        return True

    @property
    def current_player(self) -> Player:
        return self.board.current_player

    def get_valid_moves(self) -> FrozenSet[Coordinate]:
        """
        Get all valid moves for the current player.

        Returns:
            Frozen set of Coordinates
        """
        return self.board.valid_moves

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self.board.game_over

    def get_winner(self) -> Optional[int]:
        """
        Get the winner of the game.

        Returns:
            int: Player.BLACK, Player.WHITE, or Board.DRAW, None if game not over
        """
        return self.board.winner

    def get_score(self) -> Tuple[int, int]:
        """
        Get the current score (black, white).

        Returns:
            Tuple of (black_score, white_score)
        """
        return self.board.get_score()

    def get_board_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D numpy array representing the board state
        """
        return self.board.get_board_state()

    def get_current_player(self) -> Player:
        """
        Get the current player.

        Returns:
            Player.BLACK or Player.WHITE
        """
        return self.board.current_player

    def get_move_history(self) -> List[MoveRecord]:
        """Get a copy of the move history."""
        return self.move_history.copy()

    def copy(self) -> 'ReversiGame':
        """Create a deep copy of the game."""
        new_game = ReversiGame.from_board(self.board.copy())
        new_game.move_history = self.move_history.copy()
        return new_game

    def to_dict(self) -> Dict[str, Any]:
        """Public, JSON-ready representation of the game."""
        black, white = self.get_score()
        winner = self.get_winner()
        return {
            'size': self.size,
            'board': self.board.get_board_state().tolist(),
            'current_player': int(self.board.current_player),
            'valid_moves': [list(m) for m in sorted(self.board.valid_moves)],
            'game_over': self.is_game_over(),
            'winner': None if winner is None else int(winner),
            'score': {'black': black, 'white': white},
            'moves': [record.to_dict() for record in self.move_history],
        }

    def __str__(self) -> str:
        """String representation of the game state."""
        return str(self.board)


def create(size: int) -> ReversiGame:
    """Create a new game. Raises BoardSizeError for an unsupported size."""
    return ReversiGame(size)


def legal_moves(game: ReversiGame) -> FrozenSet[Coordinate]:
    return game.get_valid_moves()


def apply_move(game: ReversiGame, row: int, col: int) -> bool:
    return game.make_move(row, col)


def is_over(game: ReversiGame) -> bool:
    return game.is_game_over()


def winner(game: ReversiGame) -> Optional[int]:
    return game.get_winner()

"""
Depth-limited minimax search with alpha-beta pruning for Reversi.
"""
import logging
import math
import time
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from ..config import EvalConfig
from ..game.board import Board, Coordinate, Player
from ..game.game import ReversiGame
from .evaluator import Evaluator

logger = logging.getLogger(__name__)


class SearchPreconditionError(RuntimeError):
    """The agent was asked for a move in a position where it cannot move."""


@dataclass
class SearchStats:
    """Bookkeeping for the last root search."""
    nodes: int = 0
    best_move: Optional[Coordinate] = None
    best_score: float = -math.inf
    root_scores: Dict[Coordinate, float] = field(default_factory=dict)
    elapsed: float = 0.0


class MinimaxAgent:
    """
    Minimax agent with alpha-beta pruning.

    The agent advises one fixed side of a game it does not own. All simulation
    happens on copies of the board: every child node is a fresh copy, so
    sibling moves never see each other's mutations.
    """

    def __init__(self, game: Union[ReversiGame, Board], depth: int,
                 player: Optional[int] = None, evaluator: Optional[Evaluator] = None,
                 config: Optional[EvalConfig] = None):
        """
        Initialize the agent.

        Args:
            game: The game (or bare board) the agent advises
            depth: Maximum search depth in plies, at least 1
            player: Side the agent plays. Defaults to the side not currently to move
            evaluator: Static evaluator (default: Evaluator for the agent's side)
            config: Evaluator weights, used when no evaluator is given
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")

        self.game = game
        self.depth = depth
        self.player = Player(player) if player is not None else self._board.current_player.opponent
        self.evaluator = evaluator or Evaluator(self.player, config)
        self.last_stats = SearchStats()

    @property
    def _board(self) -> Board:
        return self.game.board if isinstance(self.game, ReversiGame) else self.game

    def find_best_move(self) -> Coordinate:
        """
        Search the current position and return the best move for the agent.

        Raises:
            SearchPreconditionError: If the game is over, it is not the agent's
                turn, or the agent has no legal move
        """
        root = self._board.copy()
        if root.game_over:
            raise SearchPreconditionError("Game is already over")
        if root.current_player != self.player:
            raise SearchPreconditionError(
                f"Agent plays {self.player.label} but it is {root.current_player.label}'s turn")
        moves = sorted(root.valid_moves)
        if not moves:
            raise SearchPreconditionError(f"{self.player.label} has no legal move")

        stats = SearchStats()
        self.last_stats = stats
        start_time = time.time()

        for move in moves:
            child = root.copy()
            child.make_move(*move)
            stats.nodes += 1
            score = self.minimax(child, self.depth - 1, False, -math.inf, math.inf)
            stats.root_scores[move] = score
            # Strict comparison keeps the first-seen maximum
            if score > stats.best_score:
                stats.best_score = score
                stats.best_move = move

        stats.elapsed = time.time() - start_time
        logger.debug("Depth %d search for %s: best %s score %s, %d nodes in %.3fs",
                     self.depth, self.player.label, stats.best_move, stats.best_score,
                     stats.nodes, stats.elapsed)
        return stats.best_move

    def minimax(self, board: Board, depth: int, maximizing: bool,
                alpha: float, beta: float) -> float:
        """
        Minimax value of a position with alpha-beta pruning.

        Args:
            board: Search-local position, not mutated
            depth: Remaining plies
            maximizing: True on the agent's plies
            alpha: Lower bound for the maximizing side
            beta: Upper bound for the minimizing side

        Returns:
            The score of the best branch, from the agent's side
        """
        if depth == 0 or board.game_over:
            return self.evaluator.evaluate(board)

        best_score = -math.inf if maximizing else math.inf

        for move in sorted(board.valid_moves):
            child = board.copy()
            child.make_move(*move)
            self.last_stats.nodes += 1
            score = self.minimax(child, depth - 1, not maximizing, alpha, beta)

            if maximizing:
                best_score = max(best_score, score)
                alpha = max(alpha, best_score)
            else:
                best_score = min(best_score, score)
                beta = min(beta, best_score)

            if alpha >= beta:
                break

        return best_score


def find_best_move(agent: MinimaxAgent) -> Coordinate:
    return agent.find_best_move()

"""
Static evaluation of Reversi positions for the minimax agent.
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Optional
import numpy as np

from ..config import EvalConfig
from ..game.board import Board, Player


class Evaluator:
    """
    Agent-centric heuristic: disk count, owned corners and full rows/columns.

    Scores are always computed for the fixed side the evaluator was built for,
    regardless of whose turn it is in the evaluated position. The opponent's
    holdings are not subtracted.
    """

    def __init__(self, player: int, config: Optional[EvalConfig] = None):
        """
        Args:
            player: The side to score for
            config: Term weights (default: EvalConfig())
        """
        self.player = Player(player)
        self.config = config or EvalConfig()

    def evaluate(self, board: Board) -> int:
        """Score the board from the evaluator's side."""
        grid = board.grid
        return self.piece_term(grid) + self.corner_term(grid) + self.full_line_term(grid)

    def piece_term(self, grid: np.ndarray) -> int:
        return self.config.piece_weight * int(np.count_nonzero(grid == self.player))

    def corner_term(self, grid: np.ndarray) -> int:
        corners = grid[[0, 0, -1, -1], [0, -1, 0, -1]]
        return self.config.corner_weight * int(np.count_nonzero(corners == self.player))

    def full_rows(self, grid: np.ndarray) -> int:
        return int(np.count_nonzero(np.all(grid == self.player, axis=1)))

    def full_columns(self, grid: np.ndarray) -> int:
        return int(np.count_nonzero(np.all(grid == self.player, axis=0)))

    def full_line_term(self, grid: np.ndarray) -> int:
        """Weighted count of rows and columns entirely owned by the side."""
        if self.config.parallel_lines:
            # Both counts read the same snapshot; join before combining
            snapshot = grid.copy()
            with ThreadPoolExecutor(max_workers=2) as pool:
                rows = pool.submit(self.full_rows, snapshot)
                cols = pool.submit(self.full_columns, snapshot)
                lines = rows.result() + cols.result()
        else:
            lines = self.full_rows(grid) + self.full_columns(grid)
        return self.config.line_weight * lines

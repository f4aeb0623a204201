"""
Minimax search with alpha-beta pruning and a static evaluator.
"""
from .evaluator import Evaluator
from .minimax import MinimaxAgent, SearchPreconditionError, SearchStats, find_best_move

__all__ = ['Evaluator', 'MinimaxAgent', 'SearchPreconditionError', 'SearchStats', 'find_best_move']

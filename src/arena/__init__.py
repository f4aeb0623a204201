"""
Arena module for running tournaments between Reversi agents.
"""
from .arena import Arena, ArenaPlayer, ELORatingSystem, MinimaxPlayer, RandomPlayer, game_result

__all__ = ['Arena', 'ArenaPlayer', 'ELORatingSystem', 'MinimaxPlayer', 'RandomPlayer', 'game_result']

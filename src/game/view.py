"""
Console rendering of Reversi games.
"""
import sys
from typing import TextIO

from .board import Board, Coordinate, Player
from .game import ReversiGame

# ANSI colour codes
RESET = "\033[0m"
YELLOW = "\033[0;33m"
BLUE = "\033[0;34m"


class ConsoleView:
    """Renders boards, turns and results as text."""

    EMPTY_TILE = "_"
    MOVE_TILE = "*"
    PLAYER_TILES = {Player.BLACK: "o", Player.WHITE: "x"}

    def __init__(self, use_color: bool = True, stream: TextIO = None):
        self.use_color = use_color
        self.stream = stream or sys.stdout

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.use_color else text

    def tile(self, player: int) -> str:
        return self.PLAYER_TILES[Player(player)]

    def render_board(self, game: ReversiGame) -> str:
        """
        Render the grid with row/column indices. Legal destinations of the
        side to move are marked with MOVE_TILE.
        """
        grid = game.get_board_state().tolist()
        moves = game.get_valid_moves()

        lines = ["  " + "".join(self._paint(str(i), BLUE) + " " for i in range(len(grid)))]
        for i, row in enumerate(grid):
            tiles = []
            for j, cell in enumerate(row):
                if Coordinate(i, j) in moves:
                    tiles.append(self._paint(self.MOVE_TILE, YELLOW))
                elif cell == Board.EMPTY:
                    tiles.append(self.EMPTY_TILE)
                else:
                    tiles.append(self.tile(cell))
            lines.append(self._paint(str(i), BLUE) + " " + " ".join(tiles) + " ")
        return "\n".join(lines)

    def welcome(self, exit_key: str) -> None:
        print("Welcome to Reversi", file=self.stream)
        print(f"Enter {exit_key} to exit", file=self.stream)

    def print_board(self, game: ReversiGame) -> None:
        print(self.render_board(game), file=self.stream)

    def print_current_player(self, player: int) -> None:
        print(f"Turn: {self.tile(player)}", file=self.stream)

    def print_result(self, game: ReversiGame) -> None:
        """Print the final board and the winner, or DRAW."""
        winner = game.get_winner()
        if winner == Board.DRAW:
            print("DRAW", file=self.stream)
            return

        self.print_board(game)
        print(f"Winner: {self.tile(winner)}", file=self.stream)

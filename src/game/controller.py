"""
Console driver: alternates between a human reading moves from a stream and an
optional minimax agent until the game ends.
"""
import logging
import re
import sys
from typing import Optional, TextIO

from .board import Coordinate
from .game import ReversiGame
from .view import ConsoleView

logger = logging.getLogger(__name__)

INPUT_PATTERN = re.compile(r"\s*(\d+)\s+(\d+)\s*")
EXIT_KEY = "q"


def parse_coordinate(text: str) -> Coordinate:
    """
    Parse "<row> <col>" into a Coordinate.

    Raises:
        ValueError: If the text is not two non-negative integers
    """
    match = INPUT_PATTERN.fullmatch(text)
    if match is None:
        raise ValueError(f"Bad input: {text!r}")
    return Coordinate(int(match.group(1)), int(match.group(2)))


class ConsoleController:
    """Runs one game in the console."""

    def __init__(self, game: ReversiGame, view: ConsoleView, agent=None,
                 input_stream: TextIO = None, output: TextIO = None):
        """
        Args:
            game: The game to drive
            view: Renderer for boards and status lines
            agent: Optional MinimaxAgent playing one side
            input_stream: Where human moves are read from (default: stdin)
            output: Where prompts and messages go (default: the view's stream)
        """
        self.game = game
        self.view = view
        self.agent = agent
        self.input_stream = input_stream or sys.stdin
        self.output = output or view.stream

    def _say(self, text: str = "") -> None:
        print(text, file=self.output)

    def run(self) -> Optional[int]:
        """
        Play until the game is over, the exit key is entered or input runs out.

        Returns:
            The winner, or None if the game was abandoned
        """
        self.view.welcome(EXIT_KEY)

        while not self.game.is_game_over():
            self._say()
            self.view.print_board(self.game)
            self.view.print_current_player(self.game.get_current_player())

            if self.agent is not None and self.game.get_current_player() == self.agent.player:
                move = self.agent.find_best_move()
                self._say(f"Agent: {move.row} {move.col}")
                self.game.make_move(*move)
                continue

            line = self.input_stream.readline()
            if not line:
                logger.info("Input closed, abandoning game")
                break
            line = line.strip()
            if line == EXIT_KEY:
                break

            try:
                coord = parse_coordinate(line)
            except ValueError:
                self._say("Couldn't make move. Please retry.")
                continue

            if not self.game.make_move(*coord):
                self._say("Invalid move, try again.")

        if self.game.is_game_over():
            self.view.print_result(self.game)
        return self.game.get_winner()

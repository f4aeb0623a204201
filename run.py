"""
Play Reversi in the console, against the minimax agent or another human.
"""
import os
import sys
import argparse
from pathlib import Path

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute()))

from src.config import Config, get_default_config
from src.game import BoardSizeError, ReversiGame
from src.game.controller import ConsoleController
from src.game.view import ConsoleView
from src.logger import Logger
from src.search import MinimaxAgent


class LoggedAgent(MinimaxAgent):
    """Minimax agent that reports every root search to the run logger."""

    def __init__(self, *args, run_logger: Logger, **kwargs):
        super().__init__(*args, **kwargs)
        self.run_logger = run_logger
        self.searches = 0

    def find_best_move(self):
        move = super().find_best_move()
        self.searches += 1
        self.run_logger.log_search(self.last_stats, self.searches)
        return move


def main():
    parser = argparse.ArgumentParser(description='Play Reversi against a minimax agent')
    parser.add_argument('--config', type=str, default='configs/default_config.json',
                        help='Path to config file')
    parser.add_argument('--size', type=int, default=None,
                        help='Board side length (even, overrides config)')
    parser.add_argument('--depth', type=int, default=None,
                        help='Agent search depth (overrides config)')
    parser.add_argument('--no-agent', action='store_true',
                        help='Two humans share the console')
    parser.add_argument('--agent-first', action='store_true',
                        help='The agent plays Black and moves first')
    parser.add_argument('--no-color', action='store_true',
                        help='Disable ANSI colours')
    args = parser.parse_args()

    if os.path.exists(args.config):
        config = Config.load(args.config)
    else:
        config = get_default_config()
    if args.size is not None:
        config.board.size = args.size
    if args.depth is not None:
        config.search.depth = args.depth
    # Console output belongs to the game; keep log records in the run file
    config.logging.verbose = False

    try:
        game = ReversiGame(config.board.size)
    except BoardSizeError as e:
        parser.error(str(e))

    run_logger = Logger(config)
    agent = None
    if not args.no_agent:
        # By default the agent takes the side not to move, i.e. the human opens
        side = game.get_current_player() if args.agent_first else None
        agent = LoggedAgent(game, config.search.depth, player=side,
                            config=config.eval, run_logger=run_logger)

    view = ConsoleView(use_color=not args.no_color)
    try:
        ConsoleController(game, view, agent=agent).run()
    except KeyboardInterrupt:
        print("\nGame interrupted.")
    finally:
        if game.is_game_over():
            run_logger.log_text('game/final_board', str(game))
        run_logger.close()


if __name__ == "__main__":
    main()

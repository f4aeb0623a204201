"""
Script for running tournaments between minimax agents of different depths.
"""
import os
import argparse
from datetime import datetime

from src.arena import Arena, ELORatingSystem, MinimaxPlayer, RandomPlayer
from src.config import Config, get_default_config
from src.logger import Logger


def main():
    parser = argparse.ArgumentParser(description='Run a tournament between Reversi agents')
    parser.add_argument('--config', type=str, default='configs/default_config.json',
                        help='Path to config file')
    parser.add_argument('--depths', type=int, nargs='+', default=None,
                        help='Search depths of the minimax players')
    parser.add_argument('--rounds', type=int, default=None,
                        help='Number of rounds to play')
    parser.add_argument('--size', type=int, default=None,
                        help='Board side length')
    parser.add_argument('--no-random', action='store_true',
                        help='Leave out the random baseline player')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory to save tournament results')
    parser.add_argument('--verbose', action='store_true',
                        help='Print every move of every game')
    args = parser.parse_args()

    config = Config.load(args.config) if os.path.exists(args.config) else get_default_config()
    settings = config.tournament
    if args.depths:
        settings.depths = args.depths
    if args.rounds is not None:
        settings.rounds = args.rounds
    if args.size is not None:
        config.board.size = args.size
    if args.no_random:
        settings.include_random = False
    if args.output_dir:
        settings.output_dir = args.output_dir

    os.makedirs(settings.output_dir, exist_ok=True)

    elo_file = os.path.join(settings.output_dir, settings.elo_file)
    if os.path.exists(elo_file):
        print(f"Loading ELO ratings from {elo_file} (K-factor {settings.k} from config)")
        elo = ELORatingSystem.load_ratings(elo_file, k=settings.k)
    else:
        print("Starting new ELO rating system")
        elo = ELORatingSystem(k=settings.k, initial_rating=settings.initial_rating)

    run_logger = Logger(config)
    arena = Arena(board_size=config.board.size, elo_system=elo, metrics_logger=run_logger)

    if settings.include_random:
        arena.add_player(RandomPlayer("random", seed=config.seed))
    for depth in settings.depths:
        arena.add_player(MinimaxPlayer(f"minimax_d{depth}", depth, eval_config=config.eval))

    if len(arena.players) < 2:
        print("Need at least 2 players to start a tournament")
        run_logger.close()
        return

    print("\nTournament Participants:")
    for i, player_id in enumerate(arena.players.keys(), 1):
        print(f"{i}. {player_id}")

    print(f"\nStarting tournament with {settings.rounds} rounds on a "
          f"{config.board.size}x{config.board.size} board...")
    try:
        results = arena.run_tournament(rounds=settings.rounds, verbose=args.verbose)
    finally:
        run_logger.close()

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    results_file = os.path.join(settings.output_dir, f'tournament_{timestamp}.json')
    arena.save_results(results_file, results)
    arena.elo.save_ratings(elo_file)

    print(f"\nTournament completed! Results saved to {results_file}")
    print("\nFinal Leaderboard:")
    arena.print_leaderboard()

    for player in arena.players.values():
        if isinstance(player, MinimaxPlayer):
            print(f"{player.player_id}: {player.nodes} nodes searched")


if __name__ == '__main__':
    main()

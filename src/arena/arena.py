"""
Arena for running tournaments between Reversi agents with ELO rating.
"""
import json
import logging
import random
import time
from datetime import datetime
from typing import Dict, List, Optional

from tqdm import tqdm

from ..game import Board, Coordinate, Player, ReversiGame
from ..search import MinimaxAgent

logger = logging.getLogger(__name__)


class ELORatingSystem:
    """ELO rating system for tracking agent strength."""

    def __init__(self, k: float = 32, initial_rating: float = 1500.0):
        """
        Initialize the ELO rating system.

        Args:
            k: K-factor, controls how much ratings change after each game
            initial_rating: Initial rating for new players
        """
        self.k = k
        self.initial_rating = initial_rating
        self.ratings: Dict[str, float] = {}
        self.games_played: Dict[str, int] = {}
        self.history: List[Dict] = []

    def add_player(self, player_id: str, rating: Optional[float] = None):
        """Register a player if it is not rated yet."""
        if player_id not in self.ratings:
            self.ratings[player_id] = rating if rating is not None else self.initial_rating
            self.games_played[player_id] = 0

    def get_rating(self, player_id: str) -> float:
        return self.ratings.get(player_id, self.initial_rating)

    @staticmethod
    def get_expected_score(rating_a: float, rating_b: float) -> float:
        """Expected score of A against B."""
        return 1.0 / (1.0 + 10.0 ** ((rating_b - rating_a) / 400.0))

    def update_ratings(self, player_a: str, player_b: str, score_a: float) -> Dict:
        """
        Update ratings after a game.

        Args:
            player_a: ID of player A
            player_b: ID of player B
            score_a: Score for player A (1.0 for win, 0.5 for draw, 0.0 for loss)

        Returns:
            The recorded game entry
        """
        self.add_player(player_a)
        self.add_player(player_b)

        rating_a = self.ratings[player_a]
        rating_b = self.ratings[player_b]
        expected_a = self.get_expected_score(rating_a, rating_b)

        # Zero-sum update: what A gains, B loses
        delta = self.k * (score_a - expected_a)
        self.ratings[player_a] = rating_a + delta
        self.ratings[player_b] = rating_b - delta
        self.games_played[player_a] += 1
        self.games_played[player_b] += 1

        record = {
            'timestamp': time.time(),
            'player_a': player_a,
            'player_b': player_b,
            'score_a': score_a,
            'rating_a_before': rating_a,
            'rating_b_before': rating_b,
            'rating_a_after': self.ratings[player_a],
            'rating_b_after': self.ratings[player_b],
        }
        self.history.append(record)
        return record

    def get_leaderboard(self) -> List[Dict]:
        """Players sorted by rating, best first."""
        leaderboard = [
            {'player_id': pid, 'rating': rating, 'games_played': self.games_played[pid]}
            for pid, rating in self.ratings.items()
        ]
        leaderboard.sort(key=lambda x: x['rating'], reverse=True)
        return leaderboard

    def save_ratings(self, filepath: str):
        """Save the current ratings to a JSON file."""
        data = {
            'k': self.k,
            'initial_rating': self.initial_rating,
            'ratings': self.ratings,
            'games_played': self.games_played,
            'history': self.history,
            'last_updated': datetime.now().isoformat()
        }
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    @classmethod
    def load_ratings(cls, filepath: str, k: Optional[float] = None) -> 'ELORatingSystem':
        """
        Load ratings from a JSON file.

        Args:
            filepath: File written by save_ratings
            k: K-factor for future updates (default: the one stored in the file)
        """
        with open(filepath, 'r') as f:
            data = json.load(f)

        if k is not None and k != data['k']:
            logger.info("Using K-factor %s instead of %s stored in %s", k, data['k'], filepath)
        elo = cls(k=data['k'] if k is None else k, initial_rating=data['initial_rating'])
        elo.ratings = {pid: float(v) for pid, v in data['ratings'].items()}
        elo.games_played = {pid: int(v) for pid, v in data['games_played'].items()}
        elo.history = data.get('history', [])
        return elo


class ArenaPlayer:
    """A rated participant that picks moves for whichever side is to move."""

    def __init__(self, player_id: str):
        self.player_id = player_id

    def get_move(self, game: ReversiGame) -> Coordinate:
        raise NotImplementedError


class RandomPlayer(ArenaPlayer):
    """Baseline that plays a uniformly random legal move."""

    def __init__(self, player_id: str = "random", seed: Optional[int] = None):
        super().__init__(player_id)
        self.rng = random.Random(seed)

    def get_move(self, game: ReversiGame) -> Coordinate:
        return self.rng.choice(sorted(game.get_valid_moves()))


class MinimaxPlayer(ArenaPlayer):
    """Alpha-beta minimax agent of a fixed depth."""

    def __init__(self, player_id: str, depth: int, eval_config=None):
        super().__init__(player_id)
        self.depth = depth
        self.eval_config = eval_config
        self.nodes = 0

    def get_move(self, game: ReversiGame) -> Coordinate:
        agent = MinimaxAgent(game, self.depth, player=game.get_current_player(),
                             config=self.eval_config)
        move = agent.find_best_move()
        self.nodes += agent.last_stats.nodes
        return move


def game_result(winner: Optional[int]) -> float:
    """
    Score of a finished game from Black's side.

    Raises:
        ValueError: If `winner` is not BLACK, WHITE or DRAW
    """
    if winner is None:
        raise ValueError("Game is not over")
    if winner == Player.BLACK:
        return 1.0
    if winner == Player.WHITE:
        return 0.0
    if winner == Board.DRAW:
        return 0.5
    raise ValueError(f"Unknown winner {winner!r}")


class Arena:
    """Arena for running tournaments between different players."""

    def __init__(self, board_size: int = 8, elo_system: Optional[ELORatingSystem] = None,
                 metrics_logger=None):
        """
        Initialize the arena.

        Args:
            board_size: Side length of the boards games are played on
            elo_system: Optional ELO rating system to use
            metrics_logger: Optional src.logger.Logger receiving per-game metrics
        """
        self.board_size = board_size
        self.elo = elo_system if elo_system is not None else ELORatingSystem()
        self.players: Dict[str, ArenaPlayer] = {}
        self.metrics_logger = metrics_logger
        self.games_played = 0

    def add_player(self, player: ArenaPlayer):
        """Add a player to the arena."""
        self.players[player.player_id] = player
        self.elo.add_player(player.player_id)

    def play_game(self, player1_id: str, player2_id: str, verbose: bool = False) -> float:
        """
        Play a single game between two players.

        Args:
            player1_id: ID of the first player (plays Black and moves first)
            player2_id: ID of the second player (plays White)
            verbose: Whether to print the board after every move

        Returns:
            1.0 if player1 wins, 0.5 for a draw, 0.0 if player2 wins
        """
        if player1_id not in self.players or player2_id not in self.players:
            raise ValueError(f"One or both players not found: {player1_id}, {player2_id}")

        seats = {Player.BLACK: self.players[player1_id], Player.WHITE: self.players[player2_id]}
        game = ReversiGame(self.board_size)

        while not game.is_game_over():
            current = seats[game.get_current_player()]
            move = current.get_move(game)
            game.make_move(*move)
            if verbose:
                print(f"{current.player_id} plays at ({move.row}, {move.col})")
                print(game)

        black_count, white_count = game.get_score()
        winner = game.get_winner()
        logger.info("%s (Black) vs %s (White): %d-%d", player1_id, player2_id,
                    black_count, white_count)

        self.games_played += 1
        if self.metrics_logger is not None:
            self.metrics_logger.log_metrics({
                'black_disks': black_count,
                'white_disks': white_count,
                'moves': len(game.move_history),
            }, step=self.games_played, prefix='arena/')

        return game_result(winner)

    def run_tournament(self, rounds: int = 10, verbose: bool = False,
                       show_progress: bool = True) -> Dict:
        """
        Run a round-robin tournament between all players.

        Args:
            rounds: Number of rounds; every pairing meets once per round
            verbose: Whether to print every move
            show_progress: Whether to display a progress bar

        Returns:
            Dictionary with tournament results
        """
        player_ids = list(self.players.keys())
        num_players = len(player_ids)
        if num_players < 2:
            raise ValueError("Need at least 2 players for a tournament")

        pairings = [(player_ids[i], player_ids[j])
                    for i in range(num_players) for j in range(i + 1, num_players)]
        results = {
            'games_played': 0,
            'matchups': {
                f"{p1}_vs_{p2}": {'player1': p1, 'player2': p2, 'games_played': 0,
                                  'wins1': 0, 'wins2': 0, 'draws': 0}
                for p1, p2 in pairings
            },
            'start_time': time.time(),
            'rounds': [],
        }

        progress = tqdm(total=rounds * len(pairings), desc="Tournament", disable=not show_progress)
        for round_num in range(rounds):
            round_games = []
            for index, (a, b) in enumerate(pairings):
                # Alternate colours between rounds
                black, white = (a, b) if (index + round_num) % 2 == 0 else (b, a)
                result = self.play_game(black, white, verbose=verbose)
                self.elo.update_ratings(black, white, result)

                matchup = results['matchups'][f"{a}_vs_{b}"]
                score_a = result if black == a else 1.0 - result
                matchup['games_played'] += 1
                if score_a == 1.0:
                    matchup['wins1'] += 1
                elif score_a == 0.0:
                    matchup['wins2'] += 1
                else:
                    matchup['draws'] += 1
                results['games_played'] += 1

                round_games.append({
                    'black': black,
                    'white': white,
                    'result': result,
                    'elo_black_after': self.elo.get_rating(black),
                    'elo_white_after': self.elo.get_rating(white),
                })
                progress.update(1)

            results['rounds'].append({'round': round_num + 1, 'games': round_games})
        progress.close()

        results['end_time'] = time.time()
        results['duration'] = results['end_time'] - results['start_time']
        results['leaderboard'] = self.elo.get_leaderboard()
        return results

    def save_results(self, filepath: str, results: Optional[Dict] = None):
        """
        Save tournament results to a JSON file.

        Args:
            filepath: Output path
            results: Return value of run_tournament; only the leaderboard is
                written when omitted
        """
        data = {
            'board_size': self.board_size,
            'participants': list(self.players.keys()),
            'leaderboard': self.elo.get_leaderboard(),
        }
        if results is not None:
            data['games_played'] = results['games_played']
            data['rounds'] = len(results['rounds'])
            data['matchups'] = results['matchups']
            data['duration'] = results.get('duration')

        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    def print_leaderboard(self):
        """Print the current leaderboard."""
        leaderboard = self.elo.get_leaderboard()
        print("\nCurrent Leaderboard:")
        print("Rank  Player ID               Rating  Games Played")
        print("----  ---------------------  -------  ------------")

        for i, player in enumerate(leaderboard, 1):
            print(f"{i:4d}  {player['player_id']:22s}  {player['rating']:7.1f}  {player['games_played']:12d}")

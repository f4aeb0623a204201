"""
Tests for the minimax agent: exact root scores against a plain minimax,
tie-breaking, pruning and the agent's preconditions.
"""
import math
import random

import numpy as np
import pytest

from src.config import EvalConfig
from src.game import Board, Player, ReversiGame
from src.search import (
    Evaluator, MinimaxAgent, SearchPreconditionError, find_best_move,
)

B, W, E = Player.BLACK, Player.WHITE, Board.EMPTY


class Counter:
    nodes = 0


def plain_minimax(board, depth, maximizing, evaluator, counter):
    """Unpruned minimax with the same role alternation as the agent."""
    if depth == 0 or board.game_over:
        return evaluator.evaluate(board)

    scores = []
    for move in sorted(board.valid_moves):
        child = board.copy()
        child.make_move(*move)
        counter.nodes += 1
        scores.append(plain_minimax(child, depth - 1, not maximizing, evaluator, counter))
    return max(scores) if maximizing else min(scores)


def plain_root_scores(board, depth, player):
    evaluator = Evaluator(player)
    counter = Counter()
    scores = {}
    for move in sorted(board.valid_moves):
        child = board.copy()
        child.make_move(*move)
        counter.nodes += 1
        scores[move] = plain_minimax(child, depth - 1, False, evaluator, counter)
    return scores, counter.nodes


def midgame_board(size, plies, seed):
    rng = random.Random(seed)
    board = Board(size)
    for _ in range(plies):
        if board.game_over:
            break
        board.make_move(*rng.choice(sorted(board.valid_moves)))
    return board


def check_against_plain_minimax(board, depth):
    player = board.current_player
    agent = MinimaxAgent(board, depth, player=player)
    move = agent.find_best_move()

    expected, full_nodes = plain_root_scores(board, depth, player)
    stats = agent.last_stats

    assert stats.root_scores == expected
    best = max(expected.values())
    assert stats.best_score == best
    assert move == min(m for m, s in expected.items() if s == best)
    assert stats.best_move == move
    assert move in board.valid_moves
    assert stats.nodes <= full_nodes


@pytest.mark.parametrize("depth", [1, 2, 3, 4])
def test_start_position_matches_plain_minimax(depth):
    check_against_plain_minimax(Board(4), depth)


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_midgame_matches_plain_minimax(seed):
    board = midgame_board(6, 8, seed)
    assert not board.game_over
    check_against_plain_minimax(board, 3)


def test_pruning_skips_nodes_on_larger_trees():
    board = Board(6)
    agent = MinimaxAgent(board, 4, player=B)
    agent.find_best_move()
    _, full_nodes = plain_root_scores(board, 4, B)
    assert agent.last_stats.nodes < full_nodes


def test_depth_one_takes_the_corner():
    board = Board.from_array([
        [E, W, B, E],
        [E, B, E, E],
        [E, W, E, E],
        [E, E, E, E],
    ], B)
    assert board.valid_moves == {(0, 0), (3, 1)}

    agent = MinimaxAgent(board, 1, player=B)
    assert agent.find_best_move() == (0, 0)
    assert agent.last_stats.root_scores == {(0, 0): 70, (3, 1): 20}


def test_default_side_is_the_side_not_to_move():
    game = ReversiGame(4)
    agent = MinimaxAgent(game, 2)
    assert agent.player == Player.WHITE

    with pytest.raises(SearchPreconditionError):
        agent.find_best_move()

    game.make_move(0, 2)
    move = agent.find_best_move()
    assert move in game.get_valid_moves()
    assert game.make_move(*move)


def test_explicit_side():
    game = ReversiGame(4)
    agent = MinimaxAgent(game, 2, player=Player.BLACK)
    assert agent.find_best_move() in {(0, 2), (1, 3), (2, 0), (3, 1)}


def test_game_over_is_rejected():
    game = ReversiGame(4)
    for row, col in [(0, 2), (0, 3), (3, 1), (1, 0), (0, 0), (0, 1),
                     (1, 3), (3, 0), (2, 0), (3, 2), (2, 3), (3, 3)]:
        game.make_move(row, col)
    assert game.is_game_over()

    agent = MinimaxAgent(game, 2, player=Player.WHITE)
    with pytest.raises(SearchPreconditionError):
        agent.find_best_move()


def test_search_error_is_runtime_error():
    assert issubclass(SearchPreconditionError, RuntimeError)


@pytest.mark.parametrize("depth", [0, -1])
def test_depth_must_be_positive(depth):
    with pytest.raises(ValueError):
        MinimaxAgent(ReversiGame(4), depth)


def test_search_does_not_mutate_the_game():
    game = ReversiGame(6)
    game.make_move(*sorted(game.get_valid_moves())[0])
    before = game.get_board_state()
    mover = game.get_current_player()
    moves = game.get_valid_moves()

    agent = MinimaxAgent(game, 3, player=mover)
    assert agent.find_best_move() in moves

    assert np.array_equal(game.get_board_state(), before)
    assert game.get_current_player() == mover
    assert game.get_valid_moves() == moves
    assert len(game.get_move_history()) == 1


def test_agent_follows_the_game():
    """The agent reads the game's current position on every call."""
    game = ReversiGame(4)
    agent = MinimaxAgent(game, 2, player=Player.BLACK)

    agent_turns = 0
    while not game.is_game_over():
        if game.get_current_player() == Player.BLACK:
            move = agent.find_best_move()
            assert move in game.get_valid_moves()
            agent_turns += 1
        else:
            move = sorted(game.get_valid_moves())[0]
        assert game.make_move(*move)

    assert agent_turns >= 2


def test_find_best_move_facade():
    board = Board(4)
    agent = MinimaxAgent(board, 2, player=B)
    assert find_best_move(agent) == agent.last_stats.best_move
    assert agent.last_stats.best_score > -math.inf


def test_custom_evaluator_weights():
    config = EvalConfig(piece_weight=1, corner_weight=0, line_weight=0)
    board = Board(4)
    agent = MinimaxAgent(board, 1, player=B, config=config)
    agent.find_best_move()
    # Every opening move leaves Black with four disks
    assert set(agent.last_stats.root_scores.values()) == {4}
    assert agent.last_stats.best_move == (0, 2)

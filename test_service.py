"""
Tests for the in-memory game session service.
"""
import json
import threading

import pytest

from src.config import ServiceConfig
from src.game import Player
from src.service import (
    GameService, GameStatus, InvalidGameError, InvalidParamError, progress_topic,
)

FIXTURE_MOVES = [
    (0, 2), (0, 3), (3, 1), (1, 0), (0, 0), (0, 1),
    (1, 3), (3, 0), (2, 0), (3, 2), (2, 3), (3, 3),
]


class Inbox:
    def __init__(self):
        self.messages = []

    def __call__(self, topic, payload):
        self.messages.append((topic, payload))


@pytest.fixture
def inbox():
    return Inbox()


@pytest.fixture
def service(inbox):
    return GameService(config=ServiceConfig(board_size=4), notifier=inbox)


def test_create_game(service):
    session = service.create_game("alice")

    assert session.status is GameStatus.NEW
    assert session.player1.login == "alice"
    assert session.player1.disk == Player.BLACK
    assert session.player2 is None
    assert session.game.size == 4
    assert service.get_game(session.game_id) is session
    assert session.game_id in service.storage


def test_create_game_with_size(service):
    assert service.create_game("alice", size=6).game.size == 6


def test_unknown_game(service):
    with pytest.raises(InvalidParamError):
        service.get_game("missing")
    with pytest.raises(InvalidParamError):
        service.connect_to_game("bob", "missing")


def test_connect_to_game(service, inbox):
    session = service.create_game("alice")
    joined = service.connect_to_game("bob", session.game_id)

    assert joined is session
    assert session.status is GameStatus.IN_PROGRESS
    assert session.player2.login == "bob"
    assert session.player2.disk == Player.WHITE
    assert inbox.messages[-1][0] == progress_topic(session.game_id)

    with pytest.raises(InvalidGameError, match="busy"):
        service.connect_to_game("carol", session.game_id)


def test_connect_to_random_game(service):
    with pytest.raises(InvalidGameError, match="No game available"):
        service.connect_to_random_game("bob")

    first = service.create_game("alice")
    second = service.create_game("carol")
    joined = service.connect_to_random_game("bob")
    assert joined in (first, second)

    other = service.connect_to_random_game("dave")
    assert {joined.game_id, other.game_id} == {first.game_id, second.game_id}

    with pytest.raises(InvalidGameError):
        service.connect_to_random_game("erin")


def test_move_errors(service):
    with pytest.raises(InvalidGameError, match="doesn't exist"):
        service.move("missing", Player.BLACK, 0, 2)

    session = service.create_game("alice")
    with pytest.raises(InvalidGameError, match="hasn't started"):
        service.move(session.game_id, Player.BLACK, 0, 2)

    service.connect_to_game("bob", session.game_id)
    with pytest.raises(InvalidGameError):
        service.move(session.game_id, 3, 0, 2)
    with pytest.raises(InvalidGameError, match="not White's turn"):
        service.move(session.game_id, Player.WHITE, 0, 1)
    with pytest.raises(InvalidGameError, match="invalid move"):
        service.move(session.game_id, Player.BLACK, 0, 0)

    assert session.game.get_move_history() == []


def test_full_game(service, inbox):
    session = service.create_game("alice")
    service.connect_to_game("bob", session.game_id)

    for row, col in FIXTURE_MOVES:
        disk = session.game.get_current_player()
        service.move(session.game_id, disk, row, col)

    assert session.status is GameStatus.FINISHED
    assert session.winner == session.player2
    assert session.game.get_score() == (6, 10)

    with pytest.raises(InvalidGameError, match="already over"):
        service.move(session.game_id, Player.BLACK, 0, 0)

    topic, payload = inbox.messages[-1]
    assert topic == f"/topic/game-progress/{session.game_id}"
    assert payload['status'] == "FINISHED"
    assert payload['winner'] == {'login': "bob", 'disk': 2}
    # One message for the join, one per move
    assert len(inbox.messages) == 1 + len(FIXTURE_MOVES)
    json.dumps(payload)


def test_sessions_are_independent():
    service = GameService(config=ServiceConfig(board_size=4))
    sessions = []
    for i in range(8):
        session = service.create_game(f"black{i}")
        service.connect_to_game(f"white{i}", session.game_id)
        sessions.append(session)

    errors = []

    def play(session):
        try:
            for row, col in FIXTURE_MOVES:
                service.move(session.game_id, session.game.get_current_player(), row, col)
        except InvalidGameError as e:
            errors.append(e)

    threads = [threading.Thread(target=play, args=(s,)) for s in sessions]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    for session in sessions:
        assert session.status is GameStatus.FINISHED
        assert session.game.get_score() == (6, 10)


class HandoffLock:
    """Session lock that runs `after_release` once, right after the next release."""

    def __init__(self):
        self._lock = threading.Lock()
        self.after_release = None

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info):
        self._lock.release()
        hook, self.after_release = self.after_release, None
        if hook is not None:
            hook()
        return False


def test_notifications_match_the_move_that_sent_them(service, inbox):
    """A move landing right after the lock is released must not leak into the previous payload."""
    session = service.create_game("alice")
    service.connect_to_game("bob", session.game_id)
    session.lock = HandoffLock()

    def white_replies():
        thread = threading.Thread(
            target=service.move, args=(session.game_id, Player.WHITE, 0, 3))
        thread.start()
        thread.join()

    session.lock.after_release = white_replies
    service.move(session.game_id, Player.BLACK, 0, 2)

    assert len(session.game.get_move_history()) == 2
    white_payload, black_payload = (payload for _, payload in inbox.messages[1:])
    assert [m['move'] for m in black_payload['game']['moves']] == [[0, 2]]
    assert black_payload['game']['current_player'] == int(Player.WHITE)
    assert [m['move'] for m in white_payload['game']['moves']] == [[0, 2], [0, 3]]

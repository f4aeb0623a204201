"""
Game service: creates sessions, pairs players and applies their moves.
"""
import logging
import uuid
from typing import Any, Callable, Dict, Optional

from ..config import ServiceConfig
from ..game import Player, ReversiGame
from .exceptions import InvalidGameError, InvalidParamError
from .storage import GamePlayer, GameSession, GameStatus, GameStorage

logger = logging.getLogger(__name__)

Notifier = Callable[[str, Dict[str, Any]], None]


def progress_topic(game_id: str) -> str:
    return f"/topic/game-progress/{game_id}"


class GameService:
    """
    Session operations. Each session is mutated only while holding its own
    lock; independent sessions do not block each other.
    """

    def __init__(self, storage: Optional[GameStorage] = None,
                 config: Optional[ServiceConfig] = None,
                 notifier: Optional[Notifier] = None):
        """
        Args:
            storage: Session storage (default: a new empty GameStorage)
            config: Service settings (default: ServiceConfig())
            notifier: Called with (topic, session dict) after joins and moves
        """
        self.storage = storage if storage is not None else GameStorage()
        self.config = config or ServiceConfig()
        self.notifier = notifier

    def _notify(self, game_id: str, payload: Dict[str, Any]) -> None:
        if self.notifier is not None:
            self.notifier(progress_topic(game_id), payload)

    def create_game(self, login: str, size: Optional[int] = None) -> GameSession:
        """Open a new game; the creator plays BLACK and moves first."""
        game = ReversiGame(size or self.config.board_size)
        session = GameSession(
            game_id=str(uuid.uuid4()),
            game=game,
            player1=GamePlayer(login, Player.BLACK),
        )
        self.storage.add_game(session)
        logger.info("Game %s created by %s", session.game_id, login)
        return session

    def get_game(self, game_id: str) -> GameSession:
        session = self.storage.get_game(game_id)
        if session is None:
            raise InvalidParamError(f"Game {game_id} doesn't exist")
        return session

    def _join(self, session: GameSession, login: str) -> Dict[str, Any]:
        """Seat `login` as WHITE and return the session snapshot taken under the lock."""
        with session.lock:
            if session.player2 is not None:
                raise InvalidGameError("Game is busy")
            session.player2 = GamePlayer(login, Player.WHITE)
            session.status = GameStatus.IN_PROGRESS
            payload = session.to_dict()
        logger.info("%s joined game %s", login, session.game_id)
        return payload

    def connect_to_game(self, login: str, game_id: str) -> GameSession:
        """Join a specific open game as WHITE."""
        session = self.get_game(game_id)
        payload = self._join(session, login)
        self._notify(session.game_id, payload)
        return session

    def connect_to_random_game(self, login: str) -> GameSession:
        """Join the first open game as WHITE."""
        for session in self.storage.values():
            if session.status is not GameStatus.NEW:
                continue
            try:
                payload = self._join(session, login)
            except InvalidGameError:
                # Taken between listing and locking
                continue
            self._notify(session.game_id, payload)
            return session
        raise InvalidGameError("No game available")

    def move(self, game_id: str, disk: int, row: int, col: int) -> GameSession:
        """
        Apply a move for `disk` in the given game.

        Raises:
            InvalidGameError: Unknown game, game not started or already over,
                not that disk's turn, or an illegal move
        """
        session = self.storage.get_game(game_id)
        if session is None:
            raise InvalidGameError("The game for the given move doesn't exist")
        try:
            player = Player(disk)
        except ValueError:
            raise InvalidGameError(f"Unknown disk {disk!r}") from None

        with session.lock:
            if session.status is GameStatus.NEW:
                raise InvalidGameError("Game hasn't started yet")
            if session.status is GameStatus.FINISHED:
                raise InvalidGameError("Game is already over")
            if player != session.game.get_current_player():
                raise InvalidGameError(f"It is not {player.label}'s turn")
            if not session.game.make_move(row, col):
                raise InvalidGameError("invalid move request")
            if session.game.is_game_over():
                session.status = GameStatus.FINISHED
                logger.info("Game %s finished", game_id)
            payload = session.to_dict()

        self._notify(game_id, payload)
        return session

"""
In-memory storage of game sessions.
"""
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..game import Player, ReversiGame


class GameStatus(Enum):
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"


@dataclass(frozen=True)
class GamePlayer:
    login: str
    disk: Player

    def to_dict(self) -> Dict[str, Any]:
        return {'login': self.login, 'disk': int(self.disk)}


@dataclass
class GameSession:
    """One hosted game. Mutations must hold `lock`."""
    game_id: str
    game: ReversiGame
    player1: GamePlayer
    player2: Optional[GamePlayer] = None
    status: GameStatus = GameStatus.NEW
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def winner(self) -> Optional[GamePlayer]:
        """The winning player, or None while running or on a draw."""
        result = self.game.get_winner()
        if result == Player.BLACK:
            return self.player1
        if result == Player.WHITE:
            return self.player2
        return None

    def to_dict(self) -> Dict[str, Any]:
        winner = self.winner
        return {
            'game_id': self.game_id,
            'status': self.status.value,
            'player1': self.player1.to_dict(),
            'player2': self.player2.to_dict() if self.player2 else None,
            'winner': winner.to_dict() if winner else None,
            'game': self.game.to_dict(),
        }


class GameStorage:
    """Thread-safe map from game id to session."""

    def __init__(self):
        self._games: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def add_game(self, session: GameSession) -> None:
        with self._lock:
            self._games[session.game_id] = session

    def get_game(self, game_id: str) -> Optional[GameSession]:
        with self._lock:
            return self._games.get(game_id)

    def __contains__(self, game_id: str) -> bool:
        with self._lock:
            return game_id in self._games

    def values(self) -> List[GameSession]:
        with self._lock:
            return list(self._games.values())

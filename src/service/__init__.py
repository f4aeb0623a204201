"""
In-memory game sessions for two remote players.
"""
from .exceptions import InvalidGameError, InvalidParamError
from .service import GameService, progress_topic
from .storage import GamePlayer, GameSession, GameStatus, GameStorage

__all__ = [
    'GameService', 'progress_topic', 'GameStorage', 'GameSession', 'GamePlayer', 'GameStatus',
    'InvalidGameError', 'InvalidParamError',
]

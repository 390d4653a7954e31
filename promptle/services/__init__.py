"""
Services Package

Contains all game logic and service classes.
"""

from .game_service import Game
from .hint_generator import HintGenerator, get_hint_generator
from .hint_service import HintService
from .remote import BackendClient, InProcessBackend, RemoteServiceError, attempt_remote
from .scoring import score
from .session_service import SessionService, get_session_service
from .store_service import MemoryStore, MongoStore, get_store
from .streak_service import StreakService
from .word_source import WordList, WordSource

__all__ = [
    'Game', 'HintGenerator', 'get_hint_generator', 'HintService',
    'BackendClient', 'InProcessBackend', 'RemoteServiceError', 'attempt_remote',
    'score', 'SessionService', 'get_session_service',
    'MemoryStore', 'MongoStore', 'get_store', 'StreakService',
    'WordList', 'WordSource'
]

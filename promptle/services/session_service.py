"""
Session Service

Keeps one Game per connected Socket.IO client for games hosted inside the
server process. These games talk to the store and hint generator through
InProcessBackend instead of HTTP.
"""

from typing import Callable, Dict, Optional

from ..config.game_settings import HINT_BUDGET, MAX_ROWS
from .game_service import Game, run_in_background
from .hint_service import HintService
from .local_store import LocalStateStore
from .remote import InProcessBackend
from .streak_service import StreakService
from .word_source import WordList, WordSource


class SessionService:
    """
    Server-hosted game sessions keyed by socket id.

    Identified players share one current-streak store so their streak
    survives reconnects; anonymous players get a store of their own.
    """

    def __init__(self,
                 words: WordList,
                 word_source: WordSource,
                 backend: InProcessBackend,
                 max_rows: int = MAX_ROWS,
                 hint_budget: int = HINT_BUDGET,
                 dispatch: Callable = run_in_background):
        self.words = words
        self.word_source = word_source
        self.backend = backend
        self.max_rows = max_rows
        self.hint_budget = hint_budget
        self.dispatch = dispatch
        self.games: Dict[str, Game] = {}
        self._identified_streaks = LocalStateStore()

    def create_game(self, session_id: str, user_id: Optional[str] = None) -> Game:
        """Creates (or replaces) the game for ``session_id``."""
        local_store = self._identified_streaks if user_id else LocalStateStore()
        streak = StreakService(local_store, remote=self.backend)
        streak.start_session(user_id)

        hints = HintService(self.words, remote=self.backend, budget_size=self.hint_budget)
        game = Game(
            self.words,
            self.word_source,
            streak,
            hints,
            word_saver=self.backend.save_word,
            max_rows=self.max_rows,
            dispatch=self.dispatch
        )
        self.games[session_id] = game
        return game

    def get(self, session_id: str) -> Optional[Game]:
        return self.games.get(session_id)

    def remove(self, session_id: str) -> bool:
        """
        Removes a session's game.

        Returns:
            bool: True if a game was removed, False if none was found
        """
        if session_id in self.games:
            del self.games[session_id]
            return True
        return False


# Global service instance
_session_service = None


def get_session_service() -> Optional[SessionService]:
    """Get the global session service instance."""
    return _session_service


def initialize_session_service(words: WordList,
                               word_source: WordSource,
                               backend: InProcessBackend,
                               max_rows: int = MAX_ROWS,
                               hint_budget: int = HINT_BUDGET,
                               dispatch: Callable = run_in_background) -> SessionService:
    """Initialize the global session service instance."""
    global _session_service
    _session_service = SessionService(words, word_source, backend, max_rows, hint_budget, dispatch)
    return _session_service

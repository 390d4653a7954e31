"""
Game Client

Builds a player-side Game that loads its word list locally, keeps the
current streak in a local state file and talks to a Promptle backend over
HTTP for best streaks, used words and hints.
"""

from typing import Callable, Optional

from .config import Config
from .services.game_service import Game, run_in_background
from .services.hint_service import HintService
from .services.local_store import LocalStateStore
from .services.remote import BackendClient
from .services.streak_service import StreakService
from .services.word_source import WordSource


def create_client_game(config_class=Config, user_id: Optional[str] = None,
                       backend: Optional[BackendClient] = None,
                       local_store: Optional[LocalStateStore] = None,
                       dispatch: Callable = run_in_background) -> Game:
    """
    Wires a Game for one player.

    Args:
        config_class: Configuration class to read settings from
        user_id: Player identity; None plays anonymously without backend sync
        backend: Backend client (built from API_BASE when omitted)
        local_store: Current-streak store (LOCAL_STATE_FILE when omitted)
        dispatch: Runs fire-and-forget backend writes

    Returns:
        Game with its first round already started
    """
    word_source = WordSource(config_class.WORD_LIST_SOURCE, timeout=config_class.REMOTE_TIMEOUT_SECONDS)
    words = word_source.load()

    if backend is None:
        backend = BackendClient(config_class.API_BASE, timeout=config_class.REMOTE_TIMEOUT_SECONDS)
    if local_store is None:
        local_store = LocalStateStore(config_class.LOCAL_STATE_FILE)

    streak = StreakService(local_store, remote=backend)
    streak.start_session(user_id)

    hints = HintService(words, remote=backend, budget_size=config_class.HINT_BUDGET)

    return Game(
        words,
        word_source,
        streak,
        hints,
        word_saver=backend.save_word,
        max_rows=config_class.MAX_ROWS,
        dispatch=dispatch
    )

"""
Remote Backend Access

Everything the game asks of the backend goes through ``attempt_remote``: the
remote operation runs with a bounded wait, its payload is checked, and on any
failure a local substitute runs instead. The remote error is logged and never
reaches the caller.

Two implementations of the backend port exist:
- BackendClient talks HTTP to a Promptle server
- InProcessBackend calls the server's store and hint generator directly, for
  games hosted inside the server process
"""

from typing import Any, Callable, Dict, Optional, TypeVar
from urllib.parse import quote

import requests

from ..utils.game_logger import game_logger

T = TypeVar('T')

HINT_FIELDS = {
    'letters': ('helper_word', 'reveal_letters'),
    'meaning': ('meaning_hint',),
}


class RemoteServiceError(Exception):
    """A remote call answered, but with a non-ok or malformed payload."""


def attempt_remote(operation: Callable[[], T],
                   fallback: Callable[[], T],
                   validate: Optional[Callable[[T], None]] = None,
                   name: str = 'remote_call',
                   user_id: Optional[str] = None,
                   **log_details) -> T:
    """
    Runs ``operation`` and returns its result, or ``fallback()`` if it fails.

    Args:
        operation: Remote call; expected to apply its own timeout
        fallback: Local substitute, run synchronously on failure
        validate: Optional check that raises when the result is unusable
        name: Operation name used in the failure log
        user_id: Player identity for the failure log

    Returns:
        The remote result, or the fallback result
    """
    try:
        result = operation()
        if validate is not None:
            validate(result)
        return result
    except Exception as e:
        game_logger.log_remote_failure(name, e, user_id=user_id, **log_details)
        return fallback()


def _require_fields(data: Dict[str, Any], *fields: str) -> None:
    missing = [name for name in fields if data.get(name) in (None, '')]
    if missing:
        raise RemoteServiceError(f"Response is missing field(s): {', '.join(missing)}")


def _parse_streak(data: Dict[str, Any]) -> int:
    _require_fields(data, 'best_streak')
    value = data['best_streak']
    if isinstance(value, bool):
        raise RemoteServiceError(f"Invalid best_streak {value!r}")
    try:
        best = int(value)
    except (TypeError, ValueError):
        raise RemoteServiceError(f"Invalid best_streak {value!r}")
    if best < 0:
        raise RemoteServiceError(f"Negative best_streak {best}")
    return best


def check_hint_payload(data: Dict[str, Any], kind: str) -> None:
    """Raises RemoteServiceError unless ``data`` is an ok hint payload for ``kind``."""
    if not isinstance(data, dict) or not data.get('ok'):
        raise RemoteServiceError("Hint response was not ok")
    if kind not in HINT_FIELDS:
        raise RemoteServiceError(f"Unknown hint kind {kind!r}")
    _require_fields(data, *HINT_FIELDS[kind])


class BackendClient:
    """
    HTTP client for the Promptle backend.

    Args:
        base_url: Server root, e.g. ``http://127.0.0.1:3001``
        timeout: Seconds to wait for each request
        session: Optional requests session (shared connection pool)
    """

    def __init__(self, base_url: str, timeout: float = 5,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _handle(self, response) -> Dict[str, Any]:
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise RemoteServiceError("Response body is not a JSON object")
        if not data.get('ok'):
            raise RemoteServiceError(data.get('error') or "Response was not ok")
        return data

    def _get(self, path: str) -> Dict[str, Any]:
        response = self.session.get(f"{self.base_url}{path}", timeout=self.timeout)
        return self._handle(response)

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        return self._handle(response)

    def fetch_best_streak(self, user_id: str) -> int:
        data = self._get(f"/api/streak/{quote(user_id, safe='')}")
        return _parse_streak(data)

    def push_best_streak(self, user_id: str, best_streak: int) -> int:
        """Offers a best streak; returns the server's max-merged value."""
        data = self._post('/api/streak', {'user_id': user_id, 'best_streak': best_streak})
        return _parse_streak(data)

    def save_word(self, user_id: str, word: str) -> None:
        self._post('/api/words', {'user_id': user_id, 'word': word})

    def fetch_hint(self, secret: str, kind: str) -> Dict[str, Any]:
        data = self._post('/api/hint', {'secret': secret, 'kind': kind})
        check_hint_payload(data, kind)
        return data


class InProcessBackend:
    """
    Backend port served from inside the server process.

    Args:
        store: Streak and used-word store (see store_service)
        hint_generator: Server-side hint generator (see hint_generator)
    """

    def __init__(self, store, hint_generator):
        self.store = store
        self.hint_generator = hint_generator

    def fetch_best_streak(self, user_id: str) -> int:
        return self.store.get_best_streak(user_id)

    def push_best_streak(self, user_id: str, best_streak: int) -> int:
        return self.store.merge_best_streak(user_id, best_streak)

    def save_word(self, user_id: str, word: str) -> None:
        self.store.save_used_word(user_id, word)

    def fetch_hint(self, secret: str, kind: str) -> Dict[str, Any]:
        data = self.hint_generator.generate(secret, kind)
        check_hint_payload(data, kind)
        return data

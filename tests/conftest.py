import os
import random
import tempfile

# Keep test log files out of the working tree; must run before promptle is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='promptle-logs-'))

import pytest
import requests

from promptle.services.game_service import Game
from promptle.services.hint_service import HintService
from promptle.services.local_store import LocalStateStore
from promptle.services.remote import RemoteServiceError, check_hint_payload
from promptle.services.streak_service import StreakService
from promptle.services.word_source import WordList, WordSource

WORDS = [
    "APPLE", "BRICK", "CHAIR", "DREAM", "EAGLE", "CRANE", "CRATE", "TRACE",
    "REACT", "SPEED", "ERASE", "LEVEL", "BELLE", "THEME", "EERIE", "STAIR",
]


def run_now(task, *args):
    task(*args)


def type_word(game, word):
    for letter in word:
        game.on_letter(letter)


class FixedWordSource(WordSource):
    """Hands out the given secrets in order, repeating the last one."""

    def __init__(self, *secrets):
        super().__init__()
        self.secrets = list(secrets)

    def pick_secret(self, words):
        if not words:
            return None
        if len(self.secrets) > 1:
            return self.secrets.pop(0)
        return self.secrets[0]


class FakeBackend:
    """In-memory stand-in for the backend port with switchable failures."""

    def __init__(self, best_streaks=None):
        self.best_streaks = dict(best_streaks or {})
        self.saved_words = []
        self.hint_payloads = {}
        self.calls = []
        self.fail_fetch = False
        self.fail_push = False
        self.fail_save = False
        self.fail_hint = False
        self.push_override = None
        self.on_fetch_hint = None

    def fetch_best_streak(self, user_id):
        self.calls.append(('fetch_best_streak', user_id))
        if self.fail_fetch:
            raise ConnectionError("backend offline")
        return self.best_streaks.get(user_id, 0)

    def push_best_streak(self, user_id, best_streak):
        self.calls.append(('push_best_streak', user_id, best_streak))
        if self.fail_push:
            raise ConnectionError("backend offline")
        if self.push_override is not None:
            return self.push_override
        merged = max(self.best_streaks.get(user_id, 0), best_streak)
        self.best_streaks[user_id] = merged
        return merged

    def save_word(self, user_id, word):
        self.calls.append(('save_word', user_id, word))
        if self.fail_save:
            raise ConnectionError("backend offline")
        self.saved_words.append((user_id, word))

    def fetch_hint(self, secret, kind):
        self.calls.append(('fetch_hint', secret, kind))
        if self.on_fetch_hint is not None:
            self.on_fetch_hint()
        if self.fail_hint:
            raise ConnectionError("backend offline")
        payload = self.hint_payloads.get(kind)
        if payload is None:
            raise RemoteServiceError("no hint")
        check_hint_payload(payload, kind)
        return payload

    def count(self, name):
        return len([call for call in self.calls if call[0] == name])


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=''):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Records requests and replays queued responses (or raises queued errors)."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def _next(self):
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, **kwargs):
        self.requests.append(('GET', url, kwargs))
        return self._next()

    def post(self, url, **kwargs):
        self.requests.append(('POST', url, kwargs))
        return self._next()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def make_game():
    """Factory building a Game with fixed secrets and synchronous dispatch."""
    def _make(*secrets, words=WORDS, backend=None, user_id=None, max_rows=6,
              hint_budget=3, store=None):
        word_list = WordList(words)
        streak = StreakService(store if store is not None else LocalStateStore(), remote=backend)
        streak.start_session(user_id)
        hints = HintService(word_list, remote=backend, budget_size=hint_budget, rng=random.Random(7))
        return Game(
            word_list,
            FixedWordSource(*(secrets or ("CRANE",))),
            streak,
            hints,
            word_saver=backend.save_word if backend else None,
            max_rows=max_rows,
            dispatch=run_now
        )
    return _make

"""
Hint Service

Serves a limited number of hints per round. Hints come from the backend
when it answers with a usable payload and are synthesized locally otherwise.
Either way exactly one unit of the round's budget is spent per request.
"""

import random
from typing import Any, Dict, Optional

from ..config.game_settings import (
    HINT_BUDGET, HINT_KINDS, HINT_TOPICS, REVEAL_PLACEHOLDER, reveal_count
)
from ..models.game import Round
from ..models.hint import Hint, HintBudget
from ..utils.game_logger import game_logger
from .remote import RemoteServiceError, attempt_remote
from .word_source import WordList


def build_reveal_pattern(secret: str, rng: random.Random) -> str:
    """Shows the letters at a random subset of positions, placeholders elsewhere."""
    size = min(reveal_count(len(secret)), len(secret))
    positions = set(rng.sample(range(len(secret)), size))
    return ''.join(letter if i in positions else REVEAL_PLACEHOLDER for i, letter in enumerate(secret))


def pick_helper_word(secret: str, words: WordList, rng: random.Random) -> Optional[str]:
    """
    Picks an equal-length word sharing at least two distinct letters with the
    secret, or any other equal-length word when none does.
    """
    candidates = [word for word in words.of_length(len(secret)) if word != secret]
    secret_letters = set(secret)
    sharing = [word for word in candidates if len(secret_letters & set(word)) >= 2]
    pool = sharing or candidates
    return rng.choice(pool) if pool else None


def letters_hint_text(helper_word: Optional[str], reveal_letters: str) -> str:
    if helper_word:
        return f"Try a word like {helper_word}. Revealed letters: {reveal_letters}"
    return f"Revealed letters: {reveal_letters}"


class HintService:
    """
    Hint subsystem for one player.

    Args:
        words: Word list used for offline helper words
        remote: Backend port with fetch_hint, or None to always hint offline
        budget_size: Hints allowed per round
        rng: Random generator for offline hints
    """

    def __init__(self, words: WordList, remote=None, budget_size: int = HINT_BUDGET,
                 rng: Optional[random.Random] = None):
        self.words = words
        self.remote = remote
        self.budget_size = budget_size
        self.rng = rng or random.Random()
        self.budget = HintBudget.fresh(None, budget_size)
        self.last_hint: Optional[Hint] = None

    @property
    def remaining(self) -> int:
        return self.budget.remaining

    def reset(self, round_id: Optional[str]) -> None:
        """Starts a fresh budget for a new round."""
        self.budget = HintBudget.fresh(round_id, self.budget_size)
        self.last_hint = None

    def request_hint(self, round_: Round, kind: str) -> Optional[str]:
        """
        Spends one hint on ``round_`` and returns its text.

        Returns None without spending anything when the budget is exhausted,
        the round is locked or the budget belongs to another round. Also
        returns None when a new round started while the hint was being
        fetched; that hint is discarded.
        """
        if kind not in HINT_KINDS:
            raise ValueError(f"Unknown hint kind {kind!r}; expected one of {HINT_KINDS}")

        budget = self.budget
        if round_.locked or budget.round_id != round_.round_id or budget.remaining <= 0:
            return None

        budget.remaining -= 1
        secret = round_.secret

        if self.remote is None:
            hint = self._local_hint(secret, kind)
        else:
            hint = attempt_remote(
                lambda: self._remote_hint(secret, kind),
                fallback=lambda: self._local_hint(secret, kind),
                name='fetch_hint',
                round_id=round_.round_id,
                kind=kind
            )

        if self.budget is not budget:
            game_logger.logger.info(f"Discarding {kind} hint for finished round {round_.round_id}")
            return None

        self.last_hint = hint
        game_logger.log_game_event(round_.round_id, 'hint_served', None,
                                   kind=kind, source=hint.source, remaining=budget.remaining)
        return hint.text

    def _remote_hint(self, secret: str, kind: str) -> Hint:
        data: Dict[str, Any] = self.remote.fetch_hint(secret, kind)

        if kind == 'letters':
            helper_word = str(data['helper_word']).strip().upper()
            reveal_letters = str(data['reveal_letters']).strip().upper()
            if len(helper_word) != len(secret) or not helper_word.isalpha() or helper_word == secret:
                raise RemoteServiceError(f"Unusable helper word {helper_word!r}")
            if len(reveal_letters) != len(secret):
                raise RemoteServiceError(f"Reveal pattern {reveal_letters!r} does not match word length")
            revealed = [i for i, char in enumerate(reveal_letters) if char != REVEAL_PLACEHOLDER]
            if any(reveal_letters[i] != secret[i] for i in revealed):
                raise RemoteServiceError(f"Reveal pattern {reveal_letters!r} does not match the secret")
            if len(revealed) != min(reveal_count(len(secret)), len(secret)):
                raise RemoteServiceError(f"Reveal pattern {reveal_letters!r} reveals {len(revealed)} letters")
            return Hint(kind=kind, text=letters_hint_text(helper_word, reveal_letters), source='remote',
                        helper_word=helper_word, reveal_letters=reveal_letters)

        meaning_hint = str(data['meaning_hint']).strip()
        if secret.lower() in meaning_hint.lower():
            raise RemoteServiceError("Meaning hint gives the answer away")
        return Hint(kind=kind, text=meaning_hint, source='remote', meaning_hint=meaning_hint)

    def _local_hint(self, secret: str, kind: str) -> Hint:
        if kind == 'letters':
            helper_word = pick_helper_word(secret, self.words, self.rng)
            reveal_letters = build_reveal_pattern(secret, self.rng)
            return Hint(kind=kind, text=letters_hint_text(helper_word, reveal_letters), source='local',
                        helper_word=helper_word, reveal_letters=reveal_letters)

        topic = self.rng.choice(HINT_TOPICS)
        meaning_hint = f"Think about {topic}: the answer is a {len(secret)}-letter word."
        return Hint(kind=kind, text=meaning_hint, source='local', meaning_hint=meaning_hint)

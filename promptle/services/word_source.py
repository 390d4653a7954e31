"""
Word Source

Loads the list of valid words and picks the secret for each round. A list
that cannot be read is replaced by a small built-in fallback so the game
stays playable.
"""

import random
from typing import Iterable, Iterator, List, Optional, Sequence

import requests

from ..config.game_settings import DEFAULT_WORD_FILE, FALLBACK_WORDS, validate_word_list_integrity
from ..utils.game_logger import game_logger


def parse_words(text: str) -> List[str]:
    """Split a one-word-per-line resource into trimmed uppercase words."""
    return [line.strip().upper() for line in text.splitlines() if line.strip()]


class WordList:
    """
    Immutable, ordered list of uppercase words with case-insensitive membership.

    Duplicates are kept as loaded.
    """

    def __init__(self, words: Iterable[str]):
        self.words = tuple(word.strip().upper() for word in words)
        self._members = frozenset(self.words)

    def __contains__(self, word) -> bool:
        return isinstance(word, str) and word.strip().upper() in self._members

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def __bool__(self) -> bool:
        return bool(self.words)

    def of_length(self, length: int) -> List[str]:
        return [word for word in self.words if len(word) == length]


class WordSource:
    """
    Supplies the word list from a file path or an http(s) URL.

    Args:
        source: Path or URL of the word resource; defaults to the bundled list
        fallback: Words substituted when the resource cannot be loaded
        timeout: Seconds to wait for a remote word list
        rng: Random generator used to pick secrets
    """

    def __init__(self,
                 source: Optional[str] = None,
                 fallback: Sequence[str] = FALLBACK_WORDS,
                 timeout: float = 5,
                 session: Optional[requests.Session] = None,
                 rng: Optional[random.Random] = None):
        self.source = source or DEFAULT_WORD_FILE
        self.fallback = tuple(fallback)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.rng = rng or random.Random()

    def _read(self) -> str:
        if self.source.startswith(('http://', 'https://')):
            response = self.session.get(self.source, timeout=self.timeout)
            response.raise_for_status()
            return response.text

        with open(self.source, 'r', encoding='utf-8') as f:
            return f.read()

    def load(self) -> WordList:
        """
        Loads the word list, substituting the fallback list on any failure.

        Returns:
            WordList: Loaded words, or the fallback words if loading failed
        """
        try:
            words = parse_words(self._read())
            for problem in validate_word_list_integrity(words):
                game_logger.logger.warning(f"Word list {self.source}: {problem}")
            # Only letters can be typed, so any other entry could never be guessed
            words = [word for word in words if word.isalpha()]
            if not words:
                raise ValueError(f"Word list at {self.source} is empty")
            game_logger.logger.info(f"Loaded {len(words)} words from {self.source}")
            return WordList(words)
        except Exception as e:
            game_logger.log_remote_failure('load_word_list', e, source=self.source,
                                           fallback_size=len(self.fallback))
            return WordList(self.fallback)

    def pick_secret(self, words: WordList) -> Optional[str]:
        """Uniformly picks an uppercase secret, or None if the list is empty."""
        if not words:
            return None
        return self.rng.choice(words.words).upper()

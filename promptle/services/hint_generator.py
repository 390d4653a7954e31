"""
Hint Generator

Server-side hint synthesis backed by an OpenAI-compatible chat completions
endpoint. The model proposes a helper word or a one-sentence clue; the reply
is checked before it is handed to a player. The reveal pattern for letter
hints is built here rather than trusted to the model.
"""

import json
import random
import re
from typing import Any, Dict, Optional

import requests

from ..config.game_settings import HINT_KINDS
from .hint_service import build_reveal_pattern

SYSTEM_PROMPT = (
    "You write hints for a word-guessing game. "
    "Answer with a single JSON object and nothing else."
)

LETTERS_PROMPT = (
    "The secret word is {secret} ({length} letters). Suggest one real English "
    "word with exactly {length} letters that is not {secret} but shares several "
    "letters with it. Reply as {{\"helper_word\": \"...\"}}."
)

MEANING_PROMPT = (
    "The secret word is {secret}. Write a one-sentence, definition-style clue "
    "for it. Do not use the word itself, do not rhyme with it and do not mention "
    "its letters or spelling. Reply as {{\"meaning_hint\": \"...\"}}."
)

SPELLING_LEAKS = ('spell', 'starts with', 'begins with', 'ends with', 'letter')


class HintGenerationError(Exception):
    """Hint generation is unavailable or produced an unusable hint."""


def _sentence_count(text: str) -> int:
    return len([part for part in re.split(r'[.!?]+\s+', text.strip()) if part])


def check_meaning_hint(secret: str, clue: str) -> None:
    """Raises HintGenerationError if ``clue`` gives the secret away."""
    lowered = clue.lower()
    word = secret.lower()

    if not clue:
        raise HintGenerationError("Empty meaning hint")
    if word in lowered:
        raise HintGenerationError("Meaning hint contains the secret word")
    if _sentence_count(clue) > 1:
        raise HintGenerationError("Meaning hint is longer than one sentence")
    if any(phrase in lowered for phrase in SPELLING_LEAKS) or '-'.join(word) in lowered:
        raise HintGenerationError("Meaning hint talks about spelling")

    # Same length and same ending reads as a rhyme
    for token in re.findall(r'[a-z]+', lowered):
        if len(token) == len(word) and len(word) >= 3 and token[-3:] == word[-3:]:
            raise HintGenerationError(f"Meaning hint rhymes with the secret ({token})")


class HintGenerator:
    """
    Produces hint payloads in the backend's wire format.

    Args:
        api_url: Chat completions endpoint
        api_key: Bearer token; generation is disabled without one
        model: Model name sent with each request
        timeout: Seconds to wait for the model
    """

    def __init__(self, api_url: str, api_key: Optional[str], model: str, timeout: float = 8,
                 session: Optional[requests.Session] = None, rng: Optional[random.Random] = None):
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()
        self.rng = rng or random.Random()

    @property
    def configured(self) -> bool:
        return bool(self.api_url and self.api_key)

    def generate(self, secret: str, kind: str) -> Dict[str, Any]:
        """
        Generates a hint for ``secret``.

        Returns:
            {'ok': True, 'helper_word', 'reveal_letters'} for letter hints,
            {'ok': True, 'meaning_hint'} for meaning hints

        Raises:
            HintGenerationError: Not configured, model failure or unusable reply
        """
        secret = (secret or '').strip().upper()
        if kind not in HINT_KINDS:
            raise HintGenerationError(f"Unknown hint kind {kind!r}")
        if not secret.isalpha():
            raise HintGenerationError("Secret must be alphabetic")
        if not self.configured:
            raise HintGenerationError("Hint generation is not configured")

        if kind == 'letters':
            reply = self._complete(LETTERS_PROMPT.format(secret=secret, length=len(secret)))
            helper_word = str(reply.get('helper_word') or '').strip().upper()
            if len(helper_word) != len(secret) or not helper_word.isalpha() or helper_word == secret:
                raise HintGenerationError(f"Unusable helper word {helper_word!r}")
            return {
                'ok': True,
                'helper_word': helper_word,
                'reveal_letters': build_reveal_pattern(secret, self.rng)
            }

        reply = self._complete(MEANING_PROMPT.format(secret=secret))
        meaning_hint = str(reply.get('meaning_hint') or '').strip()
        check_meaning_hint(secret, meaning_hint)
        return {'ok': True, 'meaning_hint': meaning_hint}

    def _complete(self, prompt: str) -> Dict[str, Any]:
        payload = {
            'model': self.model,
            'messages': [
                {'role': 'system', 'content': SYSTEM_PROMPT},
                {'role': 'user', 'content': prompt}
            ],
            'temperature': 0.7,
            'response_format': {'type': 'json_object'}
        }
        headers = {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json'
        }

        try:
            response = self.session.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            content = response.json()['choices'][0]['message']['content']
            reply = json.loads(content)
        except (requests.RequestException, KeyError, IndexError, TypeError, ValueError) as e:
            raise HintGenerationError(f"Hint model request failed: {e}") from e

        if not isinstance(reply, dict):
            raise HintGenerationError("Hint model reply is not a JSON object")
        return reply


# Global generator instance
_hint_generator = None


def get_hint_generator() -> Optional[HintGenerator]:
    """Get the global hint generator instance."""
    return _hint_generator


def initialize_hint_generator(api_url: str, api_key: Optional[str], model: str,
                              timeout: float = 8) -> HintGenerator:
    """Initialize the global hint generator instance."""
    global _hint_generator
    _hint_generator = HintGenerator(api_url, api_key, model, timeout)
    return _hint_generator

"""
Hint Data Models
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class HintBudget:
    """Hints left for the round identified by ``round_id``."""
    round_id: Optional[str]
    initial: int
    remaining: int

    @classmethod
    def fresh(cls, round_id: Optional[str], initial: int) -> "HintBudget":
        return cls(round_id=round_id, initial=initial, remaining=initial)


@dataclass
class Hint:
    """A hint served to the player."""
    kind: str          # "letters" or "meaning"
    text: str
    source: str        # "remote" or "local"
    helper_word: Optional[str] = None
    reveal_letters: Optional[str] = None
    meaning_hint: Optional[str] = None

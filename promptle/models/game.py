"""
Game Data Models

Contains all round-related data structures and enums.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Verdict(Enum):
    """Per-letter outcome of a guess compared with the secret."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


class RoundPhase(Enum):
    """Where the round state machine currently is."""
    FILLING = "filling"
    SUBMITTING = "submitting"
    WON = "won"
    LOST = "lost"


class SubmitOutcome(Enum):
    """Result of pressing enter on the current row."""
    IGNORED = "ignored"                  # round already locked
    NOT_ENOUGH_LETTERS = "not_enough_letters"
    NOT_IN_WORD_LIST = "not_in_word_list"
    ACCEPTED = "accepted"
    WON = "won"
    LOST = "lost"


@dataclass
class Round:
    """
    One play-through from secret selection to win or loss.

    ``guesses`` and ``results`` are ``max_rows x word_length`` grids. Blank
    cells hold ``""`` and unscored cells hold ``None``.
    """
    secret: str
    max_rows: int
    word_length: int
    guesses: List[List[str]]
    results: List[List[Optional[Verdict]]]
    current_row: int = 0
    current_col: int = 0
    locked: bool = False
    phase: RoundPhase = RoundPhase.FILLING
    round_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def start(cls, secret: str, max_rows: int) -> "Round":
        word_length = len(secret)
        return cls(
            secret=secret,
            max_rows=max_rows,
            word_length=word_length,
            guesses=[[""] * word_length for _ in range(max_rows)],
            results=[[None] * word_length for _ in range(max_rows)],
        )

    @classmethod
    def empty(cls, max_rows: int) -> "Round":
        """A locked round with no secret, used when no words could be loaded."""
        round_ = cls.start("", max_rows)
        round_.locked = True
        return round_

    def current_guess(self) -> str:
        return "".join(self.guesses[self.current_row])

    def row_is_complete(self) -> bool:
        return all(self.guesses[self.current_row])

    def is_over(self) -> bool:
        return self.phase in (RoundPhase.WON, RoundPhase.LOST)


@dataclass
class GameState:
    """Serializable snapshot of a game handed to renderers."""
    round_id: str
    phase: str
    max_rows: int
    word_length: int
    current_row: int
    current_col: int
    locked: bool
    guesses: List[List[str]]
    results: List[List[Optional[str]]]
    key_states: Dict[str, str]
    status: str
    status_persist: bool
    hints_remaining: int
    current_streak: int
    best_streak: int
    answer: Optional[str] = None  # Only included when the round is over

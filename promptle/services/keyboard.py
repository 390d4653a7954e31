"""
Keyboard State Aggregator

Tracks the best verdict seen for each letter across a round.
"""

from typing import Dict, Sequence

from ..models.game import Verdict

# Higher wins; a letter never moves to a lower rank
VERDICT_RANK = {
    Verdict.ABSENT: 0,
    Verdict.PRESENT: 1,
    Verdict.CORRECT: 2,
}


def update_key_states(key_states: Dict[str, Verdict], guess: str, verdicts: Sequence[Verdict]) -> None:
    """
    Updates letter status tracking based on a freshly scored guess.

    Status can only progress in priority order correct > present > absent.
    """
    for letter, new_status in zip(guess, verdicts):
        current_status = key_states.get(letter)
        if current_status is None or VERDICT_RANK[new_status] > VERDICT_RANK[current_status]:
            key_states[letter] = new_status

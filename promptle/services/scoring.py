"""
Scoring Engine

Implements the Wordle letter evaluation algorithm with correct handling of
duplicate letters.
"""

from collections import Counter
from typing import List, Optional

from ..models.game import Verdict


def score(guess: str, secret: str) -> List[Verdict]:
    """
    Scores ``guess`` against ``secret`` one verdict per position.

    Exact matches claim their letters first, then the remaining positions are
    matched left to right against whatever letters are left. A letter is never
    marked correct or present more times than it occurs in the secret.

    Args:
        guess: Uppercase guess, same length as the secret
        secret: Uppercase secret word

    Returns:
        List[Verdict]: One verdict per letter of the guess
    """
    assert len(guess) == len(secret), f"guess {guess!r} and secret {secret!r} differ in length"

    remaining = Counter(secret)
    result: List[Optional[Verdict]] = [None] * len(secret)

    # First pass: exact positions
    for i, (g, s) in enumerate(zip(guess, secret)):
        if g == s:
            result[i] = Verdict.CORRECT
            remaining[g] -= 1

    # Second pass: leftover letters, left to right
    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        if remaining[letter] > 0:
            result[i] = Verdict.PRESENT
            remaining[letter] -= 1
        else:
            result[i] = Verdict.ABSENT

    return result  # type: ignore[return-value]

"""
Game Configuration Constants Module

This module defines all game configuration constants. All game parameters
are centralized here to enable easy modification.
"""

import os
from typing import Dict, Final, List, Sequence, Tuple

# Core Game Configuration Constants
MAX_ROWS: Final[int] = 6
"""
Maximum number of guess rows allowed per round.
Type: Final[int] - Immutable to prevent accidental modification
"""

HINT_BUDGET: Final[int] = 3
"""Number of hints a player may request per round."""

STATUS_CLEAR_SECONDS: Final[float] = 1.6
"""How long a transient status message stays visible before renderers clear it."""

CURRENT_STREAK_KEY: Final[str] = "promptle_current_streak"
"""Local storage key for the current streak; suffixed with the user id when known."""

DEFAULT_WORD_FILE: Final[str] = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), 'words.txt'
)

# Substituted whenever the word list resource cannot be read
FALLBACK_WORDS: Final[Tuple[str, ...]] = ("APPLE", "BRICK", "CHAIR", "DREAM", "EAGLE")

HINT_KINDS: Final[Tuple[str, ...]] = ("letters", "meaning")

# Topics used by the offline meaning clue
HINT_TOPICS: Final[Tuple[str, ...]] = (
    "everyday life",
    "nature",
    "food and cooking",
    "people and feelings",
    "places and travel",
    "science",
)

REVEAL_PLACEHOLDER: Final[str] = "_"


def reveal_count(word_length: int) -> int:
    """Number of letters a letter hint reveals for a word of the given length."""
    return 2 if word_length < 6 else 3


def validate_word_list_integrity(words: Sequence[str]) -> List[str]:
    """
    Checks a loaded word list for entries the game cannot use.

    Duplicates are allowed. Problems are reported, not raised, so a partially
    bad list still loads.

    Returns:
        List[str]: Human readable problem descriptions (empty when clean)
    """
    problems = []
    if not words:
        problems.append("Word list is empty")

    for index, word in enumerate(words):
        if not word.isalpha():
            problems.append(f"Word at index {index} '{word}' contains non-alphabetic characters")
        elif not word.isupper():
            problems.append(f"Word at index {index} '{word}' is not in uppercase format")

    return problems


def get_word_statistics(words: Sequence[str]) -> Dict:
    """
    Analyzes a word list and returns statistical information.

    Returns:
        dict: Statistical analysis including:
            - total_words: Number of words in the list
            - word_lengths: Count of words per length
            - avg_vowel_count: Average vowels per word
            - most_common_letters: Top five letters by frequency
    """
    if not words:
        return {"error": "Word list is empty"}

    vowels = set('AEIOU')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in words)

    word_lengths: Dict[int, int] = {}
    letter_frequency: Dict[str, int] = {}
    for word in words:
        word_lengths[len(word)] = word_lengths.get(len(word), 0) + 1
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(words),
        "word_lengths": word_lengths,
        "avg_vowel_count": round(total_vowels / len(words), 2),
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }

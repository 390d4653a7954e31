"""
Player Data Models

Contains per-player data structures that outlive a single round.
"""

from dataclasses import dataclass


@dataclass
class StreakRecord:
    """Win streak counters for one identity (or the anonymous player)."""
    current_streak: int = 0
    best_streak: int = 0

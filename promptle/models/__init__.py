"""
Data Models Package

Contains all data models used throughout the application.
"""

from .game import GameState, Round, RoundPhase, SubmitOutcome, Verdict
from .hint import Hint, HintBudget
from .player import StreakRecord

__all__ = [
    'GameState', 'Round', 'RoundPhase', 'SubmitOutcome', 'Verdict',
    'Hint', 'HintBudget', 'StreakRecord'
]

"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application and client configuration (environment-based)
- game_settings.py: Game rules and constants (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    MAX_ROWS, HINT_BUDGET, FALLBACK_WORDS, HINT_KINDS, HINT_TOPICS,
    validate_word_list_integrity, get_word_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'MAX_ROWS', 'HINT_BUDGET', 'FALLBACK_WORDS', 'HINT_KINDS', 'HINT_TOPICS',
    'validate_word_list_integrity', 'get_word_statistics'
]

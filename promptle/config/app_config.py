"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 3001))

    # Database Settings
    MONGO_URI = os.getenv('MONGO_URI')

    # Remote backend used by the game client
    API_BASE = os.getenv('API_BASE', 'http://127.0.0.1:3001')
    REMOTE_TIMEOUT_SECONDS = float(os.getenv('REMOTE_TIMEOUT_SECONDS', 5))

    # Word list source: file path or http(s) URL, one word per line
    WORD_LIST_SOURCE = os.getenv('WORD_LIST_SOURCE')

    # Client-side persisted state (current streak)
    LOCAL_STATE_FILE = os.getenv('LOCAL_STATE_FILE', os.path.join('~', '.promptle', 'state.json'))

    # Hint generation (OpenAI-compatible chat completions endpoint)
    HINT_API_URL = os.getenv('HINT_API_URL', 'https://api.openai.com/v1/chat/completions')
    HINT_API_KEY = os.getenv('HINT_API_KEY')
    HINT_MODEL = os.getenv('HINT_MODEL', 'gpt-4o-mini')
    HINT_TIMEOUT_SECONDS = float(os.getenv('HINT_TIMEOUT_SECONDS', 8))

    # Game Settings
    MAX_ROWS = int(os.getenv('MAX_ROWS', 6))
    HINT_BUDGET = int(os.getenv('HINT_BUDGET', 3))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    MONGO_URI = None
    HINT_API_KEY = None


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}

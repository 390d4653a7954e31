"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_json_fields, websocket_game_required
from .helpers import get_user_identity, normalize_user_id
from .game_logger import game_logger

__all__ = [
    'require_json_fields', 'websocket_game_required',
    'get_user_identity', 'normalize_user_id', 'game_logger'
]

"""
Local State Store

Persists the current win streak on the player's side, keyed by identity or a
global anonymous key. Backed by a JSON file, or by memory when no path is
given (server-hosted sessions and tests).
"""

import json
import os
import tempfile
from typing import Dict, Optional

from ..config.game_settings import CURRENT_STREAK_KEY
from ..utils.game_logger import game_logger


def streak_key(user_id: Optional[str]) -> str:
    return f"{CURRENT_STREAK_KEY}_{user_id}" if user_id else CURRENT_STREAK_KEY


class LocalStateStore:
    """Key/value store holding one integer per streak key."""

    def __init__(self, path: Optional[str] = None):
        self.path = os.path.expanduser(path) if path else None
        self._values: Dict[str, int] = self._read()

    def _read(self) -> Dict[str, int]:
        if not self.path or not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return data if isinstance(data, dict) else {}
        except (OSError, ValueError) as e:
            game_logger.logger.warning(f"Ignoring unreadable local state file {self.path}: {e}")
            return {}

    def _write(self) -> None:
        if not self.path:
            return
        directory = os.path.dirname(self.path) or '.'
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            # The target is only ever replaced by a complete file
            with tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=directory,
                                             suffix='.tmp', delete=False) as f:
                tmp_path = f.name
                json.dump(self._values, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            game_logger.logger.error(f"Failed to write local state file {self.path}: {e}")

    def load_current_streak(self, user_id: Optional[str]) -> int:
        raw = self._values.get(streak_key(user_id))
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return 0
        return max(value, 0)

    def save_current_streak(self, user_id: Optional[str], value: int) -> None:
        self._values[streak_key(user_id)] = int(value)
        self._write()

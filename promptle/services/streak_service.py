"""
Streak Service

Tracks the current and best win streak. The current streak lives in the local
store; the best streak is owned by the backend when the player has an
identity and is purely local otherwise. Backend failures never block play:
the last known local values stay on display.
"""

from typing import Optional

from ..models.player import StreakRecord
from ..utils.game_logger import game_logger
from ..utils.helpers import normalize_user_id
from .local_store import LocalStateStore
from .remote import RemoteServiceError, attempt_remote


class StreakService:
    """
    Streak subsystem for one player.

    Args:
        local_store: Where the current streak is persisted
        remote: Backend port with fetch_best_streak/push_best_streak, or None
    """

    def __init__(self, local_store: LocalStateStore, remote=None):
        self.local_store = local_store
        self.remote = remote
        self.user_id: Optional[str] = None
        self.record = StreakRecord()

    @property
    def synced(self) -> bool:
        return self.user_id is not None and self.remote is not None

    def start_session(self, user_id: Optional[str] = None) -> StreakRecord:
        """
        Loads the local current streak and reconciles the best streak with the
        backend when an identity is available.
        """
        self.user_id = normalize_user_id(user_id)
        self.record.current_streak = self.local_store.load_current_streak(self.user_id)

        if not self.synced:
            self.record.best_streak = max(self.record.best_streak, self.record.current_streak)
            return self.record

        remote_best = attempt_remote(
            lambda: self.remote.fetch_best_streak(self.user_id),
            fallback=lambda: None,
            name='fetch_best_streak',
            user_id=self.user_id
        )
        if remote_best is None:
            self.record.best_streak = max(self.record.best_streak, self.record.current_streak)
            return self.record

        self.record.best_streak = remote_best
        if self.record.current_streak > remote_best:
            # Played offline past the stored best; push the higher value now
            self.record.best_streak = self.record.current_streak
            self._sync_best_streak()

        return self.record

    def on_win(self) -> StreakRecord:
        self.record.current_streak += 1
        self.local_store.save_current_streak(self.user_id, self.record.current_streak)

        if self.record.current_streak > self.record.best_streak:
            self.record.best_streak = self.record.current_streak
            self._sync_best_streak()

        return self.record

    def on_loss(self) -> StreakRecord:
        self.record.current_streak = 0
        self.local_store.save_current_streak(self.user_id, self.record.current_streak)
        return self.record

    def _sync_best_streak(self) -> None:
        """Pushes the local best streak and adopts the backend's merged value."""
        if not self.synced:
            return

        candidate = self.record.best_streak

        def check_merged(merged: int) -> None:
            if merged < candidate:
                raise RemoteServiceError(f"Merged best streak {merged} is below offered {candidate}")

        merged = attempt_remote(
            lambda: self.remote.push_best_streak(self.user_id, candidate),
            fallback=lambda: None,
            validate=check_merged,
            name='push_best_streak',
            user_id=self.user_id,
            candidate=candidate
        )
        if merged is None:
            return

        # A newer local win may have raised the best while the call was in flight
        self.record.best_streak = max(merged, self.record.best_streak)
        game_logger.log_game_event(None, 'streak_synced', self.user_id,
                                   offered=candidate, best_streak=self.record.best_streak)

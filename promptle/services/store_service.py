"""
Store Service

Backend persistence for best streaks and used words. MongoDB is used when a
connection string is configured; otherwise an in-memory store with the same
interface keeps the server usable for development and tests.
"""

import datetime
import threading
from typing import Dict, List, Optional

from pymongo import ReturnDocument
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..utils.game_logger import game_logger


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class MemoryStore:
    """Process-local store, lost on restart."""

    backend = 'memory'

    def __init__(self):
        self._best_streaks: Dict[str, int] = {}
        self._used_words: List[Dict] = []
        self._lock = threading.Lock()

    def get_best_streak(self, user_id: str) -> int:
        with self._lock:
            return self._best_streaks.get(user_id, 0)

    def merge_best_streak(self, user_id: str, candidate: int) -> int:
        """Keeps the larger of the stored and offered best streak and returns it."""
        with self._lock:
            merged = max(self._best_streaks.get(user_id, 0), candidate)
            self._best_streaks[user_id] = merged
            return merged

    def save_used_word(self, user_id: str, word: str) -> None:
        with self._lock:
            self._used_words.append({'user_id': user_id, 'word': word, 'used_at': _utcnow()})

    def used_words(self, user_id: str) -> List[str]:
        with self._lock:
            return [entry['word'] for entry in self._used_words if entry['user_id'] == user_id]


class MongoStore:
    """
    MongoDB-backed store.

    Collections:
        streaks: one document per user_id holding best_streak
        used_words: one document per accepted guess
    """

    backend = 'mongodb'

    def __init__(self, mongo_uri: str, client: Optional[MongoClient] = None):
        """
        Initialize the store with a MongoDB connection.

        Args:
            mongo_uri: MongoDB connection string
            client: Pre-built client (used by tests)
        """
        self.client = client or MongoClient(mongo_uri, server_api=ServerApi('1'))
        self.db = self.client.promptle
        self.streaks_collection = self.db.streaks
        self.used_words_collection = self.db.used_words

        # Test connection
        try:
            self.client.admin.command('ping')
            game_logger.logger.info("Successfully connected to MongoDB")
        except Exception as e:
            game_logger.logger.error(f"MongoDB connection error: {e}")
            raise

        self.streaks_collection.create_index("user_id", unique=True)
        self.used_words_collection.create_index([("user_id", 1), ("used_at", 1)])

    def get_best_streak(self, user_id: str) -> int:
        doc = self.streaks_collection.find_one({"user_id": user_id})
        return int(doc.get("best_streak", 0)) if doc else 0

    def merge_best_streak(self, user_id: str, candidate: int) -> int:
        """Atomically keeps the larger best streak and returns the stored value."""
        now = _utcnow()
        doc = self.streaks_collection.find_one_and_update(
            {"user_id": user_id},
            {
                "$max": {"best_streak": candidate},
                "$set": {"updated_at": now},
                "$setOnInsert": {"created_at": now}
            },
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return int(doc.get("best_streak", candidate))

    def save_used_word(self, user_id: str, word: str) -> None:
        self.used_words_collection.insert_one({
            "user_id": user_id,
            "word": word,
            "used_at": _utcnow()
        })

    def used_words(self, user_id: str) -> List[str]:
        cursor = self.used_words_collection.find({"user_id": user_id}).sort("used_at", 1)
        return [doc["word"] for doc in cursor]


# Global store instance
_store = None


def get_store():
    """Get the global store instance."""
    return _store


def initialize_store(mongo_uri: Optional[str] = None):
    """Initialize the global store: MongoDB when configured, memory otherwise."""
    global _store
    if mongo_uri:
        _store = MongoStore(mongo_uri)
    else:
        game_logger.logger.warning("MONGO_URI not configured; using in-memory store")
        _store = MemoryStore()
    return _store

"""Profile stores: display names and win counts keyed by user id."""

import logging
import random
import sqlite3
import threading
from typing import Dict, Iterable, List, Optional

from unotable.services.protocol import Profile

logger = logging.getLogger(__name__)

NAME_PARTS = [
    part.capitalize()
    for part in (
        "spiteful", "earth", "frightening", "annoyed", "curve", "cow", "heady",
        "nonchalant", "vase", "stale", "bizarre", "uppity", "optimal", "clammy",
        "story", "lake", "theory", "bloody", "paltry", "watery", "puncture",
        "obnoxious", "whimsical", "ice", "animal", "jumpy", "drawer", "staking",
        "afford", "note", "second", "awful",
    )
]


def generate_name(rng: Optional[random.Random] = None) -> str:
    """Two random name parts, e.g. ``WhimsicalCow``."""
    rng = rng or random
    return rng.choice(NAME_PARTS) + rng.choice(NAME_PARTS)


class InMemoryProfileStore:
    """Profile store that lives only as long as the process."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng
        self._profiles: Dict[str, Profile] = {}
        self._lock = threading.Lock()

    def get_profiles(self, user_ids: Iterable[str]) -> List[Profile]:
        with self._lock:
            profiles = []
            for user_id in user_ids:
                if user_id not in self._profiles:
                    self._profiles[user_id] = Profile(user_id, generate_name(self._rng))
                profiles.append(self._profiles[user_id])
            return profiles

    def update_name(self, user_id: str, name: str) -> None:
        self.get_profiles([user_id])[0].name = name

    def increment_wins(self, user_id: str) -> None:
        self.get_profiles([user_id])[0].wins += 1


class SqliteProfileStore:
    """SQLite-backed profile store with a write-through cache.

    Reads are served from the cache once a user has been seen, so lookups
    made while the round lock is held do not touch the database.
    """

    def __init__(self, path: str = "database.db", rng: Optional[random.Random] = None):
        self._rng = rng
        self._cache: Dict[str, Profile] = {}
        self._lock = threading.Lock()
        self._db = sqlite3.connect(path, check_same_thread=False)
        self._db.row_factory = sqlite3.Row
        self._setup()

    def _setup(self) -> None:
        with self._db:
            self._db.execute(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    wins INTEGER DEFAULT 0
                )
                """
            )

    def _load(self, user_id: str) -> Profile:
        if user_id in self._cache:
            return self._cache[user_id]

        row = self._db.execute(
            "SELECT id, name, wins FROM users WHERE id = ?", (user_id,)
        ).fetchone()
        if row is not None:
            profile = Profile(row["id"], row["name"], row["wins"])
        else:
            profile = Profile(user_id, generate_name(self._rng))
            with self._db:
                self._db.execute(
                    "INSERT INTO users (id, name, wins) VALUES (?, ?, ?)",
                    (profile.user_id, profile.name, profile.wins),
                )
            logger.info("Created profile %s for user %s", profile.name, user_id)
        self._cache[user_id] = profile
        return profile

    def get_profiles(self, user_ids: Iterable[str]) -> List[Profile]:
        with self._lock:
            return [self._load(user_id) for user_id in user_ids]

    def update_name(self, user_id: str, name: str) -> None:
        with self._lock:
            profile = self._load(user_id)
            with self._db:
                self._db.execute("UPDATE users SET name = ? WHERE id = ?", (name, user_id))
            profile.name = name

    def increment_wins(self, user_id: str) -> None:
        with self._lock:
            profile = self._load(user_id)
            with self._db:
                self._db.execute("UPDATE users SET wins = wins + 1 WHERE id = ?", (user_id,))
            profile.wins += 1

    def close(self) -> None:
        self._db.close()

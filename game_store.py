"""
Server-side storage for game snapshots.

The player's session only carries a game id; the snapshot (secret word
included) stays on the server so clients can neither read nor replay it.
"""
import json
import threading
import uuid
from typing import Optional

GAME_KEY = "game:{}"


def new_game_id() -> str:
    return uuid.uuid4().hex


class MemoryGameStore:
    """Process-local store, used when no Redis URL is configured."""

    def __init__(self):
        self._games = {}
        self._lock = threading.Lock()

    def get(self, game_id: str) -> Optional[dict]:
        with self._lock:
            data = self._games.get(game_id)
        return json.loads(data) if data is not None else None

    def set(self, game_id: str, data: dict):
        with self._lock:
            self._games[game_id] = json.dumps(data)


class RedisGameStore:
    """Keeps each snapshot under game:<id> with an expiry."""

    def __init__(self, r, ttl: int = 24 * 60 * 60):
        self.r = r
        self.ttl = ttl

    def get(self, game_id: str) -> Optional[dict]:
        data = self.r.get(GAME_KEY.format(game_id))
        return json.loads(data) if data else None

    def set(self, game_id: str, data: dict):
        self.r.set(GAME_KEY.format(game_id), json.dumps(data), ex=self.ttl)

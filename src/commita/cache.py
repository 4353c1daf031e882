"""
Key-value stores with expiry, used to keep analyses between requests.
"""

from __future__ import annotations

from json import JSONDecodeError, dump, load
from time import time
from typing import TYPE_CHECKING, Any, Protocol

from .consts import ENCODING
from .errors import CacheError
from .settings import CACHE_DIR, CACHE_TTL
from .utils import hash_key

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from .models import JsonDict


class TTLStore(Protocol):
    """
    Interface every cache backend implements.
    """

    def get(self, key: str) -> JsonDict | None: ...

    def set(self, key: str, value: JsonDict) -> None: ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...


def cache_key(username: str, authenticated: bool) -> str:
    """
    Build the cache key for a user's analysis.

    Authenticated and public analyses of the same user are kept apart.

    Args:
        username:      GitHub login.
        authenticated: Whether the data came from a token-backed fetch.

    Return:
        str: Key such as `"octocat:pub"`.

    """

    return f"{username.lower()}:{'auth' if authenticated else 'pub'}"


class MemoryStore:
    """
    In-process store; entries vanish with the process.
    """

    def __init__(self, ttl: int = CACHE_TTL, clock: Callable[[], float] = time) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[float, JsonDict]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> JsonDict | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, value = entry
        if self._clock() > expires_at:
            del self._entries[key]
            return None

        return value

    def set(self, key: str, value: JsonDict) -> None:
        now: float = self._clock()
        self.purge_expired(now)
        self._entries[key] = (now + self.ttl, value)

    def purge_expired(self, now: float | None = None) -> None:
        """
        Drop every entry whose expiry has passed.
        """

        if now is None:
            now = self._clock()

        for key in [k for k, (expires_at, _) in self._entries.items() if now > expires_at]:
            del self._entries[key]

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()


class JsonFileStore:
    """
    Store that keeps one JSON file per key inside a directory.

    File names are hashes of the keys, so usernames never appear on disk.
    """

    def __init__(
        self,
        directory: Path = CACHE_DIR,
        ttl: int = CACHE_TTL,
        clock: Callable[[], float] = time,
    ) -> None:
        self.directory = directory
        self.ttl = ttl
        self._clock = clock

    def _path(self, key: str) -> Path:
        return self.directory / f"{hash_key(key)}.json"

    def get(self, key: str) -> JsonDict | None:
        """
        Read a cached entry.

        Args:
            key: Cache key.

        Return:
            JsonDict | None: Cached value, or `None` when the entry is
                             missing, unreadable or expired.

        """

        path: Path = self._path(key)

        try:
            with path.open(encoding=ENCODING, mode="r") as cache:
                entry: dict[str, Any] = load(cache)
            expires_at = float(entry["expires_at"])
            value: JsonDict = entry["data"]
        except (FileNotFoundError, JSONDecodeError, KeyError, TypeError, ValueError):
            return None

        if self._clock() > expires_at:
            path.unlink(missing_ok=True)
            return None

        return value

    def set(self, key: str, value: JsonDict) -> None:
        """
        Write an entry that expires `ttl` seconds from now.

        Args:
            key:   Cache key.
            value: JSON-compatible value to store.

        Raises:
            CacheError: When the entry cannot be written.

        """

        entry: dict[str, Any] = {"expires_at": self._clock() + self.ttl, "data": value}

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with self._path(key).open(encoding=ENCODING, mode="w") as cache:
                dump(entry, cache, indent=2, sort_keys=False, ensure_ascii=False)
        except OSError as o:
            msg = f"Failed to write cache: {o!s}"
            raise CacheError(msg) from o

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as o:
            msg = f"Failed to delete cache entry: {o!s}"
            raise CacheError(msg) from o

    def clear(self) -> None:
        if not self.directory.exists():
            return

        try:
            for path in self.directory.glob("*.json"):
                path.unlink()
        except OSError as o:
            msg = f"Failed to clear cache: {o!s}"
            raise CacheError(msg) from o

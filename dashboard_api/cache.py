"""
Disk-backed cache for rendered dashboard views.

Entries are keyed by route path plus query parameters and tagged with the
route path. Every entry expires after a TTL, so writes made outside this
process show up once it lapses, and the number of entries is capped.
Invoice mutations call revalidate_path() so the next request for the list
view reloads from the store straight away.

Uses the diskcache library; pointing several workers at the same directory
shares entries and invalidations between them.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, TypeVar, Union
from urllib.parse import urlencode

import diskcache

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 30.0
DEFAULT_MAX_ENTRIES = 256


class ViewCache:
    """
    Path-keyed view cache with TTL, an entry cap and prefix invalidation.

    Attributes:
        expire: TTL in seconds for every entry.
        max_entries: Oldest entries are evicted once this count is exceeded.
    """

    def __init__(
        self,
        directory: Optional[Union[str, Path]] = None,
        expire: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        """
        Args:
            directory: Cache directory. None uses a fresh temporary directory.
            expire: TTL in seconds for every entry.
            max_entries: Upper bound on the number of cached views.
        """
        self.expire = expire
        self.max_entries = max_entries
        self._cache = diskcache.Cache(None if directory is None else str(directory), tag_index=True)

    @staticmethod
    def key(path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        if not params:
            return path
        return f"{path}?{urlencode(sorted(params.items()))}"

    def get_or_load(
        self,
        path: str,
        loader: Callable[[], T],
        params: Optional[Mapping[str, Any]] = None,
    ) -> T:
        """
        Return the cached view for path/params, loading it on a miss.

        Loader errors propagate and nothing is cached.
        """
        key = self.key(path, params)
        cached = self._cache.get(key, default=None)
        if cached is not None:
            return cached

        value = loader()
        self._cache.set(key, value, expire=self.expire, tag=path)
        self._enforce_limit()
        return value

    def _enforce_limit(self) -> None:
        self._cache.expire()
        while len(self._cache) > self.max_entries:
            try:
                key, _ = self._cache.peekitem(last=False)
            except KeyError:
                break
            self._cache.delete(key)
            logger.debug("Evicted %s", key)

    def revalidate_path(self, path: str) -> int:
        """Drop every entry for path and its sub-paths. Returns the count dropped."""
        path = path.rstrip("/") or "/"
        dropped = self._cache.evict(path)
        for key in list(self._cache.iterkeys()):
            if isinstance(key, str) and key.startswith(path + "/") and self._cache.delete(key):
                dropped += 1
        logger.debug("Revalidated %s (%d entries)", path, dropped)
        return dropped

    def clear(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        self._cache.close()

    def __contains__(self, key: str) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)

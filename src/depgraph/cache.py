"""
Download Cache

Fetches remote graph documents and keeps a copy under a cache key so that
repeated loads within the freshness window skip the network entirely.

The cache storage, the downloader and the clock are all injected, so the
freshness policy can be exercised without a network or a filesystem.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Protocol

import httpx

logger = logging.getLogger("depgraph.cache")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry:
    """Cached bytes and the moment they were stored."""

    data: bytes
    stored_at: datetime


class CacheStore(Protocol):
    """Keyed blob storage used by CachedFetcher."""

    def get(self, key: str) -> CacheEntry | None: ...

    def put(self, key: str, data: bytes) -> None: ...


class Downloader(Protocol):
    """Anything that turns a URL into response bytes."""

    def __call__(self, url: str) -> bytes: ...


class FileCacheStore:
    """
    Stores each cache key as a file inside ``directory``.

    The file's modification time is the entry's ``stored_at``.
    """

    def __init__(self, directory: str | Path = "."):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        return self._directory / key

    def get(self, key: str) -> CacheEntry | None:
        path = self.path_for(key)
        try:
            data = path.read_bytes()
            mtime = path.stat().st_mtime
        except FileNotFoundError:
            return None
        return CacheEntry(
            data=data,
            stored_at=datetime.fromtimestamp(mtime, tz=timezone.utc),
        )

    def put(self, key: str, data: bytes) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", dir=self._directory)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, self.path_for(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class MemoryCacheStore:
    """In-process cache store, stamped by an injectable clock."""

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def put(self, key: str, data: bytes) -> None:
        self._entries[key] = CacheEntry(data=data, stored_at=self._clock())

    def __contains__(self, key: str) -> bool:
        return key in self._entries


class HttpDownloader:
    """
    Downloads URLs with httpx.

    A client passed in stays owned by the caller; otherwise one is created
    here (following redirects, with ``timeout`` seconds or no timeout) and
    released by ``close()``.
    """

    def __init__(self, client: httpx.Client | None = None, timeout: float | None = None):
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def __call__(self, url: str) -> bytes:
        response = self._client.get(url)
        response.raise_for_status()
        return response.content

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class CachedFetcher:
    """Returns cached bytes while they are fresh, downloads them otherwise."""

    def __init__(
        self,
        store: CacheStore,
        downloader: Downloader,
        clock: Clock = utc_now,
    ):
        self._store = store
        self._downloader = downloader
        self._clock = clock

    def fetch(
        self,
        max_age: timedelta,
        url: str,
        cache_key: str,
        force_refresh: bool = False,
    ) -> bytes:
        """
        Get the content of ``url``, reusing the copy stored under ``cache_key``.

        The cached copy is used when it is at most ``max_age`` old and
        ``force_refresh`` is false. Otherwise the URL is downloaded and the
        result replaces the cache entry. Download and storage errors are
        raised as-is.
        """
        if not force_refresh:
            entry = self._store.get(cache_key)
            if entry is not None:
                age = self._clock() - entry.stored_at
                if age <= max_age:
                    logger.debug("Cache hit for %s (age %s)", cache_key, age)
                    return entry.data
                logger.info("Cached %s is stale (age %s), refreshing", cache_key, age)

        logger.info("Downloading %s", url)
        data = self._downloader(url)
        self._store.put(cache_key, data)
        logger.info("Cached %d bytes from %s as %s", len(data), url, cache_key)
        return data

"""
Graph Loader

Builds a Graph from a named source. Sources starting with "http" are
downloaded through the cache; anything else is read from the local
filesystem. The decoded graph is stamped with the caller's build id.
"""

import logging
import posixpath
from datetime import timedelta
from pathlib import Path

from pydantic import ValidationError

from src.depgraph.cache import CachedFetcher, FileCacheStore, HttpDownloader
from src.depgraph.models import Graph
from src.shared.config import DepGraphSettings
from src.shared.exceptions import (
    DecodeError,
    LocalNotFoundError,
    LocalReadError,
    RemoteFetchError,
)

logger = logging.getLogger("depgraph.loader")

REMOTE_PREFIX = "http"
CACHE_MAX_AGE = timedelta(hours=300)


def is_remote(source: str) -> bool:
    """Prefix check only; the source is not parsed as a URL."""
    return source.startswith(REMOTE_PREFIX)


def cache_key_for(url: str) -> str:
    """
    Cache slot for a remote source: its final path segment.
    e.g., 'https://example/store/graph.json' -> 'graph.json'

    URLs sharing a final segment share a cache slot.
    """
    return posixpath.basename(url.rstrip("/"))


class GraphLoader:
    """
    Loads dependency graphs from URLs or local files.

    Usage
    -----
    with GraphLoader() as loader:
        graph = loader.load("build-42", "https://example.com/graphs/graph.json")

    A fetcher can be injected; otherwise one is built on first remote load
    from the settings (file cache in ``cache_dir``, httpx downloads) and
    released by ``close()``.
    """

    def __init__(
        self,
        fetcher: CachedFetcher | None = None,
        settings: DepGraphSettings | None = None,
    ):
        self._settings = settings
        self._fetcher = fetcher
        self._downloader: HttpDownloader | None = None

    @property
    def fetcher(self) -> CachedFetcher:
        if self._fetcher is None:
            settings = self._settings or DepGraphSettings()
            self._downloader = HttpDownloader(timeout=settings.download_timeout)
            self._fetcher = CachedFetcher(
                FileCacheStore(settings.cache_dir),
                self._downloader,
            )
        return self._fetcher

    def close(self) -> None:
        if self._downloader is not None:
            self._downloader.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def load(self, build_id: str, source: str) -> Graph:
        """
        Load the graph at ``source`` and stamp it with ``build_id``.

        Raises:
            RemoteFetchError: the remote document could not be downloaded or cached.
            LocalNotFoundError: the local path does not exist.
            LocalReadError: the local path exists but could not be read.
            DecodeError: the content is not a valid graph document.
        """
        if is_remote(source):
            data = self._read_remote(source)
        else:
            data = self._read_local(source)

        try:
            graph = Graph.from_json(data)
        except ValidationError as e:
            raise DecodeError(f"problem reading json: {e}", source) from e

        graph = graph.model_copy(update={"build_id": build_id})
        logger.info(
            "Loaded graph for build %r from %s: %d nodes, %d edge groups",
            build_id, source, len(graph.nodes), len(graph.edges),
        )
        return graph

    def _read_remote(self, url: str) -> bytes:
        try:
            return self.fetcher.fetch(CACHE_MAX_AGE, url, cache_key_for(url), False)
        except Exception as e:
            raise RemoteFetchError(f"problem downloading file: {e}", url) from e

    def _read_local(self, path: str) -> bytes:
        # Path("") would resolve to the working directory
        if not path:
            raise LocalNotFoundError(path)
        try:
            return Path(path).read_bytes()
        except FileNotFoundError:
            raise LocalNotFoundError(path) from None
        except OSError as e:
            raise LocalReadError(f"could not read file: {e}", path) from e


def load_graph(build_id: str, source: str) -> Graph:
    """Load a graph with a default, short-lived GraphLoader."""
    with GraphLoader() as loader:
        return loader.load(build_id, source)

"""Shared fixtures for the depgraph tests."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from src.depgraph.cache import CachedFetcher, MemoryCacheStore


SAMPLE_DOCUMENT = {
    "edges": [
        {
            "type": "imports",
            "from_node": {"index": 0, "id": "main.go"},
            "to_node": [
                {"index": 2, "id": "libfmt"},
                {"index": 1, "id": "util.go"},
            ],
        },
        {
            "type": "defines",
            "from_node": {"index": 1, "id": "util.go"},
            "to_node": [{"index": 3, "id": "util.Helper"}],
        },
    ],
    "nodes": [
        {
            "id": "main.go",
            "index": 0,
            "node": {
                "_dependent_libs": [],
                "_libs": ["libfmt"],
                "_files": ["util.go", "util.go"],
                "_dependent_files": None,
                "type": "file",
            },
        },
        {
            "id": "util.go",
            "index": 1,
            "node": {"_dependent_files": ["main.go"], "type": "file"},
        },
        {"id": "libfmt", "index": 2, "node": {"_dependent_libs": ["main.go"], "type": "library"}},
        {"id": "util.Helper", "index": 3, "node": {"type": "symbol"}},
    ],
}


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class RecordingDownloader:
    """Returns queued payloads in order and records every URL requested."""

    def __init__(self, *payloads: bytes):
        self.payloads = list(payloads)
        self.urls: list[str] = []

    def __call__(self, url: str) -> bytes:
        self.urls.append(url)
        return self.payloads.pop(0)


@pytest.fixture
def sample_bytes() -> bytes:
    return json.dumps(SAMPLE_DOCUMENT).encode()


@pytest.fixture
def sample_path(tmp_path, sample_bytes):
    path = tmp_path / "graph.json"
    path.write_bytes(sample_bytes)
    return path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoryCacheStore(clock)


@pytest.fixture
def make_fetcher(store, clock):
    def _make(*payloads: bytes):
        downloader = RecordingDownloader(*payloads)
        return CachedFetcher(store, downloader, clock), downloader

    return _make

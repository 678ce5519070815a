"""
Exception hierarchy for graph loading.

All loader errors inherit from DepGraphError so callers can catch
them uniformly, and each one names the source it failed on.
"""


class DepGraphError(Exception):
    """Base exception for all graph loading errors."""

    def __init__(self, message: str, source: str = "unknown"):
        self.source = source
        super().__init__(f"[{source}] {message}")


class RemoteFetchError(DepGraphError):
    """Downloading or caching a remote graph document failed."""
    pass


class LocalNotFoundError(DepGraphError):
    """The local graph document does not exist."""

    def __init__(self, path: str):
        super().__init__(f"could not find file {path}", source=path)


class LocalReadError(DepGraphError):
    """The local graph document exists but could not be read."""
    pass


class DecodeError(DepGraphError):
    """The graph document does not match the expected structure."""
    pass

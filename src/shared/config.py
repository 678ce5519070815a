"""
Configuration for graph loading.

Uses Pydantic Settings for environment-based configuration.
Values are read from DEPGRAPH_* environment variables or a .env file.
"""

from pydantic_settings import BaseSettings


class DepGraphSettings(BaseSettings):
    """Settings shared by the loader, the download cache and the CLI."""

    # Directory holding cached remote graph documents
    cache_dir: str = "."

    # Seconds before a remote download is abandoned (None waits indefinitely)
    download_timeout: float | None = None

    # Logging
    log_level: str = "INFO"

    class Config:
        env_prefix = "DEPGRAPH_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

"""
Logging setup for the depgraph entry points.

Library modules only create named loggers under ``depgraph.*``;
handlers and levels are configured once by whoever runs them.
"""

import logging


def setup_logging(name: str, level: str = "INFO") -> logging.Logger:
    """
    Configure process-wide logging and return a named logger.

    Args:
        name: Logger name (e.g. 'depgraph.cli').
        level: Log level string (e.g. 'INFO', 'DEBUG').

    Returns:
        Configured logger instance.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s  %(name)-24s  %(levelname)-7s  %(message)s",
    )
    return logging.getLogger(name)

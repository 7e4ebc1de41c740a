"""Minimal logging utilities for streamini.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from streamini.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Decoding settings.ini")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "streamini." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'streamini.mymodule'
    """
    if not (name == "streamini" or name.startswith("streamini.")):
        name = f"streamini.{name}"
    return logging.getLogger(name)

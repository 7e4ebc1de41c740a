"""Utility modules for streamini.

Provides:
- logger: get_logger for logging
"""

from streamini.utils.logger import get_logger

__all__ = [
    "get_logger",
]

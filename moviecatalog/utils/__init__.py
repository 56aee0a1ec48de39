"""
Utilities package for the movie catalog.

Exports shared helpers for logging and id generation. Keep this package
lightweight and free of catalog logic.
"""

from moviecatalog.utils.ids import IdGenerator, SequentialIdGenerator, TimestampIdGenerator
from moviecatalog.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "IdGenerator",
    "SequentialIdGenerator",
    "TimestampIdGenerator",
]

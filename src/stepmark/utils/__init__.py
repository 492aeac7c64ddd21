"""Utility modules for stepmark.

Provides:
- hashing: hash_str for cache keys
- logger: get_logger for logging
"""

from stepmark.utils.hashing import hash_str
from stepmark.utils.logger import get_logger

__all__ = [
    "get_logger",
    "hash_str",
]

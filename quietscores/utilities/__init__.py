"""Utilities - parsing helpers, bounded search, caching, logging, time display."""

from quietscores.utilities.cache import TTLCache, make_cache_key
from quietscores.utilities.logging import log_once, setup_logging
from quietscores.utilities.search import find_first

__all__ = [
    "TTLCache",
    "find_first",
    "log_once",
    "make_cache_key",
    "setup_logging",
]

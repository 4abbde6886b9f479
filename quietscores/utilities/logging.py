"""Logging setup and one-shot diagnostics."""

import logging
import threading

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_seen_keys: set[str] = set()
_seen_lock = threading.Lock()


def setup_logging(level: str | int = "INFO") -> None:
    """Configure the quietscores logger with a single stream handler."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger("quietscores")
    root.setLevel(level)
    if not any(getattr(h, "_quietscores", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._quietscores = True  # type: ignore[attr-defined]
        root.addHandler(handler)


def log_once(logger: logging.Logger, key: str, msg: str, *args, level: int = logging.DEBUG) -> bool:
    """Emit msg the first time key is seen in this process.

    Returns True when the record was emitted.
    """
    with _seen_lock:
        if key in _seen_keys:
            return False
        _seen_keys.add(key)
    logger.log(level, msg, *args)
    return True


def reset_log_once() -> None:
    """Forget which diagnostics were already emitted."""
    with _seen_lock:
        _seen_keys.clear()

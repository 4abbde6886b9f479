"""Format-agnostic helpers for reading loosely-typed feed documents.

Feeds change shape between sports, endpoints and game states. Everything
here is total: bad input yields None or a default, never an exception.
"""

import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

_NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_int(value: Any) -> int | None:
    """Parse a value to an integer. Returns None for empty strings or "-"."""
    if value is None or isinstance(value, bool) or value in ("", "-"):
        return None
    try:
        return int(float(value))
    except (ValueError, TypeError, OverflowError):
        return None


def parse_float(value: Any) -> float | None:
    """Parse a value to a float, handling "MM:SS" clock strings as minutes."""
    if value is None or isinstance(value, bool) or value in ("", "-"):
        return None
    try:
        if isinstance(value, str) and ":" in value:
            parts = value.split(":")
            if len(parts) == 2:
                return float(parts[0]) + float(parts[1]) / 60
        result = float(value)
    except (ValueError, TypeError, OverflowError):
        return None
    if result != result:  # NaN
        return None
    return result


def parse_number(value: Any) -> float | None:
    """Pull the first signed number out of a value ("-3.5", "o47.5", "+150")."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if value == value else None
    if not isinstance(value, str):
        return None
    match = _NUMBER_RE.search(value)
    if match is None:
        return None
    return float(match.group())


def format_number(value: float | int) -> str:
    """Render 7.0 as "7" and 7.5 as "7.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def dig(obj: Any, *path: str | int, default: Any = None) -> Any:
    """Walk nested dicts/lists by key or index, returning default on any miss."""
    current = obj
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return default
            current = current[step]
        else:
            if not isinstance(current, Mapping) or step not in current:
                return default
            current = current[step]
        if current is None:
            return default
    return current


def is_present(value: Any) -> bool:
    """True for a defined, non-empty value. 0 and False count as present."""
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def first_present(
    extractors: Iterable[Callable[[Any], Any]],
    source: Any,
    default: Any = None,
) -> Any:
    """Evaluate extractors in order and return the first present result.

    Each fallback chain in the normalizers is an explicit list of these so
    the precedence order is readable and testable on its own.
    """
    for extractor in extractors:
        value = extractor(source)
        if is_present(value):
            return value
    return default


def first_value(*values: Any, default: Any = None) -> Any:
    """Return the first present value among already-computed candidates."""
    for value in values:
        if is_present(value):
            return value
    return default


def text(value: Any) -> str:
    """Lower-cased string form; "" for None."""
    if value is None:
        return ""
    return str(value).lower()


def id_str(value: Any) -> str | None:
    """Canonical string id, or None when the value is absent."""
    if value is None or value == "" or isinstance(value, (dict, list)):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)

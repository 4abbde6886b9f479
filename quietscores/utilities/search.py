"""Bounded-depth search over JSON-like documents."""

from collections.abc import Callable, Container
from typing import Any

DEFAULT_MAX_DEPTH = 10


def find_first(
    node: Any,
    predicate: Callable[[dict], bool],
    *,
    is_priority_key: Callable[[str], bool] | None = None,
    excluded_keys: Container[str] = (),
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> dict | None:
    """Depth-first search for the first dict satisfying predicate.

    Keys accepted by is_priority_key are explored before the rest (in
    document order within each bucket). excluded_keys are never entered.
    Nodes deeper than max_depth are not inspected and each container is
    visited at most once, so circular or very large documents terminate.
    """
    seen: set[int] = set()

    def visit(current: Any, depth: int) -> dict | None:
        if depth > max_depth or not isinstance(current, (dict, list)):
            return None
        if id(current) in seen:
            return None
        seen.add(id(current))

        if isinstance(current, list):
            for item in current:
                found = visit(item, depth + 1)
                if found is not None:
                    return found
            return None

        if predicate(current):
            return current

        keys = [k for k in current if k not in excluded_keys]
        if is_priority_key is not None:
            priority = [k for k in keys if is_priority_key(str(k))]
            keys = priority + [k for k in keys if k not in priority]

        for key in keys:
            found = visit(current[key], depth + 1)
            if found is not None:
                return found
        return None

    return visit(node, 0)

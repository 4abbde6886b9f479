"""Scoreboard ordering and live-game filtering.

Games sort live first, then halftime, scheduled, postponed and final. Ties
break on start time, then sport key, then home team name. Python's sort is
stable, so fully equal games keep feed order.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from quietscores.core.types import Game
from quietscores.utilities.tz import parse_event_date

logger = logging.getLogger(__name__)

STATUS_ORDER = {
    "live": 0,
    "halftime": 1,
    "scheduled": 2,
    "postponed": 3,
    "final": 4,
}
UNKNOWN_STATUS_RANK = 5

_NO_START = float("inf")


def _start_timestamp(game: Game) -> float:
    start: datetime | None = parse_event_date(game.full_date_time)
    return start.timestamp() if start else _NO_START


def game_sort_key(game: Game) -> tuple:
    return (
        STATUS_ORDER.get(game.status, UNKNOWN_STATUS_RANK),
        _start_timestamp(game),
        game.sport,
        game.home_team,
    )


def compare_games(a: Game, b: Game) -> int:
    """Three-way comparison matching game_sort_key (-1, 0 or 1)."""
    key_a, key_b = game_sort_key(a), game_sort_key(b)
    return (key_a > key_b) - (key_a < key_b)


def sort_games(games: Iterable[Game]) -> list[Game]:
    return sorted(games, key=game_sort_key)


def filter_games(games: Iterable[Game], live_only: bool = False) -> list[Game]:
    """Sorted games, optionally only those in progress (live or halftime)."""
    selected = [g for g in games if g.is_live] if live_only else list(games)
    return sort_games(selected)


def live_count(games: Iterable[Game]) -> int:
    return sum(1 for game in games if game.is_live)

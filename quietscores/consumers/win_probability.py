"""Win probability series: normalization, play attribution, chart geometry.

Feeds publish win probability as a list of points, a single object, or a
bare number, on either a 0-1 or a 0-100 scale. Everything is normalized to
home/away fractions in [0, 1] that sum to 1.
"""

import logging
import math
from enum import Enum

from quietscores.core.types import WinProbabilityPoint
from quietscores.utilities.parsing import (
    as_dict,
    dig,
    first_present,
    first_value,
    id_str,
    parse_int,
    parse_number,
)

logger = logging.getLogger(__name__)

PERIOD_SECONDS = 15 * 60
GAME_SECONDS = 4 * PERIOD_SECONDS
# Share of the axis used when clock data cannot place points
FALLBACK_SPREAD = 0.75

HOME_KEYS = ("homeWinPercentage", "homeWinProbability", "homeProbability", "homeTeamProbability")
AWAY_KEYS = ("awayWinPercentage", "awayWinProbability", "awayProbability", "awayTeamProbability")


class WinProbabilityShape(Enum):
    SERIES = "series"
    OBJECT = "object"
    SCALAR = "scalar"
    NONE = "none"


def detect_shape(value) -> WinProbabilityShape:
    if isinstance(value, list):
        return WinProbabilityShape.SERIES if value else WinProbabilityShape.NONE
    if isinstance(value, dict):
        return WinProbabilityShape.OBJECT if value else WinProbabilityShape.NONE
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return WinProbabilityShape.SCALAR
    return WinProbabilityShape.NONE


def to_fraction(value) -> float | None:
    """0-1 fraction from a fraction or a percentage; None if unparseable."""
    number = parse_number(value)
    if number is None or math.isinf(number):
        return None
    if number > 1:
        number = number / 100
    return max(0.0, min(1.0, number))


def _side_probability(raw: dict, keys: tuple[str, ...], team_key: str) -> float | None:
    for key in keys:
        if raw.get(key) is not None:
            return to_fraction(raw[key])
    return to_fraction(dig(raw, team_key, "winProbability"))


def _point(raw: dict, home: float) -> WinProbabilityPoint:
    play = raw.get("play") if isinstance(raw.get("play"), dict) else None
    period = first_value(dig(raw, "period", "number"), dig(play, "period", "number"))
    clock = first_value(dig(raw, "clock", "displayValue"), dig(play, "clock", "displayValue"))
    return WinProbabilityPoint(
        home_win_percentage=home,
        away_win_percentage=1 - home,
        play_id=id_str(first_value(raw.get("playId"), dig(play, "id"))),
        play=play,
        period=parse_int(period),
        clock=clock if isinstance(clock, str) else None,
    )


def normalize_point(raw: dict, default_home: float | None = None) -> WinProbabilityPoint | None:
    """One normalized point.

    Home comes from the first home alias present, else 1 - away, else
    default_home. Away is always 1 - home.
    """
    raw = as_dict(raw)
    home = _side_probability(raw, HOME_KEYS, "homeTeam")
    if home is None:
        away = _side_probability(raw, AWAY_KEYS, "awayTeam")
        if away is not None:
            home = 1 - away
    if home is None:
        home = default_home
    if home is None:
        return None
    return _point(raw, home)


def normalize_win_probability(value) -> list[WinProbabilityPoint]:
    """Normalize any known shape to a list of points (possibly empty)."""
    shape = detect_shape(value)
    if shape is WinProbabilityShape.SERIES:
        points = []
        for raw in value:
            if isinstance(raw, dict):
                points.append(normalize_point(raw, default_home=0.5))
            elif detect_shape(raw) is WinProbabilityShape.SCALAR:
                home = to_fraction(raw)
                if home is not None:
                    points.append(WinProbabilityPoint(home, 1 - home))
        return points
    if shape is WinProbabilityShape.OBJECT:
        point = normalize_point(value)
        return [point] if point else []
    if shape is WinProbabilityShape.SCALAR:
        home = to_fraction(value)
        return [WinProbabilityPoint(home, 1 - home)] if home is not None else []
    return []


SERIES_SOURCES = (
    lambda s: s.get("winprobability"),
    lambda s: s.get("winProbability"),
    lambda s: dig(s, "boxscore", "winprobability"),
    lambda s: dig(s, "boxscore", "winProbability"),
    lambda s: dig(s, "predictor", "homeTeam", "winProbability"),
    lambda s: dig(s, "analytics", "winProbability"),
    lambda s: dig(s, "header", "competitions", 0, "predictor", "homeTeam", "winProbability"),
    lambda s: dig(s, "header", "competitions", 0, "winProbability"),
)

OBJECT_SOURCES = (
    lambda s: s.get("predictor"),
    lambda s: s.get("analytics"),
    lambda s: dig(s, "header", "competitions", 0, "predictor"),
)


def extract_win_probability(summary: dict) -> list[WinProbabilityPoint]:
    """Series from the first source present, else from a predictor object."""
    summary = as_dict(summary)
    points = normalize_win_probability(first_present(SERIES_SOURCES, summary))
    if points:
        return points
    for source in OBJECT_SOURCES:
        points = normalize_win_probability(source(summary))
        if points:
            return points
    return []


# =============================================================================
# Play attribution
# =============================================================================


def attribute_play(play_id: str | None, plays: list[dict]) -> dict | None:
    """Play behind a probability point.

    Exact id match, then containment either way (ids can be truncated or
    prefixed), then the last play in the log.
    """
    plays = [p for p in plays if isinstance(p, dict)]
    if not plays:
        return None
    if play_id:
        target = str(play_id)
        for play in plays:
            if id_str(play.get("id")) == target:
                return play
        for play in plays:
            candidate = id_str(play.get("id"))
            if candidate and (candidate in target or target in candidate):
                return play
    return plays[-1]


def current_win_probability(
    points: list[WinProbabilityPoint], plays: list[dict]
) -> WinProbabilityPoint | None:
    """Latest point, with its play attached when the feed left it out."""
    if not points:
        return None
    latest = points[-1]
    if latest.play is not None:
        return latest
    play = attribute_play(latest.play_id, plays)
    if play is None:
        return latest
    return WinProbabilityPoint(
        home_win_percentage=latest.home_win_percentage,
        away_win_percentage=latest.away_win_percentage,
        play_id=latest.play_id,
        play=play,
        period=latest.period,
        clock=latest.clock,
    )


# =============================================================================
# Chart geometry
# =============================================================================


def elapsed_seconds(point: WinProbabilityPoint) -> float:
    """Game seconds elapsed at a point; NaN when the clock does not parse."""
    period = point.period or 1
    clock = point.clock or "15:00"
    parts = clock.split(":")
    try:
        minutes = float(parts[0])
        seconds = float(parts[1]) if len(parts) > 1 else 0.0
    except ValueError:
        return math.nan
    return (period - 1) * PERIOD_SECONDS + PERIOD_SECONDS - (minutes * 60 + seconds)


def chart_points(
    points: list[WinProbabilityPoint],
    width: float = 1000,
    height: float = 280,
    padding: float = 45,
) -> list[dict]:
    """SVG coordinates for a win probability line.

    x is game time; y is the away probability with 50% on the centre line.
    Needs at least two points.
    """
    if len(points) < 2:
        return []

    chart_width = width - padding * 2
    chart_height = height - padding * 2
    count = len(points)

    coords = []
    for index, point in enumerate(points):
        elapsed = elapsed_seconds(point)
        if math.isnan(elapsed) or (elapsed == 0 and index > 0):
            elapsed = index / (count - 1) * GAME_SECONDS * FALLBACK_SPREAD
        elapsed = max(0.0, min(elapsed, GAME_SECONDS))

        prob = point.away_win_percentage
        coords.append(
            {
                "x": padding + elapsed / GAME_SECONDS * chart_width,
                "y": height - (padding + prob * chart_height),
                "prob": prob,
            }
        )
    return coords

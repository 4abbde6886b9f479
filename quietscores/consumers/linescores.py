"""Period-by-period scoring.

Official linescores are used when the feed publishes them. In-progress
games often have none, so buckets are rebuilt from the play log.

Bucket index 0 is period 1; index 4 collects period 5 and every later
overtime period.
"""

from quietscores.core.types import PeriodScores
from quietscores.utilities.parsing import (
    dig,
    first_value,
    format_number,
    is_present,
    parse_int,
    parse_number,
    text,
)

PERIOD_SLOTS = 5
EMPTY_CELL = "-"
SCORING_PLAY_WORDS = ("touchdown", "field goal", "safety", "goal")


def _side_score(play: dict, side: str) -> float | None:
    value = first_value(
        play.get(f"{side}Score"),
        dig(play, "score", side),
        dig(play, "scores", side),
    )
    return parse_number(value)


def _play_period(play: dict) -> int:
    period = play.get("period")
    if isinstance(period, dict):
        period = period.get("number")
    number = parse_int(first_value(period, play.get("periodNumber"), default=1))
    if number is None or number < 1:
        return 1
    return min(number, PERIOD_SLOTS)


def _last_score(plays: list[dict], side: str) -> float | None:
    for play in reversed(plays):
        if isinstance(play, dict):
            score = _side_score(play, side)
            if score is not None:
                return score
    return None


def is_scoring_play(play: dict) -> bool:
    if play.get("scoringPlay"):
        return True
    type_text = text(dig(play, "type", "text"))
    return any(word in type_text for word in SCORING_PLAY_WORDS)


def scoring_plays(plays: list[dict]) -> list[dict]:
    """Plays that changed the score, in encounter order.

    A play qualifies when flagged, when its type reads like a score, or
    when its running score differs from the previous running score seen.
    """
    selected = []
    last_away = last_home = 0.0
    for play in plays:
        if not isinstance(play, dict):
            continue
        away, home = _side_score(play, "away"), _side_score(play, "home")
        changed = (away is not None and away != last_away) or (
            home is not None and home != last_home
        )
        if is_scoring_play(play) or changed:
            selected.append(play)
        if away is not None:
            last_away = away
        if home is not None:
            last_home = home
    return selected


def reconstruct_period_scores(
    plays: list[dict],
    away_total: float | None = None,
    home_total: float | None = None,
) -> PeriodScores:
    """Rebuild per-period points from a play log.

    Pure and deterministic. Positive running-score deltas are credited to
    the play's period; a zero or negative delta only moves the baseline.
    Credits never push a side's bucket sum past its running score or its
    total. Totals default to the last running score in the log.
    """
    buckets = {"away": [0] * PERIOD_SLOTS, "home": [0] * PERIOD_SLOTS}
    totals = {
        "away": away_total if away_total is not None else _last_score(plays, "away"),
        "home": home_total if home_total is not None else _last_score(plays, "home"),
    }
    last = {"away": 0.0, "home": 0.0}

    # sorted() is stable: equal periods keep encounter order
    ordered = sorted(scoring_plays(plays), key=_play_period)

    for play in ordered:
        scores = {"away": _side_score(play, "away"), "home": _side_score(play, "home")}
        if scores["away"] is None and scores["home"] is None:
            continue
        slot = _play_period(play) - 1

        for side in ("away", "home"):
            score = scores[side]
            if score is None:
                continue
            delta = score - last[side]
            last[side] = score
            if delta <= 0:
                continue

            headroom = score - sum(buckets[side])
            if totals[side] is not None:
                headroom = min(headroom, totals[side] - sum(buckets[side]))
            credit = int(min(delta, headroom))
            if credit > 0:
                buckets[side][slot] += credit

    return PeriodScores(away=tuple(buckets["away"]), home=tuple(buckets["home"]))


# =============================================================================
# Display cells
# =============================================================================


def linescore_cell(entry) -> str | None:
    """Display text for one official linescore entry, or None if it has none."""
    if entry is None or isinstance(entry, bool):
        return None
    if isinstance(entry, (int, float)):
        return format_number(entry)
    if isinstance(entry, dict):
        value = first_value(
            entry.get("value"),
            entry.get("displayValue"),
            entry.get("score"),
            entry.get("text"),
        )
        if not is_present(value) or value == EMPTY_CELL:
            return None
        return format_number(value) if isinstance(value, float) else str(value)
    return str(entry) if str(entry) else None


def _entry_period(entry) -> int | None:
    if not isinstance(entry, dict):
        return None
    period = entry.get("period")
    if isinstance(period, dict):
        period = first_value(period.get("number"), period.get("value"), period.get("displayValue"))
    return parse_int(period)


def period_score(linescores: list, period: int, reconstructed: int = 0) -> str:
    """Display cell for one period.

    The official linescore wins: looked up by index, then by period
    number. A positive reconstructed bucket fills the gap; otherwise '-'.
    """
    linescores = linescores if isinstance(linescores, list) else []

    if 0 < period <= len(linescores):
        cell = linescore_cell(linescores[period - 1])
        if cell is not None:
            return cell

    for entry in linescores:
        if _entry_period(entry) == period:
            cell = linescore_cell(entry)
            if cell is not None:
                return cell

    if reconstructed > 0:
        return str(reconstructed)
    return EMPTY_CELL


def resolve_period_cells(linescores: list, reconstructed: tuple[int, ...]) -> tuple[str, ...]:
    """Five display cells (periods 1-4 and overtime) for one side."""
    return tuple(
        period_score(
            linescores,
            period,
            reconstructed[period - 1] if period - 1 < len(reconstructed) else 0,
        )
        for period in range(1, PERIOD_SLOTS + 1)
    )


def needs_reconstruction(away_linescores: list, home_linescores: list) -> bool:
    """Reconstruction runs when either side lacks official linescores."""
    return not away_linescores or not home_linescores

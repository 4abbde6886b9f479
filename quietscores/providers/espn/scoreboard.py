"""Scoreboard event normalization for the ESPN provider.

Maps one raw scoreboard event to a canonical Game. Placeholder events
(missing a side or a team name) are dropped by returning None; the feed is
known to emit them, so they are not errors.
"""

import copy
import logging
from datetime import date

from quietscores.core.types import Game, Odds, TeamSide
from quietscores.providers.espn.constants import BASEBALL_SPORTS
from quietscores.utilities.logging import log_once
from quietscores.utilities.parsing import (
    as_dict,
    as_list,
    dig,
    first_present,
    first_value,
    format_number,
    id_str,
    parse_int,
    parse_number,
    text,
)
from quietscores.utilities.tz import format_display_time, local_date

logger = logging.getLogger(__name__)

LIGHT_LOGO_HINTS = ("alternate", "alt", "light", "white")
DARK_LOGO_HINTS = ("dark", "black")


# =============================================================================
# Status
# =============================================================================


def normalize_status(state: str | None, detail: str | None, short_detail: str | None) -> str:
    """Derive the canonical status from the raw {state, detail, shortDetail} triad.

    Detail text beats the state code: the state code is coarser than the
    free text (e.g. state "in" covers both play and breaks).
    """
    combined = text(detail) or text(short_detail)

    if "postponed" in combined or "canceled" in combined:
        return "postponed"
    if "halftime" in combined:
        return "halftime"

    if state == "pre":
        return "scheduled"
    if state in ("post", "final"):
        return "final"
    if state == "in":
        # "End of 2nd Quarter", "End of 1st Period" etc.
        if "end" in combined:
            return "halftime"
        return "live"

    if "final" in combined:
        return "final"
    if "live" in combined:
        return "live"
    return "scheduled"


# =============================================================================
# Team fields
# =============================================================================


def pick_team_logo(team: dict | None) -> str | None:
    """Pick a logo that reads on a dark background.

    Best effort: feeds list several variants without tagging which is which,
    so the choice is made from hints in the URL.
    """
    if not isinstance(team, dict):
        return None

    hrefs = [
        logo["href"]
        for logo in as_list(team.get("logos"))
        if isinstance(logo, dict) and isinstance(logo.get("href"), str) and logo["href"]
    ]
    for href in hrefs:
        lowered = href.lower()
        if any(hint in lowered for hint in LIGHT_LOGO_HINTS):
            return href
    for href in hrefs:
        lowered = href.lower()
        if not any(hint in lowered for hint in DARK_LOGO_HINTS):
            return href
    if hrefs:
        return hrefs[0]

    logo = team.get("logo")
    return logo if isinstance(logo, str) and logo else None


def extract_record(competitor: dict) -> str | None:
    """Overall W-L summary: the 'total' record, else the first one listed."""
    records = [r for r in as_list(competitor.get("records")) if isinstance(r, dict)]
    if not records:
        return None
    total = next((r for r in records if r.get("type") == "total"), records[0])
    summary = total.get("summary")
    return str(summary) if summary not in (None, "") else None


def extract_score(competitor: dict) -> str:
    """Score as a display string; "" when absent."""
    score = competitor.get("score")
    if isinstance(score, dict):
        score = first_value(score.get("displayValue"), score.get("value"))
    if score is None or isinstance(score, (bool, list, dict)):
        return ""
    if isinstance(score, float):
        return format_number(score)
    return str(score)


def build_team_side(competitor: dict) -> TeamSide | None:
    team = as_dict(competitor.get("team"))
    name = first_value(team.get("displayName"), team.get("name"))
    if not name:
        return None
    abbreviation = team.get("abbreviation") or None
    return TeamSide(
        name=str(name),
        id=id_str(team.get("id")),
        short_name=first_value(team.get("shortDisplayName"), abbreviation),
        abbreviation=abbreviation,
        logo=pick_team_logo(team),
        record=extract_record(competitor),
    )


# =============================================================================
# Live state
# =============================================================================


def _possession_from_field(value) -> str | None:
    if isinstance(value, dict):
        return id_str(first_value(dig(value, "team", "id"), value.get("id")))
    if value in (None, "", False):
        return None
    return id_str(value)


POSSESSION_CHAIN = (
    lambda ctx: _possession_from_field(dig(ctx, "situation", "possession")),
    lambda ctx: id_str(dig(ctx, "situation", "lastPlay", "team", "id")),
    lambda ctx: id_str(dig(ctx, "competition", "lastPlay", "team", "id")),
    lambda ctx: _possession_from_field(dig(ctx, "situation", "lastPlay", "possessionTeam")),
    lambda ctx: _possession_from_field(dig(ctx, "competition", "lastPlay", "possessionTeam")),
)


def extract_possession(competition: dict) -> str | None:
    """Football possession team id; first non-null source wins."""
    ctx = {"situation": as_dict(competition.get("situation")), "competition": competition}
    return first_present(POSSESSION_CHAIN, ctx)


def describe_bases(on_first, on_second, on_third) -> str:
    """Base occupancy as one of eight labels."""
    first, second, third = bool(on_first), bool(on_second), bool(on_third)
    if first and second and third:
        return "loaded"
    if first and second:
        return "1st & 2nd"
    if first and third:
        return "1st & 3rd"
    if second and third:
        return "2nd & 3rd"
    if first:
        return "1st"
    if second:
        return "2nd"
    if third:
        return "3rd"
    return "empty"


def _half_inning(situation: dict) -> str | None:
    top = situation.get("topOfInning")
    if top is not None:
        return "top" if top else "bot"
    half = situation.get("inningHalf")
    if half in (1, "1", "top"):
        return "top"
    if half in (2, "2", "bottom", "bot"):
        return "bot"
    return None


def extract_baseball_state(situation: dict, status: dict) -> dict:
    """Inning, half, count and bases for a baseball scoreboard event."""
    top_bottom = _half_inning(situation)
    at_bat = None
    if top_bottom == "top":
        at_bat = "away"
    elif top_bottom == "bot":
        at_bat = "home"

    inning = situation.get("inning")
    if inning is None:
        inning = status.get("period")

    return {
        "at_bat_team": at_bat,
        "inning_number": parse_int(inning),
        "top_bottom": top_bottom,
        "balls": parse_int(situation.get("balls")),
        "strikes": parse_int(situation.get("strikes")),
        "outs": parse_int(situation.get("outs")),
        "bases": describe_bases(
            situation.get("onFirst"), situation.get("onSecond"), situation.get("onThird")
        ),
    }


# =============================================================================
# Broadcast and odds
# =============================================================================


def _first_broadcast_name(broadcasts: list) -> str | None:
    broadcast = as_dict(broadcasts[0]) if broadcasts else {}
    names = as_list(broadcast.get("names"))
    if names and names[0]:
        return str(names[0])
    return dig(broadcast, "media", "shortName")


def extract_broadcast(event: dict, competition: dict) -> str | None:
    """First broadcast label found, checked in order of reliability."""
    if event.get("broadcast"):
        return str(event["broadcast"])
    broadcasts = as_list(competition.get("broadcasts"))
    if broadcasts:
        return _first_broadcast_name(broadcasts)
    geo = as_list(event.get("geoBroadcasts"))
    if geo:
        return dig(geo, 0, "media", "shortName")
    legacy = as_list(event.get("broadcasts"))
    if legacy:
        names = as_list(dig(legacy, 0, "names"))
        return str(names[0]) if names and names[0] else None
    return None


def _close_line(node: dict, *path: str) -> float | None:
    return parse_number(dig(node, *path, "close", "line"))


def extract_odds(competition: dict) -> Odds | None:
    """Closing lines from the first odds provider.

    The spread is kept from the away side; when only the home line is
    given it is negated. Returns None when no line is present at all.
    """
    odds = as_dict(dig(competition, "odds", 0))
    if not odds:
        return None

    spread = _close_line(odds, "pointSpread", "away")
    if spread is None:
        home_line = _close_line(odds, "pointSpread", "home")
        if home_line is not None:
            spread = -home_line

    over_under = _close_line(odds, "overUnder")
    away_ml = _close_line(odds, "moneyline", "away")
    home_ml = _close_line(odds, "moneyline", "home")

    if spread is None and over_under is None and away_ml is None and home_ml is None:
        return None
    return Odds(
        spread=spread,
        over_under=over_under,
        away_moneyline=int(away_ml) if away_ml is not None else None,
        home_moneyline=int(home_ml) if home_ml is not None else None,
    )


# =============================================================================
# Event
# =============================================================================


def _find_side(competitors: list[dict], side: str, fallback_index: int) -> dict | None:
    for competitor in competitors:
        if competitor.get("homeAway") == side:
            return competitor
    if len(competitors) > fallback_index:
        return competitors[fallback_index]
    return None


def normalize_event(event: dict | None, sport: str) -> Game | None:
    """Map one raw scoreboard event to a Game.

    Args:
        event: Raw event from the scoreboard 'events' list
        sport: Sport key the event was fetched under

    Returns:
        Game, or None for placeholder events without two named teams
    """
    if not isinstance(event, dict):
        return None
    competition = as_dict(dig(event, "competitions", 0))
    if not competition:
        return None

    competitors = [c for c in as_list(competition.get("competitors")) if isinstance(c, dict)]
    if not competitors:
        return None

    home = _find_side(competitors, "home", 1)
    away = _find_side(competitors, "away", 0)
    if home is None or away is None:
        return None

    home_side = build_team_side(home)
    away_side = build_team_side(away)
    if home_side is None or away_side is None:
        log_once(
            logger, "scoreboard:unnamed-team", "[SCOREBOARD] Dropping event without team names"
        )
        return None

    status = as_dict(event.get("status"))
    status_type = as_dict(status.get("type"))
    normalized_status = normalize_status(
        status_type.get("state"), status_type.get("detail"), status_type.get("shortDetail")
    )
    time_detail = first_value(
        status_type.get("shortDetail"),
        status_type.get("detail"),
        status_type.get("description"),
        default="",
    )

    situation = competition.get("situation")
    situation = copy.deepcopy(situation) if isinstance(situation, dict) else None

    baseball = {}
    if sport in BASEBALL_SPORTS:
        baseball = extract_baseball_state(situation or {}, status)

    event_id = id_str(event.get("id")) or f"{sport}-{away_side.name}-{home_side.name}"
    event_date = event.get("date") if isinstance(event.get("date"), str) else None

    return Game(
        id=event_id,
        sport=sport,
        sport_name=event.get("name") or sport.upper(),
        away=away_side,
        home=home_side,
        away_score=extract_score(away),
        home_score=extract_score(home),
        status=normalized_status,
        time=str(time_detail),
        display_time=format_display_time(event_date) if normalized_status == "scheduled" else "",
        full_date_time=event_date,
        period=parse_int(status.get("period")),
        clock=status.get("clock"),
        odds=extract_odds(competition),
        broadcast_channel=extract_broadcast(event, competition),
        possession_team=extract_possession(competition),
        situation=situation,
        **baseball,
    )


def event_on_date(event: dict, target_date: date) -> bool:
    """Whether a raw event falls on the requested local calendar date.

    Scoreboards sometimes include games from adjacent days.
    """
    event_date = local_date(event.get("date") if isinstance(event, dict) else None)
    return event_date is not None and event_date == target_date


def filter_events_for_date(events: list, target_date: date, sport: str) -> list[dict]:
    """Keep only raw events that fall on target_date in the display timezone."""
    kept = [e for e in events if isinstance(e, dict) and event_on_date(e, target_date)]
    if len(kept) != len(events):
        logger.debug(
            "[SCOREBOARD] %s: dropped %d events outside %s",
            sport,
            len(events) - len(kept),
            target_date.isoformat(),
        )
    return kept


def normalize_scoreboard(
    raw: dict | list | None, sport: str, target_date: date | None = None
) -> list[Game]:
    """Normalize a scoreboard response into Games, dropping placeholders.

    Args:
        raw: Scoreboard document ({"events": [...]}) or a bare event list
        sport: Sport key
        target_date: When given, events on other dates are discarded
    """
    if isinstance(raw, list):
        events = raw
    else:
        events = as_list(as_dict(raw).get("events"))

    if target_date is not None:
        events = filter_events_for_date(events, target_date, sport)

    games = []
    for event in events:
        game = normalize_event(event, sport)
        if game is not None:
            games.append(game)

    logger.debug("[SCOREBOARD] %s: %d events -> %d games", sport, len(events), len(games))
    return games

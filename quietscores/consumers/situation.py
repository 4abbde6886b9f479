"""Live football situation: down and distance, field position, red zone.

Field position is normalized to 0-100 where 0 is the away team's goal line
and 100 is the home team's goal line.
"""

import logging
import re

from quietscores.consumers.display import ordinal
from quietscores.core.types import Game, Situation
from quietscores.utilities.parsing import (
    as_dict,
    as_list,
    dig,
    first_present,
    first_value,
    id_str,
    parse_int,
)
from quietscores.utilities.search import find_first

logger = logging.getLogger(__name__)

SITUATION_TEXT_KEYS = (
    "downDistanceText",
    "shortDownDistanceText",
    "yardLineText",
    "possessionText",
)
EXCLUDED_KEYS = frozenset({"plays", "athletes", "links"})
RED_ZONE_YARDS = 20
MIDFIELD = 50

DOWN_DISTANCE_RE = re.compile(r"\d[a-z]{2}\s&\s\d+")
YARD_LINE_RE = re.compile(r"at\s([A-Z]+\s\d+)")
NUMBER_RE = re.compile(r"\d+")
TOKEN_RE = re.compile(r"[A-Z0-9]+")


# =============================================================================
# Locating the situation node
# =============================================================================


def is_situation_node(node: dict) -> bool:
    """A node with descriptive situation text, or a real down and distance."""
    if any(node.get(key) for key in SITUATION_TEXT_KEYS):
        return True
    down = parse_int(node.get("down"))
    return down is not None and down > 0 and node.get("distance") is not None


def _is_priority_key(key: str) -> bool:
    lowered = key.lower()
    return "situation" in lowered or "lastplay" in lowered or key == "status"


def find_situation(summary: dict) -> dict | None:
    """Bounded search of the whole summary for a situation node."""
    return find_first(
        summary,
        is_situation_node,
        is_priority_key=_is_priority_key,
        excluded_keys=EXCLUDED_KEYS,
    )


def _last_drive_play_situation(summary: dict) -> dict | None:
    plays = as_list(dig(summary, "drives", "current", "plays"))
    return dig(plays, -1, "situation") if plays else None


SITUATION_SOURCES = (
    lambda ctx: as_dict(ctx["game"].situation) if ctx["game"] else None,
    lambda ctx: find_situation(ctx["summary"]),
    lambda ctx: as_dict(dig(ctx["summary"], "situation")),
    lambda ctx: as_dict(dig(ctx["summary"], "boxscore", "situation")),
    lambda ctx: as_dict(dig(ctx["summary"], "header", "competitions", 0, "situation")),
    lambda ctx: as_dict(dig(ctx["summary"], "header", "competitions", 0, "status", "situation")),
    lambda ctx: as_dict(_last_drive_play_situation(ctx["summary"])),
    lambda ctx: as_dict(dig(ctx["summary"], "header", "competitions", 0, "status")),
)


def locate_situation(summary: dict, game: Game | None = None) -> dict:
    """The raw situation node; the scoreboard's copy is preferred."""
    ctx = {"summary": as_dict(summary), "game": game}
    return first_present(SITUATION_SOURCES, ctx, default={})


# =============================================================================
# Text
# =============================================================================


def _drive_last_play_text(summary: dict) -> str:
    value = dig(summary, "drives", "current", "lastPlay", "text")
    return value if isinstance(value, str) else ""


def down_distance_text(situation: dict, game: Game, summary: dict) -> str:
    if game.status == "halftime":
        return "HALFTIME"

    described = first_value(
        situation.get("downDistanceText"), situation.get("shortDownDistanceText")
    )
    if described:
        return str(described)

    down = parse_int(situation.get("down"))
    distance = parse_int(situation.get("distance"))
    if down is not None and down > 0 and distance is not None:
        return f"{ordinal(down)} & {distance}"

    match = DOWN_DISTANCE_RE.search(_drive_last_play_text(summary))
    if match:
        return match.group()

    return "Live" if game.status == "live" else "-"


def yard_line_text(situation: dict, game: Game, summary: dict) -> str:
    described = first_value(situation.get("yardLineText"), situation.get("possessionText"))
    if described:
        return str(described)

    yard_line = parse_int(situation.get("yardLine"))
    if yard_line is not None:
        if yard_line == MIDFIELD:
            return "Midfield"
        if yard_line > MIDFIELD:
            return f"{game.home.abbreviation or ''} {100 - yard_line}".strip()
        return f"{game.away.abbreviation or ''} {yard_line}".strip()

    match = YARD_LINE_RE.search(_drive_last_play_text(summary))
    if match:
        return match.group(1)
    return "-"


# =============================================================================
# Possession and field position
# =============================================================================


def _possession_id(value) -> str | None:
    if isinstance(value, dict):
        return id_str(first_value(dig(value, "team", "id"), value.get("id")))
    if value in (None, "", False):
        return None
    return id_str(value)


def _header_possession(summary: dict) -> str | None:
    for competitor in as_list(dig(summary, "header", "competitions", 0, "competitors")):
        if isinstance(competitor, dict) and (
            competitor.get("possession") or dig(competitor, "possessionTeam", "id")
        ):
            return id_str(dig(competitor, "team", "id"))
    return None


POSSESSION_SOURCES = (
    lambda ctx: _possession_id(ctx["situation"].get("possession")),
    lambda ctx: id_str(dig(ctx["situation"], "possessionTeam", "id")),
    lambda ctx: id_str(dig(ctx["situation"], "lastPlay", "team", "id")),
    lambda ctx: id_str(dig(ctx["summary"], "drives", "current", "team", "id")),
    lambda ctx: _header_possession(ctx["summary"]),
)


def resolve_possession(situation: dict, summary: dict) -> str | None:
    ctx = {"situation": as_dict(situation), "summary": as_dict(summary)}
    return first_present(POSSESSION_SOURCES, ctx)


def _has_token(tokens: list[str], abbreviation: str | None) -> bool:
    return bool(abbreviation) and abbreviation.upper() in tokens


def normalize_yard_line(
    position_text: str,
    situation: dict,
    home_abbreviation: str | None,
    away_abbreviation: str | None,
    is_away_possession: bool = False,
    is_home_possession: bool = False,
) -> int | None:
    """Field coordinate from position text, else from the raw yard line.

    Abbreviations are matched as whole tokens ("NE 20" matches NE, but
    "DEN 20" does not match "DE"). A number in home territory maps to
    100 - n; in away territory to n. Returns None when neither source parses.
    """
    upper = (position_text or "").upper()
    tokens = TOKEN_RE.findall(upper)
    number_match = NUMBER_RE.search(upper)
    number = int(number_match.group()) if number_match else None

    if "MIDFIELD" in tokens:
        return MIDFIELD
    if number is not None and number <= MIDFIELD:
        in_home = _has_token(tokens, home_abbreviation)
        in_away = _has_token(tokens, away_abbreviation)
        if in_home and not in_away:
            return 100 - number
        if in_away and not in_home:
            return number

    raw = parse_int(
        first_value(situation.get("yardLine"), situation.get("yardline"), situation.get("location"))
    )
    if raw is None:
        return None
    raw = max(0, min(100, raw))
    if raw <= MIDFIELD:
        if "OPP" in tokens or "OPPONENT" in tokens:
            if is_away_possession:
                return 100 - raw
            if is_home_possession:
                return raw
        if "OWN" in tokens:
            if is_away_possession:
                return raw
            if is_home_possession:
                return 100 - raw
    return raw


def is_red_zone(yard_line: int | None, is_away_possession: bool, is_home_possession: bool) -> bool:
    """Within 20 yards of the defending team's goal line."""
    if yard_line is None:
        return False
    if is_away_possession:
        return yard_line >= 100 - RED_ZONE_YARDS
    if is_home_possession:
        return yard_line <= RED_ZONE_YARDS
    return False


def resolve_situation(
    summary: dict,
    game: Game,
    away_team_id: str | None = None,
    home_team_id: str | None = None,
) -> Situation:
    """Full Situation for a football game detail view.

    Args:
        summary: Raw summary document
        game: The scoreboard game being detailed
        away_team_id: Boxscore away team id, when matched
        home_team_id: Boxscore home team id, when matched
    """
    summary = as_dict(summary)
    situation = locate_situation(summary, game)
    if not situation:
        logger.debug("[SITUATION] No situation node for game %s", game.id)

    possession = resolve_possession(situation, summary)
    away_id = away_team_id or game.away.id
    home_id = home_team_id or game.home.id
    is_away = bool(possession) and possession == away_id
    is_home = bool(possession) and possession == home_id

    position_text = yard_line_text(situation, game, summary)
    yard_line = normalize_yard_line(
        position_text,
        situation,
        game.home.abbreviation,
        game.away.abbreviation,
        is_away_possession=is_away,
        is_home_possession=is_home,
    )

    return Situation(
        down=parse_int(situation.get("down")),
        distance=parse_int(situation.get("distance")),
        down_distance_text=down_distance_text(situation, game, summary),
        yard_line_text=position_text,
        yard_line=yard_line,
        possession_team_id=possession,
        is_away_possession=is_away,
        is_home_possession=is_home,
        is_red_zone=is_red_zone(yard_line, is_away, is_home),
    )

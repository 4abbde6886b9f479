"""Presentation helpers for scoreboard cards.

Pure functions over Game records: network abbreviations, team initials,
status badges and betting line formatting.
"""

from quietscores.core.types import Game, TeamSide
from quietscores.providers.espn.constants import BASEBALL_SPORTS, FOOTBALL_SPORTS
from quietscores.utilities.parsing import as_dict, format_number, parse_number

# Lower-cased network name -> short label. Partial matches are tried in
# this order after an exact match fails.
NETWORK_ABBREVIATIONS: dict[str, str] = {
    "espn": "ESPN",
    "espn2": "ESPN2",
    "espnu": "ESPNU",
    "espn+": "ESPN+",
    "abc": "ABC",
    "cbs": "CBS",
    "nbc": "NBC",
    "fox": "FOX",
    "fs1": "FS1",
    "fs2": "FS2",
    "fox sports 1": "FS1",
    "fox sports 2": "FS2",
    "sec network": "SECN",
    "secn": "SECN",
    "big ten network": "BTN",
    "btn": "BTN",
    "acc network": "ACCN",
    "accn": "ACCN",
    "pac-12 network": "PAC12",
    "pac12": "PAC12",
    "tnt": "TNT",
    "tbs": "TBS",
    "nfl network": "NFLN",
    "nfln": "NFLN",
    "nba tv": "NBATV",
    "nbatv": "NBATV",
    "mlb network": "MLBN",
    "mlbn": "MLBN",
    "nhl network": "NHLN",
    "nhl": "NHL",
}

MAX_NETWORK_LENGTH = 8
DEFAULT_TEAM_COLOR = "#007bff"

BADGE_CLASSES = {
    "live": "live",
    "halftime": "halftime",
    "final": "final",
}


def abbreviate_network(network: str | None) -> str:
    """Short broadcast label, e.g. 'Big Ten Network' -> 'BTN'."""
    if not network:
        return ""
    lowered = network.strip().lower()
    if lowered in NETWORK_ABBREVIATIONS:
        return NETWORK_ABBREVIATIONS[lowered]
    for key, abbreviation in NETWORK_ABBREVIATIONS.items():
        if key in lowered:
            return abbreviation

    if len(network) > MAX_NETWORK_LENGTH:
        words = network.split()
        if len(words) > 1:
            return "".join(word[0] for word in words)[:4].upper()
        return network[:5].upper()
    return network


def team_initials(name: str | None) -> str:
    """Two-letter badge text for a team without a usable logo."""
    if not name or not name.strip():
        return "?"
    name = name.strip()
    if len(name) <= 4 and " " not in name:
        return name.upper()
    words = name.split()
    if len(words) == 1:
        return words[0][:2].upper()
    return (words[0][0] + words[-1][0]).upper()


def fallback_text(team: TeamSide) -> str:
    if team.abbreviation:
        return team.abbreviation.upper()
    return team_initials(team.short_name or team.name)


def team_color(team: dict | None) -> str:
    """Primary color as '#rrggbb' from a raw team node, else the default."""
    team = as_dict(team)
    nested = as_dict(team.get("team"))
    for value in (
        team.get("color"),
        team.get("alternateColor"),
        nested.get("color"),
        nested.get("alternateColor"),
    ):
        if isinstance(value, str) and value:
            return value if value.startswith("#") else f"#{value}"
    return DEFAULT_TEAM_COLOR


def get_winner(game: Game) -> str | None:
    """'away', 'home', or None for a tie or unparseable score."""
    away = parse_number(game.away_score)
    home = parse_number(game.home_score)
    if away is None or home is None or away == home:
        return None
    return "away" if away > home else "home"


def ordinal(number: int) -> str:
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def inning_display(game: Game) -> str:
    """'Top 7th' style text for baseball; '' for everything else."""
    if game.sport not in BASEBALL_SPORTS or not game.inning_number:
        return ""
    half = (game.top_bottom or "").lower()
    if half == "top":
        prefix = "Top"
    elif half in ("bot", "bottom"):
        prefix = "Bot"
    elif half in ("mid", "middle"):
        prefix = "Mid"
    elif half == "end":
        prefix = "End"
    else:
        return ordinal(game.inning_number)
    return f"{prefix} {ordinal(game.inning_number)}"


def status_badge(game: Game) -> dict:
    """Badge text and CSS class for a scoreboard card."""
    css_class = BADGE_CLASSES.get(game.status, "scheduled")

    if game.status == "live":
        inning = inning_display(game)
        if inning:
            return {"text": inning, "class": css_class}
        return {"text": game.time or "Live", "class": css_class}
    if game.status == "halftime":
        return {"text": "HALFTIME", "class": css_class}
    if game.status == "final":
        return {"text": "FINAL", "class": css_class}
    if game.status == "postponed":
        return {"text": "POSTPONED", "class": css_class}
    return {"text": game.display_time or game.time or "TBD", "class": css_class}


def _signed(value) -> str:
    number = parse_number(value)
    if number is None:
        return str(value)
    shown = format_number(number)
    return f"+{shown}" if number > 0 else shown


def format_spread(spread) -> str:
    """'+3.5' / '-3.5' / '0'; '' when there is no line."""
    if spread is None:
        return ""
    return _signed(spread)


def format_moneyline(moneyline) -> str:
    if moneyline is None:
        return ""
    return _signed(moneyline)


def has_possession(game: Game, side: str) -> bool:
    """Whether side ('away' or 'home') has the ball, or is batting, right now."""
    if not game.is_live:
        return False
    if game.sport in FOOTBALL_SPORTS:
        team = game.away if side == "away" else game.home
        return bool(team.id) and game.possession_team == team.id
    if game.sport in BASEBALL_SPORTS:
        return game.at_bat_team == side
    return False

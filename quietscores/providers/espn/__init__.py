"""ESPN feed provider: HTTP client plus the pure document parsers."""

from quietscores.providers.espn.client import ESPNClient
from quietscores.providers.espn.scoreboard import normalize_event, normalize_scoreboard
from quietscores.providers.espn.standings import filter_standings_by_teams
from quietscores.providers.espn.summary import game_from_summary_header

__all__ = [
    "ESPNClient",
    "filter_standings_by_teams",
    "game_from_summary_header",
    "normalize_event",
    "normalize_scoreboard",
]

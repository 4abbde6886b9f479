"""ESPN endpoint and sport-key constants.

The sport-key enumeration is fixed; adding a sport means adding an entry
to SPORT_PATHS.
"""

from quietscores.core.exceptions import UnknownSportError

ESPN_SITE_URL = "https://site.api.espn.com/apis/site/v2/sports"
ESPN_STANDINGS_URL = "https://site.api.espn.com/apis/v2/sports"

# sport key -> "{sport}/{league}" path segment
SPORT_PATHS: dict[str, str] = {
    "nfl": "football/nfl",
    "nba": "basketball/nba",
    "mlb": "baseball/mlb",
    "nhl": "hockey/nhl",
    "college-football": "football/college-football",
    "college-basketball": "basketball/mens-college-basketball",
}

SPORT_KEYS: tuple[str, ...] = tuple(SPORT_PATHS)

# Extra scoreboard params (D1 only, and enough rows for a full slate)
SCOREBOARD_PARAMS: dict[str, dict[str, str]] = {
    "college-basketball": {"limit": "200", "groups": "50"},
}

FOOTBALL_SPORTS = frozenset({"nfl", "college-football"})
BASEBALL_SPORTS = frozenset({"mlb"})


def get_sport_path(sport: str) -> str:
    """Return the ESPN path segment for a sport key.

    Raises:
        UnknownSportError: sport is not in the enumeration
    """
    try:
        return SPORT_PATHS[sport]
    except KeyError:
        raise UnknownSportError(sport) from None

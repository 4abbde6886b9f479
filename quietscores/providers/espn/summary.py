"""Summary/boxscore extraction for the ESPN provider.

The summary document changes shape by sport and by game state. Every
field here has its own fallback chain and resolves to a safe default
('-', None, [] or 50) rather than raising.
"""

import logging

from quietscores.core.types import CategoryLeader, Game, LeaderCategory, StatComparison
from quietscores.providers.espn.scoreboard import normalize_event
from quietscores.utilities.logging import log_once
from quietscores.utilities.parsing import (
    as_dict,
    as_list,
    dig,
    first_present,
    first_value,
    id_str,
    parse_number,
)

logger = logging.getLogger(__name__)

# Known leader categories, shown first in this order
LEADER_ORDER = ("passingYards", "rushingYards", "receivingYards", "sacks", "totalTackles")


def _team_id(node: dict | None) -> str | None:
    return id_str(dig(node, "team", "id"))


# =============================================================================
# Team matching
# =============================================================================


def _match_team(
    teams: list[dict], team_id: str | None, name: str | None, short_names: tuple
) -> dict | None:
    if team_id:
        for team in teams:
            if _team_id(team) == team_id:
                return team
    for team in teams:
        if name and dig(team, "team", "displayName") == name:
            return team
    for team in teams:
        info = as_dict(team.get("team"))
        for candidate in (info.get("shortDisplayName"), info.get("name")):
            if candidate and (candidate == name or candidate in short_names):
                return team
    return None


def match_boxscore_teams(summary: dict, game: Game) -> tuple[dict | None, dict | None]:
    """Find the away/home boxscore team objects for a scoreboard game.

    Both sides are matched by id, then display name, then short name before
    anything else happens. A team matched to one side is never offered to
    the other. Boxscore ordering does not follow home/away, so position
    (0 = away, 1 = home) only fills a side the chain left unmatched.
    """
    teams = [t for t in as_list(dig(summary, "boxscore", "teams")) if isinstance(t, dict)]
    if not teams:
        return None, None

    away_shorts = tuple(s for s in (game.away.short_name, game.away.abbreviation) if s)
    home_shorts = tuple(s for s in (game.home.short_name, game.home.abbreviation) if s)

    # An exact id hit for home is reserved before away's looser tiers run
    home_by_id = _match_team(teams, game.home.id, None, ()) if game.home.id else None
    away = _match_team(
        [t for t in teams if t is not home_by_id], game.away.id, game.away.name, away_shorts
    )
    home = _match_team(
        [t for t in teams if t is not away], game.home.id, game.home.name, home_shorts
    )

    if away is None or home is None:
        log_once(logger, f"summary:positional:{game.sport}", "[SUMMARY] Positional team match used")
    if away is None:
        away = _positional(teams, 0, home)
    if home is None:
        home = _positional(teams, 1, away)
    return away, home


def _positional(teams: list[dict], index: int, taken: dict | None) -> dict | None:
    if index < len(teams) and teams[index] is not taken:
        return teams[index]
    for team in teams:
        if team is not taken:
            return team
    return None


def match_header_competitors(summary: dict, game: Game) -> tuple[dict | None, dict | None]:
    """Header competitors for away/home, by team id or homeAway tag."""
    competitors = [
        c
        for c in as_list(dig(summary, "header", "competitions", 0, "competitors"))
        if isinstance(c, dict)
    ]

    def find(team_id: str | None, side: str) -> dict | None:
        for competitor in competitors:
            if team_id and _team_id(competitor) == team_id:
                return competitor
        for competitor in competitors:
            if competitor.get("homeAway") == side:
                return competitor
        return None

    return find(game.away.id, "away"), find(game.home.id, "home")


# =============================================================================
# Linescores
# =============================================================================


def _keyed_linescores(container: list, team_id: str | None) -> list | None:
    if not team_id:
        return None
    for entry in as_list(container):
        if not isinstance(entry, dict):
            continue
        entry_id = id_str(first_value(entry.get("teamId"), dig(entry, "team", "id")))
        if entry_id == team_id:
            return as_list(entry.get("linescores"))
    return None


LINESCORE_CHAIN = (
    lambda ctx: as_list(dig(ctx, "header_competitor", "linescores")),
    lambda ctx: as_list(dig(ctx, "box_team", "linescores")),
    lambda ctx: _keyed_linescores(dig(ctx, "summary", "boxscore", "linescores"), ctx["team_id"]),
    lambda ctx: _keyed_linescores(dig(ctx, "summary", "linescores"), ctx["team_id"]),
)


def resolve_linescores(
    summary: dict,
    header_competitor: dict | None,
    box_team: dict | None,
    fallback_team_id: str | None = None,
) -> list:
    """Official per-period scores for one side; [] when none are published."""
    ctx = {
        "summary": summary,
        "header_competitor": header_competitor,
        "box_team": box_team,
        "team_id": _team_id(box_team) or fallback_team_id,
    }
    return first_present(LINESCORE_CHAIN, ctx, default=[])


# =============================================================================
# Plays
# =============================================================================


def _drive_plays(summary: dict) -> list:
    plays = []
    for drive in as_list(dig(summary, "drives", "previous")):
        plays.extend(p for p in as_list(dig(drive, "plays")) if isinstance(p, dict))
    return plays


PLAY_SOURCES = (
    lambda s: as_list(s.get("plays")),
    lambda s: as_list(dig(s, "boxscore", "plays")),
    _drive_plays,
    lambda s: as_list(dig(s, "drives", "current", "plays")),
)


def extract_plays(summary: dict) -> list[dict]:
    """Play log, oldest first: the first non-empty source wins."""
    plays = first_present(PLAY_SOURCES, as_dict(summary), default=[])
    return [p for p in plays if isinstance(p, dict)]


def combined_plays(summary: dict) -> list[dict]:
    """Every play from every source, concatenated in source order."""
    summary = as_dict(summary)
    plays: list[dict] = []
    for source in PLAY_SOURCES:
        plays.extend(p for p in source(summary) if isinstance(p, dict))
    return plays


# =============================================================================
# Leaders
# =============================================================================


def _leader_sources(summary: dict) -> list:
    return first_present(
        (
            lambda s: as_list(s.get("leaders")),
            lambda s: as_list(dig(s, "boxscore", "leaders")),
            lambda s: as_list(dig(s, "header", "competitions", 0, "leaders")),
        ),
        summary,
        default=[],
    )


def _category_leader(team_id: str, raw: dict) -> CategoryLeader:
    athlete = as_dict(raw.get("athlete"))
    return CategoryLeader(
        team_id=team_id,
        athlete_name=first_value(
            athlete.get("displayName"),
            athlete.get("fullName"),
            athlete.get("shortName"),
            default="",
        ),
        display_value=str(first_value(raw.get("displayValue"), raw.get("value"), default="")),
        athlete=athlete,
    )


def extract_leaders(summary: dict) -> list[LeaderCategory]:
    """Invert per-team leader lists into one entry per stat category.

    Each category holds the top leader from each team. Categories are
    deduplicated by name; the known ones come first in LEADER_ORDER,
    the rest follow in the order first seen.
    """
    categories: dict[str, dict] = {}

    for team_block in _leader_sources(as_dict(summary)):
        team_id = _team_id(team_block)
        if not team_id:
            continue
        for category in as_list(dig(team_block, "leaders")):
            if not isinstance(category, dict):
                continue
            key = category.get("name") or category.get("displayName")
            top = dig(category, "leaders", 0)
            if not key or not isinstance(top, dict):
                continue

            entry = categories.setdefault(
                key,
                {
                    "name": category.get("name") or key,
                    "display_name": category.get("displayName") or key,
                    "leaders": [],
                },
            )
            if any(leader.team_id == team_id for leader in entry["leaders"]):
                continue
            entry["leaders"].append(_category_leader(team_id, top))

    def rank(item: dict) -> int:
        try:
            return LEADER_ORDER.index(item["name"])
        except ValueError:
            return len(LEADER_ORDER)

    ordered = sorted(categories.values(), key=rank)
    return [
        LeaderCategory(
            name=item["name"],
            display_name=item["display_name"],
            leaders=tuple(item["leaders"]),
        )
        for item in ordered
    ]


# =============================================================================
# Players and team statistics
# =============================================================================


def extract_players(box_team: dict | None) -> list[dict]:
    players = first_present(
        (
            lambda t: as_list(dig(t, "statistics", 0, "athletes")),
            lambda t: as_list(dig(t, "players")),
        ),
        as_dict(box_team),
        default=[],
    )
    return [p for p in players if isinstance(p, dict)]


def team_stat(box_team: dict | None, name: str) -> str:
    """Display value of a named team statistic; "0" when missing."""
    for stat in as_list(dig(box_team, "statistics")):
        if isinstance(stat, dict) and stat.get("name") == name:
            display = stat.get("displayValue")
            if isinstance(display, str):
                return display
            value = stat.get("value")
            return str(value) if value else "0"
    return "0"


def share(away_value, home_value) -> tuple[float, float]:
    """Percent share of the combined total for each side (50/50 when zero)."""
    away = parse_number(away_value) or 0.0
    home = parse_number(home_value) or 0.0
    total = away + home
    if total <= 0:
        return 50.0, 50.0
    return away / total * 100, home / total * 100


def stat_comparisons(
    away_team: dict | None,
    home_team: dict | None,
    limit: int | None = None,
) -> list[StatComparison]:
    """Side-by-side team statistics in the away team's order.

    Home values are matched by statistic name, falling back to position.
    """
    away_stats = [s for s in as_list(dig(away_team, "statistics")) if isinstance(s, dict)]
    home_stats = [s for s in as_list(dig(home_team, "statistics")) if isinstance(s, dict)]
    home_by_name = {s.get("name"): s for s in home_stats if s.get("name")}

    rows = []
    for index, stat in enumerate(away_stats):
        # Player stat groups share the key but are not team totals
        if "athletes" in stat:
            continue
        home_stat = home_by_name.get(stat.get("name"))
        if home_stat is None and index < len(home_stats):
            home_stat = home_stats[index]
        home_stat = home_stat or {}

        away_display = str(first_value(stat.get("displayValue"), stat.get("value"), default=""))
        home_display = str(
            first_value(home_stat.get("displayValue"), home_stat.get("value"), default="")
        )
        away_share, home_share = share(away_display, home_display)
        rows.append(
            StatComparison(
                name=str(stat.get("name") or ""),
                label=str(first_value(stat.get("label"), stat.get("name"), default="")),
                away_value=away_display,
                home_value=home_display,
                away_share=away_share,
                home_share=home_share,
            )
        )
        if limit is not None and len(rows) >= limit:
            break
    return rows


def score_share(game: Game) -> tuple[float, float]:
    return share(game.away_score, game.home_score)


def extract_headlines(summary: dict) -> list[dict]:
    return [h for h in as_list(as_dict(summary).get("headlines")) if isinstance(h, dict)]


def extract_commentary(summary: dict) -> list[dict]:
    return [c for c in as_list(as_dict(summary).get("commentary")) if isinstance(c, dict)]


# =============================================================================
# Header
# =============================================================================


def game_from_summary_header(summary: dict, sport: str) -> Game | None:
    """Build a Game from the summary header when no scoreboard record is at hand."""
    header = as_dict(as_dict(summary).get("header"))
    competition = as_dict(dig(header, "competitions", 0))
    if not competition:
        return None

    event = {
        "id": first_value(header.get("id"), competition.get("id")),
        "date": competition.get("date"),
        "status": first_value(competition.get("status"), header.get("status"), default={}),
        "competitions": [competition],
    }
    broadcasts = as_list(competition.get("broadcasts"))
    if broadcasts:
        event["broadcasts"] = broadcasts
    return normalize_event(event, sport)

"""Standings parsing and team-group matching for the ESPN provider.

The standings endpoint comes back in one of a handful of layouts depending
on the league. detect_shape() names the layout first; each layout then has
its own walker, so adding a layout means adding an enum member and a branch.
"""

import logging
from collections.abc import Iterator
from enum import Enum

from quietscores.core.types import StandingsEntry, StandingsGroup, StandingsResult, TeamIdentifiers
from quietscores.utilities.logging import log_once
from quietscores.utilities.parsing import as_dict, as_list, dig, first_value, id_str, parse_float

logger = logging.getLogger(__name__)

# Groups returned when no group holds a requested team
FALLBACK_GROUP_COUNT = 2


class StandingsShape(Enum):
    """Known standings document layouts."""

    DIVISIONS = "divisions"  # children (conferences) -> children (divisions)
    CONFERENCES = "conferences"  # children (conferences) with entries
    ENTRIES = "entries"  # standings.entries at the top level
    GROUPS = "groups"  # groups[]
    ARRAY = "array"  # top-level list of groups, optionally with children
    UNKNOWN = "unknown"


def detect_shape(document) -> StandingsShape:
    if isinstance(document, list):
        return StandingsShape.ARRAY if document else StandingsShape.UNKNOWN
    if not isinstance(document, dict):
        return StandingsShape.UNKNOWN

    children = [c for c in as_list(document.get("children")) if isinstance(c, dict)]
    if children:
        if any(as_list(child.get("children")) for child in children):
            return StandingsShape.DIVISIONS
        return StandingsShape.CONFERENCES
    if as_list(dig(document, "standings", "entries")):
        return StandingsShape.ENTRIES
    if as_list(document.get("groups")):
        return StandingsShape.GROUPS
    return StandingsShape.UNKNOWN


def _with_children(groups: list) -> Iterator[dict]:
    """Yield each group's children when it has them, else the group itself."""
    for group in groups:
        if not isinstance(group, dict):
            continue
        children = [c for c in as_list(group.get("children")) if isinstance(c, dict)]
        if children:
            yield from children
        else:
            yield group


def iter_raw_groups(document, shape: StandingsShape) -> Iterator[dict]:
    """Walk every leaf grouping of a standings document in document order."""
    if shape in (StandingsShape.DIVISIONS, StandingsShape.CONFERENCES):
        yield from _with_children(as_list(document.get("children")))
    elif shape is StandingsShape.ENTRIES:
        yield {"name": "Standings", "standings": document.get("standings")}
    elif shape is StandingsShape.GROUPS:
        yield from (g for g in as_list(document.get("groups")) if isinstance(g, dict))
    elif shape is StandingsShape.ARRAY:
        yield from _with_children(document)


# =============================================================================
# Entries
# =============================================================================


def _stats_map(raw_entry: dict) -> dict:
    stats = {}
    for stat in as_list(raw_entry.get("stats")):
        if not isinstance(stat, dict):
            continue
        name = first_value(stat.get("name"), stat.get("type"))
        if name:
            stats[name] = first_value(stat.get("displayValue"), stat.get("value"))
    return stats


def _stat_value(raw_entry: dict, name: str) -> float:
    for stat in as_list(raw_entry.get("stats")):
        if isinstance(stat, dict) and stat.get("name") == name:
            value = parse_float(stat.get("value"))
            if value is None:
                value = parse_float(stat.get("displayValue"))
            return value or 0.0
    return 0.0


def parse_entry(raw_entry: dict) -> StandingsEntry:
    team = as_dict(raw_entry.get("team"))
    logos = as_list(team.get("logos"))
    stats = _stats_map(raw_entry)
    return StandingsEntry(
        team_id=id_str(team.get("id")) or "",
        name=first_value(team.get("displayName"), team.get("name"), default=""),
        abbreviation=team.get("abbreviation") or "",
        logo=dig(logos, 0, "href"),
        wins=_stat_value(raw_entry, "wins"),
        losses=_stat_value(raw_entry, "losses"),
        win_percent=_stat_value(raw_entry, "winPercent"),
        games_behind=str(stats.get("gamesBehind", "-")),
        stats=stats,
    )


def parse_group(raw_group: dict) -> StandingsGroup | None:
    """A named group with entries sorted by wins desc then win percent desc.

    Returns None when the group has no entries.
    """
    raw_entries = [
        e for e in as_list(dig(raw_group, "standings", "entries")) if isinstance(e, dict)
    ]
    if not raw_entries:
        return None
    entries = sorted(
        (parse_entry(e) for e in raw_entries),
        key=lambda entry: (-entry.wins, -entry.win_percent),
    )
    name = first_value(
        raw_group.get("name"),
        raw_group.get("abbreviation"),
        raw_group.get("shortName"),
        default="",
    )
    return StandingsGroup(name=name, entries=tuple(entries))


def parse_standings(document) -> list[StandingsGroup]:
    """Every non-empty grouping in the document, in document order."""
    shape = detect_shape(document)
    if shape is StandingsShape.UNKNOWN:
        log_once(logger, "standings:unknown-shape", "[STANDINGS] Unrecognized standings layout")
        return []
    groups = []
    for raw_group in iter_raw_groups(document, shape):
        group = parse_group(raw_group)
        if group is not None:
            groups.append(group)
    return groups


# =============================================================================
# Matching
# =============================================================================


def team_matches(entry: StandingsEntry, identifiers: TeamIdentifiers) -> bool:
    return entry.is_highlighted(identifiers)


def filter_standings_by_teams(document, identifiers: TeamIdentifiers) -> StandingsResult | None:
    """Groups holding any of the identified teams.

    When nothing matches, the first two groups come back with
    is_approximate set. None only when the document has no grouping.

    Args:
        document: Raw standings document (any known layout)
        identifiers: Ids, names and abbreviations of the teams to find
    """
    groups = parse_standings(document)
    if not groups:
        return None

    matching = tuple(
        group
        for group in groups
        if any(team_matches(entry, identifiers) for entry in group.entries)
    )
    if matching:
        logger.debug("[STANDINGS] %d of %d groups matched", len(matching), len(groups))
        return StandingsResult(groups=matching, identifiers=identifiers)

    logger.debug("[STANDINGS] No group matched %s; using first groups", identifiers.to_dict())
    return StandingsResult(
        groups=tuple(groups[:FALLBACK_GROUP_COUNT]),
        identifiers=identifiers,
        is_approximate=True,
    )

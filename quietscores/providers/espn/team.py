"""Team page parsing: profile, roster groups, schedule rows, conferences.

All inputs come from best-effort endpoints and may be None.
"""

import logging

from quietscores.core.types import RosterGroup, ScheduleRow, TeamIdentifiers, TeamProfile
from quietscores.utilities.parsing import as_dict, as_list, dig, first_value, format_number, id_str

logger = logging.getLogger(__name__)


def parse_team_info(raw: dict | None) -> TeamProfile | None:
    """Header data from the team endpoint; None when the document has no team."""
    team = as_dict(as_dict(raw).get("team"))
    team_id = id_str(team.get("id"))
    if not team_id:
        return None
    color = team.get("color")
    return TeamProfile(
        id=team_id,
        name=first_value(team.get("displayName"), team.get("name"), default=""),
        abbreviation=team.get("abbreviation") or "",
        logo=first_value(dig(team, "logos", 0, "href"), team.get("logo")),
        color=f"#{color}" if color else None,
        record=str(dig(team, "record", "items", 0, "summary", default="")),
    )


def identifiers_for_team(
    team_id: str,
    raw_info: dict | None = None,
    name: str | None = None,
    abbreviation: str | None = None,
) -> TeamIdentifiers:
    """Identifiers for locating one team in standings.

    Combines what the caller already knows with every name variant the team
    endpoint reports.
    """
    team = as_dict(as_dict(raw_info).get("team"))
    return TeamIdentifiers.build(
        ids=[team_id, id_str(team.get("id"))],
        names=[name, team.get("displayName"), team.get("shortDisplayName"), team.get("name")],
        abbreviations=[abbreviation, team.get("abbreviation")],
    )


def group_roster(raw: dict | None) -> list[RosterGroup]:
    """Roster by position.

    Some leagues pre-group athletes ({position, items}); otherwise players
    are grouped by position name in first-seen order.
    """
    athletes = [a for a in as_list(as_dict(raw).get("athletes")) if isinstance(a, dict)]
    if not athletes:
        return []

    if "items" in athletes[0]:
        return [
            RosterGroup(
                name=str(first_value(group.get("position"), group.get("name"), default="Players")),
                players=tuple(p for p in as_list(group.get("items")) if isinstance(p, dict)),
            )
            for group in athletes
        ]

    grouped: dict[str, list[dict]] = {}
    for player in athletes:
        position = first_value(
            dig(player, "position", "displayName"),
            dig(player, "position", "name"),
            default="Other",
        )
        grouped.setdefault(position, []).append(player)
    return [RosterGroup(name=name, players=tuple(players)) for name, players in grouped.items()]


def _score_text(competitor: dict | None) -> str:
    score = as_dict(competitor).get("score")
    if isinstance(score, dict):
        score = score.get("value")
    if score is None:
        return ""
    if isinstance(score, float):
        return format_number(score)
    return str(score)


def _schedule_row(event: dict, team_id: str) -> ScheduleRow:
    competition = as_dict(dig(event, "competitions", 0))
    competitors = [c for c in as_list(competition.get("competitors")) if isinstance(c, dict)]

    us = next(
        (
            c
            for c in competitors
            if id_str(c.get("id")) == team_id or id_str(dig(c, "team", "id")) == team_id
        ),
        None,
    )
    them = next((c for c in competitors if c is not us), None)
    if them is None and competitors:
        them = competitors[1] if len(competitors) > 1 else competitors[0]
    opponent = as_dict(as_dict(them).get("team"))

    status_type = as_dict(
        first_value(dig(competition, "status", "type"), dig(event, "status", "type"))
    )
    status_name = status_type.get("name") or ""
    our_score = _score_text(us)
    is_completed = status_name == "STATUS_FINAL" or bool(status_type.get("completed"))
    is_scheduled = status_name == "STATUS_SCHEDULED" or (not is_completed and not our_score)

    if is_completed:
        status_text = "Final"
    elif is_scheduled:
        status_text = dig(event, "status", "type", "shortDetail") or "Scheduled"
    else:
        status_text = dig(competition, "status", "type", "shortDetail") or ""

    winner = as_dict(us).get("winner")
    return ScheduleRow(
        id=id_str(event.get("id")),
        date=first_value(event.get("date"), competition.get("date")),
        is_home=as_dict(us).get("homeAway") == "home",
        opponent_name=first_value(opponent.get("displayName"), opponent.get("name"), default="TBD"),
        opponent_abbreviation=opponent.get("abbreviation") or "",
        opponent_logo=first_value(dig(opponent, "logos", 0, "href"), opponent.get("logo")),
        our_score=our_score,
        their_score=_score_text(them),
        is_completed=is_completed,
        is_scheduled=is_scheduled,
        won=winner is True,
        lost=winner is False,
        status_text=status_text,
    )


def parse_schedule(raw: dict | None, team_id: str) -> list[ScheduleRow]:
    """Schedule rows from the team's point of view."""
    raw = as_dict(raw)
    events = first_value(as_list(raw.get("events")), as_list(raw.get("items")), default=[])
    return [_schedule_row(event, str(team_id)) for event in events if isinstance(event, dict)]


def parse_team_conferences(raw: dict | None) -> dict[str, str]:
    """Map team display name and team id to conference name."""
    raw = as_dict(raw)
    teams = first_value(
        as_list(dig(raw, "sports", 0, "leagues", 0, "teams")),
        as_list(raw.get("teams")),
        default=[],
    )

    conferences: dict[str, str] = {}
    for entry in teams:
        if not isinstance(entry, dict):
            continue
        team = as_dict(entry.get("team")) or entry
        name = first_value(team.get("displayName"), team.get("name"))
        conference = first_value(
            dig(team, "group", "name"),
            dig(team, "conference", "name"),
            dig(team, "groups", 0, "name"),
            dig(team, "conferences", 0, "name"),
        )
        if not name or not conference:
            continue
        conferences[name] = conference
        team_id = id_str(team.get("id"))
        if team_id:
            conferences[team_id] = conference

    logger.debug("[TEAMS] Conference map built for %d teams", len(conferences))
    return conferences

"""Core data types for quietscores.

All records are frozen dataclasses built fresh from each feed response and
never mutated afterwards. Attribute names are snake_case; to_dict() renders
the camelCase shape the presentation layer consumes.
"""

from dataclasses import dataclass, field
from typing import Any

# Canonical game states, in display priority order
GAME_STATUSES = ("live", "halftime", "scheduled", "postponed", "final")


@dataclass(frozen=True)
class TeamSide:
    """One side of a matchup as shown on a scoreboard."""

    name: str
    id: str | None = None
    short_name: str | None = None
    abbreviation: str | None = None
    logo: str | None = None
    record: str | None = None  # "10-2" style summary


@dataclass(frozen=True)
class Odds:
    """Closing betting lines.

    spread is stored from the away team's perspective. The home spread is
    derived on every read and never stored.
    """

    spread: float | None = None
    over_under: float | None = None
    away_moneyline: int | None = None
    home_moneyline: int | None = None

    @property
    def away_spread(self) -> float | None:
        return self.spread

    @property
    def home_spread(self) -> float | None:
        if self.spread is None:
            return None
        return -self.spread

    def to_dict(self) -> dict:
        return {
            "spread": self.spread,
            "overUnder": self.over_under,
            "awayMoneyline": self.away_moneyline,
            "homeMoneyline": self.home_moneyline,
        }


@dataclass(frozen=True)
class Game:
    """A single scoreboard game.

    Scores are a numeric string or "" (never None) so display code is total.
    """

    id: str
    sport: str
    away: TeamSide
    home: TeamSide
    status: str  # "scheduled" | "live" | "halftime" | "final" | "postponed"
    sport_name: str = ""
    away_score: str = ""
    home_score: str = ""
    time: str = ""
    display_time: str = ""
    full_date_time: str | None = None
    period: int | None = None
    clock: Any = None
    odds: Odds | None = None
    broadcast_channel: str | None = None

    # Football
    possession_team: str | None = None

    # Baseball
    at_bat_team: str | None = None  # "away" | "home"
    inning_number: int | None = None
    top_bottom: str | None = None  # "top" | "bot"
    bases: str | None = None  # "loaded", "1st & 2nd", ..., "empty"
    balls: int | None = None
    strikes: int | None = None
    outs: int | None = None

    # Raw live situation from the scoreboard, kept for the detail resolver
    situation: dict | None = field(default=None, hash=False, repr=False)

    @property
    def away_team(self) -> str:
        return self.away.name

    @property
    def home_team(self) -> str:
        return self.home.name

    @property
    def is_live(self) -> bool:
        return self.status in ("live", "halftime")

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "sport": self.sport,
            "sportName": self.sport_name,
            "awayTeam": self.away.name,
            "homeTeam": self.home.name,
            "awayScore": self.away_score,
            "homeScore": self.home_score,
            "awayTeamRecord": self.away.record,
            "homeTeamRecord": self.home.record,
            "status": self.status,
            "time": self.time,
            "displayTime": self.display_time,
            "fullDateTime": self.full_date_time,
            "gameDate": self.full_date_time,
            "period": self.period,
            "clock": self.clock,
            "homeLogo": self.home.logo,
            "awayLogo": self.away.logo,
            "homeShortName": self.home.short_name,
            "awayShortName": self.away.short_name,
            "homeAbbreviation": self.home.abbreviation,
            "awayAbbreviation": self.away.abbreviation,
            "possessionTeam": self.possession_team,
            "awayTeamId": self.away.id,
            "homeTeamId": self.home.id,
            "atBatTeam": self.at_bat_team,
            "inningNumber": self.inning_number,
            "topBottom": self.top_bottom,
            "bases": self.bases,
            "balls": self.balls,
            "strikes": self.strikes,
            "outs": self.outs,
        }
        if self.odds is not None:
            data["odds"] = self.odds.to_dict()
        if self.broadcast_channel:
            data["broadcastChannel"] = self.broadcast_channel
        return data


# =============================================================================
# Game detail
# =============================================================================


@dataclass(frozen=True)
class CategoryLeader:
    """Top player for one team in one stat category."""

    team_id: str
    athlete_name: str = ""
    display_value: str = ""
    athlete: dict = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        return {
            "teamId": self.team_id,
            "athleteName": self.athlete_name,
            "displayValue": self.display_value,
            "athlete": self.athlete,
        }


@dataclass(frozen=True)
class LeaderCategory:
    """A stat category with at most one leader per team."""

    name: str
    display_name: str
    leaders: tuple[CategoryLeader, ...] = ()

    def leader_for(self, team_id: str | None) -> CategoryLeader | None:
        if team_id is None:
            return None
        for leader in self.leaders:
            if leader.team_id == str(team_id):
                return leader
        return None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "leaders": [leader.to_dict() for leader in self.leaders],
        }


@dataclass(frozen=True)
class PeriodScores:
    """Per-period points reconstructed from the play log.

    Index 0 is period 1; index 4 is overtime.
    """

    away: tuple[int, ...] = (0, 0, 0, 0, 0)
    home: tuple[int, ...] = (0, 0, 0, 0, 0)

    def side(self, side: str) -> tuple[int, ...]:
        return self.away if side == "away" else self.home

    @property
    def is_empty(self) -> bool:
        return not any(self.away) and not any(self.home)


@dataclass(frozen=True)
class Situation:
    """Live football situation, resolved from the summary document."""

    down: int | None = None
    distance: int | None = None
    down_distance_text: str = "-"
    yard_line_text: str = "-"
    yard_line: int | None = None  # 0 = away goal line, 100 = home goal line
    possession_team_id: str | None = None
    is_away_possession: bool = False
    is_home_possession: bool = False
    is_red_zone: bool = False

    def to_dict(self) -> dict:
        return {
            "down": self.down,
            "distance": self.distance,
            "downDistanceText": self.down_distance_text,
            "yardLineText": self.yard_line_text,
            "yardLine": self.yard_line,
            "possessionTeamId": self.possession_team_id,
            "isAwayPossession": self.is_away_possession,
            "isHomePossession": self.is_home_possession,
            "isRedZone": self.is_red_zone,
        }


@dataclass(frozen=True)
class WinProbabilityPoint:
    """Normalized win probability; home + away == 1."""

    home_win_percentage: float
    away_win_percentage: float
    play_id: str | None = None
    play: dict | None = field(default=None, repr=False)
    period: int | None = None
    clock: str | None = None

    def to_dict(self) -> dict:
        return {
            "homeWinPercentage": self.home_win_percentage,
            "awayWinPercentage": self.away_win_percentage,
            "playId": self.play_id,
            "play": self.play,
            "period": self.period,
            "clock": self.clock,
        }


@dataclass(frozen=True)
class StatComparison:
    """A team statistic shown side by side with each team's share of the total."""

    name: str
    label: str
    away_value: str
    home_value: str
    away_share: float = 50.0
    home_share: float = 50.0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "label": self.label,
            "awayValue": self.away_value,
            "homeValue": self.home_value,
            "awayShare": self.away_share,
            "homeShare": self.home_share,
        }


@dataclass(frozen=True)
class GameDetail:
    """Enriched detail for one game (summary extraction + derived analytics)."""

    game: Game
    away_team: dict | None = field(default=None, repr=False)
    home_team: dict | None = field(default=None, repr=False)
    plays: tuple[dict, ...] = field(default=(), repr=False)
    leaders: tuple[LeaderCategory, ...] = ()
    headlines: tuple[dict, ...] = ()
    commentary: tuple[dict, ...] = ()
    away_linescores: tuple[str, ...] = ("-", "-", "-", "-", "-")
    home_linescores: tuple[str, ...] = ("-", "-", "-", "-", "-")
    reconstructed_scores: PeriodScores = field(default_factory=PeriodScores)
    away_players: tuple[dict, ...] = field(default=(), repr=False)
    home_players: tuple[dict, ...] = field(default=(), repr=False)
    team_stats: tuple[StatComparison, ...] = ()
    away_score_share: float = 50.0
    home_score_share: float = 50.0
    situation: Situation | None = None
    win_probability: tuple[WinProbabilityPoint, ...] = ()
    current_win_probability: WinProbabilityPoint | None = None

    @property
    def view_state(self) -> str:
        from quietscores.consumers.detail_view import view_state_for_status

        return view_state_for_status(self.game.status)

    def to_dict(self) -> dict:
        return {
            "game": self.game.to_dict(),
            "viewState": self.view_state,
            "awayTeam": self.away_team,
            "homeTeam": self.home_team,
            "plays": list(self.plays),
            "leaders": [category.to_dict() for category in self.leaders],
            "headlines": list(self.headlines),
            "commentary": list(self.commentary),
            "awayLinescores": list(self.away_linescores),
            "homeLinescores": list(self.home_linescores),
            "awayPlayers": list(self.away_players),
            "homePlayers": list(self.home_players),
            "teamStats": [stat.to_dict() for stat in self.team_stats],
            "awayScoreShare": self.away_score_share,
            "homeScoreShare": self.home_score_share,
            "situation": self.situation.to_dict() if self.situation else None,
            "winProbability": [point.to_dict() for point in self.win_probability],
            "currentWinProbability": (
                self.current_win_probability.to_dict() if self.current_win_probability else None
            ),
        }


# =============================================================================
# Standings
# =============================================================================


def _norm(value: Any) -> str:
    if not value:
        return ""
    return " ".join(str(value).split()).lower()


@dataclass(frozen=True)
class TeamIdentifiers:
    """Parallel id/name/abbreviation lists used to locate teams in standings.

    Never assumed complete; empty values are dropped on construction.
    """

    ids: tuple[str, ...] = ()
    names: tuple[str, ...] = ()
    abbreviations: tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        ids: list | tuple = (),
        names: list | tuple = (),
        abbreviations: list | tuple = (),
    ) -> "TeamIdentifiers":
        return cls(
            ids=tuple(str(i) for i in ids if i not in (None, "")),
            names=tuple(n for n in names if n),
            abbreviations=tuple(a for a in abbreviations if a),
        )

    @classmethod
    def from_game(cls, game: Game) -> "TeamIdentifiers":
        return cls.build(
            ids=[game.home.id, game.away.id],
            names=[game.home.name, game.away.name],
            abbreviations=[game.home.abbreviation, game.away.abbreviation],
        )

    @property
    def is_empty(self) -> bool:
        return not (self.ids or self.names or self.abbreviations)

    def matches(
        self,
        team_id: Any = None,
        name: str | None = None,
        abbreviation: str | None = None,
    ) -> bool:
        """Id exact match, name containment either way, or abbreviation match.

        Names and abbreviations compare case-insensitively with whitespace
        collapsed. Empty values never match.
        """
        if team_id not in (None, "") and str(team_id) in self.ids:
            return True

        candidate = _norm(name)
        if candidate:
            for known in self.names:
                known = _norm(known)
                if known and (known in candidate or candidate in known):
                    return True

        abbr = _norm(abbreviation)
        if abbr:
            return any(_norm(known) == abbr for known in self.abbreviations)
        return False

    def to_dict(self) -> dict:
        return {
            "ids": list(self.ids),
            "names": list(self.names),
            "abbrs": list(self.abbreviations),
        }


@dataclass(frozen=True)
class StandingsEntry:
    """A team row inside a standings group."""

    team_id: str
    name: str
    abbreviation: str = ""
    logo: str | None = None
    wins: float = 0
    losses: float = 0
    win_percent: float = 0
    games_behind: str = "-"
    stats: dict = field(default_factory=dict)

    def stat(self, name: str, default: Any = None) -> Any:
        return self.stats.get(name, default)

    def is_highlighted(self, identifiers: TeamIdentifiers) -> bool:
        return identifiers.matches(self.team_id, self.name, self.abbreviation)

    def to_dict(self) -> dict:
        return {
            "teamId": self.team_id,
            "name": self.name,
            "abbreviation": self.abbreviation,
            "logo": self.logo,
            "wins": self.wins,
            "losses": self.losses,
            "winPercent": self.win_percent,
            "gamesBehind": self.games_behind,
            "stats": self.stats,
        }


@dataclass(frozen=True)
class StandingsGroup:
    """A division or conference, entries sorted by wins then win percentage."""

    name: str
    entries: tuple[StandingsEntry, ...] = ()

    def to_dict(self) -> dict:
        return {"name": self.name, "entries": [entry.to_dict() for entry in self.entries]}


@dataclass(frozen=True)
class StandingsResult:
    """Groups matched for a set of teams.

    is_approximate is set when nothing matched and the first groups of the
    document are returned instead.
    """

    groups: tuple[StandingsGroup, ...]
    identifiers: TeamIdentifiers
    is_approximate: bool = False

    def to_dict(self) -> dict:
        return {
            "groups": [group.to_dict() for group in self.groups],
            "teamIdentifiers": self.identifiers.to_dict(),
            "isAllGroups": self.is_approximate,
        }


# =============================================================================
# Team page
# =============================================================================


@dataclass(frozen=True)
class TeamProfile:
    """Team header data from the team endpoint."""

    id: str
    name: str
    abbreviation: str = ""
    logo: str | None = None
    color: str | None = None
    record: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "abbreviation": self.abbreviation,
            "logo": self.logo,
            "color": self.color,
            "record": self.record,
        }


@dataclass(frozen=True)
class RosterGroup:
    name: str
    players: tuple[dict, ...] = ()

    def to_dict(self) -> dict:
        return {"name": self.name, "players": list(self.players)}


@dataclass(frozen=True)
class ScheduleRow:
    """One game in a team's schedule, from that team's point of view."""

    id: str | None
    date: str | None
    is_home: bool
    opponent_name: str
    opponent_abbreviation: str = ""
    opponent_logo: str | None = None
    our_score: str = ""
    their_score: str = ""
    is_completed: bool = False
    is_scheduled: bool = False
    won: bool = False
    lost: bool = False
    status_text: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "isHome": self.is_home,
            "opponentName": self.opponent_name,
            "opponentAbbreviation": self.opponent_abbreviation,
            "opponentLogo": self.opponent_logo,
            "ourScore": self.our_score,
            "theirScore": self.their_score,
            "isCompleted": self.is_completed,
            "isScheduled": self.is_scheduled,
            "won": self.won,
            "lost": self.lost,
            "statusText": self.status_text,
        }


@dataclass(frozen=True)
class TeamPage:
    """Everything shown on a team page; each section is best-effort."""

    sport: str
    team_id: str
    profile: TeamProfile | None = None
    conference: str | None = None
    roster: tuple[RosterGroup, ...] = ()
    schedule: tuple[ScheduleRow, ...] = ()
    standings: StandingsResult | None = None
    standings_message: str | None = None

    def to_dict(self) -> dict:
        return {
            "sport": self.sport,
            "teamId": self.team_id,
            "profile": self.profile.to_dict() if self.profile else None,
            "conference": self.conference,
            "roster": [group.to_dict() for group in self.roster],
            "schedule": [row.to_dict() for row in self.schedule],
            "standings": self.standings.to_dict() if self.standings else None,
            "standingsMessage": self.standings_message,
        }

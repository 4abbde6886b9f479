"""Shared fixtures: a stub feed client and small raw feed documents."""

import pytest

from quietscores.config import Settings, get_settings
from quietscores.core.exceptions import FeedUnavailableError
from quietscores.services import SportsDataService
from quietscores.utilities.logging import reset_log_once


@pytest.fixture(autouse=True)
def _clean_state(monkeypatch):
    for name in ("QUIETSCORES_TIMEZONE", "QUIETSCORES_TIME_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_log_once()
    yield
    get_settings.cache_clear()


class StubClient:
    """In-memory FeedClient.

    failing holds keys like "scoreboard:nba", "summary:999" or
    "standings:nfl" that raise FeedUnavailableError.
    """

    def __init__(
        self,
        scoreboards=None,
        summaries=None,
        standings=None,
        teams=None,
        rosters=None,
        schedules=None,
        team_lists=None,
        failing=(),
        honor_cancel=True,
    ):
        self.scoreboards = scoreboards or {}
        self.summaries = summaries or {}
        self.standings = standings or {}
        self.teams = teams or {}
        self.rosters = rosters or {}
        self.schedules = schedules or {}
        self.team_lists = team_lists or {}
        self.failing = set(failing)
        self.honor_cancel = honor_cancel
        self.summary_hooks = {}
        self.calls = []
        self.closed = False

    def _fail_if(self, key):
        if key in self.failing:
            raise FeedUnavailableError(f"stub failure: {key}", url=key, status_code=503)

    def _check_cancel(self, cancel):
        if cancel is not None and self.honor_cancel:
            cancel.raise_if_cancelled()

    def get_scoreboard(self, sport, target_date, cancel=None):
        self.calls.append(("scoreboard", sport))
        self._check_cancel(cancel)
        self._fail_if(f"scoreboard:{sport}")
        return self.scoreboards.get(sport, {"events": []})

    def get_summary(self, sport, event_id, cancel=None):
        self.calls.append(("summary", event_id))
        hook = self.summary_hooks.get(event_id)
        if hook is not None:
            hook()
        self._check_cancel(cancel)
        self._fail_if(f"summary:{event_id}")
        return self.summaries.get(event_id, {})

    def get_standings(self, sport, cancel=None):
        self.calls.append(("standings", sport))
        self._fail_if(f"standings:{sport}")
        return self.standings.get(sport, {})

    def get_team(self, sport, team_id, cancel=None):
        self.calls.append(("team", team_id))
        return self.teams.get(team_id)

    def get_roster(self, sport, team_id, cancel=None):
        self.calls.append(("roster", team_id))
        return self.rosters.get(team_id)

    def get_team_schedule(self, sport, team_id, cancel=None):
        self.calls.append(("schedule", team_id))
        return self.schedules.get(team_id)

    def get_teams(self, sport, cancel=None):
        self.calls.append(("teams", sport))
        return self.team_lists.get(sport)

    def close(self):
        self.closed = True


def competitor(side, team_id, name, abbreviation, score=None, **extra):
    data = {
        "homeAway": side,
        "team": {
            "id": team_id,
            "displayName": name,
            "shortDisplayName": name.split()[-1],
            "abbreviation": abbreviation,
        },
    }
    if score is not None:
        data["score"] = score
    data.update(extra)
    return data


def scoreboard_event(
    event_id="401",
    state="pre",
    detail="Sun, January 5th at 1:00 PM EST",
    away_score=None,
    home_score=None,
    date_str="2025-01-05T18:00Z",
    away=("17", "New England Patriots", "NE"),
    home=("20", "New York Jets", "NYJ"),
):
    return {
        "id": event_id,
        "date": date_str,
        "status": {"type": {"state": state, "detail": detail, "shortDetail": detail}},
        "competitions": [
            {
                "competitors": [
                    competitor("home", *home, score=home_score),
                    competitor("away", *away, score=away_score),
                ]
            }
        ],
    }


def standings_entry(team_id, name, abbreviation, wins, losses):
    total = wins + losses
    return {
        "team": {"id": team_id, "displayName": name, "abbreviation": abbreviation},
        "stats": [
            {"name": "wins", "value": wins},
            {"name": "losses", "value": losses},
            {"name": "winPercent", "value": wins / total if total else 0},
            {"name": "gamesBehind", "displayValue": "-"},
        ],
    }


@pytest.fixture
def nfl_standings():
    """Conference -> division tree."""
    return {
        "children": [
            {
                "name": "American Football Conference",
                "children": [
                    {
                        "name": "AFC East",
                        "standings": {
                            "entries": [
                                standings_entry("20", "New York Jets", "NYJ", 4, 13),
                                standings_entry("17", "New England Patriots", "NE", 4, 13),
                                standings_entry("2", "Buffalo Bills", "BUF", 13, 4),
                            ]
                        },
                    },
                    {
                        "name": "AFC North",
                        "standings": {
                            "entries": [standings_entry("33", "Baltimore Ravens", "BAL", 12, 5)]
                        },
                    },
                ],
            },
            {
                "name": "National Football Conference",
                "children": [
                    {
                        "name": "NFC East",
                        "standings": {
                            "entries": [standings_entry("6", "Dallas Cowboys", "DAL", 7, 10)]
                        },
                    }
                ],
            },
        ]
    }


@pytest.fixture
def nfl_summary():
    """A live game summary with header, boxscore, plays and win probability."""
    return {
        "header": {
            "id": "401",
            "competitions": [
                {
                    "id": "401",
                    "date": "2025-01-05T18:00Z",
                    "status": {
                        "period": 2,
                        "type": {"state": "in", "detail": "2nd Quarter 5:00"},
                    },
                    "competitors": [
                        competitor(
                            "home",
                            "20",
                            "New York Jets",
                            "NYJ",
                            score="3",
                            linescores=[{"value": 3}, {"value": 0}],
                        ),
                        competitor("away", "17", "New England Patriots", "NE", score="14"),
                    ],
                }
            ],
        },
        "boxscore": {
            "teams": [
                {
                    "team": {"id": "20", "displayName": "New York Jets"},
                    "statistics": [
                        {"name": "totalYards", "label": "Total Yards", "displayValue": "100"},
                        {"name": "turnovers", "label": "Turnovers", "displayValue": "1"},
                    ],
                },
                {
                    "team": {"id": "17", "displayName": "New England Patriots"},
                    "statistics": [
                        {"name": "totalYards", "label": "Total Yards", "displayValue": "300"},
                        {"name": "turnovers", "label": "Turnovers", "displayValue": "1"},
                    ],
                },
            ]
        },
        "plays": [
            {"id": "1", "period": {"number": 1}, "awayScore": 0, "homeScore": 3,
             "scoringPlay": True, "type": {"text": "Field Goal Good"}},
            {"id": "2", "period": {"number": 1}, "awayScore": 7, "homeScore": 3,
             "scoringPlay": True, "type": {"text": "Passing Touchdown"}},
            {"id": "3", "period": {"number": 2}, "awayScore": 7, "homeScore": 3,
             "type": {"text": "Rush"}},
            {"id": "4", "period": {"number": 2}, "awayScore": 14, "homeScore": 3,
             "scoringPlay": True, "type": {"text": "Rushing Touchdown"}},
        ],
        "leaders": [
            {
                "team": {"id": "17"},
                "leaders": [
                    {
                        "name": "passingYards",
                        "displayName": "Passing Yards",
                        "leaders": [
                            {"displayValue": "180 YDS", "athlete": {"displayName": "Drake Maye"}}
                        ],
                    }
                ],
            }
        ],
        "situation": {"down": 2, "distance": 6, "possession": "17", "possessionText": "NYJ 15"},
        "winprobability": [
            {"homeWinPercentage": 0.45, "playId": "2"},
            {"homeWinPercentage": 0.30, "playId": "4"},
        ],
    }


@pytest.fixture
def make_stub_client():
    return StubClient


@pytest.fixture
def settings():
    return Settings(retry_count=1, retry_delay_seconds=0, max_workers=4)


@pytest.fixture
def make_service(settings):
    def factory(client):
        return SportsDataService(client=client, settings=settings)

    return factory


@pytest.fixture
def make_event():
    return scoreboard_event


@pytest.fixture
def make_competitor():
    return competitor

"""Tests for summary/boxscore extraction."""

import pytest

from quietscores.core.types import Game, TeamSide
from quietscores.providers.espn.summary import (
    combined_plays,
    extract_headlines,
    extract_leaders,
    extract_players,
    extract_plays,
    game_from_summary_header,
    match_boxscore_teams,
    match_header_competitors,
    resolve_linescores,
    score_share,
    share,
    stat_comparisons,
    team_stat,
)


def _make_game(away_score="14", home_score="3", away_id="17", home_id="20"):
    return Game(
        id="401",
        sport="nfl",
        away=TeamSide(
            name="New England Patriots", id=away_id, short_name="Patriots", abbreviation="NE"
        ),
        home=TeamSide(name="New York Jets", id=home_id, short_name="Jets", abbreviation="NYJ"),
        status="live",
        away_score=away_score,
        home_score=home_score,
    )


def _box_team(team_id, name, short=None, **extra):
    team = {"team": {"id": team_id, "displayName": name}}
    if short:
        team["team"]["shortDisplayName"] = short
    team.update(extra)
    return team


class TestMatchBoxscoreTeams:
    def test_matches_by_id_regardless_of_order(self):
        summary = {
            "boxscore": {
                "teams": [_box_team("20", "New York Jets"), _box_team("17", "New England Patriots")]
            }
        }
        away, home = match_boxscore_teams(summary, _make_game())
        assert away["team"]["id"] == "17"
        assert home["team"]["id"] == "20"

    def test_matches_by_display_name(self):
        summary = {
            "boxscore": {
                "teams": [_box_team("x", "New York Jets"), _box_team("y", "New England Patriots")]
            }
        }
        away, home = match_boxscore_teams(summary, _make_game(away_id=None, home_id=None))
        assert away["team"]["displayName"] == "New England Patriots"
        assert home["team"]["displayName"] == "New York Jets"

    def test_matches_by_short_name(self):
        teams = [_box_team("x", "NYJ", short="Jets"), _box_team("y", "NE", short="Patriots")]
        summary = {"boxscore": {"teams": teams}}
        away, home = match_boxscore_teams(summary, _make_game(away_id=None, home_id=None))
        assert away["team"]["shortDisplayName"] == "Patriots"
        assert home["team"]["shortDisplayName"] == "Jets"

    def test_positional_fallback(self):
        summary = {"boxscore": {"teams": [_box_team("a", "Away"), _box_team("b", "Home")]}}
        away, home = match_boxscore_teams(summary, _make_game())
        assert away["team"]["id"] == "a"
        assert home["team"]["id"] == "b"

    def test_home_id_match_at_index_zero_is_not_taken_by_away(self):
        game = Game(
            id="9",
            sport="mls",
            away=TeamSide(name="Visitors FC"),
            home=TeamSide(name="Hosts", id="2"),
            status="live",
        )
        summary = {"boxscore": {"teams": [_box_team("2", "Hosts"), _box_team("7", "Visitors")]}}
        away, home = match_boxscore_teams(summary, game)
        assert home["team"]["id"] == "2"
        assert away["team"]["id"] == "7"

    def test_away_short_name_does_not_steal_home_id_match(self):
        game = Game(
            id="9",
            sport="nfl",
            away=TeamSide(name="Away Club", short_name="Hosts"),
            home=TeamSide(name="Home Club", id="2"),
            status="live",
        )
        summary = {
            "boxscore": {
                "teams": [_box_team("2", "Home Club", short="Hosts"), _box_team("7", "Other")]
            }
        }
        away, home = match_boxscore_teams(summary, game)
        assert home["team"]["id"] == "2"
        assert away["team"]["id"] == "7"

    def test_single_team_never_used_twice(self):
        summary = {"boxscore": {"teams": [_box_team("17", "New England Patriots")]}}
        away, home = match_boxscore_teams(summary, _make_game())
        assert away is not None
        assert home is None

    def test_no_boxscore(self):
        assert match_boxscore_teams({}, _make_game()) == (None, None)


class TestHeaderCompetitors:
    def test_by_id_then_home_away(self):
        summary = {
            "header": {
                "competitions": [
                    {
                        "competitors": [
                            {"homeAway": "home", "team": {"id": "99"}},
                            {"team": {"id": "17"}},
                        ]
                    }
                ]
            }
        }
        away, home = match_header_competitors(summary, _make_game())
        assert away["team"]["id"] == "17"
        assert home["team"]["id"] == "99"


class TestResolveLinescores:
    def test_header_competitor_first(self):
        header = {"linescores": [{"value": 7}]}
        box = {"team": {"id": "17"}, "linescores": [{"value": 3}]}
        assert resolve_linescores({}, header, box) == [{"value": 7}]

    def test_box_team_next(self):
        box = {"team": {"id": "17"}, "linescores": [{"value": 3}]}
        assert resolve_linescores({}, {}, box) == [{"value": 3}]

    def test_keyed_boxscore_linescores(self):
        summary = {"boxscore": {"linescores": [{"teamId": 17, "linescores": [{"value": 10}]}]}}
        assert resolve_linescores(summary, None, None, "17") == [{"value": 10}]

    def test_empty_when_missing(self):
        assert resolve_linescores({}, None, None) == []


class TestPlays:
    def test_first_non_empty_source_wins(self):
        summary = {"plays": [], "boxscore": {"plays": [{"id": "b"}]}}
        assert extract_plays(summary) == [{"id": "b"}]

    def test_flattens_previous_drives(self):
        summary = {"drives": {"previous": [{"plays": [{"id": "1"}]}, {"plays": [{"id": "2"}]}]}}
        assert [p["id"] for p in extract_plays(summary)] == ["1", "2"]

    def test_combined_concatenates_sources(self):
        summary = {
            "plays": [{"id": "a"}],
            "drives": {"current": {"plays": [{"id": "c"}]}},
        }
        assert [p["id"] for p in combined_plays(summary)] == ["a", "c"]

    def test_missing(self):
        assert extract_plays(None) == []


class TestLeaders:
    @pytest.fixture
    def summary(self):
        def category(name, display, athlete, value):
            return {
                "name": name,
                "displayName": display,
                "leaders": [{"displayValue": value, "athlete": {"displayName": athlete}}],
            }

        return {
            "leaders": [
                {
                    "team": {"id": "17"},
                    "leaders": [
                        category("points", "Points", "Kicker A", "8"),
                        category("rushingYards", "Rushing Yards", "Back A", "80"),
                        category("passingYards", "Passing Yards", "QB A", "200"),
                    ],
                },
                {
                    "team": {"id": "20"},
                    "leaders": [
                        category("passingYards", "Passing Yards", "QB B", "150"),
                    ],
                },
                {
                    "team": {"id": "20"},
                    "leaders": [
                        category("passingYards", "Passing Yards", "QB C", "10"),
                    ],
                },
            ]
        }

    def test_known_categories_first(self, summary):
        names = [c.name for c in extract_leaders(summary)]
        assert names == ["passingYards", "rushingYards", "points"]

    def test_one_leader_per_team(self, summary):
        passing = extract_leaders(summary)[0]
        assert [leader.team_id for leader in passing.leaders] == ["17", "20"]
        assert passing.leader_for("20").athlete_name == "QB B"
        assert passing.leader_for("99") is None

    def test_boxscore_leaders_fallback(self):
        summary = {"boxscore": {"leaders": [{"team": {"id": "1"}, "leaders": []}]}}
        assert extract_leaders(summary) == []

    def test_missing(self):
        assert extract_leaders({}) == []


class TestTeamStatistics:
    def test_players_from_statistics(self):
        team = {"statistics": [{"athletes": [{"id": "1"}]}]}
        assert extract_players(team) == [{"id": "1"}]

    def test_players_fallback(self):
        assert extract_players({"players": [{"id": "2"}]}) == [{"id": "2"}]
        assert extract_players(None) == []

    def test_team_stat(self):
        team = {"statistics": [{"name": "totalYards", "displayValue": "312"}]}
        assert team_stat(team, "totalYards") == "312"
        assert team_stat(team, "turnovers") == "0"

    def test_share(self):
        assert share("300", "100") == (75.0, 25.0)
        assert share("-", "-") == (50.0, 50.0)
        assert share(0, 0) == (50.0, 50.0)

    def test_comparisons_match_by_name(self):
        away = {"statistics": [
            {"name": "totalYards", "label": "Total Yards", "displayValue": "300"},
            {"name": "turnovers", "label": "Turnovers", "displayValue": "2"},
        ]}
        home = {"statistics": [
            {"name": "turnovers", "label": "Turnovers", "displayValue": "0"},
            {"name": "totalYards", "label": "Total Yards", "displayValue": "100"},
        ]}
        rows = stat_comparisons(away, home)
        assert [r.name for r in rows] == ["totalYards", "turnovers"]
        assert rows[0].home_value == "100"
        assert rows[0].away_share == 75.0
        assert rows[1].away_share == 100.0

    def test_comparisons_limit(self):
        away = {"statistics": [{"name": str(i), "displayValue": "1"} for i in range(5)]}
        assert len(stat_comparisons(away, away, limit=2)) == 2

    def test_score_share(self):
        away, home = score_share(_make_game("21", "7"))
        assert away == 75.0
        assert home == 25.0
        assert score_share(_make_game("", "")) == (50.0, 50.0)

    def test_headlines(self):
        assert extract_headlines({"headlines": [{"headline": "x"}, "bad"]}) == [{"headline": "x"}]


class TestGameFromHeader:
    def test_builds_game(self, nfl_summary):
        game = game_from_summary_header(nfl_summary, "nfl")
        assert game.id == "401"
        assert game.status == "live"
        assert game.away.name == "New England Patriots"
        assert game.away_score == "14"
        assert game.home_score == "3"

    def test_no_header(self):
        assert game_from_summary_header({}, "nfl") is None

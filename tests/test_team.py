"""Tests for team page parsing."""

from quietscores.providers.espn.team import (
    group_roster,
    identifiers_for_team,
    parse_schedule,
    parse_team_conferences,
    parse_team_info,
)


def _schedule_event(event_id, status_name, our_score=None, their_score=None, winner=None):
    us = {"id": "17", "homeAway": "home", "team": {"id": "17", "displayName": "Patriots"}}
    them = {
        "id": "20",
        "homeAway": "away",
        "team": {"id": "20", "displayName": "New York Jets", "abbreviation": "NYJ"},
    }
    if our_score is not None:
        us["score"] = {"value": our_score}
        them["score"] = {"value": their_score}
    if winner is not None:
        us["winner"] = winner
    return {
        "id": event_id,
        "date": "2025-01-05T18:00Z",
        "status": {"type": {"name": status_name, "shortDetail": "Sun 1:00 PM"}},
        "competitions": [{"competitors": [them, us]}],
    }


class TestTeamInfo:
    def test_profile(self):
        raw = {
            "team": {
                "id": 17,
                "displayName": "New England Patriots",
                "abbreviation": "NE",
                "color": "002244",
                "logos": [{"href": "https://a.espncdn.com/ne.png"}],
                "record": {"items": [{"summary": "4-13"}]},
            }
        }
        profile = parse_team_info(raw)
        assert profile.id == "17"
        assert profile.color == "#002244"
        assert profile.logo == "https://a.espncdn.com/ne.png"
        assert profile.record == "4-13"

    def test_missing(self):
        assert parse_team_info(None) is None
        assert parse_team_info({"team": {}}) is None

    def test_identifiers_merge_caller_and_feed(self):
        raw = {"team": {"id": "17", "displayName": "New England Patriots", "abbreviation": "NE"}}
        identifiers = identifiers_for_team("17", raw, name="Patriots")
        assert identifiers.matches(abbreviation="ne")
        assert identifiers.matches(name="New England Patriots")
        assert identifiers_for_team("17").ids == ("17",)


class TestRoster:
    def test_pre_grouped(self):
        raw = {"athletes": [{"position": "defense", "items": [{"id": "1"}, {"id": "2"}]}]}
        groups = group_roster(raw)
        assert groups[0].name == "defense"
        assert len(groups[0].players) == 2

    def test_grouped_by_position(self):
        raw = {
            "athletes": [
                {"id": "1", "position": {"displayName": "Guard"}},
                {"id": "2", "position": {"displayName": "Center"}},
                {"id": "3", "position": {"displayName": "Guard"}},
                {"id": "4"},
            ]
        }
        groups = group_roster(raw)
        assert [g.name for g in groups] == ["Guard", "Center", "Other"]
        assert [p["id"] for p in groups[0].players] == ["1", "3"]

    def test_missing(self):
        assert group_roster(None) == []


class TestSchedule:
    def test_completed_win(self):
        event = _schedule_event("1", "STATUS_FINAL", 24.0, 10.0, winner=True)
        row = parse_schedule({"events": [event]}, "17")[0]
        assert row.is_home
        assert row.opponent_name == "New York Jets"
        assert row.opponent_abbreviation == "NYJ"
        assert row.our_score == "24"
        assert row.their_score == "10"
        assert row.won and not row.lost
        assert row.status_text == "Final"

    def test_scheduled(self):
        row = parse_schedule({"events": [_schedule_event("2", "STATUS_SCHEDULED")]}, "17")[0]
        assert row.is_scheduled
        assert not row.is_completed
        assert row.status_text == "Sun 1:00 PM"
        assert row.our_score == ""

    def test_missing(self):
        assert parse_schedule(None, "17") == []


class TestConferences:
    def test_nested_league_teams(self):
        patriots = {
            "id": "17",
            "displayName": "New England Patriots",
            "groups": [{"name": "AFC East"}],
        }
        teams = [{"team": patriots}, {"team": {"id": "99", "displayName": "No Group"}}]
        raw = {"sports": [{"leagues": [{"teams": teams}]}]}
        conferences = parse_team_conferences(raw)
        assert conferences == {"New England Patriots": "AFC East", "17": "AFC East"}

    def test_missing(self):
        assert parse_team_conferences(None) == {}

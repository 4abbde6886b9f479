"""Tests for standings shape detection and team matching."""

from quietscores.core.types import Game, TeamIdentifiers, TeamSide
from quietscores.providers.espn.standings import (
    StandingsShape,
    detect_shape,
    filter_standings_by_teams,
    parse_group,
    parse_standings,
)


def _entry(team_id, name, abbreviation, wins, losses, pct=None):
    pct = wins / (wins + losses) if pct is None else pct
    return {
        "team": {"id": team_id, "displayName": name, "abbreviation": abbreviation},
        "stats": [
            {"name": "wins", "value": wins},
            {"name": "losses", "value": losses},
            {"name": "winPercent", "value": pct},
        ],
    }


def _group(name, *entries):
    return {"name": name, "standings": {"entries": list(entries)}}


class TestDetectShape:
    def test_divisions(self, nfl_standings):
        assert detect_shape(nfl_standings) is StandingsShape.DIVISIONS

    def test_conferences(self):
        document = {"children": [_group("East", _entry("1", "A", "A", 1, 0))]}
        assert detect_shape(document) is StandingsShape.CONFERENCES

    def test_entries(self):
        document = {"standings": {"entries": [_entry("1", "A", "A", 1, 0)]}}
        assert detect_shape(document) is StandingsShape.ENTRIES

    def test_groups(self):
        assert detect_shape({"groups": [_group("G")]}) is StandingsShape.GROUPS

    def test_array(self):
        assert detect_shape([_group("G")]) is StandingsShape.ARRAY

    def test_unknown(self):
        assert detect_shape({}) is StandingsShape.UNKNOWN
        assert detect_shape(None) is StandingsShape.UNKNOWN
        assert detect_shape([]) is StandingsShape.UNKNOWN


class TestParse:
    def test_leaf_groups_in_order(self, nfl_standings):
        names = [g.name for g in parse_standings(nfl_standings)]
        assert names == ["AFC East", "AFC North", "NFC East"]

    def test_entries_sorted_by_wins_then_pct(self):
        group = parse_group(
            _group(
                "G",
                _entry("1", "Low", "LOW", 5, 5),
                _entry("2", "High", "HI", 9, 1),
                _entry("3", "Tie Better", "TB", 5, 4, pct=0.556),
            )
        )
        assert [e.team_id for e in group.entries] == ["2", "3", "1"]

    def test_group_name_fallbacks(self):
        raw = {"abbreviation": "AFCE", "standings": {"entries": [_entry("1", "A", "A", 1, 0)]}}
        assert parse_group(raw).name == "AFCE"

    def test_empty_group_dropped(self):
        assert parse_group({"name": "Empty", "standings": {"entries": []}}) is None

    def test_entry_fields(self, nfl_standings):
        bills = parse_standings(nfl_standings)[0].entries[0]
        assert bills.name == "Buffalo Bills"
        assert bills.wins == 13
        assert bills.losses == 4
        assert bills.games_behind == "-"
        assert bills.stat("wins") == 13

    def test_flat_entries(self):
        document = {"standings": {"entries": [_entry("1", "A", "A", 1, 0)]}}
        assert [g.name for g in parse_standings(document)] == ["Standings"]

    def test_array_with_children(self):
        document = [{"name": "Conf", "children": [_group("Div", _entry("1", "A", "A", 1, 0))]}]
        assert [g.name for g in parse_standings(document)] == ["Div"]


class TestFilterByTeams:
    def test_same_division(self, nfl_standings):
        identifiers = TeamIdentifiers.build(ids=["17", "20"])
        result = filter_standings_by_teams(nfl_standings, identifiers)
        assert [g.name for g in result.groups] == ["AFC East"]
        assert result.is_approximate is False

    def test_different_divisions(self, nfl_standings):
        identifiers = TeamIdentifiers.build(abbreviations=["bal", "DAL"])
        result = filter_standings_by_teams(nfl_standings, identifiers)
        assert [g.name for g in result.groups] == ["AFC North", "NFC East"]

    def test_name_containment(self, nfl_standings):
        identifiers = TeamIdentifiers.build(names=["Cowboys"])
        result = filter_standings_by_teams(nfl_standings, identifiers)
        assert [g.name for g in result.groups] == ["NFC East"]

    def test_from_game(self, nfl_standings):
        game = Game(
            id="1",
            sport="nfl",
            away=TeamSide(name="New England Patriots", id="17", abbreviation="NE"),
            home=TeamSide(name="New York Jets", id="20", abbreviation="NYJ"),
            status="scheduled",
        )
        result = filter_standings_by_teams(nfl_standings, TeamIdentifiers.from_game(game))
        assert [g.name for g in result.groups] == ["AFC East"]

    def test_no_match_falls_back_to_first_two_groups(self, nfl_standings):
        identifiers = TeamIdentifiers.build(ids=["999"], names=["Nobody FC"])
        result = filter_standings_by_teams(nfl_standings, identifiers)
        assert [g.name for g in result.groups] == ["AFC East", "AFC North"]
        assert result.is_approximate is True
        assert result.to_dict()["isAllGroups"] is True

    def test_unrecognized_document(self):
        assert filter_standings_by_teams({"foo": 1}, TeamIdentifiers.build(ids=["1"])) is None


class TestTeamIdentifiers:
    def test_id_match(self):
        assert TeamIdentifiers.build(ids=[17]).matches(team_id="17")

    def test_name_containment_both_ways(self):
        identifiers = TeamIdentifiers.build(names=["New England Patriots"])
        assert identifiers.matches(name="Patriots")
        assert identifiers.matches(name="  new england   patriots  ")
        assert TeamIdentifiers.build(names=["Jets"]).matches(name="New York Jets")

    def test_abbreviation_exact_case_insensitive(self):
        identifiers = TeamIdentifiers.build(abbreviations=["NE"])
        assert identifiers.matches(abbreviation="ne")
        assert not identifiers.matches(abbreviation="NEB")

    def test_empty_values_never_match(self):
        identifiers = TeamIdentifiers.build(ids=["", None], names=[""], abbreviations=[None])
        assert identifiers.is_empty
        assert not identifiers.matches(team_id="", name="", abbreviation="")

    def test_highlighted_entry(self, nfl_standings):
        identifiers = TeamIdentifiers.build(ids=["17"])
        entries = parse_standings(nfl_standings)[0].entries
        assert [e.team_id for e in entries if e.is_highlighted(identifiers)] == ["17"]

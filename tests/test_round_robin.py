import itertools

import pytest

from pickletrack.controllers.tournament import RoundRobinTournament, expected_fixture_count
from pickletrack.exceptions import (
    FixtureNotFoundException,
    FixtureStateException,
    InvalidScoreException,
    InvalidTeamListException,
)


def _tournament(*names):
    return RoundRobinTournament("Tuesday League", list(names))


def _team_by_name(tournament, name):
    return next(team for team in tournament.teams.values() if team.name == name)


def _fixture_between(tournament, name1, name2):
    for fixture in tournament.fixtures:
        if {fixture.team1.name, fixture.team2.name} == {name1, name2}:
            return fixture
    raise AssertionError(f"No fixture {name1} vs {name2}")


def _record(tournament, winner, loser, winner_score=11, loser_score=5):
    fixture = _fixture_between(tournament, winner, loser)
    if fixture.team1.name == winner:
        return tournament.record_fixture_result(fixture.id, winner_score, loser_score)
    return tournament.record_fixture_result(fixture.id, loser_score, winner_score)


@pytest.mark.parametrize("num_teams", [2, 3, 4, 5, 8])
def test_every_pair_meets_exactly_once(num_teams):
    names = [f"Team {i}" for i in range(num_teams)]
    tournament = _tournament(*names)

    assert len(tournament.fixtures) == expected_fixture_count(num_teams)
    pairs = [
        frozenset((f.team1.team_id, f.team2.team_id)) for f in tournament.fixtures
    ]
    assert len(set(pairs)) == len(pairs)
    expected = {frozenset(pair) for pair in itertools.combinations(tournament.teams, 2)}
    assert set(pairs) == expected


def test_four_teams_give_six_pending_fixtures():
    tournament = _tournament("A", "B", "C", "D")

    assert len(tournament.fixtures) == 6
    assert all(f.is_pending for f in tournament.fixtures)
    assert all(f.team1.score == 0 and f.team2.score == 0 for f in tournament.fixtures)
    assert [f.number for f in tournament.fixtures] == [1, 2, 3, 4, 5, 6]
    assert [f.label() for f in tournament.fixtures[:3]] == [
        "A vs B",
        "A vs C",
        "A vs D",
    ]


def test_initial_rankings_follow_seed_order():
    tournament = _tournament("A", "B", "C")
    assert [entry.team_name for entry in tournament.rankings] == ["A", "B", "C"]
    assert [entry.rank for entry in tournament.rankings] == [1, 2, 3]


@pytest.mark.parametrize(
    "names",
    [
        [],
        ["Solo"],
        ["A", "  "],
        ["A", "B", "a"],
        None,
    ],
)
def test_invalid_team_lists_are_rejected(names):
    with pytest.raises(InvalidTeamListException):
        RoundRobinTournament("Bad", names)


def test_team_names_are_stripped():
    tournament = _tournament("  Dinkers ", "Lobsters")
    assert [t.name for t in tournament.teams.values()] == ["Dinkers", "Lobsters"]


def test_two_team_result_completes_tournament():
    tournament = _tournament("Dinkers", "Lobsters")
    fixture = tournament.fixtures[0]

    tournament.record_fixture_result(fixture.id, 11, 5)

    dinkers = _team_by_name(tournament, "Dinkers")
    lobsters = _team_by_name(tournament, "Lobsters")
    assert dinkers.games_won == 1
    assert dinkers.point_difference == 6
    assert lobsters.games_lost == 1
    assert lobsters.point_difference == -6
    assert fixture.is_completed
    assert fixture.completed_at is not None
    assert (fixture.team1.score, fixture.team2.score) == (11, 5)
    assert tournament.is_completed
    assert tournament.completed_at is not None


def test_result_appends_head_to_head_records():
    tournament = _tournament("Dinkers", "Lobsters", "Picklers")
    _record(tournament, "Lobsters", "Dinkers", 11, 8)

    dinkers = _team_by_name(tournament, "Dinkers")
    lobsters = _team_by_name(tournament, "Lobsters")

    record = dinkers.record_against(lobsters.id)
    assert record.result == "lost"
    assert (record.score_for, record.score_against) == (8, 11)
    assert lobsters.record_against(dinkers.id).result == "won"
    assert not tournament.is_completed


def test_point_difference_always_matches_points():
    tournament = _tournament("A", "B", "C", "D")
    scores = [(11, 3), (9, 11), (15, 13), (4, 11), (11, 0), (12, 14)]
    for fixture, (s1, s2) in zip(list(tournament.fixtures), scores):
        tournament.record_fixture_result(fixture.id, s1, s2)

    for team in tournament.teams.values():
        assert team.point_difference == team.points_scored - team.points_conceded
        assert team.games_played == 3
    assert tournament.is_completed


def test_unknown_fixture_raises_not_found():
    tournament = _tournament("A", "B")
    with pytest.raises(FixtureNotFoundException) as excinfo:
        tournament.record_fixture_result("missing", 11, 5)
    assert excinfo.value.entity_id == "missing"


def test_completed_fixture_cannot_be_recorded_twice():
    tournament = _tournament("A", "B", "C")
    fixture = tournament.fixtures[0]
    tournament.record_fixture_result(fixture.id, 11, 5)

    with pytest.raises(FixtureStateException):
        tournament.record_fixture_result(fixture.id, 5, 11)

    team_a = _team_by_name(tournament, "A")
    assert team_a.games_won == 1
    assert len(team_a.matches) == 1


@pytest.mark.parametrize("scores", [(-1, 11), (11, -3), (7, 7), (11.0, 5), ("11", 5)])
def test_invalid_scores_leave_state_untouched(scores):
    tournament = _tournament("A", "B", "C")
    fixture = tournament.fixtures[0]

    with pytest.raises(InvalidScoreException):
        tournament.record_fixture_result(fixture.id, *scores)

    assert fixture.is_pending
    assert all(team.games_played == 0 for team in tournament.teams.values())


def test_start_fixture_links_game():
    tournament = _tournament("A", "B", "C")
    fixture = tournament.fixtures[1]

    tournament.start_fixture(fixture.id, "game-1")

    assert fixture.is_in_progress
    assert fixture.match_id == "game-1"
    assert fixture not in tournament.upcoming_fixtures()

    with pytest.raises(FixtureStateException):
        tournament.start_fixture(fixture.id, "game-2")


def test_completed_fixture_cannot_be_started():
    tournament = _tournament("A", "B")
    fixture = tournament.fixtures[0]
    tournament.record_fixture_result(fixture.id, 11, 4)

    with pytest.raises(FixtureStateException):
        tournament.start_fixture(fixture.id, "game-1")


def test_fixture_queries():
    tournament = _tournament("A", "B", "C")
    first = tournament.fixtures[0]
    tournament.record_fixture_result(first.id, 11, 9)

    assert tournament.get_fixture(first.id) is first
    assert tournament.completed_fixtures() == [first]
    assert len(tournament.upcoming_fixtures()) == 2


def test_summary():
    tournament = _tournament("A", "B", "C")
    tournament.record_fixture_result(tournament.fixtures[0].id, 11, 9)

    summary = tournament.summary()
    assert summary["name"] == "Tuesday League"
    assert summary["status"] == "in-progress"
    assert summary["team_count"] == 3
    assert summary["completed_fixtures"] == 1
    assert summary["total_fixtures"] == 3


def test_standings_view_contents():
    tournament = _tournament("A", "B", "C")
    _record(tournament, "B", "A", 11, 7)

    view = tournament.standings_view()

    assert view["tournament"]["id"] == tournament.id
    assert view["rankings"][0]["team_name"] == "B"
    assert len(view["fixtures"]) == 3
    teams = {team["name"]: team for team in view["teams"]}
    assert teams["B"]["win_percentage"] == 100.0
    assert teams["A"]["win_percentage"] == 0.0
    assert teams["C"]["win_percentage"] == 0.0
    assert view["tied_groups"] == []


def test_win_percentage_rounds_to_one_decimal():
    tournament = _tournament("A", "B", "C", "D")
    _record(tournament, "A", "B")
    _record(tournament, "C", "A")
    _record(tournament, "A", "D")

    assert _team_by_name(tournament, "A").win_percentage == 66.7


def test_organizer_id_defaults_to_generated():
    tournament = _tournament("A", "B")
    assert tournament.organizer_id
    other = RoundRobinTournament("X", ["A", "B"], organizer_id="org-1")
    assert other.organizer_id == "org-1"

import itertools

from pickletrack.controllers.tournament import RankingCalculator, RoundRobinTournament
from pickletrack.models.tournament import HeadToHeadRecord, Team


def _team(name, seed, won=0, lost=0, scored=0, conceded=0):
    return Team(
        id=name.lower(),
        name=name,
        seed=seed,
        games_won=won,
        games_lost=lost,
        points_scored=scored,
        points_conceded=conceded,
    )


def _ranked_names(teams):
    return [entry.team_name for entry in RankingCalculator().compute_rankings(teams)]


def _fixture_between(tournament, name1, name2):
    for fixture in tournament.fixtures:
        if {fixture.team1.name, fixture.team2.name} == {name1, name2}:
            return fixture
    raise AssertionError(f"No fixture {name1} vs {name2}")


def _play(tournament, results):
    for winner, loser, winner_score, loser_score in results:
        fixture = _fixture_between(tournament, winner, loser)
        if fixture.team1.name == winner:
            tournament.record_fixture_result(fixture.id, winner_score, loser_score)
        else:
            tournament.record_fixture_result(fixture.id, loser_score, winner_score)


def test_games_won_ranks_first():
    teams = [
        _team("A", 1, won=1, lost=2, scored=40, conceded=20),
        _team("B", 2, won=3, lost=0, scored=33, conceded=30),
        _team("C", 3, won=2, lost=1, scored=30, conceded=30),
    ]
    assert _ranked_names(teams) == ["B", "C", "A"]


def test_point_difference_then_points_scored():
    teams = [
        _team("A", 1, won=2, scored=22, conceded=20),
        _team("B", 2, won=2, scored=30, conceded=20),
        _team("C", 3, won=2, scored=33, conceded=23),
    ]
    # B and C share +10; C scored more
    assert _ranked_names(teams) == ["C", "B", "A"]


def test_seed_breaks_complete_ties():
    teams = [_team("C", 3), _team("A", 1), _team("B", 2)]
    assert _ranked_names(teams) == ["A", "B", "C"]


def test_ranks_are_one_based_and_gap_free():
    teams = [_team("A", 1), _team("B", 2, won=1), _team("C", 3)]
    ranks = [e.rank for e in RankingCalculator().compute_rankings(teams)]
    assert ranks == [1, 2, 3]


def test_head_to_head_breaks_primary_tie():
    tournament = RoundRobinTournament("H2H", ["A", "B", "C", "D"])
    # A and B both finish 2-1, +11, 31 scored; B beat A
    _play(
        tournament,
        [
            ("B", "A", 11, 9),
            ("A", "C", 11, 4),
            ("A", "D", 11, 5),
            ("C", "B", 11, 9),
            ("B", "D", 11, 0),
            ("C", "D", 11, 6),
        ],
    )
    a = next(t for t in tournament.teams.values() if t.name == "A")
    b = next(t for t in tournament.teams.values() if t.name == "B")
    assert a.primary_criteria == b.primary_criteria

    names = [entry.team_name for entry in tournament.rankings]
    assert names.index("B") < names.index("A")


def test_ranking_by_wins_is_independent_of_recording_order():
    results = [
        ("A", "B", 11, 3),
        ("A", "C", 11, 5),
        ("A", "D", 11, 7),
        ("B", "C", 11, 2),
        ("B", "D", 11, 4),
        ("C", "D", 11, 9),
    ]
    orders = set()
    for permutation in itertools.permutations(results):
        tournament = RoundRobinTournament("Order", ["D", "C", "B", "A"])
        _play(tournament, permutation)
        orders.add(tuple(entry.team_name for entry in tournament.rankings))

    assert orders == {("A", "B", "C", "D")}


def test_find_tied_groups_only_groups_identical_triples():
    teams = [
        _team("A", 1, won=1, scored=20, conceded=15),
        _team("B", 2, won=1, scored=20, conceded=15),
        _team("C", 3, won=1, scored=21, conceded=16),
        _team("D", 4),
        _team("E", 5),
        _team("F", 6, won=2),
    ]
    groups = RankingCalculator().find_tied_groups(teams)

    assert [[t.name for t in group] for group in groups] == [["A", "B"], ["D", "E"]]


def test_find_tied_groups_empty_when_no_ties():
    teams = [_team("A", 1, won=2), _team("B", 2, won=1), _team("C", 3)]
    assert RankingCalculator().find_tied_groups(teams) == []


def test_tournament_tied_groups_at_start_hold_everyone():
    tournament = RoundRobinTournament("Start", ["A", "B", "C"])
    groups = tournament.find_tied_groups()
    assert len(groups) == 1
    assert [t.name for t in groups[0]] == ["A", "B", "C"]


def _meeting(team, opponent, score_for, score_against):
    team.matches.append(
        HeadToHeadRecord(
            opponent_id=opponent.id,
            opponent_name=opponent.name,
            result="lost",
            score_for=score_for,
            score_against=score_against,
        )
    )


def test_head_to_head_scores_decide_when_neither_side_won():
    a = _team("A", 1, won=1, lost=1, scored=20, conceded=20)
    b = _team("B", 2, won=1, lost=1, scored=20, conceded=20)
    _meeting(a, b, 9, 11)
    _meeting(b, a, 11, 9)

    assert _ranked_names([a, b]) == ["B", "A"]


def test_level_direct_meeting_falls_back_to_seed():
    a = _team("A", 1, won=1, lost=1, scored=20, conceded=20)
    b = _team("B", 2, won=1, lost=1, scored=20, conceded=20)
    _meeting(a, b, 10, 10)
    _meeting(b, a, 10, 10)

    assert _ranked_names([b, a]) == ["A", "B"]
    assert RankingCalculator()._compare_head_to_head(a, b) == 0

import json
import random

import pytest

from pickletrack.exceptions import InvalidSettingsException
from pickletrack.testing import (
    RallySimulator,
    RoundRobinSimulator,
    SimulatedTeam,
    SimulationConfig,
)


def _ranking_rows(result):
    return [
        (
            entry["team_name"],
            entry["games_won"],
            entry["points_scored"],
            entry["points_conceded"],
        )
        for entry in result["standings"]["rankings"]
    ]


def test_same_seed_same_standings():
    config = SimulationConfig(num_teams=5, seed=42)

    first = RoundRobinSimulator(config).run()
    second = RoundRobinSimulator(config).run()

    assert _ranking_rows(first) == _ranking_rows(second)
    assert first["fixtures"] == second["fixtures"]


def test_every_fixture_is_played_to_completion():
    config = SimulationConfig(num_teams=4, seed=7, game_format="doubles")
    result = RoundRobinSimulator(config).run()

    assert len(result["fixtures"]) == 6
    assert result["standings"]["tournament"]["status"] == "completed"
    for fixture in result["fixtures"]:
        high, low = max(fixture["score"]), min(fixture["score"])
        assert high >= 11
        assert high - low >= 2
        assert fixture["rallies"] >= high


def test_rally_scoring_simulation_counts_every_rally_as_a_point():
    config = SimulationConfig(num_teams=3, seed=3, scoring_system="rally", play_to=7)
    result = RoundRobinSimulator(config).run()

    for fixture in result["fixtures"]:
        assert sum(fixture["score"]) == fixture["rallies"]


def test_games_won_add_up():
    config = SimulationConfig(num_teams=6, seed=11)
    result = RoundRobinSimulator(config).run()

    rankings = result["standings"]["rankings"]
    assert sum(entry["games_won"] for entry in rankings) == 15
    assert sum(entry["games_lost"] for entry in rankings) == 15


def test_export_json_format():
    config = SimulationConfig(num_teams=3, seed=5)
    simulator = RoundRobinSimulator(config)
    result = simulator.run()

    exported = json.loads(simulator.export_json_format(result))

    assert exported["simulation_config"]["seed"] == 5
    assert len(exported["fixtures"]) == 3
    assert len(exported["rankings"]) == 3


def test_serve_advantage_shifts_probability():
    config = SimulationConfig(serve_advantage=0.1)
    simulator = RallySimulator(config, random.Random(1))
    team1 = SimulatedTeam("A", 1.0)
    team2 = SimulatedTeam("B", 1.0)

    assert simulator.team_one_win_probability(team1, team2, 1) == pytest.approx(0.6)
    assert simulator.team_one_win_probability(team1, team2, 2) == pytest.approx(0.4)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"num_teams": 1},
        {"scoring_system": "golden"},
        {"game_format": "triples"},
        {"strength_spread": 1.5},
        {"max_rallies": 0},
    ],
)
def test_invalid_config_is_rejected(kwargs):
    with pytest.raises(InvalidSettingsException):
        SimulationConfig(**kwargs)

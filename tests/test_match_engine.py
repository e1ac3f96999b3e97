import random

import pytest

from pickletrack.controllers.match import MatchEngine, has_winner, side_out
from pickletrack.exceptions import (
    EmptyHistoryException,
    InvalidScoreException,
    InvalidSettingsException,
    MatchStateException,
)
from pickletrack.models.match import MatchSettings


def _engine(**settings):
    return MatchEngine("Dinkers", "Lobsters", settings=MatchSettings(**settings))


def _play(engine, winners):
    state = engine.snapshot()
    for winner in winners:
        state = engine.record_rally(winner)
    return state


def test_new_game_starts_at_zero_with_defaults():
    engine = MatchEngine("Dinkers", "Lobsters")
    state = engine.snapshot()

    assert state.score == (0, 0)
    assert state.serving_team == 1
    assert state.server_number == 1
    assert state.game_format == "singles"
    assert state.scoring_system == "sideout"
    assert state.play_to == 11
    assert state.status == "in-progress"
    assert state.winner is None
    assert state.history_length == 0


def test_sideout_singles_only_server_scores():
    engine = _engine()

    state = engine.record_rally(1)
    assert state.score == (1, 0)
    assert state.serving_team == 1

    state = engine.record_rally(2)
    assert state.score == (1, 0)
    assert state.serving_team == 2

    state = engine.record_rally(2)
    assert state.score == (1, 1)
    assert state.serving_team == 2


def test_sideout_doubles_rotation_with_opening_exemption():
    engine = _engine(game_format="doubles")

    # First rally lost by team 1: serve passes straight across
    state = engine.record_rally(2)
    assert (state.serving_team, state.server_number) == (2, 1)

    state = engine.record_rally(1)
    assert (state.serving_team, state.server_number) == (2, 2)

    state = engine.record_rally(1)
    assert (state.serving_team, state.server_number) == (1, 1)

    state = engine.record_rally(2)
    assert (state.serving_team, state.server_number) == (1, 2)

    state = engine.record_rally(2)
    assert (state.serving_team, state.server_number) == (2, 1)
    assert state.score == (0, 0)


def test_rally_scoring_winner_always_scores_and_takes_serve():
    engine = _engine(scoring_system="rally", game_format="doubles")
    engine.record_rally(1)

    state = engine.record_rally(2)
    assert state.score == (1, 1)
    assert (state.serving_team, state.server_number) == (2, 1)

    state = engine.record_rally(2)
    assert state.score == (1, 2)
    assert (state.serving_team, state.server_number) == (2, 1)


def test_rally_count_counts_every_rally():
    engine = _engine()
    state = _play(engine, [1, 2, 2, 1, 1])
    assert state.rally_count == 5
    assert state.history_length == 5


def test_eleven_nine_completes_for_team_one():
    engine = _engine(scoring_system="rally")
    state = _play(engine, [2] * 9 + [1] * 11)

    assert state.score == (11, 9)
    assert state.is_completed
    assert state.winner == 1
    assert state.completed_at is not None


def test_eleven_ten_needs_two_point_lead():
    engine = _engine(scoring_system="rally")
    state = _play(engine, [2] * 10 + [1] * 11)

    assert state.score == (11, 10)
    assert not state.is_completed

    state = engine.record_rally(1)
    assert state.score == (12, 10)
    assert state.is_completed
    assert state.winner == 1


def test_custom_target_score():
    engine = _engine(scoring_system="rally", play_to=5)
    state = _play(engine, [2] * 5)
    assert state.is_completed
    assert state.winner == 2


def test_scoring_completed_game_is_rejected_without_change():
    engine = _engine(scoring_system="rally")
    before = _play(engine, [1] * 11)

    with pytest.raises(MatchStateException):
        engine.record_rally(2)

    assert engine.snapshot() == before


@pytest.mark.parametrize("winner", [0, 3, "1", None, True])
def test_invalid_rally_winner_is_rejected(winner):
    engine = _engine()
    with pytest.raises(InvalidScoreException):
        engine.record_rally(winner)
    assert engine.snapshot().history_length == 0
    assert engine.rally_count == 0


def test_undo_on_fresh_game_signals_empty_history():
    engine = _engine()
    with pytest.raises(EmptyHistoryException):
        engine.undo()


def test_undo_restores_previous_state():
    engine = _engine(game_format="doubles")
    _play(engine, [1, 1, 2, 1])
    before = engine.snapshot()

    engine.record_rally(2)
    state = engine.undo()

    assert state == before


def test_undo_all_rallies_restores_initial_state():
    engine = _engine(game_format="doubles", scoring_system="rally")
    initial = engine.snapshot()
    winners = [1, 2, 2, 1, 2, 1, 1]
    _play(engine, winners)

    for _ in winners:
        state = engine.undo()

    assert state == initial
    with pytest.raises(EmptyHistoryException):
        engine.undo()


def test_undo_winning_rally_reopens_game():
    engine = _engine(scoring_system="rally")
    _play(engine, [1] * 11)
    assert engine.is_completed

    state = engine.undo()

    assert state.status == "in-progress"
    assert state.winner is None
    assert state.completed_at is None
    assert state.score == (10, 0)

    state = engine.record_rally(1)
    assert state.is_completed


def test_switch_serve_singles_keeps_score():
    engine = _engine()
    engine.record_rally(1)

    state = engine.switch_serve()

    assert state.serving_team == 2
    assert state.score == (1, 0)
    assert state.rally_count == 1
    assert engine.history[-1].is_manual_switch
    assert engine.history[-1].action == "Manual serve switch"


def test_switch_serve_doubles_uses_rotation():
    engine = _engine(game_format="doubles", scoring_system="rally")
    state = engine.switch_serve()
    assert (state.serving_team, state.server_number) == (1, 2)

    state = engine.switch_serve()
    assert (state.serving_team, state.server_number) == (2, 1)


def test_switch_serve_is_undoable():
    engine = _engine()
    engine.switch_serve()
    state = engine.undo()
    assert state.serving_team == 1
    assert state.history_length == 0


def test_switch_serve_allowed_on_completed_game():
    engine = _engine(scoring_system="rally")
    _play(engine, [1] * 11)

    state = engine.switch_serve()

    assert state.is_completed
    assert state.serving_team == 2


def test_history_records_acting_team():
    engine = _engine()
    _play(engine, [2, 1])
    actions = [(entry.action, entry.acting_team) for entry in engine.history]
    assert actions == [("Rally won by Team 2", 2), ("Rally won by Team 1", 1)]


def test_sideout_score_only_increases_on_served_rallies():
    rng = random.Random(17)
    engine = _engine(game_format="doubles")

    for _ in range(300):
        if engine.is_completed:
            break
        before = engine.snapshot()
        winner = rng.choice([1, 2])
        after = engine.record_rally(winner)

        if winner == before.serving_team:
            expected = list(before.score)
            expected[winner - 1] += 1
            assert after.score == tuple(expected)
        else:
            assert after.score == before.score


def test_blank_team_name_is_rejected():
    with pytest.raises(InvalidSettingsException):
        MatchEngine("  ", "Lobsters")


def test_invalid_settings_are_rejected():
    with pytest.raises(InvalidSettingsException):
        MatchSettings(play_to=0)
    with pytest.raises(InvalidSettingsException):
        MatchSettings(game_format="triples")
    with pytest.raises(InvalidSettingsException):
        MatchSettings(scoring_system="golden")
    with pytest.raises(InvalidSettingsException):
        MatchSettings(serving_team=3)


def test_settings_from_dict_fills_defaults():
    settings = MatchSettings.from_dict({"game_format": "doubles", "play_to": None})
    assert settings.is_doubles
    assert settings.play_to == 11
    assert settings.scoring_system == "sideout"


def test_score_call():
    engine = _engine(game_format="doubles", scoring_system="rally")
    state = _play(engine, [1, 1, 2])
    assert state.score_call == "1-2-1"


def test_snapshot_payload_shape():
    engine = _engine()
    engine.record_rally(1)
    payload = engine.snapshot().to_dict()

    assert payload["team1"] == {"name": "Dinkers", "score": 1}
    assert payload["team2"] == {"name": "Lobsters", "score": 0}
    assert payload["status"] == "in-progress"
    assert payload["completed_at"] is None


def test_side_out_helper_singles_keeps_server_number():
    assert side_out(1, 1, "singles", "sideout", 5) == (2, 1)
    assert side_out(2, 1, "singles", "rally", 1) == (1, 1)


def test_has_winner():
    assert has_winner(11, 9, 11, 2)
    assert not has_winner(11, 10, 11, 2)
    assert has_winner(10, 12, 11, 2)
    assert not has_winner(9, 0, 11, 2)


def test_boolean_serving_team_is_rejected():
    with pytest.raises(InvalidSettingsException):
        MatchSettings(serving_team=True)
    with pytest.raises(InvalidSettingsException):
        MatchSettings(server_number=False)


def test_archived_game_rejects_every_action():
    engine = _engine(scoring_system="rally")
    _play(engine, [1] * 11)
    engine.archive()

    with pytest.raises(MatchStateException):
        engine.undo()
    with pytest.raises(MatchStateException):
        engine.record_rally(2)
    with pytest.raises(MatchStateException):
        engine.switch_serve()
    assert engine.score == (11, 0)
    assert len(engine.history) == 11


def test_archive_requires_completed_game():
    engine = _engine()
    engine.record_rally(1)

    with pytest.raises(MatchStateException):
        engine.archive()
    assert not engine.archived

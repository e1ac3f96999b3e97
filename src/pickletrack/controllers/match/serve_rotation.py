"""Serve rotation rules.

Pure functions shared by rally processing and the manual serve switch.
"""

# Pickle Track
# Copyright (C) 2025  Pickle Track developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import Tuple

from pickletrack.constants import (
    FIRST_SERVER,
    FORMAT_DOUBLES,
    SCORING_SIDEOUT,
    SECOND_SERVER,
    TEAM_ONE,
    TEAM_TWO,
)
from pickletrack.type_hints import GameFormat, ScoringSystem, ServerNumber, TeamSide


def other_team(team: TeamSide) -> TeamSide:
    """Return the opposing side."""
    return TEAM_TWO if team == TEAM_ONE else TEAM_ONE


def side_out(
    serving_team: TeamSide,
    server_number: ServerNumber,
    game_format: GameFormat,
    scoring_system: ScoringSystem,
    rally_count: int,
) -> Tuple[TeamSide, ServerNumber]:
    """Compute the serve after the serving side loses the serve.

    Doubles gives each side two servers per service turn: the first server
    losing the serve hands it to the partner (server 2), and server 2 losing
    it passes the serve to the opponents, starting again at server 1.

    Team 1 starts a side-out game with only one server: a side-out on the
    very first rally passes the serve straight across.

    Singles has no server numbers; the serve always changes sides.

    Args:
        serving_team: Team currently serving
        server_number: Current server number
        game_format: 'singles' or 'doubles'
        scoring_system: 'rally' or 'sideout'
        rally_count: Rallies played, including the one just decided

    Returns:
        Tuple of (serving_team, server_number) after the side-out
    """
    if game_format != FORMAT_DOUBLES:
        return other_team(serving_team), server_number

    opening_rally = rally_count <= 1 and scoring_system == SCORING_SIDEOUT
    if serving_team == TEAM_ONE and server_number == FIRST_SERVER and not opening_rally:
        return serving_team, SECOND_SERVER
    if serving_team == TEAM_TWO and server_number == FIRST_SERVER:
        return serving_team, SECOND_SERVER
    return other_team(serving_team), FIRST_SERVER


def has_winner(team1_score: int, team2_score: int, play_to: int, win_by: int) -> bool:
    """Whether a game is decided: someone reached ``play_to`` with a ``win_by`` lead."""
    reached_target = team1_score >= play_to or team2_score >= play_to
    return reached_target and abs(team1_score - team2_score) >= win_by

"""Ranking entry data class."""

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

from dataclasses import dataclass
from typing import Any, Dict

from pickletrack.models.tournament.team import Team


@dataclass(frozen=True)
class RankingEntry:
    """One row of the standings table, a frozen copy of a team's stats."""

    rank: int
    team_id: str
    team_name: str
    games_won: int
    games_lost: int
    points_scored: int
    points_conceded: int
    point_difference: int

    @classmethod
    def from_team(cls, rank: int, team: Team) -> "RankingEntry":
        return cls(
            rank=rank,
            team_id=team.id,
            team_name=team.name,
            games_won=team.games_won,
            games_lost=team.games_lost,
            points_scored=team.points_scored,
            points_conceded=team.points_conceded,
            point_difference=team.point_difference,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "team_id": self.team_id,
            "team_name": self.team_name,
            "games_won": self.games_won,
            "games_lost": self.games_lost,
            "points_scored": self.points_scored,
            "points_conceded": self.points_conceded,
            "point_difference": self.point_difference,
        }

"""A team in a round-robin tournament."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pickletrack.constants import RESULT_LOST, RESULT_WON
from pickletrack.type_hints import HeadToHeadResult


@dataclass(frozen=True)
class HeadToHeadRecord:
    """One completed fixture from a team's point of view.

    Attributes
    ----------
    opponent_id : str
        ID of the opposing team
    opponent_name : str
        Name of the opposing team
    result : str
        'won' or 'lost'
    score_for : int
        Points this team scored in the fixture
    score_against : int
        Points the opponent scored in the fixture
    """

    opponent_id: str
    opponent_name: str
    result: HeadToHeadResult
    score_for: int
    score_against: int

    @property
    def point_difference(self) -> int:
        return self.score_for - self.score_against

    def to_dict(self) -> Dict[str, Any]:
        return {
            "opponent_id": self.opponent_id,
            "opponent_name": self.opponent_name,
            "result": self.result,
            "score_for": self.score_for,
            "score_against": self.score_against,
        }


@dataclass
class Team:
    """A round-robin participant and its cumulative statistics.

    Statistics are only mutated by ``ResultRecorder`` when a fixture
    completes. ``point_difference`` is derived, so it can never drift from
    ``points_scored - points_conceded``.

    Attributes
    ----------
    id : str
        Unique identifier
    name : str
        Display name
    seed : int
        1-based registration order; the last ranking tie-break
    games_won, games_lost : int
        Completed fixtures won and lost
    points_scored, points_conceded : int
        Points summed over completed fixtures
    matches : list of HeadToHeadRecord
        One record per completed fixture, in completion order
    """

    id: str
    name: str
    seed: int
    games_won: int = 0
    games_lost: int = 0
    points_scored: int = 0
    points_conceded: int = 0
    matches: List[HeadToHeadRecord] = field(default_factory=list)

    @property
    def point_difference(self) -> int:
        return self.points_scored - self.points_conceded

    @property
    def games_played(self) -> int:
        return self.games_won + self.games_lost

    @property
    def win_percentage(self) -> float:
        """Share of completed fixtures won, as a percentage with one decimal."""
        if self.games_played == 0:
            return 0.0
        return round(self.games_won / self.games_played * 100, 1)

    @property
    def primary_criteria(self) -> tuple:
        """Key shared by teams that only head-to-head or seed can separate."""
        return (self.games_won, self.point_difference, self.points_scored)

    def record_against(self, opponent_id: str) -> Optional[HeadToHeadRecord]:
        """Return the record of the fixture against ``opponent_id``, if played."""
        for record in self.matches:
            if record.opponent_id == opponent_id:
                return record
        return None

    def add_result(
        self, opponent: "Team", score_for: int, score_against: int
    ) -> HeadToHeadRecord:
        """Fold one completed fixture into the cumulative statistics."""
        won = score_for > score_against
        if won:
            self.games_won += 1
        else:
            self.games_lost += 1
        self.points_scored += score_for
        self.points_conceded += score_against

        record = HeadToHeadRecord(
            opponent_id=opponent.id,
            opponent_name=opponent.name,
            result=RESULT_WON if won else RESULT_LOST,
            score_for=score_for,
            score_against=score_against,
        )
        self.matches.append(record)
        return record

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "seed": self.seed,
            "games_won": self.games_won,
            "games_lost": self.games_lost,
            "points_scored": self.points_scored,
            "points_conceded": self.points_conceded,
            "point_difference": self.point_difference,
            "win_percentage": self.win_percentage,
            "matches": [m.to_dict() for m in self.matches],
        }

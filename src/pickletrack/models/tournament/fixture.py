"""Fixture data classes."""

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
from datetime import datetime
from typing import Any, Dict, Optional

from pickletrack.constants import (
    FIXTURE_COMPLETED,
    FIXTURE_IN_PROGRESS,
    FIXTURE_PENDING,
)
from pickletrack.type_hints import FixtureStatus
from pickletrack.utils import isoformat_or_none


@dataclass
class FixtureSide:
    """One team's slot in a fixture."""

    team_id: str
    name: str
    score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.team_id, "name": self.name, "score": self.score}


@dataclass
class Fixture:
    """A scheduled pairing between two teams.

    Attributes
    ----------
    id : str
        Unique identifier
    team1, team2 : FixtureSide
        The two teams with their final scores (zero until completed)
    number : int
        1-based position in the schedule
    status : str
        'pending', 'in-progress' or 'completed'; never reopened
    match_id : str or None
        Id of the game that decides this fixture, once started
    completed_at : datetime or None
        When the result was recorded
    """

    id: str
    team1: FixtureSide
    team2: FixtureSide
    number: int
    status: FixtureStatus = FIXTURE_PENDING
    match_id: Optional[str] = None
    completed_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == FIXTURE_PENDING

    @property
    def is_in_progress(self) -> bool:
        return self.status == FIXTURE_IN_PROGRESS

    @property
    def is_completed(self) -> bool:
        return self.status == FIXTURE_COMPLETED

    def label(self) -> str:
        return f"{self.team1.name} vs {self.team2.name}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize fixture to dictionary."""
        return {
            "id": self.id,
            "number": self.number,
            "team1": self.team1.to_dict(),
            "team2": self.team2.to_dict(),
            "status": self.status,
            "match_id": self.match_id,
            "completed_at": isoformat_or_none(self.completed_at),
        }

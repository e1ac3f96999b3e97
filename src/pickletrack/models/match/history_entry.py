"""Undo history entry data class."""

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

from pickletrack.utils import isoformat_or_none


@dataclass(frozen=True)
class HistoryEntry:
    """The state of a game just before one scoring action was applied.

    Entries are immutable values appended to a game's history log. Undo pops
    the latest entry and copies these fields back onto the game.

    Attributes
    ----------
    team1_score, team2_score : int
        Scores before the action
    serving_team : int
        Serving team before the action
    server_number : int
        Server number before the action
    rally_count : int
        Rallies played before the action
    status : str
        Game status before the action
    winner : int or None
        Winner before the action (only set when a completed game was switched)
    completed_at : datetime or None
        Completion time before the action
    action : str
        Human readable label, e.g. ``"Rally won by Team 2"``
    acting_team : int or None
        Rally winner, or None for a manual serve switch
    timestamp : datetime
        When the action was applied
    """

    team1_score: int
    team2_score: int
    serving_team: int
    server_number: int
    rally_count: int
    status: str
    winner: Optional[int]
    completed_at: Optional[datetime]
    action: str
    acting_team: Optional[int]
    timestamp: datetime

    @property
    def is_manual_switch(self) -> bool:
        return self.acting_team is None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize history entry to dictionary."""
        return {
            "team1_score": self.team1_score,
            "team2_score": self.team2_score,
            "serving_team": self.serving_team,
            "server_number": self.server_number,
            "rally_count": self.rally_count,
            "status": self.status,
            "winner": self.winner,
            "completed_at": isoformat_or_none(self.completed_at),
            "action": self.action,
            "acting_team": self.acting_team,
            "timestamp": self.timestamp.isoformat(),
        }

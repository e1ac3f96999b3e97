"""Read-only view of a game's live state."""

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

from pickletrack.constants import FORMAT_DOUBLES, MATCH_COMPLETED, TEAM_ONE
from pickletrack.type_hints import MatchStatus, ScorePair
from pickletrack.utils import isoformat_or_none


@dataclass(frozen=True)
class MatchState:
    """Snapshot of a game returned by ``MatchEngine.snapshot()``.

    This is the only contract the round-robin side relies on: the score
    pair and whether the game is completed.
    """

    id: str
    tournament_id: Optional[str]
    team1_name: str
    team1_score: int
    team2_name: str
    team2_score: int
    serving_team: int
    server_number: int
    game_format: str
    scoring_system: str
    play_to: int
    status: MatchStatus
    winner: Optional[int]
    started_at: datetime
    completed_at: Optional[datetime]
    rally_count: int
    history_length: int

    @property
    def is_completed(self) -> bool:
        return self.status == MATCH_COMPLETED

    @property
    def score(self) -> ScorePair:
        return self.team1_score, self.team2_score

    @property
    def score_call(self) -> str:
        """Score as announced before a serve, e.g. ``"4-2-1"`` in doubles."""
        if self.serving_team == TEAM_ONE:
            serving, receiving = self.team1_score, self.team2_score
        else:
            serving, receiving = self.team2_score, self.team1_score
        if self.game_format == FORMAT_DOUBLES:
            return f"{serving}-{receiving}-{self.server_number}"
        return f"{serving}-{receiving}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the snapshot for listeners."""
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "team1": {"name": self.team1_name, "score": self.team1_score},
            "team2": {"name": self.team2_name, "score": self.team2_score},
            "serving_team": self.serving_team,
            "server_number": self.server_number,
            "game_format": self.game_format,
            "scoring_system": self.scoring_system,
            "play_to": self.play_to,
            "status": self.status,
            "winner": self.winner,
            "started_at": self.started_at.isoformat(),
            "completed_at": isoformat_or_none(self.completed_at),
            "rally_count": self.rally_count,
            "history_length": self.history_length,
        }

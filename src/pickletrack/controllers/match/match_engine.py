"""Live scoring for a single game.

This module owns one game's score, serve rotation and undo history.
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

from datetime import datetime
from typing import List, Optional, Tuple

from pickletrack.constants import (
    ACTION_MANUAL_SWITCH,
    ACTION_RALLY,
    FIRST_SERVER,
    MATCH_COMPLETED,
    MATCH_IN_PROGRESS,
    SCORING_RALLY,
    TEAM_ONE,
    TEAM_TWO,
    WIN_BY,
)
from pickletrack.controllers.match.serve_rotation import has_winner, side_out
from pickletrack.exceptions import (
    EmptyHistoryException,
    InvalidSettingsException,
    MatchStateException,
)
from pickletrack.models.match import HistoryEntry, MatchSettings, MatchState
from pickletrack.type_hints import ScorePair, TeamSide
from pickletrack.utils import generate_id, setup_logger, utc_now
from pickletrack.utils.validation import validate_team_name, validate_team_side_strict

logger = setup_logger(__name__)


class MatchEngine:
    """State machine for one game: in-progress until a side wins by two.

    The engine is responsible for:
    - Applying rally outcomes under rally or side-out scoring
    - Rotating the serve, including the doubles two-server rule
    - Detecting the win-by-2 finish
    - Keeping an undo log of immutable history entries

    A completed game can only be reopened by ``undo``. The manual serve
    switch is an operator override and works in any status. Once a
    tournament has recorded the result, ``archive`` freezes the game and
    every further action is rejected.
    """

    def __init__(
        self,
        team1_name: str,
        team2_name: str,
        settings: Optional[MatchSettings] = None,
        tournament_id: Optional[str] = None,
        match_id: Optional[str] = None,
    ) -> None:
        """Start a new game at 0-0.

        Args:
            team1_name: Name of team 1
            team2_name: Name of team 2
            settings: Game settings, defaults to side-out singles to 11
            tournament_id: Owning event or round-robin tournament, if any
            match_id: Explicit id, generated when omitted
        """
        names = []
        for name in (team1_name, team2_name):
            result = validate_team_name(name)
            if not result:
                raise InvalidSettingsException(result.error_message)
            names.append(result.sanitized_value)

        self.id = match_id or generate_id()
        self.tournament_id = tournament_id
        self.settings = settings or MatchSettings()
        self.team1_name, self.team2_name = names

        self.team1_score = 0
        self.team2_score = 0
        self.serving_team = self.settings.serving_team
        self.server_number = self.settings.server_number
        self.rally_count = 0

        self.status = MATCH_IN_PROGRESS
        self.winner: Optional[TeamSide] = None
        self.started_at: datetime = utc_now()
        self.completed_at: Optional[datetime] = None
        self.archived = False

        self._history: List[HistoryEntry] = []

        logger.info(
            f"Started game {self.id}: {self.team1_name} vs {self.team2_name} "
            f"({self.settings.scoring_system}, {self.settings.game_format}, "
            f"to {self.settings.play_to})"
        )

    # ========== Properties ==========

    @property
    def is_completed(self) -> bool:
        return self.status == MATCH_COMPLETED

    @property
    def score(self) -> ScorePair:
        return self.team1_score, self.team2_score

    @property
    def history(self) -> Tuple[HistoryEntry, ...]:
        """Undo log, oldest first."""
        return tuple(self._history)

    # ========== Scoring ==========

    def record_rally(self, winning_team: TeamSide) -> MatchState:
        """Apply the outcome of one rally.

        Args:
            winning_team: 1 or 2

        Returns:
            Snapshot after the rally

        Raises:
            MatchStateException: If the game is already completed or archived
            InvalidScoreException: If ``winning_team`` is not 1 or 2
        """
        self._ensure_not_archived()
        if self.is_completed:
            raise MatchStateException(f"Game {self.id} is already completed")
        winning_team = validate_team_side_strict(winning_team)

        entry = self._capture(ACTION_RALLY.format(team=winning_team), winning_team)
        self.rally_count += 1

        if self.settings.scoring_system == SCORING_RALLY:
            self._apply_rally_scoring(winning_team)
        else:
            self._apply_sideout_scoring(winning_team)

        self._history.append(entry)
        self._check_winner()

        logger.debug(
            f"Game {self.id} rally {self.rally_count} won by team {winning_team}: "
            f"{self.team1_score}-{self.team2_score}, "
            f"serve {self.serving_team}/{self.server_number}"
        )
        return self.snapshot()

    def switch_serve(self) -> MatchState:
        """Force a side-out without changing the score.

        Returns:
            Snapshot after the switch

        Raises:
            MatchStateException: If the game is archived
        """
        self._ensure_not_archived()
        entry =self._capture(ACTION_MANUAL_SWITCH, None)
        self._side_out()
        self._history.append(entry)

        if self.is_completed:
            logger.warning(f"Manual serve switch on completed game {self.id}")
        logger.info(
            f"Game {self.id} manual serve switch: "
            f"serve {self.serving_team}/{self.server_number}"
        )
        return self.snapshot()

    def undo(self) -> MatchState:
        """Revert the most recent rally or serve switch.

        Returns:
            Snapshot after the undo

        Raises:
            MatchStateException: If the game is archived
            EmptyHistoryException: If there is nothing to undo
        """
        self._ensure_not_archived()
        if not self._history:
            raise EmptyHistoryException(f"No actions to undo in game {self.id}")

        entry = self._history.pop()
        was_completed = self.is_completed

        self.team1_score = entry.team1_score
        self.team2_score = entry.team2_score
        self.serving_team = entry.serving_team
        self.server_number = entry.server_number
        self.rally_count = entry.rally_count
        self.status = entry.status
        self.winner = entry.winner
        self.completed_at = entry.completed_at

        if was_completed and not self.is_completed:
            logger.info(f"Game {self.id} reopened by undo")
        logger.debug(f"Game {self.id} undid '{entry.action}'")
        return self.snapshot()

    def archive(self) -> None:
        """Freeze a completed game after its result has been recorded.

        Raises:
            MatchStateException: If the game is not completed
        """
        if not self.is_completed:
            raise MatchStateException(f"Game {self.id} is not completed yet")
        self.archived = True
        logger.info(f"Game {self.id} archived at {self.team1_score}-{self.team2_score}")

    def snapshot(self) -> MatchState:
        """Return a read-only view of the current state."""
        return MatchState(
            id=self.id,
            tournament_id=self.tournament_id,
            team1_name=self.team1_name,
            team1_score=self.team1_score,
            team2_name=self.team2_name,
            team2_score=self.team2_score,
            serving_team=self.serving_team,
            server_number=self.server_number,
            game_format=self.settings.game_format,
            scoring_system=self.settings.scoring_system,
            play_to=self.settings.play_to,
            status=self.status,
            winner=self.winner,
            started_at=self.started_at,
            completed_at=self.completed_at,
            rally_count=self.rally_count,
            history_length=len(self._history),
        )

    # ========== Internals ==========

    def _ensure_not_archived(self) -> None:
        if self.archived:
            raise MatchStateException(
                f"Game {self.id} is archived, its result is already recorded"
            )

    def _capture(self, action: str, acting_team: Optional[int]) -> HistoryEntry:
        return HistoryEntry(
            team1_score=self.team1_score,
            team2_score=self.team2_score,
            serving_team=self.serving_team,
            server_number=self.server_number,
            rally_count=self.rally_count,
            status=self.status,
            winner=self.winner,
            completed_at=self.completed_at,
            action=action,
            acting_team=acting_team,
            timestamp=utc_now(),
        )

    def _add_point(self, team: int) -> None:
        if team == TEAM_ONE:
            self.team1_score += 1
        else:
            self.team2_score += 1

    def _apply_rally_scoring(self, winning_team: int) -> None:
        # Every rally scores; the winner takes the serve with server 1
        self._add_point(winning_team)
        if self.serving_team != winning_team:
            self.serving_team = winning_team
            self.server_number = FIRST_SERVER

    def _apply_sideout_scoring(self, winning_team: int) -> None:
        # Only the serving side scores
        if self.serving_team == winning_team:
            self._add_point(winning_team)
        else:
            self._side_out()

    def _side_out(self) -> None:
        self.serving_team, self.server_number = side_out(
            self.serving_team,
            self.server_number,
            self.settings.game_format,
            self.settings.scoring_system,
            self.rally_count,
        )

    def _check_winner(self) -> None:
        if not has_winner(
            self.team1_score, self.team2_score, self.settings.play_to, WIN_BY
        ):
            return
        self.winner = TEAM_ONE if self.team1_score > self.team2_score else TEAM_TWO
        self.status = MATCH_COMPLETED
        self.completed_at = utc_now()
        logger.info(
            f"Game {self.id} completed: {self.team1_name} {self.team1_score} - "
            f"{self.team2_score} {self.team2_name} (winner: team {self.winner})"
        )

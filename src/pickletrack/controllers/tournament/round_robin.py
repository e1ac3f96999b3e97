"""Single round-robin tournament.

Every team meets every other team exactly once. Standings are recomputed
after each completed fixture and the tournament completes with its last
fixture.
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

from collections import OrderedDict
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from pickletrack.constants import (
    FIXTURE_IN_PROGRESS,
    TOURNAMENT_COMPLETED,
    TOURNAMENT_IN_PROGRESS,
)
from pickletrack.controllers.tournament.ranking_calculator import RankingCalculator
from pickletrack.controllers.tournament.result_recorder import ResultRecorder
from pickletrack.controllers.tournament.schedule import create_fixtures
from pickletrack.exceptions import FixtureNotFoundException, FixtureStateException
from pickletrack.models.tournament import Fixture, RankingEntry, Team
from pickletrack.type_hints import TiedGroup, TournamentStatus
from pickletrack.utils import generate_id, isoformat_or_none, setup_logger, utc_now
from pickletrack.utils.validation import validate_team_names_strict

logger = setup_logger(__name__)


class RoundRobinTournament:
    """A round-robin tournament: teams, fixtures and live standings.

    Delegates result bookkeeping to ``ResultRecorder`` and ordering to
    ``RankingCalculator``.
    """

    def __init__(
        self,
        name: str,
        team_names: Sequence[str],
        organizer_id: Optional[str] = None,
        tournament_id: Optional[str] = None,
    ) -> None:
        """Create the tournament with its full schedule.

        Args:
            name: Tournament name
            team_names: At least two distinct, non-blank names, in seed order
            organizer_id: Creator id, generated when omitted
            tournament_id: Explicit id, generated when omitted

        Raises:
            InvalidTeamListException: If the team list is invalid
        """
        names = validate_team_names_strict(team_names)

        self.id = tournament_id or generate_id()
        self.name = (name or "").strip() or "Round Robin"
        self.organizer_id = organizer_id or generate_id()
        self.status: TournamentStatus = TOURNAMENT_IN_PROGRESS
        self.created_at: datetime = utc_now()
        self.completed_at: Optional[datetime] = None

        self.teams: "OrderedDict[str, Team]" = OrderedDict()
        for seed, team_name in enumerate(names, 1):
            team = Team(id=generate_id(), name=team_name, seed=seed)
            self.teams[team.id] = team

        self.fixtures: List[Fixture] = create_fixtures(list(self.teams.values()))
        self._fixtures_by_id = {f.id: f for f in self.fixtures}

        self.result_recorder = ResultRecorder()
        self.ranking_calculator = RankingCalculator()
        self.rankings: List[RankingEntry] = self.compute_rankings()

        logger.info(
            f"Created round robin '{self.name}' ({self.id}) with "
            f"{len(self.teams)} teams and {len(self.fixtures)} fixtures"
        )

    # ========== Properties ==========

    @property
    def is_completed(self) -> bool:
        return self.status == TOURNAMENT_COMPLETED

    @property
    def completed_fixture_count(self) -> int:
        return sum(1 for f in self.fixtures if f.is_completed)

    # ========== Fixture Queries ==========

    def get_fixture(self, fixture_id: str) -> Fixture:
        """Look up a fixture by id.

        Raises:
            FixtureNotFoundException: If the fixture is not in this tournament
        """
        fixture = self._fixtures_by_id.get(fixture_id)
        if fixture is None:
            raise FixtureNotFoundException(fixture_id)
        return fixture

    def upcoming_fixtures(self) -> List[Fixture]:
        return [f for f in self.fixtures if f.is_pending]

    def completed_fixtures(self) -> List[Fixture]:
        return [f for f in self.fixtures if f.is_completed]

    # ========== Fixture Lifecycle ==========

    def start_fixture(self, fixture_id: str, match_id: str) -> Fixture:
        """Move a pending fixture to in-progress and link its game.

        Raises:
            FixtureNotFoundException: If the fixture does not exist
            FixtureStateException: If the fixture is not pending
        """
        fixture = self.get_fixture(fixture_id)
        if not fixture.is_pending:
            raise FixtureStateException(
                f"Fixture {fixture.id} ({fixture.label()}) is {fixture.status}, "
                "only pending fixtures can be started"
            )
        fixture.status = FIXTURE_IN_PROGRESS
        fixture.match_id = match_id
        logger.info(f"Started fixture {fixture.number}: {fixture.label()}")
        return fixture

    def record_fixture_result(
        self, fixture_id: str, score1: int, score2: int
    ) -> Fixture:
        """Record a fixture's final score and refresh the standings.

        Args:
            fixture_id: Fixture to complete
            score1: Points for the fixture's team 1
            score2: Points for the fixture's team 2

        Returns:
            The completed fixture

        Raises:
            FixtureNotFoundException: If the fixture does not exist
            FixtureStateException: If the fixture is already completed
            InvalidScoreException: If the scores are negative or level
        """
        fixture = self.get_fixture(fixture_id)
        self.result_recorder.record_fixture_result(fixture, score1, score2, self.teams)
        self.rankings = self.compute_rankings()

        if all(f.is_completed for f in self.fixtures):
            self.status = TOURNAMENT_COMPLETED
            self.completed_at = utc_now()
            leader = self.rankings[0].team_name
            logger.info(f"Round robin '{self.name}' completed, winner: {leader}")
        return fixture

    # ========== Standings ==========

    def compute_rankings(self) -> List[RankingEntry]:
        return self.ranking_calculator.compute_rankings(list(self.teams.values()))

    def find_tied_groups(self) -> List[TiedGroup]:
        return self.ranking_calculator.find_tied_groups(list(self.teams.values()))

    def standings_view(self) -> Dict[str, Any]:
        """Full read-only view: rankings, team stats, fixtures and ties."""
        return {
            "tournament": self.summary(),
            "organizer_id": self.organizer_id,
            "completed_at": isoformat_or_none(self.completed_at),
            "rankings": [entry.to_dict() for entry in self.rankings],
            "teams": [team.to_dict() for team in self.teams.values()],
            "fixtures": [fixture.to_dict() for fixture in self.fixtures],
            "tied_groups": [
                [team.id for team in group] for group in self.find_tied_groups()
            ],
        }

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "team_count": len(self.teams),
            "completed_fixtures": self.completed_fixture_count,
            "total_fixtures": len(self.fixtures),
            "created_at": self.created_at.isoformat(),
        }

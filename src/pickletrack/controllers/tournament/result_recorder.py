"""Result recording for round-robin fixtures.

This module applies final fixture scores to team statistics with validation
done up front, so a rejected result never leaves partial updates behind.
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

from typing import Dict

from pickletrack.constants import FIXTURE_COMPLETED
from pickletrack.exceptions import FixtureStateException
from pickletrack.models.tournament import Fixture, Team
from pickletrack.utils import setup_logger, utc_now
from pickletrack.utils.validation import validate_fixture_scores_strict

logger = setup_logger(__name__)


class ResultRecorder:
    """Records fixture results and updates team statistics.

    This class is responsible for:
    - Rejecting results for fixtures that are already completed
    - Validating the final score pair
    - Updating both teams' cumulative statistics
    - Appending a head-to-head record to each team
    """

    def record_fixture_result(
        self,
        fixture: Fixture,
        score1: int,
        score2: int,
        teams: Dict[str, Team],
    ) -> None:
        """Record the final score of a fixture.

        Args:
            fixture: Fixture being completed
            score1: Points scored by the fixture's team 1
            score2: Points scored by the fixture's team 2
            teams: All tournament teams (id -> Team)

        Raises:
            FixtureStateException: If the fixture is already completed
            InvalidScoreException: If the scores are negative or level
        """
        if fixture.is_completed:
            raise FixtureStateException(
                f"Fixture {fixture.id} ({fixture.label()}) is already completed"
            )
        score1, score2 = validate_fixture_scores_strict(score1, score2)

        team1 = teams[fixture.team1.team_id]
        team2 = teams[fixture.team2.team_id]

        fixture.team1.score = score1
        fixture.team2.score = score2
        fixture.status = FIXTURE_COMPLETED
        fixture.completed_at = utc_now()

        team1.add_result(team2, score1, score2)
        team2.add_result(team1, score2, score1)

        winner = team1 if score1 > score2 else team2
        logger.info(
            f"Fixture {fixture.number}: {team1.name} {score1} - {score2} "
            f"{team2.name} (winner: {winner.name})"
        )

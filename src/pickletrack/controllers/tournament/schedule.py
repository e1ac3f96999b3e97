"""Round-robin schedule generation."""

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

from typing import List, Sequence

from pickletrack.models.tournament import Fixture, FixtureSide, Team
from pickletrack.utils import generate_id


def expected_fixture_count(num_teams: int) -> int:
    return num_teams * (num_teams - 1) // 2


def create_fixtures(teams: Sequence[Team]) -> List[Fixture]:
    """Create one pending fixture per unordered pair of teams.

    Pairs are emitted in seed order: (1, 2), (1, 3), ..., (2, 3), ...

    Args:
        teams: Teams in seed order

    Returns:
        Fixtures numbered from 1, all with zero scores
    """
    fixtures: List[Fixture] = []
    for i, home in enumerate(teams):
        for away in teams[i + 1 :]:
            fixtures.append(
                Fixture(
                    id=generate_id(),
                    team1=FixtureSide(team_id=home.id, name=home.name),
                    team2=FixtureSide(team_id=away.id, name=away.name),
                    number=len(fixtures) + 1,
                )
            )
    return fixtures

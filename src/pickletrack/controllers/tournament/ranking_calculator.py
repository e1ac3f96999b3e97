"""Standings calculation for round-robin tournaments.

Ranking order:
1. Games won
2. Point difference
3. Points scored
4. Head-to-head: the direct meeting's result, then its differential, then
   its raw score
5. Seed (registration order)
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

import functools
from collections import OrderedDict
from typing import List, Sequence

from pickletrack.constants import RESULT_WON
from pickletrack.models.tournament import RankingEntry, Team
from pickletrack.type_hints import TiedGroup
from pickletrack.utils import setup_logger

logger = setup_logger(__name__)


class RankingCalculator:
    """Orders teams for the standings table."""

    def compute_rankings(self, teams: Sequence[Team]) -> List[RankingEntry]:
        """Rank teams best to worst.

        Args:
            teams: Tournament teams, any order

        Returns:
            Ranking entries with 1-based, gap-free ranks
        """
        ordered = sorted(
            sorted(teams, key=lambda t: t.seed),
            key=functools.cmp_to_key(self._compare_teams),
            reverse=True,
        )
        return [RankingEntry.from_team(rank, team) for rank, team in enumerate(ordered, 1)]

    def find_tied_groups(self, teams: Sequence[Team]) -> List[TiedGroup]:
        """Group teams that share games won, point difference and points scored.

        Only groups of two or more teams are returned. Teams within a group
        and the groups themselves follow seed order.
        """
        groups: "OrderedDict[tuple, List[Team]]" = OrderedDict()
        for team in sorted(teams, key=lambda t: t.seed):
            groups.setdefault(team.primary_criteria, []).append(team)

        tied = [group for group in groups.values() if len(group) > 1]
        if tied:
            logger.debug(
                "Tied groups: "
                + "; ".join(", ".join(t.name for t in group) for group in tied)
            )
        return tied

    def _compare_teams(self, t1: Team, t2: Team) -> int:
        """Compare two teams for standings order.

        Returns:
            1 if t1 ranks higher, -1 if t2 ranks higher, 0 if equal
        """
        # Cumulative criteria
        for c1, c2 in zip(t1.primary_criteria, t2.primary_criteria):
            if c1 != c2:
                return 1 if c1 > c2 else -1

        # Direct meeting, if they have played
        head_to_head = self._compare_head_to_head(t1, t2)
        if head_to_head:
            return head_to_head

        # Lower seed ranks higher
        if t1.seed != t2.seed:
            return 1 if t1.seed < t2.seed else -1

        return 0

    def _compare_head_to_head(self, t1: Team, t2: Team) -> int:
        record = t1.record_against(t2.id)
        if record is None:
            return 0

        if record.result == RESULT_WON:
            return 1
        reverse = t2.record_against(t1.id)
        if reverse is not None and reverse.result == RESULT_WON:
            return -1

        if record.point_difference != 0:
            return 1 if record.point_difference > 0 else -1

        if record.score_for != record.score_against:
            return 1 if record.score_for > record.score_against else -1
        return 0

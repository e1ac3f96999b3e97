from pickletrack.controllers.tournament.ranking_calculator import RankingCalculator
from pickletrack.controllers.tournament.result_recorder import ResultRecorder
from pickletrack.controllers.tournament.round_robin import RoundRobinTournament
from pickletrack.controllers.tournament.schedule import (
    create_fixtures,
    expected_fixture_count,
)

__all__ = [
    "RankingCalculator",
    "ResultRecorder",
    "RoundRobinTournament",
    "create_fixtures",
    "expected_fixture_count",
]

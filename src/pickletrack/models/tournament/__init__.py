from pickletrack.models.tournament.event import Event
from pickletrack.models.tournament.fixture import Fixture, FixtureSide
from pickletrack.models.tournament.ranking_entry import RankingEntry
from pickletrack.models.tournament.team import HeadToHeadRecord, Team

__all__ = [
    "Event",
    "Fixture",
    "FixtureSide",
    "HeadToHeadRecord",
    "RankingEntry",
    "Team",
]

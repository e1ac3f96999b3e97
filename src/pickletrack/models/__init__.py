"""Data models for Pickle Track: games, teams, fixtures and standings."""

from pickletrack.models.match import HistoryEntry, MatchSettings, MatchState
from pickletrack.models.tournament import (
    Event,
    Fixture,
    FixtureSide,
    HeadToHeadRecord,
    RankingEntry,
    Team,
)

__all__ = [
    "Event",
    "Fixture",
    "FixtureSide",
    "HeadToHeadRecord",
    "HistoryEntry",
    "MatchSettings",
    "MatchState",
    "RankingEntry",
    "Team",
]

from pickletrack.controllers.match import MatchEngine
from pickletrack.controllers.registry import Registry
from pickletrack.controllers.scoreboard import Scoreboard, channel_name
from pickletrack.controllers.tournament import RoundRobinTournament

__all__ = [
    "MatchEngine",
    "Registry",
    "RoundRobinTournament",
    "Scoreboard",
    "channel_name",
]

"""Type hints used in Pickle Track."""

from typing import Any, Callable, Dict, List, Literal, Tuple

# Team side in a single game
TeamSide = Literal[1, 2]
# Server number within a doubles team
ServerNumber = Literal[1, 2]

ScoringSystem = Literal["rally", "sideout"]
GameFormat = Literal["singles", "doubles"]

MatchStatus = Literal["in-progress", "completed"]
FixtureStatus = Literal["pending", "in-progress", "completed"]
TournamentStatus = Literal["in-progress", "completed"]
HeadToHeadResult = Literal["won", "lost"]

# (team1_score, team2_score)
ScorePair = Tuple[int, int]
# Serialized payload pushed to listeners
Payload = Dict[str, Any]
# Called with (message type, payload)
Listener = Callable[[str, Payload], None]
# Teams sharing the same primary ranking criteria
TiedGroup = List["Team"]

"""Live game scoring."""

from pickletrack.controllers.match.match_engine import MatchEngine
from pickletrack.controllers.match.serve_rotation import has_winner, other_team, side_out

__all__ = ["MatchEngine", "has_winner", "other_team", "side_out"]

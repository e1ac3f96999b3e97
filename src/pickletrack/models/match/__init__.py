from pickletrack.models.match.history_entry import HistoryEntry
from pickletrack.models.match.match_settings import MatchSettings
from pickletrack.models.match.match_state import MatchState

__all__ = ["HistoryEntry", "MatchSettings", "MatchState"]

"""An event: a free-form collection of games with no schedule or standings."""

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

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from pickletrack.constants import EVENT_ACTIVE, EVENT_COMPLETED
from pickletrack.utils import isoformat_or_none, utc_now


@dataclass
class Event:
    """Games played under one banner, e.g. an open-play evening.

    Attributes
    ----------
    id : str
        Unique identifier
    name : str
        Event name
    organizer_id : str
        Who created the event
    game_ids : list of str
        Games created in this event, in creation order
    status : str
        'active' or 'completed'
    created_at : datetime
        Creation time
    completed_at : datetime or None
        When the event was closed
    """

    id: str
    name: str
    organizer_id: str
    game_ids: List[str] = field(default_factory=list)
    status: str = EVENT_ACTIVE
    created_at: datetime = field(default_factory=utc_now)
    completed_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == EVENT_ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.status == EVENT_COMPLETED

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat(),
            "game_count": len(self.game_ids),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "organizer_id": self.organizer_id,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "completed_at": isoformat_or_none(self.completed_at),
            "game_ids": list(self.game_ids),
        }

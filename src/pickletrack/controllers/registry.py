"""In-memory repositories for live entities.

Each registry maps ids to games, tournaments or events and hands out one
re-entrant lock per id, so callers can serialise work on a single entity
without blocking the others.
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

import threading
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Callable, Dict, Generic, Iterator, List, Optional, Type, TypeVar

from pickletrack.exceptions import NotFoundException
from pickletrack.utils import setup_logger, utc_now

logger = setup_logger(__name__)

T = TypeVar("T")


class Registry(Generic[T]):
    """Id-keyed store of entities that expose ``is_completed`` and ``completed_at``.

    Entries live until removed explicitly or pruned once completed.
    """

    def __init__(self, name: str, not_found: Type[NotFoundException]) -> None:
        """Create an empty registry.

        Args:
            name: Label used in log messages
            not_found: Exception raised for unknown ids
        """
        self.name = name
        self._not_found = not_found
        self._items: "OrderedDict[str, T]" = OrderedDict()
        self._locks: Dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self.list())

    def add(self, item_id: str, item: T) -> T:
        with self._guard:
            if item_id in self._items:
                raise ValueError(f"Duplicate {self.name} id: {item_id}")
            self._items[item_id] = item
            self._locks[item_id] = threading.RLock()
        logger.debug(f"Registered {self.name} {item_id}")
        return item

    def get(self, item_id: str) -> T:
        """Return the entity with ``item_id``.

        Raises:
            NotFoundException: The registry's not-found subclass
        """
        item = self._items.get(item_id)
        if item is None:
            raise self._not_found(item_id)
        return item

    def find(self, item_id: Optional[str]) -> Optional[T]:
        if item_id is None:
            return None
        return self._items.get(item_id)

    def remove(self, item_id: str) -> T:
        with self._guard:
            item = self._items.pop(item_id, None)
            self._locks.pop(item_id, None)
        if item is None:
            raise self._not_found(item_id)
        logger.info(f"Removed {self.name} {item_id}")
        return item

    def list(self, predicate: Optional[Callable[[T], bool]] = None) -> List[T]:
        """Entities in insertion order, optionally filtered."""
        with self._guard:
            items = list(self._items.values())
        if predicate is None:
            return items
        return [item for item in items if predicate(item)]

    def lock(self, item_id: str) -> threading.RLock:
        """Return the lock guarding ``item_id``.

        Raises:
            NotFoundException: If the id is unknown
        """
        with self._guard:
            lock = self._locks.get(item_id)
        if lock is None:
            raise self._not_found(item_id)
        return lock

    def prune_completed(
        self,
        max_age: timedelta,
        now: Optional[datetime] = None,
        keep: Optional[Callable[[T], bool]] = None,
    ) -> List[str]:
        """Drop entities completed at least ``max_age`` ago.

        Args:
            max_age: Minimum time since completion
            now: Reference time, defaults to the current UTC time
            keep: Entities for which this returns True are never dropped

        Returns:
            Ids of the removed entities
        """
        now = now or utc_now()
        with self._guard:
            expired = [
                item_id
                for item_id, item in self._items.items()
                if item.is_completed
                and item.completed_at is not None
                and now - item.completed_at >= max_age
                and not (keep is not None and keep(item))
            ]
            for item_id in expired:
                del self._items[item_id]
                self._locks.pop(item_id, None)
        if expired:
            logger.info(f"Pruned {len(expired)} completed {self.name} entries")
        return expired

"""
Selection Controller

Per-object state machine:

    Unselected --select--> Selected      (appended, trail added)
    Selected --deselect--> Unselected    (removed, trail released)

Both transitions are idempotent. Objects that show a trail regardless of
selection (pinned) keep their trail when deselected.
"""

import logging
from typing import Dict, Iterator, Tuple

from orbit_tracker.engine import TrackingEngine
from orbit_tracker.models import TrackedObject

logger = logging.getLogger(__name__)


class SelectionController:
    """Ordered, unique set of selected objects kept in sync with trails."""

    def __init__(self, engine: TrackingEngine):
        self.engine = engine
        # dict keeps insertion order and unique membership
        self._members: Dict[int, TrackedObject] = {}

    def is_selected(self, obj: TrackedObject) -> bool:
        return self._members.get(obj.catalog_number) is obj

    def select(self, obj: TrackedObject) -> bool:
        if self.is_selected(obj):
            return False
        stale = self._members.get(obj.catalog_number)
        if stale is not None:
            # Same catalog number, object from an earlier load
            logger.info(f"Dropping stale selection of {stale.catalog_number} ({stale.name})")
            self.deselect(stale)
        self._members[obj.catalog_number] = obj
        self.engine.add_trail(obj)
        logger.debug(f"Selected {obj.catalog_number} ({obj.name})")
        return True

    def deselect(self, obj: TrackedObject) -> bool:
        if not self.is_selected(obj):
            return False
        del self._members[obj.catalog_number]
        if not obj.wants_trail:
            self.engine.remove_trail(obj)
        logger.debug(f"Deselected {obj.catalog_number} ({obj.name})")
        return True

    def toggle(self, obj: TrackedObject) -> bool:
        """Flip the selection state. Returns True if obj is now selected."""
        if self.is_selected(obj):
            self.deselect(obj)
            return False
        self.select(obj)
        return True

    def clear_all(self) -> None:
        for obj in self.members:
            self.deselect(obj)

    @property
    def members(self) -> Tuple[TrackedObject, ...]:
        return tuple(self._members.values())

    def __contains__(self, obj: object) -> bool:
        return isinstance(obj, TrackedObject) and self.is_selected(obj)

    def __iter__(self) -> Iterator[TrackedObject]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self._members)

"""
Catalog of tracked objects.

Objects are kept in insertion order and indexed twice: by catalog number for
lookups, and by visual-handle identity for picking. Both indexes are updated
in the same call as the ordered list, so a pick never sees a half-added object.
"""

import logging
from typing import Any, Dict, Iterator, Optional, Tuple

from orbit_tracker.errors import DuplicateCatalogEntry
from orbit_tracker.models import TrackedObject

logger = logging.getLogger(__name__)


class Catalog:
    """Insertion-ordered collection of TrackedObject."""

    def __init__(self):
        self._by_number: Dict[int, TrackedObject] = {}
        self._by_visual: Dict[int, TrackedObject] = {}

    def add(self, obj: TrackedObject) -> bool:
        """
        Register obj.

        Returns:
            True if added; False for a duplicate catalog number (logged, not
            an error) or an object without a visual handle
        """
        if obj.catalog_number in self._by_number:
            logger.info(f"Ignoring duplicate: {DuplicateCatalogEntry(obj.catalog_number, obj.name)}")
            return False
        if obj.visual is None:
            logger.warning(f"Refusing to add {obj.catalog_number} without a visual handle")
            return False

        self._by_number[obj.catalog_number] = obj
        self._by_visual[id(obj.visual)] = obj
        return True

    def remove(self, catalog_number: int) -> Optional[TrackedObject]:
        obj = self._by_number.pop(catalog_number, None)
        if obj is not None:
            self._by_visual.pop(id(obj.visual), None)
        return obj

    def clear(self) -> None:
        self._by_number.clear()
        self._by_visual.clear()

    def find_by_catalog_number(self, catalog_number: int) -> Optional[TrackedObject]:
        return self._by_number.get(catalog_number)

    def find_by_visual_handle(self, handle: Any) -> Optional[TrackedObject]:
        if handle is None:
            return None
        obj = self._by_visual.get(id(handle))
        # id() values can be reused once a handle is garbage collected
        if obj is None or obj.visual is not handle:
            return None
        return obj

    def all(self) -> Tuple[TrackedObject, ...]:
        return tuple(self._by_number.values())

    def __contains__(self, catalog_number: object) -> bool:
        return catalog_number in self._by_number

    def __iter__(self) -> Iterator[TrackedObject]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._by_number)

"""
Tracker Session

Input port the host environment calls into. The session owns the engine,
the selection controller, the clock and the realtime ticker; the host only
forwards pointer presses, slider moves and link queries, and calls dispose()
on teardown.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from orbit_tracker.clock import ClockMode, RealtimeTicker, SimulationClock
from orbit_tracker.config import TrackerConfig
from orbit_tracker.deep_link import (
    DeepLinkOutcome,
    apply_deep_link,
    decode_query,
    encode_query,
    matching_objects,
)
from orbit_tracker.engine import RefreshReport, TrackingEngine
from orbit_tracker.models import TrackedObject
from orbit_tracker.propagator import Propagator
from orbit_tracker.renderer import SceneRenderer
from orbit_tracker.search import search_by_name
from orbit_tracker.selection import SelectionController

logger = logging.getLogger(__name__)


@dataclass
class SessionSummary:
    """What the info and highlight panels show."""

    focused_name: Optional[str]
    total_objects: int
    selected_count: int
    highlight_query: Optional[str]
    highlight_count: int


class TrackerSession:
    def __init__(self, renderer: SceneRenderer, propagator: Propagator,
                 config: Optional[TrackerConfig] = None,
                 clock: Optional[SimulationClock] = None):
        self.config = config if config is not None else TrackerConfig()
        self.clock = clock if clock is not None else SimulationClock()
        self.engine = TrackingEngine(renderer, propagator, self.clock, self.config)
        self.selection = SelectionController(self.engine)
        self.ticker = RealtimeTicker(self.clock, self.tick, self.config.tick_interval_seconds)
        self.focused: Optional[TrackedObject] = None
        self.highlight_query: Optional[str] = None
        self.highlight_count = 0

    # Pointer input

    def on_pointer_down(self, x: float, y: float, width: float,
                        height: float) -> Optional[TrackedObject]:
        """Toggle the selection of the object under the pointer, if any."""
        obj = self.engine.pick(x, y, width, height)
        if obj is None:
            return None
        if self.selection.toggle(obj):
            self.focused = obj
        elif self.focused is obj:
            self.focused = None
        return obj

    def remove_object(self, catalog_number: int) -> Optional[TrackedObject]:
        """Deselect and stop tracking one object."""
        obj = self.engine.catalog.find_by_catalog_number(catalog_number)
        if obj is None:
            return None
        self.selection.deselect(obj)
        if self.focused is obj:
            self.focused = None
        return self.engine.remove(catalog_number)

    # Clock

    def tick(self, instant: Optional[datetime] = None) -> RefreshReport:
        return self.engine.refresh_all_positions(self.clock.advance(instant))

    def scrub(self, instant: datetime) -> RefreshReport:
        """Move the simulation to instant; trails restart from it."""
        report = self.engine.refresh_all_positions(self.clock.scrub(instant))
        self.engine.rebuild_trails()
        return report

    def resume_realtime(self) -> RefreshReport:
        self.clock.resume_realtime()
        report = self.engine.refresh_all_positions(self.clock.now)
        self.engine.rebuild_trails()
        return report

    def start_realtime(self) -> None:
        if self.clock.mode is not ClockMode.REALTIME:
            self.clock.resume_realtime()
        self.ticker.start()

    async def stop_realtime(self) -> None:
        await self.ticker.stop()

    # Deep links, search and highlight

    def apply_deep_link(self, query: str) -> DeepLinkOutcome:
        state = decode_query(query)
        if state.highlight:
            self.engine.clear_all_highlights()
        outcome = apply_deep_link(state, self.engine.catalog, self.selection, self.engine)
        if outcome.selected:
            self.focused = outcome.selected[-1]
        if outcome.highlight:
            self.highlight_query = outcome.highlight
            self.highlight_count = outcome.highlight_count
        logger.info(f"Deep link selected {len(outcome.selected)} objects, "
                    f"{len(outcome.unresolved)} unresolved")
        return outcome

    def share_link(self) -> str:
        return encode_query(self.selection.members, self.highlight_query)

    def search(self, text: str) -> List[TrackedObject]:
        return search_by_name(self.engine.catalog.all(), text, self.config.max_search_results)

    def set_highlight(self, query: Optional[str]) -> int:
        """Highlight every object whose name contains query. Returns the count."""
        self.engine.clear_all_highlights()
        query = (query or "").strip() or None
        self.highlight_query = query
        self.highlight_count = 0
        if query:
            matches = matching_objects(self.engine.catalog.all(), query)
            for obj in matches:
                self.engine.highlight(obj)
            self.highlight_count = len(matches)
        return self.highlight_count

    def summary(self) -> SessionSummary:
        return SessionSummary(
            focused_name=self.focused.name if self.focused is not None else None,
            total_objects=len(self.engine.catalog),
            selected_count=len(self.selection),
            highlight_query=self.highlight_query,
            highlight_count=self.highlight_count,
        )

    async def dispose(self) -> None:
        await self.ticker.stop()
        self.selection.clear_all()
        self.engine.dispose()
        self.focused = None

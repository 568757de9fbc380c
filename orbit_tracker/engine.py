"""
Tracking Engine

Central coordinator between the catalog, the propagator and the renderer.

Features:
- Load catalog text into tracked objects with renderer visuals
- Refresh every position at one explicit instant per pass
- Switch between inertial and earth-fixed frames (trails rebuilt, positions
  recomputed immediately)
- Orbit trail lifecycle (idempotent add/remove)
- Picking: pointer position to tracked object
- Highlight state independent of selection
- Per-object propagation failure history

One bad object never stops a refresh pass: invalid elements and propagation
failures are recorded for that object and the pass moves on.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from orbit_tracker.catalog import Catalog
from orbit_tracker.catalog_source import FetchResult, fetch_catalog
from orbit_tracker.clock import SimulationClock
from orbit_tracker.config import DisplayOptions, TrackerConfig
from orbit_tracker.coordinates import ground_orientation, transform
from orbit_tracker.errors import (
    CollaboratorUnavailable,
    DuplicateCatalogEntry,
    InvalidElements,
    MalformedCatalog,
    PropagationFailure,
)
from orbit_tracker.models import ReferenceFrame, StationSeed, TrackedObject
from orbit_tracker.orbit_trail import sample_orbit
from orbit_tracker.propagator import Propagator
from orbit_tracker.renderer import SceneRenderer
from orbit_tracker.tle_parser import TLEParser

logger = logging.getLogger(__name__)

SeedFilter = Callable[[StationSeed], bool]


@dataclass
class RefreshReport:
    """Outcome of one refresh pass."""

    instant: datetime
    sidereal_angle: float
    updated: int = 0
    skipped: List[int] = field(default_factory=list)


@dataclass
class LoadResult:
    """Outcome of a remote catalog load."""

    url: str
    objects: List[TrackedObject] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TrackingEngine:
    """
    Owns the catalog and keeps the renderer in sync with it.

    Args:
        renderer: Scene renderer collaborator
        propagator: Orbital propagator collaborator
        clock: Simulation clock (default: new realtime clock)
        config: Tracker configuration
    """

    def __init__(self, renderer: SceneRenderer, propagator: Propagator,
                 clock: Optional[SimulationClock] = None,
                 config: Optional[TrackerConfig] = None):
        if renderer is None:
            raise CollaboratorUnavailable("No renderer surface available")
        if propagator is None:
            raise CollaboratorUnavailable("No propagator available")

        self.renderer = renderer
        self.propagator = propagator
        self.clock = clock if clock is not None else SimulationClock()
        self.config = config if config is not None else TrackerConfig()
        self.catalog = Catalog()
        self.frame = ReferenceFrame.INERTIAL
        self.parser = TLEParser()
        self.error_history: Dict[int, List[Dict[str, Any]]] = {}

    # __ Catalog loading _____________________________________________________

    def load_catalog(self, raw_text: str, color_hint: Optional[int] = None,
                     display_options: Optional[DisplayOptions] = None,
                     filter_predicate: Optional[SeedFilter] = None) -> List[TrackedObject]:
        """
        Parse catalog text and start tracking the accepted records.

        Args:
            raw_text: Catalog text (name line + two element lines per object)
            color_hint: Marker colour for this catalog
            display_options: Defaults copied onto every record
            filter_predicate: Called with each seed; may edit seed.options and
                returns False to reject the record

        Returns:
            Objects added to the catalog, in input order

        Raises:
            MalformedCatalog: text is structurally broken; nothing is changed
        """
        defaults = display_options.model_copy() if display_options is not None else DisplayOptions()
        if color_hint is not None:
            defaults.color_hint = color_hint

        seeds = self.parser.parse_catalog(raw_text, defaults)
        instant = self.clock.now
        angle = self.propagator.sidereal_angle(instant)

        accepted = []
        for seed in seeds:
            if filter_predicate is not None and not filter_predicate(seed):
                continue
            if seed.record.catalog_number in self.catalog:
                logger.info(f"Ignoring duplicate: {DuplicateCatalogEntry(seed.record.catalog_number, seed.name)}")
                continue
            obj = self._create(seed)
            self._place(obj, instant, angle)
            self.catalog.add(obj)
            accepted.append(obj)

        for obj in accepted:
            if obj.wants_trail:
                self._build_trail(obj, instant)

        if accepted:
            self.renderer.set_ground_orientation(ground_orientation(angle, self.frame))
            self.renderer.request_redraw()
        logger.info(f"Loaded {len(accepted)} of {len(seeds)} catalog records "
                    f"({len(self.catalog)} tracked)")
        return accepted

    async def load_remote_catalog(self, url: str, color_hint: Optional[int] = None,
                                  display_options: Optional[DisplayOptions] = None,
                                  filter_predicate: Optional[SeedFilter] = None) -> LoadResult:
        """
        Fetch catalog text and load it once the fetch has completed.

        A failed fetch or malformed text leaves the catalog untouched.
        """
        result: FetchResult = await fetch_catalog(url, self.config.fetch_timeout_seconds)
        if not result.ok:
            return LoadResult(url, error=result.error)

        try:
            objects = self.load_catalog(result.text, color_hint, display_options, filter_predicate)
        except MalformedCatalog as e:
            logger.error(f"Catalog from {url} is malformed: {e}")
            return LoadResult(url, error=str(e))
        return LoadResult(url, objects=objects)

    def remove(self, catalog_number: int) -> Optional[TrackedObject]:
        """
        Stop tracking one object and release its renderer resources.

        Returns:
            The removed object, or None if it was not tracked
        """
        obj = self.catalog.find_by_catalog_number(catalog_number)
        if obj is None:
            return None
        self.remove_trail(obj)
        self.clear_highlight(obj)
        self.catalog.remove(catalog_number)
        self.renderer.remove_from_scene(obj.visual)
        obj.visual = None
        self.renderer.request_redraw()
        logger.info(f"Removed {catalog_number} ({obj.name})")
        return obj

    def _create(self, seed: StationSeed) -> TrackedObject:
        obj = TrackedObject.from_seed(seed)
        obj.visual = self.renderer.create_visual(obj.options.color_hint, obj.options.size_hint)
        self.renderer.add_to_scene(obj.visual)
        return obj

    # __ Positions ___________________________________________________________

    def _elements(self, obj: TrackedObject):
        """Cached orbital elements; derived once per object."""
        if obj.elements is None and obj.elements_error is None:
            try:
                obj.elements = self.propagator.derive_elements(obj.record.line1, obj.record.line2)
            except InvalidElements as e:
                obj.elements_error = str(e)
                self._log_error(obj, None, str(e), self.clock.now)
                logger.warning(f"Invalid elements for {obj.catalog_number} ({obj.name}): {e}")
        return obj.elements

    def _place(self, obj: TrackedObject, instant: datetime, angle: float) -> bool:
        elements = self._elements(obj)
        if elements is None:
            return False
        try:
            vector = self.propagator.propagate(elements, instant)
        except PropagationFailure as e:
            self._log_error(obj, e.error_code, str(e), instant)
            logger.debug(f"Skipping {obj.catalog_number} at {instant.isoformat()}: {e}")
            return False

        obj.position = transform(vector, angle, self.frame)
        self.renderer.set_position(obj.visual, *obj.position)
        return True

    def refresh_all_positions(self, instant: Optional[datetime] = None) -> RefreshReport:
        """
        Recompute every position at one instant.

        The globe orientation is set from the same sidereal angle as the
        object positions so both stay in lockstep.
        """
        if instant is None:
            instant = self.clock.now
        angle = self.propagator.sidereal_angle(instant)
        report = RefreshReport(instant, angle)

        for obj in self.catalog.all():
            if self._place(obj, instant, angle):
                report.updated += 1
            else:
                report.skipped.append(obj.catalog_number)

        self.renderer.set_ground_orientation(ground_orientation(angle, self.frame))
        self.renderer.request_redraw()
        if report.skipped:
            logger.debug(f"Refresh at {instant.isoformat()}: {len(report.skipped)} objects skipped")
        return report

    def set_reference_frame(self, frame: ReferenceFrame) -> None:
        """Switch frames; trails are rebuilt and positions recomputed at once."""
        if frame is self.frame:
            return

        with_trail = [obj for obj in self.catalog.all() if obj.trail is not None]
        for obj in with_trail:
            self.remove_trail(obj)

        self.frame = frame
        self.refresh_all_positions(self.clock.now)

        for obj in with_trail:
            self.add_trail(obj)
        logger.info(f"Reference frame set to {frame.value}")

    # __ Trails ______________________________________________________________

    def _build_trail(self, obj: TrackedObject, start: datetime) -> bool:
        points = sample_orbit(obj, start, self.propagator, self.frame,
                              self.config.trail_step_minutes)
        if not points:
            logger.debug(f"No drawable trail for {obj.catalog_number}")
            return False
        obj.trail = self.renderer.create_trail(points)
        return True

    def add_trail(self, obj: TrackedObject) -> bool:
        """Create a trail for obj. No-op if it already has one."""
        if obj.trail is not None:
            return False
        added = self._build_trail(obj, self.clock.now)
        if added:
            self.renderer.request_redraw()
        return added

    def remove_trail(self, obj: TrackedObject) -> bool:
        """Release the trail of obj. No-op if it has none."""
        if obj.trail is None:
            return False
        trail, obj.trail = obj.trail, None
        self.renderer.dispose_trail(trail)
        self.renderer.request_redraw()
        return True

    def rebuild_trails(self) -> int:
        """Resample every live trail from the current clock instant."""
        with_trail = [obj for obj in self.catalog.all() if obj.trail is not None]
        for obj in with_trail:
            self.remove_trail(obj)
        return sum(1 for obj in with_trail if self.add_trail(obj))

    # __ Picking and highlight _______________________________________________

    def pick(self, pointer_x: float, pointer_y: float,
             viewport_width: float, viewport_height: float) -> Optional[TrackedObject]:
        """
        Resolve a pointer position (device pixels, origin top-left).

        Returns:
            The tracked object under the pointer, or None
        """
        if len(self.catalog) == 0 or viewport_width <= 0 or viewport_height <= 0:
            return None

        ndc_x = (pointer_x / viewport_width) * 2 - 1
        ndc_y = -(pointer_y / viewport_height) * 2 + 1
        handle = self.renderer.pick_nearest(ndc_x, ndc_y)
        return self.catalog.find_by_visual_handle(handle)

    def highlight(self, obj: TrackedObject) -> None:
        if obj.highlighted:
            return
        obj.highlighted = True
        self.renderer.set_highlight(obj.visual, True)
        self.renderer.request_redraw()

    def clear_highlight(self, obj: TrackedObject) -> None:
        if not obj.highlighted:
            return
        obj.highlighted = False
        self.renderer.set_highlight(obj.visual, False)
        self.renderer.request_redraw()

    def clear_all_highlights(self) -> None:
        for obj in self.catalog.all():
            self.clear_highlight(obj)

    # __ Diagnostics and teardown ____________________________________________

    def _log_error(self, obj: TrackedObject, error_code: Optional[int],
                   message: str, instant: datetime) -> None:
        history = self.error_history.setdefault(obj.catalog_number, [])
        history.append({
            "error_code": error_code,
            "timestamp": instant.isoformat(),
            "error_message": message,
        })

        # Keep only the most recent errors
        limit = self.config.failure_history_limit
        if len(history) > limit:
            del history[:-limit]

    def failure_history(self, catalog_number: int) -> List[Dict[str, Any]]:
        return list(self.error_history.get(catalog_number, []))

    def dispose(self) -> None:
        """Release every renderer resource the engine allocated."""
        for obj in self.catalog.all():
            self.remove_trail(obj)
            self.renderer.remove_from_scene(obj.visual)
            obj.visual = None
        self.catalog.clear()
        self.renderer.request_redraw()
        logger.info("Tracking engine disposed")

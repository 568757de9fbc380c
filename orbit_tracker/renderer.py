"""
Renderer Interface and Headless Scene

The engine draws nothing itself. It drives a SceneRenderer that owns the scene
graph: object markers ("visuals"), orbit trail polylines and the globe.

Visual and trail handles are children of the globe, so rotating the globe
about the up-axis rotates them as well (this is how the earth-fixed frame is
shown turning under an inertial camera).

HeadlessRenderer keeps the scene in memory. It is used by the demo script and
by the tests, and is a reference for what a 3D front-end has to provide:
- an orthographic camera on the +z axis looking at the origin,
- picking by nearest marker in normalized device coordinates, with markers
  hidden behind the globe excluded.
"""

import abc
import logging
import math
from typing import Any, List, Optional, Sequence, Tuple

from orbit_tracker.config import (
    EARTH_RADIUS_KM,
    PICK_RADIUS_NDC,
    VIEW_HALF_EXTENT_KM,
    TrackerConfig,
)

logger = logging.getLogger(__name__)

Point = Tuple[float, float, float]


class SceneRenderer(abc.ABC):
    """Collaborator interface consumed by the tracking engine."""

    @abc.abstractmethod
    def create_visual(self, color_hint: Optional[int], size_hint: float) -> Any:
        pass

    @abc.abstractmethod
    def set_position(self, handle: Any, x: float, y: float, z: float) -> None:
        pass

    @abc.abstractmethod
    def add_to_scene(self, handle: Any) -> None:
        pass

    @abc.abstractmethod
    def remove_from_scene(self, handle: Any) -> None:
        pass

    @abc.abstractmethod
    def create_trail(self, points: Sequence[Point]) -> Any:
        pass

    @abc.abstractmethod
    def dispose_trail(self, handle: Any) -> None:
        pass

    @abc.abstractmethod
    def set_ground_orientation(self, angle: float) -> None:
        """Rotate the globe (and its children) about the up-axis, radians."""

    @abc.abstractmethod
    def pick_nearest(self, ndc_x: float, ndc_y: float) -> Any:
        """Nearest visual under the pointer, or None."""

    @abc.abstractmethod
    def set_highlight(self, handle: Any, enabled: bool) -> None:
        pass

    @abc.abstractmethod
    def request_redraw(self) -> None:
        pass


class Visual:
    """Marker for one tracked object."""

    def __init__(self, color: Optional[int], size: float):
        self.color = color
        self.size = size
        self.position: Point = (0.0, 0.0, 0.0)
        self.in_scene = False
        self.highlighted = False


class Trail:
    """Orbit polyline."""

    def __init__(self, points: Sequence[Point]):
        self.points: List[Point] = list(points)
        self.disposed = False


class HeadlessRenderer(SceneRenderer):
    """In-memory scene with orthographic picking."""

    def __init__(self, view_half_extent: float = VIEW_HALF_EXTENT_KM,
                 pick_radius: float = PICK_RADIUS_NDC,
                 globe_radius: float = EARTH_RADIUS_KM):
        self.view_half_extent = view_half_extent
        self.pick_radius = pick_radius
        self.globe_radius = globe_radius
        self.visuals: List[Visual] = []
        self.trails: List[Trail] = []
        self.ground_angle = 0.0
        self.redraw_pending = False
        self.frames_rendered = 0

    @classmethod
    def from_config(cls, config: TrackerConfig) -> "HeadlessRenderer":
        """Renderer whose globe matches config.earth_radius_km."""
        return cls(globe_radius=config.earth_radius_km)

    # Scene contents

    def create_visual(self, color_hint: Optional[int], size_hint: float) -> Visual:
        return Visual(color_hint, size_hint)

    def set_position(self, handle: Visual, x: float, y: float, z: float) -> None:
        handle.position = (x, y, z)

    def add_to_scene(self, handle: Visual) -> None:
        if not handle.in_scene:
            handle.in_scene = True
            self.visuals.append(handle)

    def remove_from_scene(self, handle: Visual) -> None:
        if handle.in_scene:
            handle.in_scene = False
            self.visuals.remove(handle)

    def create_trail(self, points: Sequence[Point]) -> Trail:
        trail = Trail(points)
        self.trails.append(trail)
        return trail

    def dispose_trail(self, handle: Trail) -> None:
        if handle.disposed:
            logger.warning("Trail disposed twice")
            return
        handle.disposed = True
        self.trails.remove(handle)

    def set_ground_orientation(self, angle: float) -> None:
        self.ground_angle = angle

    def set_highlight(self, handle: Visual, enabled: bool) -> None:
        handle.highlighted = enabled

    # Drawing

    def request_redraw(self) -> None:
        self.redraw_pending = True

    def render(self) -> int:
        """Draw if something changed. Returns the number of frames drawn so far."""
        if self.redraw_pending:
            self.redraw_pending = False
            self.frames_rendered += 1
        return self.frames_rendered

    # Picking

    def world_position(self, handle: Visual) -> Point:
        """Position after the globe rotation is applied."""
        x, y, z = handle.position
        c, s = math.cos(self.ground_angle), math.sin(self.ground_angle)
        return (c * x + s * z, y, -s * x + c * z)

    def project(self, handle: Visual) -> Tuple[float, float, float]:
        """(ndc_x, ndc_y, depth towards the camera)."""
        x, y, z = self.world_position(handle)
        return x / self.view_half_extent, y / self.view_half_extent, z

    def _occluded(self, point: Point) -> bool:
        x, y, z = point
        return z < 0 and math.hypot(x, y) < self.globe_radius

    def pick_nearest(self, ndc_x: float, ndc_y: float) -> Optional[Visual]:
        best = None
        best_key = None
        for visual in self.visuals:
            world = self.world_position(visual)
            if self._occluded(world):
                continue
            px, py, depth = self.project(visual)
            distance = math.hypot(px - ndc_x, py - ndc_y)
            if distance > self.pick_radius:
                continue
            # Closest to the camera first, then closest to the pointer
            key = (-depth, distance)
            if best_key is None or key < best_key:
                best, best_key = visual, key
        return best

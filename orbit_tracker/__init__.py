"""
Satellite Tracking Engine Package

This package keeps a catalog of orbiting objects in sync with a renderer:
positions are refreshed against a movable simulation clock, orbit trails are
sampled on demand, pointer input is resolved into objects, and the selection
can be shared through URL query parameters.

Modules:
    tle_parser: TLE catalog text parsing
    propagator: Propagator interface and SGP4 adapter
    coordinates: inertial / earth-fixed render coordinates
    orbit_trail: adaptive orbit trail sampling
    catalog: tracked object catalog
    engine: tracking engine (positions, trails, picking)
    selection: selection state machine
    deep_link: share-link query codec
    session: host input port wiring everything together

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

from orbit_tracker.catalog import Catalog
from orbit_tracker.clock import ClockMode, RealtimeTicker, SimulationClock
from orbit_tracker.config import DisplayOptions, TrackerConfig
from orbit_tracker.engine import TrackingEngine
from orbit_tracker.errors import (
    CollaboratorUnavailable,
    InvalidElements,
    MalformedCatalog,
    PropagationFailure,
    TrackerError,
)
from orbit_tracker.models import ReferenceFrame, TleRecord, TrackedObject
from orbit_tracker.propagator import Propagator, SGP4Propagator
from orbit_tracker.renderer import HeadlessRenderer, SceneRenderer
from orbit_tracker.selection import SelectionController
from orbit_tracker.session import TrackerSession
from orbit_tracker.tle_parser import TLEParser, parse_catalog

__version__ = "1.0.0"

"""
Catalog data model: raw TLE records, parser seeds and tracked objects.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple

from orbit_tracker.config import DisplayOptions
from orbit_tracker.tle_format import parse_catalog_number, parse_mean_motion


class ReferenceFrame(Enum):
    """Frame the render coordinates are expressed in."""

    INERTIAL = "inertial"
    EARTH_FIXED = "earth_fixed"


@dataclass(frozen=True)
class TleRecord:
    """Raw three-line catalog entry as read from the source text."""

    name: str
    line1: str
    line2: str

    @property
    def catalog_number(self) -> Optional[int]:
        return parse_catalog_number(self.line1)

    @property
    def mean_motion(self) -> Optional[float]:
        """Mean motion in revolutions per day, None if unreadable."""
        return parse_mean_motion(self.line2)

    def as_text(self) -> str:
        return f"{self.name}\n{self.line1}\n{self.line2}\n"


@dataclass
class StationSeed:
    """Parser output: a record plus its own copy of the display options."""

    record: TleRecord
    options: DisplayOptions = field(default_factory=DisplayOptions)

    @property
    def name(self) -> str:
        return self.record.name


class TrackedObject:
    """
    One catalog entry as tracked by the engine.

    The visual handle exists exactly while the object is in the catalog; the
    trail handle exists exactly while the object is selected or pinned.
    Orbital elements are derived once by the propagator and cached here.
    """

    __slots__ = (
        "catalog_number",
        "name",
        "record",
        "options",
        "elements",
        "elements_error",
        "visual",
        "trail",
        "position",
        "highlighted",
    )

    def __init__(self, catalog_number: int, name: str, record: TleRecord,
                 options: Optional[DisplayOptions] = None):
        self.catalog_number = catalog_number
        self.name = name
        self.record = record
        self.options = options if options is not None else DisplayOptions()
        self.elements: Any = None
        self.elements_error: Optional[str] = None
        self.visual: Any = None
        self.trail: Any = None
        self.position: Optional[Tuple[float, float, float]] = None
        self.highlighted = False

    @classmethod
    def from_seed(cls, seed: StationSeed) -> "TrackedObject":
        record = seed.record
        return cls(record.catalog_number, record.name, record, seed.options)

    @property
    def orbit_period_minutes(self) -> Optional[float]:
        return self.options.orbit_minutes

    @property
    def pinned(self) -> bool:
        return self.options.pinned_trail

    @property
    def wants_trail(self) -> bool:
        """Trail shown continuously, independent of selection."""
        return self.options.pinned_trail or self.options.orbit_minutes is not None

    @property
    def mean_motion(self) -> Optional[float]:
        return self.record.mean_motion

    def __repr__(self) -> str:
        return f"TrackedObject({self.catalog_number}, {self.name!r})"

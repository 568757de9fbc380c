"""
Deterministic collaborators for the test-suite.

CircularOrbitPropagator puts every object on an equatorial circular orbit of
radius 7000 km whose angular rate comes from the TLE mean motion, so expected
positions can be computed by hand.
"""

import math
from datetime import datetime, timezone
from types import SimpleNamespace

import numpy as np

from orbit_tracker.errors import InvalidElements, PropagationFailure
from orbit_tracker.propagator import Propagator
from orbit_tracker.tle_format import parse_catalog_number, parse_mean_motion

REFERENCE = datetime(2019, 9, 2, 0, 0, tzinfo=timezone.utc)
ORBIT_RADIUS_KM = 7000.0
SIDEREAL_DAY_S = 86164.0905


def make_tle(catalog_number: int, mean_motion: float = 15.5) -> tuple:
    """Fixed-width element lines (checksum digit not computed)."""
    line1 = f"1 {catalog_number:05d}U 98067A   19245.18443877  .00012516  00000-0  22337-3 0  9990"
    line2 = f"2 {catalog_number:05d}  51.6455 339.3385 0007918 357.2134  84.5192 {mean_motion:11.8f}187200"
    return line1, line2


def make_catalog(*entries) -> str:
    """Catalog text from (name, catalog_number[, mean_motion]) tuples."""
    blocks = []
    for entry in entries:
        name, number = entry[0], entry[1]
        line1, line2 = make_tle(number, *entry[2:])
        blocks.append(f"{name}\n{line1}\n{line2}\n")
    return "".join(blocks)


class CircularOrbitPropagator(Propagator):
    """
    Args:
        invalid: catalog numbers whose elements cannot be derived
        failing: catalog numbers that never propagate
        fail_when: optional predicate(instant) making a propagation fail
    """

    def __init__(self, invalid=(), failing=(), fail_when=None):
        self.invalid = set(invalid)
        self.failing = set(failing)
        self.fail_when = fail_when
        self.derive_calls = 0
        self.propagate_calls = 0
        self.instants = []

    def derive_elements(self, line1, line2):
        self.derive_calls += 1
        number = parse_catalog_number(line1)
        if number in self.invalid:
            raise InvalidElements(f"bad elements for {number}")
        return SimpleNamespace(
            catalog_number=number,
            mean_motion=parse_mean_motion(line2) or 15.0,
            phase=(number % 360) * math.pi / 180.0,
        )

    def angle_at(self, elements, instant):
        minutes = (instant - REFERENCE).total_seconds() / 60.0
        return elements.phase + 2 * math.pi * elements.mean_motion * minutes / 1440.0

    def propagate(self, elements, instant):
        self.propagate_calls += 1
        self.instants.append(instant)
        if elements.catalog_number in self.failing:
            raise PropagationFailure("Satellite has decayed", error_code=6)
        if self.fail_when is not None and self.fail_when(instant):
            raise PropagationFailure("Mean motion < 0.0", error_code=2)
        a = self.angle_at(elements, instant)
        return np.array([ORBIT_RADIUS_KM * math.cos(a), ORBIT_RADIUS_KM * math.sin(a), 0.0])

    def sidereal_angle(self, instant):
        seconds = (instant - REFERENCE).total_seconds()
        return (2 * math.pi * seconds / SIDEREAL_DAY_S) % (2 * math.pi)

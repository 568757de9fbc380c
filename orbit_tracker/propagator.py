"""
Propagator Interface and SGP4 Adapter

The tracking engine never does orbital mechanics itself. It talks to a
Propagator that can:
- derive an opaque orbital-elements handle from the two element lines,
- propagate that handle to an instant (inertial TEME position, km),
- report the sidereal angle relating the inertial and earth-fixed frames.

SGP4Propagator implements the interface with the sgp4 library. Its failures
are reported, never corrected: a decayed object raises PropagationFailure.

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

import abc
import math
from datetime import datetime, timezone
from typing import Any

import numpy as np
from sgp4.api import Satrec, jday

from orbit_tracker.errors import InvalidElements, PropagationFailure

# SGP4 error code meanings
SGP4_ERROR_CODES = {
    0: "No error",
    1: "Mean eccentricity < 0.0 or > 1.0",
    2: "Mean motion < 0.0",
    3: "Perturbed eccentricity < 0.0 or > 1.0",
    4: "Semi-latus rectum < 0.0",
    5: "Satellite has decayed",
    6: "Satellite has decayed (low altitude)",
}


class Propagator(abc.ABC):
    """Turns element lines into inertial positions."""

    @abc.abstractmethod
    def derive_elements(self, line1: str, line2: str) -> Any:
        """Build the cached elements handle. Raises InvalidElements."""

    @abc.abstractmethod
    def propagate(self, elements: Any, instant: datetime) -> np.ndarray:
        """Inertial position (km) at instant. Raises PropagationFailure."""

    @abc.abstractmethod
    def sidereal_angle(self, instant: datetime) -> float:
        """Greenwich sidereal angle in radians at instant."""


def julian_date(instant: datetime):
    """
    Convert datetime to Julian date and fraction.

    Naive datetimes are taken to be UTC.
    """
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc)
    seconds = instant.second + instant.microsecond / 1e6
    return jday(instant.year, instant.month, instant.day,
                instant.hour, instant.minute, seconds)


def gmst_radians(instant: datetime) -> float:
    """
    Greenwich Mean Sidereal Time (IAU 1982 model).

    This is the angle SGP4's TEME frame is rotated by to reach the
    pseudo earth-fixed frame.
    """
    jd, fr = julian_date(instant)
    T = (jd - 2451545.0 + fr) / 36525.0

    gmst_sec = (
        67310.54841 +
        (876600.0 * 3600.0 + 8640184.812866) * T +
        0.093104 * T * T -
        6.2e-6 * T * T * T
    )

    # Convert to radians and normalize
    return (gmst_sec % 86400.0) * (2.0 * math.pi / 86400.0)


class SGP4Propagator(Propagator):
    """Propagator backed by sgp4.api.Satrec."""

    def derive_elements(self, line1: str, line2: str) -> Satrec:
        for n, line in ((1, line1), (2, line2)):
            if not line or line[0] != str(n):
                raise InvalidElements(f"Line {n} should start with {n}")
            if len(line) < 69:
                raise InvalidElements(f"Line {n} has incorrect length ({len(line)}, must be 69)")

        try:
            satellite = Satrec.twoline2rv(line1, line2)
        except (ValueError, IndexError) as e:
            raise InvalidElements(f"Failed to read element lines: {e}") from e

        error = getattr(satellite, "error", 0)
        if error:
            raise InvalidElements(
                f"SGP4 initialisation error {error}: "
                f"{SGP4_ERROR_CODES.get(error, 'Unknown error')}"
            )
        return satellite

    def propagate(self, elements: Satrec, instant: datetime) -> np.ndarray:
        jd, fr = julian_date(instant)
        error, position, _velocity = elements.sgp4(jd, fr)

        if error != 0:
            raise PropagationFailure(
                f"SGP4 error {error}: {SGP4_ERROR_CODES.get(error, f'Unknown error code {error}')}",
                error_code=error,
            )

        r = np.array(position, dtype=float)
        if not np.all(np.isfinite(r)):
            raise PropagationFailure("SGP4 returned a non-finite position")
        return r

    def sidereal_angle(self, instant: datetime) -> float:
        return gmst_radians(instant)

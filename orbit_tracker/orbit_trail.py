"""
Orbit Trail Sampler

Approximates one revolution of an object's path with a polyline sampled at a
fixed step (one minute by default) starting at the simulation instant.

The trail length adapts to the orbit: without an explicit override it spans
1440 / mean_motion minutes (one period), so a LEO object gets a ~90 minute
trail and a GPS satellite a ~720 minute one.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from orbit_tracker.config import MINUTES_PER_DAY, TRAIL_STEP_MINUTES
from orbit_tracker.coordinates import RenderPoint, transform
from orbit_tracker.errors import InvalidElements, PropagationFailure
from orbit_tracker.models import ReferenceFrame, TrackedObject
from orbit_tracker.propagator import Propagator

logger = logging.getLogger(__name__)


def trail_span_minutes(obj: TrackedObject,
                       step_minutes: float = TRAIL_STEP_MINUTES) -> Optional[float]:
    """
    Minutes covered by the trail of obj.

    Returns:
        Explicit orbit_minutes if configured, else one period rounded to the
        step; None when neither is known
    """
    if obj.orbit_period_minutes is not None:
        return float(obj.orbit_period_minutes)

    mean_motion = obj.mean_motion
    if mean_motion is None:
        return None

    period = MINUTES_PER_DAY / mean_motion
    return round(period / step_minutes) * step_minutes


def sample_orbit(obj: TrackedObject, start: datetime, propagator: Propagator,
                 frame: ReferenceFrame,
                 step_minutes: float = TRAIL_STEP_MINUTES) -> List[RenderPoint]:
    """
    Sample the trail polyline of obj.

    Steps whose propagation fails are skipped. Fewer than two surviving
    points means there is nothing to draw and an empty list is returned.
    """
    span = trail_span_minutes(obj, step_minutes)
    if not span or span <= 0:
        return []

    if obj.elements_error is not None:
        return []
    elements = obj.elements
    if elements is None:
        try:
            elements = propagator.derive_elements(obj.record.line1, obj.record.line2)
        except InvalidElements as e:
            obj.elements_error = str(e)
            logger.debug(f"No trail for {obj.catalog_number}: {e}")
            return []
        obj.elements = elements

    steps = int(round(span / step_minutes))
    points: List[RenderPoint] = []
    skipped = 0
    for k in range(steps + 1):
        instant = start + timedelta(minutes=k * step_minutes)
        try:
            position = propagator.propagate(elements, instant)
        except PropagationFailure:
            skipped += 1
            continue
        points.append(transform(position, propagator.sidereal_angle(instant), frame))

    if skipped:
        logger.debug(f"Trail for {obj.catalog_number}: skipped {skipped} of {steps + 1} samples")
    if len(points) < 2:
        return []
    return points

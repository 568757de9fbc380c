"""
Coordinate Transform

Converts propagator output (inertial TEME vector, km, z towards the north
pole) into renderer coordinates. The renderer is y-up, so the axes are
remapped as (x, z, -y).

For the earth-fixed frame the vector is first rotated about the polar axis by
the negative sidereal angle, the usual TEME to pseudo earth-fixed rotation.
The same angle must be used to orient the rendered globe in the same pass,
otherwise objects drift off the ground they are meant to track.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from orbit_tracker.models import ReferenceFrame

RenderPoint = Tuple[float, float, float]


def earth_fixed_from_inertial(vector: Sequence[float], sidereal_angle: float) -> np.ndarray:
    """Rotate an inertial vector into the earth-fixed frame."""
    cos_gst = math.cos(sidereal_angle)
    sin_gst = math.sin(sidereal_angle)
    x, y, z = vector
    return np.array([
        cos_gst * x + sin_gst * y,
        -sin_gst * x + cos_gst * y,
        z,
    ])


def to_render_axes(vector: Sequence[float]) -> RenderPoint:
    """Remap a z-up vector to the renderer's y-up convention."""
    x, y, z = vector
    return (float(x), float(z), float(-y))


def transform(vector: Sequence[float], sidereal_angle: float,
              frame: ReferenceFrame) -> RenderPoint:
    """
    Convert an inertial position to render coordinates.

    Args:
        vector: Inertial position [x, y, z] (km)
        sidereal_angle: Sidereal angle (rad) used for this pass
        frame: Target reference frame

    Returns:
        (x, y, z) in render coordinates
    """
    if frame is ReferenceFrame.EARTH_FIXED:
        vector = earth_fixed_from_inertial(vector, sidereal_angle)
    return to_render_axes(vector)


def ground_orientation(sidereal_angle: float, frame: ReferenceFrame) -> float:
    """
    Rotation about the render up-axis to apply to the globe.

    Object visuals are children of the globe, so in the earth-fixed frame the
    globe turns by the sidereal angle and carries the objects with it; in the
    inertial frame positions are already inertial and the globe stays put.
    """
    if frame is ReferenceFrame.EARTH_FIXED:
        return sidereal_angle
    return 0.0

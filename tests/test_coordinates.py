"""
Unit Tests for the Coordinate Transform

Run with:
    python -m pytest tests/test_coordinates.py -v
"""

import math
import unittest

import numpy as np

from orbit_tracker.coordinates import (
    earth_fixed_from_inertial,
    ground_orientation,
    to_render_axes,
    transform,
)
from orbit_tracker.models import ReferenceFrame


class TestTransform(unittest.TestCase):

    def test_inertial_is_axis_remap_only(self):
        """z-up inertial vector becomes y-up render coordinates."""
        point = transform([1000.0, 2000.0, 3000.0], 1.234, ReferenceFrame.INERTIAL)
        self.assertEqual(point, (1000.0, 3000.0, -2000.0))

    def test_earth_fixed_at_zero_angle_matches_inertial(self):
        vector = [6778.0, -120.0, 45.0]
        self.assertEqual(
            transform(vector, 0.0, ReferenceFrame.EARTH_FIXED),
            transform(vector, 0.0, ReferenceFrame.INERTIAL),
        )

    def test_earth_fixed_rotates_by_negative_angle(self):
        """An object on the x axis appears at -y after a quarter turn of the earth."""
        rotated = earth_fixed_from_inertial([7000.0, 0.0, 0.0], math.pi / 2)
        np.testing.assert_allclose(rotated, [0.0, -7000.0, 0.0], atol=1e-9)

        x, y, z = transform([7000.0, 0.0, 0.0], math.pi / 2, ReferenceFrame.EARTH_FIXED)
        self.assertAlmostEqual(x, 0.0, places=9)
        self.assertAlmostEqual(y, 0.0, places=9)
        self.assertAlmostEqual(z, 7000.0, places=9)

    def test_rotation_preserves_radius(self):
        vector = np.array([-2634.4, -2361.1, 5891.1])
        for angle in (0.3, 2.0, 5.9):
            rotated = earth_fixed_from_inertial(vector, angle)
            self.assertAlmostEqual(np.linalg.norm(rotated), np.linalg.norm(vector), places=6)
            self.assertEqual(rotated[2], vector[2])

    def test_to_render_axes(self):
        self.assertEqual(to_render_axes((1, 2, 3)), (1.0, 3.0, -2.0))

    def test_ground_orientation(self):
        self.assertEqual(ground_orientation(1.5, ReferenceFrame.EARTH_FIXED), 1.5)
        self.assertEqual(ground_orientation(1.5, ReferenceFrame.INERTIAL), 0.0)

    def test_globe_rotation_restores_inertial_position(self):
        """Rotating earth-fixed render coordinates with the globe gives the inertial ones."""
        vector = [5000.0, 3000.0, 1000.0]
        angle = 0.7
        fx, fy, fz = transform(vector, angle, ReferenceFrame.EARTH_FIXED)
        c, s = math.cos(angle), math.sin(angle)
        world = (c * fx + s * fz, fy, -s * fx + c * fz)

        np.testing.assert_allclose(world, transform(vector, angle, ReferenceFrame.INERTIAL),
                                   atol=1e-9)


if __name__ == "__main__":
    unittest.main()

"""
Unit Tests for the SGP4 Propagator Adapter

Run with:
    python -m pytest tests/test_propagator.py -v
"""

import math
import unittest
from datetime import datetime, timedelta, timezone
from unittest import mock

import numpy as np

from orbit_tracker.config import SAMPLE_ISS_TLE
from orbit_tracker.errors import InvalidElements, PropagationFailure
from orbit_tracker.propagator import SGP4Propagator, gmst_radians, julian_date

ISS_EPOCH = datetime(2019, 9, 2, 4, 25, 35, tzinfo=timezone.utc)


class TestSGP4Propagator(unittest.TestCase):

    def setUp(self):
        self.propagator = SGP4Propagator()
        self.elements = self.propagator.derive_elements(SAMPLE_ISS_TLE["line1"],
                                                        SAMPLE_ISS_TLE["line2"])

    def test_iss_altitude_at_epoch(self):
        r = self.propagator.propagate(self.elements, ISS_EPOCH)
        radius = np.linalg.norm(r)
        self.assertGreater(radius, 6600)
        self.assertLess(radius, 6900)

    def test_period_matches_mean_motion(self):
        period = timedelta(minutes=1440 / SAMPLE_ISS_TLE["mean_motion"])
        r0 = self.propagator.propagate(self.elements, ISS_EPOCH)
        r1 = self.propagator.propagate(self.elements, ISS_EPOCH + period)
        # Back near the start after one revolution (nodal drift is small)
        self.assertLess(np.linalg.norm(r1 - r0), 300)

    def test_short_line_rejected(self):
        with self.assertRaises(InvalidElements):
            self.propagator.derive_elements("1 25544U", SAMPLE_ISS_TLE["line2"])

    def test_swapped_lines_rejected(self):
        with self.assertRaises(InvalidElements):
            self.propagator.derive_elements(SAMPLE_ISS_TLE["line2"], SAMPLE_ISS_TLE["line1"])

    def test_error_code_raised(self):
        elements = mock.Mock()
        elements.sgp4.return_value = (6, (0.0, 0.0, 0.0), (0.0, 0.0, 0.0))

        with self.assertRaises(PropagationFailure) as ctx:
            self.propagator.propagate(elements, ISS_EPOCH)
        self.assertEqual(ctx.exception.error_code, 6)
        self.assertIn("decayed", str(ctx.exception))

    def test_non_finite_position_raised(self):
        elements = mock.Mock()
        elements.sgp4.return_value = (0, (float("nan"), 0.0, 0.0), (0.0, 0.0, 0.0))
        with self.assertRaises(PropagationFailure):
            self.propagator.propagate(elements, ISS_EPOCH)


class TestSiderealTime(unittest.TestCase):

    def test_gmst_at_j2000(self):
        j2000 = datetime(2000, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.assertAlmostEqual(gmst_radians(j2000), 4.894961, places=5)

    def test_gmst_in_range(self):
        angle = SGP4Propagator().sidereal_angle(ISS_EPOCH)
        self.assertGreaterEqual(angle, 0.0)
        self.assertLess(angle, 2 * math.pi)

    def test_naive_datetime_is_utc(self):
        aware = datetime(2019, 9, 2, 4, 30, tzinfo=timezone.utc)
        self.assertEqual(julian_date(aware.replace(tzinfo=None)), julian_date(aware))

    def test_offset_datetime_converted(self):
        plus_two = timezone(timedelta(hours=2))
        local = datetime(2019, 9, 2, 6, 30, tzinfo=plus_two)
        self.assertEqual(julian_date(local),
                         julian_date(datetime(2019, 9, 2, 4, 30, tzinfo=timezone.utc)))


if __name__ == "__main__":
    unittest.main()

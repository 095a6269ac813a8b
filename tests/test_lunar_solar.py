"""
Unit Tests for Lunar and Solar Positions

Run with:
    python -m pytest tests/test_lunar_solar.py -v
"""

import math
import unittest

import numpy as np

from orbit_engine.constants import JD_J2000_NOON, RAD2DEG
from orbit_engine.lunar_solar import LunarSolarEphemeris, raw_lunar_solar_position


class TestRawPositions(unittest.TestCase):

    def test_distances_are_physical(self):
        """Test that the distances are near the real mean distances."""
        for jd in (JD_J2000_NOON, 2451723.28, 2458827.19, 2460000.5):
            with self.subTest(jd=jd):
                bodies = raw_lunar_solar_position(jd)
                self.assertGreater(bodies.lunar_distance, 3.5e8)
                self.assertLess(bodies.lunar_distance, 4.2e8)
                self.assertGreater(bodies.solar_distance, 1.47e11)
                self.assertLess(bodies.solar_distance, 1.53e11)

    def test_vectors_match_distances(self):
        """Test that vector lengths equal the reported distances."""
        bodies = raw_lunar_solar_position(2458827.19)
        self.assertAlmostEqual(
            np.linalg.norm(bodies.lunar) / bodies.lunar_distance, 1.0, places=12
        )
        self.assertAlmostEqual(
            np.linalg.norm(bodies.solar) / bodies.solar_distance, 1.0, places=12
        )

    def test_sun_is_in_the_ecliptic(self):
        """Test that the Sun lies in the ecliptic plane."""
        self.assertEqual(raw_lunar_solar_position(2458827.19).solar[2], 0.0)

    def test_solar_longitude_at_j2000(self):
        """Test the solar longitude at J2000."""
        solar = raw_lunar_solar_position(JD_J2000_NOON).solar
        longitude = math.atan2(solar[1], solar[0]) * RAD2DEG % 360.0
        self.assertAlmostEqual(longitude, 280.384, delta=0.01)

    def test_vectors_are_read_only(self):
        """Test that returned vectors cannot be modified."""
        bodies = raw_lunar_solar_position(JD_J2000_NOON)
        with self.assertRaises(ValueError):
            bodies.lunar[0] = 0.0
        with self.assertRaises(ValueError):
            bodies.solar[0] = 0.0


class TestLunarSolarEphemeris(unittest.TestCase):
    """Single-entry memo."""

    def setUp(self):
        self.ephemeris = LunarSolarEphemeris()

    def test_repeat_query_hits(self):
        """Test that a repeated Julian Date hits the memo."""
        first = self.ephemeris.position(2458827.19)
        second = self.ephemeris.position(2458827.19)
        self.assertIs(first, second)
        self.assertEqual(self.ephemeris.hits, 1)
        self.assertEqual(self.ephemeris.misses, 1)

    def test_new_jd_replaces_entry(self):
        """Test that a new Julian Date replaces the memo entry."""
        self.ephemeris.position(2458827.19)
        self.ephemeris.position(2458828.19)
        self.ephemeris.position(2458827.19)
        self.assertEqual(self.ephemeris.misses, 3)
        self.assertEqual(self.ephemeris.hits, 0)

    def test_matches_uncached(self):
        """Test that memoized positions equal fresh ones."""
        jd = 2451723.28495062
        self.ephemeris.position(jd + 1.0)
        cached = self.ephemeris.position(jd)
        raw = raw_lunar_solar_position(jd)
        self.assertTrue(np.array_equal(cached.lunar, raw.lunar))
        self.assertTrue(np.array_equal(cached.solar, raw.solar))
        self.assertEqual(cached.lunar_distance, raw.lunar_distance)

    def test_clear(self):
        """Test that clearing empties the memo."""
        self.ephemeris.position(2458827.19)
        self.ephemeris.clear()
        self.ephemeris.position(2458827.19)
        self.assertEqual(self.ephemeris.misses, 2)


if __name__ == "__main__":
    unittest.main()

"""
Unit Tests for the Propagation Facade

Run with:
    python -m pytest tests/test_propagation.py -v
"""

import unittest
from datetime import timedelta

import numpy as np

from config import HIGH_ORBIT_SAMPLE, ISS_2019, VANGUARD_2
from orbit_engine.elements import ElementSet, MeanElements
from orbit_engine.high_ephemeris import HighOrbitState
from orbit_engine.lunar_solar import LunarSolarEphemeris
from orbit_engine.propagation import SatellitePropagator, init_propagation, propagate
from orbit_engine.results import PropagationStatus
from orbit_engine.sgp4_propagator import AnalyticState
from orbit_engine.tle_parser import TLEParseError, TLEParser


class TestDispatch(unittest.TestCase):
    """Element sets go to the propagator their ephemeris type asks for."""

    def setUp(self):
        parser = TLEParser()
        self.ordinary = parser.parse(VANGUARD_2["line1"], VANGUARD_2["line2"])
        self.high = parser.parse(HIGH_ORBIT_SAMPLE["line1"], HIGH_ORBIT_SAMPLE["line2"])

    def test_init_propagation(self):
        """Test that each ephemeris type gets its own state."""
        self.assertIsInstance(init_propagation(self.ordinary), AnalyticState)
        self.assertIsInstance(init_propagation(self.high), HighOrbitState)

    def test_ordinary_path(self):
        """Test SGP4 propagation through the dispatcher."""
        state = init_propagation(self.ordinary)
        result = propagate(self.ordinary, state, 360.0)
        self.assertEqual(result.method, "sgp4")
        np.testing.assert_allclose(
            result.position, VANGUARD_2["reference_states"][1]["position"], atol=1e-5
        )

    def test_high_orbit_path(self):
        """Test RK4 propagation through the dispatcher."""
        state = init_propagation(self.high)
        result = propagate(self.high, state, 0.0)
        self.assertTrue(result.ok)
        self.assertEqual(result.method, "rk4")
        np.testing.assert_allclose(result.position, [35000.0, -20000.0, 5000.0], atol=1e-6)
        np.testing.assert_allclose(result.velocity_kms, [1.5, 2.6, 0.3], atol=1e-9)

    def test_mismatched_state(self):
        """Test that a state built for another element set is refused."""
        with self.assertRaises(TypeError):
            propagate(self.high, init_propagation(self.ordinary), 0.0)
        with self.assertRaises(TypeError):
            propagate(self.ordinary, init_propagation(self.high), 0.0)

    def test_state_is_reusable(self):
        """Test that one state serves many propagation calls."""
        state = init_propagation(self.ordinary)
        first = propagate(self.ordinary, state, 100.0)
        propagate(self.ordinary, state, -300.0)
        again = propagate(self.ordinary, state, 100.0)
        np.testing.assert_array_equal(first.position, again.position)


class TestSatellitePropagator(unittest.TestCase):

    def test_from_tle(self):
        """Test building a propagator from TLE lines."""
        propagator = SatellitePropagator.from_tle(ISS_2019["line1"], ISS_2019["line2"], "ISS")
        self.assertEqual(propagator.method, "sgp4")
        self.assertEqual(propagator.elements.name, "ISS")
        self.assertIsNone(propagator.last_result)

    def test_from_tle_rejects_bad_lines(self):
        """Test that undecodable lines raise."""
        with self.assertRaises(TLEParseError):
            SatellitePropagator.from_tle(ISS_2019["line2"], ISS_2019["line1"])

    def test_propagate_jd(self):
        """Test propagation to a Julian Date."""
        propagator = SatellitePropagator.from_tle(ISS_2019["line1"], ISS_2019["line2"])
        result = propagator.propagate_jd(ISS_2019["reference_jd"])
        self.assertTrue(result.ok)
        self.assertIs(propagator.last_result, result)
        np.testing.assert_allclose(result.position, ISS_2019["position"], atol=1e-2)
        np.testing.assert_allclose(result.velocity_kms, ISS_2019["velocity"], atol=1e-5)

    def test_propagate_datetime(self):
        """Test propagation to an aware datetime."""
        propagator = SatellitePropagator.from_tle(ISS_2019["line1"], ISS_2019["line2"])
        at_epoch = propagator.propagate_datetime(propagator.elements.epoch_datetime)
        self.assertAlmostEqual(at_epoch.tsince, 0.0, places=3)

        later = propagator.propagate_datetime(
            propagator.elements.epoch_datetime + timedelta(minutes=90)
        )
        self.assertAlmostEqual(later.tsince, 90.0, places=3)

    def test_naive_datetime_is_utc(self):
        """Test that naive datetimes are taken as UTC."""
        propagator = SatellitePropagator.from_tle(ISS_2019["line1"], ISS_2019["line2"])
        aware = propagator.elements.epoch_datetime + timedelta(hours=3)
        naive = aware.replace(tzinfo=None)
        self.assertEqual(
            propagator.propagate_datetime(aware).tsince,
            propagator.propagate_datetime(naive).tsince,
        )

    def test_high_orbit_timeline(self):
        """Test a timeline of high-orbit propagations."""
        propagator = SatellitePropagator.from_tle(
            HIGH_ORBIT_SAMPLE["line1"], HIGH_ORBIT_SAMPLE["line2"]
        )
        self.assertEqual(propagator.method, "rk4")
        later = propagator.propagate(720.0)
        earlier = propagator.propagate(30.0)
        self.assertTrue(later.ok)
        self.assertGreater(propagator.ephemeris.misses, 0)

        fresh = SatellitePropagator.from_tle(
            HIGH_ORBIT_SAMPLE["line1"], HIGH_ORBIT_SAMPLE["line2"]
        ).propagate(30.0)
        # the order of queries never changes the answer
        np.testing.assert_array_equal(earlier.position, fresh.position)
        np.testing.assert_array_equal(earlier.velocity, fresh.velocity)

    def test_shared_ephemeris(self):
        """Test that one propagator reuses its lunar/solar memo."""
        ephemeris = LunarSolarEphemeris()
        propagator = SatellitePropagator.from_tle(
            HIGH_ORBIT_SAMPLE["line1"], HIGH_ORBIT_SAMPLE["line2"]
        )
        propagator = SatellitePropagator(propagator.elements, ephemeris)
        propagator.propagate(60.0)
        self.assertIs(propagator.ephemeris, ephemeris)
        self.assertGreater(ephemeris.misses, 0)

    def test_failure_is_logged_and_returned(self):
        """Test that failures are logged and kept as the last result."""
        elements = ElementSet(
            catalog_number=99999,
            epoch=2458827.0,
            international_designator="98067A",
            payload=MeanElements(
                inclination=0.9,
                raan=0.0,
                eccentricity=1.5,
                arg_perigee=0.0,
                mean_anomaly=0.0,
                mean_motion=0.06,
            ),
        )
        with self.assertLogs("orbit_engine", level="ERROR") as logs:
            propagator = SatellitePropagator(elements)
            result = propagator.propagate(10.0)
        self.assertEqual(result.status, PropagationStatus.ECCENTRICITY_OUT_OF_RANGE)
        self.assertIsNone(result.position)
        self.assertIs(propagator.last_result, result)
        self.assertTrue(any("99999" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()

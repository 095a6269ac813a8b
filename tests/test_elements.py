"""
Unit Tests for Element Records

Run with:
    python -m pytest tests/test_elements.py -v
"""

import unittest
from datetime import datetime, timezone

from orbit_engine.constants import MAX_CATALOG_NUMBER, TWOPI
from orbit_engine.elements import ElementSet, MeanElements, StateVector

MEAN = MeanElements(
    inclination=0.9,
    raan=1.0,
    eccentricity=0.001,
    arg_perigee=2.0,
    mean_anomaly=3.0,
    mean_motion=15.5 * TWOPI / 1440.0,
)
STATE = StateVector((4.2e7, 0.0, 0.0), (0.0, 3070.0, 0.0))


class TestMeanElements(unittest.TestCase):

    def test_derived_values(self):
        """Test period and revolutions per day."""
        self.assertAlmostEqual(MEAN.mean_motion_rev_per_day, 15.5, places=12)
        self.assertAlmostEqual(MEAN.period_minutes, 1440.0 / 15.5, places=10)

    def test_frozen(self):
        """Test that mean elements are immutable."""
        with self.assertRaises(AttributeError):
            MEAN.eccentricity = 0.5


class TestStateVector(unittest.TestCase):

    def test_components_become_float_tuples(self):
        """Test that components are stored as tuples of floats."""
        state = StateVector([1, 2, 3], [4, 5, 6])
        self.assertEqual(state.position, (1.0, 2.0, 3.0))
        self.assertIsInstance(state.velocity, tuple)

    def test_needs_three_components(self):
        """Test that a state needs three components per vector."""
        with self.assertRaises(ValueError):
            StateVector((1.0, 2.0), (3.0, 4.0, 5.0))


class TestElementSet(unittest.TestCase):

    def test_payload_must_match_type(self):
        """Test that the payload must match the ephemeris type."""
        with self.assertRaises(ValueError):
            ElementSet(catalog_number=5, epoch=2451545.0, payload=MEAN, ephemeris_type="H")
        with self.assertRaises(ValueError):
            ElementSet(catalog_number=5, epoch=2451545.0, payload=STATE)

    def test_catalog_range(self):
        """Test that catalog numbers outside every scheme are refused."""
        with self.assertRaises(ValueError):
            ElementSet(catalog_number=MAX_CATALOG_NUMBER + 1, epoch=2451545.0, payload=MEAN)
        with self.assertRaises(ValueError):
            ElementSet(catalog_number=-1, epoch=2451545.0, payload=MEAN)

    def test_variant_accessors(self):
        """Test the mean element and state vector accessors."""
        ordinary = ElementSet(catalog_number=5, epoch=2451545.0, payload=MEAN)
        high = ElementSet(catalog_number=5, epoch=2451545.0, payload=STATE, ephemeris_type="H")
        self.assertIs(ordinary.mean_elements, MEAN)
        self.assertIs(high.state_vector, STATE)
        self.assertFalse(ordinary.is_high_orbit)
        self.assertTrue(high.is_high_orbit)
        with self.assertRaises(TypeError):
            ordinary.state_vector
        with self.assertRaises(TypeError):
            high.mean_elements

    def test_designator_is_synthesized_when_blank(self):
        """Test that a blank designator is synthesized from the catalog number."""
        elements = ElementSet(catalog_number=5, epoch=2451545.0, payload=MEAN)
        self.assertEqual(elements.international_designator, "00000AAF")
        blank = ElementSet(
            catalog_number=5, epoch=2451545.0, payload=MEAN, international_designator="        "
        )
        self.assertEqual(blank.international_designator, "00000AAF")

    def test_designator_is_padded(self):
        """Test that a short designator is padded to eight characters."""
        elements = ElementSet(
            catalog_number=25544, epoch=2451545.0, payload=MEAN, international_designator="98067A"
        )
        self.assertEqual(elements.international_designator, "98067A  ")

    def test_name_does_not_affect_equality(self):
        """Test that the name is ignored when comparing element sets."""
        first = ElementSet(catalog_number=5, epoch=2451545.0, payload=MEAN, name="A")
        second = ElementSet(catalog_number=5, epoch=2451545.0, payload=MEAN, name="B")
        self.assertEqual(first, second)

    def test_epoch_datetime(self):
        """Test the epoch as a UTC datetime."""
        elements = ElementSet(catalog_number=5, epoch=2451545.0, payload=MEAN)
        self.assertEqual(elements.epoch_datetime, datetime(2000, 1, 1, 12, tzinfo=timezone.utc))


if __name__ == "__main__":
    unittest.main()

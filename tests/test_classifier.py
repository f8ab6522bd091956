"""
Unit Tests for Object Classification

Run with:
    python -m pytest tests/test_classifier.py -v
"""

import unittest

from orbit_catalog.classifier import attribute_country, classify_category, is_reentry
from orbit_catalog.models import ObjectCategory


class TestCategory(unittest.TestCase):
    """Test name-based category precedence."""

    def test_constellation_marker_wins(self):
        self.assertEqual(classify_category("STARLINK-ISS-TEST"), ObjectCategory.STARLINK)
        self.assertEqual(classify_category("starlink-1234"), ObjectCategory.STARLINK)

    def test_stations(self):
        self.assertEqual(classify_category("ISS (ZARYA)"), ObjectCategory.STATION)
        self.assertEqual(classify_category("CSS (TIANHE)"), ObjectCategory.STATION)
        self.assertEqual(classify_category("Tiangong"), ObjectCategory.STATION)

    def test_station_beats_debris(self):
        self.assertEqual(classify_category("ISS DEB"), ObjectCategory.STATION)

    def test_debris(self):
        self.assertEqual(classify_category("COSMOS 2251 DEB"), ObjectCategory.DEBRIS)
        self.assertEqual(classify_category("FENGYUN 1C DEBRIS"), ObjectCategory.DEBRIS)

    def test_debris_beats_rocket_body(self):
        self.assertEqual(classify_category("SL-16 R/B DEB"), ObjectCategory.DEBRIS)

    def test_rocket_bodies(self):
        self.assertEqual(classify_category("CZ-4B R/B"), ObjectCategory.ROCKET_BODY)
        self.assertEqual(classify_category("ATLAS ROCKET"), ObjectCategory.ROCKET_BODY)

    def test_default_active(self):
        self.assertEqual(classify_category("NOAA 19"), ObjectCategory.ACTIVE)
        self.assertEqual(classify_category(""), ObjectCategory.ACTIVE)


class TestCountry(unittest.TestCase):
    """Test substring country attribution."""

    def test_codes(self):
        self.assertEqual(attribute_country("US-123"), "United States")
        self.assertEqual(attribute_country("2020-PRC"), "China")
        self.assertEqual(attribute_country("X-ESA"), "European Space Agency")
        self.assertEqual(attribute_country("X-CHLE"), "Chile")
        self.assertEqual(attribute_country("X-TURK"), "Turkey")

    def test_table_order_shadows_longer_codes(self):
        self.assertEqual(attribute_country("X-INDO"), "India")
        self.assertEqual(attribute_country("X-ITSO"), "Italy")
        self.assertEqual(attribute_country("X-AUS"), "United States")

    def test_plain_designator_has_no_code(self):
        self.assertEqual(attribute_country("1998-067A"), "Unknown")

    def test_fewer_than_two_parts(self):
        self.assertEqual(attribute_country("US"), "Unknown")
        self.assertEqual(attribute_country(""), "Unknown")


class TestReentry(unittest.TestCase):
    """Test the strict reentry threshold."""

    def test_boundary(self):
        self.assertTrue(is_reentry(179.999))
        self.assertFalse(is_reentry(180.0))
        self.assertFalse(is_reentry(400.0))
        self.assertTrue(is_reentry(95.0))


if __name__ == "__main__":
    unittest.main()

"""
Unit Tests for Sidereal Time and Geodetic Conversion

Run with:
    python -m pytest tests/test_frames.py -v
"""

import math
import unittest
from datetime import datetime, timezone

import numpy as np

from orbit_catalog.config import WGS84_A_KM, WGS84_F
from orbit_catalog.frames import normalize_longitude, to_geodetic
from orbit_catalog.propagator import (
    SGP4Propagator,
    datetime_to_jd_fr,
    ecef_to_geodetic,
    greenwich_sidereal_time,
)

from stubs import INSTANT, StubPropagator


class TestSiderealTime(unittest.TestCase):
    """Test Greenwich mean sidereal time."""

    def test_j2000_epoch(self):
        gmst = greenwich_sidereal_time(datetime(2000, 1, 1, 12, tzinfo=timezone.utc))
        self.assertAlmostEqual(math.degrees(gmst), 280.46061837, places=6)

    def test_vallado_example(self):
        """Vallado Example 3-5: 1992 Aug 20 12:14 UT1."""
        gmst = greenwich_sidereal_time(datetime(1992, 8, 20, 12, 14, tzinfo=timezone.utc))
        self.assertAlmostEqual(math.degrees(gmst), 152.578787810, places=4)

    def test_range(self):
        for hour in range(0, 24, 3):
            gmst = greenwich_sidereal_time(datetime(2024, 3, 1, hour, tzinfo=timezone.utc))
            self.assertGreaterEqual(gmst, 0.0)
            self.assertLess(gmst, 2.0 * math.pi)

    def test_julian_date_keeps_subseconds(self):
        jd, fr = datetime_to_jd_fr(datetime(2000, 1, 1, 12, 0, 0, 500000, tzinfo=timezone.utc))
        self.assertAlmostEqual((jd - 2451545.0 + fr) * 86400.0, 0.5, places=4)


class TestGeodeticConversion(unittest.TestCase):
    """Test ECEF to geodetic conversion."""

    def test_equator(self):
        lat, lon, alt = ecef_to_geodetic(np.array([WGS84_A_KM + 400.0, 0.0, 0.0]))
        self.assertAlmostEqual(lat, 0.0, places=9)
        self.assertAlmostEqual(lon, 0.0, places=9)
        self.assertAlmostEqual(alt, 400.0, places=6)

    def test_pole(self):
        b = WGS84_A_KM * (1.0 - WGS84_F)
        lat, lon, alt = ecef_to_geodetic(np.array([0.0, 0.0, b + 100.0]))
        self.assertAlmostEqual(lat, 90.0)
        self.assertAlmostEqual(alt, 100.0, places=6)

    def test_mid_latitude_round_trip(self):
        """Geodetic to ECEF by hand, then back."""
        lat_deg, lon_deg, h = 45.0, -120.0, 550.0
        e2 = 2.0 * WGS84_F - WGS84_F ** 2
        lat, lon = math.radians(lat_deg), math.radians(lon_deg)
        N = WGS84_A_KM / math.sqrt(1.0 - e2 * math.sin(lat) ** 2)
        r = np.array([
            (N + h) * math.cos(lat) * math.cos(lon),
            (N + h) * math.cos(lat) * math.sin(lon),
            (N * (1.0 - e2) + h) * math.sin(lat),
        ])

        result = ecef_to_geodetic(r)
        self.assertAlmostEqual(result[0], lat_deg, places=6)
        self.assertAlmostEqual(result[1], lon_deg, places=6)
        self.assertAlmostEqual(result[2], h, places=4)

    def test_latitude_altitude_sweep(self):
        """Every latitude from -89 to 89 survives the trip at LEO through lunar distances."""
        e2 = 2.0 * WGS84_F - WGS84_F ** 2
        for h in (150.0, 550.0, 2000.0, 35786.0, 400000.0):
            for lat_deg in range(-89, 90):
                lat = math.radians(lat_deg)
                N = WGS84_A_KM / math.sqrt(1.0 - e2 * math.sin(lat) ** 2)
                r = np.array([
                    (N + h) * math.cos(lat),
                    0.0,
                    (N * (1.0 - e2) + h) * math.sin(lat),
                ])
                with self.subTest(lat=lat_deg, alt=h):
                    result = ecef_to_geodetic(r)
                    self.assertAlmostEqual(result[0], lat_deg, places=9)
                    self.assertAlmostEqual(result[2], h, places=6)

    def test_earth_rotation_applied(self):
        """A point on the inertial y-axis sits under Greenwich when GMST is 90 degrees."""
        propagator = SGP4Propagator()
        lat, lon, alt = propagator.inertial_to_geodetic([0.0, WGS84_A_KM + 500.0, 0.0], math.pi / 2.0)
        self.assertAlmostEqual(lat, 0.0, places=9)
        self.assertAlmostEqual(lon, 0.0, places=9)
        self.assertAlmostEqual(alt, 500.0, places=6)


class TestToGeodetic(unittest.TestCase):
    """Test validation and normalization in the frame transform."""

    def setUp(self):
        self.stub = StubPropagator()
        self.velocity = np.array([3.0, 4.0, 0.0])

    def _position(self, lat, lon, alt):
        return np.array([WGS84_A_KM + alt, lon, lat])

    def test_normalize_longitude(self):
        self.assertEqual(normalize_longitude(190.0), -170.0)
        self.assertEqual(normalize_longitude(-190.0), 170.0)
        self.assertEqual(normalize_longitude(45.0), 45.0)
        self.assertEqual(normalize_longitude(180.0), 180.0)
        self.assertEqual(normalize_longitude(-180.0), -180.0)
        self.assertAlmostEqual(normalize_longitude(725.0), 5.0)

    def test_speed_is_inertial_norm(self):
        result = to_geodetic(self.stub, self._position(10.0, 20.0, 400.0), self.velocity, INSTANT)
        self.assertAlmostEqual(result.speed, 5.0)
        self.assertAlmostEqual(result.latitude, 10.0)
        self.assertAlmostEqual(result.longitude, 20.0)
        self.assertAlmostEqual(result.altitude, 400.0, places=6)

    def test_longitude_wrapped(self):
        result = to_geodetic(self.stub, self._position(0.0, 190.0, 400.0), self.velocity, INSTANT)
        self.assertAlmostEqual(result.longitude, -170.0)

    def test_nan_rejected(self):
        nan = float("nan")
        self.assertIsNone(to_geodetic(self.stub, self._position(nan, 0.0, 400.0), self.velocity, INSTANT))
        self.assertIsNone(to_geodetic(self.stub, self._position(0.0, 0.0, 400.0), np.array([nan, 0, 0]), INSTANT))

    def test_out_of_domain_rejected(self):
        self.assertIsNone(to_geodetic(self.stub, self._position(95.0, 0.0, 400.0), self.velocity, INSTANT))
        self.assertIsNone(to_geodetic(self.stub, self._position(0.0, 0.0, -20.0), self.velocity, INSTANT))
        self.assertIsNone(
            to_geodetic(self.stub, self._position(0.0, float("inf"), 400.0), self.velocity, INSTANT)
        )


if __name__ == "__main__":
    unittest.main()

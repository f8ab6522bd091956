"""
Propagator Interface

The pipeline talks to orbital propagation through a narrow four-operation
interface so the numerical integrator stays behind one seam and tests can
substitute a deterministic stub.

SGP4Propagator implements the interface on top of the proven sgp4 library
(Vallado's reference implementation) with the WGS-72 gravity model, the
TEME frame it outputs, and a WGS-84 ellipsoid for geodetic conversion.
"""

import math
from datetime import datetime, timezone
from typing import Any, Protocol, Sequence, Tuple

import numpy as np
from sgp4.api import Satrec, WGS72, jday

from orbit_catalog.config import SECONDS_PER_DAY, WGS84_A_KM, WGS84_F


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


class Propagator(Protocol):
    """Operations the pipeline needs from an orbital propagator."""

    def construct(self, line1: str, line2: str) -> Tuple[int, Any]:
        """Build propagator state from TLE lines; returns (error_code, state)."""
        ...

    def propagate(self, state: Any, instant: datetime) -> Tuple[int, Any, Any]:
        """Advance state to instant; returns (error_code, position_km, velocity_km_s)."""
        ...

    def sidereal_time(self, instant: datetime) -> float:
        """Greenwich sidereal angle at instant, radians."""
        ...

    def inertial_to_geodetic(self, position: Sequence[float], gmst: float) -> Tuple[float, float, float]:
        """Inertial position to (latitude_deg, longitude_deg, altitude_km)."""
        ...


def datetime_to_jd_fr(dt: datetime) -> Tuple[float, float]:
    """
    Convert datetime to Julian date and fraction.

    Args:
        dt: Datetime object (naive values are taken as UTC)

    Returns:
        Tuple of (julian_day, fraction)
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)

    seconds = dt.second + dt.microsecond / 1e6
    return jday(dt.year, dt.month, dt.day, dt.hour, dt.minute, seconds)


def greenwich_sidereal_time(dt: datetime) -> float:
    """
    Greenwich Mean Sidereal Time (IAU 1982) in radians, [0, 2*pi).

    Args:
        dt: Instant (UTC, used as UT1)
    """
    jd, fr = datetime_to_jd_fr(dt)
    T = (jd - 2451545.0 + fr) / 36525.0

    gmst_sec = (
        67310.54841 +
        (876600.0 * 3600.0 + 8640184.812866) * T +
        0.093104 * T * T -
        6.2e-6 * T * T * T
    )

    return (gmst_sec % SECONDS_PER_DAY) * (2.0 * math.pi / SECONDS_PER_DAY)


def teme_to_ecef(r_teme: np.ndarray, gmst: float) -> np.ndarray:
    """Rotate a TEME position about the z-axis by the sidereal angle."""
    cos_g = math.cos(gmst)
    sin_g = math.sin(gmst)
    rotation = np.array([
        [cos_g, sin_g, 0.0],
        [-sin_g, cos_g, 0.0],
        [0.0, 0.0, 1.0],
    ])
    return rotation @ r_teme


def ecef_to_geodetic(r_ecef: np.ndarray) -> Tuple[float, float, float]:
    """
    ECEF to geodetic conversion using Bowring's method.

    Args:
        r_ecef: Position vector in ECEF coordinates [x, y, z] (km)

    Returns:
        Tuple of (latitude_deg, longitude_deg, altitude_km)
    """
    a = WGS84_A_KM
    f = WGS84_F
    b = a * (1.0 - f)
    e2 = 2.0 * f - f * f
    ep2 = e2 / (1.0 - e2)

    x, y, z = (float(c) for c in r_ecef)

    lon = math.atan2(y, x)

    # Distance from z-axis
    p = math.sqrt(x * x + y * y)

    # Pole
    if p < 1e-10:
        lat = math.pi / 2.0 if z >= 0 else -math.pi / 2.0
        return math.degrees(lat), math.degrees(lon), abs(z) - b

    # theta is the reduced (parametric) latitude
    theta = math.atan2(z * a, p * b)

    # Usually converges in 2-3 iterations
    lat = theta
    for _ in range(5):
        sin_theta = math.sin(theta)
        cos_theta = math.cos(theta)

        lat = math.atan2(
            z + ep2 * b * sin_theta ** 3,
            p - e2 * a * cos_theta ** 3
        )

        new_theta = math.atan2(b * math.sin(lat), a * math.cos(lat))
        if abs(new_theta - theta) < 1e-14:
            break
        theta = new_theta

    cos_lat = math.cos(lat)
    sin_lat = math.sin(lat)
    N = a / math.sqrt(1.0 - e2 * sin_lat * sin_lat)

    if cos_lat > 1e-10:
        alt = p / cos_lat - N
    else:
        alt = z / sin_lat - N * (1.0 - e2)

    return math.degrees(lat), math.degrees(lon), alt


class SGP4Propagator:
    """Propagator backed by sgp4.api.Satrec."""

    def construct(self, line1: str, line2: str) -> Tuple[int, Satrec]:
        satellite = Satrec.twoline2rv(line1, line2, WGS72)
        return satellite.error, satellite

    def propagate(self, state: Satrec, instant: datetime):
        jd, fr = datetime_to_jd_fr(instant)
        return state.sgp4(jd, fr)

    def sidereal_time(self, instant: datetime) -> float:
        return greenwich_sidereal_time(instant)

    def inertial_to_geodetic(self, position: Sequence[float], gmst: float) -> Tuple[float, float, float]:
        r_ecef = teme_to_ecef(np.asarray(position, dtype=float), gmst)
        return ecef_to_geodetic(r_ecef)

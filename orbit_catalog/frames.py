"""
Frame transform from inertial state to geodetic sub-point.
"""

import math
from datetime import datetime
from typing import Optional

import numpy as np

from orbit_catalog.models import GeodeticPosition
from orbit_catalog.propagator import Propagator


def normalize_longitude(longitude: float) -> float:
    """Wrap a longitude in degrees into [-180, 180]; 190 becomes -170."""
    if -180.0 <= longitude <= 180.0:
        return longitude
    return (longitude + 180.0) % 360.0 - 180.0


def to_geodetic(
    propagator: Propagator,
    position: np.ndarray,
    velocity: np.ndarray,
    instant: datetime,
) -> Optional[GeodeticPosition]:
    """
    Geodetic sub-point and inertial speed at instant.

    The velocity is not rotated into the Earth-fixed frame; speed is the
    magnitude of the inertial velocity.

    Returns:
        GeodeticPosition, or None if any component is NaN/infinite, the
        latitude is outside [-90, 90] or the altitude is not positive
    """
    gmst = propagator.sidereal_time(instant)
    latitude, longitude, altitude = propagator.inertial_to_geodetic(position, gmst)
    speed = float(np.linalg.norm(velocity))

    if not all(math.isfinite(c) for c in (latitude, longitude, altitude, speed)):
        return None

    longitude = normalize_longitude(longitude)

    if not -90.0 <= latitude <= 90.0 or altitude <= 0.0:
        return None

    return GeodeticPosition(
        latitude=latitude,
        longitude=longitude,
        altitude=altitude,
        speed=speed,
    )

"""
Orbit Catalog Configuration and Constants

This module contains physical constants, classification tables, TLE
formatting defaults and runtime settings used throughout the package.

Constants:
    The WGS-84 ellipsoid used for geodetic conversion. Propagation itself uses
    the WGS-72 constants built into the sgp4 library.

Fallback Catalog Data:
    A single ISS record in CelesTrak GP JSON form for demonstrations and
    testing when live data is unavailable.

    IMPORTANT: Elements go stale quickly for low orbits.
    - Low Earth Orbit (LEO) satellites: Update weekly
    - Medium Earth Orbit (MEO): Update monthly
    - Geostationary (GEO): Update quarterly

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

import logging
import os
from typing import Any, Dict, List, Tuple

# WGS-84 ellipsoid for geodetic conversion
WGS84_A_KM: float = 6378.137
WGS84_F: float = 1.0 / 298.257223563

SECONDS_PER_DAY: float = 86400.0

# Objects below this altitude are flagged as reentering
REENTRY_ALTITUDE_KM: float = 180.0

# Known crewed station name fragments, matched as substrings
KNOWN_STATIONS: Tuple[str, ...] = (
    "ISS",
    "ZARYA",
    "TIANGONG",
    "CSS",
)

# Owner codes matched as substrings of the designator. Order is significant:
# the first code found wins, so short codes can shadow longer ones.
COUNTRY_CODES: List[Tuple[str, str]] = [
    ("US", "United States"),
    ("CIS", "Commonwealth of Independent States"),
    ("PRC", "China"),
    ("SES", "SES (Luxembourg)"),
    ("FR", "France"),
    ("JP", "Japan"),
    ("IN", "India"),
    ("UK", "United Kingdom"),
    ("DE", "Germany"),
    ("IT", "Italy"),
    ("CA", "Canada"),
    ("AU", "Australia"),
    ("BR", "Brazil"),
    ("ESA", "European Space Agency"),
    ("AB", "Arab Satellite Communications Organization"),
    ("ARGN", "Argentina"),
    ("CHLE", "Chile"),
    ("IM", "Isle of Man"),
    ("INDO", "Indonesia"),
    ("ISRA", "Israel"),
    ("ITSO", "ITSO"),
    ("KOR", "South Korea"),
    ("LUXE", "Luxembourg"),
    ("MALA", "Malaysia"),
    ("NETH", "Netherlands"),
    ("NICO", "New ICO"),
    ("TURK", "Turkey"),
    ("UAE", "United Arab Emirates"),
]

UNKNOWN_COUNTRY = "Unknown"

# TLE field defaults
DEFAULT_CLASSIFICATION = "U"
DEFAULT_EPHEMERIS_TYPE = 0
DEFAULT_ELEMENT_SET_NO = 999
DEFAULT_INTL_DESIGNATOR = "00000A  "
DEFAULT_PIECE = "A"

# Two-digit epoch years 57-99 read as 19xx, 00-56 as 20xx
TLE_FIRST_EPOCH_YEAR = 1957

# Alpha-5 catalog numbers: letter prefix replaces the leading two digits
ALPHA5_LETTERS = "ABCDEFGHJKLMNPQRSTUVWXYZ"
MAX_ALPHA5_ID = 339999

# Fallback ISS record (CelesTrak GP JSON) for demonstrations and testing
FALLBACK_ISS_RECORD: Dict[str, Any] = {
    "OBJECT_NAME": "ISS (ZARYA)",
    "OBJECT_ID": "1998-067A",
    "EPOCH": "2023-09-16T13:49:09.120000",
    "MEAN_MOTION": 15.49541986,
    "ECCENTRICITY": 0.0004263,
    "INCLINATION": 51.6416,
    "RA_OF_ASC_NODE": 220.9944,
    "ARG_OF_PERICENTER": 122.0101,
    "MEAN_ANOMALY": 312.2755,
    "EPHEMERIS_TYPE": 0,
    "CLASSIFICATION_TYPE": "U",
    "NORAD_CAT_ID": 25544,
    "ELEMENT_SET_NO": 999,
    "REV_AT_EPOCH": 41559,
    "BSTAR": 0.00021844,
    "MEAN_MOTION_DOT": 0.00012022,
    "MEAN_MOTION_DDOT": 0,
}


class PipelineConfig:
    """Runtime settings for the batch pipeline, overridable from the environment."""

    BATCH_SIZE = int(os.getenv("ORBIT_CATALOG_BATCH_SIZE", "200"))
    INITIAL_BATCH_SIZE = int(os.getenv("ORBIT_CATALOG_INITIAL_BATCH_SIZE", "100"))
    LOG_LEVEL = os.getenv("ORBIT_CATALOG_LOG_LEVEL", "INFO").upper()

    @classmethod
    def log_level(cls) -> int:
        return getattr(logging, cls.LOG_LEVEL, logging.INFO)

"""
Object classification from catalog name and designator.
"""

from orbit_catalog.config import COUNTRY_CODES, KNOWN_STATIONS, REENTRY_ALTITUDE_KM, UNKNOWN_COUNTRY
from orbit_catalog.models import ObjectCategory


def classify_category(name: str) -> ObjectCategory:
    """
    Category from name markers, checked in priority order.

    Starlink beats station, station beats debris, debris beats rocket body.
    """
    name = name.upper()

    if "STARLINK" in name:
        return ObjectCategory.STARLINK
    if any(station in name for station in KNOWN_STATIONS):
        return ObjectCategory.STATION
    if "DEB" in name or "DEBRIS" in name:
        return ObjectCategory.DEBRIS
    if "R/B" in name or "ROCKET" in name:
        return ObjectCategory.ROCKET_BODY

    return ObjectCategory.ACTIVE


def attribute_country(object_id: str) -> str:
    """First owner code found anywhere in the designator, in table order."""
    if len(object_id.split("-")) < 2:
        return UNKNOWN_COUNTRY

    for code, country in COUNTRY_CODES:
        if code in object_id:
            return country

    return UNKNOWN_COUNTRY


def is_reentry(altitude_km: float) -> bool:
    return altitude_km < REENTRY_ALTITUDE_KM

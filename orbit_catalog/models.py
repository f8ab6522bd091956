"""
Catalog Data Models

Pydantic models for the records flowing through the pipeline:

- CatalogRecord: one catalog entry as supplied by the transport layer.
  Field aliases follow the CelesTrak GP (OMM JSON) key names so raw
  payloads validate directly.
- GeodeticPosition: sub-point and speed of an object at one instant.
- ProcessedObject: a propagated, classified object ready for display.

All models are frozen; a new pass produces new objects.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, ValidationError, field_validator

from orbit_catalog.config import (
    DEFAULT_CLASSIFICATION,
    DEFAULT_ELEMENT_SET_NO,
    DEFAULT_EPHEMERIS_TYPE,
)
from orbit_catalog.logging_config import get_logger

logger = get_logger(__name__)


class ObjectCategory(str, Enum):
    """Display taxonomy for tracked objects."""

    ACTIVE = "active"
    STARLINK = "starlink"
    STATION = "station"
    DEBRIS = "debris"
    ROCKET_BODY = "rocket_body"


class CatalogRecord(BaseModel):
    """Catalog entry with mean orbital elements and optional TLE lines."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    norad_id: PositiveInt = Field(alias="NORAD_CAT_ID")
    name: str = Field("", alias="OBJECT_NAME")
    object_id: str = Field("", alias="OBJECT_ID")
    epoch: Optional[datetime] = Field(None, alias="EPOCH")

    mean_motion: Optional[float] = Field(None, alias="MEAN_MOTION")  # rev/day
    eccentricity: Optional[float] = Field(None, alias="ECCENTRICITY")
    inclination: Optional[float] = Field(None, alias="INCLINATION")  # deg
    ra_of_asc_node: Optional[float] = Field(None, alias="RA_OF_ASC_NODE")  # deg
    arg_of_pericenter: Optional[float] = Field(None, alias="ARG_OF_PERICENTER")  # deg
    mean_anomaly: Optional[float] = Field(None, alias="MEAN_ANOMALY")  # deg

    mean_motion_dot: float = Field(0.0, alias="MEAN_MOTION_DOT")
    mean_motion_ddot: float = Field(0.0, alias="MEAN_MOTION_DDOT")
    bstar: float = Field(0.0, alias="BSTAR")

    classification_type: str = Field(DEFAULT_CLASSIFICATION, alias="CLASSIFICATION_TYPE")
    ephemeris_type: int = Field(DEFAULT_EPHEMERIS_TYPE, alias="EPHEMERIS_TYPE")
    element_set_no: int = Field(DEFAULT_ELEMENT_SET_NO, alias="ELEMENT_SET_NO")
    rev_at_epoch: int = Field(0, alias="REV_AT_EPOCH")

    tle_line0: Optional[str] = Field(None, alias="TLE_LINE0")
    tle_line1: Optional[str] = Field(None, alias="TLE_LINE1")
    tle_line2: Optional[str] = Field(None, alias="TLE_LINE2")

    @field_validator("epoch")
    @classmethod
    def _epoch_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # CelesTrak epochs carry no offset and are UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def has_tle(self) -> bool:
        return bool(self.tle_line1 and self.tle_line2)

    @property
    def has_elements(self) -> bool:
        return self.epoch is not None and None not in (
            self.mean_motion,
            self.eccentricity,
            self.inclination,
            self.ra_of_asc_node,
            self.arg_of_pericenter,
            self.mean_anomaly,
        )


class GeodeticPosition(BaseModel):
    """Geodetic sub-point (degrees, km) and inertial speed (km/s)."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    altitude: float
    speed: float


class ProcessedObject(BaseModel):
    """A catalog object positioned and classified for one instant."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    object_id: str
    position: GeodeticPosition
    category: ObjectCategory
    country: str
    is_reentry: bool
    record: CatalogRecord


def load_catalog(payload: Union[str, bytes, Iterable[Dict[str, Any]]]) -> List[CatalogRecord]:
    """
    Validate a CelesTrak GP JSON payload into catalog records.

    Args:
        payload: JSON text, or an already-decoded list of dictionaries

    Returns:
        Records in payload order. Entries that are not objects or fail
        validation (missing or non-positive NORAD_CAT_ID, bad epoch) are
        skipped and counted in a warning.
    """
    if isinstance(payload, (str, bytes)):
        payload = json.loads(payload)
    if isinstance(payload, dict):
        payload = [payload]

    records = []
    skipped = 0
    for entry in payload:
        if not isinstance(entry, dict):
            skipped += 1
            continue
        try:
            records.append(CatalogRecord.model_validate(entry))
        except ValidationError as e:
            skipped += 1
            logger.debug(f"Skipping catalog entry {entry.get('NORAD_CAT_ID')!r}: {e.error_count()} errors")

    if skipped:
        logger.warning(f"Skipped {skipped} invalid catalog entries out of {skipped + len(records)}")

    return records


def merge_catalogs(*groups: Iterable[CatalogRecord]) -> List[CatalogRecord]:
    """
    Merge category groups into one catalog, de-duplicated by identifier.

    The last occurrence of an identifier wins; the position of its first
    occurrence is kept.
    """
    merged: Dict[int, CatalogRecord] = {}
    for group in groups:
        for record in group:
            merged[record.norad_id] = record
    return list(merged.values())

"""
Orbit Catalog Package

Positions and classifies tracked objects from orbital catalog records.

Modules:
    models: Catalog, position and processed-object models
    tle_format: TLE synthesis, checksums and parsing
    propagator: Propagator interface and SGP4 implementation
    resolver: Cached record-to-propagator-state resolution
    propagation: Failure-tolerant propagation adapter
    frames: Inertial to geodetic transform
    classifier: Category, country and reentry classification
    pipeline: Batched catalog processing

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

from orbit_catalog.models import (
    CatalogRecord,
    GeodeticPosition,
    ObjectCategory,
    ProcessedObject,
    load_catalog,
    merge_catalogs,
)
from orbit_catalog.pipeline import CatalogPipeline
from orbit_catalog.propagator import Propagator, SGP4Propagator
from orbit_catalog.resolver import RecordResolver

__version__ = "1.0.0"

__all__ = [
    "CatalogPipeline",
    "CatalogRecord",
    "GeodeticPosition",
    "ObjectCategory",
    "ProcessedObject",
    "Propagator",
    "RecordResolver",
    "SGP4Propagator",
    "load_catalog",
    "merge_catalogs",
]

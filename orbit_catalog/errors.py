"""
Error taxonomy for catalog processing.

Every failure below is handled the same way at the pipeline boundary: the
affected record is dropped from the output.
"""


class OrbitCatalogError(Exception):
    """Base class for catalog processing failures."""


class StructuralError(OrbitCatalogError):
    """Record content cannot be laid out in the fixed-column TLE format."""


class UnresolvableRecord(OrbitCatalogError):
    """The propagator rejected the record's element set."""

    def __init__(self, norad_id):
        super().__init__(f"Satellite {norad_id} could not be resolved")
        self.norad_id = norad_id


class UnpropagatableInstant(OrbitCatalogError):
    """Propagation failed for a specific instant (e.g. decayed orbit)."""

    def __init__(self, norad_id, instant):
        super().__init__(f"Satellite {norad_id} could not be propagated to {instant.isoformat()}")
        self.norad_id = norad_id
        self.instant = instant


class InvalidGeodeticResult(OrbitCatalogError):
    """Frame transform produced NaN or out-of-domain coordinates."""

    def __init__(self, norad_id):
        super().__init__(f"Satellite {norad_id} produced an invalid geodetic position")
        self.norad_id = norad_id

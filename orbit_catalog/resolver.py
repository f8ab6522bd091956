"""
Record Resolver

Turns catalog records into propagator state, once per catalog number.

Resolution uses the record's own TLE lines when present and otherwise
synthesizes them from the mean elements. Whatever the outcome, it is
cached for the lifetime of the resolver: elements for a catalog number do
not change within one catalog snapshot, and records the propagator rejects
stay rejected.
"""

import threading
from typing import Any, Dict, Optional

from orbit_catalog.errors import StructuralError
from orbit_catalog.logging_config import get_logger
from orbit_catalog.models import CatalogRecord
from orbit_catalog.propagator import SGP4_ERROR_CODES, Propagator
from orbit_catalog.tle_format import encode_tle, verify_checksum

logger = get_logger(__name__)


class _Unresolvable:
    """Cache marker for records the propagator cannot use."""

    def __repr__(self):
        return "UNRESOLVABLE"


UNRESOLVABLE = _Unresolvable()


class RecordResolver:
    """
    Memoizing map from catalog record to propagator state.

    Construction runs at most once per catalog number. Writers for the same
    number are serialized; reads of a cached entry take no lock.
    """

    def __init__(self, propagator: Propagator):
        self.propagator = propagator
        self._cache: Dict[int, Any] = {}
        self._locks: Dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def __len__(self):
        return len(self._cache)

    def __contains__(self, norad_id):
        return norad_id in self._cache

    def resolve(self, record: CatalogRecord) -> Optional[Any]:
        """
        Get propagator state for a record.

        Args:
            record: Catalog record

        Returns:
            Cached propagator state, or None if the record is unresolvable
        """
        cached = self._cache.get(record.norad_id)
        if cached is None:
            with self._lock_for(record.norad_id):
                cached = self._cache.get(record.norad_id)
                if cached is None:
                    cached = self._construct(record)
                    self._cache[record.norad_id] = cached

        return None if cached is UNRESOLVABLE else cached

    def _lock_for(self, norad_id: int) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(norad_id, threading.Lock())

    def _construct(self, record: CatalogRecord) -> Any:
        norad_id = record.norad_id
        try:
            if record.has_tle:
                line1, line2 = record.tle_line1, record.tle_line2
                if not (verify_checksum(line1) and verify_checksum(line2)):
                    logger.warning(f"Checksum mismatch in TLE for satellite {norad_id}")
            else:
                line1, line2 = encode_tle(record)

            error, state = self.propagator.construct(line1, line2)
        except StructuralError as e:
            logger.debug(f"Cannot encode satellite {norad_id}: {e}")
            return UNRESOLVABLE
        except Exception as e:
            logger.debug(f"Propagator rejected satellite {norad_id}: {e}")
            return UNRESOLVABLE

        if error != 0 or state is None:
            logger.debug(
                f"Propagator error {error} for satellite {norad_id}: "
                f"{SGP4_ERROR_CODES.get(error, f'Unknown error code {error}')}"
            )
            return UNRESOLVABLE

        return state

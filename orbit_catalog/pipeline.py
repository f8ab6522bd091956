"""
Catalog Pipeline

Positions and classifies every object of a catalog at one instant:

    record -> resolver (cached state) -> propagation -> frame transform -> classifier

Large catalogs are processed in fixed-size windows. Between windows control
returns to the host (a frame scheduler, an event loop, or the consumer of a
generator) so thousands of records never block in a single pass. Without
one of those hooks process_batched still reports per window but runs the
whole catalog synchronously.

Records that fail at any stage are dropped; the output is never longer than
the input and contains no partial objects.
"""

import asyncio
from collections import Counter
from datetime import datetime
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from orbit_catalog.classifier import attribute_country, classify_category, is_reentry
from orbit_catalog.config import PipelineConfig
from orbit_catalog.errors import (
    InvalidGeodeticResult,
    OrbitCatalogError,
    UnpropagatableInstant,
    UnresolvableRecord,
)
from orbit_catalog.frames import to_geodetic
from orbit_catalog.logging_config import get_logger
from orbit_catalog.models import CatalogRecord, GeodeticPosition, ProcessedObject
from orbit_catalog.propagation import propagate
from orbit_catalog.propagator import Propagator, SGP4Propagator
from orbit_catalog.resolver import RecordResolver

logger = get_logger(__name__)

ProgressCallback = Callable[[List[ProcessedObject], bool], None]
Scheduler = Callable[[Callable[[], None]], None]


class CatalogPipeline:
    """
    Batch processor owning one resolver cache.

    Features:
    - Propagator state built once per catalog number and reused across passes
    - Synchronous, generator, callback-scheduled and asyncio batch modes
    - Failed records dropped and counted by failure type
    """

    def __init__(self, propagator: Optional[Propagator] = None, resolver: Optional[RecordResolver] = None):
        """
        Initialize the pipeline.

        Args:
            propagator: Propagator to use (default: SGP4Propagator)
            resolver: Existing resolver to share; its propagator wins
        """
        if resolver is None:
            resolver = RecordResolver(propagator or SGP4Propagator())
        self.resolver = resolver
        self.propagator = resolver.propagator
        self.drop_counts = Counter()

    def process_record(self, record: CatalogRecord, instant: datetime) -> Optional[ProcessedObject]:
        """Position and classify one record, or None if any stage fails."""
        try:
            return self._process(record, instant)
        except OrbitCatalogError as e:
            self.drop_counts[type(e).__name__] += 1
            logger.debug(f"Dropping satellite {record.norad_id}: {e}")
        except Exception as e:
            self.drop_counts[type(e).__name__] += 1
            logger.warning(f"Unexpected failure for satellite {record.norad_id}: {e}")
        return None

    def _process(self, record: CatalogRecord, instant: datetime) -> ProcessedObject:
        state = self.resolver.resolve(record)
        if state is None:
            raise UnresolvableRecord(record.norad_id)

        vectors = propagate(self.propagator, state, instant)
        if vectors is None:
            raise UnpropagatableInstant(record.norad_id, instant)

        position = to_geodetic(self.propagator, vectors[0], vectors[1], instant)
        if position is None:
            raise InvalidGeodeticResult(record.norad_id)

        return ProcessedObject(
            id=record.norad_id,
            name=record.name,
            object_id=record.object_id,
            position=position,
            category=classify_category(record.name),
            country=attribute_country(record.object_id),
            is_reentry=is_reentry(position.altitude),
            record=record,
        )

    def process_all(self, records: Iterable[CatalogRecord], instant: datetime) -> List[ProcessedObject]:
        """Process records synchronously, preserving input order."""
        processed = []
        for record in records:
            obj = self.process_record(record, instant)
            if obj is not None:
                processed.append(obj)
        return processed

    def process_initial(
        self, records: Sequence[CatalogRecord], instant: datetime, count: Optional[int] = None
    ) -> List[ProcessedObject]:
        """Process only the first count records so a host can paint early."""
        if count is None:
            count = PipelineConfig.INITIAL_BATCH_SIZE
        return self.process_all(list(records)[:count], instant)

    def iter_batches(
        self, records: Iterable[CatalogRecord], instant: datetime, batch_size: Optional[int] = None
    ) -> Iterator[Tuple[List[ProcessedObject], bool]]:
        """
        Process records in windows, yielding after each one.

        Args:
            records: Catalog records
            instant: Propagation time
            batch_size: Records per window (default: PipelineConfig.BATCH_SIZE)

        Yields:
            (accumulated, is_complete) after every window. accumulated is a
            new list of all objects produced so far.

        Raises:
            ValueError: If batch_size is less than 1
        """
        if batch_size is None:
            batch_size = PipelineConfig.BATCH_SIZE
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")

        return self._windows(list(records), instant, batch_size)

    def _windows(self, records, instant, batch_size):
        accumulated: List[ProcessedObject] = []
        index = 0

        while True:
            window = records[index:index + batch_size]
            accumulated.extend(self.process_all(window, instant))
            index += batch_size

            is_complete = index >= len(records)
            if is_complete:
                logger.info(
                    f"Processed {len(accumulated)} of {len(records)} catalog objects "
                    f"at {instant.isoformat()}"
                )

            yield list(accumulated), is_complete

            if is_complete:
                return

    def process_batched(
        self,
        records: Iterable[CatalogRecord],
        instant: datetime,
        batch_size: Optional[int],
        on_progress: ProgressCallback,
        schedule: Optional[Scheduler] = None,
    ) -> None:
        """
        Process records in windows, reporting progress after each one.

        The first window runs immediately. Each later window is handed to
        schedule (e.g. a frame scheduler's "run on next tick"). A caller stops a
        run by not invoking the scheduled continuation.

        Without schedule every window runs back to back and the call returns
        only after the whole catalog is processed, so the host is blocked for
        the full run. Callers that must stay responsive pass schedule, await
        process_batched_async, or pull windows from iter_batches.

        Args:
            records: Catalog records
            instant: Propagation time
            batch_size: Records per window
            on_progress: Called as on_progress(objects, is_complete) once per window
            schedule: Optional hook that runs a continuation later; None runs synchronously
        """
        batches = self.iter_batches(records, instant, batch_size)

        if schedule is None:
            for objects, is_complete in batches:
                on_progress(objects, is_complete)
            return

        def run_next_window():
            objects, is_complete = next(batches)
            on_progress(objects, is_complete)
            if not is_complete:
                schedule(run_next_window)

        run_next_window()

    async def process_batched_async(
        self,
        records: Iterable[CatalogRecord],
        instant: datetime,
        batch_size: Optional[int],
        on_progress: ProgressCallback,
    ) -> List[ProcessedObject]:
        """
        asyncio flavour of process_batched, yielding to the loop between windows.

        Returns:
            The final accumulated list
        """
        objects: List[ProcessedObject] = []
        for objects, is_complete in self.iter_batches(records, instant, batch_size):
            on_progress(objects, is_complete)
            if not is_complete:
                await asyncio.sleep(0)
        return objects

    def refresh(
        self, previous: Iterable[ProcessedObject], records: Iterable[CatalogRecord], instant: datetime
    ) -> Tuple[List[ProcessedObject], Dict[int, GeodeticPosition]]:
        """
        Reprocess a catalog and pair objects with their prior positions.

        Returns:
            Tuple of (objects, previous_positions) where previous_positions maps
            catalog number to the earlier position, for objects in both passes
        """
        prior = {obj.id: obj.position for obj in previous}
        objects = self.process_all(records, instant)
        previous_positions = {obj.id: prior[obj.id] for obj in objects if obj.id in prior}
        return objects, previous_positions

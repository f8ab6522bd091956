"""
Orbit Catalog Demonstration

This script demonstrates the catalog pipeline:
- Loading CelesTrak GP JSON records
- TLE synthesis for records without TLE lines
- Batched propagation to geodetic sub-points
- Classification and reentry flagging

Usage:
    python demo.py [--catalog FILE ...] [--batch-size N] [--verbose]

Arguments:
    --catalog: CelesTrak GP JSON file(s); groups are merged by catalog number
    --batch-size: Records per processing window
    --verbose: Enable debug logging
"""

import argparse
import logging
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from orbit_catalog import CatalogPipeline, CatalogRecord, load_catalog, merge_catalogs
from orbit_catalog.config import FALLBACK_ISS_RECORD, PipelineConfig
from orbit_catalog.logging_config import configure_logging, get_logger
from orbit_catalog.tle_format import encode_tle

logger = get_logger(__name__)


def load_records(paths: List[str]) -> List[CatalogRecord]:
    """Load and merge catalog files, or fall back to the built-in ISS record."""
    if not paths:
        logger.info("No catalog given, using fallback ISS record")
        return load_catalog([FALLBACK_ISS_RECORD])

    groups = []
    for path in paths:
        records = load_catalog(Path(path).read_text())
        logger.info(f"Loaded {len(records)} records from {path}")
        groups.append(records)
    return merge_catalogs(*groups)


def main() -> None:
    """Main demonstration entry point."""
    parser = argparse.ArgumentParser(
        description="Orbit Catalog Pipeline Demonstration"
    )
    parser.add_argument("--catalog", nargs="*", default=[], help="CelesTrak GP JSON file(s)")
    parser.add_argument(
        "--batch-size", type=int, default=PipelineConfig.BATCH_SIZE, help="Records per window"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    configure_logging(level=logging.DEBUG if args.verbose else None)

    logger.info("Orbit Catalog Pipeline Demonstration")
    logger.info("=" * 60)

    records = load_records(args.catalog)
    first = records[0] if records else None
    if first is not None and not first.has_tle and first.has_elements:
        line1, line2 = encode_tle(first)
        logger.info(f"Synthesized TLE for {first.name}:")
        logger.info(line1)
        logger.info(line2)

    now = datetime.now(timezone.utc)
    pipeline = CatalogPipeline()

    objects = []

    def on_progress(processed, is_complete):
        logger.debug(f"{len(processed)} objects processed, complete={is_complete}")
        objects[:] = processed

    pipeline.process_batched(records, now, args.batch_size, on_progress)

    for category, count in sorted(Counter(obj.category.value for obj in objects).items()):
        logger.info(f"{category:>12}: {count}")

    reentering = [obj for obj in objects if obj.is_reentry]
    logger.info(f"Reentry watch: {len(reentering)} objects below threshold")
    for obj in reentering[:10]:
        logger.info(f"  {obj.name} ({obj.id}) at {obj.position.altitude:.1f} km")

    if pipeline.drop_counts:
        logger.info(f"Dropped records: {dict(pipeline.drop_counts)}")

    for obj in objects[:5]:
        p = obj.position
        logger.info(
            f"{obj.name:<24} lat {p.latitude:7.2f}  lon {p.longitude:8.2f}  "
            f"alt {p.altitude:9.1f} km  v {p.speed:.3f} km/s  [{obj.country}]"
        )

    logger.info("=" * 60)
    logger.info("Demonstration complete")


if __name__ == "__main__":
    main()

"""
Logging Configuration

Every orbit_catalog module logs under the ``orbit_catalog`` logger tree:
record drops from the pipeline and the resolver, checksum mismatches in
pre-encoded TLEs, and catalog entries skipped while loading. The package
itself installs no handlers beyond a NullHandler, so an embedding host
decides where those messages go. The demo CLI, or any other entry point,
calls configure_logging once at startup.

Usage:
    from orbit_catalog.logging_config import configure_logging, get_logger

    configure_logging(log_file="catalog.log")   # level from ORBIT_CATALOG_LOG_LEVEL
    logger = get_logger(__name__)               # orbit_catalog.<module>
    logger.warning("Dropped satellite 25544 at propagation")
"""

import logging
import sys
from typing import Optional

from orbit_catalog.config import PipelineConfig

PACKAGE_LOGGER = "orbit_catalog"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def configure_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """
    Install console (and optionally file) handlers for a catalog run.

    Replaces any handlers already on the root logger, so calling it again
    (e.g. after --verbose is parsed) reconfigures rather than duplicates.

    Parameters
    ----------
    level : int, optional
        Logging level; defaults to ORBIT_CATALOG_LOG_LEVEL via PipelineConfig
    log_file : str, optional
        Path to log file. If None, logs only to stdout.
    """
    if level is None:
        level = PipelineConfig.log_level()

    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Logger inside the orbit_catalog tree.

    Module names of the package pass through unchanged; anything else
    (a script's ``__main__``, say) is nested under ``orbit_catalog`` so one
    level setting covers the package and its entry points.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)

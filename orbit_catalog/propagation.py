"""
Propagation adapter.

Wraps a propagator call so every failure mode (raised exception, non-zero
error code, missing or sentinel vectors) comes back as None.
"""

from datetime import datetime
from typing import Any, Optional, Tuple

import numpy as np

from orbit_catalog.logging_config import get_logger
from orbit_catalog.propagator import SGP4_ERROR_CODES, Propagator

logger = get_logger(__name__)


def _as_vector(value: Any) -> Optional[np.ndarray]:
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    try:
        vector = np.asarray(value, dtype=float)
    except (TypeError, ValueError):
        return None
    if vector.shape != (3,):
        return None
    return vector


def propagate(
    propagator: Propagator, state: Any, instant: datetime
) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """
    Inertial position (km) and velocity (km/s) of state at instant.

    Returns:
        Tuple of (position, velocity), or None if propagation failed
    """
    try:
        error, position, velocity = propagator.propagate(state, instant)
    except Exception as e:
        logger.debug(f"Propagation raised at {instant.isoformat()}: {e}")
        return None

    if error:
        logger.debug(f"SGP4 error {error}: {SGP4_ERROR_CODES.get(error, 'Unknown error')}")
        return None

    r = _as_vector(position)
    v = _as_vector(velocity)
    if r is None or v is None:
        return None

    return r, v

"""Simulation horizon (hyperperiod) computation."""

import math
from typing import Iterable, Optional

from rtsim.errors import HorizonOverflowError, InvalidTaskError

# Bound used by the engine and CLI unless overridden.
DEFAULT_MAX_HORIZON = 10_000_000


def compute_horizon(periods: Iterable[int], max_horizon: Optional[int] = None) -> int:
    """Return the least common multiple of all periods.

    The lcm is built up one period at a time so an oversized hyperperiod is
    reported as soon as the running value crosses ``max_horizon``.

    Args:
        periods: Task periods (positive integers).
        max_horizon: Largest acceptable horizon, or None for no bound.

    Returns:
        The hyperperiod, or 1 if ``periods`` is empty.

    Raises:
        InvalidTaskError: If a period is not positive.
        HorizonOverflowError: If the hyperperiod exceeds ``max_horizon``.
    """
    horizon = 1
    for period in periods:
        if period <= 0:
            raise InvalidTaskError(f"Period must be positive, got {period}")
        horizon = math.lcm(horizon, period)
        if max_horizon is not None and horizon > max_horizon:
            raise HorizonOverflowError(
                f"Hyperperiod exceeds the maximum horizon of {max_horizon}"
            )
    return horizon

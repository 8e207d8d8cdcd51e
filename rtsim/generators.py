"""Random task set generators for tests and experiments."""

import random
from typing import List, Optional, Sequence

from rtsim.models import Task, TaskSet

# Every lcm of a subset of these divides 400, which keeps hyperperiods short.
DEFAULT_PERIODS = (2, 4, 5, 8, 10, 16, 20, 25, 40, 50, 80, 100)


def uunifast(n: int, u_total: float, seed: Optional[int] = None) -> List[float]:
    """Generate task utilizations using the UUniFast algorithm.

    UUniFast generates uniformly distributed task utilizations that sum to
    the target total utilization.

    Reference:
    Bini, E., & Buttazzo, G. C. (2005). Measuring the performance of schedulability tests.
    Real-Time Systems, 30(1-2), 129-154.

    Args:
        n: Number of tasks.
        u_total: Target total utilization.
        seed: Optional random seed for reproducibility.

    Returns:
        List of n utilization values that sum to approximately u_total.

    Raises:
        ValueError: If n <= 0 or u_total < 0.
    """
    if n <= 0:
        raise ValueError("Number of tasks must be positive")
    if u_total < 0:
        raise ValueError("Target utilization must be non-negative")

    rng = random.Random(seed)

    utilizations = []
    sum_u = u_total

    for i in range(1, n):
        next_sum_u = sum_u * (rng.random() ** (1.0 / (n - i)))
        utilizations.append(sum_u - next_sum_u)
        sum_u = next_sum_u

    # Last utilization is whatever remains
    utilizations.append(sum_u)

    return utilizations


def generate_taskset(
    n: int,
    target_utilization: float,
    periods: Sequence[int] = DEFAULT_PERIODS,
    seed: Optional[int] = None
) -> TaskSet:
    """Generate a random integer task set.

    Periods are drawn from ``periods``; each WCET is the UUniFast share of
    the period rounded to an integer and clamped to 1..period, so the
    achieved utilization only approximates the target.

    Args:
        n: Number of tasks to generate (ids 1..n).
        target_utilization: Target total utilization.
        periods: Candidate periods (positive integers).
        seed: Random seed for reproducibility.

    Returns:
        A TaskSet with n tasks.

    Raises:
        ValueError: If parameters are invalid.
    """
    if not periods or any(p <= 0 for p in periods):
        raise ValueError("Periods must be a non-empty sequence of positive integers")

    rng = random.Random(seed)
    utilizations = uunifast(n, target_utilization, seed=seed)

    tasks = []
    for i, u in enumerate(utilizations):
        period = rng.choice(list(periods))
        wcet = min(period, max(1, round(u * period)))
        tasks.append(Task(id=i + 1, period=period, wcet=wcet))

    return TaskSet(tasks=tasks)

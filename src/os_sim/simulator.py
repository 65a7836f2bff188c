"""Simulation entry points — one call per run.

Front ends do not build policies themselves.  They pick a strategy by
name and hand over a workload; these functions build a fresh policy,
run it to completion and return the immutable result.  Nothing is
cached and nothing is shared between calls, so any number of runs can
be made in any order.
"""

from collections.abc import Iterable, Sequence
from enum import StrEnum

from os_sim.disk import CSCANPolicy, DiskPolicy, DiskResult, DiskScheduler, Direction, LOOKPolicy
from os_sim.logging import Logger
from os_sim.memory import ClockPolicy, LRUPolicy, MemoryResult, ReplacementPolicy, simulate
from os_sim.validation import DiskWorkload, MemoryWorkload


class MemoryStrategy(StrEnum):
    """Page replacement algorithms on offer."""

    LRU = "lru"
    ARB = "arb"


class DiskStrategy(StrEnum):
    """Disk scheduling algorithms on offer."""

    LOOK = "look"
    CSCAN = "cscan"


def _memory_strategy(value: MemoryStrategy | str) -> MemoryStrategy:
    try:
        return MemoryStrategy(str(value).lower())
    except ValueError:
        msg = f"Unknown memory strategy: {value!r}"
        raise ValueError(msg) from None


def _disk_strategy(value: DiskStrategy | str) -> DiskStrategy:
    try:
        return DiskStrategy(str(value).lower().replace("-", ""))
    except ValueError:
        msg = f"Unknown disk strategy: {value!r}"
        raise ValueError(msg) from None


def make_replacement_policy(strategy: MemoryStrategy | str, frame_count: int) -> ReplacementPolicy:
    """Return a fresh replacement policy for *strategy*."""
    if _memory_strategy(strategy) is MemoryStrategy.LRU:
        return LRUPolicy()
    return ClockPolicy(frame_count)


def make_disk_policy(
    strategy: DiskStrategy | str,
    *,
    cylinders: int,
    direction_up: bool = True,
) -> DiskPolicy:
    """Return a fresh disk policy for *strategy*."""
    direction = Direction.from_flag(direction_up)
    if _disk_strategy(strategy) is DiskStrategy.LOOK:
        return LOOKPolicy(direction=direction)
    return CSCANPolicy(direction=direction, max_cylinder=cylinders - 1)


def run_memory_simulation(
    strategy: MemoryStrategy | str,
    frame_count: int,
    references: Iterable[int],
    *,
    annotate: bool = True,
    logger: Logger | None = None,
) -> MemoryResult:
    """Simulate page replacement.

    Args:
        strategy: ``lru`` or ``arb``.
        frame_count: Number of physical frames (at least 1).
        references: The page-reference trace.
        annotate: Record policy state per step for replay.
        logger: Optional event log.

    Returns:
        The step trace with fault and hit totals.

    Raises:
        ValueError: On an unknown strategy or a frame count below 1.

    """
    policy = make_replacement_policy(strategy, frame_count)
    return simulate(policy, frame_count, references, annotate=annotate, logger=logger)


def run_disk_simulation(  # noqa: PLR0913
    strategy: DiskStrategy | str,
    cylinders: int,
    start: int,
    requests: Sequence[int],
    initial_direction_up: bool = True,  # noqa: FBT001, FBT002
    *,
    logger: Logger | None = None,
) -> DiskResult:
    """Simulate disk-arm scheduling.

    Args:
        strategy: ``look`` or ``cscan``.
        cylinders: Number of cylinders on the disk.
        start: Initial head position.
        requests: Cylinders to service, in arrival order.
        initial_direction_up: True to sweep toward higher cylinders first.
        logger: Optional event log.

    Returns:
        The visited path and total seek distance.

    Raises:
        ValueError: On an unknown strategy.

    """
    policy = make_disk_policy(strategy, cylinders=cylinders, direction_up=initial_direction_up)
    scheduler = DiskScheduler(policy=policy, head=start, logger=logger)
    for cylinder in requests:
        scheduler.add_request(cylinder)
    return scheduler.run()


def simulate_memory_workload(
    strategy: MemoryStrategy | str,
    workload: MemoryWorkload,
    *,
    logger: Logger | None = None,
) -> MemoryResult:
    """Run a validated memory workload."""
    return run_memory_simulation(strategy, workload.frame_count, workload.references, logger=logger)


def simulate_disk_workload(
    strategy: DiskStrategy | str,
    workload: DiskWorkload,
    *,
    logger: Logger | None = None,
) -> DiskResult:
    """Run a validated disk workload."""
    return run_disk_simulation(
        strategy,
        workload.cylinders,
        workload.start,
        workload.requests,
        workload.direction_up,
        logger=logger,
    )

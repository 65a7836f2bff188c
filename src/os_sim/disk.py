"""Disk scheduling algorithms — minimising seek time for I/O requests.

The disk arm must move between cylinders to service a queue of
requests.  The dominant cost is **seek time**, modelled here as the
number of cylinders the arm travels.  Disk scheduling algorithms decide
the *order* in which requests are serviced.

Think of a disk arm like an elevator in a building:
    - **LOOK** — go up as far as the highest request, then turn round
      and come down as far as the lowest one.  Never rides to the roof
      unless someone asked for it.
    - **C-SCAN** — go up to the top floor, drop straight back to the
      ground floor without stopping, and go up again.

Both start from the head position and split the queue into requests
strictly above it, strictly below it, and at it.  Requests at the head
are already satisfied by the starting position.  Duplicates are each
served.  Within one sweep the arm never reverses.

Policies return ``DiskMove`` targets (the Strategy pattern, same as
page replacement); ``trace`` turns them into a ``DiskResult`` with the
visited path and total seek distance.  The C-SCAN return stroke is the
one move that costs nothing: no data is read on the way back.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from os_sim.logging import Logger, LogLevel


class Direction(StrEnum):
    """Which way the arm sweeps first."""

    UP = "up"
    DOWN = "down"

    @classmethod
    def from_flag(cls, up: bool) -> "Direction":  # noqa: FBT001
        """Return UP for True, DOWN for False."""
        return cls.UP if up else cls.DOWN


@dataclass(frozen=True)
class DiskMove:
    """A cylinder the arm is sent to.

    Attributes:
        cylinder: Target cylinder.
        boundary: True when the target is a disk edge rather than a request.
        wrap: True for the free C-SCAN return jump.

    """

    cylinder: int
    boundary: bool = False
    wrap: bool = False


@dataclass(frozen=True)
class DiskStep:
    """One point on the arm's path.

    Attributes:
        index: Ordinal of the point (0 is the starting head position).
        cylinder: The cylinder visited.
        distance: Seek cost charged for reaching it (0 for a wrap).
        boundary: True when the point is a disk edge, not a request.
        wrap: True when the point was reached by the C-SCAN return jump.

    """

    index: int
    cylinder: int
    distance: int = 0
    boundary: bool = False
    wrap: bool = False


@dataclass(frozen=True)
class DiskResult:
    """Path and total seek distance of one scheduling run."""

    path: tuple[DiskStep, ...]
    seek_distance: int

    @property
    def sequence(self) -> list[int]:
        """Return visited cylinders in order, starting with the head."""
        return [step.cylinder for step in self.path]

    @property
    def requests_served(self) -> int:
        """Return how many queued requests the arm travelled to."""
        return sum(1 for step in self.path[1:] if not step.boundary)

    @property
    def head(self) -> int:
        """Return where the arm ended up."""
        return self.path[-1].cylinder


def _partition(requests: Sequence[int], head: int) -> tuple[list[int], list[int]]:
    """Split *requests* into (strictly higher, strictly lower), both ascending."""
    ordered = sorted(requests)
    higher = [r for r in ordered if r > head]
    lower = [r for r in ordered if r < head]
    return higher, lower


def _moves(cylinders: list[int]) -> list[DiskMove]:
    return [DiskMove(cylinder=c) for c in cylinders]


class DiskPolicy(Protocol):
    """Protocol for disk scheduling policies (Strategy pattern)."""

    name: str

    def schedule(self, requests: Sequence[int], *, head: int) -> list[DiskMove]:
        """Return the moves the arm makes to service *requests*.

        Args:
            requests: Cylinder numbers to visit.
            head: Current position of the disk head.

        Returns:
            Ordered list of moves, not including the starting position.

        """
        ...  # pragma: no cover


class LOOKPolicy:
    """LOOK — sweep toward the furthest request, then reverse.

    Like SCAN, but the arm turns round at the last request in its
    direction instead of travelling on to the edge of the disk.  The
    direction changes at most once.

    Args:
        direction: Initial sweep direction ("up" or "down").

    """

    name = "LOOK"

    def __init__(self, *, direction: Direction | str = Direction.UP) -> None:
        """Create a LOOK policy with an initial direction."""
        self._direction = Direction(direction)

    @property
    def direction(self) -> Direction:
        """Return the initial sweep direction."""
        return self._direction

    def schedule(self, requests: Sequence[int], *, head: int) -> list[DiskMove]:
        """Return requests in LOOK order."""
        higher, lower = _partition(requests, head)
        descending = list(reversed(lower))
        if self._direction is Direction.UP:
            return _moves(higher + descending)
        return _moves(descending + higher)


class CSCANPolicy:
    """Circular SCAN — sweep one direction, jump back, sweep again.

    Requests are only ever serviced while the arm moves in its initial
    direction.  When that sweep runs out, the arm continues to the edge
    of the disk (if it is not already there), jumps to the opposite edge
    and resumes sweeping the same way.  Both edge points appear on the
    path even when no request lies there.

    Compared to LOOK this gives more uniform wait times: cylinders near
    the edges are not passed half as often as those in the middle.

    Args:
        direction: Sweep direction ("up" or "down").
        max_cylinder: Highest cylinder number on the disk.

    """

    name = "C-SCAN"

    def __init__(self, *, direction: Direction | str = Direction.UP, max_cylinder: int = 199) -> None:
        """Create a C-SCAN policy with sweep direction and disk size."""
        self._direction = Direction(direction)
        self._max_cylinder = max_cylinder

    @property
    def direction(self) -> Direction:
        """Return the sweep direction."""
        return self._direction

    @property
    def max_cylinder(self) -> int:
        """Return the highest cylinder on the disk."""
        return self._max_cylinder

    def schedule(self, requests: Sequence[int], *, head: int) -> list[DiskMove]:
        """Return requests in C-SCAN order, with edge and wrap points."""
        higher, lower = _partition(requests, head)
        if self._direction is Direction.UP:
            moves = _moves(higher)
            if lower:
                last = higher[-1] if higher else head
                if last < self._max_cylinder:
                    moves.append(DiskMove(cylinder=self._max_cylinder, boundary=True))
                moves.append(DiskMove(cylinder=0, boundary=True, wrap=True))
                moves.extend(_moves(lower))
            return moves

        moves = _moves(list(reversed(lower)))
        if higher:
            last = lower[0] if lower else head
            if last > 0:
                moves.append(DiskMove(cylinder=0, boundary=True))
            moves.append(DiskMove(cylinder=self._max_cylinder, boundary=True, wrap=True))
            moves.extend(_moves(list(reversed(higher))))
        return moves


def trace(
    head: int,
    moves: Sequence[DiskMove],
    *,
    label: str = "disk",
    logger: Logger | None = None,
) -> DiskResult:
    """Walk the arm from *head* through *moves*, charging seek distance.

    Every move costs ``abs(target - current)`` cylinders except a wrap,
    which costs nothing.

    Args:
        head: Starting cylinder.
        moves: Targets produced by a ``DiskPolicy``.
        label: Policy name used in log messages.
        logger: Optional log for wrap jumps and the run summary.

    Returns:
        The visited path and total seek distance.

    """
    path = [DiskStep(index=0, cylinder=head)]
    current = head
    seek = 0
    for index, move in enumerate(moves, start=1):
        distance = 0 if move.wrap else abs(move.cylinder - current)
        seek += distance
        if move.wrap and logger is not None:
            logger.log(
                LogLevel.DEBUG,
                f"{label}: return jump {current} -> {move.cylinder} (not charged)",
                source="disk",
                step=index,
            )
        path.append(
            DiskStep(
                index=index,
                cylinder=move.cylinder,
                distance=distance,
                boundary=move.boundary,
                wrap=move.wrap,
            )
        )
        current = move.cylinder
    result = DiskResult(path=tuple(path), seek_distance=seek)
    if logger is not None:
        logger.log(
            LogLevel.INFO,
            f"{label}: {result.requests_served} requests served, seek distance {seek}",
            source="disk",
        )
    return result


class DiskScheduler:
    """Disk scheduler — ties a policy to a request queue.

    The scheduler accepts I/O requests, then runs the selected policy to
    determine service order.  After a run the head rests on the last
    cylinder visited and the queue is empty.
    """

    def __init__(self, *, policy: DiskPolicy, head: int = 0, logger: Logger | None = None) -> None:
        """Create a disk scheduler with a policy and initial head position."""
        self._policy = policy
        self._head = head
        self._queue: list[int] = []
        self._logger = logger

    @property
    def head(self) -> int:
        """Return current head position."""
        return self._head

    @property
    def policy(self) -> DiskPolicy:
        """Return the current scheduling policy."""
        return self._policy

    @policy.setter
    def policy(self, value: DiskPolicy) -> None:
        """Swap the scheduling policy (Strategy pattern)."""
        self._policy = value

    @property
    def pending(self) -> list[int]:
        """Return the current request queue."""
        return list(self._queue)

    def add_request(self, cylinder: int) -> None:
        """Add an I/O request for a cylinder."""
        self._queue.append(cylinder)

    def run(self) -> DiskResult:
        """Run the scheduling policy on queued requests.

        Returns the traced path and moves the head to the last visited
        cylinder.  Clears the queue.

        Returns:
            The path and seek distance of the run.

        """
        moves = self._policy.schedule(self._queue, head=self._head)
        result = trace(self._head, moves, label=self._policy.name, logger=self._logger)
        self._head = result.head
        self._queue.clear()
        return result

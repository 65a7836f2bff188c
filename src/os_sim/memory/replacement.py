"""Page replacement — which resident page goes when memory is full?

A process references pages one at a time.  If the page is already in a
frame it is a **hit**; otherwise it is a **page fault** and the page must
be loaded.  While empty frames remain, the page simply takes the lowest
free one (allocation).  Once every frame is occupied, a **victim** frame
has to be chosen and its page replaced; that choice is the replacement
policy.

Replacement Policies (Strategy pattern):
    - **LRU** — evict the least recently used frame.  Tracked with an
      OrderedDict of frame indices, least recently used first, so a hit
      is an O(1) move-to-end.
    - **Clock / ARB** — second-chance approximation of LRU.  One
      reference bit per frame and a circular hand.  Sweeping from the
      hand, a frame with bit 1 has its bit cleared and is skipped; the
      first frame with bit 0 is the victim.  If the hand comes all the
      way round, every bit was 1: the step is flagged as a *reset*
      and the sweep carries on, now certain to find a 0.

``simulate`` drives a policy over a reference string and records a
``MemoryStep`` per reference, with before/after snapshots of the frame
table and (optionally) of the policy's own state, so a front end can
replay the run frame by frame.
"""

from collections import OrderedDict
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol, TypeAlias

from os_sim.logging import Logger, LogLevel
from os_sim.memory.frames import Frames, FrameTable

# ---------------------------------------------------------------------------
# Trace types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LRUState:
    """LRU bookkeeping: frame indices from least to most recently used."""

    usage: tuple[int, ...]


@dataclass(frozen=True)
class ClockState:
    """Clock bookkeeping: one reference bit per frame and the hand."""

    ref_bits: tuple[int, ...]
    hand: int


PolicyState: TypeAlias = LRUState | ClockState


@dataclass(frozen=True)
class Victim:
    """A frame chosen for replacement.

    Attributes:
        frame: Index of the frame to replace.
        reset: True when the sweep went all the way round (Clock only).
        forced: True when the sweep gave up and took the frame under the
            hand.  Never expected; signals broken bit bookkeeping.

    """

    frame: int
    reset: bool = False
    forced: bool = False


@dataclass(frozen=True)
class MemoryStep:
    """Snapshot of one reference being processed.

    Attributes:
        reference: The page that was referenced.
        frames_before: Frame contents before the reference.
        frames_after: Frame contents after the reference.
        fault: True on a page fault, False on a hit.
        replaced_frame: Frame written on a fault (None on a hit).
        evicted_page: Page displaced from ``replaced_frame`` (None on a hit
            or when the page went into an empty frame).
        reset: True if the Clock hand completed a full revolution.
        state_before: Policy bookkeeping before the reference, if annotated.
        state_after: Policy bookkeeping after the reference, if annotated.

    """

    reference: int
    frames_before: Frames
    frames_after: Frames
    fault: bool
    replaced_frame: int | None = None
    evicted_page: int | None = None
    reset: bool = False
    state_before: PolicyState | None = None
    state_after: PolicyState | None = None

    @property
    def hit(self) -> bool:
        """Return True if the page was already resident."""
        return not self.fault


@dataclass(frozen=True)
class MemoryResult:
    """Full trace and totals of one page-replacement run."""

    steps: tuple[MemoryStep, ...]
    faults: int
    hits: int

    @property
    def references(self) -> int:
        """Return how many references were processed."""
        return len(self.steps)

    @property
    def fault_rate(self) -> float:
        """Return faults as a fraction of references (0.0 for no references)."""
        return self.faults / self.references if self.steps else 0.0

    @property
    def hit_rate(self) -> float:
        """Return hits as a fraction of references (0.0 for no references)."""
        return self.hits / self.references if self.steps else 0.0

    @property
    def final_frames(self) -> Frames:
        """Return the frame contents after the last reference."""
        return self.steps[-1].frames_after if self.steps else ()


# ---------------------------------------------------------------------------
# Replacement Policy Protocol (Strategy pattern)
# ---------------------------------------------------------------------------


class ReplacementPolicy(Protocol):
    """Interface for page replacement algorithms.

    Policies think in frame indices, not page numbers: the frame table
    owns the pages, the policy owns the ordering.
    """

    name: str

    def on_load(self, frame: int) -> None:
        """Record that a page was just loaded into *frame*."""
        ...  # pragma: no cover

    def on_hit(self, frame: int) -> None:
        """Record that the page in *frame* was referenced again."""
        ...  # pragma: no cover

    def select_victim(self) -> Victim:
        """Choose the frame to replace when every frame is occupied."""
        ...  # pragma: no cover

    def snapshot(self) -> PolicyState:
        """Return an immutable copy of the policy's bookkeeping."""
        ...  # pragma: no cover


# ---------------------------------------------------------------------------
# LRU Policy
# ---------------------------------------------------------------------------


class LRUPolicy:
    """Least Recently Used — evict the frame referenced longest ago.

    The first key of the OrderedDict is always the least recently used
    frame.  Frames enter the order only when first loaded, so an empty
    frame never appears in it.
    """

    name = "LRU"

    def __init__(self) -> None:
        """Create an LRU policy with no frames in use."""
        self._order: OrderedDict[int, None] = OrderedDict()

    @property
    def usage(self) -> list[int]:
        """Return frame indices from least to most recently used."""
        return list(self._order)

    def on_load(self, frame: int) -> None:
        """Make *frame* the most recently used."""
        self._order[frame] = None
        self._order.move_to_end(frame)

    def on_hit(self, frame: int) -> None:
        """Move *frame* to the most recently used position."""
        self._order[frame] = None
        self._order.move_to_end(frame)

    def select_victim(self) -> Victim:
        """Return the least recently used frame (front of the order).

        Raises:
            IndexError: If no frames are tracked.

        """
        if not self._order:
            msg = "No frames to evict"
            raise IndexError(msg)
        return Victim(frame=next(iter(self._order)))

    def snapshot(self) -> LRUState:
        """Return the current usage order."""
        return LRUState(usage=tuple(self._order))


# ---------------------------------------------------------------------------
# Clock Policy
# ---------------------------------------------------------------------------


class ClockPolicy:
    """Second Chance (Clock) — approximate LRU with reference bits.

    A hit sets the frame's bit without moving the hand.  Loading a page
    sets its bit and parks the hand on the next frame.  To find a victim
    the hand sweeps forward:

    - bit = 1 → clear it, move on (second chance)
    - bit = 0 → this frame is the victim

    This is the single-bit clock, not the shifting-history "aging"
    variant; clock order is the only tie-break.
    """

    name = "ARB"

    def __init__(self, frame_count: int) -> None:
        """Create a clock over *frame_count* frames, all bits clear.

        Raises:
            ValueError: If *frame_count* is less than 1.

        """
        if frame_count < 1:
            msg = f"Frame count must be at least 1, got {frame_count}"
            raise ValueError(msg)
        self._bits: list[int] = [0] * frame_count
        self._hand = 0

    @property
    def hand(self) -> int:
        """Return the frame the clock hand points at."""
        return self._hand

    @property
    def ref_bits(self) -> list[int]:
        """Return a copy of the reference bits."""
        return list(self._bits)

    def _advance(self) -> None:
        self._hand = (self._hand + 1) % len(self._bits)

    def on_load(self, frame: int) -> None:
        """Set *frame*'s bit and move the hand just past it."""
        self._bits[frame] = 1
        self._hand = (frame + 1) % len(self._bits)

    def on_hit(self, frame: int) -> None:
        """Set *frame*'s bit; the hand stays where it is."""
        self._bits[frame] = 1

    def select_victim(self) -> Victim:
        """Sweep the hand until a frame with a clear bit is found.

        Coming back to the starting frame means every bit was set and has
        now been cleared, so the next pass must stop.  A second complete
        revolution can only happen if the bits were tampered with; the
        frame under the hand is then taken regardless.
        """
        start = self._hand
        revolutions = 0
        while True:
            if self._bits[self._hand] == 0:
                return Victim(frame=self._hand, reset=revolutions > 0)
            self._bits[self._hand] = 0
            self._advance()
            if self._hand == start:
                revolutions += 1
                if revolutions > 1:
                    return Victim(frame=self._hand, reset=True, forced=True)

    def snapshot(self) -> ClockState:
        """Return the current bits and hand position."""
        return ClockState(ref_bits=tuple(self._bits), hand=self._hand)


# ---------------------------------------------------------------------------
# Simulation driver
# ---------------------------------------------------------------------------


def simulate(
    policy: ReplacementPolicy,
    frame_count: int,
    references: Iterable[int],
    *,
    annotate: bool = True,
    logger: Logger | None = None,
) -> MemoryResult:
    """Run *policy* over *references* with *frame_count* frames.

    Args:
        policy: A fresh replacement policy sized for *frame_count*.
        frame_count: Number of physical frames.
        references: The page-reference trace.
        annotate: Record policy state before/after each step.
        logger: Optional log for evictions and the run summary.

    Returns:
        One ``MemoryStep`` per reference, plus fault and hit totals.

    Raises:
        ValueError: If *frame_count* is less than 1.

    """
    table = FrameTable(frame_count)
    steps: list[MemoryStep] = []
    faults = 0
    hits = 0

    for index, page in enumerate(references):
        frames_before = table.snapshot()
        state_before = policy.snapshot() if annotate else None
        replaced: int | None = None
        evicted: int | None = None
        reset = False

        frame = table.find(page)
        if frame is not None:
            hits += 1
            policy.on_hit(frame)
        else:
            faults += 1
            replaced = table.first_empty()
            if replaced is None:
                victim = policy.select_victim()
                replaced, reset = victim.frame, victim.reset
                if victim.forced and logger is not None:
                    logger.log(
                        LogLevel.ERROR,
                        f"Clock sweep made two full revolutions; forcing frame {replaced}",
                        source="memory",
                        step=index,
                    )
            evicted = table.load(replaced, page)
            policy.on_load(replaced)
            if evicted is not None and logger is not None:
                logger.log(
                    LogLevel.DEBUG,
                    f"{policy.name}: page {evicted} evicted from frame {replaced} for page {page}",
                    source="memory",
                    step=index,
                )

        steps.append(
            MemoryStep(
                reference=page,
                frames_before=frames_before,
                frames_after=table.snapshot(),
                fault=frame is None,
                replaced_frame=replaced,
                evicted_page=evicted,
                reset=reset,
                state_before=state_before,
                state_after=policy.snapshot() if annotate else None,
            )
        )

    if logger is not None:
        logger.log(
            LogLevel.INFO,
            f"{policy.name}: {len(steps)} references, {faults} faults, {hits} hits",
            source="memory",
        )
    return MemoryResult(steps=tuple(steps), faults=faults, hits=hits)

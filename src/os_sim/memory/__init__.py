"""Memory subsystem — frame table and page replacement simulation.

Re-exports public symbols so callers can write::

    from os_sim.memory import LRUPolicy, simulate
"""

from os_sim.memory.frames import Frames, FrameTable, Slot
from os_sim.memory.replacement import (
    ClockPolicy,
    ClockState,
    LRUPolicy,
    LRUState,
    MemoryResult,
    MemoryStep,
    PolicyState,
    ReplacementPolicy,
    Victim,
    simulate,
)

__all__ = [
    "ClockPolicy",
    "ClockState",
    "FrameTable",
    "Frames",
    "LRUPolicy",
    "LRUState",
    "MemoryResult",
    "MemoryStep",
    "PolicyState",
    "ReplacementPolicy",
    "Slot",
    "Victim",
    "simulate",
]

"""Frame table — the fixed set of physical frames a simulation fills.

Physical memory is ``frame_count`` slots.  Each slot holds either a
resident page number or nothing.  "Nothing" is ``None`` rather than a
reserved number such as ``-1``: any integer could in principle be a
real page, while ``None`` never can.

Snapshots are tuples, so a trace step that stores one is unaffected by
later mutations of the table.
"""

from typing import TypeAlias

Slot: TypeAlias = int | None
Frames: TypeAlias = tuple[Slot, ...]


class FrameTable:
    """A fixed-size array of frames with an explicit empty marker."""

    def __init__(self, frame_count: int) -> None:
        """Create a table of *frame_count* empty frames.

        Raises:
            ValueError: If *frame_count* is less than 1.

        """
        if frame_count < 1:
            msg = f"Frame count must be at least 1, got {frame_count}"
            raise ValueError(msg)
        self._slots: list[Slot] = [None] * frame_count

    def __len__(self) -> int:
        """Return the number of frames (occupied or not)."""
        return len(self._slots)

    def __getitem__(self, frame: int) -> Slot:
        """Return the page held in *frame*, or None if empty."""
        return self._slots[frame]

    @property
    def occupied(self) -> int:
        """Return how many frames hold a page."""
        return sum(1 for slot in self._slots if slot is not None)

    @property
    def full(self) -> bool:
        """Return True when no frame is empty."""
        return None not in self._slots

    def find(self, page: int) -> int | None:
        """Return the frame holding *page*, or None on a miss."""
        for frame, slot in enumerate(self._slots):
            if slot == page:
                return frame
        return None

    def first_empty(self) -> int | None:
        """Return the lowest-indexed empty frame, or None if full."""
        for frame, slot in enumerate(self._slots):
            if slot is None:
                return frame
        return None

    def load(self, frame: int, page: int) -> Slot:
        """Place *page* in *frame* and return the page it displaced."""
        previous = self._slots[frame]
        self._slots[frame] = page
        return previous

    def snapshot(self) -> Frames:
        """Return an immutable copy of the current contents."""
        return tuple(self._slots)

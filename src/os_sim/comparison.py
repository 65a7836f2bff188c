"""Side-by-side comparison of algorithm runs.

After running the same workload through both algorithms of a family, a
learner wants to see which did better.  The ``ComparisonBoard`` keeps
the latest summary per algorithm and derives two figures:

- **fault rate** — percentage of references that faulted (lower is better).
- **seek efficiency** — ``(1 - seek / (2 * cylinders)) * 100``, i.e. how
  far under two full strokes of the disk the arm travelled (higher is
  better).
"""

from dataclasses import dataclass

from os_sim.disk import DiskResult
from os_sim.memory import MemoryResult
from os_sim.simulator import DiskStrategy, MemoryStrategy

_LABELS = {
    MemoryStrategy.LRU: "LRU",
    MemoryStrategy.ARB: "ARB",
    DiskStrategy.LOOK: "LOOK",
    DiskStrategy.CSCAN: "C-SCAN",
}


def fault_rate(faults: int, hits: int) -> float:
    """Return faults as a percentage of references (0.0 when there are none)."""
    total = faults + hits
    if total == 0:
        return 0.0
    return faults / total * 100


def seek_efficiency(seek_distance: int, cylinders: int) -> float:
    """Return seek distance relative to two full strokes, as a percentage."""
    max_possible = cylinders * 2
    if max_possible == 0:
        return 0.0
    return (1 - seek_distance / max_possible) * 100


@dataclass(frozen=True)
class MemorySummary:
    """Headline figures of one page-replacement run."""

    strategy: MemoryStrategy
    faults: int
    hits: int

    @property
    def fault_rate(self) -> float:
        """Return the fault percentage."""
        return fault_rate(self.faults, self.hits)


@dataclass(frozen=True)
class DiskSummary:
    """Headline figures of one disk-scheduling run."""

    strategy: DiskStrategy
    seek_distance: int
    cylinders: int

    @property
    def efficiency(self) -> float:
        """Return the seek efficiency percentage."""
        return seek_efficiency(self.seek_distance, self.cylinders)


class ComparisonBoard:
    """Latest result per algorithm, ready for tabulating.

    Recording a run replaces any earlier run of the same algorithm;
    the board never holds more than one row per algorithm.
    """

    def __init__(self) -> None:
        """Create an empty board."""
        self._memory: dict[MemoryStrategy, MemorySummary] = {}
        self._disk: dict[DiskStrategy, DiskSummary] = {}

    def record_memory(self, strategy: MemoryStrategy | str, result: MemoryResult) -> MemorySummary:
        """Store the summary of a page-replacement run."""
        key = MemoryStrategy(strategy)
        summary = MemorySummary(strategy=key, faults=result.faults, hits=result.hits)
        self._memory[key] = summary
        return summary

    def record_disk(self, strategy: DiskStrategy | str, result: DiskResult, *, cylinders: int) -> DiskSummary:
        """Store the summary of a disk-scheduling run."""
        key = DiskStrategy(strategy)
        summary = DiskSummary(strategy=key, seek_distance=result.seek_distance, cylinders=cylinders)
        self._disk[key] = summary
        return summary

    def memory_rows(self) -> list[MemorySummary]:
        """Return memory summaries in menu order."""
        return [self._memory[s] for s in MemoryStrategy if s in self._memory]

    def disk_rows(self) -> list[DiskSummary]:
        """Return disk summaries in menu order."""
        return [self._disk[s] for s in DiskStrategy if s in self._disk]

    def best_memory(self) -> MemorySummary | None:
        """Return the run with the fewest faults (first in menu order on a tie)."""
        rows = self.memory_rows()
        return min(rows, key=lambda row: row.faults) if rows else None

    def best_disk(self) -> DiskSummary | None:
        """Return the run with the shortest seek distance."""
        rows = self.disk_rows()
        return min(rows, key=lambda row: row.seek_distance) if rows else None

    def clear(self) -> None:
        """Forget every recorded run."""
        self._memory.clear()
        self._disk.clear()

    def render(self) -> str:
        """Format both families as plain-text tables."""
        lines: list[str] = []
        memory = self.memory_rows()
        if memory:
            lines.append(f"{'Algorithm':<10} {'Faults':>7} {'Hits':>7} {'Fault Rate':>11}")
            lines.extend(
                f"{_LABELS[row.strategy]:<10} {row.faults:>7} {row.hits:>7} {row.fault_rate:>10.2f}%"
                for row in memory
            )
        else:
            lines.append("Run memory simulations to see comparison")
        lines.append("")
        disk = self.disk_rows()
        if disk:
            lines.append(f"{'Algorithm':<10} {'Seek':>7} {'Efficiency':>11}")
            lines.extend(
                f"{_LABELS[row.strategy]:<10} {row.seek_distance:>7} {row.efficiency:>10.2f}%" for row in disk
            )
        else:
            lines.append("Run disk simulations to see comparison")
        return "\n".join(lines)

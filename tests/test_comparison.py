"""Tests for side-by-side comparison of algorithm runs."""

import pytest

from os_sim.comparison import ComparisonBoard, fault_rate, seek_efficiency
from os_sim.simulator import DiskStrategy, MemoryStrategy, run_disk_simulation, run_memory_simulation

_TEXTBOOK_REFS = [7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2]
_REQUESTS = [82, 170, 43, 140, 24, 16, 190]


class TestMetrics:
    """The two derived figures."""

    def test_fault_rate(self) -> None:
        """Faults as a percentage of references."""
        assert fault_rate(9, 4) == pytest.approx(69.2307, rel=1e-4)

    def test_fault_rate_no_references(self) -> None:
        """No references gives 0, not a division error."""
        assert fault_rate(0, 0) == 0.0

    def test_seek_efficiency(self) -> None:
        """Seek relative to two full strokes of the disk."""
        assert seek_efficiency(314, 200) == pytest.approx(21.5)
        assert seek_efficiency(0, 200) == pytest.approx(100.0)

    def test_seek_efficiency_no_cylinders(self) -> None:
        """A zero-size disk gives 0."""
        assert seek_efficiency(10, 0) == 0.0


class TestComparisonBoard:
    """Latest run per algorithm."""

    def _filled(self) -> ComparisonBoard:
        board = ComparisonBoard()
        board.record_memory("lru", run_memory_simulation("lru", 3, _TEXTBOOK_REFS))
        board.record_memory("arb", run_memory_simulation("arb", 3, _TEXTBOOK_REFS))
        board.record_disk("look", run_disk_simulation("look", 200, 50, _REQUESTS), cylinders=200)
        board.record_disk("cscan", run_disk_simulation("cscan", 200, 50, _REQUESTS), cylinders=200)
        return board

    def test_empty_board(self) -> None:
        """A new board has no rows and no winners."""
        board = ComparisonBoard()
        assert board.memory_rows() == []
        assert board.disk_rows() == []
        assert board.best_memory() is None
        assert board.best_disk() is None

    def test_rows_in_menu_order(self) -> None:
        """Rows follow the strategy enumeration, not insertion order."""
        board = ComparisonBoard()
        board.record_disk("cscan", run_disk_simulation("cscan", 200, 50, _REQUESTS), cylinders=200)
        board.record_disk("look", run_disk_simulation("look", 200, 50, _REQUESTS), cylinders=200)
        assert [row.strategy for row in board.disk_rows()] == [DiskStrategy.LOOK, DiskStrategy.CSCAN]

    def test_rerun_replaces_row(self) -> None:
        """Recording the same algorithm again keeps only the latest."""
        board = ComparisonBoard()
        board.record_memory("lru", run_memory_simulation("lru", 3, _TEXTBOOK_REFS))
        board.record_memory("lru", run_memory_simulation("lru", 1, [1, 2]))
        rows = board.memory_rows()
        assert len(rows) == 1
        expected_faults = 2
        assert rows[0].faults == expected_faults

    def test_best_disk(self) -> None:
        """C-SCAN travels less than LOOK on the textbook queue."""
        board = self._filled()
        best = board.best_disk()
        assert best is not None
        assert best.strategy is DiskStrategy.CSCAN
        assert best.efficiency == pytest.approx(52.0)

    def test_best_memory(self) -> None:
        """The winner has the fewest faults."""
        board = self._filled()
        best = board.best_memory()
        assert best is not None
        assert best.faults == min(row.faults for row in board.memory_rows())

    def test_render(self) -> None:
        """The text table shows labels and percentages."""
        text = self._filled().render()
        assert "LRU" in text
        assert "69.23%" in text
        assert "C-SCAN" in text
        assert "52.00%" in text

    def test_render_empty(self) -> None:
        """An empty board asks for runs."""
        text = ComparisonBoard().render()
        assert "Run memory simulations" in text
        assert "Run disk simulations" in text

    def test_clear(self) -> None:
        """Clearing forgets every run."""
        board = self._filled()
        board.clear()
        assert board.memory_rows() == []
        assert board.disk_rows() == []

    def test_record_returns_summary(self) -> None:
        """Recording hands back the stored summary."""
        board = ComparisonBoard()
        summary = board.record_memory(MemoryStrategy.ARB, run_memory_simulation("arb", 2, [1, 2, 1]))
        assert summary.strategy is MemoryStrategy.ARB
        assert summary.fault_rate == pytest.approx(200 / 3)

"""Tests for page replacement simulation.

Components tested:
    - **LRUPolicy**: evicts the least recently used frame.
    - **ClockPolicy**: second chance with one reference bit per frame.
    - **simulate**: drives a policy over a reference string, recording
      before/after snapshots for every reference.
"""

import pytest

from os_sim.logging import Logger, LogLevel
from os_sim.memory import (
    ClockPolicy,
    ClockState,
    LRUPolicy,
    LRUState,
    Victim,
    simulate,
)

# -- Textbook example constants -----------------------------------------------
_TEXTBOOK_REFS = [7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2]
_TEXTBOOK_FRAMES = 3


# -- LRU Policy ---------------------------------------------------------------


class TestLRUPolicy:
    """Verify LRU bookkeeping in isolation."""

    def test_selects_least_recently_used(self) -> None:
        """The first frame loaded and never touched again is the victim."""
        policy = LRUPolicy()
        for frame in range(3):
            policy.on_load(frame)
        assert policy.select_victim() == Victim(frame=0)

    def test_hit_moves_to_back(self) -> None:
        """A hit protects the frame from the next eviction."""
        policy = LRUPolicy()
        for frame in range(3):
            policy.on_load(frame)
        policy.on_hit(0)
        assert policy.usage == [1, 2, 0]
        assert policy.select_victim().frame == 1

    def test_reload_moves_to_back(self) -> None:
        """Loading into a frame makes it most recently used."""
        policy = LRUPolicy()
        policy.on_load(0)
        policy.on_load(1)
        policy.on_load(0)
        assert policy.usage == [1, 0]

    def test_empty_raises(self) -> None:
        """No frames in use means nothing to evict."""
        with pytest.raises(IndexError):
            LRUPolicy().select_victim()


class TestLRUSimulation:
    """Verify LRU over whole reference strings."""

    def test_textbook_example(self) -> None:
        """Three frames on the classic string give 9 faults, 4 hits."""
        result = simulate(LRUPolicy(), _TEXTBOOK_FRAMES, _TEXTBOOK_REFS)
        expected_faults = 9
        expected_hits = 4
        assert result.faults == expected_faults
        assert result.hits == expected_hits
        assert result.final_frames == (0, 3, 2)

    def test_fault_pattern(self) -> None:
        """Faults happen exactly where the textbook says."""
        result = simulate(LRUPolicy(), _TEXTBOOK_FRAMES, _TEXTBOOK_REFS)
        faults = [step.fault for step in result.steps]
        assert faults == [True, True, True, True, False, True, False, True, True, True, True, False, False]

    def test_fills_empty_frames_in_order(self) -> None:
        """Cold misses take frames 0, 1, 2 and evict nothing."""
        result = simulate(LRUPolicy(), 3, [4, 5, 6])
        assert [s.replaced_frame for s in result.steps] == [0, 1, 2]
        assert all(s.evicted_page is None for s in result.steps)
        assert result.steps[0].frames_before == (None, None, None)
        assert result.steps[0].frames_after == (4, None, None)

    def test_eviction_records_usage_order(self) -> None:
        """The victim is the head of the usage order before the step."""
        result = simulate(LRUPolicy(), 3, [7, 0, 1, 2])
        step = result.steps[3]
        assert step.state_before == LRUState(usage=(0, 1, 2))
        assert step.state_after == LRUState(usage=(1, 2, 0))
        assert step.replaced_frame == 0
        assert step.evicted_page == 7
        assert step.frames_after == (2, 0, 1)

    def test_hit_has_no_replaced_frame(self) -> None:
        """A hit writes no frame."""
        result = simulate(LRUPolicy(), 2, [1, 1])
        hit = result.steps[1]
        assert hit.hit
        assert hit.replaced_frame is None
        assert hit.frames_before == hit.frames_after

    def test_single_frame(self) -> None:
        """With one frame, every change of page faults."""
        result = simulate(LRUPolicy(), 1, [1, 1, 2, 1])
        expected_faults = 3
        assert result.faults == expected_faults

    def test_deterministic(self) -> None:
        """The same workload always gives the same trace."""
        first = simulate(LRUPolicy(), _TEXTBOOK_FRAMES, _TEXTBOOK_REFS)
        second = simulate(LRUPolicy(), _TEXTBOOK_FRAMES, _TEXTBOOK_REFS)
        assert first == second


# -- Clock Policy ---------------------------------------------------------------


class TestClockPolicy:
    """Verify second-chance bookkeeping in isolation."""

    def test_rejects_zero_frames(self) -> None:
        """A clock needs at least one frame."""
        with pytest.raises(ValueError, match="at least 1"):
            ClockPolicy(0)

    def test_load_sets_bit_and_advances_hand(self) -> None:
        """Loading sets the bit and parks the hand on the next frame."""
        policy = ClockPolicy(3)
        policy.on_load(0)
        assert policy.ref_bits == [1, 0, 0]
        assert policy.hand == 1

    def test_hand_wraps(self) -> None:
        """Loading the last frame sends the hand back to 0."""
        policy = ClockPolicy(2)
        policy.on_load(1)
        assert policy.hand == 0

    def test_hit_does_not_move_hand(self) -> None:
        """A hit only sets the bit."""
        policy = ClockPolicy(3)
        policy.on_load(0)
        policy.on_hit(2)
        assert policy.ref_bits == [1, 0, 1]
        assert policy.hand == 1

    def test_clear_bit_is_victim(self) -> None:
        """A frame with bit 0 under the hand is taken at once."""
        policy = ClockPolicy(2)
        policy.on_load(0)
        assert policy.select_victim() == Victim(frame=1)

    def test_second_chance(self) -> None:
        """Set bits are cleared and skipped."""
        policy = ClockPolicy(3)
        for frame in range(3):
            policy.on_load(frame)
        policy._bits = [1, 1, 0]  # noqa: SLF001
        victim = policy.select_victim()
        assert victim == Victim(frame=2)
        assert policy.ref_bits == [0, 0, 0]

    def test_full_revolution_is_reset(self) -> None:
        """All bits set: the sweep clears them all and takes the start frame."""
        policy = ClockPolicy(3)
        for frame in range(3):
            policy.on_load(frame)
        victim = policy.select_victim()
        assert victim == Victim(frame=0, reset=True)
        assert policy.ref_bits == [0, 0, 0]

    def test_stuck_bits_force_eviction(self) -> None:
        """If bits cannot be cleared, a second revolution forces a victim."""

        class _StuckBits(list[int]):
            def __setitem__(self, index: object, value: object) -> None:
                pass

        policy = ClockPolicy(2)
        policy._bits = _StuckBits([1, 1])  # noqa: SLF001
        assert policy.select_victim() == Victim(frame=0, reset=True, forced=True)


class TestClockSimulation:
    """Verify Clock (ARB) over whole reference strings."""

    def test_reset_step(self) -> None:
        """The first eviction after a cold start sweeps a full circle."""
        result = simulate(ClockPolicy(3), 3, [1, 2, 3, 4])
        step = result.steps[3]
        assert step.reset
        assert step.state_before == ClockState(ref_bits=(1, 1, 1), hand=0)
        assert step.state_after == ClockState(ref_bits=(1, 0, 0), hand=1)
        assert step.replaced_frame == 0
        assert step.evicted_page == 1
        assert step.frames_after == (4, 2, 3)

    def test_no_reset_when_a_bit_is_clear(self) -> None:
        """After a reset the next fault finds a clear bit straight away."""
        result = simulate(ClockPolicy(3), 3, [1, 2, 3, 4, 5])
        step = result.steps[4]
        assert not step.reset
        assert step.replaced_frame == 1
        assert step.frames_after == (4, 5, 3)
        assert step.state_after == ClockState(ref_bits=(1, 1, 0), hand=2)

    def test_hit_earns_second_chance(self) -> None:
        """A referenced page survives the sweep that passes over it."""
        result = simulate(ClockPolicy(3), 3, [1, 2, 3, 4, 2, 5])
        hit = result.steps[4]
        assert hit.hit
        assert hit.state_after == ClockState(ref_bits=(1, 1, 0), hand=1)
        step = result.steps[5]
        assert not step.reset
        assert step.replaced_frame == 2
        assert step.evicted_page == 3
        assert step.frames_after == (4, 2, 5)
        assert step.state_after == ClockState(ref_bits=(1, 0, 1), hand=0)

    def test_bit_is_set_after_load_or_hit(self) -> None:
        """Every referenced frame ends its step with bit 1."""
        result = simulate(ClockPolicy(3), 3, _TEXTBOOK_REFS)
        for step in result.steps:
            frame = step.frames_after.index(step.reference)
            assert isinstance(step.state_after, ClockState)
            assert step.state_after.ref_bits[frame] == 1

    def test_reset_iff_all_bits_set(self) -> None:
        """A step is a reset exactly when every bit was 1 before its sweep."""
        result = simulate(ClockPolicy(3), 3, _TEXTBOOK_REFS)
        for step in result.steps:
            if step.fault and None not in step.frames_before:
                assert isinstance(step.state_before, ClockState)
                assert step.reset == all(step.state_before.ref_bits)
            else:
                assert not step.reset

    def test_single_frame(self) -> None:
        """One frame: every replacement is a reset of the lone bit."""
        result = simulate(ClockPolicy(1), 1, [1, 2, 2])
        assert [s.reset for s in result.steps] == [False, True, False]
        expected_faults = 2
        assert result.faults == expected_faults


# -- Driver ---------------------------------------------------------------------


class TestSimulate:
    """Properties of the simulation driver shared by both policies."""

    @pytest.mark.parametrize("make", [LRUPolicy, lambda: ClockPolicy(4)])
    def test_faults_plus_hits(self, make) -> None:  # noqa: ANN001
        """Every reference is either a fault or a hit."""
        refs = [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5]
        result = simulate(make(), 4, refs)
        assert result.faults + result.hits == len(refs)
        assert len(result.steps) == len(refs)

    def test_frame_count_is_constant(self) -> None:
        """Every snapshot has exactly frame_count slots."""
        result = simulate(LRUPolicy(), 4, _TEXTBOOK_REFS)
        for step in result.steps:
            assert len(step.frames_before) == len(step.frames_after) == 4

    def test_snapshots_chain(self) -> None:
        """Each step starts where the previous one ended."""
        result = simulate(ClockPolicy(3), 3, _TEXTBOOK_REFS)
        for prev, step in zip(result.steps, result.steps[1:], strict=False):
            assert step.frames_before == prev.frames_after
            assert step.state_before == prev.state_after

    def test_annotations_can_be_skipped(self) -> None:
        """Without annotation the policy state is not recorded."""
        result = simulate(LRUPolicy(), 3, _TEXTBOOK_REFS, annotate=False)
        assert all(s.state_before is None and s.state_after is None for s in result.steps)
        expected_faults = 9
        assert result.faults == expected_faults

    def test_rates(self) -> None:
        """Rates are fractions of the references processed."""
        result = simulate(LRUPolicy(), 1, [1, 1, 1, 2])
        assert result.fault_rate == pytest.approx(0.5)
        assert result.hit_rate == pytest.approx(0.5)

    def test_empty_reference_string(self) -> None:
        """No references means an empty trace and zero rates."""
        result = simulate(LRUPolicy(), 2, [])
        assert result.steps == ()
        assert result.fault_rate == 0.0
        assert result.final_frames == ()

    def test_forced_eviction_is_logged(self) -> None:
        """A forced victim is reported at ERROR."""

        class _ForcedPolicy(LRUPolicy):
            def select_victim(self) -> Victim:
                return Victim(frame=0, reset=True, forced=True)

        logger = Logger()
        result = simulate(_ForcedPolicy(), 1, [1, 2], logger=logger)
        errors = logger.filter(min_level=LogLevel.ERROR)
        assert len(errors) == 1
        assert errors[0].step == 1
        assert result.steps[1].reset

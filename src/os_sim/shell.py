"""The shell — a command interpreter over the simulation engines.

The shell reads a command string, splits it into a command name and
arguments, dispatches to the matching handler and returns a string.
It is the text front end to the simulator: every run goes through the
validator first, then through the engine, and is recorded on a
``ComparisonBoard``.

Commands::

    lru   <frames> <page> <page> ...
    arb   <frames> <page> <page> ...
    look  <cylinders> <head> <r1,r2,...> [up|down]
    cscan <cylinders> <head> <r1,r2,...> [up|down]
    compare | clear | log [LEVEL] | help | exit

Handlers return strings rather than printing, so the shell is fully
testable and the caller (REPL or web UI) decides how to display output.
Dispatch is a dict of command name to handler method.
"""

from collections.abc import Callable
from typing import TypeAlias

from os_sim.comparison import ComparisonBoard
from os_sim.config import Settings
from os_sim.disk import DiskResult
from os_sim.logging import Logger, LogLevel
from os_sim.memory import ClockState, LRUState, MemoryResult, MemoryStep
from os_sim.memory.frames import Frames
from os_sim.simulator import (
    DiskStrategy,
    MemoryStrategy,
    simulate_disk_workload,
    simulate_memory_workload,
)
from os_sim.validation import validate_disk_input, validate_memory_input

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]

_DIRECTIONS = {"up": True, "down": False}


def format_frames(frames: Frames) -> str:
    """Render frame contents as ``[7 0 -]`` (``-`` marks an empty frame)."""
    return "[" + " ".join("-" if page is None else str(page) for page in frames) + "]"


def _describe_state(step: MemoryStep) -> str:
    state = step.state_after
    if isinstance(state, LRUState):
        return "usage=" + ",".join(str(f) for f in state.usage)
    if isinstance(state, ClockState):
        bits = "".join(str(b) for b in state.ref_bits)
        text = f"bits={bits} hand={state.hand}"
        return text + " reset" if step.reset else text
    return ""


def format_memory_result(result: MemoryResult) -> str:
    """Render a page-replacement trace as a step table plus totals."""
    lines = ["Step  Ref   Frames                Result"]
    for number, step in enumerate(result.steps, start=1):
        outcome = f"FAULT -> frame {step.replaced_frame}" if step.fault else "hit"
        extra = _describe_state(step)
        row = f"{number:<5} {step.reference:<5} {format_frames(step.frames_after):<21} {outcome}"
        lines.append(f"{row}  {extra}" if extra else row)
    lines.append(f"Faults: {result.faults}  Hits: {result.hits}  Fault rate: {result.fault_rate * 100:.2f}%")
    return "\n".join(lines)


def format_disk_result(result: DiskResult) -> str:
    """Render a disk path as ``50 -> 82 -> ...`` plus the seek distance."""
    hops = [f"{step.cylinder} (jump)" if step.wrap else str(step.cylinder) for step in result.path]
    return f"Path: {' -> '.join(hops)}\nSeek distance: {result.seek_distance}"


class Shell:
    """Command interpreter over the simulator.

    Each shell owns a comparison board and an event log, so successive
    runs of different algorithms can be compared with ``compare``.
    """

    EXIT_SENTINEL = "__EXIT__"

    def __init__(self, *, settings: Settings | None = None, logger: Logger | None = None) -> None:
        """Create a shell.

        Args:
            settings: Front-end settings (defaults if omitted).
            logger: Event log shared with the engines; one is created at
                the configured level if omitted.

        """
        self._settings = settings or Settings()
        self._logger = logger if logger is not None else Logger(min_level=self._settings.log_level)
        self._board = ComparisonBoard()

        # Command dispatch table — maps command names to handler methods.
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "lru": self._cmd_lru,
            "arb": self._cmd_arb,
            "look": self._cmd_look,
            "cscan": self._cmd_cscan,
            "compare": self._cmd_compare,
            "clear": self._cmd_clear,
            "log": self._cmd_log,
            "exit": self._cmd_exit,
        }

    @property
    def board(self) -> ComparisonBoard:
        """Return the comparison board fed by this shell's runs."""
        return self._board

    @property
    def logger(self) -> Logger:
        """Return the shell's event log."""
        return self._logger

    @property
    def commands(self) -> list[str]:
        """Return the names of all commands, sorted."""
        return sorted(self._commands)

    def execute(self, command: str) -> str:
        """Parse and execute a shell command.

        Args:
            command: The raw command string (e.g. "lru 3 7 0 1 2").

        Returns:
            The command output as a string, or an error message.

        """
        parts = command.strip().split()
        if not parts:
            return ""

        name = parts[0].lower()
        args = parts[1:]
        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"
        return handler(args)

    # -- Command handlers ------------------------------------------------

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        return "Available commands: " + ", ".join(self.commands)

    def _run_memory(self, strategy: MemoryStrategy, args: list[str]) -> str:
        if not args:
            return f"Usage: {strategy} <frames> <page> <page> ..."
        validation = validate_memory_input(args[0], " ".join(args[1:]), logger=self._logger)
        if not validation.valid:
            return f"Error: {validation.message}"
        result = simulate_memory_workload(strategy, validation.unwrap(), logger=self._logger)
        self._board.record_memory(strategy, result)
        return format_memory_result(result)

    def _run_disk(self, strategy: DiskStrategy, args: list[str]) -> str:
        min_args = 3
        if len(args) < min_args:
            return f"Usage: {strategy} <cylinders> <head> <r1,r2,...> [up|down]"
        direction_up = self._settings.default_direction_up
        queue_args = args[2:]
        if queue_args[-1].lower() in _DIRECTIONS:
            direction_up = _DIRECTIONS[queue_args[-1].lower()]
            queue_args = queue_args[:-1]
        validation = validate_disk_input(
            args[0],
            args[1],
            " ".join(queue_args),
            direction_up=direction_up,
            logger=self._logger,
        )
        if not validation.valid:
            return f"Error: {validation.message}"
        workload = validation.unwrap()
        result = simulate_disk_workload(strategy, workload, logger=self._logger)
        self._board.record_disk(strategy, result, cylinders=workload.cylinders)
        return format_disk_result(result)

    def _cmd_lru(self, args: list[str]) -> str:
        """Run LRU page replacement."""
        return self._run_memory(MemoryStrategy.LRU, args)

    def _cmd_arb(self, args: list[str]) -> str:
        """Run Clock (ARB) page replacement."""
        return self._run_memory(MemoryStrategy.ARB, args)

    def _cmd_look(self, args: list[str]) -> str:
        """Run LOOK disk scheduling."""
        return self._run_disk(DiskStrategy.LOOK, args)

    def _cmd_cscan(self, args: list[str]) -> str:
        """Run C-SCAN disk scheduling."""
        return self._run_disk(DiskStrategy.CSCAN, args)

    def _cmd_compare(self, _args: list[str]) -> str:
        """Show the comparison tables."""
        return self._board.render()

    def _cmd_clear(self, _args: list[str]) -> str:
        """Forget recorded runs and log entries."""
        self._board.clear()
        self._logger.clear()
        return "Cleared."

    def _cmd_log(self, args: list[str]) -> str:
        """Show log entries, optionally at or above a level."""
        min_level = None
        if args:
            level = args[0].upper()
            if level not in LogLevel.__members__:
                return f"Error: unknown log level {args[0]}"
            min_level = LogLevel[level]
        entries = self._logger.filter(min_level=min_level)
        return "\n".join(str(e) for e in entries) if entries else "No log entries."

    def _cmd_exit(self, _args: list[str]) -> str:
        """Signal the REPL to stop."""
        return self.EXIT_SENTINEL

"""Interactive REPL (Read-Eval-Print Loop) for the simulator.

The REPL is the terminal front end: it creates a shell and enters the
classic loop:

    1. **Read** — display a prompt and read user input.
    2. **Eval** — pass the command to ``shell.execute()``.
    3. **Print** — display the result.
    4. **Loop** — repeat until the shell returns the exit sentinel.

The shell is fully testable (returns strings, no I/O); this module is
the thin I/O wrapper that connects it to ``stdin``/``stdout``.
"""

import readline
from collections.abc import Callable

from os_sim.config import Settings
from os_sim.shell import Shell

PROMPT = "os-sim $ "
_BANNER_WIDTH = 38


def format_banner(commands: list[str]) -> str:
    """Format the start-up banner listing the available commands."""
    border = "=" * _BANNER_WIDTH
    header = f"\n  {border}\n          OS Algorithm Simulator\n   page replacement & disk scheduling\n  {border}\n\n"
    return header + "Commands: " + ", ".join(commands) + "\nType 'exit' to quit.\n"


def _completer(shell: Shell) -> Callable[[str, int], str | None]:
    def complete(text: str, state: int) -> str | None:
        matches = [name for name in shell.commands if name.startswith(text)]
        return matches[state] if state < len(matches) else None

    return complete


def run() -> None:
    """Run the interactive REPL.

    This is the ``os-sim`` console entry point.  Ctrl+D and Ctrl+C both
    end the session cleanly.
    """
    shell = Shell(settings=Settings.from_env())

    readline.set_completer(_completer(shell))
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner(shell.commands))  # noqa: T201

    try:
        while True:
            try:
                command = input(PROMPT)
            except EOFError:
                # Ctrl+D — graceful exit
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result == Shell.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C — graceful exit
        print("\nInterrupted.")  # noqa: T201

    finally:
        print("Bye.")  # noqa: T201

"""OS algorithm simulator — page replacement and disk scheduling.

Re-exports the entry points so callers can write::

    from os_sim import run_memory_simulation, validate_memory_input
"""

from os_sim.simulator import (
    DiskStrategy,
    MemoryStrategy,
    run_disk_simulation,
    run_memory_simulation,
    simulate_disk_workload,
    simulate_memory_workload,
)
from os_sim.validation import (
    DiskWorkload,
    InvalidInputError,
    MemoryWorkload,
    Validation,
    validate_disk_input,
    validate_memory_input,
)

__version__ = "0.1.0"

__all__ = [
    "DiskStrategy",
    "DiskWorkload",
    "InvalidInputError",
    "MemoryStrategy",
    "MemoryWorkload",
    "Validation",
    "__version__",
    "run_disk_simulation",
    "run_memory_simulation",
    "simulate_disk_workload",
    "simulate_memory_workload",
    "validate_disk_input",
    "validate_memory_input",
]

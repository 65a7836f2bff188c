"""Runtime settings — read from ``OS_SIM_*`` environment variables.

The simulator itself needs no configuration: every run is a pure
function of its workload.  The outer layers (web server, shell, log
verbosity) do, and they read it from the process environment in the
usual Unix way:

    - ``OS_SIM_WEB_HOST`` / ``OS_SIM_WEB_PORT`` / ``OS_SIM_WEB_DEBUG``
    - ``OS_SIM_LOG_LEVEL`` — one of DEBUG, INFO, WARNING, ERROR.
    - ``OS_SIM_DIRECTION`` — default disk sweep direction, ``up`` or ``down``.

Values are strings in the environment; ``Settings.from_env`` converts
them and falls back to the default when a value does not parse.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from os_sim.logging import LogLevel

_ENV_PREFIX = "OS_SIM_"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class Settings:
    """Configuration for the shell and web front ends."""

    web_host: str = "127.0.0.1"
    web_port: int = 8080
    web_debug: bool = False
    log_level: LogLevel = LogLevel.INFO
    default_direction_up: bool = True

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from an environment mapping (default ``os.environ``).

        Args:
            env: Mapping of variable names to string values.

        Returns:
            Settings with every recognised variable applied.

        """
        source = os.environ if env is None else env
        defaults = cls()

        def get(name: str) -> str | None:
            value = source.get(_ENV_PREFIX + name)
            return value.strip() if value is not None else None

        port = defaults.web_port
        raw_port = get("WEB_PORT")
        if raw_port is not None and raw_port.isdigit():
            port = int(raw_port)

        log_level = defaults.log_level
        raw_level = get("LOG_LEVEL")
        if raw_level is not None and raw_level.upper() in LogLevel.__members__:
            log_level = LogLevel[raw_level.upper()]

        direction_up = defaults.default_direction_up
        raw_direction = get("DIRECTION")
        if raw_direction is not None and raw_direction.lower() in {"up", "down"}:
            direction_up = raw_direction.lower() == "up"

        raw_debug = get("WEB_DEBUG")
        return cls(
            web_host=get("WEB_HOST") or defaults.web_host,
            web_port=port,
            web_debug=raw_debug.lower() in _TRUTHY if raw_debug else defaults.web_debug,
            log_level=log_level,
            default_direction_up=direction_up,
        )

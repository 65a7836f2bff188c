"""Flask application factory for the simulator's JSON API.

The ``create_app`` function creates a shell (which owns the comparison
board and event log) and returns a Flask app whose endpoints validate
form-style text fields, run an engine and return the full trace as
JSON, ready for a front end to animate.
"""

from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify, request

from os_sim.config import Settings
from os_sim.disk import DiskResult
from os_sim.logging import LogLevel
from os_sim.memory import ClockState, LRUState, MemoryResult, MemoryStep
from os_sim.shell import Shell
from os_sim.simulator import (
    DiskStrategy,
    MemoryStrategy,
    simulate_disk_workload,
    simulate_memory_workload,
)
from os_sim.validation import validate_disk_input, validate_memory_input

_HTTP_BAD_REQUEST = 400


def _state_payload(state: LRUState | ClockState | None) -> dict[str, Any] | None:
    if isinstance(state, LRUState):
        return {"usage": list(state.usage)}
    if isinstance(state, ClockState):
        return {"ref_bits": list(state.ref_bits), "hand": state.hand}
    return None


def _step_payload(step: MemoryStep) -> dict[str, Any]:
    return {
        "reference": step.reference,
        "frames": list(step.frames_before),
        "frames_after": list(step.frames_after),
        "fault": step.fault,
        "replaced_frame": step.replaced_frame,
        "evicted_page": step.evicted_page,
        "reset": step.reset,
        "state": _state_payload(step.state_before),
        "state_after": _state_payload(step.state_after),
    }


def memory_payload(result: MemoryResult) -> dict[str, Any]:
    """Convert a page-replacement result to JSON-ready data."""
    return {
        "steps": [_step_payload(step) for step in result.steps],
        "faults": result.faults,
        "hits": result.hits,
    }


def disk_payload(result: DiskResult) -> dict[str, Any]:
    """Convert a disk-scheduling result to JSON-ready data."""
    return {
        "sequence": result.sequence,
        "seek_distance": result.seek_distance,
        "path": [
            {"index": s.index, "cylinder": s.cylinder, "distance": s.distance, "wrap": s.wrap}
            for s in result.path
        ],
    }


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _error(message: str) -> tuple[Response, int]:
    return jsonify({"error": message}), _HTTP_BAD_REQUEST


def create_app(settings: Settings | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        settings: Front-end settings; read from the environment if omitted.

    Returns:
        A configured Flask application ready to serve.

    """
    settings = settings or Settings.from_env()
    shell = Shell(settings=settings)
    logger = shell.logger

    app = Flask(__name__)

    @app.route("/api/memory", methods=["POST"])
    def memory() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run a page-replacement simulation.

        Expects JSON body: ``{"algorithm": "lru", "frames": "3", "references": "7 0 1"}``
        """
        data = _json_body()
        try:
            strategy = MemoryStrategy(str(data.get("algorithm", "lru")).lower())
        except ValueError:
            return _error(f"Unknown algorithm: {data.get('algorithm')}")

        validation = validate_memory_input(
            str(data.get("frames", "")),
            str(data.get("references", "")),
            logger=logger,
        )
        if not validation.valid:
            return _error(validation.message)

        result = simulate_memory_workload(strategy, validation.unwrap(), logger=logger)
        shell.board.record_memory(strategy, result)
        return jsonify({"algorithm": strategy.value, **memory_payload(result)})

    @app.route("/api/disk", methods=["POST"])
    def disk() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run a disk-scheduling simulation.

        Expects JSON body with ``algorithm``, ``cylinders``, ``head``,
        ``requests`` and an optional ``direction`` (``up`` or ``down``).
        """
        data = _json_body()
        try:
            strategy = DiskStrategy(str(data.get("algorithm", "look")).lower().replace("-", ""))
        except ValueError:
            return _error(f"Unknown algorithm: {data.get('algorithm')}")

        direction = str(data.get("direction", "up" if settings.default_direction_up else "down")).lower()
        if direction not in {"up", "down"}:
            return _error("Direction must be 'up' or 'down'")

        validation = validate_disk_input(
            str(data.get("cylinders", "")),
            str(data.get("head", "")),
            str(data.get("requests", "")),
            direction_up=direction == "up",
            logger=logger,
        )
        if not validation.valid:
            return _error(validation.message)

        workload = validation.unwrap()
        result = simulate_disk_workload(strategy, workload, logger=logger)
        shell.board.record_disk(strategy, result, cylinders=workload.cylinders)
        return jsonify({"algorithm": strategy.value, **disk_payload(result)})

    @app.route("/api/comparison")
    def comparison() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the latest summary per algorithm."""
        board = shell.board
        return jsonify(
            {
                "memory": [
                    {
                        "algorithm": row.strategy.value,
                        "faults": row.faults,
                        "hits": row.hits,
                        "fault_rate": row.fault_rate,
                    }
                    for row in board.memory_rows()
                ],
                "disk": [
                    {
                        "algorithm": row.strategy.value,
                        "seek_distance": row.seek_distance,
                        "cylinders": row.cylinders,
                        "efficiency": row.efficiency,
                    }
                    for row in board.disk_rows()
                ],
            }
        )

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a shell command and return JSON output.

        Expects JSON body: ``{"command": "..."}``
        """
        data = _json_body()
        if "command" not in data:
            return _error("Missing 'command' field")

        command = data["command"]
        if not isinstance(command, str):
            return _error("Field 'command' must be a string")
        logger.log(LogLevel.DEBUG, f"execute: {command}", source="web")
        result = shell.execute(command)
        if result == Shell.EXIT_SENTINEL:
            return jsonify({"output": "", "exit": True})
        return jsonify({"output": result, "exit": False})

    return app


def main() -> None:
    """Run the web API development server.

    This is the ``os-sim-web`` console entry point.
    """
    settings = Settings.from_env()
    app = create_app(settings)
    app.run(host=settings.web_host, port=settings.web_port, debug=settings.web_debug)

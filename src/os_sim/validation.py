"""Input validation — turn raw text fields into checked workloads.

Learners type their workloads into text boxes, so everything arrives as
strings.  Before an engine ever sees a workload it passes through here:

- **Memory** — a frame count (positive integer) and a reference string
  of whitespace-separated, non-negative page numbers.
- **Disk** — a cylinder count (positive integer), a head position in
  ``[0, cylinders - 1]`` and a comma-separated request queue whose values
  all lie in the same range.

The public ``validate_*`` functions never raise.  Each returns a
``Validation`` holding either the workload or a user-facing message
naming the field that failed and why.  Internally the parsers raise
``InvalidInputError`` and the boundary converts it, so an engine is
simply never invoked on bad input.
"""

import re
from dataclasses import dataclass
from typing import Generic, TypeVar

from os_sim.logging import Logger, LogLevel

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

MSG_FRAMES = "Number of frames must be a positive integer"
MSG_REFERENCE_REQUIRED = "Reference string is required"
MSG_REFERENCE_NUMERIC = "Reference string must contain only numbers separated by spaces"
MSG_REFERENCE_NEGATIVE = "Reference string must contain non-negative integers"
MSG_CYLINDERS = "Total cylinders must be a positive integer"
MSG_HEAD = "Head position must be a non-negative integer"
MSG_QUEUE_REQUIRED = "Request queue is required"
MSG_QUEUE_NUMERIC = "Request queue must contain only numbers separated by commas"


class InvalidInputError(ValueError):
    """Raise when a raw input field cannot become part of a workload."""


@dataclass(frozen=True)
class MemoryWorkload:
    """A checked page-replacement workload.

    Attributes:
        frame_count: Number of physical frames (at least 1).
        references: The page-reference trace (non-empty, non-negative).

    """

    frame_count: int
    references: tuple[int, ...]


@dataclass(frozen=True)
class DiskWorkload:
    """A checked disk-scheduling workload.

    Attributes:
        cylinders: Number of addressable cylinders (at least 1).
        start: Initial head position, in ``[0, cylinders - 1]``.
        requests: Cylinders to service, in arrival order.
        direction_up: True when the arm initially moves toward higher cylinders.

    """

    cylinders: int
    start: int
    requests: tuple[int, ...]
    direction_up: bool = True


T = TypeVar("T")


@dataclass(frozen=True)
class Validation(Generic[T]):
    """Outcome of validating one form: a workload or a rejection message."""

    workload: T | None = None
    message: str = ""

    @property
    def valid(self) -> bool:
        """Return True when a workload was produced."""
        return self.workload is not None

    def unwrap(self) -> T:
        """Return the workload, raising ``InvalidInputError`` if rejected."""
        if self.workload is None:
            raise InvalidInputError(self.message)
        return self.workload


def _is_integer(token: str) -> bool:
    return _INTEGER.fullmatch(token) is not None


def _is_number(token: str) -> bool:
    return _NUMBER.fullmatch(token) is not None


def _to_int(token: str, message: str) -> int:
    """Convert an integer *token*, or raise with *message*.

    Tokens past the interpreter's digit limit fail like any other bad token.
    """
    if not _is_integer(token):
        raise InvalidInputError(message)
    try:
        return int(token)
    except ValueError:
        raise InvalidInputError(message) from None


def _positive_int(text: str, message: str) -> int:
    """Parse *text* as a positive integer or raise with *message*."""
    value = _to_int(text.strip(), message)
    if value <= 0:
        raise InvalidInputError(message)
    return value


def parse_references(text: str) -> tuple[int, ...]:
    """Parse a whitespace-separated reference string.

    Raises:
        InvalidInputError: If the string is empty, holds a non-numeric
            token, or holds a negative or fractional value.

    """
    stripped = text.strip()
    if not stripped:
        raise InvalidInputError(MSG_REFERENCE_REQUIRED)
    tokens = stripped.split()
    if not all(_is_number(token) for token in tokens):
        raise InvalidInputError(MSG_REFERENCE_NUMERIC)
    pages = tuple(_to_int(token, MSG_REFERENCE_NEGATIVE) for token in tokens)
    if any(page < 0 for page in pages):
        raise InvalidInputError(MSG_REFERENCE_NEGATIVE)
    return pages


def parse_requests(text: str, *, cylinders: int) -> tuple[int, ...]:
    """Parse a comma-separated request queue against a cylinder range.

    Raises:
        InvalidInputError: If the queue is empty, holds a non-numeric
            token, or holds a value outside ``[0, cylinders - 1]``.

    """
    stripped = text.strip()
    if not stripped:
        raise InvalidInputError(MSG_QUEUE_REQUIRED)
    tokens = [token.strip() for token in stripped.split(",")]
    if not all(_is_number(token) for token in tokens):
        raise InvalidInputError(MSG_QUEUE_NUMERIC)
    msg = f"Request queue must contain integers between 0 and {cylinders - 1}"
    requests = tuple(_to_int(token, msg) for token in tokens)
    if not all(0 <= cylinder < cylinders for cylinder in requests):
        raise InvalidInputError(msg)
    return requests


def _reject(message: str, logger: Logger | None) -> Validation[T]:
    if logger is not None:
        logger.log(LogLevel.WARNING, message, source="validator")
    return Validation(message=message)


def validate_memory_input(
    frames_text: str,
    reference_text: str,
    *,
    logger: Logger | None = None,
) -> Validation[MemoryWorkload]:
    """Validate the memory form.

    Args:
        frames_text: Raw frame-count field.
        reference_text: Raw reference-string field.
        logger: Optional log that receives a WARNING per rejection.

    Returns:
        A ``Validation`` holding a ``MemoryWorkload`` or a message.

    """
    try:
        frame_count = _positive_int(frames_text, MSG_FRAMES)
        references = parse_references(reference_text)
    except InvalidInputError as exc:
        return _reject(str(exc), logger)
    return Validation(workload=MemoryWorkload(frame_count=frame_count, references=references))


def validate_disk_input(
    cylinders_text: str,
    head_text: str,
    queue_text: str,
    *,
    direction_up: bool = True,
    logger: Logger | None = None,
) -> Validation[DiskWorkload]:
    """Validate the disk form.

    Args:
        cylinders_text: Raw total-cylinders field.
        head_text: Raw head-position field.
        queue_text: Raw request-queue field.
        direction_up: Initial sweep direction to carry into the workload.
        logger: Optional log that receives a WARNING per rejection.

    Returns:
        A ``Validation`` holding a ``DiskWorkload`` or a message.

    """
    try:
        cylinders = _positive_int(cylinders_text, MSG_CYLINDERS)
        start = _to_int(head_text.strip(), MSG_HEAD)
        if start < 0:
            raise InvalidInputError(MSG_HEAD)
        if start >= cylinders:
            msg = f"Head position must be less than total cylinders (0-{cylinders - 1})"
            raise InvalidInputError(msg)
        requests = parse_requests(queue_text, cylinders=cylinders)
    except InvalidInputError as exc:
        return _reject(str(exc), logger)
    workload = DiskWorkload(
        cylinders=cylinders,
        start=start,
        requests=requests,
        direction_up=direction_up,
    )
    return Validation(workload=workload)


def format_references(workload: MemoryWorkload) -> str:
    """Render a workload's references in the accepted text encoding."""
    return " ".join(str(page) for page in workload.references)


def format_requests(workload: DiskWorkload) -> str:
    """Render a workload's request queue in the accepted text encoding."""
    return ", ".join(str(cylinder) for cylinder in workload.requests)

"""Travel requests and their lifecycle states."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RequestState(Enum):
    """Lifecycle of a single request.

    ``PENDING -> CONFIRMED | WAITLISTED`` during the live phase, then
    ``WAITLISTED -> CLEARED_BY_OWNER | STILL_UNRESOLVED`` during the
    partitioned phase. CONFIRMED, CLEARED_BY_OWNER and STILL_UNRESOLVED are
    terminal.
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    WAITLISTED = "waitlisted"
    CLEARED_BY_OWNER = "cleared_by_owner"
    STILL_UNRESOLVED = "still_unresolved"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset(
    {RequestState.CONFIRMED, RequestState.CLEARED_BY_OWNER, RequestState.STILL_UNRESOLVED}
)


@dataclass(frozen=True)
class Request:
    """A desired trip occupying segments ``[src, dst)`` on ``day``."""

    day: int
    src: int
    dst: int

    def __post_init__(self) -> None:
        if self.day < 0:
            raise ValueError("day must be >= 0")
        if self.src < 0:
            raise ValueError("src must be >= 0")
        if self.dst <= self.src:
            raise ValueError("dst must be > src")

    @property
    def segment_count(self) -> int:
        return self.dst - self.src


@dataclass(frozen=True)
class Assignment:
    """A request paired with the seat it was given."""

    request: Request
    seat: int

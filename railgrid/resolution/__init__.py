"""Resolution layer: parallel availability checks, seat assignment, batch resolution."""

from railgrid.resolution.assignment import assign_seat, find_seat
from railgrid.resolution.availability import AvailabilityChecker, is_available
from railgrid.resolution.resolver import ResolutionOutcome, resolve_one, resolve_requests

__all__ = [
    "AvailabilityChecker",
    "ResolutionOutcome",
    "assign_seat",
    "find_seat",
    "is_available",
    "resolve_one",
    "resolve_requests",
]

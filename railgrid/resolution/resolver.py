"""Batch request resolution: availability check followed by seat assignment."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from railgrid.domain.grid import OccupancyGrid
from railgrid.domain.request import Assignment, Request, RequestState
from railgrid.resolution.assignment import assign_seat
from railgrid.resolution.availability import AvailabilityChecker


@dataclass(frozen=True)
class ResolutionOutcome:
    """Result of resolving a batch in input order.

    ``states`` is aligned with the input batch. ``waitlist`` keeps the
    relative input order of the requests that could not be seated.
    """

    confirmed: tuple[Assignment, ...]
    waitlist: tuple[Request, ...]
    states: tuple[RequestState, ...]

    @property
    def confirmed_count(self) -> int:
        return len(self.confirmed)


def resolve_one(
    grid: OccupancyGrid, request: Request, checker: AvailabilityChecker
) -> int | None:
    """Check, then assign. Returns the seat, or None if nothing is free."""
    if not checker.is_available(grid, request.day, request.src, request.dst):
        return None
    seat = assign_seat(grid, request.day, request.src, request.dst)
    if seat is None:
        raise RuntimeError(
            f"availability check and assignment disagree for {request!r}"
        )
    return seat


def resolve_requests(
    grid: OccupancyGrid,
    requests: Sequence[Request],
    checker: AvailabilityChecker | None = None,
) -> ResolutionOutcome:
    """Resolve ``requests`` against ``grid`` in order, mutating the grid."""
    owns_checker = checker is None
    active_checker = checker or AvailabilityChecker(threads=1)

    confirmed: list[Assignment] = []
    waitlist: list[Request] = []
    states: list[RequestState] = []
    try:
        for request in requests:
            seat = resolve_one(grid, request, active_checker)
            if seat is None:
                waitlist.append(request)
                states.append(RequestState.WAITLISTED)
            else:
                confirmed.append(Assignment(request=request, seat=seat))
                states.append(RequestState.CONFIRMED)
    finally:
        if owns_checker:
            active_checker.close()

    return ResolutionOutcome(
        confirmed=tuple(confirmed),
        waitlist=tuple(waitlist),
        states=tuple(states),
    )

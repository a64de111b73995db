"""Tests for railgrid.resolution.resolver."""

from __future__ import annotations

import pytest

from railgrid.domain.grid import OccupancyGrid
from railgrid.domain.request import Request, RequestState
from railgrid.resolution.availability import AvailabilityChecker
from railgrid.resolution.resolver import resolve_requests


class _AlwaysAvailable:
    """Checker stub that claims availability regardless of the grid."""

    def is_available(self, grid: OccupancyGrid, day: int, src: int, dst: int) -> bool:
        return True

    def close(self) -> None:
        pass


class TestResolveRequests:
    def test_two_requests_share_two_seats(self) -> None:
        grid = OccupancyGrid.empty(days=1, seats=2, segments=2)
        requests = [Request(day=0, src=0, dst=2), Request(day=0, src=0, dst=1)]

        outcome = resolve_requests(grid, requests)

        assert outcome.confirmed_count == 2
        assert outcome.waitlist == ()
        assert [a.seat for a in outcome.confirmed] == [0, 1]
        assert grid.is_occupied(0, 0, 0) and grid.is_occupied(0, 0, 1)
        assert grid.is_occupied(0, 1, 0)
        assert not grid.is_occupied(0, 1, 1)

    def test_waitlist_preserves_input_order(self) -> None:
        grid = OccupancyGrid.empty(days=2, seats=2, segments=2)
        for seat in range(2):
            grid.occupy(1, seat, 0, 2)
        requests = [
            Request(day=0, src=0, dst=1),
            Request(day=1, src=0, dst=2),
            Request(day=0, src=1, dst=2),
            Request(day=1, src=0, dst=1),
            Request(day=0, src=0, dst=2),
        ]

        outcome = resolve_requests(grid, requests)

        assert outcome.waitlist == (requests[1], requests[3])
        assert outcome.confirmed_count == 3
        assert outcome.states == (
            RequestState.CONFIRMED,
            RequestState.WAITLISTED,
            RequestState.CONFIRMED,
            RequestState.WAITLISTED,
            RequestState.CONFIRMED,
        )
        assert [(a.request, a.seat) for a in outcome.confirmed] == [
            (requests[0], 0),
            (requests[2], 0),
            (requests[4], 1),
        ]

    def test_empty_batch(self) -> None:
        grid = OccupancyGrid.empty(days=1, seats=1, segments=1)
        outcome = resolve_requests(grid, [])
        assert outcome.confirmed_count == 0
        assert outcome.waitlist == ()
        assert outcome.states == ()

    def test_inconsistent_checker_raises(self) -> None:
        grid = OccupancyGrid.empty(days=1, seats=1, segments=1)
        grid.occupy(0, 0, 0, 1)
        with pytest.raises(RuntimeError, match="disagree"):
            resolve_requests(
                grid,
                [Request(day=0, src=0, dst=1)],
                checker=_AlwaysAvailable(),  # type: ignore[arg-type]
            )

    def test_caller_supplied_checker_stays_open(self) -> None:
        grid = OccupancyGrid.empty(days=1, seats=4, segments=2)
        with AvailabilityChecker(threads=2) as checker:
            resolve_requests(grid, [Request(day=0, src=0, dst=2)], checker=checker)
            assert checker._executor is not None
            outcome = resolve_requests(grid, [Request(day=0, src=0, dst=2)], checker=checker)
        assert [a.seat for a in outcome.confirmed] == [1]

"""Deterministic lowest-index seat assignment."""

from __future__ import annotations

import numpy as np

from railgrid.domain.grid import OccupancyGrid


def find_seat(grid: OccupancyGrid, day: int, src: int, dst: int) -> int | None:
    """Return the lowest seat index free on all of ``[src, dst)``, or None."""
    free_seats = np.flatnonzero(grid.free_seat_mask(day, src, dst))
    if free_seats.size == 0:
        return None
    return int(free_seats[0])


def assign_seat(grid: OccupancyGrid, day: int, src: int, dst: int) -> int | None:
    """Occupy the lowest-index seat whose whole range is free.

    Returns the seat index, or None when no seat qualifies. On None the grid
    is left untouched. Not safe to interleave with another assignment or an
    availability check on the same grid.
    """
    seat = find_seat(grid, day, src, dst)
    if seat is not None:
        grid.occupy(day, seat, src, dst)
    return seat

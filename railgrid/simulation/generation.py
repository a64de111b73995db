"""Seeded generators for requests, background bookings and cancellations.

These stand in for the outside world: they only produce requests or flip
grid cells, and all randomness comes from the ``random.Random`` passed in.
"""

from __future__ import annotations

from random import Random

from railgrid.config.types import NetworkConfig
from railgrid.domain.grid import OccupancyGrid
from railgrid.domain.request import Request
from railgrid.resolution.assignment import assign_seat


def random_request(network: NetworkConfig, rng: Random) -> Request:
    """Draw one request with a uniformly chosen day and origin."""
    day = rng.randrange(network.days)
    src = rng.randrange(network.stations - 1)
    dst = src + 1 + rng.randrange(network.stations - src - 1)
    return Request(day=day, src=src, dst=dst)


def generate_requests(network: NetworkConfig, n_requests: int, rng: Random) -> list[Request]:
    if n_requests < 0:
        raise ValueError("n_requests must be >= 0")
    return [random_request(network, rng) for _ in range(n_requests)]


def seed_background_bookings(grid: OccupancyGrid, n_bookings: int, rng: Random) -> int:
    """Place pre-existing long-haul bookings; returns how many found a seat.

    Origins come from the first half of the line and destinations from the
    second half, so background trips tend to cross the middle of the route.
    """
    if n_bookings < 0:
        raise ValueError("n_bookings must be >= 0")
    stations = grid.segments + 1
    split = stations // 2
    placed = 0
    for _ in range(n_bookings):
        day = rng.randrange(grid.days)
        src = rng.randrange(split)
        dst = split + rng.randrange(stations - split)
        if assign_seat(grid, day, src, dst) is not None:
            placed += 1
    return placed


def inject_cancellations(grid: OccupancyGrid, probability: float, rng: Random) -> int:
    """Free each occupied cell with ``probability``; returns the number freed.

    Cells are visited in (day, seat, segment) order so a given seed always
    frees the same cells.
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError("probability must be in [0.0, 1.0]")
    freed = 0
    for day, seat, segment in list(grid.occupied_cells()):
        if rng.random() < probability:
            grid.free(day, seat, segment)
            freed += 1
    return freed


"""Domain layer: occupancy grid, requests and request lifecycle states."""

from railgrid.domain.grid import OccupancyGrid
from railgrid.domain.request import Assignment, Request, RequestState

__all__ = [
    "Assignment",
    "OccupancyGrid",
    "Request",
    "RequestState",
]

"""Dense day x seat x segment occupancy grid.

``cells[d, s, g]`` is True when seat ``s`` is occupied on segment ``g`` of day
``d``. All index arithmetic lives in this module; callers address cells by
(day, seat, segment) and never flatten indices themselves.

The grid carries no locking. Exactly one writer may hold a given instance at a
time; the distributed phase works on independent copies.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from railgrid.config.types import NetworkConfig


class OccupancyGrid:
    """Boolean occupancy array with bounds-checked accessors."""

    def __init__(self, cells: np.ndarray) -> None:
        if cells.ndim != 3:
            raise ValueError("cells must be a 3-dimensional (day, seat, segment) array")
        if cells.dtype != np.bool_:
            raise ValueError("cells must have boolean dtype")
        self._cells = cells

    @classmethod
    def empty(cls, days: int, seats: int, segments: int) -> OccupancyGrid:
        """Return a zero-initialized grid."""
        if days < 1 or seats < 1 or segments < 1:
            raise ValueError("grid dimensions must be >= 1")
        return cls(np.zeros((days, seats, segments), dtype=np.bool_))

    @classmethod
    def for_network(cls, network: NetworkConfig) -> OccupancyGrid:
        return cls.empty(network.days, network.seats, network.segments)

    # -------- shape --------

    @property
    def days(self) -> int:
        return int(self._cells.shape[0])

    @property
    def seats(self) -> int:
        return int(self._cells.shape[1])

    @property
    def segments(self) -> int:
        return int(self._cells.shape[2])

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.days, self.seats, self.segments)

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the underlying array."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    # -------- bounds --------

    def _check_day(self, day: int) -> None:
        if not 0 <= day < self.days:
            raise IndexError(f"day {day} out of range [0, {self.days})")

    def _check_seat(self, seat: int) -> None:
        if not 0 <= seat < self.seats:
            raise IndexError(f"seat {seat} out of range [0, {self.seats})")

    def _check_segment(self, segment: int) -> None:
        if not 0 <= segment < self.segments:
            raise IndexError(f"segment {segment} out of range [0, {self.segments})")

    def _check_range(self, src: int, dst: int) -> None:
        if not 0 <= src < dst <= self.segments:
            raise IndexError(
                f"segment range [{src}, {dst}) invalid for {self.segments} segments"
            )

    # -------- queries --------

    def is_occupied(self, day: int, seat: int, segment: int) -> bool:
        self._check_day(day)
        self._check_seat(seat)
        self._check_segment(segment)
        return bool(self._cells[day, seat, segment])

    def is_range_free(self, day: int, seat: int, src: int, dst: int) -> bool:
        """True when ``seat`` is free on every segment of ``[src, dst)``."""
        self._check_day(day)
        self._check_seat(seat)
        self._check_range(src, dst)
        return not self._cells[day, seat, src:dst].any()

    def free_seat_mask(self, day: int, src: int, dst: int) -> np.ndarray:
        """Boolean mask over seats: True where the whole range is free."""
        self._check_day(day)
        self._check_range(src, dst)
        return ~self._cells[day, :, src:dst].any(axis=1)

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def occupied_cells(self) -> Iterable[tuple[int, int, int]]:
        """Yield (day, seat, segment) of every occupied cell in index order."""
        for day, seat, segment in np.argwhere(self._cells):
            yield int(day), int(seat), int(segment)

    # -------- mutation --------

    def occupy(self, day: int, seat: int, src: int, dst: int) -> None:
        """Mark every segment of ``[src, dst)`` occupied for ``seat`` on ``day``."""
        self._check_day(day)
        self._check_seat(seat)
        self._check_range(src, dst)
        self._cells[day, seat, src:dst] = True

    def free(self, day: int, seat: int, segment: int) -> None:
        """Clear a single cell."""
        self._check_day(day)
        self._check_seat(seat)
        self._check_segment(segment)
        self._cells[day, seat, segment] = False

    # -------- copies and merging --------

    def copy(self) -> OccupancyGrid:
        """Deep copy; the returned grid shares no memory with this one."""
        return OccupancyGrid(self._cells.copy())

    def merged_with(self, other: OccupancyGrid) -> OccupancyGrid:
        """Element-wise logical OR of two grids of identical shape."""
        if other.shape != self.shape:
            raise ValueError(f"cannot merge grids of shape {self.shape} and {other.shape}")
        return OccupancyGrid(np.logical_or(self._cells, other._cells))

    def to_bytes(self) -> bytes:
        return self._cells.tobytes()

    def digest(self) -> str:
        """SHA-256 over shape and contents; equal grids share a digest."""
        hasher = hashlib.sha256(repr(self.shape).encode())
        hasher.update(self.to_bytes())
        return hasher.hexdigest()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OccupancyGrid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._cells, other._cells))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"OccupancyGrid(days={self.days}, seats={self.seats}, "
            f"segments={self.segments}, occupied={self.occupied_count()})"
        )

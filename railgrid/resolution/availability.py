"""Parallel availability search across the seat dimension.

A query fans out over contiguous seat chunks on a thread pool. Every task
reads the grid only; the shared ``found`` flag is a ``threading.Event`` that
moves from unset to set at most once per query, so overlapping writers are
harmless. Tasks that start after the flag is set return immediately.

The checker answers only whether some seat is free. Picking the seat is the
job of :func:`railgrid.resolution.assignment.assign_seat`, which must not run
until the check for the same request has returned.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, wait

from railgrid.config.constants import AVAILABILITY_THREADS
from railgrid.domain.grid import OccupancyGrid


def _seat_chunks(seats: int, n_chunks: int) -> list[range]:
    """Split ``range(seats)`` into at most ``n_chunks`` contiguous, non-empty ranges."""
    n_chunks = max(1, min(n_chunks, seats))
    size, extra = divmod(seats, n_chunks)
    chunks: list[range] = []
    start = 0
    for i in range(n_chunks):
        stop = start + size + (1 if i < extra else 0)
        chunks.append(range(start, stop))
        start = stop
    return chunks


def _scan_chunk(
    grid: OccupancyGrid,
    day: int,
    src: int,
    dst: int,
    seats: range,
    found: threading.Event,
) -> None:
    for seat in seats:
        if found.is_set():
            return
        if grid.is_range_free(day, seat, src, dst):
            found.set()
            return


class AvailabilityChecker:
    """Answers "is any seat free for this trip?" using a fixed-size thread pool.

    Use as a context manager, or call :meth:`close` when done. With
    ``threads=1`` the scan runs inline and no pool is created.
    """

    def __init__(self, threads: int = AVAILABILITY_THREADS) -> None:
        if threads < 1:
            raise ValueError("threads must be >= 1")
        self.threads = threads
        self._executor: ThreadPoolExecutor | None = None

    def __enter__(self) -> AvailabilityChecker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def _pool(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.threads, thread_name_prefix="availability"
            )
        return self._executor

    def is_available(self, grid: OccupancyGrid, day: int, src: int, dst: int) -> bool:
        """True iff at least one seat is free on every segment of ``[src, dst)``."""
        found = threading.Event()
        chunks = _seat_chunks(grid.seats, self.threads)
        if len(chunks) == 1:
            _scan_chunk(grid, day, src, dst, chunks[0], found)
            return found.is_set()

        futures = [
            self._pool().submit(_scan_chunk, grid, day, src, dst, chunk, found)
            for chunk in chunks
        ]
        wait(futures)
        for future in futures:
            # Re-raise precondition violations from worker threads
            future.result()
        return found.is_set()


def is_available(grid: OccupancyGrid, day: int, src: int, dst: int) -> bool:
    """Single-threaded convenience wrapper around :class:`AvailabilityChecker`."""
    return AvailabilityChecker(threads=1).is_available(grid, day, src, dst)

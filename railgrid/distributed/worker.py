"""Per-worker resolution of the owned slice of a replicated waitlist."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from railgrid.distributed.partition import owned_indices
from railgrid.domain.grid import OccupancyGrid
from railgrid.domain.request import Request
from railgrid.resolution.availability import AvailabilityChecker
from railgrid.resolution.resolver import resolve_one


@dataclass(frozen=True)
class PartitionOutcome:
    """What one worker did with the requests it owns.

    Indices refer to positions in the replicated waitlist. Requests that
    still fail are dropped; there is no second waitlist round.
    """

    owned: tuple[int, ...]
    cleared: tuple[tuple[int, int], ...]
    """``(waitlist_index, seat)`` for every request seated by this worker."""

    @property
    def cleared_count(self) -> int:
        return len(self.cleared)

    @property
    def unresolved(self) -> tuple[int, ...]:
        seated = {index for index, _ in self.cleared}
        return tuple(index for index in self.owned if index not in seated)


def resolve_partition(
    worker_id: int,
    worker_count: int,
    local_grid: OccupancyGrid,
    waitlist: Sequence[Request],
    checker: AvailabilityChecker | None = None,
) -> PartitionOutcome:
    """Resolve the owned requests of ``waitlist`` in order against ``local_grid``.

    Only ``local_grid`` is mutated. Requests owned by other workers are not
    read beyond their ``day``.
    """
    owned = owned_indices(waitlist, worker_id, worker_count)
    owns_checker = checker is None
    active_checker = checker or AvailabilityChecker(threads=1)

    cleared: list[tuple[int, int]] = []
    try:
        for index in owned:
            seat = resolve_one(local_grid, waitlist[index], active_checker)
            if seat is not None:
                cleared.append((index, seat))
    finally:
        if owns_checker:
            active_checker.close()

    return PartitionOutcome(owned=owned, cleared=tuple(cleared))


def resolve_owned(
    worker_id: int,
    worker_count: int,
    local_grid: OccupancyGrid,
    waitlist: Sequence[Request],
    checker: AvailabilityChecker | None = None,
) -> int:
    """Resolve this worker's share of the waitlist; return how many were cleared."""
    return resolve_partition(
        worker_id, worker_count, local_grid, waitlist, checker=checker
    ).cleared_count

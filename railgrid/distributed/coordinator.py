"""Replication of the authoritative state to workers and OR-reduction back.

The live phase owns a single grid. :func:`replicate` ends that phase by
handing every worker its own deep copy of the grid plus the full waitlist.
Workers then run independently with no shared memory, and :func:`reduce_grids`
merges their grids cell by cell with logical OR. Cancellations only happen
before replication and workers only set cells, so OR is the correct merge and
the order in which workers are combined does not matter.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from functools import reduce

from railgrid.config.constants import AVAILABILITY_THREADS
from railgrid.config.logging import get_logger
from railgrid.config.types import WorkerBackend
from railgrid.distributed.partition import validate_topology
from railgrid.distributed.worker import PartitionOutcome, resolve_partition
from railgrid.domain.grid import OccupancyGrid
from railgrid.domain.request import Request
from railgrid.resolution.availability import AvailabilityChecker

logger = get_logger(__name__)


@dataclass(frozen=True)
class Replica:
    """The starting state delivered to one worker."""

    worker_id: int
    worker_count: int
    grid: OccupancyGrid
    waitlist: tuple[Request, ...]
    availability_threads: int = AVAILABILITY_THREADS


@dataclass(frozen=True)
class WorkerReport:
    """A worker's final grid together with its partition outcome."""

    worker_id: int
    grid: OccupancyGrid
    outcome: PartitionOutcome
    elapsed_seconds: float

    @property
    def cleared_count(self) -> int:
        return self.outcome.cleared_count


@dataclass(frozen=True)
class DistributedOutcome:
    """Merged grid and per-worker reports, ordered by worker id."""

    grid: OccupancyGrid
    reports: tuple[WorkerReport, ...]

    @property
    def cleared_per_worker(self) -> tuple[int, ...]:
        return tuple(report.cleared_count for report in self.reports)


def replicate(
    grid: OccupancyGrid,
    waitlist: Sequence[Request],
    worker_count: int,
    availability_threads: int = AVAILABILITY_THREADS,
) -> list[Replica]:
    """Give every worker an identical, independent copy of grid and waitlist."""
    if worker_count < 1:
        raise ValueError("worker_count must be >= 1")
    frozen_waitlist = tuple(waitlist)
    return [
        Replica(
            worker_id=worker_id,
            worker_count=worker_count,
            grid=grid.copy(),
            waitlist=frozen_waitlist,
            availability_threads=availability_threads,
        )
        for worker_id in range(worker_count)
    ]


def reduce_grids(grids: Sequence[OccupancyGrid]) -> OccupancyGrid:
    """Merge grids with element-wise logical OR into a new grid."""
    if not grids:
        raise ValueError("at least one grid is required")
    return reduce(OccupancyGrid.merged_with, grids[1:], grids[0].copy())


def run_replica(replica: Replica) -> WorkerReport:
    """Worker entrypoint: resolve the owned partition on the replica's private grid.

    Module-level so it can be shipped to a process pool.
    """
    validate_topology(replica.worker_id, replica.worker_count)
    started = time.perf_counter()
    with AvailabilityChecker(threads=replica.availability_threads) as checker:
        outcome = resolve_partition(
            replica.worker_id,
            replica.worker_count,
            replica.grid,
            replica.waitlist,
            checker=checker,
        )
    return WorkerReport(
        worker_id=replica.worker_id,
        grid=replica.grid,
        outcome=outcome,
        elapsed_seconds=time.perf_counter() - started,
    )


def _run_replicas(replicas: list[Replica], backend: WorkerBackend) -> list[WorkerReport]:
    if backend is WorkerBackend.SERIAL:
        return [run_replica(replica) for replica in replicas]
    with ProcessPoolExecutor(max_workers=len(replicas)) as executor:
        futures = [executor.submit(run_replica, replica) for replica in replicas]
        # Blocks until every worker has contributed; failures propagate
        return [future.result() for future in futures]


def run_distributed_phase(
    grid: OccupancyGrid,
    waitlist: Sequence[Request],
    worker_count: int,
    backend: WorkerBackend = WorkerBackend.PROCESS,
    availability_threads: int = AVAILABILITY_THREADS,
) -> DistributedOutcome:
    """Replicate, resolve every partition independently, then OR-reduce.

    ``grid`` itself is not mutated; the merged result is a new grid.
    """
    replicas = replicate(grid, waitlist, worker_count, availability_threads)
    reports = sorted(_run_replicas(replicas, backend), key=lambda report: report.worker_id)
    for report in reports:
        logger.info(
            "worker_partition_resolved",
            worker_id=report.worker_id,
            owned=len(report.outcome.owned),
            cleared=report.cleared_count,
            elapsed_seconds=round(report.elapsed_seconds, 6),
        )
    merged = reduce_grids([report.grid for report in reports])
    return DistributedOutcome(grid=merged, reports=tuple(reports))

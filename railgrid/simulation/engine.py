"""End-to-end simulation: live phase on one owner, then the partitioned phase.

Phases, in order:

1. background bookings are placed on an empty grid
2. customer requests are resolved live, producing confirmations and a waitlist
3. cancellations free a random subset of occupied segments
4. grid and waitlist are replicated to every worker, each worker resolves the
   days it owns on its private copy, and the copies are OR-reduced
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from random import Random

from railgrid.config.logging import get_logger
from railgrid.config.types import SimulationConfig, SimulationResult
from railgrid.distributed.coordinator import WorkerReport, run_distributed_phase
from railgrid.domain.grid import OccupancyGrid
from railgrid.domain.request import Request, RequestState
from railgrid.resolution.availability import AvailabilityChecker
from railgrid.resolution.resolver import ResolutionOutcome, resolve_requests
from railgrid.simulation.generation import (
    generate_requests,
    inject_cancellations,
    seed_background_bookings,
)
from railgrid.simulation.persistence import write_run_artifacts

logger = get_logger(__name__)


@dataclass(frozen=True)
class RequestRecord:
    """Terminal outcome of one customer request."""

    index: int
    request: Request
    state: RequestState
    seat: int | None = None
    worker_id: int | None = None
    """Owning worker, set for every request that reached the waitlist."""


@dataclass(frozen=True)
class SimulationRun:
    """Everything a run produces: counters, merged grid and per-request outcomes."""

    result: SimulationResult
    grid: OccupancyGrid
    records: tuple[RequestRecord, ...]
    reports: tuple[WorkerReport, ...]


def _build_records(
    requests: list[Request],
    live: ResolutionOutcome,
    reports: tuple[WorkerReport, ...],
) -> tuple[RequestRecord, ...]:
    confirmed_positions = [
        i for i, state in enumerate(live.states) if state is RequestState.CONFIRMED
    ]
    waitlist_positions = [
        i for i, state in enumerate(live.states) if state is RequestState.WAITLISTED
    ]

    records: dict[int, RequestRecord] = {}
    for position, assignment in zip(confirmed_positions, live.confirmed, strict=True):
        records[position] = RequestRecord(
            index=position,
            request=requests[position],
            state=RequestState.CONFIRMED,
            seat=assignment.seat,
        )
    for report in reports:
        for waitlist_index, seat in report.outcome.cleared:
            position = waitlist_positions[waitlist_index]
            records[position] = RequestRecord(
                index=position,
                request=requests[position],
                state=RequestState.CLEARED_BY_OWNER,
                seat=seat,
                worker_id=report.worker_id,
            )
        for waitlist_index in report.outcome.unresolved:
            position = waitlist_positions[waitlist_index]
            records[position] = RequestRecord(
                index=position,
                request=requests[position],
                state=RequestState.STILL_UNRESOLVED,
                worker_id=report.worker_id,
            )

    if len(records) != len(requests):
        raise RuntimeError(
            f"{len(requests) - len(records)} requests have no terminal outcome"
        )
    return tuple(records[i] for i in range(len(requests)))


def run_simulation(config: SimulationConfig, out_dir: Path | None = None) -> SimulationRun:
    """Run every phase for ``config`` and optionally persist Parquet artifacts."""
    network = config.network
    rng = Random(config.seed)
    started = time.perf_counter()

    grid = OccupancyGrid.for_network(network)
    background = seed_background_bookings(grid, config.n_background_bookings, rng)
    requests = generate_requests(network, config.n_requests, rng)

    with AvailabilityChecker(threads=config.availability_threads) as checker:
        live = resolve_requests(grid, requests, checker=checker)
    logger.info(
        "live_phase_complete",
        confirmed=live.confirmed_count,
        waitlisted=len(live.waitlist),
        background_bookings=background,
    )

    cancelled = inject_cancellations(grid, config.cancellation_probability, rng)
    logger.info("cancellations_injected", segments_freed=cancelled)

    distributed = run_distributed_phase(
        grid,
        live.waitlist,
        config.n_workers,
        backend=config.backend,
        availability_threads=config.availability_threads,
    )
    records = _build_records(requests, live, distributed.reports)
    runtime = time.perf_counter() - started

    result = SimulationResult(
        seed=config.seed,
        n_workers=config.n_workers,
        background_bookings=background,
        live_confirmed=live.confirmed_count,
        waitlisted=len(live.waitlist),
        cancelled_segments=cancelled,
        cleared_per_worker=distributed.cleared_per_worker,
        still_unresolved=sum(
            1 for record in records if record.state is RequestState.STILL_UNRESOLVED
        ),
        final_occupied=distributed.grid.occupied_count(),
        runtime_seconds=runtime,
    )
    logger.info(
        "simulation_complete",
        final_occupied=result.final_occupied,
        total_cleared=result.total_cleared,
        runtime_seconds=round(runtime, 6),
    )

    run = SimulationRun(
        result=result,
        grid=distributed.grid,
        records=records,
        reports=distributed.reports,
    )
    if out_dir is not None:
        write_run_artifacts(run, network, Path(out_dir))
    return run

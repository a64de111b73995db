"""Parquet persistence for single-run artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pyarrow as pa
import pyarrow.parquet as pq

from railgrid.io.paths import (
    final_occupancy_path,
    logs_dir,
    request_outcomes_path,
    run_summary_path,
    worker_reports_path,
)
from railgrid.io.schemas import (
    OCCUPANCY_SCHEMA,
    REQUEST_OUTCOME_SCHEMA,
    RUN_ARTIFACT_SCHEMA_VERSION,
    RUN_SUMMARY_SCHEMA,
    WORKER_REPORT_SCHEMA,
)

if TYPE_CHECKING:
    from railgrid.config.types import NetworkConfig
    from railgrid.simulation.engine import SimulationRun


def _write(rows: list[dict[str, object]], schema: pa.Schema, path: Path) -> None:
    pq.write_table(pa.Table.from_pylist(rows, schema=schema), path)


def write_run_artifacts(run: SimulationRun, network: NetworkConfig, out_dir: Path) -> Path:
    """Persist summary, worker, request and occupancy tables; return the logs dir."""
    out_dir = Path(out_dir)
    target = logs_dir(out_dir)
    target.mkdir(parents=True, exist_ok=True)

    result = run.result
    _write(
        [
            {
                "schema_version": RUN_ARTIFACT_SCHEMA_VERSION,
                "seed": result.seed,
                "n_workers": result.n_workers,
                "days": network.days,
                "stations": network.stations,
                "seats": network.seats,
                "background_bookings": result.background_bookings,
                "live_confirmed": result.live_confirmed,
                "waitlisted": result.waitlisted,
                "cancelled_segments": result.cancelled_segments,
                "total_cleared": result.total_cleared,
                "still_unresolved": result.still_unresolved,
                "final_occupied": result.final_occupied,
                "runtime_seconds": result.runtime_seconds,
            }
        ],
        RUN_SUMMARY_SCHEMA,
        run_summary_path(out_dir),
    )

    _write(
        [
            {
                "worker_id": report.worker_id,
                "owned": len(report.outcome.owned),
                "cleared": report.cleared_count,
                "unresolved": len(report.outcome.unresolved),
                "occupied_after": report.grid.occupied_count(),
                "elapsed_seconds": report.elapsed_seconds,
            }
            for report in run.reports
        ],
        WORKER_REPORT_SCHEMA,
        worker_reports_path(out_dir),
    )

    _write(
        [
            {
                "request_index": record.index,
                "day": record.request.day,
                "src": record.request.src,
                "dst": record.request.dst,
                "state": record.state.value,
                "seat": record.seat,
                "worker_id": record.worker_id,
            }
            for record in run.records
        ],
        REQUEST_OUTCOME_SCHEMA,
        request_outcomes_path(out_dir),
    )

    _write(
        [
            {"day": day, "seat": seat, "segment": segment}
            for day, seat, segment in run.grid.occupied_cells()
        ],
        OCCUPANCY_SCHEMA,
        final_occupancy_path(out_dir),
    )
    return target

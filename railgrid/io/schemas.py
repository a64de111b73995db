"""Parquet schema definitions for simulation artifacts.

All Arrow schemas used for persisting run summaries, worker reports, request
outcomes, final occupancy and worker sweeps are centralised here so that every
module works against the same column contracts.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

RUN_ARTIFACT_SCHEMA_VERSION = 1
WORKER_SWEEP_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Single-run schemas
# ---------------------------------------------------------------------------

RUN_SUMMARY_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("seed", pa.int64()),
        ("n_workers", pa.int64()),
        ("days", pa.int64()),
        ("stations", pa.int64()),
        ("seats", pa.int64()),
        ("background_bookings", pa.int64()),
        ("live_confirmed", pa.int64()),
        ("waitlisted", pa.int64()),
        ("cancelled_segments", pa.int64()),
        ("total_cleared", pa.int64()),
        ("still_unresolved", pa.int64()),
        ("final_occupied", pa.int64()),
        ("runtime_seconds", pa.float64()),
    ]
)

WORKER_REPORT_SCHEMA = pa.schema(
    [
        ("worker_id", pa.int64()),
        ("owned", pa.int64()),
        ("cleared", pa.int64()),
        ("unresolved", pa.int64()),
        ("occupied_after", pa.int64()),
        ("elapsed_seconds", pa.float64()),
    ]
)

REQUEST_OUTCOME_SCHEMA = pa.schema(
    [
        ("request_index", pa.int64()),
        ("day", pa.int64()),
        ("src", pa.int64()),
        ("dst", pa.int64()),
        ("state", pa.string()),
        ("seat", pa.int64()),
        ("worker_id", pa.int64()),
    ]
)

OCCUPANCY_SCHEMA = pa.schema(
    [
        ("day", pa.int64()),
        ("seat", pa.int64()),
        ("segment", pa.int64()),
    ]
)

# ---------------------------------------------------------------------------
# Worker sweep schema
# ---------------------------------------------------------------------------

WORKER_SWEEP_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("seed", pa.int64()),
        ("n_workers", pa.int64()),
        ("live_confirmed", pa.int64()),
        ("waitlisted", pa.int64()),
        ("total_cleared", pa.int64()),
        ("still_unresolved", pa.int64()),
        ("final_occupied", pa.int64()),
        ("grid_digest", pa.string()),
        ("runtime_seconds", pa.float64()),
    ]
)

"""Simulation layer: seeded generators, end-to-end engine and Parquet persistence."""

from railgrid.simulation.engine import RequestRecord, SimulationRun, run_simulation
from railgrid.simulation.generation import (
    generate_requests,
    inject_cancellations,
    random_request,
    seed_background_bookings,
)
from railgrid.simulation.persistence import write_run_artifacts

__all__ = [
    "RequestRecord",
    "SimulationRun",
    "generate_requests",
    "inject_cancellations",
    "random_request",
    "run_simulation",
    "seed_background_bookings",
    "write_run_artifacts",
]

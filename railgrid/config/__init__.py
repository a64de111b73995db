"""Configuration layer: constants, typed config dataclasses and logging setup."""

from railgrid.config.constants import (
    AVAILABILITY_THREADS,
    BACKGROUND_BOOKINGS,
    CANCELLATION_PROBABILITY,
    DAYS,
    DEFAULT_WORKERS,
    SEATS,
    STATIONS,
    TOTAL_REQUESTS,
)
from railgrid.config.types import (
    NetworkConfig,
    SimulationConfig,
    SimulationResult,
    SweepConfig,
    WorkerBackend,
)

__all__ = [
    "AVAILABILITY_THREADS",
    "BACKGROUND_BOOKINGS",
    "CANCELLATION_PROBABILITY",
    "DAYS",
    "DEFAULT_WORKERS",
    "NetworkConfig",
    "SEATS",
    "STATIONS",
    "SimulationConfig",
    "SimulationResult",
    "SweepConfig",
    "TOTAL_REQUESTS",
    "WorkerBackend",
]

"""Configuration dataclasses and result containers for simulation runs.

All frozen dataclasses that parameterise a network, a single simulation run
and a worker-count sweep live here. Validation happens in ``__post_init__`` so
a malformed config never reaches the resolution code.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path

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

__all__ = [
    "NetworkConfig",
    "SimulationConfig",
    "SimulationResult",
    "SweepConfig",
    "WorkerBackend",
]


class WorkerBackend(Enum):
    """Execution backend for the partitioned phase."""

    PROCESS = "process"
    SERIAL = "serial"


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NetworkConfig:
    """Dimensions of the occupancy grid."""

    days: int = DAYS
    stations: int = STATIONS
    seats: int = SEATS

    def __post_init__(self) -> None:
        if self.days < 1:
            raise ValueError("days must be >= 1")
        if self.stations < 2:
            raise ValueError("stations must be >= 2")
        if self.seats < 1:
            raise ValueError("seats must be >= 1")

    @property
    def segments(self) -> int:
        """Number of track segments between adjacent stations."""
        return self.stations - 1


@dataclass(frozen=True)
class SimulationConfig:
    """Runtime parameters for one end-to-end simulation run."""

    network: NetworkConfig = field(default_factory=NetworkConfig)
    n_requests: int = TOTAL_REQUESTS
    n_background_bookings: int = BACKGROUND_BOOKINGS
    cancellation_probability: float = CANCELLATION_PROBABILITY
    n_workers: int = DEFAULT_WORKERS
    availability_threads: int = AVAILABILITY_THREADS
    backend: WorkerBackend = WorkerBackend.PROCESS
    seed: int = 0

    def __post_init__(self) -> None:
        if self.n_requests < 0:
            raise ValueError("n_requests must be >= 0")
        if self.n_background_bookings < 0:
            raise ValueError("n_background_bookings must be >= 0")
        if not 0.0 <= self.cancellation_probability <= 1.0:
            raise ValueError("cancellation_probability must be in [0.0, 1.0]")
        if self.n_workers < 1:
            raise ValueError("n_workers must be >= 1")
        if self.availability_threads < 1:
            raise ValueError("availability_threads must be >= 1")


@dataclass(frozen=True)
class SweepConfig:
    """Settings for re-running one seeded simulation under several worker counts."""

    base: SimulationConfig
    worker_counts: tuple[int, ...] = (1, 2, 4)
    out_dir: Path = Path("data/worker_sweep")

    def __post_init__(self) -> None:
        if not self.worker_counts:
            raise ValueError("worker_counts must not be empty")
        if any(count < 1 for count in self.worker_counts):
            raise ValueError("worker_counts values must be >= 1")
        if len(set(self.worker_counts)) != len(self.worker_counts):
            raise ValueError("worker_counts must include distinct values")


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationResult:
    """Top-level counters for one simulation run."""

    seed: int
    n_workers: int
    background_bookings: int
    live_confirmed: int
    waitlisted: int
    cancelled_segments: int
    cleared_per_worker: tuple[int, ...]
    still_unresolved: int
    final_occupied: int
    runtime_seconds: float

    @property
    def total_cleared(self) -> int:
        return sum(self.cleared_per_worker)

    def to_summary(self) -> dict[str, object]:
        """Return a JSON-friendly dict of all counters."""
        summary = asdict(self)
        summary["cleared_per_worker"] = list(self.cleared_per_worker)
        summary["total_cleared"] = self.total_cleared
        return summary

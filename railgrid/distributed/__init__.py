"""Distributed layer: day partitioning, per-worker resolution, replicate and reduce."""

from railgrid.distributed.coordinator import (
    DistributedOutcome,
    Replica,
    WorkerReport,
    reduce_grids,
    replicate,
    run_distributed_phase,
    run_replica,
)
from railgrid.distributed.partition import (
    owned_indices,
    owned_requests,
    owner,
    validate_topology,
)
from railgrid.distributed.worker import PartitionOutcome, resolve_owned, resolve_partition

__all__ = [
    "DistributedOutcome",
    "PartitionOutcome",
    "Replica",
    "WorkerReport",
    "owned_indices",
    "owned_requests",
    "owner",
    "reduce_grids",
    "replicate",
    "resolve_owned",
    "resolve_partition",
    "run_distributed_phase",
    "run_replica",
]

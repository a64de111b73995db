"""Experiments layer: worker-count sweeps and the command-line entrypoint."""

from railgrid.experiments.sweep import run_worker_sweep

__all__ = [
    "run_worker_sweep",
]

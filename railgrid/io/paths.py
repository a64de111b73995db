"""Path construction helpers for simulation output directories."""

from __future__ import annotations

from pathlib import Path


def resolve_within_base(path: Path, base_dir: Path) -> Path:
    """Resolve *path* and ensure it stays within the trusted *base_dir*.

    Raises :exc:`ValueError` if the resolved path escapes the base directory.
    """
    candidate = path if path.is_absolute() else base_dir / path
    resolved = candidate.resolve()
    base_resolved = base_dir.resolve()
    if resolved != base_resolved and base_resolved not in resolved.parents:
        raise ValueError(f"Path escapes base_dir: {path}")
    return resolved


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def run_summary_path(out_dir: Path) -> Path:
    return logs_dir(out_dir) / "run_summary.parquet"


def worker_reports_path(out_dir: Path) -> Path:
    return logs_dir(out_dir) / "worker_reports.parquet"


def request_outcomes_path(out_dir: Path) -> Path:
    return logs_dir(out_dir) / "request_outcomes.parquet"


def final_occupancy_path(out_dir: Path) -> Path:
    return logs_dir(out_dir) / "final_occupancy.parquet"


def worker_sweep_path(out_dir: Path) -> Path:
    return logs_dir(out_dir) / "worker_sweep.parquet"


def workers_out_dir(out_dir: Path, n_workers: int) -> Path:
    """Return path to the per-worker-count output subdirectory of a sweep."""
    return out_dir / f"workers_{n_workers}"

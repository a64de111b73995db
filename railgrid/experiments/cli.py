"""CLI entrypoint for simulation runs and worker-count sweeps.

Configuration precedence is CLI flag > JSON config file (``--config``) >
built-in default. A JSON summary is printed to stdout; structured logs go to
stderr.
"""

from __future__ import annotations

import argparse
import json
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
from railgrid.config.logging import setup_logging
from railgrid.config.types import NetworkConfig, SimulationConfig, SweepConfig, WorkerBackend
from railgrid.experiments.sweep import run_worker_sweep
from railgrid.simulation.engine import run_simulation
from railgrid.viz.render import render_occupancy

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _parse_positive_int_csv(raw_values: str, label: str) -> tuple[int, ...]:
    """Parse comma-delimited positive integers."""
    parts = [part.strip() for part in raw_values.split(",") if part.strip()]
    if not parts:
        raise ValueError(f"{label} must not be empty")

    values: list[int] = []
    for part in parts:
        try:
            value = int(part)
        except ValueError as exc:
            raise ValueError(f"{label} must contain integers") from exc
        if value < 1:
            raise ValueError(f"{label} values must be >= 1")
        values.append(value)
    return tuple(values)


def _parse_backend(raw_backend: str) -> WorkerBackend:
    """Parse worker backend from CLI/config."""
    try:
        return WorkerBackend(raw_backend)
    except ValueError as exc:
        valid = ", ".join(backend.value for backend in WorkerBackend)
        raise ValueError(f"backend must be one of {valid}") from exc


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a float value")
    if isinstance(raw, (int, float, str)):
        return float(raw)
    raise ValueError(f"{key} must be a float value")


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_bool(cli_val: bool | None, key: str, file_cfg: dict[str, object], default: bool) -> bool:
    return _coerce_bool(_get_val(cli_val, key, file_cfg, default), key)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_float(
    cli_val: float | None, key: str, file_cfg: dict[str, object], default: float
) -> float:
    return _coerce_float(_get_val(cli_val, key, file_cfg, default), key)


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    return _coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Simulate train reservations with partitioned waitlist resolution"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--days", type=int, default=None)
    parser.add_argument("--stations", type=int, default=None)
    parser.add_argument("--seats", type=int, default=None)
    parser.add_argument("--requests", type=int, default=None)
    parser.add_argument("--background-bookings", type=int, default=None)
    parser.add_argument("--cancellation-probability", type=float, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--availability-threads", type=int, default=None)
    parser.add_argument(
        "--backend",
        type=str,
        choices=[backend.value for backend in WorkerBackend],
        default=None,
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--worker-sweep",
        type=str,
        default=None,
        help="Comma-separated worker counts; runs the same seed under each",
    )
    parser.add_argument(
        "--render",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Save an occupancy heatmap of the merged grid",
    )
    parser.add_argument("--log-level", type=str, default=None)
    parser.add_argument("--log-json", action=argparse.BooleanOptionalAction, default=None)
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for a single run or a worker-count sweep."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    setup_logging(
        level=_get_str(args.log_level, "log_level", file_cfg, "INFO"),
        json_output=_get_bool(args.log_json, "log_json", file_cfg, False),
    )

    out_dir = Path(_get_str(args.out_dir, "out_dir", file_cfg, "data"))
    render = _get_bool(args.render, "render", file_cfg, False)
    worker_sweep_raw = _get_val(args.worker_sweep, "worker_sweep", file_cfg, None)

    try:
        config = SimulationConfig(
            network=NetworkConfig(
                days=_get_int(args.days, "days", file_cfg, DAYS),
                stations=_get_int(args.stations, "stations", file_cfg, STATIONS),
                seats=_get_int(args.seats, "seats", file_cfg, SEATS),
            ),
            n_requests=_get_int(args.requests, "requests", file_cfg, TOTAL_REQUESTS),
            n_background_bookings=_get_int(
                args.background_bookings, "background_bookings", file_cfg, BACKGROUND_BOOKINGS
            ),
            cancellation_probability=_get_float(
                args.cancellation_probability,
                "cancellation_probability",
                file_cfg,
                CANCELLATION_PROBABILITY,
            ),
            n_workers=_get_int(args.workers, "workers", file_cfg, DEFAULT_WORKERS),
            availability_threads=_get_int(
                args.availability_threads, "availability_threads", file_cfg, AVAILABILITY_THREADS
            ),
            backend=_parse_backend(
                _get_str(args.backend, "backend", file_cfg, WorkerBackend.PROCESS.value)
            ),
            seed=_get_int(args.seed, "seed", file_cfg, 0),
        )
        sweep_config = (
            SweepConfig(
                base=config,
                worker_counts=_parse_positive_int_csv(
                    _coerce_str(worker_sweep_raw, "worker_sweep"), "worker-sweep"
                ),
                out_dir=out_dir,
            )
            if worker_sweep_raw is not None
            else None
        )
    except ValueError as exc:
        parser.error(str(exc))

    if sweep_config is not None:
        results = run_worker_sweep(sweep_config)
        summary: dict[str, object] = {
            "mode": "worker_sweep",
            "seed": config.seed,
            "worker_counts": list(sweep_config.worker_counts),
            "runs": [result.to_summary() for result in results],
            "final_occupied_consistent": len({r.final_occupied for r in results}) == 1,
        }
    else:
        run = run_simulation(config, out_dir=out_dir)
        summary = {"mode": "single", **run.result.to_summary()}
        if render:
            summary["occupancy_plot"] = str(
                render_occupancy(run.grid, out_dir / "occupancy.png")
            )
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()

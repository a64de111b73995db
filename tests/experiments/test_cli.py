"""Tests for the railgrid command-line entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

from railgrid.config.types import WorkerBackend  # noqa: E402
from railgrid.experiments.cli import (  # noqa: E402
    _coerce_bool,
    _coerce_int,
    _parse_backend,
    _parse_positive_int_csv,
    main,
)

SMALL_RUN = [
    "--days",
    "3",
    "--stations",
    "4",
    "--seats",
    "2",
    "--requests",
    "20",
    "--background-bookings",
    "4",
    "--backend",
    "serial",
    "--availability-threads",
    "1",
]


def _run(capsys: pytest.CaptureFixture[str], argv: list[str]) -> dict[str, object]:
    main(argv)
    return json.loads(capsys.readouterr().out)


class TestParsingHelpers:
    def test_positive_int_csv(self) -> None:
        assert _parse_positive_int_csv("1, 2,4", "worker-sweep") == (1, 2, 4)

    @pytest.mark.parametrize("raw", ["", "1,x", "0,2"])
    def test_positive_int_csv_rejects_bad_values(self, raw: str) -> None:
        with pytest.raises(ValueError, match="worker-sweep"):
            _parse_positive_int_csv(raw, "worker-sweep")

    def test_parse_backend(self) -> None:
        assert _parse_backend("serial") is WorkerBackend.SERIAL
        with pytest.raises(ValueError, match="backend must be one of"):
            _parse_backend("threads")

    def test_coerce_bool_rejects_unknown_strings(self) -> None:
        assert _coerce_bool("yes", "render") is True
        with pytest.raises(ValueError, match="render"):
            _coerce_bool("maybe", "render")

    def test_coerce_int_rejects_fractional_floats(self) -> None:
        assert _coerce_int(3.0, "seats") == 3
        with pytest.raises(ValueError, match="seats"):
            _coerce_int(2.5, "seats")


class TestMain:
    def test_single_run_prints_summary(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        summary = _run(capsys, [*SMALL_RUN, "--workers", "2", "--out-dir", str(tmp_path)])
        assert summary["mode"] == "single"
        assert summary["n_workers"] == 2
        assert summary["live_confirmed"] + summary["waitlisted"] == 20  # type: ignore[operator]
        assert (tmp_path / "logs" / "run_summary.parquet").exists()

    def test_cli_flags_override_config_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"requests": 12, "workers": 2, "seed": 5, "backend": "serial"})
        )
        summary = _run(
            capsys,
            [
                "--config",
                str(config_path),
                "--workers",
                "3",
                "--seats",
                "2",
                "--out-dir",
                str(tmp_path / "out"),
            ],
        )
        assert summary["n_workers"] == 3
        assert summary["seed"] == 5
        assert summary["live_confirmed"] + summary["waitlisted"] == 12  # type: ignore[operator]

    def test_render_writes_occupancy_plot(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        summary = _run(capsys, [*SMALL_RUN, "--out-dir", str(tmp_path), "--render"])
        assert Path(str(summary["occupancy_plot"])).exists()

    def test_worker_sweep_mode(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        summary = _run(
            capsys, [*SMALL_RUN, "--worker-sweep", "1,3", "--out-dir", str(tmp_path)]
        )
        assert summary["mode"] == "worker_sweep"
        assert summary["worker_counts"] == [1, 3]
        assert summary["final_occupied_consistent"] is True
        assert (tmp_path / "logs" / "worker_sweep.parquet").exists()

    def test_zero_workers_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main([*SMALL_RUN, "--workers", "0", "--out-dir", str(tmp_path)])

    def test_missing_config_file_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["--config", str(tmp_path / "missing.json")])

    def test_invalid_json_config_exits(self, tmp_path: Path) -> None:
        config_path = tmp_path / "bad.json"
        config_path.write_text("{not json")
        with pytest.raises(SystemExit):
            main(["--config", str(config_path)])

    def test_logs_do_not_pollute_stdout(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main([*SMALL_RUN, "--out-dir", str(tmp_path), "--log-level", "DEBUG"])
        captured = capsys.readouterr()
        json.loads(captured.out)
        assert "simulation_complete" in captured.err

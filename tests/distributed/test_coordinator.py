"""Tests for railgrid.distributed.coordinator: replicate, reduce and the full phase."""

from __future__ import annotations

import itertools

import numpy as np
import pytest

from railgrid.config.types import WorkerBackend
from railgrid.distributed.coordinator import (
    reduce_grids,
    replicate,
    run_distributed_phase,
    run_replica,
)
from railgrid.domain.grid import OccupancyGrid
from railgrid.domain.request import Request


def _random_grid(seed: int, shape: tuple[int, int, int] = (3, 4, 5)) -> OccupancyGrid:
    rng = np.random.default_rng(seed)
    return OccupancyGrid(rng.random(shape) < 0.3)


def _waitlist() -> list[Request]:
    return [
        Request(day=0, src=0, dst=3),
        Request(day=1, src=1, dst=4),
        Request(day=2, src=0, dst=5),
        Request(day=1, src=0, dst=2),
        Request(day=0, src=2, dst=5),
        Request(day=2, src=3, dst=4),
        Request(day=0, src=0, dst=5),
    ]


class TestReplicate:
    def test_every_worker_gets_identical_state(self) -> None:
        grid = _random_grid(0)
        waitlist = _waitlist()
        replicas = replicate(grid, waitlist, worker_count=3)

        assert [r.worker_id for r in replicas] == [0, 1, 2]
        for replica in replicas:
            assert replica.worker_count == 3
            assert replica.grid.to_bytes() == grid.to_bytes()
            assert replica.waitlist == tuple(waitlist)

    def test_replicas_share_no_grid_memory(self) -> None:
        grid = OccupancyGrid.empty(days=1, seats=2, segments=2)
        replicas = replicate(grid, [], worker_count=2)
        replicas[0].grid.occupy(0, 0, 0, 2)
        assert grid.occupied_count() == 0
        assert replicas[1].grid.occupied_count() == 0

    def test_zero_workers_rejected(self) -> None:
        with pytest.raises(ValueError, match="worker_count"):
            replicate(OccupancyGrid.empty(1, 1, 1), [], worker_count=0)


class TestReduceGrids:
    def test_merging_a_grid_with_itself_is_identity(self) -> None:
        grid = _random_grid(1)
        assert reduce_grids([grid, grid]) == grid

    def test_order_of_workers_does_not_matter(self) -> None:
        grids = [_random_grid(seed) for seed in range(4)]
        expected = reduce_grids(grids)
        for permutation in itertools.permutations(grids):
            assert reduce_grids(list(permutation)) == expected

    def test_cell_occupied_iff_occupied_in_some_input(self) -> None:
        grids = [_random_grid(seed) for seed in range(3)]
        merged = reduce_grids(grids)
        expected = np.logical_or.reduce([g.cells for g in grids])
        assert np.array_equal(merged.cells, expected)

    def test_single_worker_result_is_a_copy(self) -> None:
        grid = OccupancyGrid.empty(days=1, seats=1, segments=2)
        merged = reduce_grids([grid])
        assert merged == grid
        merged.occupy(0, 0, 0, 2)
        assert grid.occupied_count() == 0

    def test_inputs_are_not_mutated(self) -> None:
        grids = [_random_grid(seed) for seed in range(3)]
        snapshots = [g.copy() for g in grids]
        reduce_grids(grids)
        assert grids == snapshots

    def test_empty_input_rejected(self) -> None:
        with pytest.raises(ValueError, match="at least one"):
            reduce_grids([])

    def test_shape_mismatch_rejected(self) -> None:
        with pytest.raises(ValueError, match="shape"):
            reduce_grids([OccupancyGrid.empty(1, 1, 1), OccupancyGrid.empty(1, 2, 1)])


class TestRunDistributedPhase:
    def test_source_grid_is_not_mutated(self) -> None:
        grid = _random_grid(3)
        before = grid.copy()
        run_distributed_phase(grid, _waitlist(), 2, backend=WorkerBackend.SERIAL)
        assert grid == before

    @pytest.mark.parametrize("worker_count", [2, 3, 5])
    def test_partitioned_result_matches_single_worker(self, worker_count: int) -> None:
        grid = _random_grid(4)
        single = run_distributed_phase(grid, _waitlist(), 1, backend=WorkerBackend.SERIAL)
        split = run_distributed_phase(
            grid, _waitlist(), worker_count, backend=WorkerBackend.SERIAL
        )
        assert split.grid == single.grid
        assert sum(split.cleared_per_worker) == sum(single.cleared_per_worker)
        assert len(split.reports) == worker_count

    def test_each_worker_touches_only_owned_days(self) -> None:
        grid = OccupancyGrid.empty(days=3, seats=1, segments=5)
        outcome = run_distributed_phase(grid, _waitlist(), 3, backend=WorkerBackend.SERIAL)
        for report in outcome.reports:
            touched_days = {day for day, _, _ in report.grid.occupied_cells()}
            assert touched_days <= {report.worker_id}

    def test_process_backend_matches_serial(self) -> None:
        grid = _random_grid(5)
        serial = run_distributed_phase(grid, _waitlist(), 2, backend=WorkerBackend.SERIAL)
        parallel = run_distributed_phase(
            grid, _waitlist(), 2, backend=WorkerBackend.PROCESS, availability_threads=2
        )
        assert parallel.grid == serial.grid
        assert parallel.cleared_per_worker == serial.cleared_per_worker
        assert [r.worker_id for r in parallel.reports] == [0, 1]

    def test_run_replica_reports_cleared_indices(self) -> None:
        grid = OccupancyGrid.empty(days=3, seats=1, segments=5)
        (replica,) = replicate(grid, _waitlist(), worker_count=1, availability_threads=1)
        report = run_replica(replica)
        # One seat per day: later requests overlap the first one seated on their day
        assert [index for index, _ in report.outcome.cleared] == [0, 1, 2]
        assert report.outcome.unresolved == (3, 4, 5, 6)

"""Tests for river hydrology."""

import numpy as np
from structlog.testing import capture_logs

from burghgen.config import RiverConfig
from burghgen.state import TerrainGrid
from burghgen.terrain.carving import is_far_enough, random_edge_point, same_edge
from burghgen.terrain.river import (
    carve_diverging_branch,
    carve_loop_branch,
    generate_river,
    pick_river_endpoints,
)
from burghgen.terrain_types import UNASSIGNED, WATER
from burghgen.types import make_rng


class TestPickRiverEndpoints:
    """Tests for endpoint selection."""

    def test_endpoints_valid(self) -> None:
        """Endpoints sit on different edges and far apart."""
        for seed in range(20):
            endpoints = pick_river_endpoints(64, 48, make_rng(seed), 1000)
            assert endpoints is not None
            start, end = endpoints
            assert not same_edge(start, end, 64, 48)
            assert is_far_enough(start, end, 64, 48)

    def test_impossible_map_gives_none(self) -> None:
        """A single cell is on every edge at once."""
        assert pick_river_endpoints(1, 1, make_rng(0), 50) is None


class TestGenerateRiver:
    """Tests for generate_river."""

    def test_start_cell_is_water(self) -> None:
        grid = TerrainGrid(64, 64)
        generate_river(grid, 7)

        start, _ = pick_river_endpoints(64, 64, make_rng(7), 1000)
        assert grid.get(*start) == WATER

    def test_only_water_written(self) -> None:
        """Rivers write water and leave the rest unassigned."""
        grid = TerrainGrid(64, 64)
        generate_river(grid, 3)
        values = set(np.unique(grid.cells).tolist())
        assert values == {WATER, UNASSIGNED}

    def test_no_coastal_output(self) -> None:
        result = generate_river(TerrainGrid(32, 32), 1)
        assert result.coastal_water == []
        assert result.coastal_sand == []
        assert result.harbor_anchor is None

    def test_deterministic(self) -> None:
        a, b = TerrainGrid(96, 64), TerrainGrid(96, 64)
        generate_river(a, 2024)
        generate_river(b, 2024)
        np.testing.assert_array_equal(a.cells, b.cells)

    def test_single_cell_map_skipped(self) -> None:
        grid = TerrainGrid(1, 1)
        generate_river(grid, 5)
        assert grid.get(0, 0) == UNASSIGNED


class TestLoopBranch:
    """Tests for carve_loop_branch."""

    def test_loop_on_long_path(self) -> None:
        grid = TerrainGrid(50, 10)
        path = [(x, 5) for x in range(40)]
        assert carve_loop_branch(grid, path, make_rng(1), 2, RiverConfig())
        assert grid.count(WATER) > 0


class TestDivergingBranch:
    """Tests for carve_diverging_branch."""

    def test_branch_leaves_by_another_edge(self) -> None:
        grid = TerrainGrid(40, 40)
        # Main path hugging the left edge, clear of the corners
        path = [(0, y) for y in range(10, 30)]

        replay = make_rng(4)
        source = path[10 + int(replay.integers(10))]
        exit_point = random_edge_point(40, 40, replay)
        while same_edge(source, exit_point, 40, 40):
            exit_point = random_edge_point(40, 40, replay)

        # Radius 3 reaches the exit from the last stamped cell
        assert carve_diverging_branch(grid, path, make_rng(4), 4, RiverConfig())

        assert exit_point[0] != 0
        assert grid.get(*source) == WATER
        assert grid.get(*exit_point) == WATER
        border = np.concatenate([grid.cells[0, 1:], grid.cells[-1, 1:], grid.cells[:, -1]])
        assert (border == WATER).any()

    def test_no_other_edge_skipped(self) -> None:
        """On a one-column map every cell shares the left and right edges."""
        grid = TerrainGrid(1, 40)
        path = [(0, y) for y in range(30)]
        with capture_logs() as logs:
            assert not carve_diverging_branch(
                grid, path, make_rng(2), 2, RiverConfig(endpoint_attempts=5)
            )
        assert [entry["event"] for entry in logs] == ["river_branch_skipped"]
        assert grid.count(WATER) == 0

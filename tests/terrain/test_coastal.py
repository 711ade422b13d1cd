"""Tests for shoreline detection."""

import numpy as np

from burghgen.state import TerrainGrid
from burghgen.terrain.coastal import (
    add_sand_buffer,
    coastline_mask,
    detect_coastal_sand,
    detect_coastal_water,
    lake_edge,
    mask_to_points,
    water_touching_sand,
)
from burghgen.terrain_types import GRASS, SAND, UNASSIGNED, WATER


class TestSandBuffer:
    """Tests for add_sand_buffer."""

    def test_corner_water(self) -> None:
        """Water in a corner gets three sand neighbors."""
        grid = TerrainGrid(6, 6)
        grid.set(0, 0, WATER)
        assert add_sand_buffer(grid) == 3
        assert grid.get(1, 0) == SAND
        assert grid.get(0, 1) == SAND
        assert grid.get(1, 1) == SAND
        assert grid.get(2, 2) == UNASSIGNED

    def test_keeps_assigned_cells(self) -> None:
        grid = TerrainGrid(3, 3)
        grid.set(1, 1, WATER)
        grid.set(0, 0, GRASS)
        assert add_sand_buffer(grid) == 7
        assert grid.get(0, 0) == GRASS


class TestCoastalLists:
    """Tests for coastal water and sand detection."""

    def test_coastal_water_and_sand(self) -> None:
        grid = TerrainGrid(5, 1)
        grid.cells[0, :] = [WATER, WATER, SAND, UNASSIGNED, UNASSIGNED]
        assert detect_coastal_water(grid) == [(1, 0)]
        assert detect_coastal_sand(grid) == [(2, 0)]
        assert water_touching_sand(grid) == [(1, 0)]

    def test_unassigned_is_not_land(self) -> None:
        """Water next to unassigned cells is not coastal."""
        grid = TerrainGrid(3, 3)
        grid.set(1, 1, WATER)
        assert detect_coastal_water(grid) == []

    def test_row_major_order(self) -> None:
        mask = np.zeros((3, 3), dtype=bool)
        mask[0, 2] = mask[1, 0] = mask[2, 1] = True
        assert mask_to_points(mask) == [(2, 0), (0, 1), (1, 2)]


class TestLakeEdge:
    """Tests for lake_edge."""

    def test_ring_around_island(self) -> None:
        grid = TerrainGrid(5, 5)
        grid.cells[:, :] = WATER
        grid.set(2, 2, GRASS)
        assert lake_edge(grid) == [(2, 1), (1, 2), (3, 2), (2, 3)]

    def test_all_water_has_no_edge(self) -> None:
        grid = TerrainGrid(6, 6)
        grid.cells[:, :] = WATER
        assert lake_edge(grid) == []

    def test_tiny_grid(self) -> None:
        grid = TerrainGrid(2, 2)
        grid.cells[:, :] = WATER
        assert lake_edge(grid) == []


class TestCoastlineMask:
    """Tests for coastline_mask."""

    def test_only_four_neighbors(self) -> None:
        """Diagonal sand does not make water coastline."""
        cells = np.array(
            [
                [WATER, GRASS, GRASS],
                [GRASS, SAND, WATER],
            ],
            dtype=np.uint8,
        )
        mask = coastline_mask(cells)
        assert not mask[0, 0]
        assert mask[1, 2]
        assert mask.sum() == 1

"""Tests for seaside hydrology."""

import math

import numpy as np
import pytest
from structlog.testing import capture_logs

from burghgen.config import RiverConfig, SeasideConfig
from burghgen.state import TerrainGrid
from burghgen.terrain.carving import random_edge_point
from burghgen.terrain.coastal import touching, water_touching_sand
from burghgen.terrain.seaside import (
    COAST_LAYOUTS,
    CoastDirection,
    MINOR_FEATURE_BOUNDS,
    HarborTarget,
    add_capes,
    add_inlets,
    carve_harbor,
    carve_seaside_river,
    direction_away_from_land,
    direction_away_from_water,
    fill_coast,
    find_harbor_anchor,
    generate_seaside,
    minor_feature_count,
)
from burghgen.terrain_types import GRASS, SAND, UNASSIGNED, WATER
from burghgen.types import make_rng


class TestCoastLayouts:
    """Tests for the direction class table."""

    def test_all_classes_present(self) -> None:
        assert sorted(COAST_LAYOUTS) == list(range(8))

    def test_corner_classes_fill_two_edges(self) -> None:
        for coast_class in range(4, 8):
            first, second = COAST_LAYOUTS[coast_class]
            assert first.is_horizontal
            assert not second.is_horizontal


class TestFillCoast:
    """Tests for fill_coast."""

    def test_flat_top_coast(self) -> None:
        """A zero wave reaches base * depth cells in."""
        water = np.zeros((20, 30), dtype=bool)
        target = HarborTarget()
        fill_coast(water, CoastDirection.TOP, 10, 0.0, 0.0, target, SeasideConfig())

        assert water[:7].all()
        assert not water[7:].any()
        # A zero wave never beats the initial best
        assert target.direction is None

    def test_right_coast_at_crest(self) -> None:
        water = np.zeros((20, 30), dtype=bool)
        target = HarborTarget()
        fill_coast(water, CoastDirection.RIGHT, 10, 0.0, math.pi / 2, target, SeasideConfig())

        assert water[:, -9:].all()
        assert not water[:, :-10].any()
        assert target.direction == CoastDirection.RIGHT
        assert target.axis == 0

    def test_bottom_and_left(self) -> None:
        water = np.zeros((10, 10), dtype=bool)
        target = HarborTarget()
        config = SeasideConfig()
        fill_coast(water, CoastDirection.BOTTOM, 5, 0.0, 0.0, target, config)
        fill_coast(water, CoastDirection.LEFT, 5, 0.0, 0.0, target, config)

        # int(5 * 0.7) = 3
        assert water[7:].all()
        assert not water[:7, 3:].any()
        assert water[:, :3].all()


class TestHarborTarget:
    """Tests for HarborTarget.offer."""

    def test_strictly_greater_magnitude(self) -> None:
        target = HarborTarget()
        target.offer(0.5, 3, CoastDirection.TOP)
        target.offer(-0.5, 9, CoastDirection.LEFT)
        assert (target.axis, target.direction) == (3, CoastDirection.TOP)

        target.offer(-0.8, 9, CoastDirection.LEFT)
        assert (target.axis, target.direction) == (9, CoastDirection.LEFT)
        assert target.wave == -0.8


class TestHarborAnchor:
    """Tests for find_harbor_anchor."""

    def test_nearest_to_axis_then_edge(self) -> None:
        target = HarborTarget(1.0, 5, CoastDirection.TOP)
        anchor = find_harbor_anchor([(5, 3), (5, 2), (4, 1)], target, 20, 10)
        assert anchor == (5, 2)

    def test_bottom_prefers_cells_near_bottom_edge(self) -> None:
        target = HarborTarget(1.0, 5, CoastDirection.BOTTOM)
        assert find_harbor_anchor([(5, 3), (5, 8)], target, 20, 10) == (5, 8)

    def test_left_and_right_use_y_axis(self) -> None:
        left = HarborTarget(1.0, 4, CoastDirection.LEFT)
        assert find_harbor_anchor([(2, 9), (3, 4), (1, 5)], left, 20, 10) == (3, 4)
        right = HarborTarget(1.0, 4, CoastDirection.RIGHT)
        assert find_harbor_anchor([(17, 4), (18, 4)], right, 20, 10) == (18, 4)

    def test_first_wins_ties(self) -> None:
        target = HarborTarget(1.0, 5, CoastDirection.TOP)
        assert find_harbor_anchor([(4, 2), (6, 2)], target, 20, 10) == (4, 2)

    def test_no_candidates(self) -> None:
        assert find_harbor_anchor([], HarborTarget(1.0, 5, CoastDirection.TOP), 20, 10) is None
        assert find_harbor_anchor([(1, 1)], HarborTarget(), 20, 10) is None


class TestCarveHarbor:
    """Tests for carve_harbor."""

    def test_half_disc_on_land_side(self, rng: np.random.Generator) -> None:
        grid = TerrainGrid(20, 20)
        grid.cells[:, :] = GRASS
        radius = carve_harbor(grid, (10, 5), CoastDirection.TOP, rng, SeasideConfig())

        assert radius in (3, 4)
        assert grid.get(10, 4) == GRASS
        assert grid.get(10, 5) == WATER
        assert grid.get(10, 5 + radius) == WATER
        assert grid.get(10 + radius, 5) == WATER
        assert grid.get(10 - radius, 5) == WATER
        assert grid.get(10, 5 + radius + 1) == GRASS

    def test_right_coast_opens_to_the_left(self, rng: np.random.Generator) -> None:
        grid = TerrainGrid(20, 20)
        grid.cells[:, :] = GRASS
        radius = carve_harbor(grid, (15, 10), CoastDirection.RIGHT, rng, SeasideConfig())

        assert grid.get(15 - radius, 10) == WATER
        assert grid.get(16, 10) == GRASS

    def test_clipped_near_border(self, rng: np.random.Generator) -> None:
        grid = TerrainGrid(6, 6)
        grid.cells[:, :] = GRASS
        carve_harbor(grid, (0, 0), CoastDirection.LEFT, rng, SeasideConfig())
        assert grid.get(0, 0) == WATER


class TestFeatureHelpers:
    """Tests for cape and inlet helpers."""

    def test_minor_feature_count_small_map(self, rng: np.random.Generator) -> None:
        for _ in range(50):
            assert 0 <= minor_feature_count(64, rng) < 4

    def test_direction_away_from_water(self) -> None:
        grid = TerrainGrid(5, 5)
        grid.cells[:, :] = WATER
        grid.set(2, 3, SAND)
        # E, W, then S is the first dry neighbor
        assert direction_away_from_water(grid, 2, 2) == (0, 1)

    def test_no_dry_neighbor(self) -> None:
        grid = TerrainGrid(3, 3)
        grid.cells[:, :] = WATER
        assert direction_away_from_water(grid, 1, 1) is None

    def test_direction_away_from_land_open_sea(self) -> None:
        grid = TerrainGrid(9, 9)
        grid.cells[:, :] = WATER
        assert direction_away_from_land(grid, 4, 4) == (1, 0)

    def test_direction_away_from_land_skips_shore(self) -> None:
        """East sees the grass column, so west is the first clear heading."""
        grid = TerrainGrid(9, 9)
        grid.cells[:, :] = WATER
        grid.cells[:, 6] = GRASS
        assert direction_away_from_land(grid, 4, 4) == (-1, 0)

    def test_unassigned_is_not_land(self) -> None:
        grid = TerrainGrid(9, 9)
        grid.cells[:, :] = WATER
        grid.cells[:, 6] = UNASSIGNED
        assert direction_away_from_land(grid, 4, 4) == (1, 0)

    def test_no_heading_beside_land(self) -> None:
        grid = TerrainGrid(3, 3)
        grid.cells[:, :] = WATER
        grid.set(1, 1, GRASS)
        assert direction_away_from_land(grid, 1, 1) is None


def shore_grid() -> TerrainGrid:
    """64x64 grid with sea in the top half and grass below."""
    grid = TerrainGrid(64, 64)
    grid.cells[:32] = WATER
    grid.cells[32:] = GRASS
    return grid


class TestCapes:
    """Tests for add_capes."""

    def test_cape_grows_sand_out_to_sea(self, rng: np.random.Generator) -> None:
        grid = shore_grid()
        assert add_capes(grid, [(10, 31)], rng, 1) == 1

        assert grid.get(10, 31) == SAND
        # Heading north, the first three moves each climb a row
        assert (grid.cells[:29] == SAND).any()
        assert set(np.unique(grid.cells[:32]).tolist()) == {WATER, SAND}

    def test_count_limits_capes(self, rng: np.random.Generator) -> None:
        coastal = [(x, 31) for x in (8, 20, 32, 44, 56)]
        before = sorted(coastal)
        assert add_capes(shore_grid(), coastal, rng, 2) == 2
        # Shuffled in place, same cells
        assert sorted(coastal) == before

    def test_landlocked_cell_skipped(self, rng: np.random.Generator) -> None:
        grid = TerrainGrid(64, 64)
        grid.cells[:, :] = GRASS
        grid.set(5, 5, WATER)
        assert add_capes(grid, [(5, 5)], rng, 1) == 0
        assert grid.count(SAND) == 0


class TestInlets:
    """Tests for add_inlets."""

    def test_inlet_cuts_inland_with_sand_border(self, rng: np.random.Generator) -> None:
        grid = TerrainGrid(64, 64)
        grid.cells[:, :] = GRASS
        grid.cells[:21] = WATER
        # Water east and west, so the first dry heading is south
        grid.set(30, 20, SAND)
        sea = grid.mask(WATER)

        assert add_inlets(grid, [(30, 20)], rng, 1) == 1

        assert grid.get(30, 20) == WATER
        assert grid.get(30, 21) == WATER
        assert (grid.cells[22:] == WATER).any()

        carved = grid.mask(WATER) & ~sea
        ring = touching(carved) & ~grid.mask(WATER)
        assert ring.any()
        assert (grid.cells[ring] == SAND).all()

    def test_no_dry_heading_skipped(self, rng: np.random.Generator) -> None:
        grid = TerrainGrid(3, 3)
        grid.cells[:, :] = WATER
        grid.set(1, 1, SAND)
        assert add_inlets(grid, [(1, 1)], rng, 1) == 0
        assert grid.get(1, 1) == SAND


class TestFeatureSplit:
    """Capes and inlets share one minor feature count."""

    @pytest.mark.parametrize("width,seed", [(64, 11), (64, 99), (128, 5)])
    def test_capes_and_inlets_add_up(self, width: int, seed: int) -> None:
        # Replay the draws made before the feature count
        rng = make_rng(seed)
        rng.integers(8)
        rng.random()
        rng.random()
        rng.random()
        expected = minor_feature_count(width, rng)

        with capture_logs() as logs:
            generate_seaside(TerrainGrid(width, width), seed)
        shaped = next(entry for entry in logs if entry["event"] == "seaside_shaped")

        assert shaped["capes"] + shaped["inlets"] == expected
        assert 0 <= expected < MINOR_FEATURE_BOUNDS[width]


def coast_with_beach() -> TerrainGrid:
    """40x40 grid: sea above row 10, a sand row, then grass."""
    grid = TerrainGrid(40, 40)
    grid.cells[:10] = WATER
    grid.cells[10] = SAND
    grid.cells[11:] = GRASS
    return grid


class TestSeasideRiver:
    """Tests for carve_seaside_river."""

    def test_runs_from_dry_edge_to_shore(self) -> None:
        grid = coast_with_beach()
        before = grid.cells.copy()
        mouths = water_touching_sand(grid)

        replay = np.random.default_rng(3)
        start = random_edge_point(40, 40, replay)
        while before[start[1], start[0]] == WATER:
            start = random_edge_point(40, 40, replay)
        end = mouths[int(replay.integers(len(mouths)))]

        assert carve_seaside_river(grid, np.random.default_rng(3), RiverConfig(), 1000)

        assert before[start[1], start[0]] != WATER
        assert grid.get(*start) == WATER
        assert end[1] == 9
        assert grid.get(*end) == WATER
        assert ((grid.cells == WATER) & (before == GRASS)).any()

    def test_all_water_edges_skipped(self, rng: np.random.Generator) -> None:
        grid = TerrainGrid(10, 10)
        grid.cells[:, :] = WATER
        with capture_logs() as logs:
            assert not carve_seaside_river(grid, rng, RiverConfig(), 5)
        assert [entry["event"] for entry in logs] == ["seaside_river_skipped"]

    def test_no_beach_no_river(self, rng: np.random.Generator) -> None:
        grid = TerrainGrid(10, 10)
        grid.cells[:, :] = GRASS
        grid.cells[4:6, 4:6] = WATER
        assert not carve_seaside_river(grid, rng, RiverConfig(), 5)
        assert grid.count(WATER) == 4


class TestGenerateSeaside:
    """Tests for generate_seaside."""

    def test_shoreline_and_harbor(self) -> None:
        grid = TerrainGrid(64, 64)
        result = generate_seaside(grid, 99)

        assert grid.count(WATER) > 0
        assert grid.count(SAND) > 0
        assert result.coastal_water
        assert result.coastal_sand
        assert result.harbor_anchor is not None
        assert result.harbor_anchor in result.coastal_sand
        assert result.harbor_direction in {d.value for d in CoastDirection}
        assert grid.get(*result.harbor_anchor) == WATER

    def test_only_water_and_sand_written(self) -> None:
        grid = TerrainGrid(64, 64)
        generate_seaside(grid, 5)
        values = set(np.unique(grid.cells).tolist())
        assert values <= {WATER, SAND, UNASSIGNED}

    def test_deterministic(self) -> None:
        a, b = TerrainGrid(128, 128), TerrainGrid(128, 128)
        ra = generate_seaside(a, 31)
        rb = generate_seaside(b, 31)
        np.testing.assert_array_equal(a.cells, b.cells)
        assert ra.harbor_anchor == rb.harbor_anchor

    def test_harbor_logged(self) -> None:
        with capture_logs() as logs:
            generate_seaside(TerrainGrid(64, 64), 99)
        events = [entry["event"] for entry in logs]
        assert "harbor_carved" in events
        assert "seaside_shaped" in events

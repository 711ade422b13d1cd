"""Shared test fixtures for burghgen tests."""

import numpy as np
import pytest
import structlog

from burghgen.generator import GenerationResult, generate_map
from burghgen.state import TerrainGrid
from burghgen.terrain_types import GRASS


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test (e.g. the CLI) applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(0)


@pytest.fixture
def empty_grid() -> TerrainGrid:
    """16x12 grid with every cell unassigned."""
    return TerrainGrid(16, 12)


@pytest.fixture
def grass_grid() -> TerrainGrid:
    """40x40 grid of solid grass."""
    grid = TerrainGrid(40, 40)
    grid.cells[:, :] = GRASS
    return grid


@pytest.fixture(scope="session")
def lake_map() -> GenerationResult:
    return generate_map("lake", 42, 64, 64)


@pytest.fixture(scope="session")
def river_map() -> GenerationResult:
    return generate_map("river", 7, 128, 128)


@pytest.fixture(scope="session")
def seaside_map() -> GenerationResult:
    return generate_map("seaside", 99, 256, 256)

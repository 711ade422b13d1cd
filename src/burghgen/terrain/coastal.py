"""Shoreline detection: sand buffers, coastal tiles, lake edges."""

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..state import TerrainGrid
from ..terrain_types import SAND, UNASSIGNED, WATER
from .carving import Point

# 3x3 block, the cell itself included
BLOCK_3X3 = np.ones((3, 3), dtype=bool)

# Center plus 4-connected neighbors
CROSS = ndimage.generate_binary_structure(2, 1)


def mask_to_points(mask: NDArray[np.bool_]) -> list[Point]:
    """Cells of a mask as (x, y) points in row-major order."""
    ys, xs = np.nonzero(mask)
    return list(zip(xs.tolist(), ys.tolist()))


def touching(mask: NDArray[np.bool_], structure: NDArray[np.bool_] = BLOCK_3X3) -> NDArray[np.bool_]:
    """Cells whose neighborhood (per structure) holds a True cell of the mask.

    Cells outside the grid never count.
    """
    return ndimage.binary_dilation(mask, structure=structure, border_value=0)


def land_mask(cells: NDArray[np.uint8]) -> NDArray[np.bool_]:
    """Assigned cells that are not water."""
    return (cells != WATER) & (cells != UNASSIGNED)


def add_sand_buffer(grid: TerrainGrid) -> int:
    """Turn every unassigned cell touching water into SAND.

    Returns:
        Number of cells converted.
    """
    cells = grid.cells
    buffer = (cells == UNASSIGNED) & touching(cells == WATER)
    cells[buffer] = SAND
    return int(np.count_nonzero(buffer))


def detect_coastal_water(grid: TerrainGrid) -> list[Point]:
    """WATER cells with an assigned non-water cell in their 3x3 block."""
    cells = grid.cells
    return mask_to_points((cells == WATER) & touching(land_mask(cells)))


def detect_coastal_sand(grid: TerrainGrid) -> list[Point]:
    """SAND cells with a WATER cell in their 3x3 block."""
    cells = grid.cells
    return mask_to_points((cells == SAND) & touching(cells == WATER))


def water_touching_sand(grid: TerrainGrid) -> list[Point]:
    """WATER cells with a SAND cell in their 3x3 block (river mouths)."""
    cells = grid.cells
    return mask_to_points((cells == WATER) & touching(cells == SAND))


def lake_edge(grid: TerrainGrid) -> list[Point]:
    """Interior WATER cells with a non-water 4-neighbor.

    Border rows and columns are never part of the edge.
    """
    if grid.width < 3 or grid.height < 3:
        return []

    cells = grid.cells
    edge = np.zeros(cells.shape, dtype=bool)
    inner = cells[1:-1, 1:-1] == WATER
    open_side = (
        (cells[:-2, 1:-1] != WATER)
        | (cells[2:, 1:-1] != WATER)
        | (cells[1:-1, :-2] != WATER)
        | (cells[1:-1, 2:] != WATER)
    )
    edge[1:-1, 1:-1] = inner & open_side
    return mask_to_points(edge)


def coastline_mask(cells: NDArray[np.uint8]) -> NDArray[np.bool_]:
    """WATER cells with a SAND 4-neighbor."""
    return (cells == WATER) & touching(cells == SAND, CROSS)

"""Map state: the terrain grid and the tile records built from it."""

from dataclasses import dataclass, field
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field

from .terrain_types import UNASSIGNED, WATER, TerrainType
from .types import RoadStyle, road_tile_id


class TerrainGrid:
    """Mutable terrain codes for one generation run.

    Cells are stored as a ``(height, width)`` uint8 array indexed ``[y, x]``.
    Every cell starts as ``UNASSIGNED``; hydrology and coloring fill it in.
    All point writes are bounds-checked and silently ignore outside cells.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: NDArray[np.uint8] = np.full(
            (height, width), UNASSIGNED, dtype=np.uint8
        )

    @classmethod
    def from_rows(cls, rows: list[list[TerrainType | None]]) -> "TerrainGrid":
        """Build a grid from rows of terrain types (None = unassigned)."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        grid = cls(width, height)
        for y, row in enumerate(rows):
            for x, terrain in enumerate(row):
                if terrain is not None:
                    grid.cells[y, x] = terrain.code
        return grid

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int:
        """Raw grid code at (x, y); caller must check bounds."""
        return int(self.cells[y, x])

    def set(self, x: int, y: int, code: int) -> bool:
        """Write a code if (x, y) is inside the grid.

        Returns:
            True if the cell was written.
        """
        if not self.in_bounds(x, y):
            return False
        self.cells[y, x] = code
        return True

    def terrain_at(self, x: int, y: int) -> TerrainType | None:
        """Terrain type at (x, y), or None while unassigned."""
        code = self.get(x, y)
        if code == UNASSIGNED:
            return None
        return TerrainType.from_code(code)

    def mask(self, code: int) -> NDArray[np.bool_]:
        """Boolean mask of cells holding the given code."""
        return self.cells == code

    def unassigned_mask(self) -> NDArray[np.bool_]:
        return self.cells == UNASSIGNED

    def touches(self, x: int, y: int, code: int) -> bool:
        """Whether the 3x3 block centered on (x, y) contains the code."""
        window = self.cells[max(0, y - 1):y + 2, max(0, x - 1):x + 2]
        return bool((window == code).any())

    def touches_land(self, x: int, y: int) -> bool:
        """Whether the 3x3 block holds an assigned non-water cell."""
        window = self.cells[max(0, y - 1):y + 2, max(0, x - 1):x + 2]
        return bool(((window != WATER) & (window != UNASSIGNED)).any())

    def is_surrounded_by(self, x: int, y: int, code: int) -> bool:
        """Whether the full 3x3 block is inside the grid and holds only the code."""
        if not (1 <= x < self.width - 1 and 1 <= y < self.height - 1):
            return False
        window = self.cells[y - 1:y + 2, x - 1:x + 2]
        return bool((window == code).all())

    def count(self, code: int) -> int:
        return int(np.count_nonzero(self.cells == code))


@dataclass
class HydrologyResult:
    """Per-run output of a hydrology generator besides the grid itself."""

    coastal_water: list[tuple[int, int]] = field(default_factory=list)
    coastal_sand: list[tuple[int, int]] = field(default_factory=list)
    harbor_anchor: tuple[int, int] | None = None
    harbor_direction: str | None = None


class TileRecord(BaseModel):
    """Externally visible state of one map tile."""

    model_config = ConfigDict(populate_by_name=True)

    x: int
    y: int
    terrain: TerrainType = Field(alias="type")
    has_road: bool = Field(default=False, alias="hasRoad")
    road_style: RoadStyle | None = Field(default=None, alias="roadStyle")
    road_tile_id: int | None = Field(default=None, alias="roadTileId")

    def pave(self, style: RoadStyle) -> bool:
        """Turn this tile into a road tile of the given style.

        Water is never paved.

        Returns:
            True if the tile was paved.
        """
        if self.terrain == TerrainType.WATER:
            return False
        self.terrain = TerrainType.DIRT
        self.has_road = True
        self.road_style = style
        self.road_tile_id = road_tile_id(style)
        return True

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the external field names."""
        return self.model_dump(by_alias=True, mode="json")


class TileMap:
    """Row-major tile records for a finished terrain grid."""

    def __init__(self, width: int, height: int, tiles: list[TileRecord]):
        if len(tiles) != width * height:
            raise ValueError(
                f"Expected {width * height} tiles for {width}x{height}, got {len(tiles)}"
            )
        self.width = width
        self.height = height
        self.tiles = tiles

    @classmethod
    def from_grid(cls, grid: TerrainGrid) -> "TileMap":
        """Wrap every grid cell in a TileRecord.

        Raises:
            ValueError: If any cell is still unassigned.
        """
        if grid.unassigned_mask().any():
            raise ValueError("Cannot build tiles from a grid with unassigned cells")

        rows = grid.cells.tolist()
        tiles = [
            TileRecord(x=x, y=y, terrain=TerrainType.from_code(code))
            for y, row in enumerate(rows)
            for x, code in enumerate(row)
        ]
        return cls(grid.width, grid.height, tiles)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, x: int, y: int) -> TileRecord:
        """Tile at (x, y); caller must check bounds."""
        return self.tiles[y * self.width + x]

    def __iter__(self) -> Iterator[TileRecord]:
        return iter(self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)


def tiles_to_payload(tiles: list[TileRecord]) -> list[dict[str, Any]]:
    """Convert tile records to JSON-ready dicts in their existing order."""
    return [tile.to_payload() for tile in tiles]

"""Terrain types and their grid storage codes."""

from enum import Enum


class TerrainType(str, Enum):
    """Base terrain of a map tile."""

    WATER = "WATER"
    SAND = "SAND"
    GRASS = "GRASS"
    DIRT = "DIRT"

    @property
    def code(self) -> int:
        """Compact value stored in the terrain grid."""
        return _TYPE_TO_CODE[self]

    @property
    def is_buildable(self) -> bool:
        """Whether a town center may be placed on this terrain."""
        return self in _BUILDABLE_TYPES

    @classmethod
    def from_code(cls, code: int) -> "TerrainType":
        """Look up the terrain type for a grid code.

        Raises:
            KeyError: If the code is not a terrain code (e.g. UNASSIGNED).
        """
        return _CODE_TO_TYPE[int(code)]


# Grid value for cells not yet written by hydrology or coloring
UNASSIGNED = 255

_TYPE_TO_CODE: dict[TerrainType, int] = {
    TerrainType.WATER: 0,
    TerrainType.SAND: 1,
    TerrainType.GRASS: 2,
    TerrainType.DIRT: 3,
}

_CODE_TO_TYPE: dict[int, TerrainType] = {v: k for k, v in _TYPE_TO_CODE.items()}

_BUILDABLE_TYPES = frozenset({
    TerrainType.GRASS,
    TerrainType.DIRT,
})

WATER = TerrainType.WATER.code
SAND = TerrainType.SAND.code
GRASS = TerrainType.GRASS.code
DIRT = TerrainType.DIRT.code

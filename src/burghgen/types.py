"""Core value types shared by the terrain and road stages."""

from enum import Enum

import numpy as np

from .exceptions import RoadStyleLookupError


class MapType(str, Enum):
    """Hydrology mode requested by the caller."""

    RIVER = "river"
    LAKE = "lake"
    SEASIDE = "seaside"

    @classmethod
    def parse(cls, value: "str | MapType | None") -> "MapType | None":
        """Parse a map type case-insensitively.

        Unrecognized values return None, which selects the no-hydrology path.
        """
        if value is None:
            return None
        if isinstance(value, MapType):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class MapSize(str, Enum):
    """Size class derived from map area."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @classmethod
    def from_dimensions(cls, width: int, height: int) -> "MapSize":
        """Classify a map by its area."""
        area = width * height
        if area <= 64 * 64:
            return cls.SMALL
        if area <= 128 * 128:
            return cls.MEDIUM
        return cls.LARGE


class RoadStyle(str, Enum):
    """Visual road surface, chosen from the map width."""

    FIELD_TAN = "FIELD_TAN"
    COBBLE_LIGHTGRAY = "COBBLE_LIGHTGRAY"
    COBBLE_GRAY = "COBBLE_GRAY"

    @classmethod
    def for_width(cls, width: int) -> "RoadStyle":
        """Pick the road style for a map of the given width."""
        if width <= 64:
            return cls.FIELD_TAN
        if width <= 128:
            return cls.COBBLE_LIGHTGRAY
        return cls.COBBLE_GRAY

    @property
    def tile_id(self) -> int:
        """Road tileset index for this style."""
        return road_tile_id(self)


# Road tileset indices used by the renderer
ROAD_TILE_IDS: dict[RoadStyle, int] = {
    RoadStyle.FIELD_TAN: 571,
    RoadStyle.COBBLE_LIGHTGRAY: 563,
    RoadStyle.COBBLE_GRAY: 112,
}


def road_tile_id(style: RoadStyle | str) -> int:
    """Look up the road tile id for a style.

    Args:
        style: RoadStyle member or its string value.

    Returns:
        Index into the road tileset.

    Raises:
        RoadStyleLookupError: If the style is not in the table.
    """
    try:
        return ROAD_TILE_IDS[RoadStyle(style)]
    except (ValueError, KeyError) as e:
        raise RoadStyleLookupError(f"Unknown road style: {style!r}") from e


def make_rng(seed: int) -> np.random.Generator:
    """Create a stage-local random stream from a run seed.

    Seeds are 64-bit signed values; they are folded into uint64 so negative
    seeds are accepted and map to distinct streams.
    """
    return np.random.default_rng(int(seed) & ((1 << 64) - 1))

"""Terrain generation: water features and land coloring.

Each hydrology mode (river, lake, seaside) carves water into an unassigned
grid; the land colorer then fills every remaining cell from seeded noise.
"""

from .coloring import color_land
from .hydrology import generate_hydrology
from .lake import generate_lake
from .noise import NoiseField
from .river import generate_river
from .seaside import CoastDirection, HarborTarget, generate_seaside

__all__ = [
    "CoastDirection",
    "HarborTarget",
    "NoiseField",
    "color_land",
    "generate_hydrology",
    "generate_lake",
    "generate_river",
    "generate_seaside",
]

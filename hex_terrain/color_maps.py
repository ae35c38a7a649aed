# hex_terrain/color_maps.py

"""
================================================================================
SHARED COLOR MAPPING UTILITIES
================================================================================
This module contains the biome colour palette used when a host has no 3-D
assets and draws the world as flat hexagons, plus a vectorised lookup from
biome ids to RGB arrays.

It is a pure, stateless utility with no dependencies on Pygame, so the
colour handles can be resolved through a BiomeHandleTable like any other.
================================================================================
"""
import numpy as np

from .biomes import BiomeHandleTable, BiomeTag

# --- Default Color Mappings ---
COLOR_MAP_BIOME = {
    BiomeTag.SAND: (240, 230, 140),
    BiomeTag.GRASS: (34, 139, 34),
    BiomeTag.DIRT: (139, 69, 19),
    BiomeTag.STONE: (112, 128, 144),
    BiomeTag.WATER: (26, 102, 255),
    # Rocky shallows read darker than open water, islands lighter.
    BiomeTag.WATER_ROCKS: (20, 40, 120),
    BiomeTag.WATER_ISLAND: (64, 164, 223),
    BiomeTag.GRASS_HILL: (154, 205, 50),
    BiomeTag.GRASS_FOREST: (0, 100, 0),
}

COLOR_BACKGROUND = (10, 10, 20)
COLOR_WAYPOINT = (255, 255, 255)


def create_biome_lut() -> np.ndarray:
    """Creates a (9, 3) uint8 colour LUT indexed by biome id."""
    return np.array([COLOR_MAP_BIOME[tag] for tag in BiomeTag], dtype=np.uint8)


def create_color_handles() -> BiomeHandleTable:
    """The palette as a handle table, for hosts that draw flat colours."""
    return BiomeHandleTable(COLOR_MAP_BIOME[tag] for tag in BiomeTag)


def get_biome_color_array(biome_ids: np.ndarray, lut: np.ndarray = None) -> np.ndarray:
    """
    Converts an integer array of biome ids into an RGB array with one extra
    trailing axis of size 3.
    """
    if lut is None:
        lut = create_biome_lut()
    return lut[np.asarray(biome_ids, dtype=np.intp)]

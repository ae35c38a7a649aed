# hex_terrain/__init__.py

from .hexgrid import ORIGIN, DiskScanIterator, HexCoordinate, disk_size, iter_ring
from .noise import NoiseField, NoiseSource
from .biomes import (
    BiomeClassifier,
    BiomeHandleTable,
    BiomeTag,
    NoiseBiomeClassifier,
    RandomBiomeClassifier,
    classify_biome,
    create_classifier,
)

__all__ = [
    "ORIGIN",
    "DiskScanIterator",
    "HexCoordinate",
    "disk_size",
    "iter_ring",
    "NoiseField",
    "NoiseSource",
    "BiomeClassifier",
    "BiomeHandleTable",
    "BiomeTag",
    "NoiseBiomeClassifier",
    "RandomBiomeClassifier",
    "classify_biome",
    "create_classifier",
]

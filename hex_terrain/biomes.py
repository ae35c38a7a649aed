# hex_terrain/biomes.py

"""
================================================================================
BIOME CLASSIFICATION
================================================================================
Maps a hex coordinate to one of nine terrain categories. Two interchangeable
strategies share the `BiomeClassifier` interface:

- NoiseBiomeClassifier: deterministic. Samples an elevation and a moisture
  value from one fractal noise field at decorrelated inputs and walks a fixed
  decision table.
- RandomBiomeClassifier: ignores the coordinate and draws a uniform biome
  from a seeded random generator.

Data Contract:
---------------
- Inputs: HexCoordinate, a NoiseSource (noise strategy) or a numpy Generator
  (random strategy).
- Outputs: BiomeTag, whose integer value indexes the external handle table.
- Side Effects: The random strategy advances its generator.
- Invariants: The noise strategy is a pure function of coordinate and field.
================================================================================
"""

from enum import IntEnum
from typing import Iterable, List, Optional, Protocol, Sequence

import numpy as np

from . import config as DEFAULTS
from .hexgrid import HexCoordinate
from .noise import NoiseField, NoiseSource


class BiomeTag(IntEnum):
    SAND = 0
    GRASS = 1
    DIRT = 2
    STONE = 3
    WATER = 4
    WATER_ROCKS = 5
    WATER_ISLAND = 6
    GRASS_HILL = 7
    GRASS_FOREST = 8


BIOME_COUNT = len(BiomeTag)


def classify_biome(elevation: float, moisture: float) -> BiomeTag:
    """
    Walks the elevation/moisture decision table. The first matching branch
    wins, and the highland test precedes the lowland test, so the order of the
    comparisons below is part of the contract.
    """
    if elevation < DEFAULTS.ELEVATION_WATER_MAX:
        if moisture < -0.5:
            return BiomeTag.WATER_ISLAND
        elif moisture > 0.5:
            return BiomeTag.WATER_ROCKS
        return BiomeTag.WATER
    elif elevation < DEFAULTS.ELEVATION_SHORE_MAX:
        return BiomeTag.SAND
    elif elevation > DEFAULTS.ELEVATION_HIGHLAND_MIN:
        if moisture < -0.2:
            return BiomeTag.SAND
        elif moisture < 0.0:
            return BiomeTag.STONE
        elif moisture < 0.2:
            return BiomeTag.GRASS_FOREST
        return BiomeTag.GRASS_HILL
    elif elevation < DEFAULTS.ELEVATION_LOWLAND_MAX:
        if moisture < 0.0:
            return BiomeTag.GRASS
        elif moisture > 0.5:
            return BiomeTag.GRASS_HILL
        return BiomeTag.GRASS_FOREST
    return BiomeTag.GRASS


class BiomeClassifier(Protocol):
    """Anything that can pick a biome for a cell."""
    def classify(self, coord: HexCoordinate) -> BiomeTag: ...


class NoiseBiomeClassifier:
    """Deterministic noise-driven classifier."""

    def __init__(self, noise: Optional[NoiseSource] = None):
        self.noise = noise if noise is not None else NoiseField()

    def sample(self, coord: HexCoordinate) -> tuple[float, float]:
        """Returns the (elevation, moisture) pair for a cell."""
        elevation = self.noise.sample(
            coord.q * DEFAULTS.ELEVATION_SCALE_Q,
            coord.r * DEFAULTS.ELEVATION_SCALE_R,
        ) * DEFAULTS.NOISE_OUTPUT_SCALE
        # Swapped axes keep moisture from tracking elevation.
        moisture = self.noise.sample(
            coord.r * DEFAULTS.MOISTURE_SCALE,
            coord.q * DEFAULTS.MOISTURE_SCALE,
        ) * DEFAULTS.NOISE_OUTPUT_SCALE
        return elevation, moisture

    def classify(self, coord: HexCoordinate) -> BiomeTag:
        elevation, moisture = self.sample(coord)
        return classify_biome(elevation, moisture)

    def classify_many(self, coords: Sequence[HexCoordinate]) -> List[BiomeTag]:
        """
        Classifies a batch of cells. Uses the field's vectorised sampler when
        it has one; the result is identical to calling classify() per cell.
        """
        if not coords:
            return []
        sample_array = getattr(self.noise, "sample_array", None)
        if sample_array is None:
            return [self.classify(c) for c in coords]

        q = np.array([c.q for c in coords], dtype=np.float64)
        r = np.array([c.r for c in coords], dtype=np.float64)
        elevation = sample_array(q * DEFAULTS.ELEVATION_SCALE_Q, r * DEFAULTS.ELEVATION_SCALE_R)
        moisture = sample_array(r * DEFAULTS.MOISTURE_SCALE, q * DEFAULTS.MOISTURE_SCALE)
        elevation = elevation * DEFAULTS.NOISE_OUTPUT_SCALE
        moisture = moisture * DEFAULTS.NOISE_OUTPUT_SCALE
        return [classify_biome(float(e), float(m)) for e, m in zip(elevation, moisture)]


class RandomBiomeClassifier:
    """Uniform random classifier; the coordinate is ignored."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng(list(DEFAULTS.RANDOM_SEED))

    def classify(self, coord: HexCoordinate) -> BiomeTag:
        return BiomeTag(int(self.rng.integers(0, BIOME_COUNT)))


def create_classifier(kind: Optional[str] = None, config: Optional[dict] = None) -> BiomeClassifier:
    """
    Builds a classifier strategy by name ('noise' or 'random').

    Raises:
        ValueError: If the strategy name is unknown.
    """
    config = config or {}
    kind = kind or config.get('biome_strategy', DEFAULTS.BIOME_STRATEGY)
    if kind == 'noise':
        return NoiseBiomeClassifier(NoiseField.from_config(config))
    if kind == 'random':
        seed = config.get('random_seed', DEFAULTS.RANDOM_SEED)
        return RandomBiomeClassifier(np.random.default_rng(list(seed)))
    raise ValueError(f"Unknown biome strategy '{kind}'. Valid values: noise, random")


class BiomeHandleTable:
    """
    Holds the nine externally resolved biome handles (scenes, colours, file
    paths) in BiomeTag order. The core never builds a handle, it only picks one.
    """

    def __init__(self, handles: Iterable):
        self._handles = tuple(handles)
        if len(self._handles) != BIOME_COUNT:
            raise ValueError(
                f"Biome handle table needs exactly {BIOME_COUNT} entries, got {len(self._handles)}."
            )

    def resolve(self, biome: BiomeTag):
        return self._handles[int(biome)]

    def __len__(self) -> int:
        return len(self._handles)


DEFAULT_HANDLES = BiomeHandleTable(DEFAULTS.BIOME_ASSET_PATHS)

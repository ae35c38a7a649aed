# hex_terrain/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides fractal 2D Perlin noise for the biome classifier. The
compiled kernels are pure and stateless; `NoiseField` binds them to a seeded
permutation table and a fixed set of fractal parameters.

Data Contract:
---------------
- Inputs:
    - p: A pre-shuffled NumPy permutation table (int array of length 512).
    - x, y: Scalar coordinates, or NumPy arrays of coordinates.
    - octaves, persistence, lacunarity: Standard noise parameters.
- Outputs:
    - Noise values normalised by the total octave amplitude (roughly [-1, 1]).
- Side Effects: None.
- Invariants: The shape of an array output matches the shape of its inputs.
  Every octave is exactly 0 at integer lattice points, so sample(0, 0) == 0.
================================================================================
"""

from typing import Protocol

import numpy as np
from numba import njit

from . import config as DEFAULTS

# Pre-defined gradient vectors for performance.
_GRADIENT_VECTORS = np.array([[0, 1], [0, -1], [1, 0], [-1, 0]])

@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

@njit
def _gradient(h, x, y):
    """Calculates the dot product between a gradient vector and coordinates."""
    g = _GRADIENT_VECTORS[h % 4]
    return g[0] * x + g[1] * y

@njit
def fbm_point(p, x, y, octaves=1, persistence=0.5, lacunarity=2.0):
    """
    Fractal Perlin noise at a single point, normalised by the summed octave
    amplitudes so the persistence setting does not change the output range.
    """
    noise_val = 0.0
    amplitude = 1.0
    frequency = 1.0
    max_amplitude = 0.0

    for _ in range(octaves):
        x_sample = x * frequency
        y_sample = y * frequency

        xi = int(np.floor(x_sample))
        yi = int(np.floor(y_sample))

        xf = x_sample - xi
        yf = y_sample - yi

        u = _fade(xf)
        v = _fade(yf)

        px0 = xi % 256
        px1 = (px0 + 1) % 256
        py0 = yi % 256
        py1 = (py0 + 1) % 256

        idx00 = p[p[px0] + py0]
        idx01 = p[p[px0] + py1]
        idx10 = p[p[px1] + py0]
        idx11 = p[p[px1] + py1]

        g00 = _gradient(idx00, xf, yf)
        g01 = _gradient(idx01, xf, yf - 1)
        g10 = _gradient(idx10, xf - 1, yf)
        g11 = _gradient(idx11, xf - 1, yf - 1)

        x1 = _lerp(g00, g10, u)
        x2 = _lerp(g01, g11, u)
        octave_noise = _lerp(x1, x2, v)

        noise_val += octave_noise * amplitude
        max_amplitude += amplitude
        amplitude *= persistence
        frequency *= lacunarity

    if max_amplitude > 0.0:
        return noise_val / max_amplitude
    return 0.0

@njit
def perlin_noise_2d(p, x, y, octaves=1, persistence=0.5, lacunarity=2.0):
    """
    Generate 2D fractal Perlin noise over coordinate grids.
    Each element is computed exactly as fbm_point would compute it.
    """
    rows, cols = x.shape
    total_noise = np.zeros((rows, cols))

    for i in range(rows):
        for j in range(cols):
            total_noise[i, j] = fbm_point(p, x[i, j], y[i, j], octaves, persistence, lacunarity)

    return total_noise


def make_permutation_table(seed: int) -> np.ndarray:
    """Builds the doubled 512-entry permutation table for a seed."""
    p = np.arange(256, dtype=np.int64)
    rng = np.random.default_rng(seed)
    rng.shuffle(p)
    return np.stack([p, p]).flatten()


class NoiseSource(Protocol):
    """
    The minimal interface the biome classifier needs from a noise field. Any
    deterministic function of two floats can stand in for the fractal field.
    """
    def sample(self, x: float, y: float) -> float: ...


class NoiseField:
    """A seeded, multi-octave coherent noise field."""

    def __init__(
        self,
        seed: int = DEFAULTS.NOISE_SEED,
        frequency: float = DEFAULTS.NOISE_FREQUENCY,
        octaves: int = DEFAULTS.NOISE_OCTAVES,
        lacunarity: float = DEFAULTS.NOISE_LACUNARITY,
        persistence: float = DEFAULTS.NOISE_PERSISTENCE,
    ):
        if octaves < 1:
            raise ValueError(f"octaves must be at least 1, got {octaves}.")
        self.seed = seed
        self.frequency = float(frequency)
        self.octaves = int(octaves)
        self.lacunarity = float(lacunarity)
        self.persistence = float(persistence)
        self._p = make_permutation_table(seed)

    @classmethod
    def from_config(cls, config: dict) -> "NoiseField":
        """Builds a field from a user config dict, falling back to the defaults."""
        return cls(
            seed=config.get('noise_seed', DEFAULTS.NOISE_SEED),
            frequency=config.get('noise_frequency', DEFAULTS.NOISE_FREQUENCY),
            octaves=config.get('noise_octaves', DEFAULTS.NOISE_OCTAVES),
            lacunarity=config.get('noise_lacunarity', DEFAULTS.NOISE_LACUNARITY),
            persistence=config.get('noise_persistence', DEFAULTS.NOISE_PERSISTENCE),
        )

    def sample(self, x: float, y: float) -> float:
        return float(fbm_point(
            self._p,
            float(x) * self.frequency,
            float(y) * self.frequency,
            self.octaves,
            self.persistence,
            self.lacunarity,
        ))

    def sample_array(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Vectorised sample(); the output has the shape of `xs`."""
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        if xs.shape != ys.shape:
            raise ValueError(f"Coordinate arrays differ in shape: {xs.shape} vs {ys.shape}.")
        shape = xs.shape
        grid = perlin_noise_2d(
            self._p,
            np.ascontiguousarray(xs.reshape(1, -1)) * self.frequency,
            np.ascontiguousarray(ys.reshape(1, -1)) * self.frequency,
            self.octaves,
            self.persistence,
            self.lacunarity,
        )
        return grid.reshape(shape)

    def __repr__(self) -> str:
        return (f"NoiseField(seed={self.seed:#x}, frequency={self.frequency}, "
                f"octaves={self.octaves}, lacunarity={self.lacunarity}, "
                f"persistence={self.persistence})")

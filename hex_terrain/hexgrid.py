# hex_terrain/hexgrid.py

"""
================================================================================
AXIAL HEX GRID
================================================================================
This module provides the axial coordinate type used to address every cell of
the world and the deterministic scan that enumerates a filled hexagonal disk.
It is a pure, stateless utility.

Data Contract:
---------------
- HexCoordinate(q, r): immutable axial coordinate, derived s = -q - r.
- DiskScanIterator(radius): restartable iterable over every coordinate within
  hex-distance `radius` of the origin, sweeping q ascending, then r ascending.
- iter_ring(radius): the coordinates at exactly `radius` from the origin, in
  scan order.
- Side Effects: None.
- Invariants: q + r + s == 0. A disk of radius R holds 3R^2 + 3R + 1 cells and
  its outer ring holds 6R cells (1 when R == 0).
================================================================================
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

# sqrt(3) / 2, kept at the precision the layout was authored with.
_SQRT3_OVER_2 = np.float32(0.86602540378443864676372317075294)
_HALF = np.float32(0.5)
_THREE_QUARTERS = np.float32(0.75)


@dataclass(frozen=True)
class HexCoordinate:
    """A cell address on a pointy-top axial hex grid."""
    q: int
    r: int

    def __post_init__(self):
        # bool is an int subclass but never a meaningful axial component.
        for name in ("q", "r"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"{name} must be an integer, not {type(value).__name__}")
        object.__setattr__(self, "q", int(self.q))
        object.__setattr__(self, "r", int(self.r))

    @property
    def s(self) -> int:
        """The derived third axial coordinate."""
        return -self.q - self.r

    def distance(self, other: "HexCoordinate") -> int:
        """Hex-grid distance: half the sum of the absolute axis deltas."""
        total = abs(self.q - other.q) + abs(self.r - other.r) + abs(self.s - other.s)
        assert total % 2 == 0, f"odd axis delta sum {total} between {self} and {other}"
        return total // 2

    def to_position(self, elevation: float = 0.0) -> Tuple[float, float, float]:
        """
        Projects the cell centre to world space (x, y, z), with y as height.

        The arithmetic is done in 32-bit floats so the result matches, bit for
        bit, positions produced by single-precision consumers of the same layout.
        """
        q = np.float32(self.q)
        r = np.float32(self.r)
        x = (q * _HALF + r) * _SQRT3_OVER_2
        z = _THREE_QUARTERS * q
        return float(x), float(np.float32(elevation)), float(z)


ORIGIN = HexCoordinate(0, 0)


def disk_size(radius: int) -> int:
    """Number of cells in a filled disk (the centered hexagonal number)."""
    return 3 * radius * radius + 3 * radius + 1


def _column_bounds(q: int, radius: int) -> Tuple[int, int]:
    """Inclusive r range that keeps s = -q - r inside [-radius, radius]."""
    return max(-radius, -q - radius), min(radius, -q + radius)


class DiskScanIterator:
    """
    Lazily scans the filled disk of a given radius around the origin.

    The order is by increasing q, then increasing r within each column. This
    is a column sweep, not a concentric-ring order; consumers that need a ring
    filter the scan by distance (see iter_ring).
    """

    def __init__(self, radius: int):
        if radius < 0:
            raise ValueError(f"Disk radius must be non-negative, got {radius}.")
        self.radius = radius

    def __iter__(self) -> Iterator[HexCoordinate]:
        radius = self.radius
        for q in range(-radius, radius + 1):
            r_min, r_max = _column_bounds(q, radius)
            for r in range(r_min, r_max + 1):
                yield HexCoordinate(q, r)

    def __len__(self) -> int:
        return disk_size(self.radius)

    def coordinate_at(self, index: int) -> Optional[HexCoordinate]:
        """
        Returns the coordinate the scan yields after skipping `index` items,
        or None when the scan is shorter than that.
        """
        if index < 0:
            raise ValueError(f"Scan index must be non-negative, got {index}.")
        if index >= len(self):
            return None

        radius = self.radius
        for q in range(-radius, radius + 1):
            r_min, r_max = _column_bounds(q, radius)
            column_length = r_max - r_min + 1
            if index < column_length:
                return HexCoordinate(q, r_min + index)
            index -= column_length

        # Unreachable: len(self) equals the sum of all column lengths.
        raise AssertionError("disk scan exhausted before reaching a valid index")

    def __repr__(self) -> str:
        return f"DiskScanIterator(radius={self.radius})"


def iter_ring(radius: int) -> Iterator[HexCoordinate]:
    """
    Yields the ring at exactly `radius` from the origin.

    The full disk is scanned and every coordinate nearer than `radius` is
    discarded, so ring cells come out in disk-scan order.
    """
    for coord in DiskScanIterator(radius):
        if coord.distance(ORIGIN) < radius:
            continue
        yield coord

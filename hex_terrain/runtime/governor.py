# hex_terrain/runtime/governor.py

"""
================================================================================
GENERATION GOVERNOR
================================================================================
Grows the world one ring at a time, gated by a live frame-rate signal. Each
tick the governor either does nothing (no signal yet, or halted), halts for
good (signal below threshold), or exposes exactly one new outer ring and emits
a spawn event for every cell in it.

Data Contract:
---------------
- Inputs (per tick):
    - fps (float | None): Rolling average frames per second, None until the
      host has collected samples.
    - reset_pressed (bool): Edge-triggered reset request.
- Outputs (per tick):
    - TickResult: a despawn-all flag and the list of SpawnEvents, in ring
      scan order.
- Side Effects: Mutates only the GrowthState it was given. Logs lifecycle
  changes.
- Invariants: No coordinate is spawned twice between resets. Once halted, no
  spawn is emitted until a reset.
================================================================================
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .. import config as DEFAULTS
from ..biomes import BiomeClassifier, BiomeTag, RandomBiomeClassifier
from ..hexgrid import DiskScanIterator, HexCoordinate, iter_ring


class GovernorState(Enum):
    GROWING = "growing"
    HALTED = "halted"


@dataclass
class GrowthState:
    """
    Mutable growth bookkeeping owned by a single governor.

    radius is the outermost ring spawned so far. Membership is never tracked
    per cell: ring filtering guarantees each tick only touches new cells.
    """
    radius: int = 0
    state: GovernorState = GovernorState.GROWING
    origin_spawned: bool = False

    def reset(self):
        self.radius = 0
        self.state = GovernorState.GROWING
        self.origin_spawned = False

    @property
    def halted(self) -> bool:
        return self.state is GovernorState.HALTED


@dataclass(frozen=True)
class SpawnEvent:
    """One newly generated cell, ready for the host to instantiate."""
    coordinate: HexCoordinate
    position: Tuple[float, float, float]
    biome: BiomeTag

    @property
    def biome_index(self) -> int:
        return int(self.biome)


@dataclass
class TickResult:
    despawn_all: bool = False
    spawned: List[SpawnEvent] = field(default_factory=list)


def spawn_ring(radius: int, classifier: BiomeClassifier) -> List[SpawnEvent]:
    """Classifies and places every cell of one ring, in scan order."""
    coords = list(iter_ring(radius))
    classify_many = getattr(classifier, "classify_many", None)
    if classify_many is not None:
        biomes = classify_many(coords)
    else:
        biomes = [classifier.classify(c) for c in coords]
    return [SpawnEvent(c, c.to_position(0.0), b) for c, b in zip(coords, biomes)]


def spawn_static_disk(radius: int = DEFAULTS.STATIC_DISK_RADIUS,
                      classifier: Optional[BiomeClassifier] = None) -> List[SpawnEvent]:
    """
    Spawns a whole disk in one go, for hosts that want a fixed world instead
    of a governed one. Uses the seeded random strategy unless told otherwise.
    """
    classifier = classifier if classifier is not None else RandomBiomeClassifier()
    return [
        SpawnEvent(c, c.to_position(0.0), classifier.classify(c))
        for c in DiskScanIterator(radius)
    ]


class GenerationGovernor:
    """
    Frame-budget admission control for world growth.
    """

    def __init__(self, classifier: BiomeClassifier, state: Optional[GrowthState] = None,
                 fps_threshold: float = DEFAULTS.FPS_THRESHOLD,
                 logger: Optional[logging.Logger] = None):
        self.classifier = classifier
        self.state = state if state is not None else GrowthState()
        self.fps_threshold = float(fps_threshold)
        self.logger = logger or logging.getLogger(__name__)

    def tick(self, fps: Optional[float], reset_pressed: bool = False) -> TickResult:
        """
        Runs one governor step. See the module docstring for the contract.

        Args:
            fps (float | None): The host's current rolling-average frame rate.
            reset_pressed (bool): True on the tick a reset was requested.
        """
        result = TickResult()

        # --- 1. Reset takes effect before anything else this tick ---
        if reset_pressed:
            self.logger.info(f"Reset requested at ring {self.state.radius}; despawning all cells.")
            self.state.reset()
            result.despawn_all = True

        # --- 2. Halted governors stay halted until reset ---
        if self.state.halted:
            return result

        # --- 3. Consult the performance signal ---
        if fps is None:
            self.logger.debug("No fps samples yet; waiting.")
            return result

        if fps < self.fps_threshold:
            self.state.state = GovernorState.HALTED
            self.logger.info(
                f"Frame rate {fps:.2f} fps is below {self.fps_threshold:.0f} fps; "
                f"halting growth at ring {self.state.radius}."
            )
            return result

        # --- 4. Healthy: expose the next ring ---
        if not self.state.origin_spawned:
            result.spawned.extend(spawn_ring(0, self.classifier))
            self.state.origin_spawned = True

        self.state.radius += 1
        ring = spawn_ring(self.state.radius, self.classifier)
        result.spawned.extend(ring)
        self.logger.debug(f"Spawned ring {self.state.radius} ({len(ring)} cells) at {fps:.2f} fps.")
        return result

    @property
    def radius(self) -> int:
        return self.state.radius

    @property
    def halted(self) -> bool:
        return self.state.halted

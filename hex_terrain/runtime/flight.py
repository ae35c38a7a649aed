# hex_terrain/runtime/flight.py

"""
================================================================================
FLIGHT PLANNER
================================================================================
Flies a viewer over the world along a stack of randomly sampled waypoints.

Data Contract:
---------------
- Inputs (on initialization):
    - A WaypointStack, usually from build_waypoint_stack().
- Inputs (per tick):
    - A viewer conforming to the Viewer protocol, and the elapsed time.
- Outputs:
    - update() returns True while there is a waypoint to fly to.
- Side Effects: Moves and turns the viewer; pops reached waypoints.
- Invariants: The top of the stack is always the current target. An empty
  stack is terminal: the viewer is never touched again.
================================================================================
"""

import logging
from typing import List, Optional, Protocol, Sequence, Tuple

import numpy as np

from .. import config as DEFAULTS
from ..hexgrid import DiskScanIterator


class Viewer(Protocol):
    """
    The interface the planner expects from a camera or any other movable
    viewer. Hosts may pass their own transform type.
    """
    translation: np.ndarray
    forward: np.ndarray

    def look_at(self, target: np.ndarray) -> None: ...


class ViewerTransform:
    """A position plus a facing direction in world space (y is up)."""

    def __init__(self, translation: Sequence[float] = (0.0, 0.0, 0.0),
                 forward: Sequence[float] = (0.0, 0.0, -1.0)):
        self.translation = np.array(translation, dtype=np.float64)
        self.forward = np.array(forward, dtype=np.float64)
        norm = np.linalg.norm(self.forward)
        if norm == 0:
            raise ValueError("forward must be a non-zero vector.")
        self.forward /= norm

    def look_at(self, target: np.ndarray):
        """Turns to face `target`. Facing is kept when already standing on it."""
        direction = np.asarray(target, dtype=np.float64) - self.translation
        norm = np.linalg.norm(direction)
        if norm > 0:
            self.forward = direction / norm

    def distance_to(self, point: np.ndarray) -> float:
        return float(np.linalg.norm(np.asarray(point, dtype=np.float64) - self.translation))

    def __repr__(self) -> str:
        return f"ViewerTransform(translation={self.translation.tolist()}, forward={self.forward.tolist()})"


class WaypointStack:
    """LIFO stack of 3-D waypoints. The last pushed point is visited first."""

    def __init__(self, points: Optional[Sequence[Sequence[float]]] = None):
        self._points: List[np.ndarray] = []
        for point in points or ():
            self.push(point)

    def push(self, point: Sequence[float]):
        self._points.append(np.array(point, dtype=np.float64))

    def peek(self) -> Optional[np.ndarray]:
        return self._points[-1] if self._points else None

    def pop(self) -> np.ndarray:
        return self._points.pop()

    def __len__(self) -> int:
        return len(self._points)

    def __bool__(self) -> bool:
        return bool(self._points)


def build_waypoint_stack(
    rng: Optional[np.random.Generator] = None,
    count: int = DEFAULTS.WAYPOINT_COUNT,
    radius: int = DEFAULTS.WAYPOINT_DISK_RADIUS,
    skip_range: Tuple[int, int] = DEFAULTS.WAYPOINT_SKIP_RANGE,
    elevation_range: Tuple[float, float] = DEFAULTS.WAYPOINT_ELEVATION_RANGE,
    logger: Optional[logging.Logger] = None,
) -> WaypointStack:
    """
    Samples waypoints by skipping a random number of cells into the disk scan
    and lifting the landed cell to a random height. A skip past the end of the
    scan lands nowhere and simply yields no waypoint.

    The generator is unseeded by default, so every run flies a new path.
    """
    logger = logger or logging.getLogger(__name__)
    rng = rng if rng is not None else np.random.default_rng()
    scan = DiskScanIterator(radius)
    stack = WaypointStack()

    for _ in range(count):
        skip = int(rng.integers(skip_range[0], skip_range[1]))
        coord = scan.coordinate_at(skip)
        if coord is None:
            continue
        elevation = float(rng.uniform(elevation_range[0], elevation_range[1]))
        stack.push(coord.to_position(elevation))

    if len(stack) < count:
        logger.warning(f"Flight path has {len(stack)} of {count} waypoints; "
                       f"the rest fell outside the radius {radius} disk.")
    return stack


class FlightPlanner:
    """Steers a viewer towards the top waypoint each tick."""

    def __init__(self, waypoints: WaypointStack, speed: float = DEFAULTS.FLY_SPEED,
                 arrival_distance: float = DEFAULTS.WAYPOINT_ARRIVAL_DISTANCE,
                 logger: Optional[logging.Logger] = None):
        if speed <= 0:
            raise ValueError(f"Flight speed must be positive, got {speed}.")
        self.waypoints = waypoints
        self.speed = float(speed)
        self.arrival_distance = float(arrival_distance)
        self.logger = logger or logging.getLogger(__name__)
        self._finished_reported = False

    @property
    def finished(self) -> bool:
        return not self.waypoints

    def update(self, viewer: Viewer, delta_seconds: float) -> bool:
        """
        Advances the viewer along its path.

        Returns:
            bool: False once the path is complete, True otherwise.
        """
        target = self.waypoints.peek()
        if target is None:
            if not self._finished_reported:
                self.logger.info("Flight path finished.")
                self._finished_reported = True
            return False

        viewer.look_at(target)
        viewer.translation = viewer.translation + viewer.forward * (delta_seconds * self.speed)

        if np.linalg.norm(target - viewer.translation) < self.arrival_distance:
            self.waypoints.pop()
            self.logger.debug(f"Reached waypoint {target.tolist()}; {len(self.waypoints)} remaining.")
        return True

# hex_terrain/runtime/__init__.py

# This file makes the 'runtime' directory a Python package.
# We can also use it to define the public API of the package.

from .world import HexWorld
from .clock import FixedTimestep
from .diagnostics import FrameTimeDiagnostics, format_report
from .flight import FlightPlanner, ViewerTransform, WaypointStack, build_waypoint_stack
from .governor import (
    GenerationGovernor,
    GovernorState,
    GrowthState,
    SpawnEvent,
    TickResult,
    spawn_ring,
    spawn_static_disk,
)

__all__ = [
    "HexWorld",
    "FixedTimestep",
    "FrameTimeDiagnostics",
    "format_report",
    "FlightPlanner",
    "ViewerTransform",
    "WaypointStack",
    "build_waypoint_stack",
    "GenerationGovernor",
    "GovernorState",
    "GrowthState",
    "SpawnEvent",
    "TickResult",
    "spawn_ring",
    "spawn_static_disk",
]

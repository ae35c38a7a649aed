# hex_terrain/runtime/world.py

"""
================================================================================
WORLD RUNTIME
================================================================================
This module provides the host-facing `HexWorld` class, the primary interface
for driving an infinite hex world from a frame loop. It composes the biome
classifier, the generation governor (or a fixed static disk), the optional
fly-over, and the frame diagnostics into one object with a single per-frame
`update` call.

It does no rendering. Hosts read `cells` (or the TickResult returned by
`update`) and instantiate whatever visual they like for each biome handle.
================================================================================
"""
import logging
from typing import Dict, Iterator, Optional

import numpy as np

from .. import config as DEFAULTS
from ..biomes import create_classifier
from ..hexgrid import HexCoordinate
from .clock import FixedTimestep
from .diagnostics import FrameTimeDiagnostics, format_report
from .flight import FlightPlanner, ViewerTransform, build_waypoint_stack
from .governor import GenerationGovernor, SpawnEvent, TickResult, spawn_static_disk

GENERATION_MODES = ('ring', 'static')


class HexWorld:
    """
    The main runtime class. Owns the live cell registry and advances every
    tick-driven component once per frame.
    """
    def __init__(self, config: Optional[dict] = None, logger: Optional[logging.Logger] = None,
                 waypoint_rng: Optional[np.random.Generator] = None):
        """
        Initializes the world.

        Args:
            config (dict): User-defined parameters to override defaults.
            logger (logging.Logger): The logger instance for all output.
            waypoint_rng (np.random.Generator, optional): Generator for the
                fly-over path. If None, a fresh unseeded one is used.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.user_config = config or {}

        # --- 1. Consolidate Configuration ---
        self.settings = {
            'generation_mode': self.user_config.get('generation_mode', DEFAULTS.GENERATION_MODE),
            'biome_strategy': self.user_config.get('biome_strategy', DEFAULTS.BIOME_STRATEGY),
            'fps_threshold': self.user_config.get('fps_threshold', DEFAULTS.FPS_THRESHOLD),
            'fps_history_length': self.user_config.get('fps_history_length', DEFAULTS.FPS_HISTORY_LENGTH),
            'static_disk_radius': self.user_config.get('static_disk_radius', DEFAULTS.STATIC_DISK_RADIUS),
            'fly_enabled': self.user_config.get('fly_enabled', DEFAULTS.FLY_ENABLED),
            'fly_speed': self.user_config.get('fly_speed', DEFAULTS.FLY_SPEED),
            'waypoint_count': self.user_config.get('waypoint_count', DEFAULTS.WAYPOINT_COUNT),
            'waypoint_disk_radius': self.user_config.get('waypoint_disk_radius', DEFAULTS.WAYPOINT_DISK_RADIUS),
            'diagnostics_interval_seconds': self.user_config.get(
                'diagnostics_interval_seconds', DEFAULTS.DIAGNOSTICS_INTERVAL_SECONDS),
        }

        mode = self.settings['generation_mode']
        if mode not in GENERATION_MODES:
            raise ValueError(f"Unknown generation mode '{mode}'. Valid values: {', '.join(GENERATION_MODES)}")
        self.logger.info(f"HexWorld initializing in '{mode}' mode...")

        # --- 2. Initialize Core Components ---
        self._cells: Dict[HexCoordinate, SpawnEvent] = {}
        self.diagnostics = FrameTimeDiagnostics(self.settings['fps_history_length'])
        self.report_timer = FixedTimestep(self.settings['diagnostics_interval_seconds'])
        self.governor = None

        if mode == 'ring':
            classifier = create_classifier(self.settings['biome_strategy'], self.user_config)
            self.governor = GenerationGovernor(
                classifier,
                fps_threshold=self.settings['fps_threshold'],
                logger=self.logger,
            )
            start = DEFAULTS.VIEWER_START_RING
        else:
            # The static disk always uses seeded random biomes.
            classifier = create_classifier('random', self.user_config)
            self._register(spawn_static_disk(self.settings['static_disk_radius'], classifier))
            start = DEFAULTS.VIEWER_START_STATIC
            self.logger.info(f"Spawned static disk of radius {self.settings['static_disk_radius']} "
                             f"({len(self._cells)} cells).")

        # Start above the world, facing the origin.
        self.viewer = ViewerTransform(start)
        self.viewer.look_at(np.zeros(3))

        # --- 3. Optional Fly-Over ---
        self.flight = None
        if self.settings['fly_enabled']:
            waypoints = build_waypoint_stack(
                waypoint_rng,
                count=self.settings['waypoint_count'],
                radius=self.settings['waypoint_disk_radius'],
                logger=self.logger,
            )
            self.flight = FlightPlanner(waypoints, speed=self.settings['fly_speed'], logger=self.logger)
            self.logger.info(f"Fly-over enabled with {len(waypoints)} waypoints.")

        self.logger.info("HexWorld initialized.")

    def update(self, real_delta_time: float, reset_pressed: bool = False) -> TickResult:
        """
        Advances the world by one frame. Should be called once per frame.

        Args:
            real_delta_time (float): The real-world time elapsed since the last frame, in seconds.
            reset_pressed (bool): True on the frame the user asked for a reset.

        Returns:
            TickResult: What the host must despawn and spawn this frame.
        """
        self.diagnostics.record(real_delta_time)

        if self.governor is not None:
            result = self.governor.tick(self.diagnostics.fps, reset_pressed)
        else:
            result = TickResult()

        if result.despawn_all:
            self._cells.clear()
        self._register(result.spawned)

        if self.flight is not None:
            self.flight.update(self.viewer, real_delta_time)

        for _ in range(self.report_timer.update(real_delta_time)):
            for line in self.report_lines():
                self.logger.info(line)

        return result

    def _register(self, events):
        for event in events:
            self._cells[event.coordinate] = event

    def report_lines(self):
        """The current diagnostics report as plain text lines."""
        return format_report(self.diagnostics, self.entity_count, self.ring_count)

    # --- Public, Read-Only State ---
    @property
    def cells(self) -> Dict[HexCoordinate, SpawnEvent]:
        return dict(self._cells)

    def iter_cells(self) -> Iterator[SpawnEvent]:
        """Live spawn events without copying the registry. Do not update the world while iterating."""
        return iter(self._cells.values())

    @property
    def entity_count(self) -> int:
        return len(self._cells)

    @property
    def ring_count(self) -> Optional[int]:
        """Rings grown so far, or None when the world is not governed."""
        return self.governor.radius if self.governor is not None else None

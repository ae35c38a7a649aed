import logging

import numpy as np
import pytest

from hex_terrain import config as DEFAULTS
from hex_terrain.hexgrid import ORIGIN
from hex_terrain.runtime import HexWorld

FRAME_60 = 1 / 60
FRAME_10 = 1 / 10


def test_ring_world_grows_on_healthy_frames():
    world = HexWorld()
    result = world.update(FRAME_60)
    assert len(result.spawned) == 7
    assert world.entity_count == 7
    assert world.ring_count == 1
    assert ORIGIN in world.cells

    for _ in range(3):
        world.update(FRAME_60)
    assert world.ring_count == 4
    assert world.entity_count == 3 * 16 + 12 + 1


def test_iter_cells_walks_the_live_registry():
    world = HexWorld()
    assert list(world.iter_cells()) == []
    world.update(FRAME_60)
    world.update(FRAME_60)
    events = list(world.iter_cells())
    assert len(events) == world.entity_count == 19
    assert {e.coordinate: e for e in events} == world.cells


def test_slow_frames_halt_growth():
    world = HexWorld()
    world.update(FRAME_10)
    assert world.governor.halted
    for _ in range(5):
        world.update(FRAME_60)
    assert world.entity_count == 0


def test_reset_clears_registry_and_regrows():
    world = HexWorld()
    for _ in range(3):
        world.update(FRAME_60)
    before = world.cells

    result = world.update(FRAME_60, reset_pressed=True)
    assert result.despawn_all
    assert world.ring_count == 1
    assert world.entity_count == 7
    assert all(world.cells[c] == before[c] for c in world.cells)


def test_static_mode_spawns_fixed_disk():
    world = HexWorld({'generation_mode': 'static', 'static_disk_radius': 3})
    assert world.entity_count == 37
    assert world.ring_count is None
    assert world.update(FRAME_60).spawned == []
    assert world.entity_count == 37
    assert world.viewer.translation.tolist() == list(DEFAULTS.VIEWER_START_STATIC)


def test_fly_mode_moves_the_viewer():
    world = HexWorld({'fly_enabled': True, 'waypoint_count': 5}, waypoint_rng=np.random.default_rng(5))
    start = world.viewer.translation.copy()
    world.update(0.5)
    assert world.viewer.distance_to(start) == pytest.approx(5.0)


def test_diagnostics_are_reported_on_a_fixed_cadence(caplog):
    world = HexWorld({'fps_threshold': 1.0, 'diagnostics_interval_seconds': 1.0})
    with caplog.at_level(logging.INFO, logger="hex_terrain.runtime.world"):
        world.update(0.5)
        assert not any("Spawned" in r.getMessage() for r in caplog.records)
        world.update(0.5)
    messages = [r.getMessage() for r in caplog.records]
    assert "Frame Took 500.0" in messages
    assert "FPS is 2.0" in messages
    assert "Rendering 19 Entities" in messages
    assert "Spawned 2 Rings" in messages


def test_random_biome_world():
    a = HexWorld({'biome_strategy': 'random'})
    b = HexWorld({'biome_strategy': 'random'})
    for _ in range(3):
        a.update(FRAME_60)
        b.update(FRAME_60)
    assert a.cells == b.cells


def test_rejects_unknown_mode():
    with pytest.raises(ValueError):
        HexWorld({'generation_mode': 'spiral'})

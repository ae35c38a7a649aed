import logging

import pytest

from hex_terrain.biomes import BiomeTag, NoiseBiomeClassifier
from hex_terrain.hexgrid import ORIGIN, HexCoordinate, iter_ring
from hex_terrain.runtime.governor import (
    GenerationGovernor,
    GovernorState,
    GrowthState,
    spawn_static_disk,
)

HEALTHY = 60.0
DEGRADED = 12.0


class FixedClassifier:
    def __init__(self, biome=BiomeTag.STONE):
        self.biome = biome
        self.calls = 0

    def classify(self, coord):
        self.calls += 1
        return self.biome


@pytest.fixture
def governor():
    return GenerationGovernor(FixedClassifier())


@pytest.mark.parametrize("ticks", [1, 2, 5, 12])
def test_healthy_ticks_grow_one_ring_each(governor, ticks):
    spawned = []
    for _ in range(ticks):
        spawned.extend(governor.tick(HEALTHY).spawned)
    assert governor.radius == ticks
    assert len(spawned) == 3 * ticks * ticks + 3 * ticks + 1
    coords = [e.coordinate for e in spawned]
    assert len(set(coords)) == len(coords), "a cell was spawned twice"


def test_first_tick_spawns_origin_then_first_ring(governor):
    result = governor.tick(HEALTHY)
    assert not result.despawn_all
    assert [e.coordinate for e in result.spawned] == [ORIGIN] + list(iter_ring(1))


def test_spawn_event_contents():
    governor = GenerationGovernor(FixedClassifier(BiomeTag.WATER_ROCKS))
    governor.tick(HEALTHY)
    event = governor.tick(HEALTHY).spawned[0]
    assert event.coordinate.distance(ORIGIN) == 2
    assert event.position == event.coordinate.to_position(0.0)
    assert event.biome == BiomeTag.WATER_ROCKS
    assert event.biome_index == 5


def test_missing_signal_is_a_no_op(governor):
    for _ in range(3):
        result = governor.tick(None)
        assert result.spawned == []
        assert not result.despawn_all
    assert governor.radius == 0
    assert governor.state.state is GovernorState.GROWING
    assert len(governor.tick(HEALTHY).spawned) == 7


def test_threshold_is_inclusive(governor):
    assert governor.tick(30.0).spawned
    assert not governor.halted
    governor.tick(29.99)
    assert governor.halted


def test_degraded_signal_halts_until_reset(governor):
    governor.tick(HEALTHY)
    governor.tick(HEALTHY)
    assert governor.tick(DEGRADED).spawned == []
    assert governor.halted
    for fps in (HEALTHY, 240.0, None, HEALTHY):
        assert governor.tick(fps).spawned == []
    assert governor.radius == 2


def test_halt_is_logged_once(governor, caplog):
    with caplog.at_level(logging.INFO, logger="hex_terrain.runtime.governor"):
        governor.tick(DEGRADED)
        governor.tick(DEGRADED)
        governor.tick(HEALTHY)
    halts = [r for r in caplog.records if "halting growth" in r.getMessage()]
    assert len(halts) == 1


def test_reset_despawns_and_restarts_from_ring_zero():
    classifier = NoiseBiomeClassifier()
    governor = GenerationGovernor(classifier)
    initial = governor.tick(HEALTHY).spawned
    for _ in range(4):
        governor.tick(HEALTHY)
    governor.tick(DEGRADED)

    result = governor.tick(None, reset_pressed=True)
    assert result.despawn_all
    assert result.spawned == []
    assert governor.radius == 0
    assert not governor.halted

    assert governor.tick(HEALTHY).spawned == initial


def test_reset_tick_grows_in_the_same_tick(governor):
    governor.tick(HEALTHY)
    governor.tick(DEGRADED)
    result = governor.tick(HEALTHY, reset_pressed=True)
    assert result.despawn_all
    assert len(result.spawned) == 7
    assert governor.radius == 1


def test_state_is_passed_in_explicitly():
    state = GrowthState()
    governor = GenerationGovernor(FixedClassifier(), state=state)
    governor.tick(HEALTHY)
    governor.tick(HEALTHY)
    assert state.radius == 2
    assert state.origin_spawned
    governor.tick(DEGRADED)
    assert state.halted


def test_classifier_called_once_per_new_cell():
    classifier = FixedClassifier()
    governor = GenerationGovernor(classifier)
    for _ in range(3):
        governor.tick(HEALTHY)
    assert classifier.calls == 37


def test_static_disk():
    events = spawn_static_disk(25)
    assert len(events) == 3 * 25 * 25 + 3 * 25 + 1
    assert events[0].coordinate == HexCoordinate(-25, 0)
    # Seeded random biomes reproduce exactly between runs.
    assert [e.biome for e in spawn_static_disk(25)] == [e.biome for e in events]

import logging

import numpy as np
import pytest

from hex_terrain.hexgrid import DiskScanIterator
from hex_terrain.runtime.flight import (
    FlightPlanner,
    ViewerTransform,
    WaypointStack,
    build_waypoint_stack,
)


def test_empty_path_never_moves_viewer_and_reports_once(caplog):
    viewer = ViewerTransform((1.0, 2.0, 3.0))
    planner = FlightPlanner(WaypointStack())
    with caplog.at_level(logging.INFO, logger="hex_terrain.runtime.flight"):
        for _ in range(5):
            assert planner.update(viewer, 0.016) is False
    assert viewer.translation.tolist() == [1.0, 2.0, 3.0]
    assert viewer.forward.tolist() == [0.0, 0.0, -1.0]
    finished = [r for r in caplog.records if "path finished" in r.getMessage()]
    assert len(finished) == 1


def test_flies_towards_target_and_pops_on_arrival():
    viewer = ViewerTransform()
    planner = FlightPlanner(WaypointStack([(10.0, 0.0, 0.0)]), speed=10.0)

    assert planner.update(viewer, 0.5) is True
    assert viewer.translation.tolist() == [5.0, 0.0, 0.0]
    assert viewer.forward.tolist() == [1.0, 0.0, 0.0]
    assert len(planner.waypoints) == 1

    planner.update(viewer, 0.45)
    assert viewer.translation[0] == pytest.approx(9.5)
    assert planner.finished
    assert planner.update(viewer, 0.5) is False


def test_last_pushed_waypoint_is_visited_first():
    viewer = ViewerTransform()
    stack = WaypointStack([(0.0, 0.0, 50.0), (0.0, 50.0, 0.0)])
    planner = FlightPlanner(stack)
    planner.update(viewer, 0.1)
    assert viewer.forward.tolist() == [0.0, 1.0, 0.0]
    assert viewer.translation.tolist() == pytest.approx([0.0, 1.0, 0.0])


def test_look_at_own_position_keeps_facing():
    viewer = ViewerTransform((1.0, 1.0, 1.0), forward=(0.0, 0.0, 2.0))
    assert viewer.forward.tolist() == [0.0, 0.0, 1.0]
    viewer.look_at(np.array([1.0, 1.0, 1.0]))
    assert viewer.forward.tolist() == [0.0, 0.0, 1.0]
    assert viewer.distance_to((1.0, 5.0, 1.0)) == 4.0


def test_build_waypoint_stack_samples_the_disk():
    stack = build_waypoint_stack(np.random.default_rng(3))
    assert len(stack) == 100

    cells = {c.to_position(0.0)[::2] for c in DiskScanIterator(200)}
    while stack:
        x, y, z = stack.pop()
        assert 0.2 <= y < 2.0
        assert (x, z) in cells


def test_last_generated_waypoint_is_popped_first():
    replay = np.random.default_rng(21)
    scan = DiskScanIterator(200)
    generated = []
    for _ in range(30):
        coord = scan.coordinate_at(int(replay.integers(100, 100000)))
        if coord is None:
            continue
        generated.append(coord.to_position(float(replay.uniform(0.2, 2.0))))

    stack = build_waypoint_stack(np.random.default_rng(21), count=30)
    assert len(stack) == len(generated)
    popped = [tuple(stack.pop().tolist()) for _ in range(len(generated))]
    assert popped == list(reversed(generated))


def test_waypoints_are_reproducible_with_a_seeded_generator():
    a = build_waypoint_stack(np.random.default_rng(11), count=10)
    b = build_waypoint_stack(np.random.default_rng(11), count=10)
    assert [a.pop().tolist() for _ in range(10)] == [b.pop().tolist() for _ in range(10)]


def test_sampling_misses_are_skipped(caplog):
    # A radius 5 disk holds 91 cells, below the smallest possible skip.
    with caplog.at_level(logging.WARNING, logger="hex_terrain.runtime.flight"):
        stack = build_waypoint_stack(np.random.default_rng(0), count=20, radius=5)
    assert len(stack) == 0
    assert any("0 of 20 waypoints" in r.getMessage() for r in caplog.records)


def test_rejects_non_positive_speed():
    with pytest.raises(ValueError):
        FlightPlanner(WaypointStack(), speed=0.0)

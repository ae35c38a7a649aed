import pytest

from hex_terrain.runtime.clock import FixedTimestep
from hex_terrain.runtime.diagnostics import FrameTimeDiagnostics, format_report


def test_signal_is_absent_until_first_sample():
    diagnostics = FrameTimeDiagnostics()
    assert diagnostics.fps is None
    assert diagnostics.average_frame_time_ms is None
    diagnostics.record(0.0)
    assert diagnostics.fps is None


def test_rolling_average():
    diagnostics = FrameTimeDiagnostics(history_length=2)
    diagnostics.record(0.02)
    diagnostics.record(0.02)
    assert diagnostics.fps == pytest.approx(50.0)
    assert diagnostics.average_frame_time_ms == pytest.approx(20.0)

    diagnostics.record(0.01)
    diagnostics.record(0.01)
    assert diagnostics.sample_count == 2
    assert diagnostics.fps == pytest.approx(100.0)

    diagnostics.clear()
    assert diagnostics.fps is None


def test_report_lines():
    diagnostics = FrameTimeDiagnostics()
    diagnostics.record(1 / 64)
    assert format_report(diagnostics, 19, 2) == [
        "Frame Took 15.62",
        "FPS is 64.0",
        "Rendering 19 Entities",
        "Spawned 2 Rings",
    ]
    assert format_report(FrameTimeDiagnostics(), 0) == [
        "Frame Took 0.0",
        "FPS is 0.0",
        "Rendering 0 Entities",
    ]


def test_fixed_timestep_fires_on_whole_intervals():
    timer = FixedTimestep(5.0)
    assert [timer.update(1.0) for _ in range(4)] == [0, 0, 0, 0]
    assert timer.update(1.0) == 1
    assert timer.update(12.0) == 2
    assert timer.update(0.0) == 0
    assert timer.elapsed == 17.0

    timer.reset()
    assert timer.update(4.9) == 0


def test_rejects_bad_parameters():
    with pytest.raises(ValueError):
        FixedTimestep(0)
    with pytest.raises(ValueError):
        FrameTimeDiagnostics(history_length=0)

# hex_terrain/runtime/diagnostics.py

"""
================================================================================
FRAME TIME DIAGNOSTICS
================================================================================
Keeps a short rolling history of frame durations and derives the performance
signal the generation governor is gated on.

Data Contract:
---------------
- Inputs: One real time delta (seconds) per frame.
- Outputs:
    - fps: Rolling mean of the per-frame frames-per-second, or None until the
      first usable sample has been recorded.
    - average_frame_time_ms: Rolling mean frame duration in milliseconds.
- Side Effects: None.
================================================================================
"""

from collections import deque
from typing import List, Optional

import numpy as np

from .. import config as DEFAULTS


class FrameTimeDiagnostics:
    """Rolling frame time and frames-per-second measurements."""

    def __init__(self, history_length: int = DEFAULTS.FPS_HISTORY_LENGTH):
        if history_length < 1:
            raise ValueError(f"history_length must be at least 1, got {history_length}.")
        self.history_length = history_length
        self._frame_times = deque(maxlen=history_length)

    def record(self, real_delta_time: float):
        """Adds a frame duration. Non-positive durations carry no rate and are ignored."""
        if real_delta_time > 0:
            self._frame_times.append(real_delta_time)

    def clear(self):
        self._frame_times.clear()

    @property
    def sample_count(self) -> int:
        return len(self._frame_times)

    @property
    def fps(self) -> Optional[float]:
        """The performance signal: None until warmed up."""
        if not self._frame_times:
            return None
        return float(np.mean(1.0 / np.array(self._frame_times)))

    @property
    def average_frame_time_ms(self) -> Optional[float]:
        if not self._frame_times:
            return None
        return float(np.mean(self._frame_times)) * 1000.0


def format_report(diagnostics: FrameTimeDiagnostics, entity_count: int,
                  ring_count: Optional[int] = None) -> List[str]:
    """
    Builds the periodic human-readable report. Missing measurements are shown
    as zero, values are rounded to two decimals.
    """
    frame_ms = diagnostics.average_frame_time_ms or 0.0
    fps = diagnostics.fps or 0.0
    lines = [
        f"Frame Took {round(frame_ms, 2)}",
        f"FPS is {round(fps, 2)}",
        f"Rendering {entity_count} Entities",
    ]
    if ring_count is not None:
        lines.append(f"Spawned {ring_count} Rings")
    return lines

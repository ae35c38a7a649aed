# hex_terrain/runtime/clock.py

"""
================================================================================
FIXED TIMESTEP
================================================================================
This module provides a self-contained, data-only class that turns a stream of
per-frame real time deltas into a slow, fixed cadence. It is used for work that
should happen every few seconds regardless of frame rate, such as diagnostics
reporting.

Data Contract:
---------------
- Inputs (on initialization):
    - interval (float): The period of the cadence, in seconds.
- Public Methods:
    - update(real_delta_time): Advances the accumulator and returns how many
      whole intervals have elapsed since the last call.
    - reset(): Discards any partially accumulated interval.
- Side Effects: None.
- Invariants: The number of fired intervals depends only on the total elapsed
  real time, not on the frequency of updates.
================================================================================
"""

from .. import config as DEFAULTS


class FixedTimestep:
    """Accumulates real time and fires at a fixed interval."""

    def __init__(self, interval: float = DEFAULTS.DIAGNOSTICS_INTERVAL_SECONDS):
        if interval <= 0:
            raise ValueError(f"Timestep interval must be positive, got {interval}.")
        self.interval = float(interval)
        self._total_seconds_elapsed = 0.0
        self._intervals_fired = 0

    def update(self, real_delta_time: float) -> int:
        """
        Advances the timestep by a given amount of real-world time.

        Args:
            real_delta_time (float): The time elapsed in the real world, in seconds.

        Returns:
            int: The number of intervals that completed during this update.
        """
        if real_delta_time <= 0:
            return 0 # No time passed, nothing can fire.

        self._total_seconds_elapsed += real_delta_time
        # Derived from the master accumulator to avoid drift from repeatedly
        # subtracting the interval.
        completed = int(self._total_seconds_elapsed // self.interval)
        fired = completed - self._intervals_fired
        self._intervals_fired = completed
        return fired

    def reset(self):
        self._total_seconds_elapsed = 0.0
        self._intervals_fired = 0

    @property
    def elapsed(self) -> float:
        """Total real time accumulated since creation or the last reset."""
        return self._total_seconds_elapsed

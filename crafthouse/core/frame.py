"""
Frame State and Fixed Timestep

FrameState is the immutable timing info passed to systems each frame.
FixedTimestep turns variable render-frame durations into a whole number
of logical ticks so camera controllers always advance by the same dt.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)

FIXED_TIME_STEP = 1.0 / 60.0


@dataclass(frozen=True)
class FrameState:
    """
    Immutable frame information passed to all systems.
    """
    frame_id: int   # Monotonically increasing frame counter
    dt: float       # Delta time since last frame (seconds)
    t: float        # Total elapsed time (seconds)

    @property
    def fps(self) -> float:
        """Estimated FPS from delta time."""
        return 1.0 / max(1e-6, self.dt)


class FixedTimestep:
    """
    Accumulator that yields how many fixed ticks to run for a render frame.

    Leftover time carries over to the next frame. At most `max_steps`
    ticks run per frame; surplus time beyond that is dropped so a long
    stall does not trigger a burst of catch-up updates.
    """

    def __init__(self, step: float = FIXED_TIME_STEP, max_steps: int = 5):
        assert step > 0.0
        assert max_steps >= 1
        self.step = step
        self.max_steps = max_steps
        self._accumulator = 0.0
        self.tick_count = 0

    @property
    def accumulator(self) -> float:
        return self._accumulator

    @property
    def alpha(self) -> float:
        """Fraction of a tick left in the accumulator (for interpolation)."""
        return self._accumulator / self.step

    def advance(self, frame_time: float) -> int:
        """Add elapsed real time, return the number of ticks to run now."""
        self._accumulator += max(0.0, frame_time)
        steps = int(self._accumulator // self.step)
        if steps > self.max_steps:
            logger.debug("Dropping %d fixed steps after a long frame (%.3fs)",
                         steps - self.max_steps, frame_time)
            steps = self.max_steps
            self._accumulator = 0.0
        else:
            self._accumulator -= steps * self.step
        self.tick_count += steps
        return steps

    def run(self, frame_time: float, collector, controller) -> int:
        """
        Run the ticks owed for one render frame.

        Each tick takes one InputFrame from `collector` and passes it to
        `controller.update`, so buffered motion lands in the first tick.
        Returns the number of ticks run.
        """
        steps = self.advance(frame_time)
        for _ in range(steps):
            controller.update(collector.take_frame(), self.step)
        return steps

    def reset(self):
        self._accumulator = 0.0

"""Fixed timestep scheduling decoupled from the frame rate."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)

# Relative slack on the drain test; repeated subtraction of fixed_step drifts.
DRAIN_TOLERANCE = 1e-9


@dataclass
class FixedStepper:
    """Accumulates wall-clock time and drains it in whole ``fixed_step`` chunks.

    Frames shorter than one fixed step only render.  Longer frames are clamped
    to ``max_frame_delta`` so a stall cannot trigger an unbounded number of
    catch-up steps.  Whatever is left in the accumulator carries over.
    """

    fixed_step: float = 0.012
    max_frame_delta: float = 0.25
    last_time: float = 0.0
    accumulator: float = field(default=0.0, init=False)
    steps_taken: int = field(default=0, init=False)
    frames: int = field(default=0, init=False)
    clamped_frames: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.fixed_step <= 0:
            raise ValueError("fixed_step must be positive")
        if self.max_frame_delta < self.fixed_step:
            raise ValueError("max_frame_delta must be >= fixed_step")

    @property
    def alpha(self) -> float:
        """Fraction of a fixed step still pending in the accumulator."""
        return self.accumulator / self.fixed_step

    def advance(self, wall_time: float, simulate: Callable[[float], None]) -> int:
        """Report the current wall time and run the fixed steps it pays for.

        Returns the number of times ``simulate(fixed_step)`` was called.
        """

        self.frames += 1
        dt = wall_time - self.last_time
        if dt < self.fixed_step:
            return 0

        self.last_time = wall_time
        if dt > self.max_frame_delta:
            logger.debug("Frame delta %.4fs clamped to %.4fs", dt, self.max_frame_delta)
            dt = self.max_frame_delta
            self.clamped_frames += 1
        self.accumulator += dt

        # A step is booked before it runs.
        threshold = self.fixed_step * (1.0 - DRAIN_TOLERANCE)
        steps = 0
        while self.accumulator >= threshold:
            self.accumulator = max(0.0, self.accumulator - self.fixed_step)
            self.steps_taken += 1
            steps += 1
            simulate(self.fixed_step)

        return steps

    def reset(self, start_time: float = 0.0) -> None:
        self.last_time = start_time
        self.accumulator = 0.0
        self.steps_taken = 0
        self.frames = 0
        self.clamped_frames = 0

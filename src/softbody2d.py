"""Mass-spring soft body simulation driven by a fixed timestep."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Tuple, Union

import numpy as np

from force_input import Axis, ForceInput
from grid2d import SpringGrid
from integrator import integrate
from timestep import FixedStepper

logger = logging.getLogger(__name__)


class SimulationDiverged(RuntimeError):
    """Raised when a physics step leaves non-finite positions or velocities."""


@dataclass
class SoftBodyConfig:
    width: float = 1.0
    height: float = 1.0
    subdivisions_x: int = 10
    subdivisions_y: int = 10
    stiffness: float = 25.0
    damping: float = 0.5
    fixed_step: float = 0.012
    max_frame_delta: float = 0.25
    force_magnitude: float = 2.0
    gravity: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    anchor_row: int = 0


@dataclass
class SoftBody2D:
    """Owns the lattice, the input state and the scheduler.

    The outside world calls :meth:`set_external_input` with the current input,
    then :meth:`step` with the current wall time, then reads positions back.
    """

    config: SoftBodyConfig = field(default_factory=SoftBodyConfig)
    start_time: float = 0.0

    def __post_init__(self) -> None:
        config = self.config
        self.grid = SpringGrid(
            width=config.width,
            height=config.height,
            subdivisions_x=config.subdivisions_x,
            subdivisions_y=config.subdivisions_y,
            stiffness=config.stiffness,
            damping=config.damping,
            anchor_row=config.anchor_row,
            gravity=np.asarray(config.gravity, dtype=np.float64),
        )
        self.force_input = ForceInput(magnitude=config.force_magnitude)
        self.stepper = FixedStepper(
            fixed_step=config.fixed_step,
            max_frame_delta=config.max_frame_delta,
            last_time=self.start_time,
        )

    # ------------------------------------------------------------------

    def step(self, wall_time: float) -> int:
        """Advance to ``wall_time``; returns how many fixed steps were run."""
        return self.stepper.advance(wall_time, self.simulate)

    def simulate(self, dt: float) -> None:
        """Run exactly one physics step of length ``dt``."""

        self.grid.accumulate_forces(self.force_input.external_force())
        for node in self.grid:
            integrate(dt, node)

        if not self.grid.is_finite():
            logger.error(
                "Simulation diverged at step %d (dt=%g, k=%g)",
                self.stepper.steps_taken,
                dt,
                self.grid.stiffness,
            )
            raise SimulationDiverged("node state became non-finite")

    def set_external_input(self, axis: Union[Axis, str], sign: int) -> None:
        self.force_input.set_external_input(axis, sign)

    def get_node_position(self, i: int, j: int) -> Tuple[float, float, float]:
        return self.grid.position(i, j)

    def positions(self) -> np.ndarray:
        return self.grid.positions()

    def reset(self, start_time: float = 0.0) -> None:
        self.grid.reset()
        self.force_input.clear()
        self.stepper.reset(start_time)
        logger.info("Simulation reset at t=%.3f", start_time)

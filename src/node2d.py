"""Point mass used by the soft body lattice."""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _as_vector(value, name: str) -> np.ndarray:
    vector = np.array(value, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"{name} must be a 3D vector")
    return vector


@dataclass
class Node:
    """Kinematic state of a single point mass.

    A mass of ``0`` stands for infinite mass: the node keeps ``inverse_mass = 0``
    and no force or impulse can move it.  ``net_force`` and ``net_impulse`` are
    accumulators filled during a physics step and cleared by the integrator.
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(3))
    mass: float = 1.0
    inverse_mass: float = field(init=False)
    net_force: np.ndarray = field(init=False)
    net_impulse: np.ndarray = field(init=False)

    def __post_init__(self) -> None:
        self.position = _as_vector(self.position, "position")
        self.velocity = _as_vector(self.velocity, "velocity")
        self.acceleration = _as_vector(self.acceleration, "acceleration")

        self.mass = float(self.mass)
        if not np.isfinite(self.mass) or self.mass < 0.0:
            raise ValueError("mass must be finite and >= 0 (0 means infinite mass)")
        self.inverse_mass = 0.0 if self.mass == 0.0 else 1.0 / self.mass

        self.net_force = np.zeros(3)
        self.net_impulse = np.zeros(3)

    @property
    def is_static(self) -> bool:
        return self.inverse_mass == 0.0

"""External push applied to the anchor row of the lattice."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np


class Axis(Enum):
    X = "x"
    Y = "y"

    @property
    def index(self) -> int:
        return 0 if self is Axis.X else 1

    @classmethod
    def parse(cls, value: Union["Axis", str]) -> "Axis":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"unknown axis {value!r}, expected 'x' or 'y'") from None


@dataclass
class ForceInput:
    """Held input state turned into one force vector per physics step.

    ``positive`` and ``negative`` mirror two buttons.  When both are held the
    negative one is evaluated last and wins.
    """

    magnitude: float = 2.0
    axis: Axis = Axis.X
    positive: bool = False
    negative: bool = False

    def __post_init__(self) -> None:
        if self.magnitude < 0:
            raise ValueError("magnitude must be >= 0")
        self.axis = Axis.parse(self.axis)

    def set_external_input(self, axis: Union[Axis, str], sign: int) -> None:
        """Select the axis and push direction; ``sign`` is -1, 0 or 1."""

        if sign not in (-1, 0, 1):
            raise ValueError("sign must be -1, 0 or 1")
        self.axis = Axis.parse(axis)
        self.positive = sign == 1
        self.negative = sign == -1

    def sample(self, alternate_axis: bool, positive: bool, negative: bool) -> None:
        """Copy raw device state: a held modifier switches the push to Y."""

        self.axis = Axis.Y if alternate_axis else Axis.X
        self.positive = bool(positive)
        self.negative = bool(negative)

    def button_event(self, positive_button: bool, pressed: bool, alternate_axis: bool) -> None:
        """Track one button press or release.

        A press resolves the axis from the modifier state at that moment, so the
        push falls back to X as soon as the modifier is no longer held.
        """

        if pressed:
            self.axis = Axis.Y if alternate_axis else Axis.X
        if positive_button:
            self.positive = pressed
        else:
            self.negative = pressed

    def clear(self) -> None:
        self.positive = self.negative = False

    def external_force(self) -> np.ndarray:
        force = np.zeros(3)
        if self.positive:
            force[self.axis.index] = self.magnitude
        if self.negative:
            force[self.axis.index] = -self.magnitude
        return force

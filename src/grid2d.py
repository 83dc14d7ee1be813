"""Rectangular mass-spring lattice with structural springs."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import numpy as np

from node2d import Node

logger = logging.getLogger(__name__)

GridIndex = Tuple[int, int]


@dataclass
class SpringGrid:
    """Regular lattice of point masses linked to their four direct neighbours.

    Node ``(i, j)`` lives on row ``i`` (along Y) and column ``j`` (along X).  The
    lattice is centered on the origin in the XY plane and every node starts at
    rest.  Links are implicit: two nodes are linked when their indices differ by
    one along a single axis.  Horizontal links rest at ``rest_width`` and
    vertical links at ``rest_height``.

    Row ``anchor_row`` is the free edge that receives the external force.
    """

    width: float
    height: float
    subdivisions_x: int
    subdivisions_y: int
    stiffness: float
    damping: float
    node_mass: float = 1.0
    anchor_row: int = 0
    gravity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rest_width: float = field(init=False)
    rest_height: float = field(init=False)
    nodes: List[List[Node]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not (np.isfinite(self.width) and np.isfinite(self.height)):
            raise ValueError("width and height must be finite")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")
        if self.subdivisions_x < 1 or self.subdivisions_y < 1:
            raise ValueError("subdivisions must be >= 1")
        if not (np.isfinite(self.stiffness) and np.isfinite(self.damping)):
            raise ValueError("stiffness and damping must be finite")
        if self.stiffness <= 0:
            raise ValueError("stiffness must be positive")
        if self.damping < 0:
            raise ValueError("damping must be >= 0")
        if self.node_mass <= 0:
            raise ValueError("node_mass must be positive")
        if not 0 <= self.anchor_row < self.subdivisions_y:
            raise ValueError("anchor_row must be a valid row index")

        self.gravity = np.asarray(self.gravity, dtype=np.float64)
        if self.gravity.shape != (3,):
            raise ValueError("gravity must be a 3D vector")

        self.rest_width = self.width / self.subdivisions_x
        self.rest_height = self.height / self.subdivisions_y

        half_x = (self.subdivisions_x - 1) / 2.0
        half_y = (self.subdivisions_y - 1) / 2.0
        self._initial_positions = np.zeros((self.subdivisions_y, self.subdivisions_x, 3))
        for i in range(self.subdivisions_y):
            for j in range(self.subdivisions_x):
                self._initial_positions[i, j, 0] = (j - half_x) * self.rest_width
                self._initial_positions[i, j, 1] = (i - half_y) * self.rest_height

        self.nodes = self._build_nodes()
        logger.info(
            "Created %dx%d spring grid (rest %.4f x %.4f, k=%g, c=%g)",
            self.subdivisions_x,
            self.subdivisions_y,
            self.rest_width,
            self.rest_height,
            self.stiffness,
            self.damping,
        )

    def _build_nodes(self) -> List[List[Node]]:
        return [
            [
                Node(position=self._initial_positions[i, j], mass=self.node_mass)
                for j in range(self.subdivisions_x)
            ]
            for i in range(self.subdivisions_y)
        ]

    # -- Access -----------------------------------------------------------
    @property
    def shape(self) -> GridIndex:
        return self.subdivisions_y, self.subdivisions_x

    @property
    def n_nodes(self) -> int:
        return self.subdivisions_x * self.subdivisions_y

    def __iter__(self) -> Iterator[Node]:
        for row in self.nodes:
            yield from row

    def node(self, i: int, j: int) -> Node:
        if not (0 <= i < self.subdivisions_y and 0 <= j < self.subdivisions_x):
            raise IndexError(f"grid index ({i}, {j}) out of range for shape {self.shape}")
        return self.nodes[i][j]

    def position(self, i: int, j: int) -> Tuple[float, float, float]:
        x, y, z = self.node(i, j).position
        return float(x), float(y), float(z)

    def positions(self) -> np.ndarray:
        """Copy of all positions as a ``(subdivisions_y, subdivisions_x, 3)`` array."""
        return np.array([[node.position for node in row] for row in self.nodes])

    def is_finite(self) -> bool:
        return all(
            np.all(np.isfinite(node.position)) and np.all(np.isfinite(node.velocity))
            for node in self
        )

    # -- Topology ---------------------------------------------------------
    def neighbours(self, i: int, j: int) -> Iterator[Tuple[Node, float]]:
        """Yield ``(neighbour, rest_length)`` for every structural link of ``(i, j)``."""

        if i > 0:
            yield self.nodes[i - 1][j], self.rest_height
        if i < self.subdivisions_y - 1:
            yield self.nodes[i + 1][j], self.rest_height
        if j > 0:
            yield self.nodes[i][j - 1], self.rest_width
        if j < self.subdivisions_x - 1:
            yield self.nodes[i][j + 1], self.rest_width

    def links(self) -> Iterator[Tuple[GridIndex, GridIndex]]:
        """Yield every structural link once, as a pair of grid indices."""

        for i in range(self.subdivisions_y):
            for j in range(self.subdivisions_x):
                if j + 1 < self.subdivisions_x:
                    yield (i, j), (i, j + 1)
                if i + 1 < self.subdivisions_y:
                    yield (i, j), (i + 1, j)

    # -- Forces -----------------------------------------------------------
    def spring_force(self, node: Node, other: Node, rest_length: float) -> np.ndarray:
        """Hooke force on ``node`` from the link to ``other`` plus velocity damping.

        Damping acts on the absolute velocity of ``node``.  A zero-length link has
        no direction, so its Hooke term is dropped and only damping remains.
        """

        force = -self.damping * node.velocity
        displacement = other.position - node.position
        length = float(np.linalg.norm(displacement))
        if length == 0.0:
            return force
        direction = displacement / length
        return self.stiffness * (length - rest_length) * direction + force

    def accumulate_forces(self, external_force: Optional[np.ndarray] = None) -> None:
        """Add spring, gravity and external forces to every node's ``net_force``."""

        if external_force is None:
            external = np.zeros(3)
        else:
            external = np.asarray(external_force, dtype=np.float64)
            if external.shape != (3,):
                raise ValueError("external_force must be a 3D vector")

        has_gravity = bool(np.any(self.gravity))

        for i, row in enumerate(self.nodes):
            for j, node in enumerate(row):
                for other, rest_length in self.neighbours(i, j):
                    node.net_force += self.spring_force(node, other, rest_length)

                if has_gravity:
                    node.net_force += node.mass * self.gravity

                if i == self.anchor_row:
                    node.net_force += external

    def apply_impulse(self, i: int, j: int, impulse) -> None:
        impulse = np.asarray(impulse, dtype=np.float64)
        if impulse.shape != (3,):
            raise ValueError("impulse must be a 3D vector")
        self.node(i, j).net_impulse += impulse

    # -- Constraints ------------------------------------------------------
    def pin(self, i: int, j: int) -> None:
        """Make node ``(i, j)`` immovable by giving it infinite mass."""

        current = self.node(i, j)
        self.nodes[i][j] = Node(position=current.position, mass=0.0)
        logger.debug("Pinned node (%d, %d)", i, j)

    def reset(self) -> None:
        """Put every node back at its initial position, at rest and unpinned."""

        self.nodes = self._build_nodes()

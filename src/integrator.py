"""Second order Euler integration of a point mass."""
from __future__ import annotations

from node2d import Node


def integrate(dt: float, node: Node) -> None:
    """Advance ``node`` by ``dt`` using the forces accumulated this step.

    The position uses ``x += v*dt + a*dt^2/2``; the velocity picks up both the
    acceleration and the accumulated impulse.  Both accumulators are zeroed
    afterwards so nothing carries over to the next step.
    """

    node.acceleration[:] = node.inverse_mass * node.net_force

    node.position += dt * node.velocity + 0.5 * node.acceleration * dt ** 2
    node.velocity += dt * node.acceleration + node.inverse_mass * node.net_impulse

    node.net_force.fill(0.0)
    node.net_impulse.fill(0.0)

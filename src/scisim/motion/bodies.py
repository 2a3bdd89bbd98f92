"""
Rigid circular bodies and their contact response.

resolve_collision() is the pairwise circle-circle response used by the
collision scenario:
1. Detect overlap (centre distance < sum of radii)
2. Push the bodies apart along the normal, the lighter one moving more
3. Skip the impulse if the bodies already separate along the normal
4. Apply j = -(1 + e)(v_rel · n) / (1/m1 + 1/m2) to both velocities

Coincident centres have no defined normal and are left alone.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from itertools import combinations
from typing import Sequence

import numpy as np

from scisim.core.vectors import EPS, magnitude


@dataclass
class Body:
    """A circular body in canvas coordinates."""

    position: np.ndarray
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))
    mass: float = 1.0
    radius: float = 10.0
    color: str = "#4682B4"

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=np.float64).copy()
        self.velocity = np.asarray(self.velocity, dtype=np.float64).copy()
        if self.mass <= 0:
            msg = f"Body mass must be positive, got {self.mass}"
            raise ValueError(msg)

    @property
    def momentum(self) -> np.ndarray:
        return self.mass * self.velocity

    @property
    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * float(self.velocity @ self.velocity)

    def overlaps(self, other: "Body") -> bool:
        distance = float(np.hypot(*(other.position - self.position)))
        return distance < self.radius + other.radius


def resolve_collision(a: Body, b: Body, restitution: float) -> bool:
    """
    Separate two overlapping bodies and exchange an impulse.

    Args:
        a, b: Bodies, modified in place
        restitution: 1 is perfectly elastic, 0 perfectly inelastic

    Returns:
        True if an impulse was applied
    """
    delta = b.position - a.position
    distance = magnitude(delta)
    min_distance = a.radius + b.radius

    if distance >= min_distance or distance < EPS:
        return False

    normal = delta / distance

    # Heavier body moves less
    overlap = min_distance - distance
    total_mass = a.mass + b.mass
    a.position -= normal * overlap * (b.mass / total_mass)
    b.position += normal * overlap * (a.mass / total_mass)

    relative_velocity = b.velocity - a.velocity
    approach = float(relative_velocity @ normal)
    if approach >= 0:
        return False

    j = -(1 + restitution) * approach / (1 / a.mass + 1 / b.mass)
    a.velocity -= j * normal / a.mass
    b.velocity += j * normal / b.mass
    return True


def resolve_all(bodies: Sequence[Body], restitution: float) -> int:
    """
    Resolve every unordered pair once.

    Returns:
        Number of pairs that exchanged an impulse
    """
    return sum(resolve_collision(a, b, restitution) for a, b in combinations(bodies, 2))


def reflect_off_walls(
    body: Body,
    width: float,
    height: float,
    restitution: float,
    resting_speed: float = 0.0,
) -> bool:
    """
    Keep a body inside [0, width] x [0, height].

    A body past a wall is clamped onto it and the velocity component into the
    wall is reflected and scaled by restitution. If that component is no
    faster than resting_speed (e.g. one frame of gravity) the contact is
    treated as resting and the component is zeroed instead.

    Returns:
        True if any wall was touched
    """
    touched = False
    r = body.radius
    limits = ((r, width - r), (r, height - r))

    for axis, (low, high) in enumerate(limits):
        pos = body.position[axis]
        vel = body.velocity[axis]
        if pos < low:
            body.position[axis] = low
            into_wall = vel < 0
        elif pos > high:
            body.position[axis] = high
            into_wall = vel > 0
        else:
            continue

        touched = True
        if not into_wall:
            continue
        if abs(vel) <= resting_speed:
            body.velocity[axis] = 0.0
        else:
            body.velocity[axis] = -vel * restitution

    return touched


def total_momentum(bodies: Sequence[Body]) -> np.ndarray:
    """Vector sum of m·v."""
    return sum((b.momentum for b in bodies), np.zeros(2))

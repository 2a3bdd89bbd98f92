"""
Mechanics scenarios.

- FreeFallSimulation: drop from rest with optional air drag
- ProjectileSimulation: oblique launch, measured vs theoretical apex and range
- PendulumSimulation: simple pendulum with measured period
- CollisionSimulation: balls in a box with impulse-based collisions
- InclinedPlaneSimulation: sliding block with friction

All of them report mechanical energy recomputed from state every frame.
"""

from scisim.motion.bodies import Body, reflect_off_walls, resolve_all, resolve_collision, total_momentum
from scisim.motion.base import MotionSimulation
from scisim.motion.freefall import FreeFallSimulation
from scisim.motion.projectile import ProjectileSimulation
from scisim.motion.pendulum import PendulumSimulation
from scisim.motion.collision import CollisionSimulation
from scisim.motion.inclined_plane import InclinedPlaneSimulation

__all__ = [
    "Body",
    "reflect_off_walls",
    "resolve_all",
    "resolve_collision",
    "total_momentum",
    "MotionSimulation",
    "FreeFallSimulation",
    "ProjectileSimulation",
    "PendulumSimulation",
    "CollisionSimulation",
    "InclinedPlaneSimulation",
]

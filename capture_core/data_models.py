#!/usr/bin/env python3
"""
Data models for the satellite capture simulator.

This module defines the state shared between physics, the capture rules, the
lifecycle manager and the renderer.

Units and usage
- Positions, velocities and radii are in world units; G is dimensionless.
- Vectors are (x, y) tuples and are replaced, never mutated in place.
- A particle refers to its captor by index into World.bodies. The body does not
  know its captors, and World.body_at() validates the index on every use.
- Trails are rendering artifacts; removing them must not change the physics.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .config import ConfigurationError
from .trail import TrailBuffer
from .vector_utils import Vec2, ZERO


class CaptureState(Enum):
    FREE = "free"
    CAPTURED = "captured"
    UNCAPTURABLE = "uncapturable"


@dataclass
class MassiveBody:
    """
    A static attractor in the mass field.

    Fields:
    - position: centre of the body
    - mass: gravitational mass (> 0)
    - radius: collision radius (> 0)
    - color: opaque RGB tuple, only used by the renderer
    - orbital_lanes: precomputed lane radii (ascending) for lane spawning
    """
    position: Vec2
    mass: float
    radius: float
    color: Tuple[int, int, int] = (255, 200, 140)
    orbital_lanes: Tuple[float, ...] = ()

    def __post_init__(self):
        if self.mass <= 0:
            raise ConfigurationError(f"body mass must be > 0, got {self.mass}")
        if self.radius <= 0:
            raise ConfigurationError(f"body radius must be > 0, got {self.radius}")
        self.position = (float(self.position[0]), float(self.position[1]))
        self.orbital_lanes = tuple(sorted(float(r) for r in self.orbital_lanes))


@dataclass
class Particle:
    """
    A satellite: a test mass that feels the bodies but not other particles.

    acceleration always holds the force-model value at the start of the next
    substep. capturable only ever goes from True to False.
    """
    id: int
    mass: float
    position: Vec2
    velocity: Vec2
    acceleration: Vec2
    capturable: bool
    trail: TrailBuffer
    capturing_index: Optional[int] = None
    settle_distance: float = 0.0

    @property
    def is_captured(self) -> bool:
        return self.capturing_index is not None

    @property
    def capture_state(self) -> CaptureState:
        if self.capturing_index is not None:
            return CaptureState.CAPTURED
        if self.capturable:
            return CaptureState.FREE
        return CaptureState.UNCAPTURABLE

    def release(self) -> None:
        """Drop the captor link and make the particle permanently uncapturable."""
        self.capturing_index = None
        self.settle_distance = 0.0
        self.capturable = False


@dataclass
class DyingTrail:
    """Trail of a collided particle fading out on its own clock."""
    positions: Tuple[Vec2, ...]
    remaining_ticks: int
    total_ticks: int

    @property
    def fade_fraction(self) -> float:
        return self.remaining_ticks / self.total_ticks

    @property
    def expired(self) -> bool:
        return self.remaining_ticks <= 0

    def tick(self) -> None:
        self.remaining_ticks -= 1


@dataclass
class World:
    """
    Complete simulation state for one run.

    bodies is fixed after generation; particles is kept in insertion order so the
    oldest particle is always particles[0].
    """
    bodies: List[MassiveBody]
    particles: List[Particle] = field(default_factory=list)
    dying_trails: List[DyingTrail] = field(default_factory=list)
    frame: int = 0
    next_particle_id: int = 0

    def body_at(self, index: Optional[int]) -> Optional[MassiveBody]:
        """Resolve a captor index; stale or missing links resolve to None."""
        if index is None or not 0 <= index < len(self.bodies):
            return None
        return self.bodies[index]

    def allocate_particle_id(self) -> int:
        pid = self.next_particle_id
        self.next_particle_id += 1
        return pid

    def mean_body_mass(self) -> float:
        if not self.bodies:
            return 0.0
        return sum(b.mass for b in self.bodies) / len(self.bodies)


def new_particle(pid: int, mass: float, position: Vec2, velocity: Vec2, capturable: bool,
                 trail_capacity: int, acceleration: Vec2 = ZERO) -> Particle:
    """Build a particle whose trail is seeded with its starting position."""
    trail = TrailBuffer(trail_capacity)
    trail.append(position)
    return Particle(
        id=pid,
        mass=mass,
        position=(float(position[0]), float(position[1])),
        velocity=(float(velocity[0]), float(velocity[1])),
        acceleration=acceleration,
        capturable=capturable,
        trail=trail,
    )

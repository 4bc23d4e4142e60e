#!/usr/bin/env python3
"""
Culling for the satellite capture simulator.

Two removal paths, checked in this order for every particle once per frame:
- Collision: the particle touches a body (distance <= body radius + particle radius).
  Its trail is copied into a DyingTrail that fades out independently.
- Ejection: the particle is at least config.ejection_distance from some body.
  It is dropped without a trail.

Collision is tested first, so a particle meeting both conditions is always
reported as collided.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from .config import SimulationConfig
from .data_models import DyingTrail, MassiveBody, Particle, World
from .vector_utils import vec_dist

logger = logging.getLogger(__name__)


@dataclass
class CullReport:
    collided: int = 0
    ejected: int = 0


def find_collision(particle: Particle, bodies: List[MassiveBody], particle_radius: float) -> Optional[int]:
    """Index of the first body the particle touches, or None."""
    for i, body in enumerate(bodies):
        if vec_dist(particle.position, body.position) <= body.radius + particle_radius:
            return i
    return None


def is_ejected(particle: Particle, bodies: List[MassiveBody], ejection_distance: float) -> bool:
    return any(vec_dist(particle.position, body.position) >= ejection_distance for body in bodies)


def cull_particles(world: World, config: SimulationConfig) -> CullReport:
    """Remove collided and ejected particles in place, keeping insertion order."""
    report = CullReport()
    survivors: List[Particle] = []
    ejection_distance = config.ejection_distance

    for particle in world.particles:
        hit = find_collision(particle, world.bodies, config.particle_radius)
        if hit is not None:
            report.collided += 1
            if config.dying_trails_enabled and len(particle.trail) > 0:
                world.dying_trails.append(DyingTrail(
                    positions=particle.trail.snapshot(),
                    remaining_ticks=config.dying_trail_ticks,
                    total_ticks=config.dying_trail_ticks,
                ))
            logger.debug("Particle %d collided with body %d", particle.id, hit)
            continue
        if is_ejected(particle, world.bodies, ejection_distance):
            report.ejected += 1
            logger.debug("Particle %d ejected at %s", particle.id, particle.position)
            continue
        survivors.append(particle)

    world.particles[:] = survivors
    return report


def tick_dying_trails(world: World) -> int:
    """Advance every dying trail by one frame and drop the expired ones. Returns the number dropped."""
    for trail in world.dying_trails:
        trail.tick()
    before = len(world.dying_trails)
    world.dying_trails[:] = [t for t in world.dying_trails if not t.expired]
    return before - len(world.dying_trails)

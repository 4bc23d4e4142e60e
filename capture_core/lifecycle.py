#!/usr/bin/env python3
"""
Particle lifecycle: spawning, the population cap and trail upkeep.

Spawn modes
- EDGE_ENTRY: the particle enters from one of the four sides of the spawn square and is
  launched at a randomly chosen body with an inbound plus a sideways component.
- ORBITAL_LANE: the particle appears on one of a body's precomputed lane radii, already
  moving at the circular speed for that lane.

Culling lives in collisions.py; this module only adds particles and trims the population.
"""
import logging
import math
import random
from typing import List, Optional

from .config import SimulationConfig, SpawnMode, VelocityMassSource
from .data_models import MassiveBody, Particle, World, new_particle
from .physics import SatellitePhysics, circular_orbit_velocity
from .vector_utils import Vec2, vec_add, vec_dist, vec_norm, vec_perp, vec_scale, vec_sub

logger = logging.getLogger(__name__)


def edge_spawn_position(config: SimulationConfig, rng: random.Random) -> Vec2:
    """Uniform point on one of the four sides (chosen uniformly) of the spawn square."""
    r = config.spawn_radius
    side = rng.randrange(4)
    along = rng.uniform(-r, r)
    if side == 0:
        return (-r, along)
    if side == 1:
        return (r, along)
    if side == 2:
        return (along, -r)
    return (along, r)


def edge_entry_velocity(position: Vec2, target: MassiveBody, world: World, config: SimulationConfig,
                        rng: random.Random) -> Vec2:
    """
    Inbound radial component plus a tangential component, both at roughly circular speed.

    The tangential direction is the radial direction turned a quarter turn either way,
    picked at random.
    """
    if config.velocity_mass_source is VelocityMassSource.NEAREST:
        mass = target.mass
    else:
        mass = world.mean_body_mass()
    distance = vec_dist(position, target.position)
    lo, hi = config.speed_multiplier_range
    speed = circular_orbit_velocity(config.G, mass, distance) * rng.uniform(lo, hi)

    radial = vec_norm(vec_sub(target.position, position))
    tangential = vec_perp(radial)
    if rng.random() < 0.5:
        tangential = (-tangential[0], -tangential[1])
    return vec_add(vec_scale(radial, speed), vec_scale(tangential, speed))


def lane_spawn_state(body: MassiveBody, config: SimulationConfig, rng: random.Random):
    """Position on a random lane of body and the circular velocity for that lane."""
    if body.orbital_lanes:
        lane = rng.choice(body.orbital_lanes)
    else:
        # Bodies built by hand may carry no lanes; fall back to just above the surface band.
        lane = max(body.radius * 2.0, config.ring_min_distance)
    angle = rng.uniform(0.0, 2.0 * math.pi)
    offset = (math.cos(angle) * lane, math.sin(angle) * lane)
    position = vec_add(body.position, offset)
    speed = circular_orbit_velocity(config.G, body.mass, lane)
    direction = vec_perp(vec_norm(offset))
    if rng.random() < 0.5:
        direction = (-direction[0], -direction[1])
    return position, vec_scale(direction, speed)


def spawn_particle(world: World, config: SimulationConfig, physics: SatellitePhysics,
                   rng: random.Random) -> Optional[Particle]:
    """Create one particle according to config.spawn_mode and append it to the world."""
    if not world.bodies:
        return None
    target = rng.choice(world.bodies)
    if config.spawn_mode is SpawnMode.ORBITAL_LANE:
        position, velocity = lane_spawn_state(target, config, rng)
    else:
        position = edge_spawn_position(config, rng)
        velocity = edge_entry_velocity(position, target, world, config, rng)

    capturable = rng.random() < config.capturable_fraction
    particle = new_particle(
        world.allocate_particle_id(),
        config.particle_mass,
        position,
        velocity,
        capturable,
        config.trail_capacity,
    )
    physics.prime(particle, world.bodies)
    world.particles.append(particle)
    logger.debug("Spawned particle %d at (%.1f, %.1f), capturable=%s",
                 particle.id, position[0], position[1], capturable)
    return particle


def maybe_spawn(world: World, config: SimulationConfig, physics: SatellitePhysics,
                rng: random.Random) -> Optional[Particle]:
    """Spawn with probability config.spawn_probability."""
    if rng.random() >= config.spawn_probability:
        return None
    return spawn_particle(world, config, physics, rng)


def enforce_population_cap(world: World, max_particles: int) -> List[Particle]:
    """Evict the oldest particles until at most max_particles remain. Returns the evicted ones."""
    excess = len(world.particles) - max_particles
    if excess <= 0:
        return []
    evicted = world.particles[:excess]
    del world.particles[:excess]
    for particle in evicted:
        logger.debug("Evicted particle %d (population cap %d)", particle.id, max_particles)
    return evicted


def update_trails(world: World, config: SimulationConfig) -> bool:
    """Append each particle's position to its trail every config.trail_interval frames."""
    if world.frame % config.trail_interval != 0:
        return False
    for particle in world.particles:
        particle.trail.append(particle.position)
    return True

#!/usr/bin/env python3
"""
Probabilistic capture and release of satellites.

States per particle:
- FREE: capturable, feels the whole field
- CAPTURED: feels only its captor; velocity is nudged toward a circular orbit each frame
- UNCAPTURABLE: released once, never captured again

Rules run once per frame after integration. A gradual velocity blend is used
instead of solving for an exact orbit; particles settle into rings over a few
frames.
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .config import SimulationConfig
from .data_models import MassiveBody, Particle, World
from .physics import SatellitePhysics, circular_orbit_velocity
from .vector_utils import Vec2, vec_dist, vec_dot, vec_lerp, vec_norm, vec_perp, vec_scale, vec_sub

logger = logging.getLogger(__name__)


@dataclass
class CaptureReport:
    captured: int = 0
    released: int = 0


def nearest_body(position: Vec2, bodies: Sequence[MassiveBody]) -> Optional[Tuple[int, float]]:
    """Return (index, distance) of the closest body, or None for an empty field."""
    best = None
    for i, body in enumerate(bodies):
        d = vec_dist(position, body.position)
        if best is None or d < best[1]:
            best = (i, d)
    return best


def is_tangential(particle: Particle, body: MassiveBody, tolerance: float) -> bool:
    """True when the velocity is within tolerance of perpendicular to the radius vector."""
    radius_dir = vec_norm(vec_sub(body.position, particle.position))
    velocity_dir = vec_norm(particle.velocity)
    return abs(vec_dot(radius_dir, velocity_dir)) < tolerance


def target_orbit_velocity(particle: Particle, body: MassiveBody, G: float) -> Vec2:
    """
    Ideal circular-orbit velocity at the particle's current distance from body.

    Of the two perpendiculars to the radius vector, the one closer to the current
    velocity is used so the orbit keeps its handedness.
    """
    distance = vec_dist(particle.position, body.position)
    speed = circular_orbit_velocity(G, body.mass, distance)
    to_body = vec_norm(vec_sub(body.position, particle.position))
    ccw = vec_perp(to_body)
    cw = (-ccw[0], -ccw[1])
    current = vec_norm(particle.velocity)
    direction = ccw if vec_dot(current, ccw) > vec_dot(current, cw) else cw
    return vec_scale(direction, speed)


def blend_captured_velocity(particle: Particle, body: MassiveBody, config: SimulationConfig) -> None:
    target = target_orbit_velocity(particle, body, config.G)
    particle.velocity = vec_lerp(particle.velocity, target, config.capture_blend_factor)


def apply_damping(particle: Particle, body: MassiveBody, config: SimulationConfig) -> bool:
    """Scale down the velocity of a captured particle that drifted past its settling distance."""
    if particle.settle_distance <= 0:
        return False
    distance = vec_dist(particle.position, body.position)
    if distance <= config.damping_distance_ratio * particle.settle_distance:
        return False
    particle.velocity = vec_scale(particle.velocity, config.damping_factor)
    return True


def try_capture(particle: Particle, bodies: Sequence[MassiveBody], config: SimulationConfig,
                rng: random.Random) -> bool:
    """Attempt to capture a free particle around its nearest body."""
    found = nearest_body(particle.position, bodies)
    if found is None:
        return False
    index, distance = found
    if not config.ring_min_distance <= distance <= config.ring_max_distance:
        return False
    if not is_tangential(particle, bodies[index], config.tangential_tolerance):
        return False
    if rng.random() >= config.capture_probability:
        return False
    particle.capturing_index = index
    particle.settle_distance = distance
    return True


def update_captures(world: World, config: SimulationConfig, rng: random.Random,
                    physics: Optional[SatellitePhysics] = None) -> CaptureReport:
    """
    Run one frame of capture rules over every particle.

    Pass 1 blends captured particles (and damps them when enabled) or attempts a
    capture on free ones. Pass 2 rolls for release on every captured particle.

    Capturing, releasing or dropping a stale captor changes which bodies act on a
    particle, so its stored acceleration is re-primed against the new set.
    """
    if physics is None:
        physics = SatellitePhysics.from_config(config)
    report = CaptureReport()
    if not world.bodies:
        # No attractors means nothing can be captured; the run is misconfigured upstream.
        logger.debug("Frame %d: empty mass field, capture rules skipped", world.frame)
        return report

    for particle in world.particles:
        if not particle.capturable:
            continue
        if particle.is_captured:
            captor = world.body_at(particle.capturing_index)
            if captor is None:
                logger.debug("Particle %d: captor index %s no longer valid", particle.id, particle.capturing_index)
                particle.capturing_index = None
                particle.settle_distance = 0.0
                physics.prime(particle, world.bodies)
                continue
            blend_captured_velocity(particle, captor, config)
            if config.damping_enabled:
                apply_damping(particle, captor, config)
            continue
        if try_capture(particle, world.bodies, config, rng):
            report.captured += 1
            physics.prime(particle, world.bodies)
            logger.debug(
                "Particle %d captured by body %d at distance %.1f",
                particle.id, particle.capturing_index, particle.settle_distance,
            )

    for particle in world.particles:
        if not particle.is_captured:
            continue
        if rng.random() < config.uncapture_probability:
            particle.release()
            physics.prime(particle, world.bodies)
            report.released += 1
            logger.debug("Particle %d released, now uncapturable", particle.id)

    return report

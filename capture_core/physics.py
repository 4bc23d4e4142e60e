#!/usr/bin/env python3
"""
Core Physics Engine for the satellite capture simulator

Responsibilities
- Compute the softened gravitational acceleration a test particle feels from a set of
  massive bodies (the whole field, or only its captor).
- Advance particle states with velocity-Verlet (leapfrog) for a fixed number of substeps.
- Provide the circular-orbit speed helper used by spawning and capture blending.

Units and conventions
- Dimensionless world units; G is a configuration value (1.0 by default).
- Bodies are static for the orbit/capture core, so only particles are integrated.

Numerical notes
- Softening: the squared separation is clamped from below (max(r^2, eps)) rather than
  Plummer-smoothed, so the force is exact inverse-square outside sqrt(eps).
- Complexity: particles are test masses and do not attract each other, so a substep costs
  O(particles x bodies) instead of O(particles^2).
- Energy: velocity-Verlet is symplectic and second order, so circular orbits stay within a
  small bounded radius error. No drift correction is applied here; the damped-rings variant
  handles that in the capture rules.
"""

import math
from typing import Iterable, List, Sequence

from .data_models import MassiveBody, Particle
from .vector_utils import Vec2, ZERO
from . import constants as C


class SatellitePhysics:
    """
    Softened inverse-square gravity acting on test particles.

    The acceleration on a particle at p from a body of mass m at b is:
    a = G * m * (b - p) / d^3,   d^2 = max(|b - p|^2, eps)

    Where eps is the softening floor.
    """

    def __init__(self, G: float = C.G, softening_floor: float = C.SOFTENING_FLOOR):
        """
        Initialize the physics engine.

        Args:
            G: Gravitational constant in simulation units
            softening_floor: Minimum squared separation used by the force law
        """
        self.G = float(G)
        self.softening_floor = max(0.0, float(softening_floor))

    @classmethod
    def from_config(cls, config) -> "SatellitePhysics":
        return cls(config.G, config.softening_floor)

    def compute_acceleration(self, position: Vec2, influencers: Iterable[MassiveBody]) -> Vec2:
        """
        Sum the gravitational acceleration at position from each influencing body.

        A body sitting exactly on the position contributes nothing (zero direction),
        which keeps the sum finite even with a zero softening floor.

        Args:
            position: (x, y) point being evaluated.
            influencers: Bodies that act on the point.

        Returns:
            (ax, ay) acceleration.
        """
        px, py = position
        ax_total, ay_total = 0.0, 0.0
        for body in influencers:
            dx = body.position[0] - px
            dy = body.position[1] - py
            raw_sq = dx * dx + dy * dy
            if raw_sq == 0.0:
                continue
            dist_sq = max(raw_sq, self.softening_floor)
            # Direction normalised by the softened distance, scaled by G*m/d^2
            factor = self.G * body.mass / (dist_sq * math.sqrt(dist_sq))
            ax_total += dx * factor
            ay_total += dy * factor
        return (ax_total, ay_total)

    def influencers_for(self, particle: Particle, bodies: Sequence[MassiveBody]) -> Sequence[MassiveBody]:
        """
        Bodies acting on a particle: only its captor while captured, otherwise the whole field.

        A dangling captor index falls back to the whole field; the capture rules clear it.
        """
        idx = particle.capturing_index
        if idx is not None and 0 <= idx < len(bodies):
            return (bodies[idx],)
        return bodies

    def verlet_step(self, particle: Particle, influencers: Sequence[MassiveBody], dt: float) -> None:
        """
        Perform one velocity-Verlet step on a single particle.

        Workflow:
        1) x += v*dt + 0.5*a*dt^2
        2) a' = F(x)
        3) v += 0.5*(a + a')*dt
        4) a = a'

        Args:
            particle: Particle to advance (modified in place).
            influencers: Bodies acting on it during this step.
            dt: Time step (> 0).
        """
        x, y = particle.position
        vx, vy = particle.velocity
        ax, ay = particle.acceleration
        half_dt_sq = 0.5 * dt * dt

        position = (x + vx * dt + ax * half_dt_sq, y + vy * dt + ay * half_dt_sq)
        nax, nay = self.compute_acceleration(position, influencers)

        particle.position = position
        particle.velocity = (vx + 0.5 * (ax + nax) * dt, vy + 0.5 * (ay + nay) * dt)
        particle.acceleration = (nax, nay)

    def integrate(self, particles: List[Particle], bodies: Sequence[MassiveBody], dt: float, steps: int) -> None:
        """
        Advance every particle by steps substeps of size dt.

        Each particle is independent, so the loop runs particle by particle; the captor set
        cannot change between substeps because capture rules only run once per frame.
        """
        for particle in particles:
            influencers = self.influencers_for(particle, bodies)
            for _ in range(steps):
                self.verlet_step(particle, influencers, dt)

    def prime(self, particle: Particle, bodies: Sequence[MassiveBody]) -> None:
        """Set the particle's acceleration for its current position (no cold start)."""
        if not bodies:
            particle.acceleration = ZERO
            return
        particle.acceleration = self.compute_acceleration(
            particle.position, self.influencers_for(particle, bodies)
        )


def circular_orbit_velocity(G: float, central_mass: float, orbital_radius: float) -> float:
    """
    Calculate the speed needed for a circular orbit.

    For a circular orbit, gravity provides exactly the centripetal force:
    G * M / r = v^2 / r, therefore v = sqrt(G * M / r)

    Returns 0 for a non-positive radius or mass.
    """
    if orbital_radius <= 0 or central_mass <= 0:
        return 0.0
    return math.sqrt(G * central_mass / orbital_radius)

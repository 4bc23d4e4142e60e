#!/usr/bin/env python3
"""
Frame stepping for the satellite capture simulator.

advance() runs one frame, in this order:
1) spawn (Bernoulli) and trim the population to the cap, oldest first
2) integrate every particle for steps_per_frame substeps
3) append trail points
4) capture attempts, captured blending/damping, release rolls
5) cull collided and ejected particles
6) fade dying trails

The renderer only ever reads a FrameSnapshot taken after advance() returns, so it never
sees a half-updated world.

All randomness comes from the random.Random passed in; there is no module-level state,
so a seed plus a config fully determines a run.
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .capture import update_captures
from .collisions import cull_particles, tick_dying_trails
from .config import SimulationConfig
from .data_models import CaptureState, World
from .layout import create_world
from .lifecycle import enforce_population_cap, maybe_spawn, update_trails
from .physics import SatellitePhysics
from .vector_utils import Vec2

logger = logging.getLogger(__name__)


@dataclass
class SimulationStats:
    """Running totals since the world was created."""
    spawned: int = 0
    evicted: int = 0
    collided: int = 0
    ejected: int = 0
    captured: int = 0
    released: int = 0


@dataclass(frozen=True)
class BodyView:
    position: Vec2
    radius: float
    mass: float
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class ParticleView:
    id: int
    position: Vec2
    velocity: Vec2
    state: CaptureState
    trail: Tuple[Vec2, ...]  # oldest -> newest


@dataclass(frozen=True)
class DyingTrailView:
    positions: Tuple[Vec2, ...]
    fade_fraction: float


@dataclass(frozen=True)
class FrameSnapshot:
    frame: int
    bodies: Tuple[BodyView, ...]
    particles: Tuple[ParticleView, ...]
    dying_trails: Tuple[DyingTrailView, ...]


def advance(world: World, config: SimulationConfig, rng: random.Random,
            physics: Optional[SatellitePhysics] = None,
            stats: Optional[SimulationStats] = None) -> World:
    """
    Advance world by one rendered frame.

    The world is updated in place and returned. Pass the same rng on every call to keep
    the run reproducible.
    """
    if physics is None:
        physics = SatellitePhysics.from_config(config)

    spawned = maybe_spawn(world, config, physics, rng)
    evicted = enforce_population_cap(world, config.max_particles)

    physics.integrate(world.particles, world.bodies, config.dt, config.steps_per_frame)
    update_trails(world, config)
    captures = update_captures(world, config, rng, physics)
    culled = cull_particles(world, config)
    tick_dying_trails(world)

    world.frame += 1

    if stats is not None:
        stats.spawned += 1 if spawned is not None else 0
        stats.evicted += len(evicted)
        stats.captured += captures.captured
        stats.released += captures.released
        stats.collided += culled.collided
        stats.ejected += culled.ejected
    return world


def take_snapshot(world: World) -> FrameSnapshot:
    """Copy the renderer-facing parts of world into immutable views."""
    return FrameSnapshot(
        frame=world.frame,
        bodies=tuple(BodyView(b.position, b.radius, b.mass, b.color) for b in world.bodies),
        particles=tuple(
            ParticleView(p.id, p.position, p.velocity, p.capture_state, p.trail.snapshot())
            for p in world.particles
        ),
        dying_trails=tuple(DyingTrailView(t.positions, t.fade_fraction) for t in world.dying_trails),
    )


class SatelliteSimulation:
    """
    Owns one run: configuration, seeded random source, physics engine and world.

    The world is regenerated from the seed on construction and on reset(), so the same
    (config, seed) pair always replays the same frames.
    """

    def __init__(self, config: Optional[SimulationConfig] = None, seed: Optional[int] = None,
                 world: Optional[World] = None):
        self.config = config or SimulationConfig()
        self.physics = SatellitePhysics.from_config(self.config)
        self.seed = seed
        self.rng = random.Random(seed)
        self.stats = SimulationStats()
        self.world = world if world is not None else create_world(self.config, self.rng)
        if not self.world.bodies:
            logger.warning("Simulation started with an empty mass field; nothing will spawn or be captured")
        logger.info("Simulation ready: %d bodies, seed=%s, spawn mode=%s",
                    len(self.world.bodies), seed, self.config.spawn_mode.value)

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.seed = seed
        self.rng = random.Random(self.seed)
        self.stats = SimulationStats()
        self.world = create_world(self.config, self.rng)
        logger.info("Simulation reset: %d bodies, seed=%s", len(self.world.bodies), self.seed)

    def step(self, frames: int = 1) -> FrameSnapshot:
        for _ in range(frames):
            advance(self.world, self.config, self.rng, self.physics, self.stats)
        return self.snapshot()

    @property
    def frame(self) -> int:
        return self.world.frame

    def bodies(self):
        return tuple(self.world.bodies)

    def particles(self):
        return tuple(self.world.particles)

    def dying_trails(self):
        return tuple(self.world.dying_trails)

    def snapshot(self) -> FrameSnapshot:
        return take_snapshot(self.world)

#!/usr/bin/env python3
"""
Procedural placement of the massive bodies.

Two strategies, both using rejection sampling against a minimum spacing:
- Grid: the domain is split into grid_size x grid_size cells, the cells are shuffled and
  each body is jittered inside its cell. A body that lands too close to an accepted one is
  dropped, so the final count can be lower than the drawn count.
- Cluster: bodies are drawn from a Gaussian around a random centre until the drawn count is
  reached or max_attempts runs out.

Every body also gets its orbital lanes (evenly spaced radii) and a warm colour.
"""
import logging
import random
from typing import List, Optional, Tuple

from .config import PlacementConfig, SimulationConfig
from .data_models import MassiveBody, World
from .vector_utils import Vec2, clamp, vec_dist

logger = logging.getLogger(__name__)


def _random_attributes(placement: PlacementConfig, rng: random.Random) -> Tuple[float, float, Tuple[int, int, int]]:
    mass = rng.uniform(*placement.mass_range)
    radius = rng.uniform(*placement.radius_range)
    # Warm yellow-orange-red tones
    color = (int(rng.uniform(200, 255)), int(rng.uniform(150, 220)), int(rng.uniform(100, 180)))
    return mass, radius, color


def orbital_lanes(radius: float, placement: PlacementConfig) -> Tuple[float, ...]:
    """Evenly spaced lane radii across lane_range multiples of the body radius."""
    n = placement.lanes_per_body
    if n <= 0:
        return ()
    lo, hi = placement.lane_range
    if n == 1:
        return (radius * (lo + hi) / 2.0,)
    step = (hi - lo) / (n - 1)
    return tuple(radius * (lo + i * step) for i in range(n))


def _within_bounds(position: Vec2, radius: float, half_size: float) -> bool:
    limit = half_size - radius
    return -limit <= position[0] <= limit and -limit <= position[1] <= limit


def _spaced(position: Vec2, accepted: List[MassiveBody], min_spacing: float) -> bool:
    return all(vec_dist(position, b.position) >= min_spacing for b in accepted)


def _clamp_inside(position: Vec2, radius: float, half_size: float) -> Vec2:
    limit = max(half_size - radius, 0.0)
    return (clamp(position[0], -limit, limit), clamp(position[1], -limit, limit))


def _try_accept(position: Vec2, config: SimulationConfig, rng: random.Random,
                accepted: List[MassiveBody]) -> Optional[MassiveBody]:
    placement = config.placement
    mass, radius, color = _random_attributes(placement, rng)
    position = _clamp_inside(position, radius, config.half_size)
    if not _within_bounds(position, radius, config.half_size):
        return None
    if not _spaced(position, accepted, placement.min_spacing):
        return None
    return MassiveBody(
        position=position,
        mass=mass,
        radius=radius,
        color=color,
        orbital_lanes=orbital_lanes(radius, placement),
    )


def place_on_grid(config: SimulationConfig, rng: random.Random, count: int) -> List[MassiveBody]:
    placement = config.placement
    size = config.domain_size
    cell = size / placement.grid_size
    margin = cell * placement.cell_margin_ratio
    cells = [(gx, gy) for gx in range(placement.grid_size) for gy in range(placement.grid_size)]
    rng.shuffle(cells)

    bodies: List[MassiveBody] = []
    for gx, gy in cells[:count]:
        cx = -config.half_size + (gx + 0.5) * cell
        cy = -config.half_size + (gy + 0.5) * cell
        position = (cx + rng.uniform(-margin, margin), cy + rng.uniform(-margin, margin))
        body = _try_accept(position, config, rng, bodies)
        if body is None:
            logger.debug("Rejected body in cell (%d, %d): too close to a neighbour", gx, gy)
            continue
        bodies.append(body)
    return bodies


def place_in_cluster(config: SimulationConfig, rng: random.Random, count: int) -> List[MassiveBody]:
    placement = config.placement
    spread = placement.cluster_spread * config.half_size
    centre_limit = config.half_size * 0.5
    centre = (rng.uniform(-centre_limit, centre_limit), rng.uniform(-centre_limit, centre_limit))

    bodies: List[MassiveBody] = []
    attempts = 0
    while len(bodies) < count and attempts < placement.max_attempts:
        attempts += 1
        position = (rng.gauss(centre[0], spread), rng.gauss(centre[1], spread))
        body = _try_accept(position, config, rng, bodies)
        if body is not None:
            bodies.append(body)
    if len(bodies) < count:
        logger.warning("Cluster placement gave up after %d attempts: %d of %d bodies placed",
                       attempts, len(bodies), count)
    return bodies


def generate_bodies(config: SimulationConfig, rng: random.Random) -> List[MassiveBody]:
    """Draw a body count from placement.count_range (inclusive) and place that many bodies."""
    placement = config.placement
    count = rng.randint(*placement.count_range)
    if placement.clustered:
        bodies = place_in_cluster(config, rng, count)
    else:
        bodies = place_on_grid(config, rng, min(count, placement.grid_size ** 2))
    logger.info("Placed %d of %d requested bodies (%s layout)",
                len(bodies), count, "cluster" if placement.clustered else "grid")
    return bodies


def create_world(config: SimulationConfig, rng: random.Random) -> World:
    return World(bodies=generate_bodies(config, rng))

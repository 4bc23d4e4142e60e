import itertools
import random

import pytest

from capture_core.config import PlacementConfig, SimulationConfig
from capture_core.layout import create_world, generate_bodies, orbital_lanes
from capture_core.vector_utils import vec_dist


def _assert_valid_layout(bodies, config):
    placement = config.placement
    assert len(bodies) <= placement.count_range[1]
    for body in bodies:
        limit = config.half_size - body.radius
        assert -limit <= body.position[0] <= limit
        assert -limit <= body.position[1] <= limit
        assert placement.mass_range[0] <= body.mass <= placement.mass_range[1]
        assert placement.radius_range[0] <= body.radius <= placement.radius_range[1]
        assert len(body.orbital_lanes) == placement.lanes_per_body
        assert list(body.orbital_lanes) == sorted(body.orbital_lanes)
    for a, b in itertools.combinations(bodies, 2):
        assert vec_dist(a.position, b.position) >= placement.min_spacing


@pytest.mark.parametrize("seed", range(10))
def test_grid_layout_respects_bounds_and_spacing(seed):
    config = SimulationConfig()
    bodies = generate_bodies(config, random.Random(seed))
    assert bodies
    _assert_valid_layout(bodies, config)


@pytest.mark.parametrize("seed", range(10))
def test_cluster_layout_respects_bounds_and_spacing(seed):
    config = SimulationConfig(placement=PlacementConfig(clustered=True, count_range=(3, 5), min_spacing=150.0))
    bodies = generate_bodies(config, random.Random(seed))
    assert bodies
    _assert_valid_layout(bodies, config)


def test_layout_is_reproducible():
    config = SimulationConfig()
    first = [b.position for b in generate_bodies(config, random.Random(99))]
    second = [b.position for b in generate_bodies(config, random.Random(99))]
    assert first == second


def test_orbital_lanes_evenly_spaced():
    placement = PlacementConfig(lanes_per_body=3, lane_range=(1.6, 3.5))
    assert orbital_lanes(10.0, placement) == pytest.approx((16.0, 25.5, 35.0))
    assert orbital_lanes(10.0, PlacementConfig(lanes_per_body=0)) == ()
    assert orbital_lanes(10.0, PlacementConfig(lanes_per_body=1, lane_range=(2.0, 4.0))) == pytest.approx((30.0,))


def test_create_world_starts_empty():
    world = create_world(SimulationConfig(), random.Random(4))
    assert world.particles == []
    assert world.dying_trails == []
    assert world.frame == 0

import random

import pytest

from capture_core.config import SimulationConfig
from capture_core.data_models import MassiveBody, World, new_particle
from capture_core.physics import SatellitePhysics


@pytest.fixture
def config():
    return SimulationConfig()


@pytest.fixture
def physics():
    return SatellitePhysics(G=1.0, softening_floor=0.25)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def central_body():
    return MassiveBody(position=(0.0, 0.0), mass=10000.0, radius=5.0, orbital_lanes=(100.0, 150.0))


@pytest.fixture
def make_particle(physics):
    """Factory for primed particles; ids increase with each call."""
    counter = {"next": 0}

    def _make(position, velocity, bodies, capturable=True, trail_capacity=10):
        p = new_particle(counter["next"], 0.25, position, velocity, capturable, trail_capacity)
        counter["next"] += 1
        physics.prime(p, bodies)
        return p

    return _make


@pytest.fixture
def single_body_world(central_body):
    return World(bodies=[central_body])

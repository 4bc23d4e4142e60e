import pytest

from capture_core.collisions import cull_particles, tick_dying_trails
from capture_core.config import SimulationConfig
from capture_core.data_models import DyingTrail, MassiveBody, World


def test_collision_takes_precedence_over_ejection(make_particle):
    # domain 20 wide -> ejection at 60; body radius 100 -> collision up to 101
    config = SimulationConfig(half_size=10.0)
    body = MassiveBody(position=(0.0, 0.0), mass=1000.0, radius=100.0)
    world = World(bodies=[body])
    p = make_particle((70.0, 0.0), (0.0, 1.0), [body])
    p.trail.append((71.0, 0.0))
    world.particles.append(p)

    report = cull_particles(world, config)

    assert (report.collided, report.ejected) == (1, 0)
    assert world.particles == []
    assert len(world.dying_trails) == 1
    assert world.dying_trails[0].positions == ((70.0, 0.0), (71.0, 0.0))
    assert world.dying_trails[0].fade_fraction == 1.0


def test_ejected_particle_leaves_no_trail(config, single_body_world, central_body, make_particle):
    p = make_particle((config.ejection_distance, 0.0), (1.0, 0.0), [central_body])
    single_body_world.particles.append(p)

    report = cull_particles(single_body_world, config)

    assert (report.collided, report.ejected) == (0, 1)
    assert single_body_world.particles == []
    assert single_body_world.dying_trails == []


def test_collision_boundary_is_inclusive(config, single_body_world, central_body, make_particle):
    touching = make_particle((central_body.radius + config.particle_radius, 0.0), (0.0, 1.0), [central_body])
    clear = make_particle((central_body.radius + config.particle_radius + 0.01, 0.0), (0.0, 1.0), [central_body])
    single_body_world.particles.extend([touching, clear])

    report = cull_particles(single_body_world, config)

    assert report.collided == 1
    assert single_body_world.particles == [clear]


def test_empty_trail_collides_without_dying_trail(config, single_body_world, central_body, make_particle):
    p = make_particle((0.0, 2.0), (0.0, 1.0), [central_body])
    p.trail.clear()
    single_body_world.particles.append(p)
    assert cull_particles(single_body_world, config).collided == 1
    assert single_body_world.dying_trails == []


def test_dying_trails_can_be_disabled(single_body_world, central_body, make_particle):
    config = SimulationConfig(dying_trails_enabled=False)
    single_body_world.particles.append(make_particle((0.0, 2.0), (0.0, 1.0), [central_body]))
    cull_particles(single_body_world, config)
    assert single_body_world.dying_trails == []


def test_survivors_keep_insertion_order(config, single_body_world, central_body, make_particle):
    a = make_particle((50.0, 0.0), (0.0, 1.0), [central_body])
    doomed = make_particle((1.0, 0.0), (0.0, 1.0), [central_body])
    b = make_particle((80.0, 0.0), (0.0, 1.0), [central_body])
    single_body_world.particles.extend([a, doomed, b])
    cull_particles(single_body_world, config)
    assert single_body_world.particles == [a, b]


def test_dying_trail_is_independent_of_particle_trail(config, single_body_world, central_body, make_particle):
    p = make_particle((0.0, 2.0), (0.0, 1.0), [central_body])
    single_body_world.particles.append(p)
    cull_particles(single_body_world, config)
    p.trail.append((9.0, 9.0))
    assert single_body_world.dying_trails[0].positions == ((0.0, 2.0),)


def test_dying_trails_fade_and_expire():
    world = World(bodies=[])
    world.dying_trails.append(DyingTrail(positions=((0.0, 0.0),), remaining_ticks=2, total_ticks=2))

    assert tick_dying_trails(world) == 0
    assert world.dying_trails[0].fade_fraction == pytest.approx(0.5)
    assert tick_dying_trails(world) == 1
    assert world.dying_trails == []

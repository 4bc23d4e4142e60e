import pytest

from capture_core.config import ConfigurationError
from capture_core.trail import TrailBuffer


def test_keeps_most_recent_points_in_order():
    trail = TrailBuffer(3)
    for i in range(4):
        trail.append((float(i), 0.0))
    assert len(trail) == 3
    assert trail.snapshot() == ((1.0, 0.0), (2.0, 0.0), (3.0, 0.0))


def test_length_never_exceeds_capacity():
    trail = TrailBuffer(5)
    for i in range(50):
        trail.append((float(i), float(-i)))
        assert len(trail) <= trail.capacity
    assert trail.snapshot()[0] == (45.0, -45.0)
    assert trail.snapshot()[-1] == (49.0, -49.0)


def test_snapshot_is_a_copy():
    trail = TrailBuffer(2)
    trail.append((1.0, 1.0))
    snap = trail.snapshot()
    trail.append((2.0, 2.0))
    assert snap == ((1.0, 1.0),)


def test_clear():
    trail = TrailBuffer(2)
    trail.append((1.0, 1.0))
    trail.clear()
    assert len(trail) == 0
    assert list(trail) == []


@pytest.mark.parametrize("capacity", [0, -3])
def test_rejects_non_positive_capacity(capacity):
    with pytest.raises(ConfigurationError):
        TrailBuffer(capacity)

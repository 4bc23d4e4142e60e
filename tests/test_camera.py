import pytest

from capture_core.camera import DomainView, drawable


def test_focus_maps_to_window_centre():
    view = DomainView(800, 600)
    view.focus = (10.0, -5.0)
    view.scale = 0.5
    assert view.project((10.0, -5.0)) == (400, 300)
    assert view.project((30.0, -5.0)) == (410, 300)
    assert view.unproject((400, 300)) == (10.0, -5.0)


def test_frame_fits_domain_in_shorter_side():
    view = DomainView(1200, 500)
    view.focus = (99.0, 99.0)
    view.frame(500.0)
    assert view.focus == (0.0, 0.0)
    # 5% padding each side of the 500 px height
    assert view.scale == pytest.approx(450.0 / 1000.0)
    assert view.length(20.0) == pytest.approx(9.0)


def test_zoom_keeps_world_point_under_cursor():
    view = DomainView(1000, 1000)
    cursor = (700, 200)
    before = view.unproject(cursor)
    view.zoom_at(cursor, 2.0)
    assert view.scale == pytest.approx(2.0)
    assert view.unproject(cursor) == pytest.approx(before)


def test_zoom_is_clamped():
    view = DomainView()
    view.zoom_at((0, 0), 1e6)
    assert view.scale == pytest.approx(20.0)


def test_drag_moves_picture_with_pointer():
    view = DomainView(1000, 1000)
    view.scale = 2.0
    view.drag(40, -20)
    assert view.focus == pytest.approx((-20.0, 10.0))
    assert view.project((0.0, 0.0)) == (540, 480)


def test_far_points_are_not_drawable():
    view = DomainView(1000, 1000)
    assert view.project((1e9, 0.0)) is None
    assert drawable((10.4, 20.9)) == (10, 20)

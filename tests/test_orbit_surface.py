import math

import pytest
import vtk

from camprompt.viewers.camera.orbit_surface import OrbitSurface, SphericalOrbitSurface
from camprompt.viewers.camera.vtk_orbit_surface import VtkOrbitSurface


def _vtk_surface(position=(0.0, 0.0, 9.0)):
    camera = vtk.vtkCamera()
    camera.SetPosition(*position)
    return VtkOrbitSurface(camera)


@pytest.fixture(params=["spherical", "vtk"])
def surface(request):
    if request.param == "spherical":
        return SphericalOrbitSurface()
    return _vtk_surface()


def test_reads_front_position(surface):
    assert surface.get_azimuthal_angle() == pytest.approx(0.0)
    assert surface.get_polar_angle() == pytest.approx(math.pi / 2)
    assert surface.get_distance() == pytest.approx(9.0)


def test_azimuth_convention(surface):
    surface.set_azimuthal_angle(math.pi / 2)
    x, y, z = surface.get_position()
    assert (x, y, z) == pytest.approx((9.0, 0.0, 0.0), abs=1e-9)
    surface.set_azimuthal_angle(-math.pi / 2)
    assert surface.get_azimuthal_angle() == pytest.approx(-math.pi / 2)


def test_polar_is_kept_off_the_poles(surface):
    surface.set_polar_angle(0.0)
    assert surface.get_polar_angle() == pytest.approx(OrbitSurface.EPS, abs=1e-9)
    surface.set_polar_angle(math.pi)
    assert surface.get_polar_angle() == pytest.approx(math.pi - OrbitSurface.EPS, abs=1e-9)


def test_distance_is_clamped_on_update(surface):
    surface.set_position((0.0, 0.0, 50.0))
    surface.update()
    assert surface.get_distance() == pytest.approx(20.0)
    surface.set_position((0.0, 0.0, 0.5))
    surface.update()
    assert surface.get_distance() == pytest.approx(2.0)


def test_degenerate_position_falls_back_to_front(surface):
    surface.set_position((0.0, 0.0, 0.0))
    surface.update()
    assert surface.get_position() == pytest.approx((0.0, 0.0, 2.0))


def test_update_notifies_only_on_movement(surface):
    calls = []
    surface.add_change_callback(lambda: calls.append(surface.get_position()))
    assert surface.update() is True
    assert surface.update() is False
    surface.set_azimuthal_angle(1.0)
    assert surface.update() is True
    assert len(calls) == 2


def test_setters_do_not_notify(surface):
    calls = []
    surface.add_change_callback(lambda: calls.append(1))
    surface.set_azimuthal_angle(1.0)
    surface.set_polar_angle(1.0)
    assert calls == []


def test_rotate_and_dolly(surface):
    surface.rotate(math.pi / 4, -math.pi / 6)
    assert surface.get_azimuthal_angle() == pytest.approx(math.pi / 4)
    assert surface.get_polar_angle() == pytest.approx(math.pi / 3)
    surface.dolly(0.5)
    assert surface.get_distance() == pytest.approx(4.5)
    surface.dolly(0.01)
    assert surface.get_distance() == pytest.approx(2.0)


def test_failing_callback_does_not_block_others(surface, caplog):
    seen = []

    def bad():
        raise RuntimeError("boom")

    surface.add_change_callback(bad)
    surface.add_change_callback(lambda: seen.append(1))
    surface.update()
    assert seen == [1]
    assert "Error in orbit change callback" in caplog.text


def test_remove_change_callback(surface):
    calls = []

    def cb():
        calls.append(1)

    surface.add_change_callback(cb)
    surface.remove_change_callback(cb)
    surface.update()
    assert calls == []


def test_invalid_distance_range():
    with pytest.raises(ValueError):
        SphericalOrbitSurface(min_distance=5.0, max_distance=1.0)
    with pytest.raises(ValueError):
        SphericalOrbitSurface(min_distance=0.0)


def test_vtk_camera_keeps_looking_at_target():
    surface = _vtk_surface()
    surface.rotate(1.0, 0.5)
    camera = surface.camera
    assert camera.GetFocalPoint() == pytest.approx((0.0, 0.0, 0.0))
    assert camera.GetViewUp() == pytest.approx((0.0, 1.0, 0.0))

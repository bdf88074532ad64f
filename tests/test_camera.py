import random

import pytest

from pathtrace.camera import Camera
from pathtrace.vector import Vec3

LOOK_FROM = Vec3(0.0, 15.0, -2.5)
LOOK_AT = Vec3(0.0, 15.0, -5.5)


class _NoJitter(random.Random):
    def uniform(self, a, b):
        return (a + b) / 2.0


def approx_vec(v):
    return pytest.approx(tuple(v), abs=1e-9)


def test_center_pixel_points_at_target():
    cam = Camera(LOOK_FROM, LOOK_AT, 90.0, 3, 3)
    ray = cam.get_ray(1, 1, _NoJitter())
    assert ray.origin == LOOK_FROM
    assert tuple(ray.direction) == approx_vec(LOOK_AT - LOOK_FROM)


def test_screen_orientation():
    cam = Camera(LOOK_FROM, LOOK_AT, 90.0, 3, 3)
    rng = _NoJitter()
    assert cam.get_ray(1, 0, rng).direction.y > cam.get_ray(1, 2, rng).direction.y
    assert cam.get_ray(2, 1, rng).direction.x > cam.get_ray(0, 1, rng).direction.x


def test_pixels_are_square():
    cam = Camera(LOOK_FROM, LOOK_AT, 60.0, 8, 4)
    assert cam.screen_right.length() == pytest.approx(cam.screen_down.length())


def test_resize_keeps_corners_symmetric():
    cam = Camera(LOOK_FROM, LOOK_AT, 90.0, 3, 3)
    cam.resize(6, 6)
    rng = _NoJitter()
    a = cam.get_ray(0, 0, rng).direction
    b = cam.get_ray(5, 5, rng).direction
    assert tuple(a + b) == approx_vec(2.0 * (LOOK_AT - LOOK_FROM))
    assert (cam.width, cam.height) == (6, 6)


def test_resize_scales_pixel_size():
    cam = Camera(LOOK_FROM, LOOK_AT, 90.0, 4, 4)
    before = cam.screen_right.length()
    cam.resize(8, 8)
    assert cam.screen_right.length() == pytest.approx(before / 2.0)


def test_jitter_stays_within_pixel():
    cam = Camera(LOOK_FROM, LOOK_AT, 70.0, 10, 6)
    base = cam.get_ray(3, 2, _NoJitter()).direction
    rng = random.Random(7)
    half_x = 0.5 * cam.screen_right.length() + 1e-9
    half_y = 0.5 * cam.screen_down.length() + 1e-9
    for _ in range(200):
        d = cam.get_ray(3, 2, rng).direction - base
        assert abs(d.dot(cam.u)) <= half_x
        assert abs(d.dot(cam.v)) <= half_y


@pytest.mark.parametrize("size", [(0, 10), (10, 0), (-1, 5)])
def test_invalid_size_raises(size):
    with pytest.raises(ValueError):
        Camera(LOOK_FROM, LOOK_AT, 90.0, *size)


def test_coincident_points_raise():
    with pytest.raises(ValueError):
        Camera(LOOK_FROM, LOOK_FROM, 90.0, 4, 4)
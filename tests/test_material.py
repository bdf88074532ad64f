import random
from dataclasses import dataclass

import pytest

from pathtrace.material import (
    Dielectric,
    DiffuseLight,
    Lambertian,
    Metal,
    random_on_hemisphere,
    random_on_unit_sphere,
    random_unit_vector,
    reflectance,
)
from pathtrace.vector import Ray, Vec3

UP = Vec3(0.0, 1.0, 0.0)


@dataclass
class _Hit:
    pos: Vec3
    normal: Vec3
    t: float = 1.0
    material: int = 0


def approx_vec(v):
    return pytest.approx(tuple(v), abs=1e-9)


def test_reflectance_at_grazing_angle_is_total():
    assert reflectance(0.0, 1.5) == pytest.approx(1.0)


def test_reflectance_vanishes_for_matched_index_at_normal_incidence():
    assert reflectance(1.0, 1.0) == pytest.approx(0.0)


def test_reflectance_decreases_towards_normal_incidence():
    values = [reflectance(c / 10.0, 1.5) for c in range(11)]
    assert values == sorted(values, reverse=True)


def test_random_unit_vector_has_unit_length():
    rng = random.Random(1)
    for _ in range(100):
        assert random_unit_vector(rng).length() == pytest.approx(1.0)


def test_random_on_unit_sphere_has_unit_length():
    rng = random.Random(2)
    for _ in range(100):
        assert random_on_unit_sphere(rng).length() == pytest.approx(1.0)


def test_random_on_hemisphere_faces_normal():
    rng = random.Random(3)
    normal = Vec3(1.0, 1.0, 0.0).normalized()
    for _ in range(100):
        assert random_on_hemisphere(normal, rng).dot(normal) >= 0.0


def test_lambertian_scatter_stays_above_surface():
    albedo = Vec3(0.73, 0.73, 0.73)
    mat = Lambertian(albedo)
    hit = _Hit(Vec3(1.0, 2.0, 3.0), UP)
    rng = random.Random(4)
    for _ in range(50):
        scattered, attenuation = mat.scatter(Ray(Vec3(), Vec3(0, -1, 0)), hit, rng)
        assert attenuation == albedo
        assert scattered.origin == hit.pos
        assert scattered.direction.dot(UP) >= -1e-9
    assert mat.emitted(Ray(Vec3(), Vec3(0, -1, 0)), hit) == Vec3()


def test_metal_without_fuzz_reflects_mirror_like():
    albedo = Vec3(0.82, 0.82, 0.82)
    mat = Metal(albedo, 0.0)
    ray = Ray(Vec3(), Vec3(1.0, -1.0, 0.0))
    hit = _Hit(Vec3(1.0, -1.0, 0.0), UP)
    scattered, attenuation = mat.scatter(ray, hit, random.Random(5))
    assert attenuation == albedo
    assert scattered.origin == hit.pos
    assert tuple(scattered.direction) == approx_vec(ray.direction.reflect(UP).normalized())


def test_metal_fuzz_bounds_deviation():
    mat = Metal(Vec3(0.72, 0.45, 0.12), 0.64)
    ray = Ray(Vec3(), Vec3(1.0, -1.0, 0.0))
    hit = _Hit(Vec3(), UP)
    mirror = ray.direction.reflect(UP).normalized()
    rng = random.Random(6)
    for _ in range(50):
        scattered, _ = mat.scatter(ray, hit, rng)
        assert (scattered.direction - mirror).length() <= 0.64 + 1e-9
    assert mat.emitted(ray, hit) == Vec3()


def test_dielectric_matched_index_passes_straight_through():
    mat = Dielectric(1.0)
    ray = Ray(Vec3(0, 5, 0), Vec3(0.3, -2.0, 0.1))
    hit = _Hit(Vec3(), UP)
    scattered, attenuation = mat.scatter(ray, hit, random.Random(7))
    assert attenuation == Vec3(1.0, 1.0, 1.0)
    assert tuple(scattered.direction) == approx_vec(ray.direction.normalized())


def test_dielectric_total_internal_reflection():
    mat = Dielectric(1.5)
    ray = Ray(Vec3(), Vec3(1.0, 0.1, 0.0))
    hit = _Hit(Vec3(2.0, 0.2, 0.0), UP)
    scattered, _ = mat.scatter(ray, hit, random.Random(8))
    expected = ray.direction.normalized().reflect(-UP)
    assert tuple(scattered.direction) == approx_vec(expected)
    assert scattered.direction.y < 0.0
    assert scattered.origin == hit.pos


def test_dielectric_output_is_unit_length():
    mat = Dielectric(1.5)
    rng = random.Random(9)
    hit = _Hit(Vec3(), UP)
    for _ in range(50):
        direction = Vec3(rng.uniform(-1, 1), -1.0, rng.uniform(-1, 1))
        scattered, _ = mat.scatter(Ray(Vec3(0, 1, 0), direction), hit, rng)
        assert scattered.direction.length() == pytest.approx(1.0)
    assert mat.emitted(Ray(Vec3(), -UP), hit) == Vec3()


def test_diffuse_light_emits_only_from_front():
    colour = Vec3(5.0, 5.0, 5.0)
    light = DiffuseLight(colour)
    hit = _Hit(Vec3(), UP)
    assert light.emitted(Ray(Vec3(0, 1, 0), Vec3(0, -1, 0)), hit) == colour
    assert light.emitted(Ray(Vec3(0, -1, 0), Vec3(0, 1, 0)), hit) == Vec3()
    assert light.scatter(Ray(Vec3(0, 1, 0), Vec3(0, -1, 0)), hit, random.Random(0)) is None
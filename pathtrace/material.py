"""Surface materials: how light scatters from and is emitted by surfaces."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, Union

from .vector import Ray, Vec3

Scatter = Optional[Tuple[Ray, Vec3]]

# The scatter result of a surface that absorbs every incoming ray.
ABSORBED: Scatter = None


class SurfaceHit(Protocol):
    """The parts of a hit record that materials use."""

    pos: Vec3
    normal: Vec3


def random_unit_vector(rng: random.Random) -> Vec3:
    """A unit vector from a normalized point in the cube [-1, 1]^3."""
    while True:
        vec = Vec3(rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0))
        if vec.length_squared() > 0.0:
            return vec.normalized()


def random_on_unit_sphere(rng: random.Random) -> Vec3:
    """A random vector of unit length."""
    while True:
        vec = random_unit_vector(rng)
        len_squared = vec.length_squared()
        if 1e-30 < len_squared <= 1.0:
            return vec / math.sqrt(len_squared)


def random_on_hemisphere(normal: Vec3, rng: random.Random) -> Vec3:
    """A random unit vector on the hemisphere around ``normal``."""
    vec = random_on_unit_sphere(rng)
    return vec if vec.dot(normal) > 0.0 else -vec


def reflectance(cos_theta: float, ri: float) -> float:
    """Schlick's approximation of reflectance."""
    r0 = (1.0 - ri) / (1.0 + ri)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cos_theta) ** 5


@dataclass(frozen=True)
class Lambertian:
    """A diffuse surface."""

    albedo: Vec3

    def scatter(self, ray: Ray, hit: SurfaceHit, rng: random.Random) -> Scatter:
        scatter_dir = hit.normal + random_unit_vector(rng)
        epsilon = 1e-8
        if all(abs(c) < epsilon for c in scatter_dir):
            scatter_dir = hit.normal
        return Ray(hit.pos, scatter_dir), self.albedo

    def emitted(self, ray: Ray, hit: SurfaceHit) -> Vec3:
        return Vec3()


@dataclass(frozen=True)
class Metal:
    """A reflective surface, blurred by ``fuzz``."""

    albedo: Vec3
    fuzz: float

    def scatter(self, ray: Ray, hit: SurfaceHit, rng: random.Random) -> Scatter:
        reflected = ray.direction.reflect(hit.normal).normalized()
        reflected = reflected + self.fuzz * random_unit_vector(rng)
        return Ray(hit.pos, reflected), self.albedo

    def emitted(self, ray: Ray, hit: SurfaceHit) -> Vec3:
        return Vec3()


@dataclass(frozen=True)
class Dielectric:
    """A clear refracting surface such as glass."""

    refraction_index: float

    def scatter(self, ray: Ray, hit: SurfaceHit, rng: random.Random) -> Scatter:
        attenuation = Vec3(1.0, 1.0, 1.0)

        if ray.direction.dot(hit.normal) < 0.0:
            ri, n = 1.0 / self.refraction_index, hit.normal
        else:
            ri, n = self.refraction_index, -hit.normal

        unit_dir = ray.direction.normalized()
        cos_theta = -min(unit_dir.dot(n), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        if ri * sin_theta > 1.0 or reflectance(cos_theta, ri) > rng.random():
            direction = unit_dir.reflect(n)
        else:
            direction = unit_dir.refract(n, ri)

        return Ray(hit.pos, direction), attenuation

    def emitted(self, ray: Ray, hit: SurfaceHit) -> Vec3:
        return Vec3()


@dataclass(frozen=True)
class DiffuseLight:
    """A surface that emits light from its front side and scatters nothing."""

    emit: Vec3

    def scatter(self, ray: Ray, hit: SurfaceHit, rng: random.Random) -> Scatter:
        """Light sources absorb every incoming ray."""
        return ABSORBED

    def emitted(self, ray: Ray, hit: SurfaceHit) -> Vec3:
        if ray.direction.dot(hit.normal) < 0.0:
            return self.emit
        return Vec3()


Material = Union[Lambertian, Metal, Dielectric, DiffuseLight]
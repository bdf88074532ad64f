"""Scene geometry: spheres, triangles and closest-hit queries."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .material import Material
from .vector import Ray, Vec3

# Machine epsilon of a single-precision float, used as the hit tolerance.
EPSILON = 1.1920929e-07


@dataclass(frozen=True)
class HitRecord:
    """Where a ray met a surface, the surface normal there and its material."""

    pos: Vec3
    normal: Vec3
    t: float
    material: int


@dataclass(frozen=True)
class Sphere:
    """A sphere given by its centre, radius and material index."""

    pos: Vec3
    r: float
    material: int

    def __post_init__(self) -> None:
        if self.r <= 0.0:
            raise ValueError(f"sphere radius must be positive, got {self.r}")

    def intersect(self, ray: Ray, tmin: float, tmax: float) -> Optional[HitRecord]:
        """Return the nearest hit with tmin < t < tmax, or None."""
        oc = self.pos - ray.origin
        a = ray.direction.length_squared()
        h = ray.direction.dot(oc)
        c = oc.length_squared() - self.r * self.r
        disc = h * h - a * c
        if disc < 0.0:
            return None

        sqrtd = math.sqrt(disc)
        t = (h - sqrtd) / a
        if t <= tmin or tmax <= t:
            t = (h + sqrtd) / a
            if t <= tmin or tmax <= t:
                return None

        pos = ray.origin + t * ray.direction
        return HitRecord(pos, (pos - self.pos) / self.r, t, self.material)


class Triangle:
    """A triangle stored as one vertex and two edges, with a unit normal."""

    __slots__ = ("v0", "e1", "e2", "normal", "material")

    def __init__(self, v0: Vec3, v1: Vec3, v2: Vec3, material: int) -> None:
        self.v0 = v0
        self.e1 = v1 - v0
        self.e2 = v2 - v0
        self.normal = self.e1.cross(self.e2).normalized()
        self.material = material

    def __repr__(self) -> str:
        return (
            f"Triangle(v0={self.v0!r}, e1={self.e1!r}, e2={self.e2!r}, "
            f"material={self.material})"
        )

    @staticmethod
    def quad(p0: Vec3, p1: Vec3, p2: Vec3, p3: Vec3, material: int) -> Tuple[Triangle, Triangle]:
        """Two triangles covering the quad p0, p1, p3, p2."""
        return Triangle(p0, p1, p2, material), Triangle(p1, p3, p2, material)

    def _distance(self, ray: Ray) -> Optional[float]:
        """Ray parameter of the hit with the triangle's plane inside it, if any."""
        ray_cross_e2 = ray.direction.cross(self.e2)
        det = self.e1.dot(ray_cross_e2)
        if -EPSILON < det < EPSILON:
            return None

        inv_det = 1.0 / det
        s = ray.origin - self.v0
        u = inv_det * s.dot(ray_cross_e2)
        if not 0.0 <= u <= 1.0:
            return None

        s_cross_e1 = s.cross(self.e1)
        v = inv_det * ray.direction.dot(s_cross_e1)
        if v < 0.0 or u + v > 1.0:
            return None

        return inv_det * self.e2.dot(s_cross_e1)

    def _record(self, ray: Ray, t: float) -> HitRecord:
        normal = self.normal if ray.direction.dot(self.normal) < 0.0 else -self.normal
        return HitRecord(ray.origin + ray.direction * t, normal, t, self.material)

    def intersect(self, ray: Ray, tmin: float, tmax: float) -> Optional[HitRecord]:
        """Return the hit with tmin < t < tmax, normal facing the ray, or None."""
        t = self._distance(ray)
        if t is not None and t > EPSILON and tmin < t < tmax:
            return self._record(ray, t)
        return None


@dataclass
class Scene:
    """A collection of spheres, triangles and the materials they refer to."""

    spheres: List[Sphere] = field(default_factory=list)
    triangles: List[Triangle] = field(default_factory=list)
    materials: List[Material] = field(default_factory=list)

    def add_object(self, obj: Sphere) -> None:
        if not isinstance(obj, Sphere):
            raise TypeError(f"unsupported scene object: {type(obj).__name__}")
        self.spheres.append(obj)

    def add_triangle(self, triangle: Triangle) -> None:
        self.triangles.append(triangle)

    def add_triangles(self, triangles: Iterable[Triangle]) -> None:
        self.triangles.extend(triangles)

    def add_material(self, material: Material) -> int:
        """Store a material and return its index."""
        self.materials.append(material)
        return len(self.materials) - 1

    def closest_hit(
        self, ray: Ray, tmin: float, tmax: float = sys.float_info.max
    ) -> Optional[HitRecord]:
        """Return the nearest hit among all objects with tmin < t < tmax."""
        closest = tmax
        result: Optional[HitRecord] = None

        for sphere in self.spheres:
            hit = sphere.intersect(ray, tmin, closest)
            if hit is not None:
                closest = hit.t
                result = hit

        nearest_triangle: Optional[Triangle] = None
        for triangle in self.triangles:
            t = triangle._distance(ray)
            if t is not None and t > EPSILON and tmin < t < closest:
                closest = t
                nearest_triangle = triangle

        if nearest_triangle is not None:
            result = nearest_triangle._record(ray, closest)
        return result
"""Progressive path-tracing renderer over the built-in demo scene."""

from __future__ import annotations

import enum
import itertools
import queue
import random
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .camera import Camera
from .material import Dielectric, DiffuseLight, Lambertian, Metal
from .scene import Scene, Sphere, Triangle
from .vector import Ray, Vec3

MAX_DEPTH = 10
T_MIN = 0.0001

Pixel = Tuple[float, float, float, float]

_resize_lock = threading.Lock()
_pending_resize: Optional[Tuple[int, int]] = None


def resize_render_target(width: int, height: int) -> None:
    """Ask any running render thread to switch to a new image size."""
    global _pending_resize
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {width}x{height}")
    with _resize_lock:
        _pending_resize = (width, height)


def _take_pending_resize() -> Optional[Tuple[int, int]]:
    global _pending_resize
    with _resize_lock:
        size, _pending_resize = _pending_resize, None
    return size


class RendererCmd(enum.Enum):
    """Commands a running render thread understands."""

    STOP = "stop"


@dataclass(frozen=True)
class RenderResult:
    """One published pass: the averaged image and its timing."""

    image_data: List[Pixel] = field(default_factory=list)
    image_size: Tuple[int, int] = (0, 0)
    render_time: float = 0.0
    rays_per_second: float = 0.0


def default_scene() -> Scene:
    """Build the demo room: coloured walls, a ceiling light, spheres and a mirror."""
    scene = Scene()

    red = scene.add_material(Metal(Vec3(0.85, 0.30, 0.30), 0.2))
    white = scene.add_material(Lambertian(Vec3(0.73, 0.73, 0.73)))
    green = scene.add_material(Lambertian(Vec3(0.12, 0.45, 0.15)))
    light = scene.add_material(DiffuseLight(Vec3(5.0, 5.0, 5.0)))

    walls = [
        ((-20.0, 0.0, 0.0), (-20.0, 0.0, -40.0), (-20.0, 40.0, 0.0), (-20.0, 40.0, -400.0), green),
        ((20.0, 0.0, 0.0), (20.0, 0.0, -40.0), (20.0, 40.0, 0.0), (20.0, 40.0, -40.0), red),
        ((-20.0, 0.0, 0.0), (20.0, 0.0, 0.0), (-20.0, 0.0, -40.0), (20.0, 0.0, -40.0), white),
        ((-20.0, 40.0, 0.0), (20.0, 40.0, 0.0), (-20.0, 40.0, -40.0), (20.0, 40.0, -40.0), white),
        ((-20.0, 0.0, -40.0), (20.0, 0.0, -40.0), (-20.0, 40.0, -40.0), (20.0, 40.0, -40.0), white),
        ((-20.0, 0.0, 0.0), (20.0, 0.0, 0.0), (-20.0, 40.0, 0.0), (20.0, 40.0, 0.0), white),
        ((-5.0, 39.99, -15.0), (5.0, 39.99, -15.0), (-5.0, 39.99, -25.0), (5.0, 39.99, -25.0), light),
    ]
    for p0, p1, p2, p3, material in walls:
        scene.add_triangles(Triangle.quad(Vec3(*p0), Vec3(*p1), Vec3(*p2), Vec3(*p3), material))

    sphere = scene.add_material(Dielectric(1.50))
    scene.add_object(Sphere(Vec3(-6.0, 8.0, -26.0), 5.0, sphere))

    mirror = scene.add_material(Metal(Vec3(0.82, 0.82, 0.82), 0.01))
    scene.add_triangles(
        Triangle.quad(
            Vec3(7.5, 0.0, -35.0),
            Vec3(12.5, 0.0, -31.0),
            Vec3(7.5, 20.0, -35.0),
            Vec3(12.5, 20.0, -31.0),
            mirror,
        )
    )

    metal = scene.add_material(Metal(Vec3(0.72, 0.45, 0.12), 0.64))
    scene.add_object(Sphere(Vec3(-4.0, 20.0, -24.0), 2.5, metal))

    glass = scene.add_material(Dielectric(1.5))
    scene.add_object(Sphere(Vec3(-17.0, 3.0, -37.0), 1.5, glass))

    light_sphere = scene.add_material(DiffuseLight(Vec3(3.5, 1.8, 0.2)))
    scene.add_object(Sphere(Vec3(-17.0, 3.0, -37.0), 1.0, light_sphere))

    return scene


def _sky(ray: Ray) -> Vec3:
    direction = ray.direction.normalized()
    a = 0.5 * (direction.y + 1.0)
    return (1.0 - a) * Vec3(1.0, 1.0, 1.0) + a * Vec3(0.5, 0.7, 1.0)


def _trace(ray: Ray, scene: Scene, rng: random.Random) -> Tuple[Vec3, int]:
    """Follow a path for up to MAX_DEPTH bounces; return its colour and ray count."""
    color = Vec3()
    throughput = Vec3(1.0, 1.0, 1.0)
    rays = 0
    for _ in range(MAX_DEPTH):
        rays += 1
        hit = scene.closest_hit(ray, T_MIN)
        if hit is None:
            return color + throughput * _sky(ray), rays
        material = scene.materials[hit.material]
        color = color + throughput * material.emitted(ray, hit)
        scattered = material.scatter(ray, hit, rng)
        if scattered is None:
            return color, rays
        ray, attenuation = scattered
        throughput = throughput * attenuation
    return color, rays


def trace_ray(ray: Ray, scene: Scene, rng: random.Random) -> Vec3:
    """Return the light arriving back along ``ray``."""
    color, _ = _trace(ray, scene, rng)
    return color


class Renderer:
    """Accumulates samples of the demo scene, one pass over the image at a time."""

    def __init__(self, width: int, height: int) -> None:
        self.size = (width, height)
        self.camera = Camera(Vec3(0.0, 15.0, -2.5), Vec3(0.0, 15.0, -5.5), 90.0, width, height)
        self.scene = default_scene()
        self.samples = 0
        self._rng = random.Random()
        self._accumulator: List[Pixel] = []
        self._commands: "queue.Queue[RendererCmd]" = queue.Queue()
        self._output_lock = threading.Lock()
        self._output = RenderResult()

    def send(self, cmd: RendererCmd) -> None:
        """Queue a command for the render thread."""
        if not isinstance(cmd, RendererCmd):
            raise TypeError(f"not a renderer command: {cmd!r}")
        self._commands.put(cmd)

    def read(self) -> RenderResult:
        """Return the most recently published pass."""
        with self._output_lock:
            return self._output

    def start_thread(self) -> threading.Thread:
        """Render passes on a background thread until told to stop."""
        thread = threading.Thread(target=self._run_loop, name="renderer", daemon=True)
        thread.start()
        return thread

    def _run_loop(self) -> None:
        while True:
            size = _take_pending_resize()
            if size is not None:
                self.size = size
                self.camera.resize(*size)
                self.samples = 0

            try:
                cmd = self._commands.get_nowait()
            except queue.Empty:
                pass
            else:
                if cmd is RendererCmd.STOP:
                    return

            self._render_pass()

    def render_image(self, samples_per_pixel: int) -> List[Pixel]:
        """Render the given number of passes and return the averaged pixels."""
        if samples_per_pixel <= 0:
            raise ValueError(f"samples per pixel must be positive, got {samples_per_pixel}")
        for i in range(samples_per_pixel):
            if i % 10 == 0:
                print(f"{i}/{samples_per_pixel}")
            self._render_pass()
        return [
            tuple(c / samples_per_pixel for c in pixel)  # type: ignore[misc]
            for pixel in self._accumulator
        ]

    def _render_pass(self) -> None:
        start = time.perf_counter()
        width, height = self.size
        self.samples += 1

        if len(self._accumulator) != width * height:
            self._accumulator = [(0.0, 0.0, 0.0, 0.0)] * (width * height)

        ray_count = 0
        accumulator: List[Pixel] = []
        image: List[Pixel] = []
        coords = itertools.product(range(height), range(width))
        for (r, g, b, a), (y, x) in zip(self._accumulator, coords):
            color, rays = _trace(self.camera.get_ray(x, y, self._rng), self.scene, self._rng)
            ray_count += rays
            pixel = (r + color.x, g + color.y, b + color.z, a + 1.0)
            accumulator.append(pixel)
            image.append(tuple(c / self.samples for c in pixel))  # type: ignore[arg-type]
        self._accumulator = accumulator

        elapsed = time.perf_counter() - start
        rays_per_second = ray_count / elapsed if elapsed > 0.0 else 0.0
        with self._output_lock:
            self._output = RenderResult(image, (width, height), elapsed, rays_per_second)
"""Pinhole camera producing jittered primary rays."""

from __future__ import annotations

import math
import random

from .vector import Ray, Vec3


class Camera:
    """A pinhole camera looking from one point towards another."""

    def __init__(
        self, look_from: Vec3, look_at: Vec3, vfov: float, width: int, height: int
    ) -> None:
        self.look_from = look_from
        self.look_at = look_at
        self.vfov = vfov
        self.v_up = Vec3(0.0, 1.0, 0.0)
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Recompute the screen geometry for a new image size."""
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        self.width = width
        self.height = height

        aspect_ratio = width / height
        offset = self.look_from - self.look_at
        focal_length = offset.length()
        h = math.tan(math.radians(self.vfov) / 2.0)
        viewport_height = 2.0 * h * focal_length
        viewport_width = viewport_height * aspect_ratio

        self.w = offset.normalized()
        self.u = self.v_up.cross(self.w).normalized()
        self.v = self.w.cross(self.u)

        viewport_u = viewport_width * self.u
        viewport_v = viewport_height * -self.v

        self.screen_right = viewport_u / width
        self.screen_down = viewport_v / height
        self.screen_upper_left = (
            self.look_from
            - focal_length * self.w
            - viewport_u / 2.0
            - viewport_v / 2.0
            + 0.5 * (self.screen_right + self.screen_down)
        )

    def get_ray(self, x: int, y: int, rng: random.Random) -> Ray:
        """Return a ray through pixel (x, y), jittered within the pixel."""
        jitter_x = rng.uniform(-0.5, 0.5)
        jitter_y = rng.uniform(-0.5, 0.5)
        pixel_pos = (
            self.screen_upper_left
            + (x + jitter_x) * self.screen_right
            + (y + jitter_y) * self.screen_down
        )
        return Ray(self.look_from, pixel_pos - self.look_from)
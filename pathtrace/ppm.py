"""Writing images as plain-text PPM (P3) files."""

from __future__ import annotations

import math
from os import PathLike
from pathlib import Path
from typing import Iterable, Sequence, Union


def _to_byte(value: float) -> int:
    """Gamma-correct a linear channel value and scale it to 0..255."""
    if not value > 0.0:
        return 0
    return int(min(math.sqrt(value), 0.999) * 256.0)


def encode_ppm(pixels: Iterable[Sequence[float]], width: int, height: int) -> str:
    """Return the P3 text for ``pixels``, given in rows from the top left."""
    lines = [f"P3\n{width} {height}\n255\n"]
    lines.extend(
        f"{_to_byte(p[0])} {_to_byte(p[1])} {_to_byte(p[2])}\n" for p in pixels
    )
    return "".join(lines)


def write_ppm_file(
    pixels: Iterable[Sequence[float]],
    width: int,
    height: int,
    path: Union[str, PathLike] = "out.ppm",
) -> None:
    """Write ``pixels`` to ``path`` as a P3 file."""
    Path(path).write_text(encode_ppm(pixels, width, height), encoding="ascii", newline="\n")
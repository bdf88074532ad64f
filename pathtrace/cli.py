"""Command-line entry point: render an image to a PPM file or run continuously."""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional, Sequence

from .ppm import write_ppm_file
from .renderer import RenderResult, Renderer, RendererCmd


def _positive(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathtrace", description="A small path tracer.")
    commands = parser.add_subparsers(dest="command", required=True)

    run = commands.add_parser("run", help="render continuously and report performance")
    run.add_argument("--width", type=_positive, default=100)
    run.add_argument("--height", type=_positive, default=100)
    run.add_argument("--passes", type=_positive, default=None, help="stop after this many passes")

    image = commands.add_parser("render-image", help="render an image to a PPM file")
    image.add_argument("width", type=_positive)
    image.add_argument("height", type=_positive)
    image.add_argument("samples_per_pixel", type=_positive)
    image.add_argument("--output", default="out.ppm")
    return parser


def _format_stats(result: RenderResult) -> str:
    rays = result.rays_per_second
    if rays > 1_000_000.0:
        rays, unit = rays / 1_000_000.0, "M"
    elif rays > 1_000.0:
        rays, unit = rays / 1_000.0, "k"
    else:
        unit = ""
    return f"render-time: {result.render_time * 1000.0:.2f} ms  rays: {rays:.2f} {unit}Ray/s"


def _run(width: int, height: int, passes: Optional[int]) -> int:
    renderer = Renderer(width, height)
    last = renderer.read()
    thread = renderer.start_thread()
    shown = 0
    try:
        while passes is None or shown < passes:
            result = renderer.read()
            if result is last:
                time.sleep(0.01)
                continue
            last = result
            shown += 1
            print(_format_stats(result))
    except KeyboardInterrupt:
        pass
    finally:
        renderer.send(RendererCmd.STOP)
        thread.join()
    return 0


def _render_image(width: int, height: int, samples_per_pixel: int, output: str) -> int:
    renderer = Renderer(width, height)
    image = renderer.render_image(samples_per_pixel)
    try:
        write_ppm_file(image, width, height, output)
    except OSError as err:
        print(f"Error writing ppm file: {err}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.command == "run":
        return _run(args.width, args.height, args.passes)
    return _render_image(args.width, args.height, args.samples_per_pixel, args.output)


if __name__ == "__main__":
    sys.exit(main())
# pathtrace

A small Monte Carlo path tracer written in pure Python with no third-party
dependencies. It renders a built-in scene. The scene is a closed box with
coloured walls, a ceiling light, glass and metal spheres, a small glowing
sphere inside a glass shell, and a mirror panel. It uses four kinds of
material: diffuse (Lambertian), metal, dielectric and light-emitting.

## Installation

```
pip install .
```

## Command line

### Rendering an image

```
pathtrace render-image WIDTH HEIGHT SAMPLES_PER_PIXEL [--output PATH]
```

For example:

```
pathtrace render-image 320 240 50
```

The command prints its progress every ten samples. It writes the result as
a plain-text (P3) PPM file, to `out.ppm` in the current directory unless
`--output` names another path. Each colour channel is gamma-corrected with
a square root, clamped to at most 0.999 and then scaled to 0–255. If the
file cannot be written, the command prints an error and exits with status 1.

### Rendering continuously

```
pathtrace run [--width W] [--height H] [--passes N]
```

This renders passes over the scene on a background thread. Width and height
default to 100. After each pass the command prints the render time and the
number of rays traced per second. It stops after `N` passes, or when
interrupted with Ctrl-C if `--passes` is not given.

All numeric arguments must be positive integers.

## Using the library

```python
from pathtrace.renderer import Renderer
from pathtrace.ppm import write_ppm_file

renderer = Renderer(160, 120)
pixels = renderer.render_image(16)   # list of (r, g, b, a) tuples, row-major
write_ppm_file(pixels, 160, 120, "out.ppm")
```

`pathtrace.ppm.encode_ppm` returns the same P3 text as a string instead of
writing it to a file.

A renderer can also run on a background thread. `start_thread()` returns the
`threading.Thread`. Each pass refines the accumulated image and publishes a
`RenderResult` with these fields:

- `image_data`: the averaged pixels
- `image_size`: `(width, height)`
- `render_time`: the time the pass took, in seconds
- `rays_per_second`: the rays traced per second during the pass

```python
from pathtrace.renderer import Renderer, RendererCmd, resize_render_target

renderer = Renderer(100, 100)
thread = renderer.start_thread()
result = renderer.read()             # latest published RenderResult
resize_render_target(200, 150)       # restarts accumulation at the new size
renderer.send(RendererCmd.STOP)
thread.join()
```

You can build scenes by hand from these pieces:

- `pathtrace.scene.Scene`, with `add_object` for spheres, `add_triangle` and
  `add_triangles` for triangles, and `add_material`, which returns the
  material's index
- `Sphere` and `Triangle`; `Triangle.quad` makes the two triangles of a quad
- materials from `pathtrace.material`: `Lambertian`, `Metal`, `Dielectric`
  and `DiffuseLight`

`Scene.closest_hit` returns the nearest `HitRecord` along a `Ray`.
`pathtrace.renderer.default_scene()` returns the built-in scene, and
`pathtrace.renderer.trace_ray` follows a single ray through a scene for up
to ten bounces. Vectors and rays are `pathtrace.vector.Vec3` and
`pathtrace.vector.Ray`, and `pathtrace.camera.Camera` generates the primary
rays.

## What it does not do

There is no graphical window or interactive viewer. `pathtrace run` reports
performance as text only and never shows the image it renders. The
`Renderer` always renders the built-in scene from a fixed camera. Scenes
cannot be loaded from files, and images are written only as P3 PPM.

## Tests

```
pip install ".[test]"
pytest
```
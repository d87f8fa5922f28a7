# raykit

Building blocks of a CPU ray tracer, built on numpy. The package holds the
value types, samplers and the recursive rendering loop; intersection testing,
light evaluation and mesh loading are supplied by you as plain callables.

## Modules

- `raykit.geometry` — `Ray` (with `point_at`), `Vertex`, `Material`, `Mesh`,
  `HitInfo`, and an 8-bit `Image` whose `get_pixel` / `set_pixel` work with
  floats in [0, 1]. `FLT_MAX` is the default ray distance.
- `raykit.features` — the render configuration: `Features`, `ExtraFeatures`,
  `BloomSettings` (kernel size is made odd), `DepthOfFieldSettings`,
  `ShadingModel` and `MappingType`. Sample counts below 1 raise `ValueError`.
- `raykit.splines` — `BSpline`, `SplinePoint`, `SplineType` and
  `interpolate_bspline`, plus the per-degree functions
  `interpolate_uniform_linear`, `interpolate_uniform_quadratic`,
  `interpolate_uniform_cubic`, `interpolate_connected_quadratic` and
  `interpolate_connected_cubic`.
- `raykit.screen` — `Screen`, a float RGB frame buffer with (0, 0) at the
  bottom left: `clear`, `set_pixel`, `index_at`, `to_bitmap` (32-bit BMP bytes,
  colours clamped to [0, 1]) and `write_bitmap`.
- `raykit.texture` — `sample_texture_nearest` and `sample_texture_bilinear`;
  texture coordinates are clamped to [0, 1].
- `raykit.shading` — `LinearGradient` with `GradientComponent` stops,
  `sample_material_kd`, `compute_linear_gradient_model` and
  `compute_linear_gradient_comparison` (colours the difference between Phong
  and Blinn-Phong highlights).
- `raykit.scene` — `PointLight`, `SegmentLight`, `ParallelogramLight`,
  `Sphere`, `Scene`, `SceneType`, `load_scene_prebuilt` and
  `load_scene_from_file`.
- `raykit.state` — `RenderState`, bundling scene, features, acceleration
  structure, the light and environment callables and a `random.Random` sampler.
- `raykit.recursive` — `render_ray`, `render_rays`, `generate_reflection_ray`,
  `generate_passthrough_ray`, `render_ray_specular_component` and
  `render_ray_transparent_component`. Recursion stops at depth
  `MAX_RAY_DEPTH` (6).
- `raykit.render` — `render_image`, `generate_pixel_rays`,
  `generate_pixel_rays_uniform` and `generate_pixel_rays_stratified`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Spline interpolation and writing a bitmap:

```python
import numpy as np
from raykit.splines import BSpline, SplineType, interpolate_bspline
from raykit.screen import Screen

spline = BSpline(
    position=[np.array([0.0, 0.0, 0.0]), np.array([1.0, 0.0, 0.0]), np.array([2.0, 1.0, 0.0])],
    rotation=[np.zeros(2), np.zeros(2), np.zeros(2)],
    spline_type=SplineType.QUADRATIC,
)
point = interpolate_bspline(spline, 0.5)
print(point.position, point.rotation)

screen = Screen((4, 3))
screen.clear((0.2, 0.4, 0.6))
screen.set_pixel(0, 0, (1.0, 1.0, 1.0))
screen.write_bitmap("out.bmp")
```

Rendering an image. The acceleration structure is any object with
`intersect(state, ray)` returning a `HitInfo` (and shortening `ray.t` to the
hit distance) or `None`; the camera is any object with
`generate_ray(position)` taking normalised device coordinates in [-1, 1]:

```python
import numpy as np
from raykit.features import Features
from raykit.geometry import Ray
from raykit.render import render_image
from raykit.scene import Scene
from raykit.screen import Screen


class Camera:
    def generate_ray(self, position):
        return Ray((0.0, 0.0, 0.0), (position[0], position[1], -1.0))


class EmptyWorld:
    def intersect(self, state, ray):
        return None


screen = Screen((8, 8))
render_image(
    Scene(), EmptyWorld(), Features(), Camera(), screen,
    light_contribution=lambda state, ray, hit: np.ones(3),
    environment=lambda state, ray: (0.1, 0.2, 0.3),
)
screen.write_bitmap("sky.bmp")
```

Scenes are assembled from meshes returned by a loader you pass in, called as
`load_mesh(path, normalize_vertex_positions=flag)`:

```python
from raykit.scene import SceneType, load_scene_prebuilt

scene = load_scene_prebuilt(SceneType.SPHERES, "data", load_mesh=my_loader)
```

## What the package does not do

- It has no window, interactive viewer or command-line program; output goes
  to a `Screen` and from there to a BMP file.
- It does not read model files; meshes come from the loader you supply.
- It has no acceleration structure or intersection code, and no light
  evaluation (Lambertian, Phong, Blinn-Phong, shadows); these come from the
  `bvh` object and the `light_contribution` callable.
- Depth of field, motion blur, bloom and glossy reflections are configuration
  switches only: `render_image` and `generate_pixel_rays` raise `ValueError`
  when depth of field, motion blur or bloom is enabled, and glossy reflections
  turn mirror reflection off without adding anything in its place.
import numpy as np
import pytest

from raykit.features import ExtraFeatures, Features
from raykit.geometry import HitInfo, Material, Ray
from raykit.render import (
    generate_pixel_rays,
    generate_pixel_rays_stratified,
    generate_pixel_rays_uniform,
    render_image,
)
from raykit.scene import Scene
from raykit.screen import Screen
from raykit.state import RenderState


class NdcCamera:
    """Camera whose ray direction carries the NDC position it was asked for."""

    def generate_ray(self, position):
        x, y = position
        return Ray(np.zeros(3), (x, y, -1.0))


class MissBvh:
    def intersect(self, state, ray):
        return None


class HitBvh:
    def __init__(self, kd):
        self.kd = kd

    def intersect(self, state, ray):
        ray.t = 1.0
        return HitInfo(normal=(0.0, 0.0, 1.0), material=Material(kd=self.kd))


def _no_light(state, ray, hit_info):
    return np.zeros(3)


def _state(features, seed=0, bvh=None):
    return RenderState(
        scene=Scene(),
        features=features,
        bvh=bvh or MissBvh(),
        light_contribution=_no_light,
        sampler=seed,
    )


def _ndc_points(rays):
    return np.array([ray.direction[:2] for ray in rays])


def test_single_sample_goes_through_pixel_centre():
    rays = generate_pixel_rays(_state(Features()), NdcCamera(), (0, 0), (2, 2))
    assert len(rays) == 1
    np.testing.assert_allclose(rays[0].direction[:2], [-0.5, -0.5])


@pytest.mark.parametrize("samples", [2, 5, 16])
def test_uniform_rays_stay_inside_pixel(samples):
    features = Features(num_pixel_samples=samples)
    rays = generate_pixel_rays_uniform(_state(features), NdcCamera(), (1, 2), (4, 4))
    assert len(rays) == samples
    points = _ndc_points(rays)
    # Pixel (1, 2) of a 4x4 screen spans [-0.5, 0] in x and [0, 0.5] in y.
    assert np.all(points[:, 0] >= -0.5) and np.all(points[:, 0] < 0.0)
    assert np.all(points[:, 1] >= 0.0) and np.all(points[:, 1] < 0.5)


@pytest.mark.parametrize("samples, expected", [(4, 4), (9, 9), (5, 4), (3, 4), (1, 1)])
def test_stratified_ray_count_is_rounded_square(samples, expected):
    features = Features(num_pixel_samples=samples, enable_jittered_sampling=True)
    rays = generate_pixel_rays_stratified(_state(features), NdcCamera(), (0, 0), (1, 1))
    assert len(rays) == expected


def test_stratified_rays_fill_every_cell():
    features = Features(num_pixel_samples=9, enable_jittered_sampling=True)
    rays = generate_pixel_rays_stratified(_state(features), NdcCamera(), (0, 0), (1, 1))
    # On a 1x1 screen the pixel covers all of NDC; map back to [0, 1).
    offsets = (_ndc_points(rays) + 1.0) / 2.0
    cells = {(int(x * 3), int(y * 3)) for x, y in offsets}
    assert cells == {(i, j) for i in range(3) for j in range(3)}


def test_generate_pixel_rays_dispatches_on_jitter():
    jittered = Features(num_pixel_samples=5, enable_jittered_sampling=True)
    uniform = Features(num_pixel_samples=5, enable_jittered_sampling=False)
    assert len(generate_pixel_rays(_state(jittered), NdcCamera(), (0, 0), (2, 2))) == 4
    assert len(generate_pixel_rays(_state(uniform), NdcCamera(), (0, 0), (2, 2))) == 5


def test_same_seed_gives_same_rays():
    features = Features(num_pixel_samples=6)
    first = generate_pixel_rays(_state(features, seed=7), NdcCamera(), (3, 1), (8, 8))
    second = generate_pixel_rays(_state(features, seed=7), NdcCamera(), (3, 1), (8, 8))
    np.testing.assert_array_equal(_ndc_points(first), _ndc_points(second))


def test_depth_of_field_rays_are_rejected():
    features = Features(extra=ExtraFeatures(enable_depth_of_field=True))
    with pytest.raises(ValueError):
        generate_pixel_rays(_state(features), NdcCamera(), (0, 0), (2, 2))


def test_render_image_fills_with_environment_colour():
    screen = Screen((3, 2))
    color = np.array([0.2, 0.4, 0.6])
    render_image(Scene(), MissBvh(), Features(), NdcCamera(), screen, _no_light,
                 lambda state, ray: color)
    np.testing.assert_allclose(screen.pixels, np.tile(color, (6, 1)))


def test_render_image_without_environment_is_black():
    screen = Screen((2, 2))
    screen.clear((1.0, 1.0, 1.0))
    render_image(Scene(), MissBvh(), Features(), NdcCamera(), screen, _no_light)
    np.testing.assert_array_equal(screen.pixels, np.zeros((4, 3)))


def test_render_image_uses_light_contribution_at_hits():
    screen = Screen((2, 2))
    kd = np.array([0.1, 0.7, 0.3])
    render_image(Scene(), HitBvh(kd), Features(), NdcCamera(), screen,
                 lambda state, ray, hit: hit.material.kd)
    np.testing.assert_allclose(screen.pixels, np.tile(kd, (4, 1)))


def test_render_image_places_pixels_by_position():
    screen = Screen((2, 2))
    render_image(Scene(), MissBvh(), Features(), NdcCamera(), screen, _no_light,
                 lambda state, ray: (ray.direction[0], ray.direction[1], 0.0))
    np.testing.assert_allclose(screen.pixels[screen.index_at(1, 0)], [0.5, -0.5, 0.0])
    np.testing.assert_allclose(screen.pixels[screen.index_at(0, 1)], [-0.5, 0.5, 0.0])


@pytest.mark.parametrize("extra", [
    ExtraFeatures(enable_depth_of_field=True),
    ExtraFeatures(enable_motion_blur=True),
    ExtraFeatures(enable_bloom_effect=True),
])
def test_render_image_rejects_unsupported_extras(extra):
    with pytest.raises(ValueError):
        render_image(Scene(), MissBvh(), Features(extra=extra), NdcCamera(), Screen((1, 1)),
                     _no_light)
"""Image rendering and camera-ray generation for pixels."""

from __future__ import annotations

import math
from typing import Any, Callable, Optional, Protocol

import numpy as np

from raykit.features import Features
from raykit.geometry import HitInfo, Ray
from raykit.recursive import render_rays
from raykit.scene import Scene
from raykit.screen import Screen
from raykit.state import RenderState


class Camera(Protocol):
    """Anything that turns a point in normalised device coordinates into a ray."""

    def generate_ray(self, position: np.ndarray) -> Ray:
        """Return the camera ray through ``position``, both components in [-1, 1]."""


def _unsupported(features: Features) -> Optional[str]:
    extra = features.extra
    if extra.enable_depth_of_field:
        return "depth of field"
    if extra.enable_motion_blur:
        return "motion blur"
    if extra.enable_bloom_effect:
        return "bloom"
    return None


def _ndc(pixel, offset, screen_resolution) -> np.ndarray:
    """Map a point inside a pixel to normalised device coordinates."""
    pixel = np.asarray(pixel, dtype=float)
    resolution = np.asarray(screen_resolution, dtype=float)
    return (pixel + np.asarray(offset, dtype=float)) / resolution * 2.0 - 1.0


def _grid_size(num_samples: int) -> int:
    # Round half away from zero, as the sample count is never negative.
    return int(math.floor(math.sqrt(num_samples) + 0.5))


def render_image(scene: Scene, bvh: Any, features: Features, camera: Camera, screen: Screen,
                 light_contribution: Callable[[RenderState, Ray, HitInfo], Any],
                 environment: Optional[Callable[[RenderState, Ray], Any]] = None) -> None:
    """Fill every pixel of ``screen`` with the averaged light along its camera rays.

    Each pixel gets its own sampler seeded from its position, so renders are
    reproducible. Depth of field, motion blur and bloom are not rendered here
    and raise :class:`ValueError`.
    """
    feature = _unsupported(features)
    if feature is not None:
        raise ValueError(f"{feature} rendering is not supported")

    width, height = screen.resolution
    for y in range(height):
        for x in range(width):
            state = RenderState(
                scene=scene,
                features=features,
                bvh=bvh,
                light_contribution=light_contribution,
                environment=environment,
                sampler=height * x + y,
            )
            rays = generate_pixel_rays(state, camera, (x, y), (width, height))
            screen.set_pixel(x, y, render_rays(state, rays))


def generate_pixel_rays(state: RenderState, camera: Camera, pixel, screen_resolution) -> list[Ray]:
    """Return the camera rays for ``pixel``.

    One sample gives a single ray through the pixel centre; more samples are
    jittered or uniformly random depending on the features.
    """
    features = state.features
    if features.extra.enable_depth_of_field:
        raise ValueError("depth of field ray generation is not supported")
    if features.num_pixel_samples > 1:
        if features.enable_jittered_sampling:
            return generate_pixel_rays_stratified(state, camera, pixel, screen_resolution)
        return generate_pixel_rays_uniform(state, camera, pixel, screen_resolution)
    return [camera.generate_ray(_ndc(pixel, (0.5, 0.5), screen_resolution))]


def generate_pixel_rays_uniform(state: RenderState, camera: Camera, pixel,
                                screen_resolution) -> list[Ray]:
    """Return ``num_pixel_samples`` rays through uniformly random points of the pixel."""
    sampler = state.sampler
    rays = []
    for _ in range(state.features.num_pixel_samples):
        offset = (sampler.random(), sampler.random())
        rays.append(camera.generate_ray(_ndc(pixel, offset, screen_resolution)))
    return rays


def generate_pixel_rays_stratified(state: RenderState, camera: Camera, pixel,
                                   screen_resolution) -> list[Ray]:
    """Return jittered rays: one random point in each cell of an N x N grid over the pixel.

    N is the square root of ``num_pixel_samples``, rounded to the nearest integer.
    """
    n = _grid_size(state.features.num_pixel_samples)
    sampler = state.sampler
    rays = []
    for i in range(n):
        for j in range(n):
            random_x = sampler.random()
            random_y = sampler.random()
            offset = ((i + random_x) / n, (j + random_y) / n)
            rays.append(camera.generate_ray(_ndc(pixel, offset, screen_resolution)))
    return rays
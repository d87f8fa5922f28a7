"""Recursive ray evaluation: mirror reflections and transparent pass-through."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from raykit.geometry import FLT_MAX, HitInfo, Ray
from raykit.state import RenderState

MAX_RAY_DEPTH = 6
"""Rays at this depth or deeper spawn no secondary rays."""

RAY_OFFSET = 0.00001
"""Distance a secondary ray starts past the surface it leaves, to avoid self-hits."""


def _copy_ray(ray: Ray) -> Ray:
    return Ray(ray.origin.copy(), ray.direction.copy(), ray.t)


def render_rays(state: RenderState, rays: Iterable[Ray], ray_depth: int = 0) -> np.ndarray:
    """Render every ray and return the average of the results."""
    colors = [render_ray(state, ray, ray_depth) for ray in rays]
    if not colors:
        raise ValueError("at least one ray is needed to render")
    return np.mean(colors, axis=0)


def render_ray(state: RenderState, ray: Ray, ray_depth: int = 0) -> np.ndarray:
    """Trace ``ray`` and return the light arriving along it.

    A miss returns the background colour. At a hit the light contribution is
    computed and, below the maximum depth, mirror reflection (when reflections
    are on and glossy reflections off) and transparency are added recursively.
    The caller's ray is left unchanged.
    """
    ray = _copy_ray(ray)
    hit_info = state.intersect(ray)
    if hit_info is None:
        return state.background(ray)

    color = state.light_at(ray, hit_info)

    if ray_depth < MAX_RAY_DEPTH:
        features = state.features
        material = hit_info.material
        is_reflective = bool(np.any(material.ks != 0.0))
        is_transparent = material.transparency != 1.0

        if features.enable_reflections and not features.extra.enable_glossy_reflection and is_reflective:
            color = render_ray_specular_component(state, ray, hit_info, color, ray_depth)

        if features.enable_transparency and is_transparent:
            color = render_ray_transparent_component(state, ray, hit_info, color, ray_depth)

    return color


def generate_reflection_ray(ray: Ray, hit_info: HitInfo) -> Ray:
    """Return the mirror ray leaving the hit point of ``ray``."""
    hit_point = ray.point_at(ray.t)
    normal = hit_info.normal
    direction = ray.direction - 2.0 * normal * float(np.dot(normal, ray.direction))
    direction = direction / np.linalg.norm(direction)
    return Ray(hit_point + direction * RAY_OFFSET, direction, FLT_MAX)


def generate_passthrough_ray(ray: Ray, hit_info: HitInfo) -> Ray:
    """Return a ray continuing in the same direction just past the hit point."""
    return Ray(ray.point_at(ray.t + RAY_OFFSET), ray.direction.copy(), FLT_MAX)


def render_ray_specular_component(state: RenderState, ray: Ray, hit_info: HitInfo,
                                  hit_color, ray_depth: int) -> np.ndarray:
    """Return ``hit_color`` plus the clamped mirrored light weighted by ``ks``."""
    reflected = generate_reflection_ray(ray, hit_info)
    incoming = np.clip(render_ray(state, reflected, ray_depth + 1), 0.0, 1.0)
    return np.asarray(hit_color, dtype=float) + incoming * hit_info.material.ks


def render_ray_transparent_component(state: RenderState, ray: Ray, hit_info: HitInfo,
                                     hit_color, ray_depth: int) -> np.ndarray:
    """Blend ``hit_color`` with the light behind the surface by its transparency."""
    passthrough = generate_passthrough_ray(ray, hit_info)
    behind = render_ray(state, passthrough, ray_depth + 1)
    alpha = hit_info.material.transparency
    return (1.0 - alpha) * behind + alpha * np.asarray(hit_color, dtype=float)
"""Material sampling and gradient-based shading models."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from raykit.features import Features
from raykit.geometry import HitInfo
from raykit.texture import sample_texture_bilinear, sample_texture_nearest


@dataclass(eq=False)
class GradientComponent:
    """A colour stop of a linear gradient at position ``t``."""

    t: float
    color: np.ndarray

    def __post_init__(self) -> None:
        self.t = float(self.t)
        self.color = np.asarray(self.color, dtype=float).reshape(3)


@dataclass(eq=False)
class LinearGradient:
    """Piecewise-linear colour gradient over [-1, 1]."""

    components: list[GradientComponent] = field(default_factory=list)

    def sample(self, ti: float) -> np.ndarray:
        """Interpolate the colour at ``ti``; outside the stops the nearest stop is used."""
        if not self.components:
            return np.full(3, 0.5)
        stops = sorted(self.components, key=lambda component: component.t)
        ti = min(max(float(ti), -1.0), 1.0)

        if ti <= stops[0].t:
            return stops[0].color.copy()
        if ti >= stops[-1].t:
            return stops[-1].color.copy()

        for low, high in zip(stops, stops[1:]):
            if low.t <= ti <= high.t:
                alpha = (ti - low.t) / (high.t - low.t)
                return (1.0 - alpha) * low.color + alpha * high.color
        return np.zeros(3)


def sample_material_kd(features: Features, hit_info: HitInfo) -> np.ndarray:
    """Return the diffuse colour, from the texture when texture mapping applies."""
    texture = hit_info.material.kd_texture
    if features.enable_texture_mapping and texture is not None:
        if features.enable_bilinear_texture_filtering:
            return sample_texture_bilinear(texture, hit_info.tex_coord)
        return sample_texture_nearest(texture, hit_info.tex_coord)
    return hit_info.material.kd.copy()


def _normalize(vector: np.ndarray) -> np.ndarray:
    return vector / np.linalg.norm(vector)


def compute_linear_gradient_model(camera_direction, light_direction, light_color, hit_info: HitInfo,
                                  gradient: LinearGradient) -> np.ndarray:
    """Diffuse shading whose colour comes from ``gradient`` sampled at cos(theta)."""
    cos_theta = float(np.dot(np.asarray(light_direction, dtype=float), hit_info.normal))
    cos_theta = min(max(cos_theta, -1.0), 1.0)
    return gradient.sample(cos_theta) * np.asarray(light_color, dtype=float)


def compute_linear_gradient_comparison(camera_direction, light_direction, light_color, hit_info: HitInfo,
                                       gradient: LinearGradient) -> np.ndarray:
    """Colour the relative difference between Phong and Blinn-Phong highlights.

    Negative gradient positions mean Phong is stronger, positive ones Blinn-Phong.
    """
    camera = np.asarray(camera_direction, dtype=float)
    light = np.asarray(light_direction, dtype=float)
    color = np.asarray(light_color, dtype=float)
    normal = hit_info.normal
    material = hit_info.material

    reflect = _normalize(-light + 2.0 * np.dot(light, normal) * normal)
    phong = color * material.ks * max(float(np.dot(reflect, _normalize(camera))), 0.0) ** material.shininess

    halfway = _normalize(light + camera)
    blinn = color * material.ks * max(float(np.dot(halfway, normal)), 0.0) ** material.shininess

    phong_len = float(np.linalg.norm(phong))
    blinn_len = float(np.linalg.norm(blinn))
    difference = float(np.linalg.norm(phong - blinn))
    largest = max(phong_len, blinn_len + 1e-5)
    difference = min(max(difference / largest, 0.0), 1.0)

    ti = -difference if phong_len > blinn_len else difference
    ti = float(np.sign(ti)) * abs(ti) ** 1.5
    return gradient.sample(ti)
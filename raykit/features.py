"""Renderer feature switches and their settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class ShadingModel(IntEnum):
    """Shading models, numbered in the order the user interface lists them."""

    LAMBERTIAN = 0
    PHONG = 1
    BLINN_PHONG = 2
    LINEAR_GRADIENT = 3
    LINEAR_GRADIENT_COMPARISON = 4


class MappingType(IntEnum):
    """Brightness-to-bloom mapping curves."""

    BINARY = 0
    LINEAR = 1
    EXPONENTIAL = 2
    LOGARITHMIC = 3
    SIGMOID = 4
    PIECEWISE = 5


def _check_samples(name: str, value: int) -> int:
    value = int(value)
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


@dataclass
class BloomSettings:
    """Settings of the bloom post-process; the kernel size is always odd."""

    min_threshold: float = 0.8
    max_threshold: float = 1.0
    kernel_size: int = 5
    mapping_type: MappingType = MappingType.LINEAR
    only_bloom: bool = False
    only_bloom_grayscale: bool = False

    def __post_init__(self) -> None:
        self.kernel_size = int(self.kernel_size)
        if self.kernel_size < 1:
            raise ValueError("kernel size must be positive")
        if self.kernel_size % 2 == 0:
            self.kernel_size += 1
        self.mapping_type = MappingType(self.mapping_type)


@dataclass
class DepthOfFieldSettings:
    """Thin-lens camera parameters."""

    lens_radius: float = 0.1
    focal_distance: float = 5.0
    image_plane_distance: float = 1.0


@dataclass
class ExtraFeatures:
    """Optional rendering features beyond the baseline renderer."""

    enable_bloom_effect: bool = False
    bloom: BloomSettings = field(default_factory=BloomSettings)
    enable_depth_of_field: bool = False
    dof_settings: DepthOfFieldSettings = field(default_factory=DepthOfFieldSettings)
    enable_motion_blur: bool = False
    enable_glossy_reflection: bool = False
    num_glossy_samples: int = 1
    enable_environment_map: bool = False
    enable_mipmap_texture_filtering: bool = False

    def __post_init__(self) -> None:
        self.num_glossy_samples = _check_samples("num_glossy_samples", self.num_glossy_samples)


@dataclass
class Features:
    """The complete feature configuration of a render."""

    enable_shading: bool = False
    enable_reflections: bool = False
    enable_shadows: bool = False
    enable_normal_interp: bool = False
    enable_texture_mapping: bool = False
    enable_accel_structure: bool = False
    enable_bilinear_texture_filtering: bool = False
    enable_transparency: bool = False
    enable_jittered_sampling: bool = False
    enable_debug_draw: bool = False
    shading_model: ShadingModel = ShadingModel.LAMBERTIAN
    num_pixel_samples: int = 1
    num_shadow_samples: int = 1
    extra: ExtraFeatures = field(default_factory=ExtraFeatures)

    def __post_init__(self) -> None:
        self.shading_model = ShadingModel(self.shading_model)
        self.num_pixel_samples = _check_samples("num_pixel_samples", self.num_pixel_samples)
        self.num_shadow_samples = _check_samples("num_shadow_samples", self.num_shadow_samples)
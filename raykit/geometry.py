"""Basic geometric value types: rays, vertices, materials, meshes and images."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

FLT_MAX = float(np.finfo(np.float32).max)


def _vec(value, size: int) -> np.ndarray:
    array = np.array(value, dtype=float).reshape(-1)
    if array.shape != (size,):
        raise ValueError(f"expected a vector of {size} components, got {array.shape[0]}")
    return array


def _zeros(size: int):
    return lambda: np.zeros(size)


@dataclass(eq=False)
class Ray:
    """A half line starting at ``origin``; ``t`` is the distance to the nearest hit so far."""

    origin: np.ndarray = field(default_factory=_zeros(3))
    direction: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, -1.0]))
    t: float = FLT_MAX

    def __post_init__(self) -> None:
        self.origin = _vec(self.origin, 3)
        self.direction = _vec(self.direction, 3)
        self.t = float(self.t)

    def point_at(self, t: float) -> np.ndarray:
        """Return the point ``origin + t * direction``."""
        return self.origin + self.direction * float(t)


@dataclass(eq=False)
class Vertex:
    """A mesh vertex with position, normal and texture coordinate."""

    position: np.ndarray = field(default_factory=_zeros(3))
    normal: np.ndarray = field(default_factory=_zeros(3))
    tex_coord: np.ndarray = field(default_factory=_zeros(2))

    def __post_init__(self) -> None:
        self.position = _vec(self.position, 3)
        self.normal = _vec(self.normal, 3)
        self.tex_coord = _vec(self.tex_coord, 2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return (
            np.array_equal(self.position, other.position)
            and np.array_equal(self.normal, other.normal)
            and np.array_equal(self.tex_coord, other.tex_coord)
        )

    __hash__ = None  # type: ignore[assignment]


@dataclass
class Image:
    """An 8-bit image stored row-major, ``channels`` bytes per pixel."""

    width: int
    height: int
    channels: int = 3
    pixels: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0 or self.channels <= 0:
            raise ValueError("image dimensions and channel count must be positive")
        size = self.width * self.height * self.channels
        if self.pixels is None:
            self.pixels = np.zeros(size, dtype=np.uint8)
        else:
            data = np.asarray(self.pixels, dtype=np.uint8).reshape(-1)
            if data.size != size:
                raise ValueError(f"expected {size} pixel bytes, got {data.size}")
            self.pixels = data.copy()

    def _check_index(self, index: int) -> int:
        index = int(index)
        if not 0 <= index < self.width * self.height:
            raise IndexError(f"pixel index {index} out of range")
        return index

    def get_pixel(self, index: int) -> np.ndarray:
        """Return the pixel at ``index`` as floats in [0, 1]."""
        index = self._check_index(index)
        start = index * self.channels
        return self.pixels[start:start + self.channels].astype(float) / 255.0

    def set_pixel(self, index: int, value) -> None:
        """Store a pixel given as floats in [0, 1]; values are truncated to bytes."""
        index = self._check_index(index)
        components = np.asarray(value, dtype=float).reshape(-1)
        if components.size != self.channels:
            raise ValueError(f"expected {self.channels} channels, got {components.size}")
        start = index * self.channels
        self.pixels[start:start + self.channels] = np.clip(components * 255.0, 0.0, 255.0).astype(np.uint8)


@dataclass(eq=False)
class Material:
    """Surface material: diffuse and specular colours, shininess and transparency."""

    kd: np.ndarray = field(default_factory=_zeros(3))
    ks: np.ndarray = field(default_factory=_zeros(3))
    shininess: float = 1.0
    transparency: float = 1.0
    kd_texture: Optional[Image] = None

    def __post_init__(self) -> None:
        self.kd = _vec(self.kd, 3)
        self.ks = _vec(self.ks, 3)
        self.shininess = float(self.shininess)
        self.transparency = float(self.transparency)


@dataclass(eq=False)
class Mesh:
    """Indexed triangle mesh with a single material."""

    vertices: list[Vertex] = field(default_factory=list)
    triangles: list[tuple[int, int, int]] = field(default_factory=list)
    material: Material = field(default_factory=Material)

    def __post_init__(self) -> None:
        self.triangles = [tuple(int(i) for i in triangle) for triangle in self.triangles]
        for triangle in self.triangles:
            if len(triangle) != 3:
                raise ValueError("a triangle needs exactly three vertex indices")


@dataclass(eq=False)
class HitInfo:
    """Description of a ray/surface intersection."""

    normal: np.ndarray = field(default_factory=_zeros(3))
    barycentric_coord: np.ndarray = field(default_factory=_zeros(3))
    tex_coord: np.ndarray = field(default_factory=_zeros(2))
    material: Material = field(default_factory=Material)

    def __post_init__(self) -> None:
        self.normal = _vec(self.normal, 3)
        self.barycentric_coord = _vec(self.barycentric_coord, 3)
        self.tex_coord = _vec(self.tex_coord, 2)
"""Texture lookups with nearest-neighbour and bilinear filtering."""

from __future__ import annotations

import math

import numpy as np

from raykit.geometry import Image


def _rgb(image: Image, index: int) -> np.ndarray:
    if image.channels < 3:
        raise ValueError(f"texture needs at least 3 channels, image has {image.channels}")
    return image.get_pixel(index)[:3]


def _clamped_coord(tex_coord) -> np.ndarray:
    coord = np.asarray(tex_coord, dtype=float).reshape(-1)
    if coord.shape != (2,):
        raise ValueError("texture coordinates need exactly two components")
    return np.clip(coord, 0.0, 1.0)


def sample_texture_nearest(image: Image, tex_coord) -> np.ndarray:
    """Return the texel nearest to ``tex_coord``; coordinates are clamped to [0, 1]."""
    u, v = _clamped_coord(tex_coord)
    column = min(int(math.floor(v * image.width)), image.width - 1)
    row = min(int(math.floor((1.0 - u) * image.height)), image.height - 1)
    return _rgb(image, image.width * row + column)


def sample_texture_bilinear(image: Image, tex_coord) -> np.ndarray:
    """Return the bilinear blend of the four texels around ``tex_coord``."""
    u, v = _clamped_coord(tex_coord)
    x = min(max(v * image.width - 0.5, 0.0), image.width - 1.0)
    y = min(max((1.0 - u) * image.height - 0.5, 0.0), image.height - 1.0)

    x0, x1 = math.floor(x), math.ceil(x)
    y0, y1 = math.floor(y), math.ceil(y)

    def texel(column: int, row: int) -> np.ndarray:
        return _rgb(image, image.width * row + column)

    fx = x - x0
    fy = y - y0
    return (
        texel(x0, y0) * (1.0 - fx) * (1.0 - fy)
        + texel(x0, y1) * (1.0 - fx) * fy
        + texel(x1, y0) * fx * (1.0 - fy)
        + texel(x1, y1) * fx * fy
    )
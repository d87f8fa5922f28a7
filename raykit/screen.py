"""An in-memory floating-point framebuffer that can be saved as a bitmap."""

from __future__ import annotations

import os
import struct
from pathlib import Path

import numpy as np

_FILE_HEADER_SIZE = 14
_INFO_HEADER_SIZE = 108
_PIXEL_OFFSET = _FILE_HEADER_SIZE + _INFO_HEADER_SIZE


class Screen:
    """RGB framebuffer with (0, 0) at the bottom-left corner.

    Pixels are stored top row first in ``pixels``, one RGB float triple per pixel.
    """

    def __init__(self, resolution) -> None:
        width, height = (int(value) for value in resolution)
        if width <= 0 or height <= 0:
            raise ValueError("screen resolution must be positive")
        self._width = width
        self._height = height
        self.pixels = np.zeros((width * height, 3), dtype=float)

    @property
    def resolution(self) -> tuple[int, int]:
        return self._width, self._height

    def clear(self, color) -> None:
        """Fill every pixel with ``color``."""
        self.pixels[:] = np.asarray(color, dtype=float)

    def index_at(self, x: int, y: int) -> int:
        """Index into ``pixels`` of the pixel at (x, y), y counted from the bottom."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height} screen")
        return (self._height - 1 - y) * self._width + x

    def set_pixel(self, x: int, y: int, color) -> None:
        """Set the pixel at (x, y), y counted from the bottom."""
        self.pixels[self.index_at(x, y)] = np.asarray(color, dtype=float)

    def to_bitmap(self) -> bytes:
        """Encode the screen as a 32-bit BMP file, colours clamped to [0, 1]."""
        width, height = self._width, self._height
        rgb = (np.clip(self.pixels, 0.0, 1.0) * 255.0).astype(np.uint8).reshape(height, width, 3)
        bgra = np.empty((height, width, 4), dtype=np.uint8)
        bgra[..., :3] = rgb[::-1, :, ::-1]
        bgra[..., 3] = 255

        data_size = width * height * 4
        file_header = struct.pack("<2sIHHI", b"BM", _PIXEL_OFFSET + data_size, 0, 0, _PIXEL_OFFSET)
        info_header = struct.pack(
            "<IiiHHIIIIII", _INFO_HEADER_SIZE, width, height, 1, 32, 3, 0, 0, 0, 0, 0
        )
        info_header += struct.pack("<IIIII", 0xFF0000, 0xFF00, 0xFF, 0xFF000000, 0)
        info_header += bytes(_INFO_HEADER_SIZE - len(info_header))
        return file_header + info_header + bgra.tobytes()

    def write_bitmap(self, path: str | os.PathLike) -> None:
        """Write the screen to ``path`` as a BMP file."""
        Path(path).write_bytes(self.to_bitmap())
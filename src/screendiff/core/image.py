"""Decoded RGBA rasters.

Pixels are kept as a read-only ``numpy`` array of shape ``(height, width, 4)``
so whole-buffer comparisons stay cheap, while per-pixel scans go through
:meth:`Image.at` which reads from a cached list-of-rows view.
"""
from __future__ import annotations

import io
from dataclasses import dataclass
from functools import cached_property
from typing import List

import numpy as np
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from ..errors import BoundsError, DecodeError
from .types import Pixel


@dataclass(frozen=True, eq=False)
class Image:
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4 or self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected an RGBA uint8 raster, got {self.pixels.shape} {self.pixels.dtype}")
        self.pixels.setflags(write=False)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Image":
        """Build an image from an ``(h, w, 4)`` array, copying the data."""

        return cls(np.array(array, dtype=np.uint8, copy=True))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def dimension(self) -> tuple[int, int]:
        return (self.width, self.height)

    @cached_property
    def _rows(self) -> List[List[List[int]]]:
        return self.pixels.tolist()

    def at(self, x: int, y: int) -> Pixel:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        r, g, b, a = self._rows[y][x]
        return (r, g, b, a)

    def same_pixels(self, other: "Image") -> bool:
        return bool(np.array_equal(self.pixels, other.pixels))

    def crop(self, x: int, y: int, width: int, height: int) -> "Image":
        """Return a new image holding only the requested sub-rectangle."""

        if width <= 0 or height <= 0 or x < 0 or y < 0:
            raise BoundsError(f"Invalid crop rectangle ({x}, {y}, {width}, {height})")
        if x + width > self.width or y + height > self.height:
            raise BoundsError(
                f"Crop ({x}, {y}, {width}, {height}) exceeds {self.width}x{self.height} image"
            )
        return Image(self.pixels[y : y + height, x : x + width].copy())


def decode(data: bytes) -> Image:
    """Decode compressed image bytes into an RGBA :class:`Image`."""

    try:
        with PILImage.open(io.BytesIO(data)) as src:
            src.load()
            rgba = src.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise DecodeError(f"Failed to decode image: {exc}") from exc
    return Image(np.asarray(rgba, dtype=np.uint8).copy())


def encode(image: Image, format: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    PILImage.fromarray(np.ascontiguousarray(image.pixels)).save(buffer, format=format)
    return buffer.getvalue()

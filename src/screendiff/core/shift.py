"""Shift tolerance: look for the original color near its old position.

The search walks square rings of growing half-width around ``(x, y)``.
:func:`ring` is pure so ring coverage and termination can be checked on their
own; :func:`shift_distance_at` only drives it.
"""
from __future__ import annotations

import math
from typing import List, Optional, Tuple

from .color import color_distance, color_matches
from .image import Image
from .types import Pixel

Coord = Tuple[int, int]


def ring(x: int, y: int, radius: int, width: int, height: int) -> Optional[List[Coord]]:
    """Return the in-bounds perimeter of the square of half-width ``radius``.

    Order is top edge, then left, bottom and right edges. Left and right edges
    only cover the rows strictly between top and bottom. ``None`` means every
    edge lies outside the image, so no larger ring can reach it either.
    """

    if radius == 0:
        return [(x, y)]

    coords: List[Coord] = []
    breached = 0
    top_row = y - radius
    bottom_row = y + radius
    left_col = x - radius
    right_col = x + radius
    xs = range(max(0, left_col), min(right_col, width - 1) + 1)
    inner_ys = range(max(0, top_row + 1), min(bottom_row - 1, height - 1) + 1)

    if top_row >= 0:
        coords.extend((dx, top_row) for dx in xs)
    else:
        breached += 1
    if left_col >= 0:
        coords.extend((left_col, dy) for dy in inner_ys)
    else:
        breached += 1
    if bottom_row < height:
        coords.extend((dx, bottom_row) for dx in xs)
    else:
        breached += 1
    if right_col < width:
        coords.extend((right_col, dy) for dy in inner_ys)
    else:
        breached += 1

    if breached == 4:
        return None
    return coords


def shift_distance_at(
    new_img: Image,
    original_color: Pixel,
    x: int,
    y: int,
    color_distance_limit: Optional[float],
    max_radius: Optional[int] = None,
) -> float:
    """Smallest ring radius holding a pixel that matches ``original_color``.

    Returns ``math.inf`` once the rings leave the image (or pass
    ``max_radius``) without a match.
    """

    radius = 0
    while max_radius is None or radius <= max_radius:
        coords = ring(x, y, radius, new_img.width, new_img.height)
        if coords is None:
            break
        for dx, dy in coords:
            if color_matches(original_color, new_img.at(dx, dy), color_distance_limit):
                return radius
        radius += 1
    return math.inf


def neighborhood_distance(new_img: Image, original_color: Pixel, x: int, y: int, radius: int) -> float:
    """Minimum color distance to ``original_color`` within ``radius`` of ``(x, y)``."""

    best = math.inf
    for dy in range(max(0, y - radius), min(y + radius, new_img.height - 1) + 1):
        for dx in range(max(0, x - radius), min(x + radius, new_img.width - 1) + 1):
            distance = color_distance(original_color, new_img.at(dx, dy))
            if distance < best:
                best = distance
                if best == 0:
                    return 0.0
    return best

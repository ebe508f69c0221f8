from __future__ import annotations

import math
from typing import Optional

from .types import Pixel


def color_distance(a: Pixel, b: Pixel) -> float:
    """Euclidean distance between two RGBA pixels."""

    return math.sqrt(
        (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2 + (a[3] - b[3]) ** 2
    )


def color_matches(a: Pixel, b: Pixel, limit: Optional[float]) -> bool:
    """Return ``True`` when ``b`` is within ``limit`` of ``a``.

    Without a limit only identical pixels match.
    """

    if limit is None:
        return a == b
    return color_distance(a, b) <= limit

"""Locate the rectangle enclosing the pixels that fail the tolerance test.

:func:`find_diff_rectangle` is the converging two-phase search used by default.
It narrows the horizontal extent row by row and then only probes the columns
already known to be inside the box below the provisional bottom. The backward
scan of each row also updates ``top``, ``left`` and ``bottom``, so a difference
that only shows up near the right edge still widens the box and the result is
the minimal enclosing rectangle.
:func:`find_exact_diff_rectangle` visits every pixel instead; it is slower and
is selected with ``exact_bounds=True`` on the comparison session.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

from .color import color_distance
from .image import Image
from .shift import neighborhood_distance, shift_distance_at
from .types import BoundingBox

logger = logging.getLogger(__name__)


class PixelMatcher:
    """Per-pixel tolerance test that records the worst distances it has seen.

    A matcher belongs to one old/new pair. ``max_color_distance`` and
    ``max_shift_distance`` only describe the pixels visited so far. Shift
    distances are only measured when a shift limit is set.
    """

    def __init__(
        self,
        old_img: Image,
        new_img: Image,
        *,
        color_distance_limit: Optional[float] = None,
        shift_distance_limit: Optional[int] = None,
    ) -> None:
        self.old_img = old_img
        self.new_img = new_img
        self.color_distance_limit = color_distance_limit
        self.shift_distance_limit = shift_distance_limit
        self.max_color_distance: float = 0.0
        self.max_shift_distance: float = 0.0

    @property
    def width(self) -> int:
        return self.old_img.width

    @property
    def height(self) -> int:
        return self.old_img.height

    def color_distance_at(self, x: int, y: int) -> float:
        org_color = self.old_img.at(x, y)
        if self.shift_distance_limit is not None:
            return neighborhood_distance(self.new_img, org_color, x, y, self.shift_distance_limit)
        return color_distance(org_color, self.new_img.at(x, y))

    def same_color(self, x: int, y: int) -> bool:
        distance = self.color_distance_at(x, y)
        if distance > self.max_color_distance:
            self.max_color_distance = distance

        limit = self.color_distance_limit
        color_matches = distance == 0 or (limit is not None and limit > 0 and distance <= limit)
        if self.shift_distance_limit is None or self.max_shift_distance == math.inf:
            return color_matches

        shift_distance = self.shift_distance_at(x, y)
        if shift_distance > self.max_shift_distance:
            self.max_shift_distance = shift_distance
        return color_matches

    def shift_distance_at(self, x: int, y: int) -> float:
        org_color = self.old_img.at(x, y)
        direct = color_distance(org_color, self.new_img.at(x, y))
        limit = self.color_distance_limit
        if direct == 0 or (limit is not None and limit > 0 and direct <= limit):
            return 0
        return shift_distance_at(self.new_img, org_color, x, y, limit)

    def scan_all(self) -> None:
        """Visit every pixel so the recorded maxima cover the whole image."""

        for y in range(self.height):
            for x in range(self.width):
                self.same_color(x, y)


def find_top(matcher: PixelMatcher) -> Optional[BoundingBox]:
    """Return a one-pixel box at the first differing pixel in raster order."""

    for y in range(matcher.height):
        for x in range(matcher.width):
            if not matcher.same_color(x, y):
                logger.debug("first differing pixel at (%d, %d)", x, y)
                return BoundingBox(x, y, x, y)
    return None


def find_diff_rectangle(
    matcher: PixelMatcher, seed: Optional[BoundingBox] = None
) -> Optional[BoundingBox]:
    """Two-phase converging search for the difference rectangle.

    ``seed`` is a box already known to lie inside the difference, usually the
    result of :func:`find_top`.
    """

    left, top, right, bottom = _find_left_right_and_top(matcher, seed)
    if top is None:
        return None
    bottom = _find_bottom(matcher, left, right, bottom)
    return BoundingBox(left, top, right, bottom)


def _find_left_right_and_top(matcher: PixelMatcher, seed: Optional[BoundingBox]):
    if seed is not None:
        left, top, right, bottom = seed.as_tuple()
    else:
        left, top, right, bottom = matcher.width, None, -1, None

    for y in range(matcher.height):
        for x in range(0, left):
            if not matcher.same_color(x, y):
                if top is None:
                    top = y
                bottom = y
                left = x
                right = max(right, x)
                break
        for x in range(matcher.width - 1, right, -1):
            if not matcher.same_color(x, y):
                if top is None:
                    top = y
                bottom = y
                right = x
                left = min(left, x)
                break
    return left, top, right, bottom


def _find_bottom(matcher: PixelMatcher, left: int, right: int, bottom: int) -> int:
    for y in range(matcher.height - 1, bottom, -1):
        for x in range(left, right + 1):
            if not matcher.same_color(x, y):
                return y
    return bottom


def find_exact_diff_rectangle(matcher: PixelMatcher) -> Optional[BoundingBox]:
    """Minimal box around every differing pixel, found with a full scan."""

    left = top = right = bottom = None
    for y in range(matcher.height):
        for x in range(matcher.width):
            if matcher.same_color(x, y):
                continue
            if top is None:
                top = y
            bottom = y
            left = x if left is None else min(left, x)
            right = x if right is None else max(right, x)
    if top is None:
        return None
    return BoundingBox(left, top, right, bottom)

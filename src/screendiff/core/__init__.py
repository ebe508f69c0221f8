"""Pixel-level comparison primitives."""

from .color import color_distance, color_matches
from .diff import PixelMatcher, find_diff_rectangle, find_exact_diff_rectangle, find_top
from .image import Image, decode, encode
from .shift import neighborhood_distance, ring, shift_distance_at
from .types import BoundingBox, ComparisonOutcome, Different, Equal, NoBaseline, Pixel

__all__ = [
    "color_distance",
    "color_matches",
    "PixelMatcher",
    "find_diff_rectangle",
    "find_exact_diff_rectangle",
    "find_top",
    "Image",
    "decode",
    "encode",
    "neighborhood_distance",
    "ring",
    "shift_distance_at",
    "BoundingBox",
    "ComparisonOutcome",
    "Different",
    "Equal",
    "NoBaseline",
    "Pixel",
]

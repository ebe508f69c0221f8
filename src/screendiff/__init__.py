"""Screenshot comparison with color, shift and area tolerances."""

from __future__ import annotations

from .compare import ComparisonSession, compare_files, compare_images
from .core.types import BoundingBox, ComparisonOutcome, Different, Equal, NoBaseline
from .errors import BoundsError, DecodeError, ScreenDiffError
from .presets import HighlightStyle, Preset, ToleranceConfig, get_preset, iter_presets

__all__ = [
    "ComparisonSession",
    "compare_files",
    "compare_images",
    "BoundingBox",
    "ComparisonOutcome",
    "Different",
    "Equal",
    "NoBaseline",
    "BoundsError",
    "DecodeError",
    "ScreenDiffError",
    "HighlightStyle",
    "Preset",
    "ToleranceConfig",
    "get_preset",
    "iter_presets",
]

__version__ = "0.1.0"

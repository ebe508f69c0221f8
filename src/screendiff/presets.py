"""Tolerance presets and color helpers."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Mapping, Optional, Tuple

Color = Tuple[int, int, int, int]
Dimensions = Tuple[int, int]

HIGHLIGHT_RED: Color = (255, 0, 0, 255)


@dataclass(frozen=True)
class ToleranceConfig:
    """Limits a difference has to exceed before two images count as different.

    ``None`` disables the tolerance on that axis. ``crop_dimensions`` is a
    ``(width, height)`` pair anchored at the top-left corner.
    """

    color_distance_limit: Optional[float] = None
    area_size_limit: Optional[int] = None
    shift_distance_limit: Optional[int] = None
    crop_dimensions: Optional[Dimensions] = None

    def __post_init__(self) -> None:
        for name in ("color_distance_limit", "area_size_limit", "shift_distance_limit"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")
        if self.crop_dimensions is not None:
            width, height = self.crop_dimensions
            if width <= 0 or height <= 0:
                raise ValueError(f"crop_dimensions must be positive, got {self.crop_dimensions}")
            object.__setattr__(self, "crop_dimensions", (int(width), int(height)))

    @property
    def has_pixel_tolerance(self) -> bool:
        return self.color_distance_limit is not None or self.shift_distance_limit is not None

    def to_dict(self) -> Dict[str, object]:
        return {
            "color_distance_limit": self.color_distance_limit,
            "area_size_limit": self.area_size_limit,
            "shift_distance_limit": self.shift_distance_limit,
            "crop_dimensions": list(self.crop_dimensions) if self.crop_dimensions else None,
        }

    def copy(self, **overrides: object) -> "ToleranceConfig":
        return replace(self, **overrides)


@dataclass(frozen=True)
class HighlightStyle:
    """Outline drawn around the difference on annotated copies."""

    color: Color = HIGHLIGHT_RED


@dataclass(frozen=True)
class Preset:
    """Bundle of tolerances, highlight styling and metadata."""

    name: str
    description: str
    tolerances: ToleranceConfig
    style: HighlightStyle = field(default_factory=HighlightStyle)

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "tolerances": self.tolerances.to_dict(),
            "highlight_color": list(self.style.color),
        }


PRESETS: Mapping[str, Preset] = {
    "exact": Preset(
        name="exact",
        description="Any pixel change is a difference.",
        tolerances=ToleranceConfig(),
    ),
    "strict": Preset(
        name="strict",
        description="Ignores anti-aliasing noise only.",
        tolerances=ToleranceConfig(color_distance_limit=5.0),
    ),
    "balanced": Preset(
        name="balanced",
        description="Tolerates small color drift and one-pixel shifts.",
        tolerances=ToleranceConfig(color_distance_limit=10.0, shift_distance_limit=1),
    ),
    "loose": Preset(
        name="loose",
        description="Tolerates color drift, two-pixel shifts and tiny regions.",
        tolerances=ToleranceConfig(
            color_distance_limit=30.0,
            shift_distance_limit=2,
            area_size_limit=64,
        ),
    ),
}


def get_preset(name: str) -> Preset:
    key = name.lower()
    if key not in PRESETS:
        raise KeyError(f"Unknown preset '{name}'. Available: {', '.join(sorted(PRESETS))}")
    return PRESETS[key]


def iter_presets() -> Iterable[Preset]:
    return PRESETS.values()


def parse_color(value: Optional[str]) -> Optional[Color]:
    """Parse ``#RRGGBB``, ``#RRGGBBAA`` or ``r,g,b[,a]`` into an RGBA tuple."""

    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if value.startswith("#"):
        hex_value = value[1:]
        if len(hex_value) not in (6, 8):
            raise ValueError("Hex colors must be #RRGGBB or #RRGGBBAA")
        channels = [int(hex_value[i : i + 2], 16) for i in range(0, len(hex_value), 2)]
    else:
        parts = value.replace(";", ",").split(",")
        if len(parts) not in (3, 4):
            raise ValueError("RGB colors must provide three or four comma separated numbers")
        channels = [int(p.strip()) for p in parts]
    if any(not 0 <= channel <= 255 for channel in channels):
        raise ValueError(f"Color channels must be within 0-255, got '{value}'")
    if len(channels) == 3:
        channels.append(255)
    return tuple(channels)  # type: ignore[return-value]


def parse_dimensions(value: Optional[str]) -> Optional[Dimensions]:
    """Parse ``WIDTHxHEIGHT`` (``800x600``) into a tuple."""

    if value is None:
        return None
    value = value.strip().lower()
    if not value:
        return None
    parts = value.replace(",", "x").split("x")
    if len(parts) != 2:
        raise ValueError(f"Dimensions '{value}' must look like WIDTHxHEIGHT")
    try:
        width, height = (int(p.strip()) for p in parts)
    except ValueError as exc:
        raise ValueError(f"Dimensions '{value}' have invalid numbers") from exc
    if width <= 0 or height <= 0:
        raise ValueError(f"Dimensions '{value}' must be positive")
    return width, height

"""Environment overrides for comparison defaults.

Values are read once into immutable objects; nothing here is consulted while
a comparison runs.
"""
from __future__ import annotations

import logging
import os
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv

from .presets import ToleranceConfig, parse_dimensions

logger = logging.getLogger(__name__)

ENV_PREFIX = "SCREENDIFF_"
DEFAULT_PRESET = "exact"
DEFAULT_LOG_LEVEL = "WARNING"


def load_env() -> None:
    """Load configuration from a .env file if present."""
    try:
        load_dotenv()
    except OSError:
        logger.debug("Could not read .env file", exc_info=True)


def _get(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, object]:
    """Return tolerance overrides found in ``environ`` (default ``os.environ``)."""

    environ = os.environ if environ is None else environ
    overrides: Dict[str, object] = {}
    for field_name, env_name, convert in (
        ("color_distance_limit", "COLOR_DISTANCE_LIMIT", float),
        ("shift_distance_limit", "SHIFT_DISTANCE_LIMIT", int),
        ("area_size_limit", "AREA_SIZE_LIMIT", int),
        ("crop_dimensions", "CROP", parse_dimensions),
    ):
        raw = _get(environ, env_name)
        if raw is None:
            continue
        try:
            overrides[field_name] = convert(raw)
        except ValueError as exc:
            raise ValueError(f"Invalid {ENV_PREFIX}{env_name}={raw!r}: {exc}") from exc
    return overrides


def tolerances_from_env(
    base: Optional[ToleranceConfig] = None, environ: Optional[Mapping[str, str]] = None
) -> ToleranceConfig:
    base = base or ToleranceConfig()
    overrides = env_overrides(environ)
    return base.copy(**overrides) if overrides else base


def preset_name_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    return _get(environ, "PRESET") or DEFAULT_PRESET


def log_level_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    return (_get(environ, "LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()

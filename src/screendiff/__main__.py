"""Command line interface for screendiff."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Optional

from .compare import ComparisonSession
from .config import env_overrides, load_env, log_level_from_env, preset_name_from_env
from .core.types import Different, NoBaseline
from .errors import ScreenDiffError
from .presets import HighlightStyle, ToleranceConfig, get_preset, parse_color, parse_dimensions
from .report import build_report, report_to_json, write_json_report

EXIT_EQUAL = 0
EXIT_DIFFERENT = 1
EXIT_NO_BASELINE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="screendiff",
        description="Compare a screenshot against its baseline within color, shift and area tolerances.",
    )
    parser.add_argument("--new", help="Path to the candidate screenshot")
    parser.add_argument("--old", help="Path to the baseline screenshot (default: <new>~)")
    parser.add_argument("--preset", help="Preset name (exact|strict|balanced|loose)")
    parser.add_argument("--color-distance-limit", type=float, help="Maximum RGBA distance per pixel")
    parser.add_argument("--shift-distance-limit", type=int, help="Maximum pixel displacement tolerated")
    parser.add_argument("--area-size-limit", type=int, help="Largest difference area (px^2) still equal")
    parser.add_argument("--crop", help="Compare only the top-left WIDTHxHEIGHT area")
    parser.add_argument("--highlight-color", help="Outline color (#RRGGBB[AA] or r,g,b[,a])")
    parser.add_argument(
        "--exact-bounds",
        action="store_true",
        help="Scan every pixel for the difference rectangle instead of the converging search",
    )
    parser.add_argument("--quick", action="store_true", help="Only answer equal/different, write nothing")
    parser.add_argument("--json", help="Write a JSON report to this path ('-' for stdout)")
    parser.add_argument("--log-level", help="Logging level (default: WARNING)")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__

        print(__version__)
        return 0

    logging.basicConfig(
        level=(args.log_level or log_level_from_env()).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.new:
        parser.error("--new is required")
        return EXIT_NO_BASELINE

    try:
        preset = get_preset(args.preset or preset_name_from_env())
    except KeyError as exc:
        parser.error(str(exc))
        return EXIT_NO_BASELINE

    try:
        tolerances = _override_tolerances(preset.tolerances, args)
        color = parse_color(args.highlight_color)
    except ValueError as exc:
        parser.error(str(exc))
        return EXIT_NO_BASELINE
    style = HighlightStyle(color=color) if color else preset.style

    session = ComparisonSession.from_files(
        args.new,
        args.old,
        tolerances=tolerances,
        style=style,
        exact_bounds=args.exact_bounds,
    )

    try:
        if args.quick:
            return _run_quick(session)
        outcome = session.different()
    except (ScreenDiffError, OSError) as exc:
        print(f"screendiff: {exc}", file=sys.stderr)
        return EXIT_NO_BASELINE

    if args.json:
        report = build_report(session, outcome, include_metrics=not isinstance(outcome, NoBaseline))
        if args.json == "-":
            print(report_to_json(report))
        else:
            write_json_report(report, args.json)

    if isinstance(outcome, NoBaseline):
        return EXIT_NO_BASELINE
    if isinstance(outcome, Different):
        print(f"{args.new}: different at {outcome.box.as_tuple()}")
        return EXIT_DIFFERENT
    return EXIT_EQUAL


def _run_quick(session: ComparisonSession) -> int:
    verdict = session.quick_equal()
    if verdict is None:
        return EXIT_NO_BASELINE
    return EXIT_EQUAL if verdict else EXIT_DIFFERENT


def _override_tolerances(preset_tolerances: ToleranceConfig, args: argparse.Namespace) -> ToleranceConfig:
    overrides = env_overrides()
    for field_name, arg_name in (
        ("color_distance_limit", "color_distance_limit"),
        ("shift_distance_limit", "shift_distance_limit"),
        ("area_size_limit", "area_size_limit"),
    ):
        value = getattr(args, arg_name)
        if value is not None:
            overrides[field_name] = value
    if args.crop:
        overrides["crop_dimensions"] = parse_dimensions(args.crop)
    return preset_tolerances.copy(**overrides)


if __name__ == "__main__":
    sys.exit(main())

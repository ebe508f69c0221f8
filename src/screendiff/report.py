"""JSON report helpers."""
from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Dict, Optional

from .compare import ComparisonSession
from .core.types import ComparisonOutcome


def _json_number(value: Optional[float]):
    if value is None:
        return None
    if math.isinf(value):
        return "Infinity"
    return float(value)


def build_report(
    session: ComparisonSession,
    outcome: ComparisonOutcome,
    *,
    include_metrics: bool = True,
) -> Dict[str, object]:
    data: Dict[str, object] = {"outcome": outcome.to_dict()}
    data.update(session.to_dict())
    if include_metrics:
        data["metrics"] = {
            "max_color_distance": _json_number(session.max_color_distance),
            "max_shift_distance": _json_number(session.max_shift_distance),
        }
    return data


def write_json_report(report: Dict[str, object], path: str | Path) -> None:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as handle:
        json.dump(report, handle, ensure_ascii=False, indent=2)


def report_to_json(report: Dict[str, object]) -> str:
    return json.dumps(report, ensure_ascii=False, indent=2)

"""Snapshot files of a comparison pair.

The candidate screenshot lives at ``<name>.png``. Its baseline defaults to a
``<name>.png~`` sibling checked out next to it, and annotated copies are
written as ``<name>_0.png~`` (baseline) and ``<name>_1.png~`` (candidate).
"""
from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

BASELINE_SUFFIX = "~"


def _annotated_name(new_path: Path, index: int) -> Path:
    stem = new_path.name[: -len(".png")] if new_path.name.endswith(".png") else new_path.name
    return new_path.with_name(f"{stem}_{index}.png{BASELINE_SUFFIX}")


@dataclass(frozen=True)
class SnapshotPaths:
    new: Path
    old: Path
    annotated_old: Path
    annotated_new: Path
    temporary_baseline: bool

    @classmethod
    def for_candidate(cls, new_path: str | Path, old_path: str | Path | None = None) -> "SnapshotPaths":
        new = Path(new_path)
        default_old = new.with_name(new.name + BASELINE_SUFFIX)
        old = Path(old_path) if old_path is not None else default_old
        return cls(
            new=new,
            old=old,
            annotated_old=_annotated_name(new, 0),
            annotated_new=_annotated_name(new, 1),
            temporary_baseline=old == default_old,
        )

    def to_dict(self) -> dict:
        return {
            "new": str(self.new),
            "old": str(self.old),
            "annotated_old": str(self.annotated_old),
            "annotated_new": str(self.annotated_new),
        }


class SnapshotStore:
    """File operations backing a comparison of two snapshot files."""

    def __init__(self, paths: SnapshotPaths) -> None:
        self.paths = paths

    def baseline_exists(self) -> bool:
        return self.paths.old.is_file()

    def read(self) -> tuple[bytes, bytes]:
        return self.paths.old.read_bytes(), self.paths.new.read_bytes()

    def save_annotated(self, old_png: bytes, new_png: bytes) -> None:
        self.paths.annotated_old.parent.mkdir(parents=True, exist_ok=True)
        self.paths.annotated_old.write_bytes(old_png)
        self.paths.annotated_new.write_bytes(new_png)
        logger.info("annotated copies saved to %s and %s", self.paths.annotated_old, self.paths.annotated_new)

    def clean(self) -> None:
        """Leave the files as if the images had always matched."""

        if self.baseline_exists():
            shutil.copyfile(self.paths.old, self.paths.new)
            if self.paths.temporary_baseline:
                self.paths.old.unlink()
        for stale in (self.paths.annotated_old, self.paths.annotated_new):
            if stale.exists():
                stale.unlink()
                logger.debug("removed stale annotation %s", stale)

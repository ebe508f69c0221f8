from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Tuple, Union

Pixel = Tuple[int, int, int, int]
Status = Literal["no_baseline", "equal", "different"]


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive pixel rectangle enclosing the detected difference."""

    left: int
    top: int
    right: int
    bottom: int

    def __post_init__(self) -> None:
        if self.left > self.right or self.top > self.bottom:
            raise ValueError(f"Degenerate bounding box {self.as_tuple()}")

    @classmethod
    def full(cls, width: int, height: int) -> "BoundingBox":
        return cls(0, 0, width - 1, height - 1)

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.left, self.top, self.right, self.bottom)

    def to_dict(self) -> Dict[str, int]:
        return {
            "left": self.left,
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "area": self.area,
        }


@dataclass(frozen=True)
class NoBaseline:
    """Nothing to compare against yet (typically the first run)."""

    status: Status = "no_baseline"

    def to_dict(self) -> Dict[str, object]:
        return {"status": self.status}


@dataclass(frozen=True)
class Equal:
    status: Status = "equal"

    def to_dict(self) -> Dict[str, object]:
        return {"status": self.status}


@dataclass(frozen=True)
class Different:
    box: BoundingBox
    size_changed: bool = False
    status: Status = "different"

    def to_dict(self) -> Dict[str, object]:
        return {
            "status": self.status,
            "size_changed": self.size_changed,
            "box": self.box.to_dict(),
        }


ComparisonOutcome = Union[NoBaseline, Equal, Different]

"""Screenshot comparison sessions.

A :class:`ComparisonSession` compares one candidate image against one
baseline. :meth:`ComparisonSession.quick_equal` answers as cheaply as
possible; :meth:`ComparisonSession.different` produces the full outcome,
including the difference rectangle and annotated copies.

The session keeps the state computed along the way (decoded images, the pixel
matcher and the best-known rectangle) so that calling ``quick_equal`` and then
``different`` on the same pair does not scan twice. Use :meth:`reset` before
reusing a session after either image changed.
"""
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional, Tuple

from .core.diff import PixelMatcher, find_diff_rectangle, find_exact_diff_rectangle, find_top
from .core.image import Image, decode, encode
from .core.types import BoundingBox, ComparisonOutcome, Different, Equal, NoBaseline
from .overlay import annotate_images
from .presets import HighlightStyle, ToleranceConfig
from .storage import SnapshotPaths, SnapshotStore

logger = logging.getLogger(__name__)


class ComparisonSession:
    def __init__(
        self,
        *,
        old_bytes: Optional[bytes] = None,
        new_bytes: Optional[bytes] = None,
        store: Optional[SnapshotStore] = None,
        tolerances: Optional[ToleranceConfig] = None,
        style: Optional[HighlightStyle] = None,
        exact_bounds: bool = False,
        label: str = "",
    ) -> None:
        if store is None and new_bytes is None:
            raise ValueError("A comparison needs either a snapshot store or the new image bytes")
        self.store = store
        self.tolerances = tolerances or ToleranceConfig()
        self.style = style or HighlightStyle()
        self.exact_bounds = exact_bounds
        self.label = label or (str(store.paths.new) if store else "<memory>")
        self._old_bytes = old_bytes
        self._new_bytes = new_bytes
        self.annotated_images: Optional[Tuple[bytes, bytes]] = None
        self.reset()

    @classmethod
    def from_files(
        cls,
        new_path: str | Path,
        old_path: str | Path | None = None,
        **kwargs,
    ) -> "ComparisonSession":
        """Compare ``new_path`` against ``old_path`` (default ``<new_path>~``)."""

        store = SnapshotStore(SnapshotPaths.for_candidate(new_path, old_path))
        return cls(store=store, **kwargs)

    @classmethod
    def from_bytes(cls, old: Optional[bytes], new: bytes, **kwargs) -> "ComparisonSession":
        """Compare in memory; annotated copies are kept on the session."""

        return cls(old_bytes=old, new_bytes=new, **kwargs)

    def reset(self) -> None:
        """Forget everything computed about the current pair."""

        self._images: Optional[Tuple[Image, Image]] = None
        self._matcher: Optional[PixelMatcher] = None
        self._scanned_all = False
        self._identical = False
        self._box: Optional[BoundingBox] = None
        self.annotated_images = None

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def baseline_exists(self) -> bool:
        if self.store is not None:
            return self.store.baseline_exists()
        return self._old_bytes is not None

    def _read(self) -> Tuple[bytes, bytes]:
        if self.store is not None:
            return self.store.read()
        if self._old_bytes is None or self._new_bytes is None:
            raise ValueError(f"No baseline to compare {self.label} against")
        return self._old_bytes, self._new_bytes

    def _load_images(self, old_bytes: bytes, new_bytes: bytes) -> Tuple[Image, Image]:
        if self._images is None:
            old_img, new_img = decode(old_bytes), decode(new_bytes)
            if self.tolerances.crop_dimensions:
                old_img = _crop(old_img, self.tolerances.crop_dimensions)
                new_img = _crop(new_img, self.tolerances.crop_dimensions)
            self._images = (old_img, new_img)
        return self._images

    def _new_matcher(self, old_img: Image, new_img: Image) -> PixelMatcher:
        return PixelMatcher(
            old_img,
            new_img,
            color_distance_limit=self.tolerances.color_distance_limit,
            shift_distance_limit=self.tolerances.shift_distance_limit,
        )

    def _get_matcher(self, old_img: Image, new_img: Image) -> PixelMatcher:
        if self._matcher is None:
            self._matcher = self._new_matcher(old_img, new_img)
        return self._matcher

    def _sizes_changed(self, old_img: Image, new_img: Image) -> bool:
        if old_img.dimension == new_img.dimension:
            return False
        logger.warning(
            "Image size has changed for %s: %dx%d => %dx%d",
            self.label,
            old_img.width,
            old_img.height,
            new_img.width,
            new_img.height,
        )
        return True

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def quick_equal(self) -> Optional[bool]:
        """Return ``True``/``False`` as quickly as possible.

        ``None`` means there is no baseline to compare against.
        """

        if not self.baseline_exists():
            return None

        old_bytes, new_bytes = self._read()
        if len(old_bytes) == len(new_bytes) and old_bytes == new_bytes:
            self._identical = True
            return True

        old_img, new_img = self._load_images(old_bytes, new_bytes)
        del old_bytes, new_bytes

        if self._sizes_changed(old_img, new_img):
            return False
        if old_img.same_pixels(new_img):
            self._identical = True
            return True

        if not self.tolerances.has_pixel_tolerance:
            return False

        matcher = self._get_matcher(old_img, new_img)
        self._box = find_top(matcher)
        if self._box is None:
            self._scanned_all = True
            return True

        area_limit = self.tolerances.area_size_limit
        if area_limit is not None:
            self._box = self._find_rectangle(matcher, self._box)
            if self._box is not None and self._box.area <= area_limit:
                return True
        return False

    def different(self) -> ComparisonOutcome:
        """Compare the pair and persist annotations or clean up accordingly."""

        if not self.baseline_exists():
            logger.info("no baseline for %s", self.label)
            return NoBaseline()

        old_bytes, new_bytes = self._read()
        if old_bytes == new_bytes:
            self._identical = True
            return self._not_different()

        old_img, new_img = self._load_images(old_bytes, new_bytes)

        if self._sizes_changed(old_img, new_img):
            self._box = BoundingBox.full(old_img.width, old_img.height)
            self._save_annotations(old_img, new_img)
            return Different(self._box, size_changed=True)

        if old_img.same_pixels(new_img):
            self._identical = True
            return self._not_different()

        matcher = self._get_matcher(old_img, new_img)
        self._box = self._find_rectangle(matcher, self._box)

        if self._box is None:
            return self._not_different()
        area_limit = self.tolerances.area_size_limit
        if area_limit is not None and self._box.area <= area_limit:
            logger.debug("difference of %d px within area limit %d", self._box.area, area_limit)
            return self._not_different()

        self._save_annotations(*annotate_images(old_img, new_img, self._box, self.style))
        logger.info("%s differs in %s", self.label, self._box.as_tuple())
        return Different(self._box)

    def _find_rectangle(self, matcher: PixelMatcher, seed: Optional[BoundingBox]) -> Optional[BoundingBox]:
        if self.exact_bounds:
            box = find_exact_diff_rectangle(matcher)
            self._scanned_all = True
            return box
        return find_diff_rectangle(matcher, seed)

    def _not_different(self) -> Equal:
        if self.store is not None:
            self.store.clean()
        return Equal()

    def _save_annotations(self, old_img: Image, new_img: Image) -> None:
        old_png, new_png = encode(old_img), encode(new_img)
        self.annotated_images = (old_png, new_png)
        if self.store is not None:
            self.store.save_annotated(old_png, new_png)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    @property
    def bounding_box(self) -> Optional[BoundingBox]:
        return self._box

    @property
    def size(self) -> Optional[int]:
        return self._box.area if self._box is not None else None

    @property
    def max_color_distance(self) -> float:
        return self._calculate_metrics()[0]

    @property
    def max_shift_distance(self) -> float:
        """Worst displacement seen; always ``0.0`` without a shift limit."""

        return self._calculate_metrics()[1]

    def _calculate_metrics(self) -> Tuple[float, float]:
        """Return ``(max_color_distance, max_shift_distance)`` for the pair.

        Identical inputs measure ``0.0``. Images of different sizes have no
        pixel correspondence and measure ``math.inf``.
        """

        if self._identical:
            return 0.0, 0.0
        matcher = self._matcher if self._scanned_all else None
        if matcher is None:
            if self._images is None:
                old_bytes, new_bytes = self._read()
                if old_bytes == new_bytes:
                    self._identical = True
                    return 0.0, 0.0
                self._load_images(old_bytes, new_bytes)
            old_img, new_img = self._images
            if old_img.dimension != new_img.dimension:
                return math.inf, math.inf
            matcher = self._matcher = self._new_matcher(old_img, new_img)
            matcher.scan_all()
            self._scanned_all = True
        return matcher.max_color_distance, matcher.max_shift_distance

    def to_dict(self) -> dict:
        data = {
            "label": self.label,
            "tolerances": self.tolerances.to_dict(),
            "box": self._box.to_dict() if self._box else None,
        }
        if self.store is not None:
            data["files"] = self.store.paths.to_dict()
        return data


def _crop(image: Image, dimensions: Tuple[int, int]) -> Image:
    width, height = dimensions
    if image.dimension == (width, height) or image.width < width or image.height < height:
        return image
    return image.crop(0, 0, width, height)


def compare_files(
    new_path: str | Path,
    old_path: str | Path | None = None,
    *,
    tolerances: Optional[ToleranceConfig] = None,
    **kwargs,
) -> ComparisonOutcome:
    session = ComparisonSession.from_files(new_path, old_path, tolerances=tolerances, **kwargs)
    return session.different()


def compare_images(
    old: Optional[bytes],
    new: bytes,
    *,
    tolerances: Optional[ToleranceConfig] = None,
    **kwargs,
) -> ComparisonOutcome:
    session = ComparisonSession.from_bytes(old, new, tolerances=tolerances, **kwargs)
    return session.different()

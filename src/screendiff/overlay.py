"""Draw the difference rectangle on copies of the compared images."""
from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from PIL import Image as PILImage
from PIL import ImageDraw

from .core.image import Image
from .core.types import BoundingBox
from .presets import HighlightStyle


def draw_rectangle(image: Image, box: BoundingBox, style: Optional[HighlightStyle] = None) -> Image:
    """Return a copy of ``image`` outlined one pixel outside ``box``.

    Parts of the outline falling outside the image are clipped.
    """

    style = style or HighlightStyle()
    canvas = PILImage.fromarray(np.array(image.pixels, copy=True))
    draw = ImageDraw.Draw(canvas)
    draw.rectangle(
        [box.left - 1, box.top - 1, box.right + 1, box.bottom + 1],
        outline=style.color,
        width=1,
    )
    return Image(np.asarray(canvas, dtype=np.uint8).copy())


def annotate_images(
    old_img: Image,
    new_img: Image,
    box: BoundingBox,
    style: Optional[HighlightStyle] = None,
) -> Tuple[Image, Image]:
    return draw_rectangle(old_img, box, style), draw_rectangle(new_img, box, style)

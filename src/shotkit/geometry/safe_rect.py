"""
Module: geometry.safe_rect

Purpose:
    Clamp an arbitrary rectangle to an image's bounds. The result is
    always a valid, non-negative, integer region fully contained in
    ``[0, width] x [0, height]``.

Key Functions:
    - clamp(): Narrow a Rect to image bounds

Used By:
    - image.handle: crop() and clear()
"""

from __future__ import annotations

import math
from typing import Union

from shotkit.core.models import Rect, Size

from .scaling import snap_to_pixels

# Far beyond any real image; keeps left + width finite
_LIMIT = 2 ** 53


def _clip(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _finite(value: float) -> float:
    # NaN -> 0; infinities and huge values saturate at +-_LIMIT
    if math.isnan(value):
        return 0
    return max(-_LIMIT, min(value, _LIMIT))


def clamp(rect: Rect, bounds: Union[Size, tuple[int, int]]) -> Rect:
    """
    Clamp ``rect`` to ``bounds``.

    Steps:
    1. Replace NaN with 0, saturate infinities and huge values,
       then snap to the pixel grid (outward rounding)
    2. Clip left to [0, width] and top to [0, height]
    3. Clip width/height to [0, space remaining from the clipped origin]

    Never raises for numeric input: a region entirely outside the image
    degenerates to a zero-area Rect at the nearest corner or edge.
    Clamping is idempotent, and an in-bounds integer Rect is returned
    unchanged.

    Args:
        rect: Requested region (may be negative, oversized or fractional)
        bounds: Image size as Size or (width, height)

    Returns:
        Rect with 0 <= left, 0 <= top, right <= width, bottom <= height

    Example:
        >>> clamp(Rect(90, 90, 50, 50), Size(100, 100))
        Rect(left=90, top=90, width=10, height=10)
        >>> clamp(Rect(-5, 200, 10, 10), Size(100, 100))
        Rect(left=0, top=100, width=10, height=0)
    """
    bounds = Size.coerce(bounds)
    rect = Rect(
        _finite(rect.left),
        _finite(rect.top),
        _finite(rect.width),
        _finite(rect.height),
    )
    snapped = snap_to_pixels(rect)

    left = _clip(snapped.left, 0, bounds.width)
    top = _clip(snapped.top, 0, bounds.height)

    max_width = bounds.width - left
    max_height = bounds.height - top

    width = _clip(snapped.width, 0, max_width)
    height = _clip(snapped.height, 0, max_height)

    return Rect(left, top, width, height)

"""
Module: geometry.scaling

Purpose:
    Convert rectangles between logical (device-independent) units and
    raw pixels.

Key Functions:
    - scale(): Multiply left/top/width/height by a factor
    - snap_to_pixels(): Round outward onto the integer pixel grid

Rounding:
    scale() does no rounding, so scaling composes exactly:
    ``scale(scale(r, f), g) == scale(r, f * g)``. Rounding happens once,
    in snap_to_pixels(), which floors the left/top edges and ceils the
    right/bottom edges. The snapped region always covers every pixel the
    fractional region touches.

Used By:
    - geometry.safe_rect: clamp() snaps before clamping
    - image.handle: crop() and clear()
"""

from __future__ import annotations

import math
from typing import Optional

from shotkit.core.models import Rect


def scale(rect: Rect, factor: Optional[float] = 1) -> Rect:
    """
    Scale a rectangle by ``factor``.

    Args:
        rect: Region in logical units
        factor: Multiplier; None and 0 are treated as 1 (unset)

    Returns:
        New Rect with every field multiplied by ``factor``

    Raises:
        ValueError: If factor is negative

    Example:
        >>> scale(Rect(10, 10, 20, 20), 2)
        Rect(left=20, top=20, width=40, height=40)
    """
    if not factor:
        factor = 1
    if factor < 0:
        raise ValueError(f"factor must not be negative: {factor}")
    if factor == 1:
        return rect
    return Rect(
        left=rect.left * factor,
        top=rect.top * factor,
        width=rect.width * factor,
        height=rect.height * factor,
    )


def snap_to_pixels(rect: Rect) -> Rect:
    """
    Round a rectangle outward to integer pixel coordinates.

    Integer rectangles come back unchanged (as ints).

    Args:
        rect: Region with possibly fractional coordinates

    Returns:
        Integer Rect covering ``rect``
    """
    left = math.floor(rect.left)
    top = math.floor(rect.top)
    right = math.ceil(rect.right)
    bottom = math.ceil(rect.bottom)
    return Rect(left, top, right - left, bottom - top)

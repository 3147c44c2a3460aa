"""
Module: geometry

Purpose:
    Pure rectangle arithmetic used before any pixel is touched: scale a
    region from logical units to pixels, then clamp it to image bounds.

Key Functions:
    - scale(): Multiply a region by a device/pixel-ratio factor
    - snap_to_pixels(): Round a fractional region outward to whole pixels
    - clamp(): Narrow any region to one fully inside the image
"""

from .scaling import scale, snap_to_pixels
from .safe_rect import clamp

__all__ = [
    "scale",
    "snap_to_pixels",
    "clamp",
]

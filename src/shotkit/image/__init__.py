"""
Module: image

Purpose:
    Image handle and the Pillow buffer engine behind it.

Key Classes:
    - Image: Region operations (crop, clear, join, save)
    - PixelBuffer: Pillow-backed RGBA pixel grid
"""

from .buffer import PixelBuffer
from .handle import Image

__all__ = [
    "Image",
    "PixelBuffer",
]

"""
Core Models Package

Immutable value types passed between the geometry, image and compare
layers. All models are frozen dataclasses: rectangles are passed by value
and never shared mutably between handles.
"""

from .rect import Rect, Size
from .color import RGBA, color_to_string, string_to_color

__all__ = [
    "Rect",
    "Size",
    "RGBA",
    "color_to_string",
    "string_to_color",
]

"""
Module: color

Purpose:
    RGBA colour value plus conversion to and from colour strings.
    Parsing is delegated to Pillow's colour codec (PIL.ImageColor), so
    anything Pillow accepts (``#rgb``, ``#rrggbb``, ``#rrggbbaa``,
    ``rgb(...)``, named colours) can be used wherever a colour string is
    expected.

Key Classes:
    - RGBA: Four-channel colour value

Key Functions:
    - color_to_string(): RGBA -> ``#rrggbb`` / ``#rrggbbaa``
    - string_to_color(): colour string -> RGBA

Dependencies:
    - PIL.ImageColor: Colour string parsing
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from PIL import ImageColor


@dataclass(frozen=True, slots=True)
class RGBA:
    """
    Colour with 8-bit red, green, blue and alpha channels.

    Attributes:
        r: Red channel (0-255)
        g: Green channel (0-255)
        b: Blue channel (0-255)
        a: Alpha channel (0-255, default opaque)
    """

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be in [0, 255]: {value}")

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Colour channels without alpha."""
        return (self.r, self.g, self.b)

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Get as (r, g, b, a) tuple for PIL."""
        return (self.r, self.g, self.b, self.a)

    @classmethod
    def from_tuple(cls, channels: Sequence[int]) -> RGBA:
        """Build from a PIL pixel tuple (3 or 4 channels)."""
        if len(channels) == 3:
            r, g, b = channels
            return cls(r, g, b)
        r, g, b, a = channels
        return cls(r, g, b, a)


def color_to_string(color: Union[RGBA, Sequence[int]]) -> str:
    """
    Format a colour as a hex string.

    Opaque colours use ``#rrggbb``; translucent ones keep their alpha as
    ``#rrggbbaa`` so the string parses back to the same value.

    Args:
        color: RGBA value or PIL channel tuple

    Returns:
        Lower-case hex colour string

    Example:
        >>> color_to_string(RGBA(255, 0, 0))
        '#ff0000'
    """
    if not isinstance(color, RGBA):
        color = RGBA.from_tuple(color)
    text = f"#{color.r:02x}{color.g:02x}{color.b:02x}"
    if color.a != 255:
        text += f"{color.a:02x}"
    return text


def string_to_color(text: str) -> RGBA:
    """
    Parse a colour string into RGBA.

    Args:
        text: Any colour string Pillow understands

    Returns:
        RGBA value (alpha 255 when the string has none)

    Raises:
        ValueError: If Pillow cannot parse the string
    """
    return RGBA.from_tuple(ImageColor.getrgb(text))

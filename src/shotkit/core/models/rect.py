"""
Module: rect

Purpose:
    Provides the Rect and Size dataclasses - regions and extents in
    image pixel space.

Key Classes:
    - Rect: Axis-aligned region (left, top, width, height)
    - Size: Full pixel extent of an image (width, height)

Dependencies:
    - dataclasses (std)

Used By:
    - geometry.safe_rect: clamp()
    - geometry.scaling: scale()
    - image.handle: crop/clear regions and size()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

Number = Union[int, float]


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Axis-aligned region in image coordinates.

    Unlike Size, a Rect is NOT validated: callers may hand in negative
    origins, regions running past the image, or fractional coordinates
    produced by scaling. ``geometry.clamp`` turns any Rect into a valid
    integer region.

    Attributes:
        left: X-coordinate of the left edge
        top: Y-coordinate of the top edge
        width: Horizontal extent
        height: Vertical extent

    Example:
        >>> r = Rect(10, 20, 30, 40)
        >>> r.right, r.bottom
        (40, 60)
    """

    left: Number
    top: Number
    width: Number
    height: Number

    @property
    def right(self) -> Number:
        """X-coordinate of the right edge (exclusive)."""
        return self.left + self.width

    @property
    def bottom(self) -> Number:
        """Y-coordinate of the bottom edge (exclusive)."""
        return self.top + self.height

    @property
    def area(self) -> Number:
        """Area in square pixels (0 for degenerate regions)."""
        return max(self.width, 0) * max(self.height, 0)

    @property
    def is_empty(self) -> bool:
        """True when the region covers no pixels."""
        return self.width <= 0 or self.height <= 0

    def as_box(self) -> tuple:
        """
        Get as (left, top, right, bottom) tuple for PIL.

        Returns:
            Box suitable for ``Image.crop`` and ``ImageDraw.rectangle``
        """
        return (self.left, self.top, self.right, self.bottom)

    def to_dict(self) -> dict:
        """Serialize to the ``{left, top, width, height}`` mapping."""
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Rect:
        """
        Deserialize from a ``{left, top, width, height}`` mapping.

        Args:
            data: Mapping with all four keys

        Returns:
            Rect instance

        Raises:
            KeyError: If a key is missing
        """
        return cls(
            left=data["left"],
            top=data["top"],
            width=data["width"],
            height=data["height"],
        )

    @classmethod
    def coerce(cls, value: Union[Rect, Mapping[str, Any]]) -> Rect:
        """Accept either a Rect or a mapping and return a Rect."""
        if isinstance(value, Rect):
            return value
        return cls.from_dict(value)


@dataclass(frozen=True, slots=True)
class Size:
    """
    Pixel extent of an image.

    Attributes:
        width: Width in pixels
        height: Height in pixels

    Invariants:
        - width >= 0
        - height >= 0
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        """Validate size on construction."""
        if self.width < 0:
            raise ValueError(f"width must be >= 0: {self.width}")
        if self.height < 0:
            raise ValueError(f"height must be >= 0: {self.height}")

    def as_tuple(self) -> tuple[int, int]:
        """Get as (width, height) tuple for PIL."""
        return (self.width, self.height)

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}

    @classmethod
    def coerce(cls, value: Union[Size, tuple[int, int]]) -> Size:
        """Accept a Size or a PIL-style (width, height) tuple."""
        if isinstance(value, Size):
            return value
        width, height = value
        return cls(width, height)

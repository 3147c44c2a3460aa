"""
Module: image.handle

Purpose:
    The Image handle: owns one decoded pixel buffer and exposes the
    region operations used when preparing screenshots for comparison.

Key Classes:
    - Image: crop / clear / join / save over a PixelBuffer

Dependencies:
    - image.buffer: PixelBuffer (Pillow)
    - geometry: scale() and clamp()

Used By:
    - Screenshot capture code that trims, masks and stitches images
      before handing them to compare.comparator

Ownership:
    Each Image exclusively owns its buffer. crop(), clear() and join()
    mutate that buffer in place. join() reads the other handle's buffer
    without changing it. Operations on one handle must not run
    concurrently; there is no internal locking.
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
from typing import Any, Mapping, Optional, Sequence, Union

from shotkit.concurrency import run_blocking
from shotkit.config import ClearOptions, CropOptions
from shotkit.core.models import RGBA, Rect, Size, color_to_string, string_to_color
from shotkit.errors import DecodeError
from shotkit.geometry import clamp, scale

from .buffer import PixelBuffer

logger = logging.getLogger(__name__)

RectLike = Union[Rect, Mapping[str, Any]]


class Image:
    """
    Handle over one decoded RGBA pixel buffer.

    Example:
        >>> img = Image.from_bytes(png_bytes)
        >>> await img.crop(Rect(0, 0, 10, 10))
        >>> img.size
        Size(width=10, height=10)
    """

    def __init__(self, buffer: PixelBuffer) -> None:
        self._buffer = buffer

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_bytes(cls, data: bytes) -> Image:
        """
        Decode an encoded image.

        Raises:
            DecodeError: If the bytes are not a readable image
        """
        return cls(PixelBuffer.decode(data))

    @classmethod
    def from_base64(cls, text: Union[str, bytes]) -> Image:
        """
        Decode a base64-encoded image (e.g. a WebDriver screenshot).

        Raises:
            DecodeError: If the text is not valid base64 or not an image
        """
        if isinstance(text, bytes):
            text = text.decode("ascii", errors="replace")
        # Line-wrapped base64 is accepted
        text = "".join(text.split())
        try:
            data = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(f"Invalid base64 image data: {exc}") from exc
        return cls.from_bytes(data)

    @classmethod
    def from_file(cls, path: Union[str, os.PathLike]) -> Image:
        """
        Decode an image file.

        Raises:
            ImageIOError: If the file cannot be read
            DecodeError: If the file is not a readable image
        """
        return cls(PixelBuffer.open(path))

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def size(self) -> Size:
        """Current pixel dimensions."""
        return Size.coerce(self._buffer.size)

    def get_size(self) -> Size:
        return self.size

    def get_pixel(self, x: int, y: int) -> RGBA:
        """
        Read the pixel at (x, y).

        Raises:
            IndexError: If (x, y) lies outside the image
        """
        return RGBA.from_tuple(self._buffer.get(x, y))

    # ─────────────────────────────────────────────────────────────────────────
    # Region Operations
    # ─────────────────────────────────────────────────────────────────────────

    def _safe_rect(self, rect: RectLike, scale_factor: Optional[float]) -> Rect:
        scaled = scale(Rect.coerce(rect), scale_factor)
        return clamp(scaled, self.size)

    async def crop(self, rect: RectLike, options: Optional[CropOptions] = None) -> Image:
        """
        Keep only ``rect`` (scaled, then clamped to the image).

        Awaitable so callers stay compatible with engines that decode
        asynchronously; the Pillow engine completes without suspending.

        Args:
            rect: Region in logical units
            options: CropOptions (scale_factor)

        Returns:
            self
        """
        options = options or CropOptions()
        safe = self._safe_rect(rect, options.scale_factor)
        logger.debug(f"Cropping {self.size.width}x{self.size.height} image to {safe}")
        self._buffer.crop(safe.left, safe.top, safe.width, safe.height)
        return self

    def clear(self, rect: RectLike, options: Optional[ClearOptions] = None) -> None:
        """
        Paint ``rect`` (scaled, then clamped) with the clear colour.

        Used to blank out regions that must not take part in comparison,
        such as a blinking caret or a timestamp.
        """
        options = options or ClearOptions()
        safe = self._safe_rect(rect, options.scale_factor)
        if safe.is_empty:
            logger.debug(f"Clear region {rect} is outside the image, nothing to do")
            return
        color = string_to_color(options.color)
        self._buffer.fill(safe.left, safe.top, safe.width, safe.height, color.as_tuple())

    def join(self, other: Image) -> Image:
        """
        Stack ``other`` below this image.

        The canvas keeps this image's width. A wider ``other`` is clipped
        on the right; a narrower one leaves a transparent strip.

        Args:
            other: Image to append; not modified

        Returns:
            self
        """
        own = self.size
        theirs = other.size
        if theirs.width != own.width:
            logger.debug(
                f"Joining {theirs.width}px wide image onto {own.width}px wide canvas"
            )
        # Snapshot first: other may be self
        pasted = other._buffer.copy() if other is self else other._buffer
        self._buffer.set_size(own.width, own.height + theirs.height).insert(
            pasted, 0, own.height
        )
        return self

    # ─────────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────────

    async def save(self, path: Union[str, os.PathLike]) -> None:
        """
        Write the image to ``path`` on a worker thread.

        Raises:
            ImageIOError: If the file cannot be written
        """
        await run_blocking(self._buffer.save, path)

    def to_bytes(self, format: str = "PNG") -> bytes:
        """Encode the current buffer."""
        return self._buffer.encode(format)

    # ─────────────────────────────────────────────────────────────────────────
    # Colour helpers
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def color_to_string(color: Union[RGBA, Sequence[int]]) -> str:
        return color_to_string(color)

    @staticmethod
    def string_to_color(text: str) -> RGBA:
        return string_to_color(text)

    def __repr__(self) -> str:
        return f"Image({self.size.width}x{self.size.height})"

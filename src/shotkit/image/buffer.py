"""
Module: image.buffer

Purpose:
    Pillow-backed pixel buffer. This is the only place that talks to
    PIL.Image for region work: decode, read a pixel, resize the canvas,
    paste, fill, crop, encode and save.

Key Classes:
    - PixelBuffer: Mutable RGBA pixel grid wrapping a PIL image

Dependencies:
    - PIL.Image: Decoding, pixel storage, encoding

Used By:
    - image.handle: Image owns exactly one PixelBuffer
"""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import Sequence, Union

from PIL import Image, UnidentifiedImageError

from shotkit.errors import DecodeError, ImageIOError

logger = logging.getLogger(__name__)

# Every buffer is normalised to this mode so pixels always have 4 channels
MODE = "RGBA"
# Used when the target path carries no extension Pillow recognises
DEFAULT_FORMAT = "PNG"
# Colour of canvas area not covered by any pasted image
TRANSPARENT = (0, 0, 0, 0)

_DECODE_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    ValueError,
    SyntaxError,
)


class PixelBuffer:
    """
    Mutable RGBA pixel grid.

    Methods that change the grid return ``self`` so calls can be chained
    (``buf.set_size(w, h).insert(other, 0, y)``).

    Attributes:
        image: Underlying PIL image (RGBA). Replaced, not edited, by crop
            and set_size.
    """

    def __init__(self, image: Image.Image) -> None:
        if image.mode != MODE:
            image = image.convert(MODE)
        self.image = image

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def decode(cls, data: bytes) -> PixelBuffer:
        """
        Decode encoded image bytes (PNG, JPEG, ... anything Pillow reads).

        Raises:
            DecodeError: If the bytes are not a readable image
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                return cls(img.convert(MODE))
        except _DECODE_ERRORS as exc:
            raise DecodeError(f"Cannot decode image data: {exc}") from exc

    @classmethod
    def open(cls, path: Union[str, os.PathLike]) -> PixelBuffer:
        """
        Decode an image file.

        Raises:
            ImageIOError: If the file cannot be read
            DecodeError: If the file is not a readable image
        """
        try:
            img = Image.open(path)
        except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"Cannot decode image file {path}: {exc}") from exc
        except OSError as exc:
            raise ImageIOError(f"Cannot read image file {path}: {exc}") from exc

        with img:
            try:
                img.load()
                return cls(img.convert(MODE))
            except _DECODE_ERRORS as exc:
                raise DecodeError(f"Cannot decode image file {path}: {exc}") from exc

    @classmethod
    def blank(cls, width: int, height: int, color: Sequence[int] = TRANSPARENT) -> PixelBuffer:
        """Create a buffer filled with ``color``."""
        return cls(Image.new(MODE, (width, height), tuple(color)))

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) in pixels."""
        return self.image.size

    def get(self, x: int, y: int) -> tuple[int, int, int, int]:
        """
        Read one pixel.

        Raises:
            IndexError: If (x, y) lies outside the buffer. Negative
                coordinates are rejected rather than wrapped.
        """
        width, height = self.image.size
        if not (0 <= x < width and 0 <= y < height):
            raise IndexError(f"pixel ({x}, {y}) outside {width}x{height} image")
        return self.image.getpixel((x, y))

    # ─────────────────────────────────────────────────────────────────────────
    # Mutation
    # ─────────────────────────────────────────────────────────────────────────

    def crop(self, left: int, top: int, width: int, height: int) -> PixelBuffer:
        """Keep only the given region. The caller supplies in-bounds values."""
        self.image = self.image.crop((left, top, left + width, top + height))
        return self

    def fill(
        self,
        left: int,
        top: int,
        width: int,
        height: int,
        color: Sequence[int],
    ) -> PixelBuffer:
        """Paint the given region with a solid colour."""
        if width > 0 and height > 0:
            self.image.paste(tuple(color), (left, top, left + width, top + height))
        return self

    def set_size(self, width: int, height: int) -> PixelBuffer:
        """
        Resize the canvas without scaling content.

        Existing pixels stay anchored at the top-left; new area is
        transparent and content outside the new size is dropped.
        """
        if (width, height) == self.image.size:
            return self
        canvas = Image.new(MODE, (width, height), TRANSPARENT)
        canvas.paste(self.image, (0, 0))
        self.image = canvas
        return self

    def insert(self, other: PixelBuffer, x: int, y: int) -> PixelBuffer:
        """
        Paste ``other`` with its top-left corner at (x, y).

        Pixels are replaced, not blended. Parts of ``other`` that fall
        outside this buffer are clipped.
        """
        self.image.paste(other.image, (x, y))
        return self

    # ─────────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────────

    def encode(self, format: str = DEFAULT_FORMAT) -> bytes:
        """
        Encode to bytes in the given Pillow format.

        Raises:
            ImageIOError: If Pillow cannot encode the buffer (e.g. 0x0)
        """
        out = io.BytesIO()
        try:
            self.image.save(out, format=format)
        except (OSError, ValueError) as exc:
            raise ImageIOError(f"Cannot encode image as {format}: {exc}") from exc
        return out.getvalue()

    def save(self, path: Union[str, os.PathLike]) -> None:
        """
        Write the buffer to ``path``.

        The format follows the file extension; paths without a known
        extension are written as PNG.

        Raises:
            ImageIOError: If the file cannot be written, including empty
                (0x0) buffers Pillow refuses to encode
        """
        path = Path(path)
        ext = path.suffix.lower()
        Image.init()
        fmt = None if ext in Image.EXTENSION else DEFAULT_FORMAT
        try:
            self.image.save(path, format=fmt)
        except (OSError, ValueError) as exc:
            raise ImageIOError(f"Cannot write image file {path}: {exc}") from exc
        logger.debug(f"Saved {self.size[0]}x{self.size[1]} image to {path}")

    def copy(self) -> PixelBuffer:
        """Independent copy of this buffer."""
        return PixelBuffer(self.image.copy())

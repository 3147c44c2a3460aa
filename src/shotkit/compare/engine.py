"""
Module: compare.engine

Purpose:
    Pixel diff engine. Counts pixels whose colour distance exceeds a
    per-pixel delta, classifies the count against a pixel or percentage
    threshold, and optionally renders a diff image.

Key Classes:
    - DiffEngine: One configured comparison of two image files
    - DiffResult: Result code and counts of a run

Key Functions:
    - has_passed(): True for IDENTICAL and SIMILAR result codes

Dependencies:
    - numpy: Vectorised per-pixel distance
    - image.buffer: PixelBuffer for reading and writing files

Used By:
    - compare.comparator: compare(), build_diff()

Result Codes:
    RESULT_UNKNOWN (0)    engine has not run
    RESULT_DIFFERENT (1)  differences at or above threshold
    RESULT_IDENTICAL (5)  no differing pixels
    RESULT_SIMILAR (7)    some differences, below threshold
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Union

import numpy as np
from PIL import Image

from shotkit.config import DEFAULT_DELTA, DEFAULT_THRESHOLD
from shotkit.errors import DiffEngineError
from shotkit.image.buffer import PixelBuffer

logger = logging.getLogger(__name__)

RESULT_UNKNOWN = 0
RESULT_DIFFERENT = 1
RESULT_IDENTICAL = 5
RESULT_SIMILAR = 7

THRESHOLD_PIXEL = "pixel"
THRESHOLD_PERCENT = "percent"

DEFAULT_MASK_COLOR = (255, 0, 0)


def has_passed(code: int) -> bool:
    """True if ``code`` means the images match within threshold."""
    return code in (RESULT_IDENTICAL, RESULT_SIMILAR)


@dataclass(frozen=True)
class DiffResult:
    """
    Outcome of one diff run (immutable).

    Attributes:
        code: One of the RESULT_* constants
        differences: Number of differing pixels
        dimension: Total pixels compared (union of both images)
        width: Width of the compared canvas
        height: Height of the compared canvas
        output_path: Diff image written, if one was requested
    """
    code: int
    differences: int
    dimension: int
    width: int
    height: int
    output_path: Optional[Path] = None

    @property
    def passed(self) -> bool:
        return has_passed(self.code)


def _pad(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    h, w = pixels.shape[:2]
    if (w, h) == (width, height):
        return pixels
    padded = np.zeros((height, width, 4), dtype=pixels.dtype)
    padded[:h, :w] = pixels
    return padded


class DiffEngine:
    """
    Compare two image files.

    Two pixels differ when the Euclidean distance between their RGBA
    channel vectors is greater than ``delta``. Images of different size
    are compared on the union canvas; any pixel outside the overlap
    counts as a difference.

    Args:
        image_a_path: Reference image
        image_b_path: Image under test
        threshold_type: THRESHOLD_PIXEL or THRESHOLD_PERCENT
        threshold: Pixel count, or fraction of all pixels, at which the
            images are reported as different
        delta: Per-pixel colour distance tolerated
        output_path: Where to write the diff image (None = no image)
        composition: If True the diff image shows reference, mask and
            current side by side; if False only the marked pixels are drawn
            on a transparent canvas
        output_mask_color: RGB used for differing pixels

    Example:
        >>> engine = DiffEngine("a.png", "b.png", threshold=0.01)
        >>> engine.execute().passed
        True
    """

    def __init__(
        self,
        image_a_path: Union[str, os.PathLike],
        image_b_path: Union[str, os.PathLike],
        *,
        threshold_type: str = THRESHOLD_PERCENT,
        threshold: float = DEFAULT_THRESHOLD,
        delta: float = DEFAULT_DELTA,
        output_path: Optional[Union[str, os.PathLike]] = None,
        composition: bool = True,
        output_mask_color: Sequence[int] = DEFAULT_MASK_COLOR,
    ) -> None:
        if threshold_type not in (THRESHOLD_PIXEL, THRESHOLD_PERCENT):
            raise ValueError(f"Unknown threshold type: {threshold_type!r}")
        if len(output_mask_color) != 3:
            raise ValueError(f"output_mask_color must be RGB: {output_mask_color!r}")
        self.image_a_path = Path(image_a_path)
        self.image_b_path = Path(image_b_path)
        self.threshold_type = threshold_type
        self.threshold = threshold
        self.delta = delta
        self.output_path = Path(output_path) if output_path is not None else None
        self.composition = composition
        self.output_mask_color = tuple(output_mask_color)

    has_passed = staticmethod(has_passed)

    def _classify(self, differences: int, dimension: int) -> int:
        if differences == 0:
            return RESULT_IDENTICAL
        if self.threshold_type == THRESHOLD_PERCENT:
            above = differences / dimension >= self.threshold
        else:
            above = differences >= self.threshold
        return RESULT_DIFFERENT if above else RESULT_SIMILAR

    def _render(self, a: np.ndarray, b: np.ndarray, mask: np.ndarray) -> np.ndarray:
        marks = np.zeros(a.shape, dtype=np.uint8)
        marks[mask] = (*self.output_mask_color, 255)
        if not self.composition:
            return marks
        return np.concatenate([a, marks, b], axis=1)

    def execute(self) -> DiffResult:
        """
        Run the comparison synchronously.

        Raises:
            ImageIOError: If an input cannot be read or the output written
            DecodeError: If an input is not an image
            DiffEngineError: If the pixel comparison itself fails
        """
        buf_a = PixelBuffer.open(self.image_a_path)
        buf_b = PixelBuffer.open(self.image_b_path)

        try:
            a = np.asarray(buf_a.image, dtype=np.uint8)
            b = np.asarray(buf_b.image, dtype=np.uint8)
            height = max(a.shape[0], b.shape[0])
            width = max(a.shape[1], b.shape[1])
            a = _pad(a, width, height)
            b = _pad(b, width, height)

            overlap = np.zeros((height, width), dtype=bool)
            overlap[: min(buf_a.size[1], buf_b.size[1]), : min(buf_a.size[0], buf_b.size[0])] = True

            channel_diff = a.astype(np.int32) - b.astype(np.int32)
            distance_sq = np.sum(channel_diff * channel_diff, axis=2)
            mask = (distance_sq > self.delta * self.delta) | ~overlap

            differences = int(np.count_nonzero(mask))
            dimension = width * height
            code = self._classify(differences, dimension)
            rendered = self._render(a, b, mask) if self.output_path is not None else None
        except (ValueError, TypeError, MemoryError, FloatingPointError) as exc:
            raise DiffEngineError(
                f"Diff of {self.image_a_path} and {self.image_b_path} failed: {exc}"
            ) from exc

        logger.debug(
            f"Diff {self.image_a_path.name} vs {self.image_b_path.name}: "
            f"{differences}/{dimension} pixels differ, code {code}"
        )

        if rendered is not None:
            PixelBuffer(Image.fromarray(rendered)).save(self.output_path)

        return DiffResult(
            code=code,
            differences=differences,
            dimension=dimension,
            width=width,
            height=height,
            output_path=self.output_path,
        )

    def run(self, callback: Callable[[Optional[BaseException], Any], None]) -> None:
        """
        Run the comparison and report through ``callback(error, result)``.

        The callback is invoked exactly once.
        """
        try:
            result = self.execute()
        except Exception as exc:
            callback(exc, None)
            return
        callback(None, result)

"""
Module: config

Purpose:
    Option dataclasses for region and comparison operations. Every
    recognised option is listed with its default; values are checked
    on construction.

Key Classes:
    - CropOptions: Options for Image.crop()
    - ClearOptions: Options for Image.clear()
    - CompareOptions: Options for comparator.compare()
    - DiffOptions: Inputs and options for comparator.build_diff()

Dependencies:
    - dataclasses (std)

Used By:
    - image.handle: CropOptions, ClearOptions
    - compare.comparator: CompareOptions, DiffOptions
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Union

from shotkit.core.models.color import string_to_color

PathLike = Union[str, "os.PathLike[str]"]

# Base sensitivity of the percentage diff: 1% of all pixels may differ
DEFAULT_THRESHOLD = 0.01
# Per-pixel colour distance used when no tolerance is given
DEFAULT_DELTA = 20
# Colour painted by Image.clear()
CLEAR_COLOR = "#000000"


def _check_scale_factor(scale_factor: float) -> None:
    if scale_factor < 0:
        raise ValueError(f"scale_factor must not be negative: {scale_factor}")


def _check_tolerance(tolerance: Optional[float]) -> None:
    if tolerance is not None and tolerance < 0:
        raise ValueError(f"tolerance must be non-negative: {tolerance}")


@dataclass(frozen=True)
class CropOptions:
    """
    Options for cropping (immutable).

    Attributes:
        scale_factor: Multiplier converting the rectangle from logical
            units to pixels (e.g. device pixel ratio). Defaults to 1.
            0 means unset and behaves like 1.
    """
    scale_factor: float = 1.0

    def __post_init__(self) -> None:
        _check_scale_factor(self.scale_factor)


@dataclass(frozen=True)
class ClearOptions:
    """
    Options for clearing a region (immutable).

    Attributes:
        scale_factor: Same meaning as CropOptions.scale_factor.
        color: Fill colour. Defaults to opaque black.
    """
    scale_factor: float = 1.0
    color: str = CLEAR_COLOR

    def __post_init__(self) -> None:
        _check_scale_factor(self.scale_factor)
        try:
            string_to_color(self.color)
        except ValueError as exc:
            raise ValueError(f"color is not a valid colour: {self.color!r}") from exc


@dataclass(frozen=True)
class CompareOptions:
    """
    Options for pass/fail comparison (immutable).

    Attributes:
        tolerance: Per-pixel colour distance above which two pixels are
            counted as different. None uses DEFAULT_DELTA.
        threshold: Fraction of differing pixels at which the images
            are reported as mismatched.
    """
    tolerance: Optional[float] = None
    threshold: float = DEFAULT_THRESHOLD

    def __post_init__(self) -> None:
        _check_tolerance(self.tolerance)
        if not 0 <= self.threshold <= 1:
            raise ValueError(f"threshold must be in [0, 1]: {self.threshold}")


@dataclass(frozen=True)
class DiffOptions:
    """
    Inputs and options for diff image generation (immutable).

    ``diff_color`` may be left unset here; build_diff() reports a
    missing colour as a ConfigurationError before running the engine.

    Attributes:
        reference: Path to the reference image
        current: Path to the current image
        diff_output_path: Where the diff image is written
        diff_color: Colour string used to mark differing pixels
        tolerance: Same meaning as CompareOptions.tolerance
        threshold: Same meaning as CompareOptions.threshold

    Example:
        >>> opts = DiffOptions(
        ...     reference="ref.png",
        ...     current="cur.png",
        ...     diff_output_path="diff.png",
        ...     diff_color="#ff00ff",
        ... )
    """
    reference: PathLike
    current: PathLike
    diff_output_path: PathLike
    diff_color: Optional[str] = None
    tolerance: Optional[float] = None
    threshold: float = DEFAULT_THRESHOLD

    def __post_init__(self) -> None:
        _check_tolerance(self.tolerance)
        if not 0 <= self.threshold <= 1:
            raise ValueError(f"threshold must be in [0, 1]: {self.threshold}")

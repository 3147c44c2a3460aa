"""
Module: compare.comparator

Purpose:
    Asynchronous comparison entry points used by the test runner:
    a pass/fail check and a diff-image build. Both run the diff engine
    on a worker thread and resolve once the engine calls back.

Key Functions:
    - compare(): True if two images match within tolerance
    - build_diff(): Render the differing pixels to a diff image

Dependencies:
    - compare.engine: DiffEngine
    - concurrency: from_callback()

Used By:
    - Visual regression runners comparing a reference against a fresh
      screenshot
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

from shotkit.concurrency import from_callback
from shotkit.config import DEFAULT_DELTA, CompareOptions, DiffOptions
from shotkit.core.models import string_to_color
from shotkit.errors import ConfigurationError

from .engine import THRESHOLD_PERCENT, DiffEngine, DiffResult

logger = logging.getLogger(__name__)


def _delta(tolerance: Optional[float]) -> float:
    return DEFAULT_DELTA if tolerance is None else tolerance


async def compare(
    path_a: Union[str, os.PathLike],
    path_b: Union[str, os.PathLike],
    options: Optional[CompareOptions] = None,
) -> bool:
    """
    Check whether two image files match.

    Args:
        path_a: Reference image
        path_b: Image under test
        options: CompareOptions (tolerance, threshold)

    Returns:
        True if the engine reports IDENTICAL or SIMILAR

    Raises:
        ImageIOError: If either file cannot be read
        DecodeError: If either file is not an image
        DiffEngineError: If the engine fails
    """
    options = options or CompareOptions()
    engine = DiffEngine(
        path_a,
        path_b,
        threshold_type=THRESHOLD_PERCENT,
        threshold=options.threshold,
        delta=_delta(options.tolerance),
    )
    result: DiffResult = await from_callback(engine.run)
    return engine.has_passed(result.code)


async def build_diff(options: DiffOptions) -> DiffResult:
    """
    Write a diff image marking every differing pixel in ``diff_color``.

    The image is not composed with the inputs: pixels that match are
    left transparent.

    Args:
        options: DiffOptions naming reference, current, output path and
            diff colour

    Returns:
        DiffResult from the engine

    Raises:
        ConfigurationError: If diff_color is missing or unparseable;
            raised before the engine runs
        ImageIOError: If an input cannot be read or the output written
        DecodeError: If an input is not an image
        DiffEngineError: If the engine fails
    """
    if not options.diff_color:
        raise ConfigurationError("diff_color is required to build a diff image")
    try:
        color = string_to_color(options.diff_color)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid diff_color {options.diff_color!r}") from exc

    engine = DiffEngine(
        options.reference,
        options.current,
        threshold_type=THRESHOLD_PERCENT,
        threshold=options.threshold,
        delta=_delta(options.tolerance),
        output_path=options.diff_output_path,
        composition=False,
        output_mask_color=color.rgb,
    )
    result: DiffResult = await from_callback(engine.run)
    logger.info(
        f"Wrote diff image {result.output_path} "
        f"({result.differences}/{result.dimension} pixels differ)"
    )
    return result

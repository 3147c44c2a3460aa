"""
Module: compare

Purpose:
    Image comparison: pass/fail checks and diff image generation.

Key Functions:
    - compare(): Pass/fail comparison of two image files
    - build_diff(): Diff image generation

Key Classes:
    - DiffEngine: Numpy pixel diff engine
    - DiffResult: Engine result
"""

from .engine import (
    RESULT_DIFFERENT,
    RESULT_IDENTICAL,
    RESULT_SIMILAR,
    RESULT_UNKNOWN,
    THRESHOLD_PERCENT,
    THRESHOLD_PIXEL,
    DiffEngine,
    DiffResult,
    has_passed,
)
from .comparator import build_diff, compare

__all__ = [
    "compare",
    "build_diff",
    "DiffEngine",
    "DiffResult",
    "has_passed",
    "RESULT_UNKNOWN",
    "RESULT_DIFFERENT",
    "RESULT_IDENTICAL",
    "RESULT_SIMILAR",
    "THRESHOLD_PIXEL",
    "THRESHOLD_PERCENT",
]

"""
Module: errors

Purpose:
    Error kinds raised by shotkit. Each kind also derives from the
    builtin exception callers would otherwise expect, so existing
    ``except ValueError`` / ``except OSError`` handlers keep working.

Key Classes:
    - ShotkitError: Base class for every error raised here
    - DecodeError: Malformed image bytes, base64 or file contents
    - ImageIOError: File read/write failure
    - DiffEngineError: Diff engine failed (not the same as "images differ")
    - ConfigurationError: Required option missing or invalid

Used By:
    - image.buffer, image.handle: decode and save failures
    - compare.engine, compare.comparator: diff failures and option checks
"""

from __future__ import annotations


class ShotkitError(Exception):
    """Base class for shotkit errors."""
    pass


class DecodeError(ShotkitError, ValueError):
    """Input could not be decoded into a pixel buffer."""
    pass


class ImageIOError(ShotkitError, OSError):
    """Reading or writing an image file failed."""
    pass


class DiffEngineError(ShotkitError):
    """The diff engine failed to produce a result."""
    pass


class ConfigurationError(ShotkitError, ValueError):
    """A required option is missing or unusable."""
    pass

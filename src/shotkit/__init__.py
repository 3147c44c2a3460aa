"""Top-level package for shotkit.

Image-region and image-comparison primitives for visual regression runs.

Provides subpackages:
- shotkit.geometry – safe-rectangle clamping and region scaling
- shotkit.image – the Image handle over a Pillow pixel buffer
- shotkit.compare – pass/fail comparison and diff-image generation
"""


def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.1.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("shotkit")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

from .core.models import RGBA, Rect, Size
from .config import ClearOptions, CompareOptions, CropOptions, DiffOptions
from .errors import (
    ConfigurationError,
    DecodeError,
    DiffEngineError,
    ImageIOError,
    ShotkitError,
)
from .geometry import clamp, scale
from .image import Image
from .compare import DiffResult, build_diff, compare

__all__: list[str] = [
    "__version__",
    # models
    "Rect",
    "Size",
    "RGBA",
    # config
    "CropOptions",
    "ClearOptions",
    "CompareOptions",
    "DiffOptions",
    # errors
    "ShotkitError",
    "DecodeError",
    "ImageIOError",
    "DiffEngineError",
    "ConfigurationError",
    # operations
    "clamp",
    "scale",
    "Image",
    "compare",
    "build_diff",
    "DiffResult",
]

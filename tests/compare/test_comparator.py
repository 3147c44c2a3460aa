"""
Tests for compare.comparator

Test Coverage:
- compare(): pass/fail, tolerance, failures
- build_diff(): output artifact, ConfigurationError before engine runs
"""

import asyncio

import pytest
from PIL import Image

from shotkit.compare import comparator
from shotkit.compare.comparator import build_diff, compare
from shotkit.compare.engine import RESULT_DIFFERENT, RESULT_IDENTICAL
from shotkit.config import CompareOptions, DiffOptions
from shotkit.errors import ConfigurationError, DecodeError, ImageIOError


@pytest.fixture
def reference(tmp_path):
    path = tmp_path / "reference.png"
    Image.new("RGBA", (20, 10), (255, 255, 255, 255)).save(path)
    return path


@pytest.fixture
def changed(tmp_path):
    """Reference with a 5x5 black block (25 of 200 pixels)."""
    img = Image.new("RGBA", (20, 10), (255, 255, 255, 255))
    img.paste((0, 0, 0, 255), (0, 0, 5, 5))
    path = tmp_path / "changed.png"
    img.save(path)
    return path


@pytest.fixture
def tinted(tmp_path):
    """Reference with every pixel shifted slightly off white."""
    path = tmp_path / "tinted.png"
    Image.new("RGBA", (20, 10), (245, 245, 245, 255)).save(path)
    return path


# ─────────────────────────────────────────────────────────────────────────────
# compare
# ─────────────────────────────────────────────────────────────────────────────

def test_compare_image_with_itself_passes(reference):
    assert asyncio.run(compare(reference, reference, CompareOptions(tolerance=0))) is True


def test_compare_default_options(reference):
    assert asyncio.run(compare(reference, reference)) is True


def test_compare_changed_image_fails(reference, changed):
    assert asyncio.run(compare(reference, changed)) is False


def test_compare_tolerance_absorbs_small_shift(reference, tinted):
    # distance = sqrt(3 * 100) ~ 17.3
    assert asyncio.run(compare(reference, tinted, CompareOptions(tolerance=20))) is True
    assert asyncio.run(compare(reference, tinted, CompareOptions(tolerance=10))) is False


def test_compare_missing_file_raises_io_error(reference, tmp_path):
    with pytest.raises(ImageIOError):
        asyncio.run(compare(reference, tmp_path / "missing.png"))


def test_compare_non_image_raises_decode_error(reference, tmp_path):
    bogus = tmp_path / "bogus.png"
    bogus.write_bytes(b"nope")
    with pytest.raises(DecodeError):
        asyncio.run(compare(reference, bogus))


def test_compare_accepts_string_paths(reference):
    assert asyncio.run(compare(str(reference), str(reference))) is True


# ─────────────────────────────────────────────────────────────────────────────
# build_diff
# ─────────────────────────────────────────────────────────────────────────────

def test_build_diff_writes_marked_image(reference, changed, tmp_path):
    # Arrange
    out = tmp_path / "diff.png"
    options = DiffOptions(
        reference=reference,
        current=changed,
        diff_output_path=out,
        diff_color="#ff00ff",
    )

    # Act
    result = asyncio.run(build_diff(options))

    # Assert
    assert result.code == RESULT_DIFFERENT
    assert result.differences == 25
    assert out.exists()
    with Image.open(out) as diff:
        diff = diff.convert("RGBA")
        assert diff.size == (20, 10)
        assert diff.getpixel((2, 2)) == (255, 0, 255, 255)
        assert diff.getpixel((10, 5)) == (0, 0, 0, 0)


def test_build_diff_identical_images(reference, tmp_path):
    out = tmp_path / "diff.png"
    result = asyncio.run(
        build_diff(DiffOptions(reference, reference, out, diff_color="red", tolerance=0))
    )
    assert result.code == RESULT_IDENTICAL
    assert result.passed


def test_build_diff_without_colour_fails_before_engine(reference, changed, tmp_path, monkeypatch):
    # Arrange
    calls = []
    monkeypatch.setattr(comparator, "DiffEngine", lambda *a, **kw: calls.append(a))
    out = tmp_path / "diff.png"

    # Act / Assert
    with pytest.raises(ConfigurationError, match="diff_color is required"):
        asyncio.run(build_diff(DiffOptions(reference, changed, out)))
    assert calls == []
    assert not out.exists()


def test_build_diff_with_bad_colour_raises_configuration_error(reference, tmp_path):
    with pytest.raises(ConfigurationError, match="Invalid diff_color"):
        asyncio.run(
            build_diff(DiffOptions(reference, reference, tmp_path / "d.png", diff_color="nah"))
        )


def test_build_diff_missing_input_raises_io_error(reference, tmp_path):
    with pytest.raises(ImageIOError):
        asyncio.run(
            build_diff(
                DiffOptions(reference, tmp_path / "missing.png", tmp_path / "d.png", diff_color="red")
            )
        )

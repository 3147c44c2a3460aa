"""
Tests for image.buffer

Test Coverage:
- decode()/open(): mode normalisation and error mapping
- get(): bounds policy
- fill(), set_size(), insert(), crop()
- save(): format selection and I/O errors
"""

import io

import pytest
from PIL import Image

from shotkit.errors import DecodeError, ImageIOError
from shotkit.image.buffer import PixelBuffer


def test_decode_normalises_to_rgba():
    # Arrange
    out = io.BytesIO()
    Image.new("RGB", (4, 3), (10, 20, 30)).save(out, format="PNG")

    # Act
    buf = PixelBuffer.decode(out.getvalue())

    # Assert
    assert buf.image.mode == "RGBA"
    assert buf.size == (4, 3)
    assert buf.get(0, 0) == (10, 20, 30, 255)


def test_decode_rejects_garbage():
    with pytest.raises(DecodeError):
        PixelBuffer.decode(b"definitely not an image")


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        PixelBuffer.decode(b"")


def test_open_missing_file_raises_io_error(tmp_path):
    with pytest.raises(ImageIOError):
        PixelBuffer.open(tmp_path / "missing.png")


def test_open_non_image_file_raises_decode_error(tmp_path):
    path = tmp_path / "notes.png"
    path.write_text("hello")
    with pytest.raises(DecodeError):
        PixelBuffer.open(path)


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (4, 0), (0, 3)])
def test_get_outside_raises_index_error(x, y):
    buf = PixelBuffer.blank(4, 3)
    with pytest.raises(IndexError):
        buf.get(x, y)


def test_fill_paints_exact_region():
    buf = PixelBuffer.blank(10, 10, (255, 255, 255, 255))
    buf.fill(2, 3, 4, 5, (0, 0, 0, 255))
    assert buf.get(2, 3) == (0, 0, 0, 255)
    assert buf.get(5, 7) == (0, 0, 0, 255)
    assert buf.get(6, 7) == (255, 255, 255, 255)
    assert buf.get(5, 8) == (255, 255, 255, 255)


def test_fill_empty_region_is_noop():
    buf = PixelBuffer.blank(4, 4, (255, 255, 255, 255))
    buf.fill(1, 1, 0, 3, (0, 0, 0, 255))
    assert buf.get(1, 1) == (255, 255, 255, 255)


def test_set_size_extends_with_transparent_canvas():
    buf = PixelBuffer.blank(4, 4, (255, 0, 0, 255)).set_size(4, 6)
    assert buf.size == (4, 6)
    assert buf.get(0, 3) == (255, 0, 0, 255)
    assert buf.get(0, 5) == (0, 0, 0, 0)


def test_insert_replaces_pixels_and_clips():
    base = PixelBuffer.blank(4, 4, (255, 255, 255, 255))
    patch = PixelBuffer.blank(10, 1, (0, 255, 0, 128))
    base.insert(patch, 2, 1)
    assert base.get(3, 1) == (0, 255, 0, 128)
    assert base.get(1, 1) == (255, 255, 255, 255)
    assert base.size == (4, 4)


def test_crop_keeps_region():
    buf = PixelBuffer.blank(10, 10).crop(2, 2, 3, 4)
    assert buf.size == (3, 4)


def test_copy_is_independent():
    buf = PixelBuffer.blank(2, 2, (1, 2, 3, 255))
    dup = buf.copy()
    dup.fill(0, 0, 2, 2, (9, 9, 9, 255))
    assert buf.get(0, 0) == (1, 2, 3, 255)


def test_save_without_extension_writes_png(tmp_path):
    path = tmp_path / "screenshot"
    PixelBuffer.blank(3, 3).save(path)
    with Image.open(path) as img:
        assert img.format == "PNG"


def test_save_into_missing_directory_raises_io_error(tmp_path):
    with pytest.raises(ImageIOError):
        PixelBuffer.blank(3, 3).save(tmp_path / "nope" / "out.png")


def test_encode_roundtrips_through_decode():
    buf = PixelBuffer.blank(3, 2, (5, 6, 7, 8))
    again = PixelBuffer.decode(buf.encode())
    assert again.size == (3, 2)
    assert again.get(2, 1) == (5, 6, 7, 8)


def test_save_empty_buffer_raises_io_error(tmp_path):
    with pytest.raises(ImageIOError):
        PixelBuffer.blank(0, 0).save(tmp_path / "empty.png")


def test_encode_empty_buffer_raises_io_error():
    with pytest.raises(ImageIOError):
        PixelBuffer.blank(10, 10).crop(10, 10, 0, 0).encode()


def test_open_decompression_bomb_raises_decode_error(tmp_path, monkeypatch):
    # Arrange
    path = tmp_path / "large.png"
    Image.new("RGBA", (100, 100)).save(path)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

    # Act / Assert
    with pytest.raises(DecodeError):
        PixelBuffer.open(path)


def test_decode_decompression_bomb_raises_decode_error(monkeypatch):
    data = PixelBuffer.blank(100, 100).encode()
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
    with pytest.raises(DecodeError):
        PixelBuffer.decode(data)

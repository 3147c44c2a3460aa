import io
import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import shotkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def make_png():
    """Factory encoding a solid-colour RGBA PNG to bytes."""
    def _make(width, height, color=(255, 255, 255, 255)):
        out = io.BytesIO()
        Image.new("RGBA", (width, height), color).save(out, format="PNG")
        return out.getvalue()
    return _make


@pytest.fixture
def white_png(make_png):
    """100x100 opaque white PNG bytes."""
    return make_png(100, 100)


@pytest.fixture
def gradient_image():
    """100x100 RGBA image where each pixel encodes its own (x, y)."""
    img = Image.new("RGBA", (100, 100))
    img.putdata([(x, y, 0, 255) for y in range(100) for x in range(100)])
    return img


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image on disk."""
    img = Image.new("RGBA", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path

"""
Pytest fixtures for kraforge tests
"""

import numpy as np
import pytest

from kraforge.config import Settings
from kraforge.layers import (
    Document,
    LayerStyle,
    Rectangle,
    ShapeStyle,
    StrokeEffect,
)

# Stand-in for an sRGB profile; the writer copies the bytes verbatim.
ICC_BYTES = b"ICC-PROFILE-TEST-DATA" * 16


@pytest.fixture
def icc_profile(tmp_path):
    """Returns the path of a temporary ICC profile file."""
    path = tmp_path / "profile.icc"
    path.write_bytes(ICC_BYTES)
    return path


@pytest.fixture
def staging_root(tmp_path):
    """Returns an empty directory used as staging root."""
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def kra_settings(icc_profile, staging_root) -> Settings:
    """Settings pointing at the temporary profile and staging root."""
    return Settings(ICC_PROFILE_PATH=icc_profile, STAGING_DIR=staging_root)


@pytest.fixture
def grey_image() -> np.ndarray:
    """A 100x80 opaque grey RGBA image."""
    image = np.empty((80, 100, 4), dtype=np.uint8)
    image[:, :] = (200, 200, 200, 255)
    return image


@pytest.fixture
def sample_document(grey_image) -> Document:
    """Text, shape and paint layer, no layer styles."""
    doc = Document(width=100, height=80)
    doc.add_text_layer("Hello, Krita!\nThis is a text layer.", x=10, y=10)
    doc.add_shape_layer([Rectangle(x=5, y=5, width=20, height=10)], name="Shape Layer")
    doc.add_image_layer(grey_image, name="Image Layer")
    return doc


@pytest.fixture
def styled_document() -> Document:
    """One shape layer carrying a stroke layer style."""
    doc = Document(width=64, height=64)
    style = LayerStyle(stroke=StrokeEffect(size=4, color="#FF0000"))
    doc.add_shape_layer(
        [Rectangle(x=0, y=0, width=32, height=32)],
        name="Outlined",
        style=ShapeStyle(fill="#00FF00"),
        layer_style=style,
    )
    return doc

"""
PaintLayer - Raster layer with pixel data.

The image can be a Pillow image or a numpy array (H, W, C). It is converted
to an RGBA uint8 array only when the layer is written; the caller's image is
never modified.
"""

from pathlib import Path
from typing import Any, Literal, Optional, Union

import numpy as np
from PIL import Image, UnidentifiedImageError
from pydantic import Field

from kraforge.exceptions import ImageDecodeError

from .base import BaseLayer


class PaintLayer(BaseLayer):
    """Raster/pixel layer."""

    layer_type: Literal["paint"] = Field(default="paint", alias="type")

    name: str = Field(default='Paint Layer')
    image: Any = Field(default=None)  # PIL.Image.Image or np.ndarray
    image_path: Optional[str] = Field(default=None, alias='imagePath')  # provenance only

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs: Any) -> 'PaintLayer':
        """Decode an image file into a new PaintLayer."""
        try:
            with Image.open(path) as img:
                img.load()
                image = img.copy()
        except (OSError, UnidentifiedImageError) as e:
            raise ImageDecodeError(f"Failed to load image from {path}: {e}") from e
        kwargs.setdefault('name', Path(path).stem)
        return cls(image=image, image_path=str(path), **kwargs)

    def to_rgba_array(self) -> np.ndarray:
        """
        Get the layer image as an (H, W, 4) uint8 array.

        Raises:
            ImageDecodeError: If the image is missing or has an unsupported format
        """
        image = self.image
        if image is None:
            raise ImageDecodeError(f"Paint layer {self.name!r} has no image")

        if isinstance(image, Image.Image):
            try:
                return np.asarray(image.convert('RGBA'), dtype=np.uint8)
            except (OSError, ValueError) as e:
                raise ImageDecodeError(f"Failed to convert image of {self.name!r}: {e}") from e

        if not isinstance(image, np.ndarray):
            raise ImageDecodeError(f"Unsupported image type: {type(image).__name__}")

        arr = image
        if arr.dtype != np.uint8:
            if np.issubdtype(arr.dtype, np.floating):
                arr = (np.clip(arr, 0.0, 1.0) * 255).round().astype(np.uint8)
            else:
                raise ImageDecodeError(f"Unsupported dtype: {arr.dtype}")

        if arr.ndim == 2:
            arr = arr[:, :, np.newaxis]
        if arr.ndim != 3:
            raise ImageDecodeError(f"Expected 2D or 3D array, got {arr.ndim}D")

        channels = arr.shape[2]
        if channels == 4:
            return arr
        if channels == 1:
            arr = np.repeat(arr, 3, axis=2)
            channels = 3
        if channels == 3:
            alpha = np.full((*arr.shape[:2], 1), 255, dtype=np.uint8)
            return np.concatenate([arr, alpha], axis=2)
        raise ImageDecodeError(f"Unsupported channel count: {channels}")

    def to_pil(self) -> Image.Image:
        """Get the layer image as a Pillow RGBA image."""
        return Image.fromarray(self.to_rgba_array())

"""
ShapeLayer - Layer with vector primitives.

Shapes are written to the layer's ``content.svg`` inside one group that
carries the layer position. A shape layer is the only layer type that can
carry a LayerStyle.
"""

from typing import ClassVar, Literal, Optional

from pydantic import Field

from .base import BaseLayer
from .layer_style import LayerStyle
from .shapes import VectorShape


class ShapeLayer(BaseLayer):
    """Vector layer holding primitives and groups."""

    layer_type: Literal["shape"] = Field(default="shape", alias="type")

    name: str = Field(default='Vector Layer')
    shapes: list[VectorShape] = Field(default_factory=list)
    layer_style: Optional[LayerStyle] = Field(default=None, alias='layerStyle')

    svg_tag: ClassVar[str] = 'g'

    def get_svg_attributes(self) -> dict[str, str]:
        """Attributes of the group wrapping the layer's shapes."""
        return {
            'id': 'shape0',
            'transform': self.translate_transform(),
        }

    def has_style(self) -> bool:
        return self.layer_style is not None

    def has_content(self) -> bool:
        return bool(self.shapes)

"""
Document - Canvas size plus an ordered stack of layers.

Layer order matters: it decides the generated ``layerN`` file names and the
z-order in maindoc.xml. The model holds no I/O state; ``save()`` hands the
document to the .kra writer, which stages its own working directory.
"""

from pathlib import Path
from typing import Annotated, Any, BinaryIO, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .paint_layer import PaintLayer
from .shape_layer import ShapeLayer
from .shapes import Shape, ShapeStyle, VectorShape
from .text_layer import TextLayer, TextStyle

Layer = Annotated[
    Union[TextLayer, ShapeLayer, PaintLayer],
    Field(discriminator='layer_type'),
]


class Document(BaseModel):
    """
    Krita document model.

    Example usage:
        doc = Document(width=1024, height=1024)
        doc.add_text_layer("Hello, Krita!", name="Text Layer", x=10, y=10)
        doc.add_shape_layer([Rectangle(x=50, y=50, width=200, height=100)])
        doc.save("output.kra")
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=False,
        extra='ignore',
        arbitrary_types_allowed=True,
    )

    width: int = Field(default=1024, ge=1)
    height: int = Field(default=1024, ge=1)
    layers: list[Layer] = Field(default_factory=list)

    def add_layer(self, layer: Union[TextLayer, ShapeLayer, PaintLayer]) -> None:
        """Append an existing layer on top of the stack."""
        self.layers.append(layer)

    def add_text_layer(
        self,
        text: str,
        name: str = 'Text Layer',
        x: float = 0,
        y: float = 0,
        opacity: int = 255,
        style: Optional[TextStyle] = None,
    ) -> TextLayer:
        """Add a text layer, one span per line of ``text``."""
        layer = TextLayer.from_text(text, style=style, name=name, x=x, y=y, opacity=opacity)
        self.layers.append(layer)
        return layer

    def add_shape_layer(
        self,
        shapes: Union[VectorShape, list[VectorShape]],
        name: str = 'Vector Layer',
        x: float = 0,
        y: float = 0,
        opacity: int = 255,
        style: Optional[ShapeStyle] = None,
        **kwargs: Any,
    ) -> ShapeLayer:
        """
        Add a shape layer.

        Args:
            shapes: A primitive, a group or a list of them
            style: Applied to every top-level primitive that still has the default style
        """
        if not isinstance(shapes, list):
            shapes = [shapes]
        if style is not None:
            shapes = [
                shape.model_copy(update={'style': style})
                if isinstance(shape, Shape) and 'style' not in shape.model_fields_set else shape
                for shape in shapes
            ]
        layer = ShapeLayer(shapes=shapes, name=name, x=x, y=y, opacity=opacity, **kwargs)
        self.layers.append(layer)
        return layer

    def add_image_layer(
        self,
        image: Any,
        name: str = 'Paint Layer',
        x: float = 0,
        y: float = 0,
        opacity: int = 255,
        image_path: Optional[str] = None,
    ) -> PaintLayer:
        """Add a paint layer from a Pillow image, numpy array or image file path."""
        if isinstance(image, (str, Path)):
            layer = PaintLayer.from_file(image, name=name, x=x, y=y, opacity=opacity)
        else:
            layer = PaintLayer(image=image, image_path=image_path, name=name, x=x, y=y, opacity=opacity)
        self.layers.append(layer)
        return layer

    def paint_layers(self) -> list[PaintLayer]:
        return [layer for layer in self.layers if isinstance(layer, PaintLayer)]

    def styled_layers(self) -> list[ShapeLayer]:
        """Shape layers carrying a LayerStyle, in document order."""
        return [
            layer for layer in self.layers
            if isinstance(layer, ShapeLayer) and layer.has_style()
        ]

    def save(self, file: Union[str, Path, BinaryIO], settings: Any = None) -> None:
        """
        Save the document as a .kra file.

        Args:
            file: Destination path or writable binary stream
            settings: Optional kraforge.config.Settings overriding the defaults
        """
        from kraforge.formats.kra import KraWriter

        KraWriter(self, settings=settings).save(file)

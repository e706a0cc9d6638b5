"""
BaseLayer - Abstract base model for all layer types.

Provides the properties every Krita layer entry carries:
- Identity: uuid (``{...}`` form), name, type
- Placement: x, y
- Appearance: opacity (0-255), visible

The uuid is generated once when the layer is created and is reused for the
layer's manifest entry, so the references inside one document stay
consistent however often it is saved.
"""

from enum import Enum
import uuid

from pydantic import BaseModel, ConfigDict, Field

from kraforge.xml_node import format_number


def new_layer_uuid() -> str:
    """Create a layer identifier in the braced form Krita uses."""
    return "{" + str(uuid.uuid4()) + "}"


class LayerType(str, Enum):
    """Layer type identifiers."""
    TEXT = "text"
    SHAPE = "shape"
    PAINT = "paint"


class BaseLayer(BaseModel):
    """
    Base model for all layer types.

    Opacity uses Krita's 0-255 scale. It is stored as given; range checks are
    left to the caller.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=False,
        extra='ignore',
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    # Overridden in subclasses with Literal types
    layer_type: str = Field(default=LayerType.PAINT.value, alias='type')
    uuid: str = Field(default_factory=new_layer_uuid)
    name: str = Field(default='Layer')

    visible: bool = Field(default=True)
    opacity: int = Field(default=255)

    # Offset from document origin (can be negative)
    x: float = Field(default=0)
    y: float = Field(default=0)

    def is_text(self) -> bool:
        """Check if this is a text layer."""
        return self.layer_type == LayerType.TEXT

    def is_shape(self) -> bool:
        """Check if this is a vector shape layer."""
        return self.layer_type == LayerType.SHAPE

    def is_paint(self) -> bool:
        """Check if this is a raster paint layer."""
        return self.layer_type == LayerType.PAINT

    def is_vector(self) -> bool:
        """Text and shape layers are both stored as Krita shape layers."""
        return self.layer_type in (LayerType.TEXT, LayerType.SHAPE)

    def translate_transform(self) -> str:
        """SVG transform placing the layer content at its position."""
        return f'translate({format_number(self.x)}, {format_number(self.y)})'

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, uuid={self.uuid!r})"

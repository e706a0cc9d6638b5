"""
Layer styles attached to shape layers.

A LayerStyle is written twice: as a ``layerstyle="{uuid}"`` reference on the
layer's manifest entry and as a record in ``annotations/layerstyles.asl``.
Enum values (``OutF``, ``Nrml``) are the four-character tags of the ASL
format and are written verbatim.
"""

from typing import Any, Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StrokePosition:
    """Stroke position tags (``FStl`` enum)."""
    OUTSIDE = "OutF"
    INSIDE = "InsF"
    CENTER = "CtrF"


class StrokeEffect(BaseModel):
    """
    Stroke/outline effect ("FrFX" in the ASL block).

    Example:
        >>> effect = StrokeEffect(size=3, color='#FF0000')
        >>> effect.color
        (255.0, 0.0, 0.0)
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=False,
        extra='ignore',
    )

    enabled: bool = Field(default=True)
    style: str = Field(default=StrokePosition.OUTSIDE)
    blend_mode: str = Field(default='Nrml', alias='blendMode')
    opacity: float = Field(default=100.0)  # percent
    size: float = Field(default=3.0)  # pixels
    color: tuple[float, float, float] = Field(default=(255.0, 255.0, 255.0))

    @model_validator(mode='before')
    @classmethod
    def _normalize_input(cls, data: Any) -> Any:
        """Accept hex colors and the legacy 'width' parameter for size."""
        if isinstance(data, dict):
            data = dict(data)
            if 'width' in data and 'size' not in data:
                data['size'] = data.pop('width')

            color = data.get('color')
            if isinstance(color, str):
                data['color'] = cls._hex_to_rgb(color)
        return data

    @staticmethod
    def _hex_to_rgb(hex_str: str) -> tuple[int, int, int]:
        """Convert hex color string (#RRGGBB or RRGGBB) to RGB tuple."""
        hex_str = hex_str.lstrip('#')
        if len(hex_str) != 6:
            raise ValueError(f"Invalid hex color: {hex_str}")
        return (
            int(hex_str[0:2], 16),
            int(hex_str[2:4], 16),
            int(hex_str[4:6], 16),
        )


class LayerStyle(BaseModel):
    """
    Per-layer effect settings.

    ``uuid`` is stored without braces; the manifest wraps it in braces and
    the ASL record writes it hyphen-less with a ``%`` prefix.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=False,
        extra='ignore',
    )

    enabled: bool = Field(default=True)
    scale: float = Field(default=100.0)  # percent
    uuid: str = Field(default_factory=lambda: str(uuid.uuid4()))
    stroke: Optional[StrokeEffect] = Field(default=None)

    @property
    def stroke_enabled(self) -> bool:
        return self.stroke is not None and self.stroke.enabled

    def manifest_reference(self) -> str:
        """Value of the ``layerstyle`` attribute in maindoc.xml."""
        return "{" + self.uuid + "}"

    def asl_identifier(self) -> str:
        """Value of the ``Idnt`` key in the ASL record."""
        return "%" + self.uuid.replace("-", "")

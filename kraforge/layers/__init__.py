"""
kraforge Layer Models

Pydantic models describing a Krita document before it is written.
These models are plain data: writing happens in kraforge.formats.

Layer Hierarchy:
    BaseLayer (abstract)
    ├── TextLayer (type: 'text')   -> Krita shape layer with a text element
    ├── ShapeLayer (type: 'shape') -> Krita shape layer with vector shapes
    └── PaintLayer (type: 'paint') -> Krita paint layer (tiled pixels)
"""

from .base import BaseLayer, LayerType, new_layer_uuid
from .shapes import (
    DEFAULT_SHAPE_STYLE,
    Circle,
    Ellipse,
    Line,
    Path,
    Rectangle,
    Shape,
    ShapeGroup,
    ShapeStyle,
    VectorShape,
)
from .layer_style import LayerStyle, StrokeEffect, StrokePosition
from .text_layer import DEFAULT_TEXT_STYLE, TextLayer, TextSpan, TextStyle, split_lines
from .shape_layer import ShapeLayer
from .paint_layer import PaintLayer
from .document import Document, Layer

__all__ = [
    # Base
    'BaseLayer',
    'LayerType',
    'new_layer_uuid',
    # Layer types
    'TextLayer',
    'TextSpan',
    'TextStyle',
    'ShapeLayer',
    'PaintLayer',
    'Layer',
    # Shapes
    'Shape',
    'ShapeStyle',
    'Rectangle',
    'Circle',
    'Ellipse',
    'Line',
    'Path',
    'ShapeGroup',
    'VectorShape',
    # Styles
    'LayerStyle',
    'StrokeEffect',
    'StrokePosition',
    'DEFAULT_SHAPE_STYLE',
    'DEFAULT_TEXT_STYLE',
    # Document
    'Document',
    # Utilities
    'split_lines',
]

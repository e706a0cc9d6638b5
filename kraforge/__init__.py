"""
kraforge - Build layered Krita (.kra) documents.

Example:
    from kraforge import Document, Rectangle

    doc = Document(width=1024, height=1024)
    doc.add_text_layer("Hello, Krita!", x=10, y=10)
    doc.add_shape_layer([Rectangle(x=50, y=50, width=200, height=100)])
    doc.save("output.kra")
"""

__version__ = "0.1.0"

from .config import Settings, settings
from .exceptions import (
    ColorProfileError,
    ImageDecodeError,
    KraEncodingError,
    KraError,
    KraIOError,
    LayerInvariantError,
    TileCompressionError,
)
from .layers import (
    Circle,
    Document,
    Ellipse,
    LayerStyle,
    Line,
    PaintLayer,
    Path,
    Rectangle,
    ShapeGroup,
    ShapeLayer,
    ShapeStyle,
    StrokeEffect,
    TextLayer,
    TextStyle,
)
from .formats import KraWriter, save_kra

__all__ = [
    '__version__',
    'Settings',
    'settings',
    # Errors
    'KraError',
    'KraIOError',
    'ColorProfileError',
    'KraEncodingError',
    'ImageDecodeError',
    'TileCompressionError',
    'LayerInvariantError',
    # Model
    'Document',
    'TextLayer',
    'TextStyle',
    'ShapeLayer',
    'ShapeStyle',
    'PaintLayer',
    'LayerStyle',
    'StrokeEffect',
    'Rectangle',
    'Circle',
    'Ellipse',
    'Line',
    'Path',
    'ShapeGroup',
    # Writer
    'KraWriter',
    'save_kra',
]

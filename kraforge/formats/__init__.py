"""kraforge file formats.

This module contains the encoders and the writer for Krita (.kra) archives.
"""

from .tiles import (
    TILE_SIZE,
    PIXEL_SIZE,
    encode_tiles,
    tile_origins,
    write_tiled_layer,
)
from .asl import ASLWriter, encode_layer_styles, encode_string
from .manifest import (
    LayerEntry,
    build_animation_metadata,
    build_document_info,
    build_main_doc,
    build_svg_content,
)
from .kra import KraWriter, build_preview, save_kra

__all__ = [
    # Tiled layers
    'TILE_SIZE',
    'PIXEL_SIZE',
    'encode_tiles',
    'tile_origins',
    'write_tiled_layer',
    # Layer styles
    'ASLWriter',
    'encode_layer_styles',
    'encode_string',
    # Manifests
    'LayerEntry',
    'build_animation_metadata',
    'build_document_info',
    'build_main_doc',
    'build_svg_content',
    # KRA
    'KraWriter',
    'build_preview',
    'save_kra',
]

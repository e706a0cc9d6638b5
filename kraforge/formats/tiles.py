"""
Tiled raster format used for Krita paint layers.

A paint layer file is an ASCII header followed by one record per 64x64 tile:

    VERSION 2
    TILEWIDTH 64
    TILEHEIGHT 64
    PIXELSIZE 4
    DATA <tile count>
    <left>,<top>,LZF,<payload length>\\n<payload>...

Tiles are visited row by row, left to right. Each tile is stored plane-major
(all blue bytes, then green, red and alpha) and LZF compressed. The payload
starts with a flag byte: 0x01 for LZF data, 0x00 for raw planes. Krita's
reader selects the codec from the header and the flag byte, so tiles that do
not shrink under LZF are written raw with the same header.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import BinaryIO, Union

import lzf
import numpy as np

from kraforge.exceptions import TileCompressionError

logger = logging.getLogger(__name__)

TILE_SIZE = 64
PIXEL_SIZE = 4
TILED_VERSION = 2
COMPRESSION_NAME = "LZF"

FLAG_RAW = 0x00
FLAG_COMPRESSED = 0x01

# RGBA channel indices in plane order B, G, R, A
PLANE_ORDER = (2, 1, 0, 3)
PLANE_BYTES = TILE_SIZE * TILE_SIZE
TILE_BYTES = PLANE_BYTES * PIXEL_SIZE


def tile_origins(width: int, height: int) -> list[tuple[int, int]]:
    """
    Get the (left, top) origin of every tile in row-major order.

    There are ``ceil(width/64) * ceil(height/64)`` tiles.
    """
    columns = math.ceil(width / TILE_SIZE)
    rows = math.ceil(height / TILE_SIZE)
    return [
        (column * TILE_SIZE, row * TILE_SIZE)
        for row in range(rows)
        for column in range(columns)
    ]


def extract_tile(pixels: np.ndarray, left: int, top: int) -> np.ndarray:
    """
    Copy one 64x64 RGBA tile out of an (H, W, 4) image.

    Pixels beyond the image bounds stay fully transparent (zero).
    """
    tile = np.zeros((TILE_SIZE, TILE_SIZE, PIXEL_SIZE), dtype=np.uint8)
    region = pixels[top:top + TILE_SIZE, left:left + TILE_SIZE]
    tile[:region.shape[0], :region.shape[1]] = region
    return tile


def planarize(tile: np.ndarray) -> bytes:
    """Reorder an interleaved RGBA tile into B, G, R, A byte planes."""
    return tile[:, :, PLANE_ORDER].transpose(2, 0, 1).tobytes()


def compress_planes(planes: bytes) -> bytes:
    """
    Compress a tile's plane buffer, prefixed with its flag byte.

    Falls back to the raw buffer with FLAG_RAW when LZF cannot make it
    smaller.

    Raises:
        TileCompressionError: If the compressor fails
    """
    try:
        compressed = lzf.compress(planes)
    except Exception as e:
        raise TileCompressionError(f"LZF compression failed: {e}") from e

    if compressed is None or len(compressed) >= len(planes):
        return bytes([FLAG_RAW]) + planes
    return bytes([FLAG_COMPRESSED]) + compressed


def encode_tile_record(pixels: np.ndarray, left: int, top: int) -> bytes:
    """Encode the header line and payload of the tile at (left, top)."""
    payload = compress_planes(planarize(extract_tile(pixels, left, top)))
    if payload[0] == FLAG_RAW:
        logger.debug(f"Tile {left},{top} stored uncompressed")
    header = f"{left},{top},{COMPRESSION_NAME},{len(payload)}\n".encode("ascii")
    return header + payload


def encode_tiles(pixels: np.ndarray) -> bytes:
    """
    Encode an (H, W, 4) uint8 RGBA image into the tiled layer format.

    Args:
        pixels: Image as numpy array, RGBA channel order

    Returns:
        Complete layer file content
    """
    if pixels.ndim != 3 or pixels.shape[2] != PIXEL_SIZE or pixels.dtype != np.uint8:
        raise ValueError(f"Expected (H, W, 4) uint8 array, got {pixels.shape} {pixels.dtype}")

    height, width = pixels.shape[:2]
    origins = tile_origins(width, height)

    parts = [
        f"VERSION {TILED_VERSION}\n".encode("ascii"),
        f"TILEWIDTH {TILE_SIZE}\n".encode("ascii"),
        f"TILEHEIGHT {TILE_SIZE}\n".encode("ascii"),
        f"PIXELSIZE {PIXEL_SIZE}\n".encode("ascii"),
        f"DATA {len(origins)}\n".encode("ascii"),
    ]
    parts.extend(encode_tile_record(pixels, left, top) for left, top in origins)
    return b"".join(parts)


def write_tiled_layer(pixels: np.ndarray, sink: Union[str, Path, BinaryIO]) -> int:
    """
    Write a tiled layer file to a path or binary stream.

    Returns:
        Number of bytes written
    """
    data = encode_tiles(pixels)
    if isinstance(sink, (str, Path)):
        with open(sink, "wb") as f:
            f.write(data)
    else:
        sink.write(data)
    return len(data)

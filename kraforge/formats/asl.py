"""
Layer style block (``annotations/layerstyles.asl``).

The block uses the legacy Photoshop style-exchange layout that Krita reads
for embedded layer styles. All integers are big-endian:

    u16 version = 2
    "8BSL"
    u16 format = 3
    u32 patterns = 0
    u32 style count
    per style: u32 record length + record body

The record length counts the body only. Bodies are written into their own
buffer first and the length is prepended afterwards.

Every four-character tag below is a fixed protocol constant.
"""

from __future__ import annotations

import io
import logging
import struct
from typing import Iterable, Literal

from kraforge.layers.layer_style import LayerStyle, StrokeEffect
from kraforge.layers.shape_layer import ShapeLayer

logger = logging.getLogger(__name__)

ASL_VERSION = 2
ASL_SIGNATURE = b"8BSL"
ASL_FORMAT = 3

StringMode = Literal["embedded", "key"]


def _pad4(data: bytes) -> bytes:
    return data + b"\0" * ((4 - len(data) % 4) % 4)


def encode_string(value: str, mode: StringMode = "embedded") -> bytes:
    """
    Encode a string for an ASL record.

    ``embedded``: two bytes per character (UTF-16-LE code unit) plus a two
    byte zero terminator, prefixed with the u32 byte length of that buffer.
    Characters outside the BMP are replaced by U+FFFD so every character
    stays one code unit.

    ``key``: the bare ASCII bytes without length prefix.

    In both modes the encoded buffer is zero-padded to a multiple of four.
    """
    if mode == "key":
        return _pad4(value.encode("ascii"))
    if mode != "embedded":
        raise ValueError(f"Unknown string mode: {mode}")

    units = "".join(c if ord(c) <= 0xFFFF else "\ufffd" for c in value)
    encoded = units.encode("utf-16-le", errors="surrogatepass") + b"\0\0"
    return struct.pack(">I", len(encoded)) + _pad4(encoded)


class ASLWriter:
    """Big-endian writer for ASL descriptors."""

    def __init__(self):
        self._buffer = io.BytesIO()

    def getvalue(self) -> bytes:
        return self._buffer.getvalue()

    def __len__(self) -> int:
        return self._buffer.tell()

    def write_bytes(self, data: bytes) -> None:
        self._buffer.write(data)

    def write_tag(self, *tags: str) -> None:
        """Write one or more literal tags (not padded, not length-prefixed)."""
        for tag in tags:
            self._buffer.write(tag.encode("ascii"))

    def write_uint8(self, value: int) -> None:
        self._buffer.write(struct.pack(">B", value))

    def write_uint16(self, value: int) -> None:
        self._buffer.write(struct.pack(">H", value))

    def write_uint32(self, value: int) -> None:
        self._buffer.write(struct.pack(">I", value))

    def write_double(self, value: float) -> None:
        self._buffer.write(struct.pack(">d", value))

    def write_text(self, key: str, value: str) -> None:
        self.write_tag(key, "TEXT")
        self._buffer.write(encode_string(value, "embedded"))

    def write_bool(self, key: str, value: bool) -> None:
        self.write_tag(key, "bool")
        self.write_uint8(1 if value else 0)

    def write_enum(self, key: str, enum_type: str, value: str) -> None:
        self.write_tag(key, "enum", enum_type, value)

    def write_unit_float(self, key: str, unit: str, value: float) -> None:
        self.write_tag(key, "UntF", unit)
        self.write_double(value)

    def write_doub(self, key: str, value: float) -> None:
        self.write_tag(key, "doub")
        self.write_double(value)

    def write_object(self, key: str, class_id: str) -> None:
        self.write_tag(key, "Objc", class_id)


def _write_stroke(writer: ASLWriter, stroke: StrokeEffect) -> None:
    writer.write_object("FrFX", "FrFX")
    writer.write_bool("enab", True)
    writer.write_enum("Style", "FStl", stroke.style)
    writer.write_enum("PntT", "FrFl", "SClr")
    writer.write_enum("Md  ", "BlnM", stroke.blend_mode)
    writer.write_unit_float("Opct", "#Prc", stroke.opacity)
    writer.write_unit_float("Sz  ", "#Pxl", stroke.size)
    writer.write_object("Clr ", "RGBC")
    for channel, value in zip(("Rd  ", "Grn ", "Bl  "), stroke.color):
        writer.write_doub(channel, value)


def encode_style_body(name: str, style: LayerStyle) -> bytes:
    """Encode one style record body (everything after the length field)."""
    writer = ASLWriter()
    writer.write_tag("null")
    writer.write_text("Nm  ", f"<{name}> (embedded)")
    writer.write_text("Idnt", style.asl_identifier())

    writer.write_tag("StyL", "documentMode", "Objc", "documentMode", "Lefx", "Objc", "Lefx")
    writer.write_unit_float("Scl ", "#Prc", style.scale)
    writer.write_bool("masterFXSwitch", style.enabled)

    if style.stroke_enabled:
        _write_stroke(writer, style.stroke)
    return writer.getvalue()


def encode_style_record(layer: ShapeLayer) -> bytes:
    """Encode a styled layer as a length-prefixed record."""
    if layer.layer_style is None:
        raise ValueError(f"Layer {layer.name!r} has no layer style")
    body = encode_style_body(layer.name, layer.layer_style)
    return struct.pack(">I", len(body)) + body


def encode_layer_styles(layers: Iterable[ShapeLayer]) -> bytes:
    """
    Encode the styles of all styled layers into one ASL block.

    Layers without a style are skipped; the others are written in input
    order.
    """
    styled = [layer for layer in layers if getattr(layer, "layer_style", None) is not None]

    writer = ASLWriter()
    writer.write_uint16(ASL_VERSION)
    writer.write_bytes(ASL_SIGNATURE)
    writer.write_uint16(ASL_FORMAT)
    writer.write_uint32(0)
    writer.write_uint32(len(styled))
    for layer in styled:
        writer.write_bytes(encode_style_record(layer))

    logger.debug(f"Encoded {len(styled)} layer style(s), {len(writer)} bytes")
    return writer.getvalue()

"""
KraWriter - Writes a Document as a Krita (.kra) archive.

KRA Format: ZIP archive containing, in this order:
- mimetype: "application/x-krita" (stored, first member)
- documentinfo.xml: document metadata
- maindoc.xml: image attributes and layer entries
- per layer, in document order:
    - text/shape layers: layers/<file>.shapelayer/content.svg
    - paint layers: layers/<file> (tiled pixels), layers/<file>.defaultpixel,
      layers/<file>.icc
- animation/index.xml: animation metadata
- annotations/icc: document color profile
- preview.png: 256x256 thumbnail
- annotations/layerstyles.asl: only if a layer carries a LayerStyle

Layer files are named ``layer<index + 2>``; Krita reserves the first two
slots for the root and the background node.

Saving is all or nothing: the archive is assembled in a partial file that
only replaces the destination after every member was written. The staging
directory and any partial archive are removed on every path.
"""

from __future__ import annotations

import io
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional, Union
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile

from PIL import Image

from kraforge.config import Settings, settings as default_settings
from kraforge.exceptions import ColorProfileError, KraIOError, LayerInvariantError
from kraforge.layers import Document, PaintLayer, ShapeLayer, TextLayer

from .asl import encode_layer_styles
from .manifest import (
    LayerEntry,
    build_animation_metadata,
    build_document_info,
    build_main_doc,
    build_svg_content,
)
from .tiles import write_tiled_layer

logger = logging.getLogger(__name__)

MIMETYPE = "application/x-krita"
DEFAULT_PIXEL = bytes([0, 0, 0, 0])
RESERVED_LAYER_SLOTS = 2

STAGING_SUBDIRS = ("layers", "annotations", "animation")


def layer_filename(index: int) -> str:
    """File name of the layer at ``index`` in document order."""
    return f"layer{index + RESERVED_LAYER_SLOTS}"


def build_preview(document: Document, size: int = 256) -> bytes:
    """
    Render the preview.png thumbnail.

    Uses the last paint layer's image, or a transparent canvas if the document
    has no paint layer, scaled to ``size`` x ``size`` with bilinear filtering.
    """
    paint_layers = document.paint_layers()
    if paint_layers:
        preview = paint_layers[-1].to_pil()
    else:
        preview = Image.new('RGBA', (document.width, document.height), (0, 0, 0, 0))

    thumbnail = preview.resize((size, size), Image.Resampling.BILINEAR)
    buffer = io.BytesIO()
    thumbnail.save(buffer, format='PNG')
    return buffer.getvalue()


class KraWriter:
    """
    Serializes one Document into a .kra archive.

    Example usage:
        writer = KraWriter(doc)
        writer.save('output.kra')
    """

    def __init__(self, document: Document, settings: Optional[Settings] = None):
        self.document = document
        self.settings = settings or default_settings

    # --- Preparation ---

    def read_color_profile(self) -> bytes:
        """
        Read the ICC profile embedded for the document and every paint layer.

        Raises:
            ColorProfileError: If the profile file cannot be read
        """
        path = Path(self.settings.ICC_PROFILE_PATH)
        try:
            return path.read_bytes()
        except OSError as e:
            raise ColorProfileError(f"Cannot read color profile {path}: {e}") from e

    def layer_entries(self) -> list[LayerEntry]:
        """
        Assign file names to all layers and check their identifiers.

        Raises:
            LayerInvariantError: For unknown layer types, missing or duplicate identifiers
        """
        entries = []
        seen: set[str] = set()
        for index, layer in enumerate(self.document.layers):
            if not isinstance(layer, (TextLayer, ShapeLayer, PaintLayer)):
                raise LayerInvariantError(f"Unsupported layer type at index {index}: {type(layer).__name__}")
            if not layer.uuid:
                raise LayerInvariantError(f"Layer {layer.name!r} has no identifier")
            if layer.uuid in seen:
                raise LayerInvariantError(f"Duplicate layer identifier {layer.uuid}")
            seen.add(layer.uuid)
            entries.append(LayerEntry(layer=layer, uuid=layer.uuid, filename=layer_filename(index)))
        return entries

    def _stage(self) -> Path:
        staging_root = self.settings.STAGING_DIR
        try:
            staging = Path(tempfile.mkdtemp(prefix="kra_", dir=staging_root))
            for name in STAGING_SUBDIRS:
                (staging / name).mkdir()
        except OSError as e:
            raise KraIOError(f"Failed to create staging directory: {e}") from e
        return staging

    # --- Saving ---

    def save(self, file: Union[str, Path, BinaryIO]) -> None:
        """
        Save the document to a .kra file.

        Args:
            file: Destination path or writable binary stream

        Raises:
            KraIOError: If staging, reading the profile or writing fails
            KraEncodingError: If a layer cannot be encoded
            LayerInvariantError: If a layer is not writable
        """
        icc_data = self.read_color_profile()
        entries = self.layer_entries()

        staging = self._stage()
        if isinstance(file, (str, Path)):
            partial = Path(file).with_name(Path(file).name + ".part")
        else:
            partial = staging / "document.kra"

        try:
            with ZipFile(partial, 'w') as zf:
                self._write_members(zf, entries, staging, icc_data)
            self._commit(partial, file)
        except OSError as e:
            raise KraIOError(f"Failed to write Krita file: {e}") from e
        finally:
            if partial.exists():
                partial.unlink()
            shutil.rmtree(staging, ignore_errors=True)

        logger.info(f"Created Krita file with {len(entries)} layer(s): {file}")

    @staticmethod
    def _commit(partial: Path, file: Union[str, Path, BinaryIO]) -> None:
        if isinstance(file, (str, Path)):
            os.replace(partial, file)
        else:
            with open(partial, 'rb') as f:
                shutil.copyfileobj(f, file)

    @property
    def _compression(self) -> int:
        return ZIP_STORED if self.settings.ARCHIVE_COMPRESSION == "stored" else ZIP_DEFLATED

    def _write_bytes(self, zf: ZipFile, name: str, data: Union[bytes, str]) -> None:
        zf.writestr(name, data, compress_type=self._compression)

    def _write_file(self, zf: ZipFile, path: Path, name: str) -> None:
        zf.write(path, name, compress_type=self._compression)

    def _write_members(
        self,
        zf: ZipFile,
        entries: list[LayerEntry],
        staging: Path,
        icc_data: bytes,
    ) -> None:
        zf.writestr('mimetype', MIMETYPE, compress_type=ZIP_STORED)
        self._write_bytes(zf, 'documentinfo.xml', build_document_info())
        self._write_bytes(zf, 'maindoc.xml', build_main_doc(self.document, entries, self.settings))

        for entry in entries:
            self._write_layer(zf, entry, staging, icc_data)

        self._write_bytes(zf, 'animation/index.xml', build_animation_metadata())
        self._write_bytes(zf, 'annotations/icc', icc_data)
        self._write_bytes(zf, 'preview.png', build_preview(self.document, self.settings.PREVIEW_SIZE))

        styled = self.document.styled_layers()
        if styled:
            self._write_bytes(zf, 'annotations/layerstyles.asl', encode_layer_styles(styled))

    def _write_layer(self, zf: ZipFile, entry: LayerEntry, staging: Path, icc_data: bytes) -> None:
        layer = entry.layer
        if isinstance(layer, (TextLayer, ShapeLayer)):
            self._write_shape_layer(zf, entry, staging)
        elif isinstance(layer, PaintLayer):
            self._write_paint_layer(zf, entry, staging, icc_data)
        else:
            raise LayerInvariantError(f"Unsupported layer type: {type(layer).__name__}")

    def _write_shape_layer(self, zf: ZipFile, entry: LayerEntry, staging: Path) -> None:
        layer_dir = f"{entry.filename}.shapelayer"
        target = staging / "layers" / layer_dir
        target.mkdir()

        svg_path = target / "content.svg"
        svg_path.write_text(
            build_svg_content(entry.layer, self.document.width, self.document.height),
            encoding='utf-8',
        )
        self._write_file(zf, svg_path, f"layers/{layer_dir}/content.svg")
        logger.debug(f"Wrote shape layer {entry.layer.name!r} as {layer_dir}")

    def _write_paint_layer(self, zf: ZipFile, entry: LayerEntry, staging: Path, icc_data: bytes) -> None:
        layer_path = staging / "layers" / entry.filename
        size = write_tiled_layer(entry.layer.to_rgba_array(), layer_path)

        default_pixel_path = layer_path.with_name(f"{entry.filename}.defaultpixel")
        default_pixel_path.write_bytes(DEFAULT_PIXEL)
        icc_path = layer_path.with_name(f"{entry.filename}.icc")
        icc_path.write_bytes(icc_data)

        for path in (layer_path, default_pixel_path, icc_path):
            self._write_file(zf, path, f"layers/{path.name}")
        logger.debug(f"Wrote paint layer {entry.layer.name!r} as {entry.filename} ({size} bytes)")


def save_kra(
    document: Document,
    file: Union[str, Path, BinaryIO],
    settings: Optional[Settings] = None,
) -> None:
    """Save a document as a .kra file."""
    KraWriter(document, settings=settings).save(file)

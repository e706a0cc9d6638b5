#!/usr/bin/env python3
"""
Write a sample Krita document.

The document holds a two-line text layer, a shape layer with one rectangle
and a light grey paint layer covering the canvas.

Usage:
    python -m kraforge.demo output.kra
    python -m kraforge.demo output.kra --width 512 --height 512 --icc sRGB.icc
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from kraforge.config import Settings
from kraforge.exceptions import KraError
from kraforge.layers import Document, Rectangle, ShapeStyle, TextStyle

SAMPLE_GREY = (200, 200, 200, 255)


def create_sample_image(width: int, height: int) -> np.ndarray:
    """Create a uniform grey RGBA image."""
    image = np.empty((height, width, 4), dtype=np.uint8)
    image[:, :] = SAMPLE_GREY
    return image


def create_sample_document(width: int = 1024, height: int = 1024) -> Document:
    """Create the sample document: text, rectangle and grey paint layer."""
    doc = Document(width=width, height=height)
    doc.add_text_layer(
        "Hello, Krita!\nThis is a text layer.",
        name="Text Layer",
        x=10,
        y=10,
        style=TextStyle(),
    )

    shape_style = ShapeStyle()
    doc.add_shape_layer(
        [Rectangle(x=50, y=50, width=200, height=100, style=shape_style)],
        name="Shape Layer",
        style=shape_style,
    )
    doc.add_image_layer(create_sample_image(width, height), name="Image Layer")
    return doc


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Write a sample Krita document")
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=Path("output.kra"),
        help="Destination .kra file (default: output.kra)",
    )
    parser.add_argument("--width", type=int, default=1024, help="Canvas width in pixels")
    parser.add_argument("--height", type=int, default=1024, help="Canvas height in pixels")
    parser.add_argument(
        "--icc",
        type=Path,
        default=None,
        help="ICC profile to embed (default: KRAFORGE_ICC_PROFILE_PATH or layer3.icc)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    settings = Settings(ICC_PROFILE_PATH=args.icc) if args.icc else Settings()
    doc = create_sample_document(args.width, args.height)

    try:
        doc.save(args.output, settings=settings)
    except KraError as e:
        print(f"Error saving document: {e}")
        return 1

    print(f"Krita document saved as {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

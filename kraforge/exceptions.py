"""Exception classes raised while writing Krita documents."""


class KraError(Exception):
    """Base exception for kraforge errors."""

    pass


class KraIOError(KraError):
    """Raised when staging, reading an input file or writing the archive fails."""

    pass


class ColorProfileError(KraIOError):
    """Raised when the ICC color profile cannot be read."""

    pass


class KraEncodingError(KraError):
    """Raised when layer content cannot be encoded."""

    pass


class ImageDecodeError(KraEncodingError):
    """Raised when a paint layer image cannot be turned into RGBA pixels."""

    pass


class TileCompressionError(KraEncodingError):
    """Raised when the tile compressor fails."""

    pass


class LayerInvariantError(KraError):
    """Raised for unknown layer variants or layers without an identifier."""

    pass

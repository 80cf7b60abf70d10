"""Netpbm bitmap (P1/P4) and greyscale (P2/P5) codec."""

from .codec import (
    BitmapCodec,
    BitmapGrid,
    DecodeError,
    EncodeError,
    FormatTag,
    GreymapGrid,
    GreyscaleCodec,
    ImageGrid,
    PnmLoader,
    decode,
    encode,
)

__version__ = "0.1.0"

__all__ = [
    "BitmapCodec",
    "BitmapGrid",
    "decode",
    "DecodeError",
    "encode",
    "EncodeError",
    "FormatTag",
    "GreymapGrid",
    "GreyscaleCodec",
    "ImageGrid",
    "PnmLoader",
]

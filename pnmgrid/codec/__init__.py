from .base import PnmCodec, open_stream
from .bitmap import BitmapCodec
from .encoding import bytes_per_row, pack_row, unpack_row
from .errors import (
    DecodeError,
    EncodeError,
    InvalidDimensions,
    InvalidMaxValue,
    MalformedPixelToken,
    TruncatedImageBody,
    UnexpectedEndOfInput,
    UnsupportedFormat,
)
from .greyscale import GreyscaleCodec
from .header import Header, LineTokenizer, parse_header
from .loader import PnmLoader, decode, encode
from .types import MAX_GREY_VALUE, BitmapGrid, FormatTag, GreymapGrid, ImageGrid

__all__ = [
    "BitmapCodec",
    "BitmapGrid",
    "bytes_per_row",
    "decode",
    "DecodeError",
    "encode",
    "EncodeError",
    "FormatTag",
    "GreymapGrid",
    "GreyscaleCodec",
    "Header",
    "ImageGrid",
    "InvalidDimensions",
    "InvalidMaxValue",
    "LineTokenizer",
    "MalformedPixelToken",
    "MAX_GREY_VALUE",
    "open_stream",
    "pack_row",
    "parse_header",
    "PnmCodec",
    "PnmLoader",
    "TruncatedImageBody",
    "UnexpectedEndOfInput",
    "UnsupportedFormat",
    "unpack_row",
]

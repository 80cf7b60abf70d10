from __future__ import annotations


class DecodeError(ValueError):
    """Raised when a Netpbm stream cannot be decoded."""


class UnexpectedEndOfInput(DecodeError):
    pass


class UnsupportedFormat(DecodeError):
    pass


class InvalidDimensions(DecodeError):
    pass


class InvalidMaxValue(DecodeError):
    pass


class MalformedPixelToken(DecodeError):
    pass


class TruncatedImageBody(DecodeError):
    pass


class EncodeError(ValueError):
    """Raised when a grid cannot be written in its current format."""

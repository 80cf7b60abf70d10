from __future__ import annotations

from .base import PnmCodec
from .encoding import format_ascii_rows, read_ascii_rows, read_packed_rows
from .errors import EncodeError
from .header import Header, LineTokenizer
from .types import GREYSCALE_FORMATS, FormatTag, GreymapGrid


class GreyscaleCodec(PnmCodec):
    """P2 (plain) and P5 (packed) 8-bit images."""

    formats = GREYSCALE_FORMATS
    has_max_value = True

    def _empty_grid(self, header: Header) -> GreymapGrid:
        return GreymapGrid(header.width, header.height, [], header.format_tag, max_value=header.max_value)

    def _decode_body(self, tokenizer: LineTokenizer, header: Header) -> GreymapGrid:
        width = header.width
        if header.format_tag == FormatTag.P2:
            rows = read_ascii_rows(tokenizer, width, header.height, _truncate, 0)
        else:
            rows = [list(data) for data in read_packed_rows(tokenizer, width, header.height)]
        return GreymapGrid(width, header.height, rows, header.format_tag, max_value=header.max_value)

    def _header_for(self, grid: GreymapGrid) -> Header:
        return Header(grid.format_tag, grid.width, grid.height, grid.max_value)

    def _encode_body(self, grid: GreymapGrid) -> bytes:
        if grid.format_tag == FormatTag.P2:
            return format_ascii_rows(grid.rows)
        try:
            return b"".join(bytes(row) for row in grid.rows)
        except ValueError as exc:
            raise EncodeError(f"Pixel value does not fit in a byte: {exc}") from exc


def _truncate(value: int) -> int:
    return value & 0xFF

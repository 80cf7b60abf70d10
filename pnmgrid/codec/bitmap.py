from __future__ import annotations

from .base import PnmCodec
from .encoding import bytes_per_row, format_ascii_rows, pack_row, read_ascii_rows, read_packed_rows, unpack_row
from .header import Header, LineTokenizer
from .types import BITMAP_FORMATS, BitmapGrid, FormatTag


class BitmapCodec(PnmCodec):
    """P1 (plain) and P4 (packed) 1-bit images."""

    formats = BITMAP_FORMATS

    def _empty_grid(self, header: Header) -> BitmapGrid:
        return BitmapGrid(header.width, header.height, [], header.format_tag)

    def _decode_body(self, tokenizer: LineTokenizer, header: Header) -> BitmapGrid:
        if header.format_tag == FormatTag.P1:
            rows = read_ascii_rows(tokenizer, header.width, header.height, _pixel_from_int, False)
        else:
            row_size = bytes_per_row(header.width)
            packed = read_packed_rows(tokenizer, row_size, header.height)
            rows = [unpack_row(data, header.width) for data in packed]
        return BitmapGrid(header.width, header.height, rows, header.format_tag)

    def _encode_body(self, grid: BitmapGrid) -> bytes:
        if grid.format_tag == FormatTag.P1:
            return format_ascii_rows([[int(bool(pix)) for pix in row] for row in grid.rows])
        return b"".join(pack_row(row) for row in grid.rows)


def _pixel_from_int(value: int) -> bool:
    return value == 1

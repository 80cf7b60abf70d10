from __future__ import annotations

from typing import Callable, List, Sequence, TypeVar

from .errors import MalformedPixelToken, TruncatedImageBody
from .header import LineTokenizer, parse_int

PIXELS_PER_BYTE = 8
READ_CHUNK_SIZE = 64 * 1024

T = TypeVar("T")


def bytes_per_row(width: int) -> int:
    """Bytes taken by one packed 1-bit row, padded to a whole byte."""
    return (width + PIXELS_PER_BYTE - 1) // PIXELS_PER_BYTE


def pack_row(row: Sequence[bool]) -> bytes:
    """Pack a 1-bit row MSB-first, zero-padding the last byte."""
    out = bytearray()
    for i in range(0, len(row), PIXELS_PER_BYTE):
        chunk = row[i : i + PIXELS_PER_BYTE]
        value = 0
        for bit, pix in enumerate(chunk):
            if pix:
                value |= 1 << (7 - bit)
        out.append(value)
    return bytes(out)


def unpack_row(data: bytes, width: int) -> List[bool]:
    """Inverse of :func:`pack_row`; padding bits are ignored."""
    return [bool((data[j // PIXELS_PER_BYTE] >> (7 - j % PIXELS_PER_BYTE)) & 1) for j in range(width)]


def read_exact(tokenizer: LineTokenizer, size: int) -> bytes:
    """Read exactly ``size`` bytes, at most READ_CHUNK_SIZE per call."""
    data = bytearray()
    while len(data) < size:
        chunk = tokenizer.stream.read(min(READ_CHUNK_SIZE, size - len(data)))
        if not chunk:
            raise TruncatedImageBody(f"Expected {size} bytes of pixel data, got {len(data)}")
        data += chunk
    return bytes(data)


def read_packed_rows(tokenizer: LineTokenizer, row_size: int, height: int) -> List[bytes]:
    return [read_exact(tokenizer, row_size) for _ in range(height)]


def read_ascii_rows(
    tokenizer: LineTokenizer,
    width: int,
    height: int,
    parse_pixel: Callable[[int], T],
    fill: T,
) -> List[List[T]]:
    """Read ``height`` text rows of integer tokens.

    Rows shorter than ``width`` are completed with ``fill``.
    """
    rows: List[List[T]] = []
    for y in range(height):
        tokens = tokenizer.next_line()
        if tokens is None:
            raise TruncatedImageBody(f"Expected {height} rows of pixel data, got {y}")
        if len(tokens) > width:
            raise MalformedPixelToken(f"Row {y} has {len(tokens)} pixels, width is {width}")
        row = [parse_pixel(_parse_int(token, y)) for token in tokens]
        row.extend([fill] * (width - len(row)))
        rows.append(row)
    return rows


def format_ascii_rows(rows: Sequence[Sequence[int]]) -> bytes:
    lines = [" ".join(str(int(value)) for value in row) + "\n" for row in rows]
    return "".join(lines).encode("ascii")


def _parse_int(token: str, y: int) -> int:
    try:
        return parse_int(token)
    except ValueError as exc:
        raise MalformedPixelToken(f"Invalid pixel value {token!r} in row {y}") from exc

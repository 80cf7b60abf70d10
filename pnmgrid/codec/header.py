from __future__ import annotations

import re
from dataclasses import dataclass
from typing import BinaryIO, Iterable, List, Optional

from .errors import InvalidDimensions, InvalidMaxValue, UnexpectedEndOfInput, UnsupportedFormat
from .types import MAX_GREY_VALUE, FormatTag

COMMENT_PREFIX = b"#"
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(token: str) -> int:
    """Parse a plain decimal integer; raises ValueError for anything else."""
    if not _INTEGER_RE.fullmatch(token):
        raise ValueError(f"invalid integer {token!r}")
    return int(token)


class LineTokenizer:
    """Yields whitespace-split tokens of the meaningful lines of a stream.

    Blank lines and lines whose first non-blank character is ``#`` are
    skipped. Lines are read one at a time, so the stream is left positioned
    right after the last line handed out and a binary body can follow.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def next_line(self) -> Optional[List[str]]:
        """Return the next line's tokens, or None once the stream is exhausted."""
        while True:
            raw = self._stream.readline()
            if not raw:
                return None
            line = raw.strip()
            if not line or line.startswith(COMMENT_PREFIX):
                continue
            return line.decode("ascii", errors="replace").split()

    def require_line(self, what: str) -> List[str]:
        tokens = self.next_line()
        if tokens is None:
            raise UnexpectedEndOfInput(f"Missing {what} line")
        return tokens


@dataclass(frozen=True)
class Header:
    format_tag: FormatTag
    width: int
    height: int
    max_value: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0


def parse_header(
    tokenizer: LineTokenizer,
    accepted: Iterable[FormatTag],
    with_max_value: bool,
) -> Header:
    format_tag = read_magic(tokenizer, accepted)
    return read_geometry(tokenizer, format_tag, with_max_value)


def read_magic(tokenizer: LineTokenizer, accepted: Iterable[FormatTag]) -> FormatTag:
    return _parse_magic(tokenizer.require_line("magic number"), tuple(accepted))


def read_geometry(tokenizer: LineTokenizer, format_tag: FormatTag, with_max_value: bool) -> Header:
    """Parse the dimension line and, for greyscale, the max value line."""
    width, height = _parse_dimensions(tokenizer.require_line("dimension"))
    max_value = None
    if with_max_value:
        max_value = _parse_max_value(tokenizer.next_line())
    return Header(format_tag, width, height, max_value)


def format_header(header: Header) -> bytes:
    lines = [header.format_tag.value, f"{header.width} {header.height}"]
    if header.max_value is not None:
        lines.append(str(header.max_value))
    return ("\n".join(lines) + "\n").encode("ascii")


def _parse_magic(tokens: List[str], accepted: tuple) -> FormatTag:
    magic = " ".join(tokens)
    if len(tokens) == 1:
        for tag in accepted:
            if tokens[0] == tag.value:
                return tag
    names = "/".join(tag.value for tag in accepted)
    raise UnsupportedFormat(f"Unsupported magic number {magic!r}, expected {names}")


def _parse_dimensions(tokens: List[str]) -> tuple:
    if len(tokens) != 2:
        raise InvalidDimensions(f"Expected width and height, got {' '.join(tokens)!r}")
    try:
        width, height = (parse_int(token) for token in tokens)
    except ValueError as exc:
        raise InvalidDimensions(f"Invalid image dimensions {' '.join(tokens)!r}") from exc
    if width < 0 or height < 0:
        raise InvalidDimensions(f"Image dimensions must not be negative: {width}x{height}")
    return width, height


def _parse_max_value(tokens: Optional[List[str]]) -> int:
    if tokens is None:
        raise InvalidMaxValue("Missing max value line")
    if len(tokens) != 1:
        raise InvalidMaxValue(f"Expected a single max value, got {' '.join(tokens)!r}")
    try:
        value = parse_int(tokens[0])
    except ValueError as exc:
        raise InvalidMaxValue(f"Invalid max value {tokens[0]!r}") from exc
    if not 0 <= value <= MAX_GREY_VALUE:
        raise InvalidMaxValue(f"Max value {value} outside 0..{MAX_GREY_VALUE}")
    return value

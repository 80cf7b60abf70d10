import io

import pytest

from pnmgrid.codec import (
    FormatTag,
    InvalidDimensions,
    InvalidMaxValue,
    LineTokenizer,
    UnexpectedEndOfInput,
    UnsupportedFormat,
    parse_header,
)
from pnmgrid.codec.header import Header, format_header
from pnmgrid.codec.types import BITMAP_FORMATS, GREYSCALE_FORMATS


def tokenizer(data: bytes) -> LineTokenizer:
    return LineTokenizer(io.BytesIO(data))


def test_tokenizer_skips_blank_and_comment_lines():
    tok = tokenizer(b"# leading\n\n   \nP1\n   # indented comment\n3   2\n")
    assert tok.next_line() == ["P1"]
    assert tok.next_line() == ["3", "2"]
    assert tok.next_line() is None


def test_tokenizer_leaves_stream_after_consumed_line():
    tok = tokenizer(b"P5\n2 1\n255\n\x00\x0a")
    for _ in range(3):
        tok.next_line()
    assert tok.stream.read() == b"\x00\x0a"


def test_require_line_signals_end_of_input():
    with pytest.raises(UnexpectedEndOfInput):
        tokenizer(b"# only a comment\n").require_line("magic number")


def test_parse_bitmap_header():
    header = parse_header(tokenizer(b"P4\n# made by hand\n10 3\n"), BITMAP_FORMATS, False)
    assert header == Header(FormatTag.P4, 10, 3)
    assert not header.is_empty


def test_parse_greyscale_header():
    header = parse_header(tokenizer(b"P2\n4 5\n200\n"), GREYSCALE_FORMATS, True)
    assert header == Header(FormatTag.P2, 4, 5, 200)


@pytest.mark.parametrize("magic", [b"P3", b"P2", b"P1 extra", b"p1"])
def test_unsupported_magic(magic):
    with pytest.raises(UnsupportedFormat):
        parse_header(tokenizer(magic + b"\n1 1\n"), BITMAP_FORMATS, False)


@pytest.mark.parametrize("dims", [b"3", b"3 4 5", b"3 x", b"-1 2", b"2.5 2"])
def test_invalid_dimensions(dims):
    with pytest.raises(InvalidDimensions):
        parse_header(tokenizer(b"P1\n" + dims + b"\n"), BITMAP_FORMATS, False)


def test_missing_dimension_line():
    with pytest.raises(UnexpectedEndOfInput):
        parse_header(tokenizer(b"P1\n"), BITMAP_FORMATS, False)


@pytest.mark.parametrize("tail", [b"", b"abc\n", b"1 2\n", b"256\n", b"-3\n"])
def test_invalid_max_value(tail):
    with pytest.raises(InvalidMaxValue):
        parse_header(tokenizer(b"P5\n2 2\n" + tail), GREYSCALE_FORMATS, True)


def test_empty_header_flag():
    assert Header(FormatTag.P1, 0, 4).is_empty
    assert Header(FormatTag.P1, 4, 0).is_empty


def test_format_header():
    assert format_header(Header(FormatTag.P1, 3, 2)) == b"P1\n3 2\n"
    assert format_header(Header(FormatTag.P5, 3, 2, 255)) == b"P5\n3 2\n255\n"


@pytest.mark.parametrize("dims", [b"1_0 2", b"3 0x2", b"\xd9\xa3 2"])
def test_dimensions_must_be_plain_decimal(dims):
    with pytest.raises(InvalidDimensions):
        parse_header(tokenizer(b"P1\n" + dims + b"\n"), BITMAP_FORMATS, False)


def test_max_value_rejects_underscore_literal():
    with pytest.raises(InvalidMaxValue):
        parse_header(tokenizer(b"P2\n1 1\n2_55\n"), GREYSCALE_FORMATS, True)

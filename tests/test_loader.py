import io

import pytest

import pnmgrid
from pnmgrid.codec import BitmapGrid, FormatTag, GreymapGrid, PnmLoader, UnexpectedEndOfInput, UnsupportedFormat


def test_supported_formats():
    assert PnmLoader().supported_formats == (FormatTag.P1, FormatTag.P2, FormatTag.P4, FormatTag.P5)


@pytest.mark.parametrize(
    "data,grid_type",
    [
        (b"P1\n1 1\n1\n", BitmapGrid),
        (b"P4\n1 1\n\x80", BitmapGrid),
        (b"P2\n1 1\n255\n7\n", GreymapGrid),
        (b"P5\n1 1\n255\n\x07", GreymapGrid),
    ],
)
def test_decode_dispatches_on_magic(data, grid_type):
    grid = pnmgrid.decode(io.BytesIO(data))
    assert isinstance(grid, grid_type)


def test_decode_unknown_magic():
    with pytest.raises(UnsupportedFormat):
        pnmgrid.decode(io.BytesIO(b"P6\n1 1\n255\n\x00\x00\x00"))


def test_decode_empty_stream():
    with pytest.raises(UnexpectedEndOfInput):
        pnmgrid.decode(io.BytesIO(b""))


def test_encode_follows_format_tag(tmp_path):
    path = tmp_path / "image.pgm"
    path.write_bytes(b"P5\n2 1\n255\n\x10\x20")
    grid = pnmgrid.decode(path)
    grid.set_format_tag("P2")
    pnmgrid.encode(grid, path)
    assert path.read_bytes() == b"P2\n2 1\n255\n16 32\n"


def test_decode_accepts_string_path(tmp_path):
    path = tmp_path / "image.pbm"
    path.write_bytes(b"P1\n2 1\n0 1\n")
    grid = pnmgrid.decode(str(path))
    assert grid.rows == [[False, True]]

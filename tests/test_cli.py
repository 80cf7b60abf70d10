from PIL import Image

import pnmgrid
from pnmgrid.app.cli import main


def write(path, data: bytes):
    path.write_bytes(data)
    return str(path)


def test_info(tmp_path, capsys):
    path = write(tmp_path / "a.pgm", b"P2\n3 2\n15\n0 1 2\n3 4 5\n")
    assert main(["info", path]) == 0
    out = capsys.readouterr().out
    assert "Format: P2" in out
    assert "Size: 3x2" in out
    assert "Max value: 15" in out


def test_convert_with_transforms(tmp_path):
    source = write(tmp_path / "a.pbm", b"P4\n2 2\n\x80\x00")
    target = str(tmp_path / "b.pbm")
    assert main(["convert", source, target, "--format", "P1", "--invert", "--flip"]) == 0
    assert (tmp_path / "b.pbm").read_bytes() == b"P1\n2 2\n1 0\n1 1\n"


def test_convert_greyscale_to_bitmap(tmp_path):
    source = write(tmp_path / "a.pgm", b"P2\n2 1\n255\n10 200\n")
    target = str(tmp_path / "b.pbm")
    assert main(["convert", source, target, "--format", "P4", "--threshold", "50"]) == 0
    grid = pnmgrid.decode(target)
    assert grid.rows == [[True, False]]


def test_convert_rotate(tmp_path):
    source = write(tmp_path / "a.pgm", b"P2\n2 1\n255\n1 2\n")
    target = str(tmp_path / "b.pgm")
    assert main(["convert", source, target, "--rotate", "1"]) == 0
    grid = pnmgrid.decode(target)
    assert grid.size() == (1, 2)
    assert grid.rows == [[1], [2]]


def test_convert_bitmap_to_greyscale_fails(tmp_path, capsys):
    source = write(tmp_path / "a.pbm", b"P1\n1 1\n1\n")
    assert main(["convert", source, str(tmp_path / "b.pgm"), "--format", "P2"]) == 2
    assert "bitmap" in capsys.readouterr().err


def test_decode_error_exit_code(tmp_path, capsys):
    path = write(tmp_path / "bad.pbm", b"P1\nwide tall\n")
    assert main(["info", path]) == 2
    assert capsys.readouterr().err


def test_missing_file_exit_code(tmp_path):
    assert main(["info", str(tmp_path / "missing.pbm")]) == 2


def test_import_and_export(tmp_path):
    png = tmp_path / "in.png"
    img = Image.new("L", (2, 1))
    img.putdata([0, 255])
    img.save(png)
    pgm = str(tmp_path / "out.pgm")
    assert main(["import", str(png), pgm, "--ascii"]) == 0
    assert (tmp_path / "out.pgm").read_bytes() == b"P2\n2 1\n255\n0 255\n"

    pbm = str(tmp_path / "out.pbm")
    assert main(["import", str(png), pbm, "--bitmap", "--no-dither"]) == 0
    assert pnmgrid.decode(pbm).rows == [[True, False]]

    exported = tmp_path / "back.png"
    assert main(["export", pgm, str(exported)]) == 0
    with Image.open(exported) as result:
        assert result.size == (2, 1)
        assert list(result.getdata()) == [0, 255]

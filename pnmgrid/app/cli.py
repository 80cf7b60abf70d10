from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from ..codec import EncodeError, FormatTag, GreymapGrid, decode, encode
from ..codec.types import AnyGrid

logger = logging.getLogger(__name__)

FORMAT_CHOICES = [tag.value for tag in FormatTag]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pnmgrid",
        description="Read, transform and write Netpbm bitmap and greyscale images.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    info = commands.add_parser("info", help="Show format, size and max value of an image")
    info.add_argument("path", help="Netpbm file (.pbm/.pgm)")

    convert = commands.add_parser("convert", help="Transform an image and write it back out")
    convert.add_argument("source", help="Netpbm file to read")
    convert.add_argument("destination", help="File to write")
    convert.add_argument("--format", choices=FORMAT_CHOICES, help="Output magic number (default: same as input)")
    convert.add_argument("--invert", action="store_true", help="Invert pixel values")
    convert.add_argument("--flip", action="store_true", help="Mirror horizontally")
    convert.add_argument("--flop", action="store_true", help="Mirror vertically")
    convert.add_argument("--rotate", type=int, default=0, metavar="N", help="Rotate N quarter turns clockwise")
    convert.add_argument("--threshold", type=int, help="Greyscale to bitmap threshold (default: half of max value)")
    convert.add_argument("--max-value", type=int, help="Override the greyscale max value before writing")

    import_cmd = commands.add_parser("import", help="Convert a Pillow-readable image into Netpbm")
    import_cmd.add_argument("source", help="Image to read (.png/.jpg/...)")
    import_cmd.add_argument("destination", help="Netpbm file to write")
    import_cmd.add_argument("--bitmap", action="store_true", help="Write a 1-bit bitmap instead of greyscale")
    import_cmd.add_argument("--ascii", action="store_true", help="Write the plain (P1/P2) variant")
    import_cmd.add_argument("--no-dither", action="store_true", help="Threshold instead of dithering (bitmap only)")
    import_cmd.add_argument("--threshold", type=int, help="Fixed bitmap threshold (implies --no-dither)")

    export = commands.add_parser("export", help="Convert a Netpbm image into any Pillow-writable format")
    export.add_argument("source", help="Netpbm file to read")
    export.add_argument("destination", help="Image to write (.png/.bmp/...)")
    return parser.parse_args(argv)


def show_info(args: argparse.Namespace) -> int:
    grid = decode(args.path)
    width, height = grid.size()
    print(f"Format: {grid.format_tag.value}")
    print(f"Size: {width}x{height}")
    if isinstance(grid, GreymapGrid):
        print(f"Max value: {grid.max_value}")
    return 0


def apply_transforms(grid: AnyGrid, args: argparse.Namespace) -> AnyGrid:
    if args.invert:
        grid.invert()
    if args.flip:
        grid.flip()
    if args.flop:
        grid.flop()
    for _ in range(args.rotate % 4):
        grid.rotate()
    if args.max_value is not None:
        if not isinstance(grid, GreymapGrid):
            raise EncodeError("--max-value only applies to greyscale images")
        grid.set_max_value(args.max_value)
    return grid


def convert_format(grid: AnyGrid, target: Optional[str], threshold: Optional[int]) -> AnyGrid:
    if target is None:
        return grid
    tag = FormatTag.parse(target)
    if isinstance(grid, GreymapGrid) and tag.is_bitmap:
        return grid.to_bitmap(threshold=threshold, ascii=not tag.is_binary)
    if not isinstance(grid, GreymapGrid) and not tag.is_bitmap:
        raise EncodeError(f"Cannot write a bitmap image as {tag.value}")
    grid.set_format_tag(tag)
    return grid


def run_convert(args: argparse.Namespace) -> int:
    grid = apply_transforms(decode(args.source), args)
    grid = convert_format(grid, args.format, args.threshold)
    encode(grid, args.destination)
    logger.info("Wrote %s %dx%d to %s", grid.format_tag.value, grid.width, grid.height, args.destination)
    return 0


def run_import(args: argparse.Namespace) -> int:
    from ..rendering import image_to_grid, load_image

    img = load_image(args.source)
    grid = image_to_grid(
        img,
        bitmap=args.bitmap,
        dither=not args.no_dither,
        threshold=args.threshold,
    )
    if args.ascii:
        grid.set_format_tag(FormatTag.P1 if args.bitmap else FormatTag.P2)
    encode(grid, args.destination)
    logger.info("Imported %s as %s", args.source, grid.format_tag.value)
    return 0


def run_export(args: argparse.Namespace) -> int:
    from ..rendering import grid_to_image

    grid_to_image(decode(args.source)).save(args.destination)
    logger.info("Exported %s to %s", args.source, args.destination)
    return 0


COMMANDS = {
    "info": show_info,
    "convert": run_convert,
    "import": run_import,
    "export": run_export,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return COMMANDS[args.command](args)
    except (ValueError, OSError) as exc:
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

from typing import List, Optional

from PIL import Image, ImageOps

from ..codec.types import MAX_GREY_VALUE, AnyGrid, BitmapGrid, FormatTag, GreymapGrid

THRESHOLD_OFFSET = 13


def load_image(path: str) -> Image.Image:
    with Image.open(path) as img:
        img = ImageOps.exif_transpose(img)
        return img.copy()


def grid_to_image(grid: AnyGrid) -> Image.Image:
    """Render a grid as a Pillow image ("1" for bitmaps, "L" for greymaps)."""
    if isinstance(grid, BitmapGrid):
        img = Image.new("1", (grid.width, grid.height))
        img.putdata([0 if pix else 255 for row in grid.rows for pix in row])
        return img
    img = Image.new("L", (grid.width, grid.height))
    img.putdata([_scale(pix, grid.max_value) for row in grid.rows for pix in row])
    return img


def image_to_grid(
    img: Image.Image,
    bitmap: bool = False,
    dither: bool = True,
    threshold: Optional[int] = None,
) -> AnyGrid:
    width, height = img.size
    if bitmap:
        pixels = image_to_bw_pixels(img, dither, threshold)
        return BitmapGrid(width, height, _split_rows(pixels, width, height), FormatTag.P4)
    data = list(img.convert("L").getdata())
    return GreymapGrid(width, height, _split_rows(data, width, height), FormatTag.P5, max_value=MAX_GREY_VALUE)


def image_to_bw_pixels(img: Image.Image, dither: bool, threshold: Optional[int] = None) -> List[bool]:
    if dither and threshold is None:
        img = img.convert("1")
        return [p == 0 for p in img.getdata()]
    img = img.convert("L")
    data = list(img.getdata())
    if threshold is None:
        avg = sum(data) / len(data) if data else 0
        threshold = int(max(0, min(MAX_GREY_VALUE, avg - THRESHOLD_OFFSET)))
    return [p <= threshold for p in data]


def _scale(value: int, max_value: int) -> int:
    if max_value == MAX_GREY_VALUE:
        return min(value, MAX_GREY_VALUE)
    if max_value == 0:
        return 0
    return min(MAX_GREY_VALUE, value * MAX_GREY_VALUE // max_value)


def _split_rows(pixels: list, width: int, height: int) -> list:
    if not width or not height:
        return []
    return [list(pixels[y * width : (y + 1) * width]) for y in range(height)]

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Optional, Tuple, TypeVar, Union

MAX_GREY_VALUE = 255

T = TypeVar("T")


class FormatTag(str, Enum):
    """Netpbm magic numbers handled by the codecs."""

    P1 = "P1"
    P2 = "P2"
    P4 = "P4"
    P5 = "P5"

    @property
    def is_binary(self) -> bool:
        return self in (FormatTag.P4, FormatTag.P5)

    @property
    def is_bitmap(self) -> bool:
        return self in (FormatTag.P1, FormatTag.P4)

    @classmethod
    def parse(cls, value: Union[str, "FormatTag"]) -> "FormatTag":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown Netpbm format: {value!r}") from None


BITMAP_FORMATS = (FormatTag.P1, FormatTag.P4)
GREYSCALE_FORMATS = (FormatTag.P2, FormatTag.P5)


@dataclass
class ImageGrid(Generic[T]):
    """Rectangular, row-major pixel grid shared by both codecs.

    ``rows[y][x]`` holds the pixel at column ``x`` of row ``y``. A grid with a
    zero width or height holds no rows at all.
    """

    width: int
    height: int
    rows: List[List[T]]
    format_tag: FormatTag

    def __post_init__(self) -> None:
        self.format_tag = FormatTag.parse(self.format_tag)
        self.validate()

    def validate(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Width and height must not be negative")
        expected = self.height if self.width and self.height else 0
        if len(self.rows) != expected:
            raise ValueError(f"Expected {expected} rows, got {len(self.rows)}")
        for row in self.rows:
            if len(row) != self.width:
                raise ValueError(f"Row length {len(row)} does not match width {self.width}")

    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def at(self, x: int, y: int) -> T:
        self._check_bounds(x, y)
        return self.rows[y][x]

    def set(self, x: int, y: int, value: T) -> None:
        self._check_bounds(x, y)
        self.rows[y][x] = value

    def set_format_tag(self, tag: Union[str, FormatTag]) -> None:
        self.format_tag = FormatTag.parse(tag)

    def invert(self) -> None:
        for row in self.rows:
            for x, value in enumerate(row):
                row[x] = self._inverted(value)

    def flip(self) -> None:
        """Mirror the grid horizontally."""
        for row in self.rows:
            row.reverse()

    def flop(self) -> None:
        """Mirror the grid vertically."""
        self.rows.reverse()

    def rotate(self) -> None:
        """Rotate the grid 90 degrees clockwise."""
        height = self.height
        rotated: List[List[T]] = []
        if self.rows:
            for x in range(self.width):
                rotated.append([self.rows[height - 1 - i][x] for i in range(height)])
        self.rows = rotated
        self.width, self.height = self.height, self.width

    def copy(self) -> "ImageGrid[T]":
        raise NotImplementedError

    def _inverted(self, value: T) -> T:
        raise NotImplementedError

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")


@dataclass
class BitmapGrid(ImageGrid[bool]):
    """1-bit grid; True is a black (set) pixel."""

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.format_tag.is_bitmap:
            raise ValueError(f"{self.format_tag.value} is not a bitmap format")

    def set_format_tag(self, tag: Union[str, FormatTag]) -> None:
        tag = FormatTag.parse(tag)
        if not tag.is_bitmap:
            raise ValueError(f"{tag.value} is not a bitmap format")
        self.format_tag = tag

    def set(self, x: int, y: int, value: bool) -> None:
        super().set(x, y, bool(value))

    def copy(self) -> "BitmapGrid":
        return BitmapGrid(self.width, self.height, [list(row) for row in self.rows], self.format_tag)

    def _inverted(self, value: bool) -> bool:
        return not value


@dataclass
class GreymapGrid(ImageGrid[int]):
    """8-bit grid with a declared maximum intensity."""

    max_value: int = MAX_GREY_VALUE

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.format_tag.is_bitmap:
            raise ValueError(f"{self.format_tag.value} is not a greyscale format")
        self.set_max_value(self.max_value)

    def set_format_tag(self, tag: Union[str, FormatTag]) -> None:
        tag = FormatTag.parse(tag)
        if tag.is_bitmap:
            raise ValueError(f"{tag.value} is not a greyscale format")
        self.format_tag = tag

    def set_max_value(self, value: int) -> None:
        if not 0 <= value <= MAX_GREY_VALUE:
            raise ValueError(f"Max value must be within 0..{MAX_GREY_VALUE}, got {value}")
        self.max_value = value

    def copy(self) -> "GreymapGrid":
        return GreymapGrid(
            self.width,
            self.height,
            [list(row) for row in self.rows],
            self.format_tag,
            max_value=self.max_value,
        )

    def to_bitmap(self, threshold: Optional[int] = None, ascii: bool = False) -> BitmapGrid:
        """Threshold into a new bitmap; pixels darker than ``threshold`` turn black."""
        if threshold is None:
            threshold = (self.max_value + 1) // 2
        rows = [[value < threshold for value in row] for row in self.rows]
        tag = FormatTag.P1 if ascii else FormatTag.P4
        return BitmapGrid(self.width, self.height, rows, tag)

    def _inverted(self, value: int) -> int:
        return (self.max_value - value) & 0xFF


AnyGrid = Union[BitmapGrid, GreymapGrid]

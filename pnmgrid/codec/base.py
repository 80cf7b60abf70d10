from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Tuple, Union

from .errors import EncodeError
from .header import Header, LineTokenizer, format_header, read_geometry, read_magic
from .types import AnyGrid, FormatTag

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", BinaryIO]


@contextmanager
def open_stream(target: Source, mode: str) -> Iterator[BinaryIO]:
    """Yield a binary stream for ``target``.

    Paths are opened here and closed on exit; file objects belong to the
    caller and are left open.
    """
    if hasattr(target, "read") or hasattr(target, "write"):
        yield target  # type: ignore[misc]
        return
    with open(target, mode) as handle:
        yield handle


class PnmCodec:
    """Shared decode/encode flow; subclasses supply the pixel body handling."""

    formats: Tuple[FormatTag, ...] = ()
    has_max_value = False

    def decode(self, source: Source) -> AnyGrid:
        with open_stream(source, "rb") as stream:
            tokenizer = LineTokenizer(stream)
            return self.read(tokenizer, read_magic(tokenizer, self.formats))

    def read(self, tokenizer: LineTokenizer, format_tag: FormatTag) -> AnyGrid:
        """Decode the rest of an image whose magic number was already consumed."""
        header = read_geometry(tokenizer, format_tag, self.has_max_value)
        if header.is_empty:
            grid = self._empty_grid(header)
        else:
            grid = self._decode_body(tokenizer, header)
        logger.debug("Decoded %s image %dx%d", format_tag.value, header.width, header.height)
        return grid

    def encode(self, grid: AnyGrid, destination: Source) -> None:
        if grid.format_tag not in self.formats:
            names = "/".join(tag.value for tag in self.formats)
            raise EncodeError(f"Cannot write {grid.format_tag.value} with a {names} codec")
        grid.validate()
        header = self._header_for(grid)
        body = self._encode_body(grid)
        with open_stream(destination, "wb") as stream:
            stream.write(format_header(header))
            stream.write(body)
            stream.flush()
        logger.debug("Encoded %s image %dx%d", header.format_tag.value, header.width, header.height)

    def _header_for(self, grid: AnyGrid) -> Header:
        return Header(grid.format_tag, grid.width, grid.height)

    def _empty_grid(self, header: Header) -> AnyGrid:
        raise NotImplementedError

    def _decode_body(self, tokenizer: LineTokenizer, header: Header) -> AnyGrid:
        raise NotImplementedError

    def _encode_body(self, grid: AnyGrid) -> bytes:
        raise NotImplementedError

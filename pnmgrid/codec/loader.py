from __future__ import annotations

from typing import Dict, Optional

from .base import PnmCodec, Source, open_stream
from .bitmap import BitmapCodec
from .errors import EncodeError
from .greyscale import GreyscaleCodec
from .header import LineTokenizer, read_magic
from .types import AnyGrid, FormatTag


class PnmLoader:
    """Picks the codec for an image from its magic number."""

    def __init__(self, codecs: Optional[Dict[FormatTag, PnmCodec]] = None) -> None:
        if codecs is None:
            codecs = {}
            for codec in (BitmapCodec(), GreyscaleCodec()):
                for tag in codec.formats:
                    codecs[tag] = codec
        self._codecs = codecs

    @property
    def supported_formats(self) -> tuple:
        return tuple(sorted(self._codecs, key=lambda tag: tag.value))

    def codec_for(self, tag: FormatTag) -> PnmCodec:
        codec = self._codecs.get(tag)
        if codec is None:
            raise EncodeError(f"No codec registered for {tag.value}")
        return codec

    def decode(self, source: Source) -> AnyGrid:
        with open_stream(source, "rb") as stream:
            tokenizer = LineTokenizer(stream)
            tag = read_magic(tokenizer, self.supported_formats)
            return self._codecs[tag].read(tokenizer, tag)

    def encode(self, grid: AnyGrid, destination: Source) -> None:
        self.codec_for(grid.format_tag).encode(grid, destination)


def decode(source: Source) -> AnyGrid:
    return PnmLoader().decode(source)


def encode(grid: AnyGrid, destination: Source) -> None:
    PnmLoader().encode(grid, destination)

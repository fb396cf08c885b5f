"""Lazy input side: line source and subtitle record producer."""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterator

from .config import READ_BUFFER_SIZE
from .errors import LineTooLongError, ParseError, ReadError, SubconvertError, UnsupportedFormatError
from .models import Subtitle, SubtitleFormat
from .srt import iter_blocks, parse_srt_block
from .txt import parse_txt_line
from .utils import NTSC_FILM, FrameRate

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


class LineSource:
    """Pulls one decoded line at a time from a binary stream.

    Each pull reads at most ``max_line_length + 1`` bytes, so a consumer that
    stops early leaves the stream just past the last line it took. The
    stream itself belongs to the caller and is never closed here.
    """

    def __init__(self, stream: BinaryIO, max_line_length: int = READ_BUFFER_SIZE) -> None:
        self._stream = stream
        self.max_line_length = max_line_length
        self.line_number = 0
        self._closed = False

    def __iter__(self) -> "LineSource":
        return self

    def __next__(self) -> str:
        if self._closed:
            raise StopIteration
        try:
            raw = self._stream.readline(self.max_line_length + 1)
        except OSError as exc:
            self._closed = True
            raise ReadError(f"read failed after line {self.line_number}: {exc}", self.line_number + 1) from exc

        if not raw:
            self._closed = True
            raise StopIteration

        if len(raw) > self.max_line_length and not raw.endswith(b"\n"):
            self._closed = True
            error = LineTooLongError(self.max_line_length)
            raise ReadError(f"line {self.line_number + 1}: {error}", self.line_number + 1) from error

        self.line_number += 1
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            self._closed = True
            raise ReadError(f"line {self.line_number} is not valid UTF-8: {exc}", self.line_number) from exc

        if self.line_number == 1 and line.startswith(_BOM):
            line = line[1:]
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        return line

    def close(self) -> None:
        """Stop pulling; later pulls report end of stream."""

        self._closed = True

    def __enter__(self) -> "LineSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _txt_subtitles(source: LineSource, rate: FrameRate) -> Iterator[Subtitle]:
    for line in source:
        try:
            subtitle = parse_txt_line(line, rate)
        except SubconvertError as exc:
            raise ParseError(
                f"error parsing txt subtitle at line {source.line_number}: {exc}",
                source.line_number,
            ) from exc
        yield subtitle


def _srt_subtitles(source: LineSource) -> Iterator[Subtitle]:
    for block in iter_blocks(source):
        try:
            subtitle = parse_srt_block(block)
        except SubconvertError as exc:
            raise ParseError(
                f"error parsing srt subtitle ending at line {source.line_number}: {exc}",
                source.line_number,
            ) from exc
        yield subtitle


def iter_subtitles(
    source: LineSource,
    fmt: SubtitleFormat,
    rate: FrameRate = NTSC_FILM,
) -> Iterator[Subtitle]:
    """Yield subtitles from ``source`` one record at a time.

    Closing the returned generator closes ``source``.

    Raises:
        ReadError: If the line source fails.
        ParseError: If a record is malformed or ``fmt`` cannot be read.
    """

    try:
        if fmt is SubtitleFormat.TXT:
            yield from _txt_subtitles(source, rate)
        elif fmt is SubtitleFormat.SRT:
            yield from _srt_subtitles(source)
        else:
            error = UnsupportedFormatError("input", fmt)
            raise ParseError(f"error parsing {fmt} subtitle: {error}") from error
    finally:
        logger.debug("Line source closed after %d lines", source.line_number)
        source.close()

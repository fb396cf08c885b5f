"""Serialize subtitles into an output stream."""

from __future__ import annotations

from typing import BinaryIO

from .errors import UnsupportedFormatError, WriteError
from .models import Subtitle, SubtitleFormat
from .srt import format_srt_subtitle
from .txt import format_txt_subtitle
from .utils import NTSC_FILM, FrameRate


class SubtitleWriter:
    """Writes subtitles of one format to a binary sink.

    Holds the sequence counter for the run: SRT blocks are numbered from 1
    and the counter only moves after the sink accepted the whole block.
    """

    def __init__(self, sink: BinaryIO, fmt: SubtitleFormat, rate: FrameRate = NTSC_FILM) -> None:
        self._sink = sink
        self.format = fmt
        self.rate = rate
        self._emitted = 0

    @property
    def emitted(self) -> int:
        """Number of subtitles written so far."""

        return self._emitted

    def render(self, subtitle: Subtitle) -> str:
        """Return the text for ``subtitle`` as the next record of the run."""

        number = self._emitted + 1
        if self.format is SubtitleFormat.SRT:
            return format_srt_subtitle(subtitle, number)
        if self.format is SubtitleFormat.TXT:
            return format_txt_subtitle(subtitle, self.rate)
        raise UnsupportedFormatError("output", self.format)

    def write(self, subtitle: Subtitle) -> None:
        """Write one subtitle.

        Raises:
            WriteError: If the output format is unsupported (nothing is
                written) or the sink fails. Never retried.
        """

        ordinal = self._emitted + 1
        try:
            data = self.render(subtitle).encode("utf-8")
        except UnsupportedFormatError as exc:
            raise WriteError(f"failed to write subtitle {ordinal}: {exc}", ordinal) from exc
        try:
            self._sink.write(data)
        except OSError as exc:
            raise WriteError(f"failed to write subtitle {ordinal}: {exc}", ordinal) from exc
        self._emitted = ordinal

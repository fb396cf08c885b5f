"""Run configuration and stream helpers for the command line."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional

from .models import SubtitleFormat
from .utils import NTSC_FILM, FrameRate

READ_BUFFER_SIZE = 256 * 1024
WRITE_BUFFER_SIZE = 256 * 1024

STDIO_PATH = "-"


@dataclass(slots=True)
class ConvertConfig:
    """Settings for a single conversion run."""

    input_path: str = ""
    input_format: SubtitleFormat = SubtitleFormat.TXT
    output_path: str = STDIO_PATH
    output_format: SubtitleFormat = SubtitleFormat.SRT
    frame_rate: FrameRate = NTSC_FILM
    max_line_length: int = READ_BUFFER_SIZE

    @classmethod
    def resolve(
        cls,
        input_path: Optional[str] = None,
        output_path: Optional[str] = None,
        input_format: Optional[str] = None,
        output_format: Optional[str] = None,
        frame_rate: Optional[str] = None,
    ) -> "ConvertConfig":
        """Build a config from raw option values.

        Formats given by name win; otherwise they are inferred from the path
        suffix, falling back to the defaults in :data:`DEFAULT_CONFIG`.
        An explicitly named but unrecognised format stays ``UNKNOWN`` so the
        run fails with an unsupported format error.
        """

        in_path = input_path or DEFAULT_CONFIG.input_path
        out_path = output_path or DEFAULT_CONFIG.output_path
        return cls(
            input_path=in_path,
            input_format=_pick_format(input_format, in_path, DEFAULT_CONFIG.input_format),
            output_path=out_path,
            output_format=_pick_format(output_format, out_path, DEFAULT_CONFIG.output_format),
            frame_rate=FrameRate.parse(frame_rate) if frame_rate else DEFAULT_CONFIG.frame_rate,
            max_line_length=DEFAULT_CONFIG.max_line_length,
        )


DEFAULT_CONFIG = ConvertConfig()


def _pick_format(name: Optional[str], path: str, default: SubtitleFormat) -> SubtitleFormat:
    if name:
        return SubtitleFormat.from_name(name)
    inferred = SubtitleFormat.from_path(path) if path != STDIO_PATH else SubtitleFormat.UNKNOWN
    return inferred if inferred is not SubtitleFormat.UNKNOWN else default


def _is_stdio(path: str) -> bool:
    return path in ("", STDIO_PATH)


@contextmanager
def open_input(path: str) -> Iterator[BinaryIO]:
    """Open ``path`` for binary reading; empty or ``-`` means stdin."""

    if _is_stdio(path):
        yield sys.stdin.buffer
        return
    with open(path, "rb") as fh:
        yield fh


@contextmanager
def open_output(path: str, buffer_size: int = WRITE_BUFFER_SIZE) -> Iterator[BinaryIO]:
    """Open ``path`` for buffered binary writing; empty or ``-`` means stdout.

    The buffer is flushed on exit, including when the body raised, so output
    written before a failure stays in place.
    """

    if _is_stdio(path):
        writer = sys.stdout.buffer
        try:
            yield writer
        finally:
            writer.flush()
        return
    with open(path, "wb", buffering=buffer_size) as fh:
        yield fh

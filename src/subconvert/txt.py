"""Frame based ``{start}{end}text`` subtitles (MicroDVD style)."""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Tuple

from .errors import FrameFieldError, MissingTimingFieldError
from .models import Subtitle
from .utils import NTSC_FILM, FrameRate, duration_to_frames, frames_to_duration

LINE_SEPARATOR = "|"
_FRAME_PATTERN = re.compile(r"[+-]?[0-9]+")


def _bracketed(line: str, field: str, offset: int) -> Tuple[str, int]:
    """Return the text of the next ``{...}`` pair at or after ``offset``."""

    opening = line.find("{", offset)
    if opening < 0:
        raise MissingTimingFieldError(field)
    closing = line.find("}", opening + 1)
    if closing < 0:
        raise MissingTimingFieldError(field)
    return line[opening + 1 : closing], closing + 1


def _frame(raw: str, field: str, rate: FrameRate) -> timedelta:
    if not _FRAME_PATTERN.fullmatch(raw):
        raise FrameFieldError(field, raw)
    try:
        return frames_to_duration(int(raw), rate)
    except OverflowError as exc:
        raise FrameFieldError(field, raw, "frame number out of range") from exc


def parse_txt_line(line: str, rate: FrameRate = NTSC_FILM) -> Subtitle:
    """Parse one ``{123}{164}text|text`` line.

    Raises:
        MissingTimingFieldError: If either ``{...}`` pair is absent.
        FrameFieldError: If a frame number is not an integer or is too
            large to be held as a duration.
    """

    raw_start, offset = _bracketed(line, "start", 0)
    raw_end, offset = _bracketed(line, "end", offset)
    start = _frame(raw_start, "start", rate)
    end = _frame(raw_end, "end", rate)

    payload = line[offset:]
    lines = tuple(payload.split(LINE_SEPARATOR)) if payload else ()

    return Subtitle(start=start, end=end, lines=lines)


def format_txt_subtitle(subtitle: Subtitle, rate: FrameRate = NTSC_FILM) -> str:
    """Render a subtitle as a newline terminated ``{start}{end}text`` line."""

    start = duration_to_frames(subtitle.start, rate)
    end = duration_to_frames(subtitle.end, rate)
    return f"{{{start}}}{{{end}}}{LINE_SEPARATOR.join(subtitle.lines)}\n"

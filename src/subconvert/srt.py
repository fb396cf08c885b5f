"""SRT (SubRip) subtitle blocks."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence

from .errors import MissingTimingFieldError, SrtBlockError
from .models import Subtitle
from .utils import TimecodeError, format_timecode, parse_timecode

ARROW = " --> "


def iter_blocks(lines: Iterable[str]) -> Iterator[List[str]]:
    """Group lines into blank-line separated blocks, one block at a time."""

    chunk: list[str] = []
    for line in lines:
        if line.strip() == "":
            if chunk:
                yield chunk
                chunk = []
            continue
        chunk.append(line)
    if chunk:
        yield chunk


def parse_srt_block(block: Sequence[str]) -> Subtitle:
    """Parse one SRT block (index, timing line, text lines)."""

    try:
        index = int(block[0])
    except ValueError as exc:
        raise SrtBlockError(f"Invalid SRT index line: {block[0]!r}") from exc
    if len(block) < 2:
        raise MissingTimingFieldError("start")
    times = block[1]
    if "-->" not in times:
        raise SrtBlockError(f"Invalid timecode line for index {index}: {times!r}")
    start_text, _, end_text = times.partition("-->")
    try:
        start = parse_timecode(start_text).to_duration()
        end = parse_timecode(end_text).to_duration()
    except TimecodeError as exc:
        raise SrtBlockError(f"{exc} (index {index})") from exc
    except OverflowError as exc:
        raise SrtBlockError(f"Timecode out of range for index {index}: {times!r}") from exc
    return Subtitle(start=start, end=end, lines=tuple(block[2:]))


def format_srt_subtitle(subtitle: Subtitle, number: int) -> str:
    """Render one numbered SRT block including its trailing blank line."""

    parts = [
        str(number),
        format_timecode(subtitle.start) + ARROW + format_timecode(subtitle.end),
        *subtitle.lines,
    ]
    return "\n".join(parts) + "\n\n"

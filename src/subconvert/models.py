"""Data models shared by the readers, writers and pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Tuple


class SubtitleFormat(Enum):
    """On-disk subtitle encodings."""

    UNKNOWN = "unknown"
    TXT = "txt"  # {start}{end}line|line
    SRT = "srt"

    @classmethod
    def from_name(cls, name: str | None) -> "SubtitleFormat":
        """Look up a format by name; unrecognised names map to ``UNKNOWN``."""

        if not name:
            return cls.UNKNOWN
        return _FORMAT_ALIASES.get(name.strip().lower().lstrip("."), cls.UNKNOWN)

    @classmethod
    def from_path(cls, path: str | Path | None) -> "SubtitleFormat":
        """Infer a format from a file suffix."""

        if not path:
            return cls.UNKNOWN
        suffix = Path(path).suffix
        return cls.from_name(suffix) if suffix else cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


_FORMAT_ALIASES = {
    "txt": SubtitleFormat.TXT,
    "sub": SubtitleFormat.TXT,
    "microdvd": SubtitleFormat.TXT,
    "srt": SubtitleFormat.SRT,
    "subrip": SubtitleFormat.SRT,
}


@dataclass(frozen=True, slots=True)
class Subtitle:
    """A single subtitle: display interval plus its lines."""

    start: timedelta
    end: timedelta
    lines: Tuple[str, ...] = field(default_factory=tuple)

"""Timing helpers shared by the subtitle readers and writers.

Durations are carried as :class:`datetime.timedelta` and converted to and
from the two on-disk representations with integer arithmetic only.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta

_TIME_PATTERN = re.compile(
    r"^(?P<hour>\d{2,}):(?P<minute>\d{2}):(?P<second>\d{2})[,.](?P<millis>\d{3})$"
)

_MICROSECOND = timedelta(microseconds=1)


class TimecodeError(ValueError):
    """Raised when a timecode string cannot be parsed."""


@dataclass(frozen=True, slots=True)
class FrameRate:
    """Frame rate expressed as ``numerator / denominator`` frames per second.

    ``scale`` converts seconds to the millisecond unit used by the codec.
    """

    numerator: int = 24000
    denominator: int = 1001
    scale: int = 1000

    def __post_init__(self) -> None:
        if self.numerator <= 0 or self.denominator <= 0 or self.scale <= 0:
            raise ValueError(f"Frame rate terms must be positive: {self}")

    @classmethod
    def parse(cls, value: str) -> "FrameRate":
        """Parse ``"N/D"`` or ``"N"`` into a :class:`FrameRate`."""

        text = value.strip()
        numerator, sep, denominator = text.partition("/")
        try:
            num = int(numerator)
            den = int(denominator) if sep else 1
        except ValueError as exc:
            raise ValueError(f"Invalid frame rate: {value!r}") from exc
        return cls(numerator=num, denominator=den)

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


NTSC_FILM = FrameRate()


def _div_trunc(dividend: int, divisor: int) -> int:
    # Floor division rounds toward negative infinity; frames and durations
    # truncate toward zero.
    quotient = abs(dividend) // divisor
    return quotient if dividend >= 0 else -quotient


def duration_to_milliseconds(duration: timedelta) -> int:
    """Return the whole milliseconds in ``duration``, truncated toward zero."""

    return _div_trunc(duration // _MICROSECOND, 1000)


def frames_to_duration(frame: int, rate: FrameRate = NTSC_FILM) -> timedelta:
    """Convert a frame number into the duration at which it is displayed."""

    millis = _div_trunc(frame * rate.denominator * rate.scale, rate.numerator)
    return timedelta(milliseconds=millis)


def duration_to_frames(duration: timedelta, rate: FrameRate = NTSC_FILM) -> int:
    """Convert a duration to the nearest frame number, rounding half up."""

    divisor = rate.denominator * rate.scale
    return _div_trunc(
        duration_to_milliseconds(duration) * rate.numerator + divisor // 2,
        divisor,
    )


@dataclass(slots=True)
class Timecode:
    """Represents a parsed timecode."""

    hours: int
    minutes: int
    seconds: int
    milliseconds: int = 0

    @classmethod
    def from_duration(cls, duration: timedelta) -> "Timecode":
        """Split a non-negative duration into clock fields."""

        millis = duration_to_milliseconds(duration)
        if millis < 0:
            raise TimecodeError(f"Negative duration has no timecode: {duration}")
        hours, millis = divmod(millis, 3_600_000)
        minutes, millis = divmod(millis, 60_000)
        seconds, millis = divmod(millis, 1000)
        return cls(hours=hours, minutes=minutes, seconds=seconds, milliseconds=millis)

    def to_duration(self) -> timedelta:
        """Convert the timecode into :class:`datetime.timedelta`."""

        return timedelta(
            milliseconds=self.hours * 3_600_000
            + self.minutes * 60_000
            + self.seconds * 1000
            + self.milliseconds
        )

    def to_string(self) -> str:
        """Render the timecode as ``HH:MM:SS,mmm`` string."""

        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d},{self.milliseconds:03d}"


def format_timecode(duration: timedelta) -> str:
    """Render ``duration`` as an SRT timestamp.

    Negative durations only come from negative frame numbers in the input;
    they are written as ``-`` followed by the magnitude.
    """

    if duration < timedelta(0):
        return "-" + Timecode.from_duration(-duration).to_string()
    return Timecode.from_duration(duration).to_string()


def parse_timecode(value: str) -> Timecode:
    """Parse a timecode string into a :class:`Timecode` instance.

    Args:
        value: ``HH:MM:SS,mmm`` text. A ``.`` is accepted in place of the comma.

    Raises:
        TimecodeError: If the value cannot be parsed as a timecode.
    """

    match = _TIME_PATTERN.match(value.strip())
    if not match:
        raise TimecodeError(f"Invalid timecode: {value!r}")

    minutes = int(match.group("minute"))
    seconds = int(match.group("second"))
    if minutes > 59 or seconds > 59:
        raise TimecodeError(f"Timecode field out of range: {value!r}")

    return Timecode(
        hours=int(match.group("hour")),
        minutes=minutes,
        seconds=seconds,
        milliseconds=int(match.group("millis")),
    )

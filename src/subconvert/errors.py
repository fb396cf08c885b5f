"""Custom exceptions for subconvert."""

from __future__ import annotations

from typing import Optional


class SubconvertError(Exception):
    """Base exception for subconvert."""

    pass


class MissingTimingFieldError(SubconvertError):
    """A record has no ``{...}`` timing field or no timing line."""

    def __init__(self, field: str) -> None:
        super().__init__(f"missing {field} timing field")
        self.field = field


class FrameFieldError(SubconvertError):
    """A frame-text timing field is not an integer or is out of range."""

    def __init__(self, field: str, raw: str, reason: str = "invalid integer") -> None:
        super().__init__(f"failed to parse {field} frame: {reason} {raw!r}")
        self.field = field
        self.raw = raw


class SrtBlockError(SubconvertError):
    """An SRT block is malformed."""

    pass


class UnsupportedFormatError(SubconvertError):
    """The requested input or output format has no reader or writer."""

    def __init__(self, direction: str, fmt: object) -> None:
        super().__init__(f"{direction} format not supported: {fmt}")
        self.direction = direction
        self.format = fmt


class LineTooLongError(SubconvertError):
    """An input line exceeds the line source buffer."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"input line exceeds {limit} bytes")
        self.limit = limit


class ReadError(SubconvertError):
    """Reading from the input stream failed."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class ParseError(SubconvertError):
    """An input record could not be turned into a subtitle."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class WriteError(SubconvertError):
    """Writing a subtitle to the output stream failed."""

    def __init__(self, message: str, ordinal: int) -> None:
        super().__init__(message)
        self.ordinal = ordinal


class ConversionCancelled(SubconvertError):
    """The run was cancelled before it reached the end of the input."""

    pass

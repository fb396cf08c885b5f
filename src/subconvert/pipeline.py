"""Streaming conversion: read, parse and write one subtitle at a time."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Optional, Protocol

from .config import READ_BUFFER_SIZE
from .errors import ConversionCancelled, ParseError, ReadError, SubconvertError, WriteError
from .models import SubtitleFormat
from .reader import LineSource, iter_subtitles
from .utils import NTSC_FILM, FrameRate
from .writer import SubtitleWriter

logger = logging.getLogger(__name__)


class CancelSignal(Protocol):
    """Anything exposing ``is_set()``, e.g. :class:`threading.Event`."""

    def is_set(self) -> bool: ...


class PipelineState(Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    STOPPED_OK = "stopped-ok"
    STOPPED_ERROR = "stopped-error"
    CANCELLED = "cancelled"


class Stage(Enum):
    READ = "read"
    PARSE = "parse"
    WRITE = "write"


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Terminal outcome of a run."""

    state: PipelineState
    emitted: int
    stage: Optional[Stage] = None
    error: Optional[SubconvertError] = None

    @property
    def ok(self) -> bool:
        return self.state is PipelineState.STOPPED_OK

    def raise_for_status(self) -> None:
        """Re-raise the error that ended the run, if any."""

        if self.error is not None:
            raise self.error


def _stage_of(exc: SubconvertError) -> Stage:
    if isinstance(exc, ReadError):
        return Stage.READ
    if isinstance(exc, WriteError):
        return Stage.WRITE
    return Stage.PARSE


def convert(
    source: BinaryIO,
    sink: BinaryIO,
    input_format: SubtitleFormat,
    output_format: SubtitleFormat,
    cancel: Optional[CancelSignal] = None,
    *,
    rate: FrameRate = NTSC_FILM,
    max_line_length: int = READ_BUFFER_SIZE,
) -> ConversionResult:
    """Convert subtitles from ``source`` to ``sink`` in a single forward pass.

    Cancellation is checked once per record, after it was parsed and before it
    is written, so a cancelled run never emits a partial record. The first
    read, parse or write failure ends the run; output already written is left
    in the sink.
    """

    writer = SubtitleWriter(sink, output_format, rate)
    records = iter_subtitles(LineSource(source, max_line_length), input_format, rate)
    state = PipelineState.IDLE
    logger.debug("Converting %s -> %s at %s fps", input_format, output_format, rate)

    try:
        state = PipelineState.STREAMING
        for subtitle in records:
            if cancel is not None and cancel.is_set():
                state = PipelineState.CANCELLED
                logger.warning("Conversion cancelled after %d subtitles", writer.emitted)
                return ConversionResult(
                    state=state,
                    emitted=writer.emitted,
                    error=ConversionCancelled(f"cancelled after {writer.emitted} subtitles"),
                )
            writer.write(subtitle)
        state = PipelineState.STOPPED_OK
    except (ReadError, ParseError, WriteError) as exc:
        state = PipelineState.STOPPED_ERROR
        stage = _stage_of(exc)
        logger.warning("Conversion stopped at %s stage after %d subtitles: %s", stage.value, writer.emitted, exc)
        return ConversionResult(state=state, emitted=writer.emitted, stage=stage, error=exc)
    finally:
        records.close()
        logger.debug("Pipeline reached state %s", state.value)

    logger.info("Converted %d subtitles", writer.emitted)
    return ConversionResult(state=state, emitted=writer.emitted)

"""Command line interface for subconvert."""

from __future__ import annotations

import logging
import signal
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer

from .config import ConvertConfig, open_input, open_output
from .pipeline import PipelineState, convert

logger = logging.getLogger(__name__)

app = typer.Typer(help="Stream subtitles from one file format to another")


@contextmanager
def _interrupt_event() -> Iterator[threading.Event]:
    """Set the yielded event on Ctrl-C instead of raising KeyboardInterrupt."""

    event = threading.Event()
    if threading.current_thread() is not threading.main_thread():
        yield event
        return

    def _handler(signum, frame) -> None:
        logger.debug("Received signal %s", signum)
        event.set()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield event
    finally:
        signal.signal(signal.SIGINT, previous)


@app.command()
def main(
    input_path: Optional[str] = typer.Argument(None, metavar="[INPUT]", help="Input file; '-' or empty reads stdin"),
    output: str = typer.Option("-", "--output", "-o", help="Output file; '-' writes stdout"),
    input_format: Optional[str] = typer.Option(None, "--from", "-f", help="Input format (txt, srt)"),
    output_format: Optional[str] = typer.Option(None, "--to", "-t", help="Output format (txt, srt)"),
    frame_rate: str = typer.Option("24000/1001", "--frame-rate", help="Frame rate of frame based subtitles, N/D"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
) -> None:
    """Convert a subtitle stream, e.g. ``{100}{150}text`` lines into SRT."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )

    try:
        config = ConvertConfig.resolve(input_path, output, input_format, output_format, frame_rate)
    except ValueError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if config.input_path not in ("", "-") and not Path(config.input_path).is_file():
        typer.secho(f"Input file not found: {config.input_path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        with open_input(config.input_path) as source, open_output(config.output_path) as sink, _interrupt_event() as cancel:
            result = convert(
                source,
                sink,
                config.input_format,
                config.output_format,
                cancel,
                rate=config.frame_rate,
                max_line_length=config.max_line_length,
            )
    except OSError as exc:
        typer.secho(f"processing failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if result.state is PipelineState.CANCELLED:
        typer.secho(f"Interrupted after {result.emitted} subtitles", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=130)
    if not result.ok:
        typer.secho(f"processing failed: {result.error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    logger.info("Wrote %d subtitles to %s", result.emitted, config.output_path)


if __name__ == "__main__":
    app()

"""vtt2srt preview command — print the SRT for one file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from vtt2srt.subtitles.converter import vtt_to_srt
from vtt2srt.utils.console import console
from vtt2srt.utils.inputs import read_input


def preview(
    subtitle_file: Annotated[
        Path,
        typer.Argument(help="Path to a WebVTT file."),
    ],
) -> None:
    """Print the converted SRT to stdout without writing any file."""
    raw = read_input(subtitle_file)
    if raw.read_error is not None:
        console.print(f"[red]Cannot read:[/red] {subtitle_file}")
        raise typer.Exit(1)

    typer.echo(vtt_to_srt(raw.text or ""))

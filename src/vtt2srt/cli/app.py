"""vtt2srt CLI entry point."""

from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from vtt2srt import __version__
from vtt2srt.cli.convert import convert
from vtt2srt.cli.preview import preview

app = typer.Typer(
    name="vtt2srt",
    help="vtt2srt — Batch convert WebVTT subtitles to SubRip.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"vtt2srt {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """vtt2srt — Batch convert WebVTT subtitles to SubRip."""
    # Load .env for VTT2SRT_* settings; shell exports take precedence
    load_dotenv(override=False)


app.command("convert")(convert)
app.command("preview")(preview)

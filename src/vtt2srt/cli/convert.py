"""vtt2srt convert command - batch-convert WebVTT files to SRT."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from vtt2srt.batch.coordinator import BatchCoordinator
from vtt2srt.cli.utils import expand_inputs
from vtt2srt.core.config import load_config
from vtt2srt.core.events import BatchEvent
from vtt2srt.core.models import FileStatus
from vtt2srt.subtitles.export import export_items
from vtt2srt.utils.console import console
from vtt2srt.utils.inputs import read_inputs

_STATUS_STYLES = {
    FileStatus.COMPLETED: "green",
    FileStatus.FAILED: "red",
    FileStatus.PROCESSING: "blue",
    FileStatus.PENDING: "dim",
}


def convert(
    inputs: Annotated[
        list[str],
        typer.Argument(help="VTT files, directories, glob patterns, or .txt path lists."),
    ],
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for converted files."),
    ] = None,
    zip_archive: Annotated[
        Optional[bool],
        typer.Option(
            "--zip/--no-zip",
            help="Bundle output into a zip. Default: zip when more than one file converts.",
        ),
    ] = None,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", "-w", min=1, help="Parallel workers per batch."),
    ] = None,
) -> None:
    """Convert WebVTT subtitles to SubRip (SRT).

    Accepts multiple inputs: files, directories, glob patterns (*.vtt), or
    .txt files containing one path per line.
    """
    overrides: dict[str, object] = {
        "batch.max_workers": workers,
        "export.output_dir": output_dir,
    }
    config = load_config(**overrides)

    paths = expand_inputs(inputs)
    if not paths:
        console.print("[red]No inputs resolved. Check your paths or patterns.[/red]")
        raise typer.Exit(1)

    raw_inputs = read_inputs(paths)

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total} files"),
        console=console,
    ) as progress:
        task = progress.add_task("Converting", total=len(raw_inputs))

        def _on_event(event: BatchEvent) -> None:
            if event.kind in ("completed", "failed"):
                progress.advance(task)

        coordinator = BatchCoordinator.from_config(config.batch, on_event=_on_event)
        items = coordinator.submit(raw_inputs)

    table = Table(title=f"Batch Results ({len(items)} files)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Input", max_width=50, no_wrap=True)
    table.add_column("Size", justify="right")
    table.add_column("Status")
    table.add_column("Output", max_width=50, no_wrap=True)

    for i, item in enumerate(items, 1):
        style = _STATUS_STYLES[item.status]
        output = item.derived_name if item.status is FileStatus.COMPLETED else item.error or ""
        table.add_row(
            str(i),
            item.original_name,
            f"{item.size / 1024:.1f} KB",
            f"[{style}]{item.status.value}[/{style}]",
            output,
        )
    console.print(table)

    stats = coordinator.stats
    for path in export_items(
        items,
        config.export.output_dir,
        zip_archive=zip_archive,
        archive_prefix=config.export.archive_prefix,
    ):
        console.print(f"[green]Saved:[/green] {path}")

    console.print(f"\n[bold]{stats.completed}/{stats.total} converted[/bold]")
    if stats.failed:
        console.print(
            f"[red]{stats.failed} file(s) failed to convert. Check format validity.[/red]"
        )
        raise typer.Exit(1)

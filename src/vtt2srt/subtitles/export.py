"""Export converted items as a single .srt file or a zip bundle."""

from __future__ import annotations

import zipfile
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from vtt2srt.core.models import FileStatus, SubtitleItem


def _completed(items: Iterable[SubtitleItem]) -> list[SubtitleItem]:
    return [
        item for item in items if item.status is FileStatus.COMPLETED and item.content is not None
    ]


def archive_name(prefix: str = "converted_subtitles", now: datetime | None = None) -> str:
    """Timestamped archive name, e.g. converted_subtitles_2024-05-01-12-30-00.zip."""
    now = now or datetime.now()
    return f"{prefix}_{now.strftime('%Y-%m-%d-%H-%M-%S')}.zip"


def _unique_names(items: list[SubtitleItem]) -> list[str]:
    """Derived names with duplicates disambiguated as ``name (2).srt``."""
    used: set[str] = set()
    names = []
    for item in items:
        name = item.derived_name
        stem, dot, suffix = name.rpartition(".")
        n = 1
        while name in used:
            n += 1
            name = f"{stem} ({n}).{suffix}" if dot else f"{item.derived_name} ({n})"
        used.add(name)
        names.append(name)
    return names


def write_srt(item: SubtitleItem, output_dir: Path, name: str | None = None) -> Path:
    """Write one completed item to ``output_dir/<name>`` (default: its derived name).

    Raises:
        ValueError: If the item has not completed.
    """
    if item.status is not FileStatus.COMPLETED or item.content is None:
        raise ValueError(f"Item {item.original_name!r} is not completed ({item.status.value})")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / (name or item.derived_name)
    path.write_text(item.content, encoding="utf-8")
    return path


def write_archive(items: list[SubtitleItem], path: Path) -> Path:
    """Package completed items into a zip archive at ``path``.

    Returns:
        The path the archive was written to.
    """
    completed = _completed(items)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, item in zip(_unique_names(completed), completed, strict=True):
            zf.writestr(name, item.content)
    return path


def export_items(
    items: Iterable[SubtitleItem],
    output_dir: Path,
    zip_archive: bool | None = None,
    archive_prefix: str = "converted_subtitles",
) -> list[Path]:
    """Write completed items to ``output_dir``.

    Failed and unfinished items are skipped. With ``zip_archive`` left as
    None, a single completed item is written as a plain .srt file and two
    or more are bundled into one timestamped zip.

    Args:
        items: Items to export, typically the coordinator's collection.
        output_dir: Destination directory.
        zip_archive: Force (True) or suppress (False) zip packaging.
        archive_prefix: File name prefix for the zip archive.

    Returns:
        Paths of the written files, empty if nothing was completed.
    """
    completed = _completed(items)
    if not completed:
        return []

    output_dir = Path(output_dir)
    if zip_archive is None:
        zip_archive = len(completed) > 1

    if zip_archive:
        return [write_archive(completed, output_dir / archive_name(archive_prefix))]
    names = _unique_names(completed)
    return [write_srt(item, output_dir, name) for name, item in zip(names, completed, strict=True)]

"""Reading subtitle files from disk into raw batch inputs."""

from __future__ import annotations

from pathlib import Path

from vtt2srt.core.models import RawInput


def read_input(path: Path) -> RawInput:
    """Read one file as UTF-8 text.

    A leading byte-order mark is dropped. Read and decode failures do not
    raise; they are reported through ``RawInput.read_error`` so the batch
    can record the item as failed.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        return RawInput(name=path.name, size=0, read_error=str(e))

    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        return RawInput(name=path.name, size=len(data), read_error=str(e))
    return RawInput(name=path.name, size=len(data), text=text)


def read_inputs(paths: list[Path]) -> list[RawInput]:
    return [read_input(p) for p in paths]

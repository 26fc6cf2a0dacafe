"""Shared CLI utilities."""

from __future__ import annotations

from pathlib import Path


def _is_vtt(path: Path) -> bool:
    return path.suffix.lower() == ".vtt"


def expand_inputs(inputs: list[str]) -> list[Path]:
    """Expand directories, glob patterns, and file list files into individual paths."""
    expanded: list[Path] = []
    for inp in inputs:
        path = Path(inp)

        # Directory — every .vtt file directly inside it
        if path.is_dir():
            expanded.extend(sorted(p for p in path.iterdir() if p.is_file() and _is_vtt(p)))
            continue

        # .txt file — read as path list (one per line)
        if path.suffix == ".txt" and path.is_file():
            for line in path.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and not line.startswith("#"):
                    expanded.append(Path(line))
            continue

        # Try as glob pattern if it contains wildcards
        if any(c in inp for c in "*?["):
            matches = sorted(m for m in Path(".").glob(inp) if _is_vtt(m))
            if matches:
                expanded.extend(matches)
                continue

        # Regular file path, passed through even if missing so the read fails per item
        expanded.append(path)

    return expanded

"""WebVTT to SubRip conversion.

The converter is lenient: it extracts every cue it can recognise and
silently skips headers, NOTE comments, STYLE/REGION blocks and anything
else without a timing line. It never raises for malformed input.
"""

from __future__ import annotations

import re
from typing import NamedTuple

_ARROW = "-->"
_BOM = "\ufeff"

# Block prefixes with no SRT equivalent (file header and comments)
_SKIPPED_PREFIXES = ("WEBVTT", "NOTE")

# Inline markup: voice spans, <b>/<i>/<u>, class spans, karaoke timestamps
_TAG_RE = re.compile(r"<[^>]*>")

# HH:MM:SS.mmm (hours may be wider than two digits) and MM:SS.mmm.
# A comma is accepted too so already-converted timestamps pass through.
_LONG_TIMESTAMP_RE = re.compile(r"(\d+):(\d{2}):(\d{2})[.,](\d{3})")
_SHORT_TIMESTAMP_RE = re.compile(r"(\d{2}):(\d{2})[.,](\d{3})")

_VTT_SUFFIX_RE = re.compile(r"\.vtt\Z", re.IGNORECASE)


class Timestamp(NamedTuple):
    """A cue timestamp. ``hours`` is None for the short MM:SS.mmm form.

    ``hour_width`` is the number of hour digits as written, so a ``0:`` or
    ``123:`` hour field is reproduced unchanged.
    """

    hours: int | None
    minutes: int
    seconds: int
    millis: int
    hour_width: int = 2


def parse_timestamp(token: str) -> Timestamp | None:
    """Parse a WebVTT (or SRT) timestamp token, or return None.

    The shape is chosen by colon count: two colons is the long form, one
    colon the short form. The two forms never both apply to one token.
    """
    colons = token.count(":")
    if colons == 2:
        match = _LONG_TIMESTAMP_RE.fullmatch(token)
        if match:
            h, m, s, ms = match.groups()
            return Timestamp(int(h), int(m), int(s), int(ms), hour_width=len(h))
    elif colons == 1:
        match = _SHORT_TIMESTAMP_RE.fullmatch(token)
        if match:
            m, s, ms = match.groups()
            return Timestamp(None, int(m), int(s), int(ms))
    return None


def format_timestamp(ts: Timestamp) -> str:
    """Format a timestamp with SRT's comma separator, keeping its shape."""
    if ts.hours is None:
        return f"{ts.minutes:02d}:{ts.seconds:02d},{ts.millis:03d}"
    return f"{ts.hours:0{ts.hour_width}d}:{ts.minutes:02d}:{ts.seconds:02d},{ts.millis:03d}"


def _rewrite_token(token: str) -> str:
    ts = parse_timestamp(token)
    return format_timestamp(ts) if ts is not None else token


def rewrite_timing_line(line: str) -> str:
    """Rewrite a cue timing line into SRT form.

    Both timestamps get a comma before the milliseconds and any cue
    settings after the end timestamp (``align:start size:50%``) are
    dropped. Tokens that do not parse as timestamps are kept verbatim.
    """
    start_part, _, end_part = line.partition(_ARROW)
    start = _rewrite_token(start_part.strip())

    end_tokens = end_part.split(maxsplit=1)
    if not end_tokens:
        return f"{start} {_ARROW}"

    end_ts = parse_timestamp(end_tokens[0])
    if end_ts is None:
        # Unrecognised end: leave the remainder alone rather than guess
        return f"{start} {_ARROW} {end_part.strip()}"
    return f"{start} {_ARROW} {format_timestamp(end_ts)}"


def strip_tags(line: str) -> str:
    """Remove every ``<...>`` span from a cue text line."""
    return _TAG_RE.sub("", line)


def _cue_blocks(document: str) -> list[list[str]]:
    """Split a normalized document into candidate cue blocks (lists of lines)."""
    blocks = []
    for block in document.split("\n\n"):
        trimmed = block.strip()
        if not trimmed or trimmed.startswith(_SKIPPED_PREFIXES):
            continue
        blocks.append(trimmed.split("\n"))
    return blocks


def vtt_to_srt(document: str) -> str:
    """Convert a WebVTT document to a SubRip document.

    Cues are numbered by emission order starting at 1. Blocks without a
    ``-->`` timing line, and cues with no text lines after their timing
    line, are dropped without consuming a number.

    Args:
        document: WebVTT text. Line endings may be LF, CRLF or CR.

    Returns:
        SRT text with trailing whitespace trimmed. Empty if no cue survived.
    """
    normalized = document.replace("\r\n", "\n").replace("\r", "\n")
    if normalized.startswith(_BOM):
        normalized = normalized[len(_BOM):]

    records = []
    counter = 1
    for lines in _cue_blocks(normalized):
        timing_index = next((i for i, line in enumerate(lines) if _ARROW in line), None)
        if timing_index is None:
            continue

        text_lines = [strip_tags(line) for line in lines[timing_index + 1 :]]
        if not text_lines:
            continue

        timing = rewrite_timing_line(lines[timing_index])
        records.append(f"{counter}\n{timing}\n" + "\n".join(text_lines) + "\n\n")
        counter += 1

    return "".join(records).strip()


transcode = vtt_to_srt


def derive_srt_name(name: str) -> str:
    """Replace a trailing ``.vtt`` (any case) with ``.srt``; other names pass through."""
    return _VTT_SUFFIX_RE.sub(".srt", name)

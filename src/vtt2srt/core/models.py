"""Shared data models for vtt2srt."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum


class FileStatus(str, Enum):
    """Lifecycle of one submitted file: PENDING -> PROCESSING -> COMPLETED | FAILED."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (FileStatus.COMPLETED, FileStatus.FAILED)


@dataclass(frozen=True)
class RawInput:
    """One file as handed over by the intake layer.

    Exactly one of ``text`` and ``read_error`` is expected to be set. A
    ``read_error`` means the bytes could not be read or decoded as text.
    """

    name: str
    size: int
    text: str | None = None
    read_error: str | None = None


@dataclass(frozen=True)
class SubtitleItem:
    """A submitted file and its conversion outcome.

    Items are immutable snapshots; the coordinator replaces them wholesale
    on every state change. ``content`` is set only when COMPLETED and
    ``error`` only when FAILED.
    """

    original_name: str
    derived_name: str
    size: int
    status: FileStatus = FileStatus.PENDING
    content: str | None = None
    error: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True)
class BatchStats:
    """Aggregate counts, always derived from the current item list."""

    total: int = 0
    completed: int = 0
    failed: int = 0
    processing: bool = False

    @classmethod
    def from_items(cls, items: Sequence[SubtitleItem], processing: bool = False) -> BatchStats:
        """Recompute stats in a single pass over ``items``."""
        completed = failed = 0
        for item in items:
            if item.status is FileStatus.COMPLETED:
                completed += 1
            elif item.status is FileStatus.FAILED:
                failed += 1
        return cls(total=len(items), completed=completed, failed=failed, processing=processing)

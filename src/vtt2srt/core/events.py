"""Batch event system for streaming progress to external consumers.

The coordinator emits events through a plain callback. Consumers (the CLI
progress bar, tests) register a callback to follow item state changes
without the core ever printing anything itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class BatchEvent:
    """A progress event emitted while a batch is processed.

    Attributes:
        kind: Event kind (intake, processing, completed, failed, batch).
        item_id: Id of the affected item, or None for batch-level events.
        message: Human-readable status message.
        data: Optional payload (e.g. aggregate stats).
    """

    kind: str
    item_id: str | None
    message: str
    data: dict | None = field(default=None)


EventCallback = Callable[[BatchEvent], None]

"""Batch coordinator for converting many independently submitted files.

Every item in a batch is dispatched to a thread pool at once. Outcomes are
written into an index-addressed slot list as they finish and merged back
into the item collection in one replacement after the whole batch has
joined, so readers never see a half-merged batch and submission order is
preserved regardless of completion order.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace

from vtt2srt.core.config import DEFAULT_FAILURE_MESSAGE, BatchConfig
from vtt2srt.core.events import BatchEvent, EventCallback
from vtt2srt.core.models import BatchStats, FileStatus, RawInput, SubtitleItem
from vtt2srt.subtitles.converter import derive_srt_name, transcode


class BatchCoordinator:
    """Owns the ordered item collection and runs batches against it.

    Args:
        max_workers: Thread pool size per batch. None uses the executor default.
        failure_message: Fixed error recorded on every FAILED item.
        on_event: Optional callback for progress events. Always invoked
            from the thread that called :meth:`submit`.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        failure_message: str = DEFAULT_FAILURE_MESSAGE,
        on_event: EventCallback | None = None,
    ) -> None:
        self.max_workers = max_workers
        self.failure_message = failure_message
        self.on_event = on_event
        self._items: tuple[SubtitleItem, ...] = ()
        self._in_flight = 0
        # Guards the whole-collection swaps only, never held during conversion
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls, config: BatchConfig, on_event: EventCallback | None = None
    ) -> BatchCoordinator:
        return cls(
            max_workers=config.max_workers,
            failure_message=config.failure_message,
            on_event=on_event,
        )

    # --- read-only views ---

    @property
    def items(self) -> tuple[SubtitleItem, ...]:
        """Snapshot of all items in submission order."""
        return self._items

    @property
    def processing(self) -> bool:
        return self._in_flight > 0

    @property
    def stats(self) -> BatchStats:
        """Aggregate counts, recomputed from the current items on every read."""
        return BatchStats.from_items(self._items, processing=self.processing)

    def completed_items(self) -> list[SubtitleItem]:
        return [item for item in self._items if item.status is FileStatus.COMPLETED]

    def get(self, item_id: str) -> SubtitleItem | None:
        return next((item for item in self._items if item.id == item_id), None)

    # --- collection updates ---

    def remove(self, item_id: str) -> bool:
        """Drop one item. Returns False if no item has that id."""
        with self._lock:
            kept = tuple(item for item in self._items if item.id != item_id)
            removed = len(kept) != len(self._items)
            self._items = kept
        return removed

    def clear(self) -> None:
        with self._lock:
            self._items = ()

    def _append(self, new_items: list[SubtitleItem]) -> None:
        with self._lock:
            self._items = self._items + tuple(new_items)

    def _merge(self, updates: list[SubtitleItem]) -> None:
        """Swap in updated items by id. Items removed meanwhile stay removed."""
        by_id = {item.id: item for item in updates}
        with self._lock:
            self._items = tuple(by_id.get(item.id, item) for item in self._items)

    def _set_in_flight(self, delta: int) -> None:
        with self._lock:
            self._in_flight += delta

    def _emit(self, kind: str, item_id: str | None, message: str, data: dict | None = None) -> None:
        if self.on_event:
            self.on_event(BatchEvent(kind=kind, item_id=item_id, message=message, data=data))

    # --- processing ---

    def _convert(self, raw: RawInput) -> dict:
        """Run one item to a terminal outcome: status, content and error fields."""
        if raw.read_error is not None or raw.text is None:
            return {"status": FileStatus.FAILED, "content": None, "error": self.failure_message}
        try:
            content = transcode(raw.text)
        except Exception:
            # Contained to this item; siblings are unaffected
            return {"status": FileStatus.FAILED, "content": None, "error": self.failure_message}
        return {"status": FileStatus.COMPLETED, "content": content, "error": None}

    def submit(self, inputs: list[RawInput]) -> list[SubtitleItem]:
        """Convert a batch of inputs and append the results to the collection.

        Conversion failures are per-item and never raised. The call returns
        once every item of the batch has reached COMPLETED or FAILED. If an
        ``on_event`` callback raises, the batch is still finished and merged
        before the callback's exception propagates.

        Args:
            inputs: Raw inputs in submission order.

        Returns:
            The batch's items in the same order as ``inputs``.
        """
        pending = [
            SubtitleItem(
                original_name=raw.name,
                derived_name=derive_srt_name(raw.name),
                size=raw.size,
            )
            for raw in inputs
        ]
        if not pending:
            return []

        running = [replace(item, status=FileStatus.PROCESSING) for item in pending]
        results: list[SubtitleItem | None] = [None] * len(running)

        self._set_in_flight(1)
        self._append(pending)
        try:
            for item in pending:
                self._emit("intake", item.id, f"Queued {item.original_name}")

            self._merge(running)
            for item in running:
                self._emit("processing", item.id, f"Converting {item.original_name}")

            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                future_to_idx = {
                    executor.submit(self._convert, raw): i for i, raw in enumerate(inputs)
                }
                for future in as_completed(future_to_idx):
                    idx = future_to_idx[future]
                    item = replace(running[idx], **future.result())
                    results[idx] = item
                    if item.status is FileStatus.COMPLETED:
                        self._emit("completed", item.id, f"Converted {item.original_name}")
                    else:
                        self._emit("failed", item.id, f"{item.original_name}: {item.error}")
        finally:
            # Items a raising callback left unresolved are converted here
            for idx, raw in enumerate(inputs):
                if results[idx] is None:
                    results[idx] = replace(running[idx], **self._convert(raw))
            finished = [item for item in results if item is not None]
            self._merge(finished)
            self._set_in_flight(-1)

        stats = self.stats
        self._emit(
            "batch",
            None,
            f"{stats.completed}/{stats.total} converted",
            data={"total": stats.total, "completed": stats.completed, "failed": stats.failed},
        )
        return finished

"""Translate item-level intents into sparse store patches."""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from core import DateField, Task, encode_absolute, encode_naive, normalize_tags
from application.ports import TaskStoreClient

logger = logging.getLogger("task_item.dispatch")


def date_patch(field: DateField, instant: Optional[datetime]) -> Dict[str, Any]:
    """Patch for committing one date overlay.

    schedule also recomputes ``locked`` from presence; start is stored as naive
    wall-clock text, schedule and due as absolute epoch millis.
    """
    field = DateField(field)
    if field is DateField.SCHEDULE:
        return {"locked": instant is not None, "schedule": encode_absolute(instant)}
    if field is DateField.START:
        return {"start": encode_naive(instant)}
    return {"due": encode_absolute(instant)}


class EditDispatcher:
    """Fire-and-forget dispatch: nothing is awaited, retried or returned."""

    def __init__(self, store: TaskStoreClient, on_failure: Optional[Callable[[str], None]] = None):
        self.store = store
        self.on_failure = on_failure

    def request_edit(self, task_id: str, patch: Mapping[str, Any]) -> None:
        try:
            self.store.request_edit(task_id, dict(patch))
        except Exception as exc:
            self._fail("edit", task_id, exc)

    def request_remove(self, task_id: str) -> None:
        try:
            self.store.request_remove(task_id)
        except Exception as exc:
            self._fail("remove", task_id, exc)

    def change_content(self, task_id: str, text: str) -> None:
        self.request_edit(task_id, {"content": text})

    def change_tags(self, task_id: str, tags: Iterable[str]) -> None:
        self.request_edit(task_id, {"tags": sorted(normalize_tags(tags))})

    def toggle_completion(self, task: Task) -> None:
        self.request_edit(task.id, {"completed": not task.completed})

    def commit_date(self, task_id: str, field: DateField, instant: Optional[datetime]) -> None:
        self.request_edit(task_id, date_patch(field, instant))

    def remove(self, task_id: str) -> None:
        self.request_remove(task_id)

    def _fail(self, op: str, task_id: str, exc: Exception) -> None:
        message = f"{op} {task_id} not dispatched: {exc}"
        logger.warning("Dispatch %s", message)
        if self.on_failure:
            self.on_failure(message)


__all__ = ["EditDispatcher", "date_patch"]

"""Non-blocking store client: mutation intents are applied on a worker thread.

One worker consumes a FIFO queue, so intents are applied in dispatch order and
the last dispatched value for a field wins.
"""

import logging
import queue
import threading
from typing import Any, Callable, Mapping, Optional, Tuple

from core import Task, apply_patch
from application.ports import TaskRepository, TaskStoreClient

logger = logging.getLogger("task_item.store")

_STOP = object()


class BackgroundStoreClient(TaskStoreClient):
    def __init__(self, repo: TaskRepository, on_error: Optional[Callable[[str], None]] = None):
        self.repo = repo
        self.on_error = on_error
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._start_lock = threading.Lock()
        self._closed = False

    def request_edit(self, task_id: str, patch: Mapping[str, Any]) -> None:
        self._submit(("edit", task_id, dict(patch)))

    def request_remove(self, task_id: str) -> None:
        self._submit(("remove", task_id, None))

    def request_insert(self, task: Task) -> None:
        self._submit(("insert", task.id, task))

    def flush(self) -> None:
        """Block until every queued intent has been applied."""
        if self._thread is not None:
            self._queue.join()

    def close(self, timeout: Optional[float] = 5.0) -> None:
        with self._start_lock:
            if self._closed:
                return
            self._closed = True
            thread = self._thread
        if thread is None:
            return
        self._queue.put(_STOP)
        thread.join(timeout)

    def _submit(self, intent: Tuple[str, str, Any]) -> None:
        if self._closed:
            raise RuntimeError("store client is closed")
        self._ensure_worker()
        self._queue.put(intent)

    def _ensure_worker(self) -> None:
        with self._start_lock:
            if self._thread is not None:
                return
            self._thread = threading.Thread(target=self._run, name="task-store-worker", daemon=True)
            self._thread.start()

    def _run(self) -> None:
        while True:
            intent = self._queue.get()
            try:
                if intent is _STOP:
                    return
                self._apply(*intent)
            except Exception as exc:
                self._report(intent, exc)
            finally:
                self._queue.task_done()

    def _apply(self, op: str, task_id: str, payload: Any) -> None:
        if op == "insert":
            self.repo.upsert(payload)
            return
        if op == "remove":
            if not self.repo.delete(task_id):
                raise LookupError(f"task {task_id} not found")
            return
        current = self.repo.get(task_id)
        if current is None:
            raise LookupError(f"task {task_id} not found")
        self.repo.upsert(apply_patch(current, payload))

    def _report(self, intent: Tuple[str, str, Any], exc: Exception) -> None:
        op, task_id, _ = intent
        message = f"{op} {task_id} failed: {exc}"
        logger.warning("Store intent %s", message)
        if self.on_error is None:
            return
        try:
            self.on_error(message)
        except Exception as cb_exc:  # pragma: no cover - reporting must not kill the worker
            logger.warning("Store error callback failed: %s", cb_exc)


__all__ = ["BackgroundStoreClient"]

"""YAML snapshot store for task records.

All tasks live in a single file (``tasks:`` list). Writes go through a temp file
and ``os.replace`` so readers never observe a half-written snapshot.
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
import time
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from core import Task
from application.ports import TaskRepository

logger = logging.getLogger("task_item.store")

SNAPSHOT_VERSION = 1


class FileTaskRepository(TaskRepository):
    def __init__(self, path: Path):
        self.path = Path(path).expanduser()
        self._lock = threading.RLock()
        self._tasks: Dict[str, Task] = {}
        self._loaded = False

    def bootstrap(self) -> None:
        """Create an empty snapshot when none exists yet."""
        with self._lock:
            if not self.path.exists():
                self._tasks = {}
                self._write()
            self._loaded = True

    def load(self) -> List[Task]:
        """Re-read the snapshot from disk."""
        with self._lock:
            self._tasks = self._read()
            self._loaded = True
            return list(self._tasks.values())

    def snapshot(self) -> List[Task]:
        with self._lock:
            if not self._loaded:
                return self.load()
            return list(self._tasks.values())

    def get(self, task_id: str) -> Optional[Task]:
        with self._lock:
            if not self._loaded:
                self.load()
            return self._tasks.get(task_id)

    def upsert(self, task: Task) -> None:
        with self._lock:
            if not self._loaded:
                self.load()
            self._tasks[task.id] = task
            self._write()

    def delete(self, task_id: str) -> bool:
        with self._lock:
            if not self._loaded:
                self.load()
            if task_id not in self._tasks:
                return False
            del self._tasks[task_id]
            self._write()
            return True

    def compute_signature(self) -> int:
        try:
            stat = self.path.stat()
        except OSError:
            return 0
        return int(stat.st_mtime_ns) ^ (int(stat.st_size) << 1)

    def _read(self) -> Dict[str, Task]:
        if not self.path.exists():
            return {}
        raw = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        records = (raw.get("tasks") or []) if isinstance(raw, dict) else []
        tasks: Dict[str, Task] = {}
        for record in records:
            try:
                task = Task.from_dict(record)
            except (TypeError, ValueError, AttributeError) as exc:
                logger.warning("Skipping unreadable task record in %s: %s", self.path, exc)
                continue
            tasks[task.id] = task
        return tasks

    def _write(self) -> None:
        payload = {
            "version": SNAPSHOT_VERSION,
            "saved": int(time.time() * 1000),
            "tasks": [task.to_dict() for task in self._tasks.values()],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                delete=False,
                dir=str(self.path.parent),
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            ) as tmp:
                tmp_path = Path(tmp.name)
                yaml.safe_dump(payload, tmp, allow_unicode=True, sort_keys=False)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(str(tmp_path), str(self.path))
        finally:
            if tmp_path and tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError:
                    pass


__all__ = ["FileTaskRepository", "SNAPSHOT_VERSION"]

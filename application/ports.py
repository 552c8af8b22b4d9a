from typing import Any, List, Mapping, Optional, Protocol

from core import Task


class TaskRepository(Protocol):
    def bootstrap(self) -> None:
        ...

    def load(self) -> List[Task]:
        ...

    def snapshot(self) -> List[Task]:
        ...

    def get(self, task_id: str) -> Optional[Task]:
        ...

    def upsert(self, task: Task) -> None:
        ...

    def delete(self, task_id: str) -> bool:
        ...

    def compute_signature(self) -> int:
        ...


class TaskStoreClient(Protocol):
    """Fire-and-forget mutation intents against the backing store."""

    def request_edit(self, task_id: str, patch: Mapping[str, Any]) -> None:
        ...

    def request_remove(self, task_id: str) -> None:
        ...

    def request_insert(self, task: Task) -> None:
        ...

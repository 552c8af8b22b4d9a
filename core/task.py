import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional

from .instants import decode_absolute, decode_naive, encode_absolute, encode_naive, utc_now

PATCH_FIELDS: FrozenSet[str] = frozenset(
    {"content", "tags", "schedule", "start", "due", "completed", "locked"}
)


class DateField(str, Enum):
    """The three independent optional instants of a task."""

    SCHEDULE = "schedule"
    START = "start"
    DUE = "due"


class PatchError(ValueError):
    """Raised when a patch cannot be applied to a task record."""


def normalize_tags(tags: Iterable[str]) -> FrozenSet[str]:
    cleaned = set()
    for tag in tags or ():
        value = str(tag).strip().lstrip("#").strip()
        if value:
            cleaned.add(value)
    return frozenset(cleaned)


@dataclass
class Task:
    id: str
    content: str = ""
    tags: FrozenSet[str] = field(default_factory=frozenset)
    schedule: Optional[datetime] = None
    start: Optional[datetime] = None  # naive wall-clock, see encode_naive
    due: Optional[datetime] = None
    completed: bool = False
    locked: bool = False
    captured: datetime = field(default_factory=utc_now)

    @classmethod
    def new(cls, content: str = "", tags: Iterable[str] = ()) -> "Task":
        return cls(id=uuid.uuid4().hex, content=content, tags=normalize_tags(tags))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "tags": sorted(self.tags),
            "schedule": encode_absolute(self.schedule),
            "start": encode_naive(self.start),
            "due": encode_absolute(self.due),
            "completed": self.completed,
            "locked": self.locked,
            "captured": encode_absolute(self.captured),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Task":
        task_id = str(data.get("id") or "").strip()
        if not task_id:
            raise ValueError("task record without id")
        captured = decode_absolute(data.get("captured"))
        return cls(
            id=task_id,
            content=str(data.get("content") or ""),
            tags=normalize_tags(data.get("tags") or ()),
            schedule=decode_absolute(data.get("schedule")),
            start=decode_naive(data.get("start")),
            due=decode_absolute(data.get("due")),
            completed=bool(data.get("completed", False)),
            locked=bool(data.get("locked", False)),
            captured=captured or utc_now(),
        )


def apply_patch(task: Task, patch: Mapping[str, Any]) -> Task:
    """Return a copy of ``task`` with the encoded patch values applied.

    Patches are sparse: only the keys present are touched. Dates arrive in
    their wire encodings (epoch millis for schedule/due, naive ISO for start).
    """
    unknown = set(patch) - PATCH_FIELDS
    if unknown:
        raise PatchError(f"Unknown patch fields: {', '.join(sorted(unknown))}")
    changes: Dict[str, Any] = {}
    try:
        if "content" in patch:
            changes["content"] = str(patch["content"] or "")
        if "tags" in patch:
            changes["tags"] = normalize_tags(patch["tags"] or ())
        if "schedule" in patch:
            changes["schedule"] = decode_absolute(patch["schedule"])
        if "start" in patch:
            changes["start"] = decode_naive(patch["start"])
        if "due" in patch:
            changes["due"] = decode_absolute(patch["due"])
    except (TypeError, ValueError) as exc:
        raise PatchError(f"Malformed patch for {task.id}: {exc}") from exc
    for flag in ("completed", "locked"):
        if flag in patch:
            value = patch[flag]
            if not isinstance(value, bool):
                raise PatchError(f"{flag} must be a boolean, got {value!r}")
            changes[flag] = value
    return replace(task, **changes)


__all__ = ["DateField", "PATCH_FIELDS", "PatchError", "Task", "apply_patch", "normalize_tags"]

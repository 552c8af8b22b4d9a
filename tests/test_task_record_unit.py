from datetime import datetime, timezone

import pytest

from core import PatchError, Task, apply_patch, normalize_tags

NEW_YEAR_UTC = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _task(**kwargs) -> Task:
    base = dict(id="t1", content="Buy milk", tags=frozenset({"home"}))
    base.update(kwargs)
    return Task(**base)


def test_normalize_tags_strips_hash_and_blanks():
    assert normalize_tags(["#a", " b ", "", "#", "a"]) == frozenset({"a", "b"})


def test_new_task_gets_unique_id():
    first, second = Task.new("one"), Task.new("two")
    assert first.id and second.id and first.id != second.id
    assert first.completed is False and first.locked is False


def test_patch_touches_only_present_fields():
    task = _task(completed=True)
    patched = apply_patch(task, {"due": 1704067200000})
    assert patched.due == NEW_YEAR_UTC
    assert patched.content == "Buy milk"
    assert patched.completed is True
    assert task.due is None


def test_patch_decodes_naive_start_and_tags():
    patched = apply_patch(_task(), {"start": "2024-03-05T09:30:00.000", "tags": ["#x", "y"]})
    assert patched.start == datetime(2024, 3, 5, 9, 30)
    assert patched.tags == frozenset({"x", "y"})


def test_patch_with_null_clears_date():
    patched = apply_patch(_task(schedule=NEW_YEAR_UTC, locked=True), {"schedule": None, "locked": False})
    assert patched.schedule is None
    assert patched.locked is False


def test_unknown_patch_field_rejected():
    with pytest.raises(PatchError, match="bogus"):
        apply_patch(_task(), {"bogus": 1})


def test_non_bool_flag_rejected():
    with pytest.raises(PatchError):
        apply_patch(_task(), {"completed": "yes"})


def test_malformed_date_rejected():
    with pytest.raises(PatchError):
        apply_patch(_task(), {"start": "not a date"})


def test_record_serialization_uses_wire_encodings():
    task = _task(schedule=NEW_YEAR_UTC, start=datetime(2024, 3, 5, 9, 30), due=NEW_YEAR_UTC, locked=True)
    data = task.to_dict()
    assert data["schedule"] == 1704067200000
    assert data["due"] == 1704067200000
    assert data["start"] == "2024-03-05T09:30:00.000"
    assert data["tags"] == ["home"]
    restored = Task.from_dict(data)
    assert restored.start == task.start
    assert restored.due == task.due
    assert restored.locked is True


def test_record_without_id_rejected():
    with pytest.raises(ValueError):
        Task.from_dict({"content": "orphan"})

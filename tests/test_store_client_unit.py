import logging

import pytest

from application.store_client import BackgroundStoreClient
from core import Task
from infrastructure.file_repository import FileTaskRepository


@pytest.fixture
def repo(tmp_path):
    repository = FileTaskRepository(tmp_path / "tasks.yaml")
    repository.bootstrap()
    return repository


def test_intents_apply_in_dispatch_order(repo):
    client = BackgroundStoreClient(repo)
    client.request_insert(Task(id="t1", content="draft"))
    client.request_edit("t1", {"content": "first"})
    client.request_edit("t1", {"content": "second"})
    client.request_edit("t1", {"completed": True})
    client.flush()
    client.close()

    stored = repo.get("t1")
    assert stored.content == "second"
    assert stored.completed is True


def test_remove_deletes_record(repo):
    repo.upsert(Task(id="t1"))
    client = BackgroundStoreClient(repo)
    client.request_remove("t1")
    client.flush()
    client.close()
    assert repo.get("t1") is None


def test_failures_reach_error_callback(repo, caplog):
    errors = []
    client = BackgroundStoreClient(repo, on_error=errors.append)
    with caplog.at_level(logging.WARNING, logger="task_item.store"):
        client.request_remove("missing")
        client.request_insert(Task(id="t1"))
        client.request_edit("t1", {"bogus": 1})
        client.request_edit("t1", {"content": "still works"})
        client.flush()
    client.close()

    assert len(errors) == 2
    assert errors[0].startswith("remove missing")
    assert "bogus" in errors[1]
    assert repo.get("t1").content == "still works"
    assert "Store intent" in caplog.text


def test_submit_after_close_raises(repo):
    client = BackgroundStoreClient(repo)
    client.close()
    with pytest.raises(RuntimeError):
        client.request_edit("t1", {"content": "late"})

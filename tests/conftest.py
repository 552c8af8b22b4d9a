import time

import pytest


def _set_zone(monkeypatch, name):
    monkeypatch.setenv("TZ", name)
    time.tzset()


@pytest.fixture(autouse=True)
def utc_local_zone(monkeypatch):
    """Local wall-clock values are only comparable under a known zone."""
    _set_zone(monkeypatch, "UTC")
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def new_york_zone(monkeypatch):
    _set_zone(monkeypatch, "America/New_York")

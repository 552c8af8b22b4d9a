from datetime import datetime, timedelta, timezone

from core import is_deferred

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_no_start_is_never_deferred():
    assert is_deferred(None, NOW) is False


def test_future_start_is_deferred():
    assert is_deferred(NOW + timedelta(minutes=1), NOW) is True


def test_start_equal_to_now_is_not_deferred():
    assert is_deferred(NOW, NOW) is False


def test_past_start_is_not_deferred():
    assert is_deferred(NOW - timedelta(days=3), NOW) is False


def test_naive_start_is_read_as_local_wall_clock():
    local_future = (NOW + timedelta(hours=1)).astimezone().replace(tzinfo=None)
    local_past = (NOW - timedelta(hours=1)).astimezone().replace(tzinfo=None)
    assert is_deferred(local_future, NOW) is True
    assert is_deferred(local_past, NOW) is False

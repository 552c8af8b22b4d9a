from datetime import datetime, timedelta, timezone

from core import decode_absolute, decode_naive, encode_absolute, encode_naive, local_wall_clock

NEW_YEAR_UTC = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_encode_absolute_is_epoch_millis():
    assert encode_absolute(NEW_YEAR_UTC) == 1704067200000
    assert encode_absolute(NEW_YEAR_UTC + timedelta(milliseconds=250)) == 1704067200250


def test_encode_absolute_respects_offset():
    plus_two = timezone(timedelta(hours=2))
    assert encode_absolute(datetime(2024, 1, 1, 2, 0, tzinfo=plus_two)) == 1704067200000


def test_none_passes_through_every_codec():
    assert encode_absolute(None) is None
    assert encode_naive(None) is None
    assert decode_absolute(None) is None
    assert decode_absolute("") is None
    assert decode_naive(None) is None


def test_encode_naive_writes_local_wall_clock():
    plus_two = timezone(timedelta(hours=2))
    value = datetime(2024, 3, 5, 9, 30, tzinfo=plus_two)
    assert encode_naive(value) == "2024-03-05T07:30:00.000"
    assert not encode_naive(value).endswith("Z")
    assert encode_naive(datetime(2024, 3, 5, 9, 30)) == "2024-03-05T09:30:00.000"


def test_naive_codec_agrees_with_local_conversion_outside_utc(new_york_zone):
    value = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert local_wall_clock(value) == datetime(2023, 12, 31, 19, 0)
    assert decode_naive(encode_naive(value)) == local_wall_clock(value)
    assert decode_naive(value) == local_wall_clock(value)


def test_decode_absolute_accepts_millis_and_iso():
    assert decode_absolute(1704067200000) == NEW_YEAR_UTC
    assert decode_absolute("2024-01-01T00:00:00Z") == NEW_YEAR_UTC
    assert decode_absolute("2024-01-01T02:00:00+02:00") == NEW_YEAR_UTC
    assert decode_absolute(1704067200000).tzinfo is not None


def test_decode_naive_returns_wall_clock():
    value = decode_naive("2024-03-05T09:30:00.000")
    assert value == datetime(2024, 3, 5, 9, 30)
    assert value.tzinfo is None
    assert decode_naive(datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc)).tzinfo is None

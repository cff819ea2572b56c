import time
from datetime import datetime, timezone

import pytest

from app.errors import ValidationError
from app.utils import local_day_bounds, require_fields, resolve_timezone


@pytest.fixture
def new_york_local(monkeypatch):
    if not hasattr(time, 'tzset'):
        pytest.skip('time.tzset không có trên nền tảng này')
    monkeypatch.setenv('TZ', 'America/New_York')
    time.tzset()
    if time.tzname[0] != 'EST':
        monkeypatch.undo()
        time.tzset()
        pytest.skip('thiếu dữ liệu múi giờ hệ thống')
    yield
    monkeypatch.undo()
    time.tzset()


def test_unset_timezone_means_server_local():
    assert resolve_timezone(None) is None
    assert resolve_timezone('') is None
    assert resolve_timezone('utc') is timezone.utc


def test_server_local_bounds_follow_dst(new_york_local):
    start, end = local_day_bounds('2024-01-10')
    assert start == datetime(2024, 1, 10, 5, 0, tzinfo=timezone.utc)
    assert end == datetime(2024, 1, 11, 4, 59, 59, 999000, tzinfo=timezone.utc)

    start, end = local_day_bounds('2024-07-10')
    assert start == datetime(2024, 7, 10, 4, 0, tzinfo=timezone.utc)
    assert end == datetime(2024, 7, 11, 3, 59, 59, 999000, tzinfo=timezone.utc)


def test_named_zone_bounds_follow_dst():
    tz = resolve_timezone('America/New_York')
    assert local_day_bounds('2024-01-10', tz)[0] == datetime(2024, 1, 10, 5, 0, tzinfo=timezone.utc)
    assert local_day_bounds('2024-07-10', tz)[0] == datetime(2024, 7, 10, 4, 0, tzinfo=timezone.utc)


def test_require_fields():
    require_fields({'student_id': 7, 'room_id': 'R1'}, 'student_id', 'room_id')
    with pytest.raises(ValidationError, match='Missing required fields'):
        require_fields({'student_id': '  '}, 'student_id')
    with pytest.raises(ValidationError, match='room_id must be a string or integer'):
        require_fields({'room_id': 1.5}, 'room_id')

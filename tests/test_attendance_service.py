from datetime import datetime, timezone

import pytest

from app.errors import DuplicateAttendance, ValidationError
from app.models import AttendanceService
from database import StorageError


@pytest.fixture
def service(db, clock):
    return AttendanceService(db, cooldown_seconds=300, clock=clock)


def test_confirm_records_timestamp_at_call_time(service, db, clock):
    record = service.confirm('S1', 'Alice', 'R1', confidence=92.5)

    assert record['student_id'] == 'S1'
    assert record['student_name'] == 'Alice'
    assert record['room_id'] == 'R1'
    assert record['confidence'] == 92.5
    assert datetime.fromisoformat(record['timestamp']) == clock()
    assert len(db.list_attendance()) == 1


def test_second_confirm_within_window_is_duplicate(service, db, clock):
    first = service.confirm('S1', 'Alice', 'R1', confidence=92.5)
    clock.advance(seconds=1)

    with pytest.raises(DuplicateAttendance) as excinfo:
        service.confirm('S1', 'Alice', 'R1', confidence=93.0)

    assert excinfo.value.last_attendance == first
    assert len(db.list_attendance()) == 1


def test_duplicate_just_before_window_end(service, db, clock):
    service.confirm('S1', 'Alice', 'R1')
    clock.advance(minutes=4, seconds=59)

    with pytest.raises(DuplicateAttendance):
        service.confirm('S1', 'Alice', 'R1')


def test_confirms_five_minutes_apart_both_succeed(service, db, clock):
    service.confirm('S1', 'Alice', 'R1')
    clock.advance(minutes=5, milliseconds=1)
    service.confirm('S1', 'Alice', 'R1')

    assert len(db.list_attendance(student_id='S1', room_id='R1')) == 2


def test_cooldown_is_per_student_and_room(service, db):
    service.confirm('S1', 'Alice', 'R1')
    service.confirm('S1', 'Alice', 'R2')
    service.confirm('S2', 'Bob', 'R1')

    assert len(db.list_attendance()) == 3


def test_duplicate_carries_most_recent_record(db, clock):
    service = AttendanceService(db, cooldown_seconds=600, clock=clock)
    service.confirm('S1', 'Alice', 'R1')
    clock.advance(minutes=6)
    # Cooldown 10 phút vẫn chặn; bản ghi trả về là bản mới nhất
    with pytest.raises(DuplicateAttendance) as excinfo:
        service.confirm('S1', 'Alice', 'R1')
    assert excinfo.value.last_attendance['id'] == db.list_attendance()[0]['id']


@pytest.mark.parametrize('student_id, student_name, room_id', [
    (None, 'Alice', 'R1'),
    ('S1', '', 'R1'),
    ('S1', 'Alice', '   '),
])
def test_missing_required_fields(service, db, student_id, student_name, room_id):
    with pytest.raises(ValidationError):
        service.confirm(student_id, student_name, room_id)
    assert db.list_attendance() == []


@pytest.mark.parametrize('confidence', ['abc', float('nan'), float('inf'), True])
def test_invalid_confidence(service, confidence):
    with pytest.raises(ValidationError):
        service.confirm('S1', 'Alice', 'R1', confidence=confidence)


def test_confidence_is_optional_and_zero_is_kept(service, clock):
    assert service.confirm('S1', 'Alice', 'R1')['confidence'] is None
    assert service.confirm('S2', 'Bob', 'R1', confidence=0)['confidence'] == 0


class BrokenDatabase:
    def get_recent_attendance(self, *args):
        raise StorageError('connection refused')

    def insert_attendance(self, record):
        raise AssertionError('must not write after a failed check')


def test_storage_error_on_check_is_not_swallowed(clock):
    service = AttendanceService(BrokenDatabase(), clock=clock)
    with pytest.raises(StorageError):
        service.confirm('S1', 'Alice', 'R1')


def test_default_clock_is_utc(db):
    service = AttendanceService(db)
    record = service.confirm('S1', 'Alice', 'R1')
    stamp = datetime.fromisoformat(record['timestamp'])
    assert stamp.utcoffset() == timezone.utc.utcoffset(None)

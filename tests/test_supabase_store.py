"""Kiểm tra hình dạng truy vấn PostgREST bằng client giả."""
from datetime import datetime, timezone

import pytest

from database import StorageError
from supabase_store import SupabaseDatabase


class FakeResult:
    def __init__(self, data=None, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, table, log, result):
        self.table = table
        self.calls = []
        self.log = log
        self.result = result

    def __getattr__(self, name):
        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return record

    def execute(self):
        self.log.append((self.table, self.calls))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class FakeClient:
    def __init__(self, result=None):
        self.log = []
        self.result = result if result is not None else FakeResult([])

    def table(self, name):
        return FakeQuery(name, self.log, self.result)


def test_recent_attendance_query_shape():
    record = {'id': 1, 'student_id': 'S1'}
    client = FakeClient(FakeResult([record]))
    store = SupabaseDatabase(client=client)

    since = datetime(2024, 1, 10, 8, 55, tzinfo=timezone.utc)
    assert store.get_recent_attendance('S1', 'R1', since) == record

    table, calls = client.log[0]
    assert table == 'attendance'
    assert calls == [
        ('select', ('*',), {}),
        ('eq', ('student_id', 'S1'), {}),
        ('eq', ('room_id', 'R1'), {}),
        ('gt', ('timestamp', '2024-01-10T08:55:00.000+00:00'), {}),
        ('order', ('timestamp',), {'desc': True}),
        ('limit', (1,), {}),
    ]


def test_list_attendance_with_date_range():
    client = FakeClient()
    store = SupabaseDatabase(client=client)
    start = datetime(2024, 1, 10, tzinfo=timezone.utc)
    end = datetime(2024, 1, 10, 23, 59, 59, 999000, tzinfo=timezone.utc)

    assert store.list_attendance(room_id='R1', start=start, end=end) == []
    names = [call[0] for call in client.log[0][1]]
    assert names == ['select', 'order', 'eq', 'gte', 'lte']
    assert client.log[0][1][-1] == ('lte', ('timestamp', '2024-01-10T23:59:59.999+00:00'), {})


def test_descriptors_joined_with_students():
    client = FakeClient()
    SupabaseDatabase(client=client).list_face_descriptors()
    assert client.log[0] == ('face_descriptors', [('select', ('*, students (id, name, email)',), {})])


def test_untrained_students_filter():
    client = FakeClient()
    SupabaseDatabase(client=client).list_students(untrained_only=True)
    assert client.log[0][1] == [
        ('select', ('*',), {}),
        ('eq', ('is_trained', False), {}),
        ('order', ('name',), {}),
    ]


def test_count_uses_exact_count():
    client = FakeClient(FakeResult([], count=3))
    assert SupabaseDatabase(client=client).count_face_descriptors('S1') == 3


def test_client_errors_become_storage_errors():
    client = FakeClient(RuntimeError('JWT expired'))
    with pytest.raises(StorageError, match='JWT expired'):
        SupabaseDatabase(client=client).list_students()


def test_missing_credentials_is_fatal():
    with pytest.raises(RuntimeError):
        SupabaseDatabase(url='', key='')

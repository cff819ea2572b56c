"""Fixtures dùng chung: SQLite tạm, đồng hồ giả và Flask test client."""
from datetime import datetime, timedelta, timezone

import pytest

from app import create_app
from database import DatabaseManager


class FakeClock:
    """Đồng hồ điều khiển được cho cửa sổ cooldown."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 10, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def db(tmp_path):
    database = DatabaseManager(tmp_path / 'attendance.db')
    database.add_student('S1', 'Alice', 'alice@example.com')
    database.add_student('S2', 'Bob', 'bob@example.com')
    database.add_student('S3', 'Carol', None, is_trained=True)
    return database


@pytest.fixture
def app(db, clock, tmp_path):
    app = create_app(
        database=db,
        overrides={
            'TESTING': True,
            'STORAGE_BACKEND': 'sqlite',
            'LOG_DIR': str(tmp_path / 'logs'),
            'ATTENDANCE_TIMEZONE': 'UTC',
            'API_PREFIX': '/api',
        },
        clock=clock,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def make_descriptor(seed, size=128):
    """Descriptor giả lập có giá trị xác định theo seed."""
    return [round(((seed * 31 + i * 7) % 100) / 1000.0, 4) for i in range(size)]

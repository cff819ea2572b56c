"""
Database module for Attendance System
Lưu trữ sinh viên, face descriptor và điểm danh bằng SQLite (dùng cho môi trường local và test)
"""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
import logging

logger = logging.getLogger('database')


class StorageError(Exception):
    """Lỗi từ tầng lưu trữ (database không truy cập được hoặc từ chối ghi)."""


def utc_timestamp(value=None):
    """Chuẩn hóa thời điểm về chuỗi ISO-8601 UTC có mili giây."""
    value = value or datetime.now(timezone.utc)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec='milliseconds')


class DatabaseManager:
    def __init__(self, db_path="attendance.db"):
        self.db_path = str(db_path)
        self.init_database()

    def get_connection(self):
        """Tạo kết nối database"""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row  # Cho phép truy cập theo tên cột
        return conn

    def init_database(self):
        """Khởi tạo database và các bảng"""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        with self.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS students (
                    id VARCHAR(64) PRIMARY KEY,
                    name VARCHAR(100) NOT NULL,
                    email VARCHAR(100),
                    is_trained BOOLEAN DEFAULT 0,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')

            # Descriptor lưu dạng JSON array
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS face_descriptors (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    student_id VARCHAR(64) NOT NULL,
                    descriptor TEXT NOT NULL,
                    photo_number INTEGER NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    FOREIGN KEY (student_id) REFERENCES students(id)
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS attendance (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    student_id VARCHAR(64) NOT NULL,
                    student_name VARCHAR(100) NOT NULL,
                    room_id VARCHAR(64) NOT NULL,
                    confidence REAL,
                    timestamp TEXT NOT NULL
                )
            ''')

            cursor.execute('CREATE INDEX IF NOT EXISTS idx_face_descriptors_student ON face_descriptors(student_id)')
            cursor.execute('CREATE INDEX IF NOT EXISTS idx_attendance_student_room ON attendance(student_id, room_id, timestamp)')
            cursor.execute('CREATE INDEX IF NOT EXISTS idx_attendance_timestamp ON attendance(timestamp)')

            conn.commit()
        conn.close()
        logger.info("Database initialized at %s", self.db_path)

    def _run(self, operation, fn):
        """Chạy một thao tác và gói mọi lỗi sqlite thành StorageError."""
        try:
            conn = self.get_connection()
            try:
                with conn:
                    return fn(conn.cursor())
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.error("DB Error - Operation: %s, Error: %s", operation, exc)
            raise StorageError(str(exc)) from exc

    @staticmethod
    def _student_row(row):
        if row is None:
            return None
        student = dict(row)
        student['is_trained'] = bool(student.get('is_trained'))
        return student

    @staticmethod
    def _descriptor_row(row):
        item = dict(row)
        item['descriptor'] = json.loads(item['descriptor'])
        return item

    # === QUẢN LÝ SINH VIÊN ===
    def add_student(self, student_id, name, email=None, is_trained=False):
        """Thêm sinh viên mới (dùng cho tool seed)"""
        def insert(cursor):
            try:
                cursor.execute('''
                    INSERT INTO students (id, name, email, is_trained)
                    VALUES (?, ?, ?, ?)
                ''', (student_id, name, email, 1 if is_trained else 0))
            except sqlite3.IntegrityError as e:
                logger.warning(f"Student ID {student_id} already exists: {e}")
                return False
            logger.info(f"Added student: {name} ({student_id})")
            return True

        return self._run('add_student', insert)

    def get_student(self, student_id):
        """Lấy thông tin sinh viên"""
        def select(cursor):
            cursor.execute('SELECT * FROM students WHERE id = ?', (student_id,))
            return self._student_row(cursor.fetchone())

        return self._run('get_student', select)

    def list_students(self, untrained_only=False):
        """Lấy danh sách sinh viên, sắp xếp theo tên"""
        def select(cursor):
            if untrained_only:
                cursor.execute('SELECT * FROM students WHERE is_trained = 0 ORDER BY name')
            else:
                cursor.execute('SELECT * FROM students ORDER BY name')
            return [self._student_row(row) for row in cursor.fetchall()]

        return self._run('list_students', select)

    def mark_student_trained(self, student_id):
        """Đánh dấu sinh viên đã huấn luyện; trả về None nếu không có sinh viên"""
        def update(cursor):
            cursor.execute('UPDATE students SET is_trained = 1 WHERE id = ?', (student_id,))
            cursor.execute('SELECT * FROM students WHERE id = ?', (student_id,))
            return self._student_row(cursor.fetchone())

        return self._run('mark_student_trained', update)

    # === FACE DESCRIPTORS ===
    def add_face_descriptor(self, student_id, descriptor, photo_number):
        """Lưu một face descriptor"""
        def insert(cursor):
            cursor.execute('''
                INSERT INTO face_descriptors (student_id, descriptor, photo_number)
                VALUES (?, ?, ?)
            ''', (student_id, json.dumps(list(descriptor)), photo_number))
            cursor.execute('SELECT * FROM face_descriptors WHERE id = ?', (cursor.lastrowid,))
            return self._descriptor_row(cursor.fetchone())

        return self._run('add_face_descriptor', insert)

    def count_face_descriptors(self, student_id):
        def count(cursor):
            cursor.execute('SELECT COUNT(*) FROM face_descriptors WHERE student_id = ?', (student_id,))
            return cursor.fetchone()[0]

        return self._run('count_face_descriptors', count)

    def list_face_descriptors(self, with_student=True):
        """Lấy tất cả descriptor, kèm thông tin sinh viên sở hữu"""
        def select(cursor):
            cursor.execute('''
                SELECT fd.*, s.name AS s_name, s.email AS s_email, s.id AS s_id
                FROM face_descriptors fd
                LEFT JOIN students s ON s.id = fd.student_id
                ORDER BY fd.student_id, fd.photo_number, fd.id
            ''')
            results = []
            for row in cursor.fetchall():
                item = dict(row)
                s_id = item.pop('s_id')
                s_name = item.pop('s_name')
                s_email = item.pop('s_email')
                item['descriptor'] = json.loads(item['descriptor'])
                if with_student:
                    item['students'] = (
                        {'id': s_id, 'name': s_name, 'email': s_email} if s_id is not None else None
                    )
                results.append(item)
            return results

        return self._run('list_face_descriptors', select)

    # === ĐIỂM DANH ===
    def get_recent_attendance(self, student_id, room_id, since):
        """Bản ghi mới nhất của (student_id, room_id) có timestamp > since"""
        def select(cursor):
            cursor.execute('''
                SELECT * FROM attendance
                WHERE student_id = ? AND room_id = ? AND timestamp > ?
                ORDER BY timestamp DESC
                LIMIT 1
            ''', (student_id, room_id, utc_timestamp(since)))
            row = cursor.fetchone()
            return dict(row) if row else None

        return self._run('get_recent_attendance', select)

    def insert_attendance(self, record):
        """Ghi một bản ghi điểm danh (append-only)"""
        def insert(cursor):
            cursor.execute('''
                INSERT INTO attendance (student_id, student_name, room_id, confidence, timestamp)
                VALUES (?, ?, ?, ?, ?)
            ''', (
                record['student_id'],
                record['student_name'],
                record['room_id'],
                record.get('confidence'),
                utc_timestamp(record['timestamp']),
            ))
            cursor.execute('SELECT * FROM attendance WHERE id = ?', (cursor.lastrowid,))
            return dict(cursor.fetchone())

        return self._run('insert_attendance', insert)

    def list_attendance(self, student_id=None, room_id=None, start=None, end=None):
        """Lấy điểm danh theo bộ lọc, mới nhất trước"""
        query = ['SELECT * FROM attendance WHERE 1=1']
        params = []
        if student_id:
            query.append('AND student_id = ?')
            params.append(student_id)
        if room_id:
            query.append('AND room_id = ?')
            params.append(room_id)
        if start is not None:
            query.append('AND timestamp >= ?')
            params.append(utc_timestamp(start))
        if end is not None:
            query.append('AND timestamp <= ?')
            params.append(utc_timestamp(end))
        query.append('ORDER BY timestamp DESC, id DESC')

        def select(cursor):
            cursor.execute(' '.join(query), params)
            return [dict(row) for row in cursor.fetchall()]

        return self._run('list_attendance', select)

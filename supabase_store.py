"""
Supabase storage backend
Lưu trữ trên Supabase (PostgREST) - backend mặc định khi chạy production
"""

import logging

from supabase import create_client, Client

from database import StorageError, utc_timestamp

logger = logging.getLogger('database')


class SupabaseDatabase:
    """Repository trên các bảng students / face_descriptors / attendance của Supabase."""

    def __init__(self, url=None, key=None, client: Client = None):
        if client is None:
            if not url or not key:
                raise RuntimeError("SUPABASE_URL / SUPABASE_KEY not set")
            client = create_client(url, key)
            logger.info("Supabase client initialised → %s", url)
        self.client = client

    def _execute(self, operation, query):
        try:
            result = query.execute()
        except Exception as exc:
            logger.error("DB Error - Operation: %s, Error: %s", operation, exc)
            raise StorageError(getattr(exc, 'message', None) or str(exc)) from exc
        return result

    @staticmethod
    def _first(result):
        rows = result.data or []
        return rows[0] if rows else None

    # === SINH VIÊN ===
    def add_student(self, student_id, name, email=None, is_trained=False):
        existing = self.get_student(student_id)
        if existing:
            logger.warning(f"Student ID {student_id} already exists")
            return False
        self._execute('add_student', self.client.table('students').insert({
            'id': student_id,
            'name': name,
            'email': email,
            'is_trained': bool(is_trained),
        }))
        logger.info(f"Added student: {name} ({student_id})")
        return True

    def get_student(self, student_id):
        result = self._execute(
            'get_student',
            self.client.table('students').select('*').eq('id', student_id).limit(1),
        )
        return self._first(result)

    def list_students(self, untrained_only=False):
        query = self.client.table('students').select('*')
        if untrained_only:
            query = query.eq('is_trained', False)
        result = self._execute('list_students', query.order('name'))
        return result.data or []

    def mark_student_trained(self, student_id):
        result = self._execute(
            'mark_student_trained',
            self.client.table('students').update({'is_trained': True}).eq('id', student_id),
        )
        return self._first(result)

    # === FACE DESCRIPTORS ===
    def add_face_descriptor(self, student_id, descriptor, photo_number):
        result = self._execute(
            'add_face_descriptor',
            self.client.table('face_descriptors').insert([{
                'student_id': student_id,
                'descriptor': list(descriptor),
                'photo_number': photo_number,
            }]),
        )
        return self._first(result)

    def count_face_descriptors(self, student_id):
        result = self._execute(
            'count_face_descriptors',
            self.client.table('face_descriptors')
            .select('id', count='exact')
            .eq('student_id', student_id),
        )
        if result.count is not None:
            return result.count
        return len(result.data or [])

    def list_face_descriptors(self, with_student=True):
        columns = '*, students (id, name, email)' if with_student else '*'
        result = self._execute(
            'list_face_descriptors',
            self.client.table('face_descriptors').select(columns),
        )
        return result.data or []

    # === ĐIỂM DANH ===
    def get_recent_attendance(self, student_id, room_id, since):
        result = self._execute(
            'get_recent_attendance',
            self.client.table('attendance')
            .select('*')
            .eq('student_id', student_id)
            .eq('room_id', room_id)
            .gt('timestamp', utc_timestamp(since))
            .order('timestamp', desc=True)
            .limit(1),
        )
        return self._first(result)

    def insert_attendance(self, record):
        row = dict(record)
        row['timestamp'] = utc_timestamp(record['timestamp'])
        result = self._execute(
            'insert_attendance',
            self.client.table('attendance').insert([row]),
        )
        return self._first(result)

    def list_attendance(self, student_id=None, room_id=None, start=None, end=None):
        query = self.client.table('attendance').select('*').order('timestamp', desc=True)
        if student_id:
            query = query.eq('student_id', student_id)
        if room_id:
            query = query.eq('room_id', room_id)
        if start is not None:
            query = query.gte('timestamp', utc_timestamp(start))
        if end is not None:
            query = query.lte('timestamp', utc_timestamp(end))
        result = self._execute('list_attendance', query)
        return result.data or []

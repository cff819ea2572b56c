"""
Attendance Service - Xác nhận điểm danh
Business logic: chống điểm danh trùng trong khoảng cooldown rồi ghi vào ledger
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from app.errors import DuplicateAttendance
from app.utils.data_utils import parse_finite_number, require_fields
from logging_config import face_recognition_logger


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AttendanceService:
    """Service quản lý logic xác nhận điểm danh"""

    def __init__(
        self,
        database,
        cooldown_seconds: int = 300,
        clock: Callable[[], datetime] = utc_now,
        logger=None
    ):
        self.db = database
        self.cooldown = timedelta(seconds=cooldown_seconds)
        self.clock = clock
        self.logger = logger

    def confirm(
        self,
        student_id: Any,
        student_name: str,
        room_id: Any,
        confidence: Optional[float] = None
    ) -> Dict[str, Any]:
        """
        Ghi điểm danh cho (student_id, room_id).

        Raises DuplicateAttendance nếu đã có bản ghi trong cooldown window,
        kèm bản ghi gần nhất. Kiểm tra và ghi là hai lượt riêng biệt (không atomic):
        hai request gần như đồng thời vẫn có thể cùng được ghi.
        """
        require_fields(
            {'student_id': student_id, 'student_name': student_name, 'room_id': room_id},
            'student_id', 'student_name', 'room_id'
        )
        if confidence is not None:
            confidence = parse_finite_number(confidence, 'confidence')

        now = self.clock()
        window_start = now - self.cooldown

        recent = self.db.get_recent_attendance(student_id, room_id, window_start)
        if recent:
            if self.logger:
                self.logger.info(
                    f"[Attendance] Duplicate for {student_id} in room {room_id}, "
                    f"last at {recent.get('timestamp')}"
                )
            raise DuplicateAttendance(recent)

        record = self.db.insert_attendance({
            'student_id': student_id,
            'student_name': student_name,
            'room_id': room_id,
            'confidence': confidence,
            'timestamp': now,
        })
        face_recognition_logger.log_attendance_marked(student_name, student_id, room_id, confidence)
        return record

    def list_records(self, student_id=None, room_id=None, start=None, end=None):
        """Danh sách điểm danh theo bộ lọc, mới nhất trước"""
        return self.db.list_attendance(
            student_id=student_id,
            room_id=room_id,
            start=start,
            end=end,
        )

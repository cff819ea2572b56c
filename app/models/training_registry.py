"""
Training Registry - Đăng ký face descriptor cho sinh viên
Lưu descriptor và đánh dấu sinh viên đã huấn luyện khi đủ số ảnh mẫu
"""
from typing import Any, Dict, List, Optional

from app.errors import ValidationError
from app.utils.data_utils import is_blank, parse_descriptor, parse_int, require_fields
from logging_config import face_recognition_logger


class TrainingRegistry:
    """Service quản lý dữ liệu huấn luyện khuôn mặt"""

    def __init__(self, database, required_samples: int = 5, logger=None):
        self.db = database
        self.required_samples = required_samples
        self.logger = logger

    def add_embedding(self, student_id: Any, descriptor: Any, photo_number: Any) -> Dict[str, Any]:
        """
        Lưu một descriptor. photo_number do client đánh số (1..K), server chỉ kiểm tra
        khoảng giá trị và giới hạn tối đa K descriptor cho mỗi sinh viên.
        """
        if is_blank(student_id) or descriptor is None or is_blank(photo_number):
            raise ValidationError('Missing required fields: student_id, descriptor, photo_number')
        require_fields({'student_id': student_id}, 'student_id')

        vector = parse_descriptor(descriptor)
        photo_number = parse_int(photo_number, 'photo_number')
        if not 1 <= photo_number <= self.required_samples:
            raise ValidationError(f'photo_number must be between 1 and {self.required_samples}')

        saved = self.db.count_face_descriptors(student_id)
        if saved >= self.required_samples:
            raise ValidationError(
                f'Student {student_id} already has {saved} face descriptors '
                f'(maximum {self.required_samples})'
            )

        row = self.db.add_face_descriptor(student_id, vector, photo_number)
        face_recognition_logger.log_descriptor_saved(student_id, photo_number)
        return row

    def mark_trained(self, student_id: Any) -> Optional[Dict[str, Any]]:
        """Đánh dấu đã huấn luyện (idempotent). Id không tồn tại trả về None."""
        student = self.db.mark_student_trained(student_id)
        if self.logger:
            if student:
                self.logger.info(f"[Training] Student {student_id} marked as trained")
            else:
                self.logger.info(f"[Training] No student with id {student_id}, nothing updated")
        return student

    def progress(self, student_id: Any) -> Dict[str, Any]:
        saved = self.db.count_face_descriptors(student_id)
        return {
            'student_id': student_id,
            'saved': saved,
            'required': self.required_samples,
            'ready': saved >= self.required_samples,
        }

    def list_descriptors(self) -> List[Dict[str, Any]]:
        return self.db.list_face_descriptors(with_student=True)

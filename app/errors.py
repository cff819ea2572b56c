"""
Error types và error handlers
Phân loại lỗi: ValidationError (400), DuplicateAttendance (409), StorageError (500)
"""
from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from database import StorageError
from logging_config import api_logger


class ValidationError(Exception):
    """Request thiếu hoặc sai trường bắt buộc."""

    status_code = 400


class DuplicateAttendance(Exception):
    """Đã điểm danh cùng sinh viên/phòng trong khoảng cooldown."""

    status_code = 409

    def __init__(self, last_attendance, message='Attendance already recorded recently'):
        super().__init__(message)
        self.message = message
        self.last_attendance = last_attendance


def register_error_handlers(app):
    """Đăng ký handlers để mọi lỗi được trả về dạng {error: ...}."""

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        app.logger.warning(f"❌ Validation error on {request.path}: {error}")
        return jsonify({'error': str(error)}), 400

    @app.errorhandler(DuplicateAttendance)
    def handle_duplicate_attendance(error):
        app.logger.info('⚠️ Duplicate attendance detected (within cooldown window)')
        return jsonify({
            'error': error.message,
            'lastAttendance': error.last_attendance,
        }), 409

    @app.errorhandler(StorageError)
    def handle_storage_error(error):
        api_logger.log_error(request.path, str(error), 500)
        return jsonify({'error': str(error)}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        app.logger.error(f"❌ Server error: {error}", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500

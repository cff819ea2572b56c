"""
Cấu hình logging cho hệ thống điểm danh
"""

import logging
import logging.handlers
import time
from datetime import datetime
from pathlib import Path

from flask import g, request


def setup_logging(app, log_level='INFO', log_dir='logs', max_log_size=10*1024*1024, backup_count=5):
    """
    Thiết lập logging cho ứng dụng Flask

    Args:
        app: Flask app instance
        log_level: Mức độ log (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Thư mục chứa file log
        max_log_size: Kích thước tối đa của file log (bytes)
        backup_count: Số lượng file log backup
    """

    # Tạo thư mục logs nếu chưa có
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_level = getattr(logging, str(log_level).upper(), logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # File handler với rotation
    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / 'attendance_system.log',
        maxBytes=max_log_size,
        backupCount=backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    # Handler cho file lỗi
    error_handler = logging.handlers.RotatingFileHandler(
        log_dir / 'errors.log',
        maxBytes=max_log_size,
        backupCount=backup_count,
        encoding='utf-8'
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Xóa handlers cũ nếu có
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(error_handler)

    for name in ('face_recognition', 'database', 'api'):
        logging.getLogger(name).setLevel(log_level)

    app.logger.setLevel(log_level)

    app.logger.info("=" * 50)
    app.logger.info("ATTENDANCE BACKEND STARTUP")
    app.logger.info(f"Timestamp: {datetime.now().isoformat()}")
    app.logger.info(f"Log Level: {logging.getLevelName(log_level)}")
    app.logger.info(f"Log Directory: {log_dir.absolute()}")
    app.logger.info("=" * 50)


class FaceRecognitionLogger:
    """Logger chuyên dụng cho face recognition"""

    def __init__(self):
        self.logger = logging.getLogger('face_recognition')

    def log_face_recognized(self, name, confidence, student_id=None):
        """Log nhận diện khuôn mặt"""
        student_info = f", Student ID: {student_id}" if student_id else ""
        self.logger.info(f"Face recognized - Name: {name}, Confidence: {confidence:.2f}%{student_info}")

    def log_unknown_face(self, distance):
        self.logger.info(f"Unknown face - Best distance: {distance:.3f}")

    def log_descriptor_saved(self, student_id, photo_number):
        self.logger.info(f"Face descriptor saved - Student ID: {student_id}, Photo: #{photo_number}")

    def log_attendance_marked(self, name, student_id, room_id, confidence=None):
        """Log điểm danh"""
        confidence_info = f", Confidence: {confidence:.2f}%" if confidence is not None else ""
        self.logger.info(
            f"Attendance marked - Name: {name}, Student ID: {student_id}, Room: {room_id}{confidence_info}"
        )


class APILogger:
    """Logger chuyên dụng cho API calls"""

    def __init__(self):
        self.logger = logging.getLogger('api')

    def log_request(self, method, endpoint, ip_address=None):
        """Log yêu cầu API"""
        ip_info = f", IP: {ip_address}" if ip_address else ""
        self.logger.info(f"API Request - {method} {endpoint}{ip_info}")

    def log_response(self, endpoint, status_code, duration=None):
        """Log phản hồi API"""
        duration_info = f", Duration: {duration:.3f}s" if duration is not None else ""
        self.logger.info(f"API Response - {endpoint}, Status: {status_code}{duration_info}")

    def log_error(self, endpoint, error_message, status_code=500):
        """Log lỗi API"""
        self.logger.error(f"API Error - {endpoint}, Status: {status_code}, Error: {error_message}")


# Các instance logger toàn cục
face_recognition_logger = FaceRecognitionLogger()
api_logger = APILogger()


def get_client_ip(request):
    """Lấy IP address của client"""
    if request.headers.get('X-Forwarded-For'):
        return request.headers.get('X-Forwarded-For').split(',')[0].strip()
    elif request.headers.get('X-Real-IP'):
        return request.headers.get('X-Real-IP')
    else:
        return request.remote_addr


def register_request_logging(app):
    """Log mọi request/response qua APILogger"""

    @app.before_request
    def _log_request():
        g.request_started = time.perf_counter()
        api_logger.log_request(request.method, request.path, ip_address=get_client_ip(request))

    @app.after_request
    def _log_response(response):
        started = g.pop('request_started', None)
        duration = time.perf_counter() - started if started is not None else None
        api_logger.log_response(request.path, response.status_code, duration)
        return response

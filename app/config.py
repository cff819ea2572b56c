"""
Configuration constants và settings
"""
import os

# Storage configuration
STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'supabase').strip().lower()
SUPABASE_URL = os.getenv('SUPABASE_URL', '')
SUPABASE_KEY = os.getenv('SUPABASE_KEY', '')
DATABASE_PATH = os.getenv('DATABASE_PATH', 'attendance.db')

# Server configuration
FLASK_HOST = os.getenv('FLASK_HOST', '0.0.0.0')
FLASK_PORT = int(os.getenv('FLASK_PORT', '5000'))
FLASK_DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes')
API_PREFIX = '/' + os.getenv('API_PREFIX', '/api').strip('/')
MAX_CONTENT_LENGTH = 50 * 1024 * 1024  # 50MB

# Attendance configuration
ATTENDANCE_COOLDOWN_SECONDS = int(os.getenv('ATTENDANCE_COOLDOWN_SECONDS', '300'))  # 5 phút
ATTENDANCE_TIMEZONE = os.getenv('ATTENDANCE_TIMEZONE') or None

# Training configuration
REQUIRED_FACE_SAMPLES = max(1, int(os.getenv('REQUIRED_FACE_SAMPLES', '5')))

# Face matching (face-api FaceMatcher mặc định 0.6)
FACE_MATCH_THRESHOLD = float(os.getenv('FACE_MATCH_THRESHOLD', '0.6'))

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_DIR = os.getenv('LOG_DIR', 'logs')


def as_flask_config():
    """Các giá trị được nạp vào app.config khi tạo app."""
    return {
        'STORAGE_BACKEND': STORAGE_BACKEND,
        'SUPABASE_URL': SUPABASE_URL,
        'SUPABASE_KEY': SUPABASE_KEY,
        'DATABASE_PATH': DATABASE_PATH,
        'API_PREFIX': API_PREFIX,
        'MAX_CONTENT_LENGTH': MAX_CONTENT_LENGTH,
        'ATTENDANCE_COOLDOWN_SECONDS': ATTENDANCE_COOLDOWN_SECONDS,
        'ATTENDANCE_TIMEZONE': ATTENDANCE_TIMEZONE,
        'REQUIRED_FACE_SAMPLES': REQUIRED_FACE_SAMPLES,
        'FACE_MATCH_THRESHOLD': FACE_MATCH_THRESHOLD,
        'LOG_LEVEL': LOG_LEVEL,
        'LOG_DIR': LOG_DIR,
    }

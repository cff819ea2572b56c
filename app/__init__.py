"""
App package initialization
Khởi tạo Flask application và cấu hình
"""
from flask import Flask
from flask_cors import CORS

from logging_config import setup_logging, register_request_logging
from app import globals as app_globals
from app import config


def _init_database(app):
    """Khởi tạo storage backend theo STORAGE_BACKEND"""
    backend = app.config['STORAGE_BACKEND']

    if backend == 'sqlite':
        from database import DatabaseManager
        database = DatabaseManager(app.config['DATABASE_PATH'])
        app.logger.info(f"[STARTUP] ✅ SQLite database at {database.db_path}")
        return database

    if backend == 'supabase':
        url = app.config['SUPABASE_URL']
        key = app.config['SUPABASE_KEY']
        if not url or not key:
            raise RuntimeError('Missing Supabase credentials: set SUPABASE_URL and SUPABASE_KEY')
        from supabase_store import SupabaseDatabase
        database = SupabaseDatabase(url, key)
        app.logger.info("[STARTUP] ✅ Supabase client initialized")
        return database

    raise RuntimeError(f"Unknown STORAGE_BACKEND: {backend}")


def create_app(database=None, overrides=None, clock=None):
    """
    Factory function để tạo Flask application

    Args:
        database: repository đã khởi tạo (tests inject DatabaseManager tạm)
        overrides: dict ghi đè app.config
        clock: hàm trả về datetime hiện tại (UTC) cho AttendanceService
    """
    from app.errors import register_error_handlers
    from app.models import AttendanceService, TrainingRegistry
    from app.models.attendance_service import utc_now
    from app.utils.data_utils import resolve_timezone

    app = Flask(__name__)
    app.config.update(config.as_flask_config())
    if overrides:
        app.config.update(overrides)

    setup_logging(app, log_level=app.config['LOG_LEVEL'], log_dir=app.config['LOG_DIR'])
    register_request_logging(app)

    CORS(app)

    # Kiểm tra cấu hình múi giờ ngay khi khởi động
    app.config['ATTENDANCE_TZINFO'] = resolve_timezone(app.config['ATTENDANCE_TIMEZONE'])

    # =============================================================================
    # INITIALIZE SERVICES
    # =============================================================================

    app_globals.database = database if database is not None else _init_database(app)

    app_globals.attendance_service = AttendanceService(
        database=app_globals.database,
        cooldown_seconds=app.config['ATTENDANCE_COOLDOWN_SECONDS'],
        clock=clock or utc_now,
        logger=app.logger
    )
    app.logger.info("[STARTUP] ✅ AttendanceService initialized")

    app_globals.training_registry = TrainingRegistry(
        database=app_globals.database,
        required_samples=app.config['REQUIRED_FACE_SAMPLES'],
        logger=app.logger
    )
    app.logger.info("[STARTUP] ✅ TrainingRegistry initialized")

    register_error_handlers(app)

    # Đăng ký blueprints
    from app.routes import register_blueprints
    register_blueprints(app, url_prefix=app.config['API_PREFIX'])

    return app

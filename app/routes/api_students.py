"""
API routes for students
Các API endpoint cho danh sách sinh viên và trạng thái huấn luyện
"""
from flask import Blueprint, jsonify, current_app

from app import globals as app_globals

student_api_bp = Blueprint('student_api', __name__, url_prefix='/students')


@student_api_bp.route('', methods=['GET'])
def get_students():
    """Lấy danh sách sinh viên (theo tên)."""
    current_app.logger.info('📋 Fetching all students...')
    students = app_globals.database.list_students()
    current_app.logger.info(f'✅ Successfully fetched {len(students)} students')
    return jsonify(students)


@student_api_bp.route('/untrained', methods=['GET'])
def get_untrained_students():
    """Sinh viên chưa huấn luyện (cho màn hình training)."""
    current_app.logger.info('📋 Fetching untrained students...')
    students = app_globals.database.list_students(untrained_only=True)
    current_app.logger.info(f'✅ Found {len(students)} untrained students')
    return jsonify(students)


@student_api_bp.route('/<student_id>/trained', methods=['POST'])
def mark_student_trained(student_id):
    current_app.logger.info(f'✅ Marking student {student_id} as trained')
    student = app_globals.training_registry.mark_trained(student_id)
    return jsonify({'message': 'Student marked as trained', 'student': student})


@student_api_bp.route('/<student_id>/training-progress', methods=['GET'])
def get_training_progress(student_id):
    """Số descriptor đã lưu so với số ảnh mẫu yêu cầu."""
    return jsonify(app_globals.training_registry.progress(student_id))

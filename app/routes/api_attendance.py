"""
API routes for attendance
Các API endpoint xác nhận và tra cứu điểm danh
"""
from flask import Blueprint, jsonify, request, current_app

from app import globals as app_globals
from app.utils import get_request_data, local_day_bounds

attendance_api_bp = Blueprint('attendance_api', __name__, url_prefix='/attendance')


@attendance_api_bp.route('/confirm', methods=['POST'])
def confirm_attendance():
    """Xác nhận điểm danh (kèm độ tin cậy nếu có)"""
    data = get_request_data()
    confidence = data.get('confidence')

    current_app.logger.info('📝 Attendance confirmation request: %s', {
        'student_id': data.get('student_id'),
        'student_name': data.get('student_name'),
        'room_id': data.get('room_id'),
        'confidence': f'{confidence}%' if confidence is not None else 'N/A',
    })

    record = app_globals.attendance_service.confirm(
        data.get('student_id'),
        data.get('student_name'),
        data.get('room_id'),
        confidence=confidence,
    )

    current_app.logger.info(f'✅ Attendance confirmed successfully: {record}')
    return jsonify({
        'message': 'Attendance confirmed successfully',
        'attendance': record,
    }), 201


@attendance_api_bp.route('', methods=['GET'])
def get_attendance():
    """Lấy điểm danh theo student_id, room_id, date (YYYY-MM-DD), mới nhất trước"""
    student_id = request.args.get('student_id') or None
    room_id = request.args.get('room_id') or None
    date_text = request.args.get('date') or None
    current_app.logger.info('📊 Fetching attendance records with filters: %s', {
        'student_id': student_id,
        'room_id': room_id,
        'date': date_text,
    })

    start = end = None
    if date_text:
        start, end = local_day_bounds(date_text, current_app.config['ATTENDANCE_TZINFO'])

    records = app_globals.attendance_service.list_records(
        student_id=student_id,
        room_id=room_id,
        start=start,
        end=end,
    )
    current_app.logger.info(f'✅ Successfully fetched {len(records)} attendance records')
    return jsonify(records)

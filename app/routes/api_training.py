"""
API routes for face descriptors and recognition
Các API lưu face descriptor (training) và so khớp khuôn mặt
"""
from flask import Blueprint, jsonify, current_app

from app import globals as app_globals
from app.models import FaceMatcher, UNKNOWN_LABEL
from app.utils import get_request_data, parse_descriptor
from logging_config import face_recognition_logger

training_api_bp = Blueprint('training_api', __name__)


@training_api_bp.route('/face-descriptors', methods=['POST'])
def save_face_descriptor():
    """Lưu face descriptor cho một sinh viên"""
    data = get_request_data()
    student_id = data.get('student_id')
    photo_number = data.get('photo_number')
    current_app.logger.info(f'💾 Saving face descriptor for student {student_id}, photo #{photo_number}')

    descriptor = app_globals.training_registry.add_embedding(
        student_id,
        data.get('descriptor'),
        photo_number,
    )

    current_app.logger.info(f'✅ Face descriptor saved for {student_id}')
    return jsonify({'message': 'Face descriptor saved', 'descriptor': descriptor}), 201


@training_api_bp.route('/face-descriptors', methods=['GET'])
def get_face_descriptors():
    """Tất cả descriptor kèm sinh viên sở hữu (id, name, email)"""
    current_app.logger.info('📋 Fetching all face descriptors...')
    descriptors = app_globals.training_registry.list_descriptors()
    current_app.logger.info(f'✅ Fetched {len(descriptors)} face descriptors')
    return jsonify(descriptors)


@training_api_bp.route('/recognize', methods=['POST'])
def recognize_face():
    """So khớp một descriptor với các sinh viên đã huấn luyện"""
    data = get_request_data()
    descriptor = parse_descriptor(data.get('descriptor'))

    matcher = FaceMatcher.from_rows(
        app_globals.training_registry.list_descriptors(),
        threshold=current_app.config['FACE_MATCH_THRESHOLD'],
    )
    result = matcher.find_best_match(descriptor)

    if result['label'] == UNKNOWN_LABEL:
        if result['distance'] is not None:
            face_recognition_logger.log_unknown_face(result['distance'])
    else:
        face_recognition_logger.log_face_recognized(
            result['label'], result['confidence'], student_id=result['student_id']
        )
    return jsonify(result)

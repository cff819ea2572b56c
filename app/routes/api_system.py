"""
API routes for system status
Các API cho trạng thái hệ thống
"""
from flask import Blueprint, jsonify

system_api_bp = Blueprint('system_api', __name__)


@system_api_bp.route('/health', methods=['GET'])
def api_health():
    """Health check"""
    return jsonify({'status': 'ok', 'message': 'Server is running'})

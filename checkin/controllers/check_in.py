# controllers/check_in.py
"""
Check-in routes for code scanning.
Scanner devices post decoded code strings; the simulate routes stand in for a
camera during testing.
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from checkin.controllers.helpers import error_response
from checkin.errors import CheckInError, ValidationError
from checkin.extensions import get_state

check_in_bp = Blueprint('check_in', __name__)

logger = logging.getLogger('check_in')


@check_in_bp.route('/verify', methods=['POST'])
def verify():
    """
    Evaluate a presented code and record the decision.
    Accepts JSON {"code": ...} or a form field named code.
    """
    data = request.get_json(silent=True) or request.form
    if not isinstance(data, dict):
        data = {}

    code = data.get('code') or data.get('qr_data') or ''
    if not isinstance(code, str) or not code.strip():
        return error_response(ValidationError('Code is required', field='code'), logger)

    try:
        result = get_state().check_in_service.scan(code, method=data.get('method', 'qr_code'))
    except CheckInError as e:
        return error_response(e, logger)

    response = result.to_dict()
    response['ui_status'] = 'success' if result.success else 'error'
    return jsonify(response)


@check_in_bp.route('/simulate', methods=['GET'])
def simulate_targets():
    """Active people offered as simulate-scan buttons."""
    limit = current_app.config.get('SIMULATE_SCAN_LIMIT', 4)
    people = get_state().check_in_service.simulate_targets(limit=limit)
    return jsonify({
        'success': True,
        'people': [{'id': p.id, 'name': p.name, 'qrCode': p.code} for p in people]
    })


@check_in_bp.route('/simulate/<person_id>', methods=['POST'])
def simulate(person_id):
    """Scan the code of a known person."""
    try:
        result = get_state().check_in_service.simulate(person_id)
    except CheckInError as e:
        return error_response(e, logger)

    return jsonify(result.to_dict())

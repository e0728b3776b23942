# controllers/helpers.py
from flask import jsonify


def error_response(error, logger=None):
    """JSON envelope for a CheckInError, with its HTTP status."""
    if logger:
        logger.warning(f"{error.error_code}: {error.message}")
    return jsonify(error.to_dict()), error.status_code


def form_error_response(form, message='Invalid input'):
    """JSON envelope for failed form validation."""
    return jsonify({
        'success': False,
        'message': message,
        'error_code': 'validation_error',
        'errors': form.errors
    }), 400

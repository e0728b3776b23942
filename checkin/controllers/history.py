# controllers/history.py
"""
Access history routes: log listing, dashboard counters and exports.
"""

import io
import json
import logging

from flask import Blueprint, Response, jsonify, request, send_file

from checkin.controllers.helpers import error_response
from checkin.errors import ValidationError
from checkin.extensions import get_state
from checkin.models.log_entry import Decision
from checkin.utils.export_data import XLSX_MIMETYPE, export_to_excel, export_to_json

history_bp = Blueprint('history', __name__)

logger = logging.getLogger('history')


@history_bp.route('/', methods=['GET'])
def list_entries():
    """Log entries, most recent first. Optional ?status= and ?limit= filters."""
    entries = get_state().access_log.all()

    status = request.args.get('status')
    if status:
        if status not in Decision.ALL:
            return error_response(ValidationError(f'Unknown status: {status}', field='status'), logger)
        entries = [entry for entry in entries if entry.decision == status]

    limit = request.args.get('limit', type=int)
    if limit is not None and limit >= 0:
        entries = entries[:limit]

    return jsonify({
        'success': True,
        'count': len(entries),
        'entries': [entry.to_dict() for entry in entries]
    })


@history_bp.route('/stats', methods=['GET'])
def stats():
    """People, granted and today counters for the dashboard."""
    return jsonify({'success': True, 'stats': get_state().check_in_service.stats()})


@history_bp.route('/export.json', methods=['GET'])
def export_json():
    """Download both collections as one JSON document."""
    state = get_state()
    data, filename = export_to_json(state.directory.all(), state.access_log.all())

    logger.info(f"JSON export: {len(data['users'])} people, {len(data['accessLog'])} entries")
    return Response(
        json.dumps(data, ensure_ascii=False, indent=2),
        mimetype='application/json',
        headers={'Content-Disposition': f'attachment; filename={filename}'}
    )


@history_bp.route('/export.xlsx', methods=['GET'])
def export_xlsx():
    """Download people and access log as a workbook."""
    state = get_state()
    data, filename = export_to_excel(state.directory.all(), state.access_log.all())

    return send_file(
        io.BytesIO(data),
        as_attachment=True,
        download_name=filename,
        mimetype=XLSX_MIMETYPE
    )

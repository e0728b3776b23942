# controllers/people.py
"""
Attendee management routes: registration, spreadsheet import, status toggle,
deletion and QR code images.
"""

import io
import logging

from flask import Blueprint, jsonify, send_file

from checkin.controllers.forms import ImportForm, PersonForm
from checkin.controllers.helpers import error_response, form_error_response
from checkin.errors import CheckInError, NotFoundError
from checkin.extensions import get_state
from checkin.services.importer import import_spreadsheet
from checkin.services.qr_code_service import QRCodeService
from checkin.utils.export_data import XLSX_MIMETYPE, build_import_template

people_bp = Blueprint('people', __name__)

logger = logging.getLogger('people')


@people_bp.route('/', methods=['GET'])
def list_people():
    """List registered people in registration order."""
    directory = get_state().directory
    people = directory.all()
    return jsonify({
        'success': True,
        'count': len(people),
        'active': len(directory.active()),
        'people': [person.to_dict() for person in people]
    })


@people_bp.route('/', methods=['POST'])
def add_person():
    """Register one person from form fields or a JSON body."""
    form = PersonForm()
    if not form.validate():
        return form_error_response(form, 'Por favor ingresa un nombre')

    try:
        person = get_state().directory.add(form.name.data, form.email.data or '')
    except CheckInError as e:
        return error_response(e, logger)

    return jsonify({
        'success': True,
        'message': f'Usuario agregado: {person.name}',
        'person': person.to_dict()
    }), 201


@people_bp.route('/import', methods=['POST'])
def import_people():
    """Bulk import from an uploaded CSV or Excel file."""
    form = ImportForm()
    if not form.validate():
        return form_error_response(form, 'Invalid import file')

    upload = form.file.data
    try:
        result = import_spreadsheet(upload.stream, get_state().directory, filename=upload.filename)
    except CheckInError as e:
        return error_response(e, logger)

    logger.info(f"Imported {result.count} people from {upload.filename}")
    response = result.to_dict()
    response['message'] = f'{result.count} usuarios importados'
    return jsonify(response)


@people_bp.route('/template', methods=['GET'])
def download_template():
    """Static example spreadsheet for imports."""
    data, filename = build_import_template()
    return send_file(
        io.BytesIO(data),
        as_attachment=True,
        download_name=filename,
        mimetype=XLSX_MIMETYPE
    )


@people_bp.route('/<person_id>/toggle', methods=['POST'])
def toggle_person(person_id):
    """Flip a person's active status."""
    try:
        person = get_state().directory.toggle_active(person_id)
    except CheckInError as e:
        return error_response(e, logger)

    return jsonify({'success': True, 'person': person.to_dict()})


@people_bp.route('/<person_id>', methods=['DELETE'])
def delete_person(person_id):
    """Delete a person. Confirmation happens client-side."""
    try:
        person = get_state().directory.remove(person_id)
    except CheckInError as e:
        return error_response(e, logger)

    return jsonify({
        'success': True,
        'message': f'{person.name} eliminado',
        'person': person.to_dict()
    })


@people_bp.route('/<person_id>/qrcode.png', methods=['GET'])
def person_qrcode(person_id):
    """QR image of the person's code."""
    person = get_state().directory.get(person_id)
    if not person:
        return error_response(NotFoundError(f'Person {person_id} not found'), logger)

    png = QRCodeService.render_png(person.code)
    return send_file(io.BytesIO(png), mimetype='image/png', download_name=f'{person.code}.png')

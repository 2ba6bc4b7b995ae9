import json
import logging
from datetime import date
from flask import Blueprint, request, jsonify, current_app
from models import db
from errors import InvalidPayloadError
from transfer import export_snapshot, import_snapshot

logger = logging.getLogger(__name__)

transfer_bp = Blueprint('transfer', __name__, url_prefix='/api')


@transfer_bp.route('/export', methods=['GET'])
def export_database():
    response = jsonify(export_snapshot(db.session))
    response.headers['Content-Disposition'] = f"attachment; filename=condo_export_{date.today().isoformat()}.json"
    return response


@transfer_bp.route('/import', methods=['POST'])
def import_database():
    upload = request.files.get(current_app.config['IMPORT_FILE_FIELD'])
    if upload is None:
        raise InvalidPayloadError("Error retrieving import file")

    try:
        document = json.loads(upload.read())
    except (UnicodeDecodeError, ValueError):
        raise InvalidPayloadError("Invalid import file format")

    counts = import_snapshot(db.session, document)
    return jsonify(
        message="Database import successful",
        imported_residents=counts['residents'],
        imported_payments=counts['payments'],
        imported_expenses=counts['expenses'],
    )

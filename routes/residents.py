from flask import Blueprint, request, jsonify
from models import db
import repository
from validation import validate_resident

residents_bp = Blueprint('residents', __name__, url_prefix='/api/residents')


@residents_bp.route('', methods=['GET'])
def index():
    return jsonify(repository.list_residents(db.session))


@residents_bp.route('', methods=['POST'])
def create_resident():
    resident = validate_resident(request.get_json(silent=True))
    return jsonify(repository.create_resident(db.session, resident)), 201


@residents_bp.route('/<int:id>', methods=['GET'])
def get_resident(id):
    return jsonify(repository.get_resident(db.session, id))


@residents_bp.route('/<int:id>', methods=['PUT'])
def update_resident(id):
    resident = validate_resident(request.get_json(silent=True))
    repository.update_resident(db.session, id, resident)
    return jsonify(dict(resident, id=id))


@residents_bp.route('/<int:id>', methods=['DELETE'])
def delete_resident(id):
    repository.delete_resident(db.session, id)
    return jsonify(result="success")

from flask import Blueprint, request, jsonify
from models import db
import repository
from validation import validate_payment

payments_bp = Blueprint('payments', __name__, url_prefix='/api/payments')


@payments_bp.route('', methods=['GET'])
def index():
    return jsonify(repository.list_payments(db.session))


@payments_bp.route('', methods=['POST'])
def create_payment():
    payment = validate_payment(request.get_json(silent=True))
    return jsonify(repository.create_payment(db.session, payment)), 201


@payments_bp.route('/<int:id>', methods=['GET'])
def get_payment(id):
    return jsonify(repository.get_payment(db.session, id))


@payments_bp.route('/<int:id>', methods=['PUT'])
def update_payment(id):
    payment = validate_payment(request.get_json(silent=True))
    repository.update_payment(db.session, id, payment)
    return jsonify(dict(payment, id=id))


@payments_bp.route('/<int:id>', methods=['DELETE'])
def delete_payment(id):
    repository.delete_payment(db.session, id)
    return jsonify(result="success")

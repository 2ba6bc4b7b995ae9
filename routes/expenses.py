from flask import Blueprint, request, jsonify
from models import db
import repository
from validation import validate_expense

expenses_bp = Blueprint('expenses', __name__, url_prefix='/api/expenses')


@expenses_bp.route('', methods=['GET'])
def index():
    return jsonify(repository.list_expenses(db.session))


@expenses_bp.route('', methods=['POST'])
def create_expense():
    expense = validate_expense(request.get_json(silent=True))
    return jsonify(repository.create_expense(db.session, expense)), 201


@expenses_bp.route('/<int:id>', methods=['GET'])
def get_expense(id):
    return jsonify(repository.get_expense(db.session, id))


@expenses_bp.route('/<int:id>', methods=['PUT'])
def update_expense(id):
    expense = validate_expense(request.get_json(silent=True))
    repository.update_expense(db.session, id, expense)
    return jsonify(dict(expense, id=id))


@expenses_bp.route('/<int:id>', methods=['DELETE'])
def delete_expense(id):
    repository.delete_expense(db.session, id)
    return jsonify(result="success")

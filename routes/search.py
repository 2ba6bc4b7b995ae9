from flask import Blueprint, request, jsonify
from models import db
import search

search_bp = Blueprint('search', __name__, url_prefix='/api/search')


@search_bp.route('/residents', methods=['GET'])
def residents():
    return jsonify(search.search_residents(db.session, request.args.get('q')))


@search_bp.route('/payments', methods=['GET'])
def payments():
    return jsonify(search.search_payments(
        db.session,
        query=request.args.get('q'),
        resident_id=search.parse_resident_id(request.args.get('resident_id')),
        start_date=search.parse_date_bound(request.args.get('start_date'), 'start_date'),
        end_date=search.parse_date_bound(request.args.get('end_date'), 'end_date'),
    ))


@search_bp.route('/expenses', methods=['GET'])
def expenses():
    return jsonify(search.search_expenses(
        db.session,
        query=request.args.get('q'),
        category=request.args.get('category'),
        start_date=search.parse_date_bound(request.args.get('start_date'), 'start_date'),
        end_date=search.parse_date_bound(request.args.get('end_date'), 'end_date'),
    ))

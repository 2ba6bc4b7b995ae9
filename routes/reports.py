from datetime import date
from flask import Blueprint, request, Response
from models import db
from reports import payments_report, expenses_report
from search import parse_resident_id, parse_date_bound

reports_bp = Blueprint('reports', __name__, url_prefix='/api/reports')


def csv_attachment(body, prefix):
    return Response(
        body,
        mimetype='text/csv',
        headers={"Content-Disposition": f"attachment; filename={prefix}_{date.today().isoformat()}.csv"},
    )


@reports_bp.route('/payments/export', methods=['GET'])
def export_payments():
    body = payments_report(
        db.session,
        query=request.args.get('q'),
        resident_id=parse_resident_id(request.args.get('resident_id')),
        start_date=parse_date_bound(request.args.get('start_date'), 'start_date'),
        end_date=parse_date_bound(request.args.get('end_date'), 'end_date'),
    )
    return csv_attachment(body, 'payments_report')


@reports_bp.route('/expenses/export', methods=['GET'])
def export_expenses():
    body = expenses_report(
        db.session,
        query=request.args.get('q'),
        category=request.args.get('category'),
        start_date=parse_date_bound(request.args.get('start_date'), 'start_date'),
        end_date=parse_date_bound(request.args.get('end_date'), 'end_date'),
    )
    return csv_attachment(body, 'expenses_report')

import csv
import io
import logging
from repository import PAYMENT_ORDER, EXPENSE_ORDER, fetch_all, format_date
from search import payment_filters, expense_filters

logger = logging.getLogger(__name__)

PAYMENT_HEADER = ['ID', 'Resident', 'Unit', 'Amount', 'Description', 'Date']
EXPENSE_HEADER = ['ID', 'Amount', 'Description', 'Date', 'Category']

PAYMENT_REPORT_SELECT = """
    SELECT p.id, r.name AS resident_name, r.unit, p.amount, p.description, p.payment_date
    FROM payments p
    LEFT JOIN residents r ON p.resident_id = r.id
"""
EXPENSE_REPORT_SELECT = "SELECT id, amount, description, expense_date, category FROM expenses"


def _amount(value):
    return '%.2f' % float(value)


def _date(value):
    if value is None:
        raise ValueError("missing date")
    return format_date(value)


def _write(header, rows, decode, label):
    output = io.StringIO()
    writer = csv.writer(output, lineterminator='\n')
    writer.writerow(header)
    for row in rows:
        try:
            record = decode(row)
        except (TypeError, ValueError) as e:
            logger.warning("Skipping %s row %s: %s", label, row.get('id'), e)
            continue
        writer.writerow(record)
    return output.getvalue()


def _payment_record(row):
    return [
        int(row['id']),
        row['resident_name'] or '',
        row['unit'] or '',
        _amount(row['amount']),
        row['description'] or '',
        _date(row['payment_date']),
    ]


def _expense_record(row):
    return [
        int(row['id']),
        _amount(row['amount']),
        row['description'] or '',
        _date(row['expense_date']),
        row['category'] or '',
    ]


def payments_report(session, query=None, resident_id=None, start_date=None, end_date=None):
    """CSV text of the matching payments, newest first."""
    predicates = payment_filters(query, resident_id, start_date, end_date)
    rows = fetch_all(session, PAYMENT_REPORT_SELECT + predicates.where() + PAYMENT_ORDER, predicates.params)
    return _write(PAYMENT_HEADER, rows, _payment_record, 'payment')


def expenses_report(session, query=None, category=None, start_date=None, end_date=None):
    """CSV text of the matching expenses, newest first."""
    predicates = expense_filters(query, category, start_date, end_date)
    rows = fetch_all(session, EXPENSE_REPORT_SELECT + predicates.where() + EXPENSE_ORDER, predicates.params)
    return _write(EXPENSE_HEADER, rows, _expense_record, 'expense')

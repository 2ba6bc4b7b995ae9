"""
Whole-database export and import.

An export document carries every resident, payment and expense plus the
time it was taken. Importing one wipes all three tables and reloads them
from the document inside a single transaction: either every row lands
with its original id or nothing changes.
"""

import logging
import math
from datetime import datetime
from sqlalchemy import text
from errors import InvalidPayloadError
from repository import (
    RESIDENT_SELECT, EXPENSE_SELECT, fetch_all,
    resident_to_dict, payment_to_dict, expense_to_dict,
)
from validation import in_id_range

logger = logging.getLogger(__name__)

INVALID_DOCUMENT = "Invalid import file format"

EXPORT_PAYMENT_SELECT = """
    SELECT id, resident_id, amount, description, payment_date, created_at FROM payments
"""

IMPORT_STATEMENTS = {
    'residents': """
        INSERT INTO residents (id, name, unit, contact, email, created_at, updated_at)
        VALUES (:id, :name, :unit, :contact, :email,
                COALESCE(:created_at, CURRENT_TIMESTAMP), COALESCE(:updated_at, CURRENT_TIMESTAMP))
    """,
    'payments': """
        INSERT INTO payments (id, resident_id, amount, description, payment_date, created_at)
        VALUES (:id, :resident_id, :amount, :description, :payment_date,
                COALESCE(:created_at, CURRENT_TIMESTAMP))
    """,
    'expenses': """
        INSERT INTO expenses (id, amount, description, expense_date, category, created_at)
        VALUES (:id, :amount, :description, :expense_date, :category,
                COALESCE(:created_at, CURRENT_TIMESTAMP))
    """,
}

# (field, kind, required) per collection, in insert column order
DOCUMENT_FIELDS = {
    'residents': [
        ('id', int, True), ('name', str, False), ('unit', str, False),
        ('contact', str, False), ('email', str, False),
        ('created_at', str, False), ('updated_at', str, False),
    ],
    'payments': [
        ('id', int, True), ('resident_id', int, False), ('amount', float, False),
        ('description', str, False), ('payment_date', str, False), ('created_at', str, False),
    ],
    'expenses': [
        ('id', int, True), ('amount', float, False), ('description', str, False),
        ('expense_date', str, False), ('category', str, False), ('created_at', str, False),
    ],
}

# Deletion order keeps payments from outliving their residents mid-transaction.
DELETE_ORDER = ('payments', 'expenses', 'residents')
INSERT_ORDER = ('residents', 'payments', 'expenses')


def export_snapshot(session):
    return {
        "residents": [resident_to_dict(row) for row in fetch_all(session, RESIDENT_SELECT)],
        "payments": [payment_to_dict(row) for row in fetch_all(session, EXPORT_PAYMENT_SELECT)],
        "expenses": [expense_to_dict(row) for row in fetch_all(session, EXPENSE_SELECT)],
        "export_date": datetime.now().astimezone().isoformat(timespec='seconds'),
    }


def _coerce(value, kind):
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidPayloadError(INVALID_DOCUMENT)
    if kind is int:
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if not isinstance(value, int) or not in_id_range(value):
            raise InvalidPayloadError(INVALID_DOCUMENT)
        return value
    if kind is float:
        if not isinstance(value, (int, float)):
            raise InvalidPayloadError(INVALID_DOCUMENT)
        try:
            amount = float(value)
        except OverflowError:
            raise InvalidPayloadError(INVALID_DOCUMENT)
        if not math.isfinite(amount):
            raise InvalidPayloadError(INVALID_DOCUMENT)
        return amount
    if not isinstance(value, str):
        raise InvalidPayloadError(INVALID_DOCUMENT)
    return value


def parse_document(document):
    """Check the shape of an import document and return its rows per table."""
    if not isinstance(document, dict):
        raise InvalidPayloadError(INVALID_DOCUMENT)

    parsed = {}
    for table, fields in DOCUMENT_FIELDS.items():
        items = document.get(table)
        if items is None:
            items = []
        if not isinstance(items, list):
            raise InvalidPayloadError(INVALID_DOCUMENT)

        rows = []
        for item in items:
            if not isinstance(item, dict):
                raise InvalidPayloadError(INVALID_DOCUMENT)
            row = {}
            for field, kind, required in fields:
                value = _coerce(item.get(field), kind)
                if required and value is None:
                    raise InvalidPayloadError(INVALID_DOCUMENT)
                if value is None and kind is not int and field not in ('created_at', 'updated_at'):
                    value = 0.0 if kind is float else ''
                row[field] = value
            rows.append(row)
        parsed[table] = rows
    return parsed


def import_snapshot(session, document):
    """Replace all stored rows with the document's. Returns the row counts per table."""
    parsed = parse_document(document)

    try:
        for table in DELETE_ORDER:
            session.execute(text(f"DELETE FROM {table}"))
        for table in INSERT_ORDER:
            if parsed[table]:
                session.execute(text(IMPORT_STATEMENTS[table]), parsed[table])
        session.commit()
    except Exception:
        session.rollback()
        logger.warning("Import rolled back, existing data kept")
        raise

    counts = {table: len(parsed[table]) for table in INSERT_ORDER}
    logger.info("Imported %(residents)d residents, %(payments)d payments, %(expenses)d expenses", counts)
    return counts

"""
Filtered lookups over residents, payments and expenses.

Filters are collected as (SQL fragment, bound parameters) pairs and
joined with AND. A filter left empty adds nothing to the WHERE clause,
so a search without filters reads exactly like the matching list call.
"""

from errors import InvalidPayloadError
from repository import (
    RESIDENT_SELECT, PAYMENT_SELECT, EXPENSE_SELECT,
    RESIDENT_ORDER, PAYMENT_ORDER, EXPENSE_ORDER,
    fetch_all, resident_to_dict, payment_to_dict, expense_to_dict,
)
from validation import is_valid_date, in_id_range


class Predicates:
    """Ordered list of WHERE fragments with their named parameters."""

    def __init__(self):
        self.fragments = []
        self.params = {}

    def add(self, fragment, **params):
        self.fragments.append(fragment)
        self.params.update(params)
        return self

    def where(self):
        if not self.fragments:
            return ''
        return ' WHERE ' + ' AND '.join(self.fragments)

    def __len__(self):
        return len(self.fragments)


def like_pattern(query):
    return '%' + query + '%'


def parse_resident_id(value):
    if value is None or value == '':
        return None
    try:
        resident_id = int(value)
    except (TypeError, ValueError):
        raise InvalidPayloadError("Invalid resident_id")
    if not in_id_range(resident_id):
        raise InvalidPayloadError("Invalid resident_id")
    return resident_id


def parse_date_bound(value, name):
    if not value:
        return None
    if not is_valid_date(value):
        raise InvalidPayloadError(f"Invalid {name}, must be YYYY-MM-DD")
    return value


def date_range(predicates, column, start_date=None, end_date=None):
    if start_date:
        predicates.add(f"{column} >= :start_date", start_date=start_date)
    if end_date:
        predicates.add(f"{column} <= :end_date", end_date=end_date)
    return predicates


def resident_filters(query=None):
    predicates = Predicates()
    if query:
        predicates.add(
            "(name LIKE :q OR unit LIKE :q OR email LIKE :q OR contact LIKE :q)",
            q=like_pattern(query),
        )
    return predicates


def payment_filters(query=None, resident_id=None, start_date=None, end_date=None):
    predicates = Predicates()
    if query:
        predicates.add("(p.description LIKE :q OR r.name LIKE :q)", q=like_pattern(query))
    if resident_id is not None:
        predicates.add("p.resident_id = :resident_id", resident_id=resident_id)
    return date_range(predicates, 'p.payment_date', start_date, end_date)


def expense_filters(query=None, category=None, start_date=None, end_date=None):
    predicates = Predicates()
    if query:
        predicates.add("description LIKE :q", q=like_pattern(query))
    if category:
        predicates.add("category = :category", category=category)
    return date_range(predicates, 'expense_date', start_date, end_date)


def search_residents(session, query=None):
    predicates = resident_filters(query)
    rows = fetch_all(session, RESIDENT_SELECT + predicates.where() + RESIDENT_ORDER, predicates.params)
    return [resident_to_dict(row) for row in rows]


def search_payments(session, query=None, resident_id=None, start_date=None, end_date=None):
    predicates = payment_filters(query, resident_id, start_date, end_date)
    rows = fetch_all(session, PAYMENT_SELECT + predicates.where() + PAYMENT_ORDER, predicates.params)
    return [payment_to_dict(row) for row in rows]


def search_expenses(session, query=None, category=None, start_date=None, end_date=None):
    predicates = expense_filters(query, category, start_date, end_date)
    rows = fetch_all(session, EXPENSE_SELECT + predicates.where() + EXPENSE_ORDER, predicates.params)
    return [expense_to_dict(row) for row in rows]

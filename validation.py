"""
Request payload checks run before every create and update.

Each validator takes the decoded JSON body and returns the cleaned
column values. A body of the wrong shape raises InvalidPayloadError; a
body that breaks a business rule raises ValidationError. Neither touches
storage.
"""

import math
import re
from datetime import datetime
from errors import InvalidPayloadError, ValidationError

DATE_FORMAT = '%Y-%m-%d'
DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
INVALID_PAYLOAD = "Invalid request payload"

# Ids and foreign keys are stored as signed 64-bit integers.
MAX_ID = 2 ** 63 - 1
MIN_ID = -2 ** 63


def in_id_range(value):
    return MIN_ID <= value <= MAX_ID


def is_valid_date(value):
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def _payload(data):
    if not isinstance(data, dict):
        raise InvalidPayloadError(INVALID_PAYLOAD)
    return data


def _string(data, key):
    value = data.get(key)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise InvalidPayloadError(INVALID_PAYLOAD)
    return value.strip()


def _number(data, key):
    value = data.get(key, 0)
    if value is None:
        return 0.0
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidPayloadError(INVALID_PAYLOAD)
    try:
        amount = float(value)
    except OverflowError:
        raise InvalidPayloadError(INVALID_PAYLOAD)
    if not math.isfinite(amount):
        raise InvalidPayloadError(INVALID_PAYLOAD)
    return amount


def _integer(data, key):
    value = data.get(key, 0)
    if value is None:
        return 0
    if isinstance(value, bool):
        raise InvalidPayloadError(INVALID_PAYLOAD)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or not in_id_range(value):
        raise InvalidPayloadError(INVALID_PAYLOAD)
    return value


def _check_date(value, missing_message):
    if not value:
        raise ValidationError(missing_message)
    if not is_valid_date(value):
        raise ValidationError("invalid date format, must be YYYY-MM-DD")


def validate_resident(data):
    data = _payload(data)
    resident = {
        'name': _string(data, 'name'),
        'unit': _string(data, 'unit'),
        'contact': _string(data, 'contact'),
        'email': _string(data, 'email'),
    }
    if not resident['name']:
        raise ValidationError("name is required")
    if not resident['unit']:
        raise ValidationError("unit is required")
    if resident['email'] and ('@' not in resident['email'] or '.' not in resident['email']):
        raise ValidationError("invalid email format")
    return resident


def validate_payment(data):
    data = _payload(data)
    payment = {
        'resident_id': _integer(data, 'resident_id'),
        'amount': _number(data, 'amount'),
        'description': _string(data, 'description'),
        'payment_date': _string(data, 'payment_date'),
    }
    if payment['resident_id'] <= 0:
        raise ValidationError("resident is required")
    if payment['amount'] <= 0:
        raise ValidationError("amount must be greater than zero")
    _check_date(payment['payment_date'], "payment date is required")
    return payment


def validate_expense(data):
    data = _payload(data)
    expense = {
        'amount': _number(data, 'amount'),
        'description': _string(data, 'description'),
        'expense_date': _string(data, 'expense_date'),
        'category': _string(data, 'category'),
    }
    if expense['amount'] <= 0:
        raise ValidationError("amount must be greater than zero")
    if not expense['description']:
        raise ValidationError("description is required")
    _check_date(expense['expense_date'], "expense date is required")
    return expense

"""
Parameterized reads and writes for residents, payments and expenses.

Every function takes the session it runs on as its first argument.
Writes commit before returning; update and delete do not care whether a
row matched.
"""

from datetime import date, datetime
from sqlalchemy import text
from errors import NotFoundError
from validation import in_id_range

RESIDENT_SELECT = "SELECT id, name, unit, contact, email, created_at, updated_at FROM residents"
RESIDENT_ORDER = " ORDER BY name, id"

PAYMENT_SELECT = """
    SELECT p.id, p.resident_id, r.name AS resident_name, p.amount, p.description,
           p.payment_date, p.created_at
    FROM payments p
    LEFT JOIN residents r ON p.resident_id = r.id
"""
PAYMENT_ORDER = " ORDER BY p.payment_date DESC, p.id DESC"

EXPENSE_SELECT = "SELECT id, amount, description, expense_date, category, created_at FROM expenses"
EXPENSE_ORDER = " ORDER BY expense_date DESC, id DESC"

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


def format_date(value):
    if isinstance(value, date):
        return value.isoformat()
    return value


def format_timestamp(value):
    if isinstance(value, datetime):
        return value.strftime(TIMESTAMP_FORMAT)
    return value


def fetch_all(session, sql, params=None):
    return session.execute(text(sql), params or {}).mappings().all()


def fetch_one(session, sql, params):
    return session.execute(text(sql), params).mappings().first()


def resident_to_dict(row):
    return {
        "id": row['id'],
        "name": row['name'],
        "unit": row['unit'],
        "contact": row['contact'],
        "email": row['email'],
        "created_at": format_timestamp(row['created_at']),
        "updated_at": format_timestamp(row['updated_at']),
    }


def payment_to_dict(row):
    payment = {
        "id": row['id'],
        "resident_id": row['resident_id'],
        "amount": float(row['amount']),
        "description": row['description'],
        "payment_date": format_date(row['payment_date']),
        "created_at": format_timestamp(row['created_at']),
    }
    if row.get('resident_name') is not None:
        payment["residentName"] = row['resident_name']
    return payment


def expense_to_dict(row):
    return {
        "id": row['id'],
        "amount": float(row['amount']),
        "description": row['description'],
        "expense_date": format_date(row['expense_date']),
        "category": row['category'],
        "created_at": format_timestamp(row['created_at']),
    }


# Residents

def list_residents(session):
    return [resident_to_dict(row) for row in fetch_all(session, RESIDENT_SELECT + RESIDENT_ORDER)]


def get_resident(session, resident_id):
    if not in_id_range(resident_id):
        raise NotFoundError("Resident not found")
    row = fetch_one(session, RESIDENT_SELECT + " WHERE id = :id", {"id": resident_id})
    if row is None:
        raise NotFoundError("Resident not found")
    return resident_to_dict(row)


def create_resident(session, resident):
    result = session.execute(
        text("INSERT INTO residents (name, unit, contact, email) VALUES (:name, :unit, :contact, :email)"),
        resident,
    )
    new_id = result.lastrowid
    session.commit()
    return get_resident(session, new_id)


def update_resident(session, resident_id, resident):
    if not in_id_range(resident_id):
        return
    session.execute(
        text("""
            UPDATE residents
            SET name = :name, unit = :unit, contact = :contact, email = :email,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = :id
        """),
        dict(resident, id=resident_id),
    )
    session.commit()


def delete_resident(session, resident_id):
    if not in_id_range(resident_id):
        return
    session.execute(text("DELETE FROM residents WHERE id = :id"), {"id": resident_id})
    session.commit()


# Payments

def list_payments(session):
    return [payment_to_dict(row) for row in fetch_all(session, PAYMENT_SELECT + PAYMENT_ORDER)]


def get_payment(session, payment_id):
    if not in_id_range(payment_id):
        raise NotFoundError("Payment not found")
    row = fetch_one(session, PAYMENT_SELECT + " WHERE p.id = :id", {"id": payment_id})
    if row is None:
        raise NotFoundError("Payment not found")
    return payment_to_dict(row)


def create_payment(session, payment):
    result = session.execute(
        text("""
            INSERT INTO payments (resident_id, amount, description, payment_date)
            VALUES (:resident_id, :amount, :description, :payment_date)
        """),
        payment,
    )
    new_id = result.lastrowid
    session.commit()
    return get_payment(session, new_id)


def update_payment(session, payment_id, payment):
    if not in_id_range(payment_id):
        return
    session.execute(
        text("""
            UPDATE payments
            SET resident_id = :resident_id, amount = :amount, description = :description,
                payment_date = :payment_date
            WHERE id = :id
        """),
        dict(payment, id=payment_id),
    )
    session.commit()


def delete_payment(session, payment_id):
    if not in_id_range(payment_id):
        return
    session.execute(text("DELETE FROM payments WHERE id = :id"), {"id": payment_id})
    session.commit()


# Expenses

def list_expenses(session):
    return [expense_to_dict(row) for row in fetch_all(session, EXPENSE_SELECT + EXPENSE_ORDER)]


def get_expense(session, expense_id):
    if not in_id_range(expense_id):
        raise NotFoundError("Expense not found")
    row = fetch_one(session, EXPENSE_SELECT + " WHERE id = :id", {"id": expense_id})
    if row is None:
        raise NotFoundError("Expense not found")
    return expense_to_dict(row)


def create_expense(session, expense):
    result = session.execute(
        text("""
            INSERT INTO expenses (amount, description, expense_date, category)
            VALUES (:amount, :description, :expense_date, :category)
        """),
        expense,
    )
    new_id = result.lastrowid
    session.commit()
    return get_expense(session, new_id)


def update_expense(session, expense_id, expense):
    if not in_id_range(expense_id):
        return
    session.execute(
        text("""
            UPDATE expenses
            SET amount = :amount, description = :description, expense_date = :expense_date,
                category = :category
            WHERE id = :id
        """),
        dict(expense, id=expense_id),
    )
    session.commit()


def delete_expense(session, expense_id):
    if not in_id_range(expense_id):
        return
    session.execute(text("DELETE FROM expenses WHERE id = :id"), {"id": expense_id})
    session.commit()

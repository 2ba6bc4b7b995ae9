from sqlalchemy import text

RESIDENTS = [
    ("John Smith", "101", "555-123-4567", "john.smith@example.com"),
    ("Jane Doe", "102", "555-234-5678", "jane.doe@example.com"),
    ("Robert Johnson", "201", "555-345-6789", "robert.j@example.com"),
    ("Maria Garcia", "202", "555-456-7890", "maria.g@example.com"),
    ("James Wilson", "301", "555-567-8901", "james.w@example.com"),
]

# (index into RESIDENTS, amount, description, date)
PAYMENTS = [
    (0, 500.00, "Monthly maintenance fee", "2023-05-01"),
    (1, 500.00, "Monthly maintenance fee", "2023-05-02"),
    (2, 500.00, "Monthly maintenance fee", "2023-05-03"),
    (3, 500.00, "Monthly maintenance fee", "2023-05-05"),
    (4, 500.00, "Monthly maintenance fee", "2023-05-07"),
    (0, 500.00, "Monthly maintenance fee", "2023-06-01"),
    (1, 500.00, "Monthly maintenance fee", "2023-06-02"),
    (2, 500.00, "Monthly maintenance fee", "2023-06-04"),
]

EXPENSES = [
    (1200.00, "Building cleaning", "Cleaning", "2023-05-15"),
    (350.50, "Elevator maintenance", "Maintenance", "2023-05-20"),
    (750.75, "Water bill", "Utilities", "2023-05-25"),
    (825.25, "Electricity bill", "Utilities", "2023-05-25"),
    (125.00, "Garden maintenance", "Maintenance", "2023-06-05"),
    (950.00, "Insurance premium", "Insurance", "2023-06-10"),
    (500.00, "Parking lot repair", "Maintenance", "2023-06-15"),
]


def load_sample_data(session):
    """Replace every stored row with the demo dataset, in one transaction."""
    try:
        session.execute(text("DELETE FROM payments"))
        session.execute(text("DELETE FROM expenses"))
        session.execute(text("DELETE FROM residents"))

        resident_ids = []
        for name, unit, contact, email in RESIDENTS:
            result = session.execute(
                text("INSERT INTO residents (name, unit, contact, email) VALUES (:name, :unit, :contact, :email)"),
                {"name": name, "unit": unit, "contact": contact, "email": email},
            )
            resident_ids.append(result.lastrowid)

        session.execute(
            text("""
                INSERT INTO payments (resident_id, amount, description, payment_date)
                VALUES (:resident_id, :amount, :description, :payment_date)
            """),
            [
                {"resident_id": resident_ids[index], "amount": amount,
                 "description": description, "payment_date": day}
                for index, amount, description, day in PAYMENTS
            ],
        )
        session.execute(
            text("""
                INSERT INTO expenses (amount, description, category, expense_date)
                VALUES (:amount, :description, :category, :expense_date)
            """),
            [
                {"amount": amount, "description": description, "category": category, "expense_date": day}
                for amount, description, category, day in EXPENSES
            ],
        )
        session.commit()
    except Exception:
        session.rollback()
        raise

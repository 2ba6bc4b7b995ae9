from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


class Resident(db.Model):
    __tablename__ = 'residents'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    unit = db.Column(db.Text, nullable=False)
    contact = db.Column(db.Text)
    email = db.Column(db.Text)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())


class Payment(db.Model):
    __tablename__ = 'payments'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    # No ON DELETE CASCADE: removing a resident leaves its payments in place.
    resident_id = db.Column(db.Integer, db.ForeignKey('residents.id'), nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    description = db.Column(db.Text)
    payment_date = db.Column(db.Date, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())


class Expense(db.Model):
    __tablename__ = 'expenses'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    description = db.Column(db.Text)
    expense_date = db.Column(db.Date, nullable=False)
    category = db.Column(db.Text)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

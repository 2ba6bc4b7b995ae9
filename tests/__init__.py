"""
Condo Manager Test Suite

This package contains the tests for the Condo Manager application:

- test_validation.py: Payload validation rules for every entity
- test_residents.py: Resident CRUD endpoints
- test_payments.py: Payment CRUD endpoints and the resident join
- test_expenses.py: Expense CRUD endpoints
- test_search.py: Filtered search endpoints and predicate building
- test_transfer.py: Whole-database export and import
- test_reports.py: CSV report endpoints
- test_app.py: Error envelope, index page, command line and sample data

Run all tests:
    pytest tests/

Run specific test file:
    pytest tests/test_transfer.py

Run with verbose output:
    pytest tests/ -v
"""

"""
Test suite for whole-database export and import.
Tests cover the export document, round trips and transactional rollback.
"""

import io
import json
from unittest.mock import patch

import pytest

from models import db
from transfer import import_snapshot


def seed(client):
    client.post('/api/residents', json={'name': 'John Doe', 'unit': '101', 'email': 'john@example.com'})
    client.post('/api/residents', json={'name': 'Jane Doe', 'unit': '102'})
    client.post('/api/payments', json={'resident_id': 1, 'amount': 500, 'description': 'Fee', 'payment_date': '2023-01-15'})
    client.post('/api/payments', json={'resident_id': 2, 'amount': 250.5, 'description': 'Partial, "late"', 'payment_date': '2023-01-20'})
    client.post('/api/expenses', json={'amount': 80, 'description': 'Light bulbs', 'category': 'Maintenance', 'expense_date': '2023-01-10'})


def upload(client, document, filename='export.json'):
    body = document if isinstance(document, bytes) else json.dumps(document).encode()
    return client.post(
        '/api/import',
        data={'importFile': (io.BytesIO(body), filename)},
        content_type='multipart/form-data',
    )


def by_id(rows):
    return sorted(rows, key=lambda row: row['id'])


class TestExport:
    """Test the export document."""

    def test_export_is_dated_attachment(self, client):
        """Export should download as a dated JSON file."""
        seed(client)
        response = client.get('/api/export')
        assert response.status_code == 200
        assert response.mimetype == 'application/json'
        disposition = response.headers['Content-Disposition']
        assert disposition.startswith('attachment; filename=condo_export_')
        assert disposition.endswith('.json')

    def test_export_contains_every_row(self, client):
        """Export should carry every row and the export date."""
        seed(client)
        document = client.get('/api/export').get_json()
        assert len(document['residents']) == 2
        assert len(document['payments']) == 2
        assert len(document['expenses']) == 1
        assert document['export_date']

    def test_export_empty_database(self, client):
        """Empty database should export empty collections."""
        document = client.get('/api/export').get_json()
        assert document['residents'] == []
        assert document['payments'] == []
        assert document['expenses'] == []


class TestImport:
    """Test importing an export document."""

    def test_round_trip_into_fresh_database(self, client, fresh_client):
        """Importing an export should reproduce it in an empty database."""
        seed(client)
        document = client.get('/api/export').get_json()

        response = upload(fresh_client, document)
        assert response.status_code == 200
        assert response.get_json() == {
            'message': 'Database import successful',
            'imported_residents': 2,
            'imported_payments': 2,
            'imported_expenses': 1,
        }

        copy = fresh_client.get('/api/export').get_json()
        assert by_id(copy['residents']) == by_id(document['residents'])
        assert by_id(copy['payments']) == by_id(document['payments'])
        assert by_id(copy['expenses']) == by_id(document['expenses'])

        resident = fresh_client.get('/api/residents/1').get_json()
        assert resident['name'] == 'John Doe'
        assert resident['unit'] == '101'

    def test_import_replaces_existing_rows(self, client):
        """Import should replace all existing rows."""
        seed(client)
        document = {
            'residents': [{'id': 7, 'name': 'Maria Garcia', 'unit': '202', 'contact': '', 'email': ''}],
            'payments': [],
            'expenses': [],
        }

        assert upload(client, document).status_code == 200

        residents = client.get('/api/residents').get_json()
        assert [(r['id'], r['name']) for r in residents] == [(7, 'Maria Garcia')]
        assert client.get('/api/payments').get_json() == []
        assert client.get('/api/expenses').get_json() == []

    def test_missing_collections_count_as_empty(self, client):
        """Collections missing from the document should import as empty."""
        seed(client)
        response = upload(client, {'residents': [{'id': 3, 'name': 'Solo', 'unit': '1'}]})
        assert response.status_code == 200
        assert response.get_json()['imported_payments'] == 0

    def test_failed_import_keeps_previous_data(self, client):
        """Storage failure mid-import should roll back to the previous data."""
        seed(client)
        before = client.get('/api/export').get_json()
        document = {
            'residents': [
                {'id': 1, 'name': 'Dup One', 'unit': '1'},
                {'id': 1, 'name': 'Dup Two', 'unit': '2'},
            ],
        }

        response = upload(client, document)
        assert response.status_code == 500
        assert 'UNIQUE' in response.get_json()['error']

        after = client.get('/api/export').get_json()
        assert by_id(after['residents']) == by_id(before['residents'])
        assert by_id(after['payments']) == by_id(before['payments'])
        assert by_id(after['expenses']) == by_id(before['expenses'])

    def test_missing_file_rejected(self, client):
        """Request without a file should be rejected."""
        response = client.post('/api/import', data={}, content_type='multipart/form-data')
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Error retrieving import file'}

    def test_invalid_json_rejected(self, client):
        """File that is not JSON should be rejected."""
        response = upload(client, b'{"residents": [')
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Invalid import file format'}

    def test_wrong_shape_rejected_before_any_change(self, client):
        """Row with a field of the wrong type should be rejected before anything changes."""
        seed(client)
        response = upload(client, {'residents': [{'id': 'one', 'name': 'X', 'unit': '1'}]})
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Invalid import file format'}
        assert len(client.get('/api/residents').get_json()) == 2

    def test_id_beyond_integer_range_rejected_before_any_change(self, client):
        """Id too large for the id column should be rejected as a bad document."""
        seed(client)
        response = upload(client, {'residents': [{'id': 2 ** 70, 'name': 'X', 'unit': '1'}]})
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Invalid import file format'}
        assert len(client.get('/api/residents').get_json()) == 2

    def test_non_storage_failure_rolls_back(self, app, client):
        """Any failure during the reload should roll back to the previous data."""
        seed(client)
        before = client.get('/api/export').get_json()
        document = {'residents': [{'id': 9, 'name': 'New', 'unit': '9'}]}

        with app.app_context():
            with patch.object(db.session, 'commit', side_effect=OverflowError('int too large')):
                with pytest.raises(OverflowError):
                    import_snapshot(db.session, document)

        after = client.get('/api/export').get_json()
        assert by_id(after['residents']) == by_id(before['residents'])
        assert by_id(after['payments']) == by_id(before['payments'])
        assert by_id(after['expenses']) == by_id(before['expenses'])

    def test_oversized_upload_rejected(self, app, client):
        """Upload over the size limit should return a JSON 413."""
        app.config['MAX_CONTENT_LENGTH'] = 64
        response = upload(client, {'residents': [{'id': n, 'name': 'x' * 20, 'unit': '1'} for n in range(1, 10)]})
        assert response.status_code == 413
        assert response.get_json() == {'error': 'Import file too large'}

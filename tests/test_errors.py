"""
Test suite for error responses.
Tests cover validation errors, unknown ids, unknown routes and unexpected failures.
"""

from unittest.mock import MagicMock


class TestValidationErrors:
    """400 responses carry per-field detail."""

    def test_field_details(self, client):
        response = client.post('/api/transactions', json={"amount": "abc", "type": "gift"})
        assert response.status_code == 400
        body = response.get_json()
        fields = {e['field'] for e in body['errors']}
        assert {"description", "amount", "type", "category"} <= fields
        for error in body['errors']:
            assert set(error) == {"field", "message", "type"}

    def test_non_object_body(self, client):
        response = client.post('/api/goals', json=["not", "an", "object"])
        assert response.status_code == 400
        assert response.get_json()['errors'][0]['type'] == "object_type"

    def test_malformed_json(self, client):
        response = client.post('/api/goals', data="{oops", content_type='application/json')
        assert response.status_code == 400


class TestNotFound:
    """404 responses."""

    def test_unknown_route_is_json(self, client):
        response = client.get('/api/nothing-here')
        assert response.status_code == 404
        assert 'message' in response.get_json()

    def test_method_not_allowed(self, client):
        response = client.patch('/api/goals')
        assert response.status_code == 405


class TestUnexpectedErrors:
    """500 responses never leak internals."""

    def test_storage_failure_on_list(self, app, client):
        broken = MagicMock()
        broken.list.side_effect = RuntimeError("connection refused to 10.0.0.5")
        app.storage._repositories['subscriptions'] = broken
        response = client.get('/api/subscriptions')
        assert response.status_code == 500
        assert response.get_json() == {"message": "Failed to fetch subscriptions"}

    def test_storage_failure_on_create(self, app, client):
        broken = MagicMock()
        broken.create.side_effect = RuntimeError("disk full")
        app.storage._repositories['savings'] = broken
        response = client.post('/api/savings', json={"name": "Emergency"})
        assert response.status_code == 500
        assert response.get_json() == {"message": "Failed to create savings account"}

    def test_failure_is_local_to_resource(self, app, client):
        broken = MagicMock()
        broken.delete.side_effect = RuntimeError("boom")
        app.storage._repositories['goals'] = broken
        assert client.delete('/api/goals/abc').status_code == 500
        assert client.get('/api/subscriptions').status_code == 200

    def test_dashboard_failure(self, app, client):
        broken = MagicMock()
        broken.list.side_effect = RuntimeError("boom")
        app.storage._repositories['transactions'] = broken
        response = client.get('/api/dashboard')
        assert response.status_code == 500
        assert response.get_json() == {"message": "Failed to build dashboard"}

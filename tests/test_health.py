"""
Tests for health and version endpoints
"""
import json


class TestHealthEndpoint:
    """Tests for /health endpoint"""

    def test_health_endpoint_returns_200(self, client):
        """Health endpoint should return 200 when healthy"""
        response = client.get('/health')
        assert response.status_code == 200

    def test_health_endpoint_returns_json(self, client):
        """Health endpoint should return JSON"""
        response = client.get('/health')
        assert response.content_type == 'application/json'

    def test_health_endpoint_checks_database(self, client):
        """Health endpoint should check database"""
        response = client.get('/health')
        data = json.loads(response.data)
        assert data['status'] == 'healthy'
        assert data['checks']['database']['status'] == 'ok'

    def test_health_endpoint_reports_unhealthy_database(self, tmp_path):
        import sqlite3

        from keymanager import create_app
        from keymanager.config import TestingConfig

        app = create_app(TestingConfig, db_factory=lambda: sqlite3.connect(str(tmp_path / 'missing.db')))
        response = app.test_client().get('/health')
        data = json.loads(response.data)
        assert response.status_code == 503
        assert data['checks']['database']['status'] == 'error'

    def test_security_headers_present(self, client):
        response = client.get('/health')
        assert response.headers['X-Content-Type-Options'] == 'nosniff'


class TestVersionEndpoint:
    """Tests for /api/version endpoint"""

    def test_version_endpoint_contains_version(self, client):
        """Version endpoint should contain version field"""
        response = client.get('/api/version')
        data = json.loads(response.data)
        assert response.status_code == 200
        assert isinstance(data['version'], str)
        assert data['api_version'] == 'v1'
        assert 'python_version' in data

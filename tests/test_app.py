"""
Test application factory, configuration and CLI commands.
"""

import pytest
from app import create_app


class TestAppFactory:
    """Test Flask application factory."""

    def test_create_app_test(self):
        """Test app creation with test config."""
        app = create_app('test')
        assert app.config['TESTING'] is True
        assert app.config['WTF_CSRF_ENABLED'] is False
        assert app.config['COURT_EVENING_START_HOUR'] == 18
        assert app.config['COURT_EVENING_RATE'] == 200

    def test_create_app_development_bootstraps_database(self):
        """Non-test apps make sure the schema and default admins exist."""
        from models.user import get_user_by_email

        app = create_app('development')
        assert app.config['DEBUG'] is True

        with app.app_context():
            assert get_user_by_email(app.config['DEFAULT_SUPERADMIN_EMAIL']) is not None

    def test_production_requires_secret_key(self, monkeypatch):
        monkeypatch.delenv('SECRET_KEY', raising=False)
        with pytest.raises(ValueError):
            create_app('production')

    def test_app_has_blueprints(self):
        """Test that all blueprints are registered."""
        app = create_app('test')
        blueprint_names = list(app.blueprints.keys())

        assert 'auth' in blueprint_names
        assert 'admin' in blueprint_names
        assert 'court' in blueprint_names
        assert 'api' in blueprint_names

    def test_app_has_extensions(self):
        """Test that extensions are initialized."""
        app = create_app('test')

        assert hasattr(app, 'login_manager')
        assert 'csrf' in app.extensions


class TestCors:
    """Only the configured frontend origin gets CORS headers."""

    def test_frontend_origin_is_allowed_with_credentials(self, client, app):
        origin = app.config['FRONTEND_URL']
        response = client.get('/api/health', headers={'Origin': origin})

        assert response.headers['Access-Control-Allow-Origin'] == origin
        assert response.headers['Access-Control-Allow-Credentials'] == 'true'

    def test_other_origins_get_no_cors_headers(self, client):
        response = client.get('/api/health', headers={'Origin': 'http://evil.example'})

        assert response.status_code == 200
        assert 'Access-Control-Allow-Origin' not in response.headers
        assert 'Access-Control-Allow-Credentials' not in response.headers

    def test_preflight_for_frontend(self, client, app):
        origin = app.config['FRONTEND_URL']
        response = client.options('/court-reservations', headers={
            'Origin': origin,
            'Access-Control-Request-Method': 'POST',
            'Access-Control-Request-Headers': 'Content-Type',
        })

        assert response.status_code == 200
        assert response.headers['Access-Control-Allow-Origin'] == origin
        assert 'POST' in response.headers['Access-Control-Allow-Methods']


class TestCliCommands:

    def test_init_db(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['init-db'])

        assert result.exit_code == 0
        assert 'initialized successfully' in result.output

    def test_bootstrap_admins_when_present(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['bootstrap-admins'])

        assert result.exit_code == 0
        assert 'already exist' in result.output

    def test_create_user(self, app):
        from models.user import get_user_by_email

        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'create-user', 'clerk@example.com', 'admin', '--password', 'secret123'
        ])

        assert result.exit_code == 0
        assert 'User created successfully' in result.output

        with app.app_context():
            assert get_user_by_email('clerk@example.com')['user_type'] == 'admin'

    def test_create_user_duplicate(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'create-user', app.config['DEFAULT_ADMIN_EMAIL'], 'admin', '--password', 'secret123'
        ])

        assert 'Error creating user' in result.output

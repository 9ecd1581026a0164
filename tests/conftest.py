"""
Pytest configuration and fixtures.
Ensures tests use an isolated test database, not the production database.
"""

import os
import pytest
import tempfile

# Set test database path BEFORE importing app
# This ensures all tests use an isolated database
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), 'bhub_test.db')
os.environ['DATABASE_PATH'] = TEST_DB_PATH

RESIDENT_PASSWORD = 'resident123'


@pytest.fixture(scope='session', autouse=True)
def setup_test_environment():
    """Set up test environment before any tests run."""
    os.environ['DATABASE_PATH'] = TEST_DB_PATH
    os.environ['FLASK_ENV'] = 'test'

    yield

    # Cleanup: remove test database (and WAL files) after all tests
    for suffix in ('', '-wal', '-shm'):
        path = TEST_DB_PATH + suffix
        if os.path.exists(path):
            try:
                os.remove(path)
            except PermissionError:
                pass  # Windows may have file locked


@pytest.fixture
def app():
    """
    Create test application with a freshly initialized database.

    The app context is not kept open, so every request gets its own
    context (and its own login state). Model tests push one explicitly.
    """
    from app import create_app
    from database import init_db

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['DATABASE_PATH'] = TEST_DB_PATH

    with app.app_context():
        init_db()

    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def make_resident(app):
    """Factory creating resident accounts; returns the new user ID."""
    from models.user import create_user

    counter = {'n': 0}

    def _make(first_name='Juan', last_name='Dela Cruz'):
        counter['n'] += 1
        with app.app_context():
            return create_user(
                first_name=first_name,
                last_name=last_name,
                email=f'resident{counter["n"]}@example.com',
                password=RESIDENT_PASSWORD,
                user_type='resident'
            )

    return _make


@pytest.fixture
def resident_id(make_resident):
    return make_resident()


@pytest.fixture
def admin_id(app):
    """ID of the seeded default admin."""
    from models.user import get_user_by_email

    with app.app_context():
        return get_user_by_email(app.config['DEFAULT_ADMIN_EMAIL'])['id']


def login(client, email, password):
    """Log a test client in through the JSON login endpoint."""
    response = client.post('/auth/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.get_json()
    return response


@pytest.fixture
def resident_client(app, resident_id):
    """Test client logged in as a fresh resident."""
    client = app.test_client()
    with app.app_context():
        from models.user import get_user_by_id
        email = get_user_by_id(resident_id)['email']
    login(client, email, RESIDENT_PASSWORD)
    return client


@pytest.fixture
def admin_client(app):
    """Test client logged in as the default admin."""
    client = app.test_client()
    login(client, app.config['DEFAULT_ADMIN_EMAIL'], app.config['DEFAULT_ADMIN_PASSWORD'])
    return client


@pytest.fixture
def create_reservation(app):
    """
    Factory that books the court through the model layer.

    Returns the stored reservation dict.
    """
    from models.court_reservation import create_court_reservation

    def _create(requester_id, reservation_date='2030-06-01', start_time='10:00', duration=1,
                representative_name='Juan Dela Cruz', purpose='Basketball practice'):
        with app.app_context():
            reservation, _ = create_court_reservation(
                requester_id=requester_id,
                reservation_date=reservation_date,
                start_time=start_time,
                duration=duration,
                representative_name=representative_name,
                purpose=purpose
            )
            return reservation

    return _create

"""
Tests for database initialization and default admin bootstrap.
"""


class TestBootstrapDefaultAdmins:

    def test_init_creates_both_default_admins(self, app):
        from models.user import get_user_by_email, check_password

        with app.app_context():
            superadmin = get_user_by_email(app.config['DEFAULT_SUPERADMIN_EMAIL'])
            admin = get_user_by_email(app.config['DEFAULT_ADMIN_EMAIL'])

        assert superadmin['user_type'] == 'superadmin'
        assert admin['user_type'] == 'admin'
        assert check_password(superadmin, app.config['DEFAULT_SUPERADMIN_PASSWORD'])
        assert check_password(admin, app.config['DEFAULT_ADMIN_PASSWORD'])

    def test_bootstrap_is_idempotent(self, app):
        from database import get_db, bootstrap_db, bootstrap_default_admins

        with app.app_context():
            assert bootstrap_default_admins(get_db()) == []
            bootstrap_db()
            count = get_db().execute(
                "SELECT COUNT(*) as n FROM users WHERE user_type IN ('admin', 'superadmin')"
            ).fetchone()['n']

        assert count == 2

    def test_bootstrap_restores_missing_admin(self, app):
        from database import get_db, bootstrap_default_admins

        with app.app_context():
            db = get_db()
            db.execute("DELETE FROM users WHERE user_type = 'admin'")
            db.commit()
            assert bootstrap_default_admins(db) == ['admin']

    def test_bootstrap_keeps_existing_data(self, app, resident_id, create_reservation):
        from database import bootstrap_db
        from models.court_reservation import get_court_reservations_filtered

        create_reservation(resident_id)

        with app.app_context():
            bootstrap_db()
            assert len(get_court_reservations_filtered()) == 1


class TestUsers:

    def test_create_user_rejects_duplicates_and_bad_types(self, app, resident_id):
        import pytest
        from models.user import create_user, get_user_by_id

        with app.app_context():
            email = get_user_by_id(resident_id)['email']
            with pytest.raises(ValueError):
                create_user('Juan', 'Dela Cruz', email.upper(), 'secret')
            with pytest.raises(ValueError):
                create_user('Juan', 'Dela Cruz', 'new@example.com', 'secret', user_type='mayor')

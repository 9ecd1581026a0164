"""
Database seed data.
Default admin accounts, created once and never duplicated.
"""

import uuid
import logging
from werkzeug.security import generate_password_hash
from flask import current_app

logger = logging.getLogger(__name__)


def seed_database(db):
    """Insert initial seed data."""
    bootstrap_default_admins(db)


def bootstrap_default_admins(db) -> list:
    """
    Create the default superadmin and admin accounts if no user of that
    type exists yet. Safe to call on every startup.

    Args:
        db: Open database connection

    Returns:
        list: user_type values that were created on this call
    """
    defaults = [
        ('superadmin', 'Super', current_app.config['DEFAULT_SUPERADMIN_EMAIL'],
         current_app.config['DEFAULT_SUPERADMIN_PASSWORD']),
        ('admin', 'Admin', current_app.config['DEFAULT_ADMIN_EMAIL'],
         current_app.config['DEFAULT_ADMIN_PASSWORD']),
    ]

    created = []
    for user_type, first_name, email, password in defaults:
        exists = db.execute(
            'SELECT 1 FROM users WHERE user_type = ? LIMIT 1', (user_type,)
        ).fetchone()
        if exists:
            continue

        db.execute('''
            INSERT INTO users (id, first_name, middle_name, last_name, email,
                               password_hash, user_type)
            VALUES (?, ?, 'Admin', 'User', ?, ?, ?)
        ''', (uuid.uuid4().hex, first_name, email,
              generate_password_hash(password), user_type))
        created.append(user_type)
        logger.info('Created default %s account %s', user_type, email)

    db.commit()
    return created

"""
Database connection management.
Handles per-request connections, initialization, bootstrap, and teardown.
"""

import os
import sqlite3
import logging
from flask import g, current_app

logger = logging.getLogger(__name__)


def get_db():
    """
    Get the request-scoped database connection with row factory.

    The connection timeout bounds how long a writer waits for the SQLite
    write lock held by another connection (see BEGIN IMMEDIATE callers).

    Returns:
        sqlite3.Connection: Database connection object
    """
    if 'db' not in g:
        db_path = current_app.config.get('DATABASE_PATH', 'instance/bhub.db')
        timeout = current_app.config.get('DATABASE_TIMEOUT', 5.0)
        _ensure_parent_dir(db_path)
        g.db = sqlite3.connect(
            db_path,
            timeout=timeout,
            detect_types=sqlite3.PARSE_DECLTYPES
        )
        g.db.row_factory = sqlite3.Row
        # Enable foreign key constraints
        g.db.execute('PRAGMA foreign_keys = ON')
        # Enable WAL mode so readers are not blocked by the writer
        g.db.execute('PRAGMA journal_mode = WAL')
    return g.db


def close_db(e=None):
    """
    Close database connection.

    Args:
        e: Exception if any (from Flask teardown context)
    """
    db = g.pop('db', None)
    if db is not None:
        db.close()


def init_db():
    """
    Initialize database: drop existing tables, create new schema, insert seed data.
    WARNING: This will delete all existing data!
    """
    from database.schema import drop_tables, create_tables, create_indexes
    from database.seed import seed_database

    db = get_db()

    drop_tables(db)
    create_tables(db)
    create_indexes(db)
    db.commit()

    seed_database(db)
    db.commit()
    logger.info('Database initialized at %s', current_app.config.get('DATABASE_PATH'))


def bootstrap_db():
    """
    Idempotent startup routine: make sure the schema exists and the default
    admin accounts are present. Existing data is left untouched.
    """
    from database.schema import create_tables, create_indexes
    from database.seed import seed_database

    db = get_db()
    create_tables(db)
    create_indexes(db)
    db.commit()

    seed_database(db)
    db.commit()


def _ensure_parent_dir(db_path: str) -> None:
    """Create the directory holding a file database if it is missing."""
    if db_path == ':memory:':
        return
    parent = os.path.dirname(db_path)
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)

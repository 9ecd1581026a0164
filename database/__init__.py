"""
Database package for the BHUB municipal portal.

This package provides modular database operations:
- connection: Database connection management (get_db, close_db, init_db, bootstrap_db)
- schema: Table creation and indexes
- seed: Default admin accounts
"""

from database.connection import get_db, close_db, init_db, bootstrap_db
from database.schema import drop_tables, create_tables, create_indexes
from database.seed import seed_database, bootstrap_default_admins

__all__ = [
    # Connection
    'get_db',
    'close_db',
    'init_db',
    'bootstrap_db',
    # Schema
    'drop_tables',
    'create_tables',
    'create_indexes',
    # Seed
    'seed_database',
    'bootstrap_default_admins',
]

"""
Database schema definitions.
Table creation, indexes, and structure management.
"""


def drop_tables(db):
    """Drop all existing tables."""
    # Disable foreign key constraints before dropping
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'user_logs',
        'transactions',
        'court_reservations',
        'users'
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    # Re-enable foreign key constraints
    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables (no-op for tables that already exist)."""

    # 1. Users
    db.execute('''
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            first_name TEXT NOT NULL,
            middle_name TEXT,
            last_name TEXT NOT NULL,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            user_type TEXT NOT NULL DEFAULT 'resident'
                CHECK (user_type IN ('resident', 'admin', 'superadmin')),
            active INTEGER DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 2. Court reservations
    db.execute('''
        CREATE TABLE IF NOT EXISTS court_reservations (
            id TEXT PRIMARY KEY,
            service_id TEXT UNIQUE NOT NULL,
            representative_name TEXT NOT NULL,
            contact_number TEXT,
            purpose TEXT,
            number_of_people INTEGER,
            additional_notes TEXT DEFAULT '',
            booked_by TEXT NOT NULL REFERENCES users(id),
            reservation_date TEXT NOT NULL,
            start_time TEXT NOT NULL,
            duration REAL NOT NULL CHECK (duration > 0),
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'approved', 'rejected', 'cancelled')),
            admin_comment TEXT,
            processed_by TEXT REFERENCES users(id),
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    ''')

    # 3. Transaction ledger (one live row per service request)
    db.execute('''
        CREATE TABLE IF NOT EXISTS transactions (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL REFERENCES users(id),
            service_type TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'approved', 'cancelled', 'completed')),
            amount REAL NOT NULL DEFAULT 0,
            details TEXT,
            reference_id TEXT NOT NULL,
            admin_comment TEXT,
            processed_by TEXT REFERENCES users(id),
            deleted INTEGER DEFAULT 0,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    ''')

    # 4. Admin audit log (append-only)
    db.execute('''
        CREATE TABLE IF NOT EXISTS user_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            admin_name TEXT NOT NULL,
            action TEXT NOT NULL,
            details TEXT NOT NULL,
            entity_id TEXT,
            entity_type TEXT NOT NULL,
            timestamp TEXT NOT NULL
        )
    ''')


def create_indexes(db):
    """Create database indexes for performance and ledger uniqueness."""
    indexes = [
        'CREATE INDEX IF NOT EXISTS idx_court_reservations_date_status '
        'ON court_reservations(reservation_date, status)',
        'CREATE INDEX IF NOT EXISTS idx_court_reservations_booked_by '
        'ON court_reservations(booked_by)',
        'CREATE UNIQUE INDEX IF NOT EXISTS idx_transactions_live_reference '
        'ON transactions(service_type, reference_id) WHERE deleted = 0',
        'CREATE INDEX IF NOT EXISTS idx_transactions_user '
        'ON transactions(user_id)',
        'CREATE INDEX IF NOT EXISTS idx_user_logs_timestamp '
        'ON user_logs(timestamp)',
        'CREATE INDEX IF NOT EXISTS idx_user_logs_entity '
        'ON user_logs(entity_type, entity_id)',
    ]

    for statement in indexes:
        db.execute(statement)

"""
Admin audit log model and data access functions.
Entries are appended once and never updated or deleted by the application.
"""

import enum
from database import get_db
from utils.datetime_helpers import now_iso


class AuditAction(str, enum.Enum):
    COURT_RESERVATION_APPROVED = 'COURT_RESERVATION_APPROVED'
    COURT_RESERVATION_REJECTED = 'COURT_RESERVATION_REJECTED'
    COURT_RESERVATION_CANCELLED = 'COURT_RESERVATION_CANCELLED'
    COURT_RESERVATION_UPDATED = 'COURT_RESERVATION_UPDATED'


# =============================================================================
# CREATE OPERATIONS
# =============================================================================

def create_user_log(
    admin_name: str,
    action: str,
    details: str,
    entity_id: str = None,
    entity_type: str = 'CourtReservation'
) -> int:
    """
    Append an audit log entry.

    Args:
        admin_name: Display name of the admin who acted
        action: AuditAction tag
        details: Human-readable description
        entity_id: Domain or storage ID of the affected entity
        entity_type: Entity type label

    Returns:
        New log ID
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO user_logs (admin_name, action, details, entity_id, entity_type, timestamp)
        VALUES (?, ?, ?, ?, ?, ?)
    ''', (admin_name, str(getattr(action, 'value', action)), details,
          entity_id, entity_type, now_iso()))
    db.commit()
    return cursor.lastrowid


# =============================================================================
# READ OPERATIONS
# =============================================================================

def _build_filters(action=None, entity_type=None, entity_id=None, start_date=None, end_date=None):
    clauses = []
    params = []

    if action:
        clauses.append('action = ?')
        params.append(action)

    if entity_type:
        clauses.append('entity_type = ?')
        params.append(entity_type)

    if entity_id is not None:
        clauses.append('entity_id = ?')
        params.append(entity_id)

    if start_date:
        clauses.append('substr(timestamp, 1, 10) >= ?')
        params.append(start_date)

    if end_date:
        clauses.append('substr(timestamp, 1, 10) <= ?')
        params.append(end_date)

    where = (' WHERE ' + ' AND '.join(clauses)) if clauses else ''
    return where, params


def get_user_logs(
    action: str = None,
    entity_type: str = None,
    entity_id: str = None,
    start_date: str = None,
    end_date: str = None,
    limit: int = 50,
    offset: int = 0
) -> list:
    """
    Get audit log entries, newest first, with optional filtering.

    Args:
        action: Filter by action tag
        entity_type: Filter by entity type
        entity_id: Filter by entity ID
        start_date: Entries on or after this date (YYYY-MM-DD)
        end_date: Entries on or before this date (YYYY-MM-DD)
        limit: Maximum number of records to return
        offset: Number of records to skip for pagination

    Returns:
        List of log dicts
    """
    where, params = _build_filters(action, entity_type, entity_id, start_date, end_date)
    db = get_db()
    cursor = db.cursor()
    cursor.execute(
        f'SELECT * FROM user_logs{where} ORDER BY timestamp DESC, id DESC LIMIT ? OFFSET ?',
        params + [limit, offset]
    )
    return [dict(row) for row in cursor.fetchall()]


def count_user_logs(
    action: str = None,
    entity_type: str = None,
    entity_id: str = None,
    start_date: str = None,
    end_date: str = None
) -> int:
    """Count audit log entries matching the same filters as get_user_logs."""
    where, params = _build_filters(action, entity_type, entity_id, start_date, end_date)
    db = get_db()
    cursor = db.cursor()
    cursor.execute(f'SELECT COUNT(*) as count FROM user_logs{where}', params)
    row = cursor.fetchone()
    return row['count'] if row else 0


def serialize_user_log(log: dict) -> dict:
    return {
        'id': log['id'],
        'adminName': log['admin_name'],
        'action': log['action'],
        'details': log['details'],
        'entityId': log['entity_id'],
        'entityType': log['entity_type'],
        'timestamp': log['timestamp'],
    }

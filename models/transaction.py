"""
Transaction ledger model.
One live (non-deleted) transaction mirrors each service request, keyed by
(service_type, reference_id). Court reservations write here on creation and
on every status change.
"""

import json
import uuid
import logging
from database import get_db
from utils.datetime_helpers import now_iso
from models.pricing import calculate_court_amount, EVENING_START_HOUR, EVENING_HOURLY_RATE

logger = logging.getLogger(__name__)

COURT_SERVICE_TYPE = 'court_reservation'


def build_court_details(reservation: dict) -> dict:
    """Snapshot of the descriptive reservation fields kept on the ledger row."""
    return {
        'representativeName': reservation['representative_name'],
        'reservationDate': reservation['reservation_date'],
        'startTime': reservation['start_time'],
        'duration': reservation['duration'],
        'purpose': reservation.get('purpose'),
    }


# =============================================================================
# CREATE
# =============================================================================

def insert_transaction(
    cursor,
    user_id: str,
    reference_id: str,
    amount: float,
    details: dict,
    status: str = 'pending',
    service_type: str = COURT_SERVICE_TYPE,
    admin_comment: str = None,
    processed_by: str = None
) -> str:
    """
    Insert a ledger row using the caller's cursor. Does not commit.

    Returns:
        str: New transaction ID
    """
    transaction_id = uuid.uuid4().hex
    timestamp = now_iso()
    cursor.execute('''
        INSERT INTO transactions (
            id, user_id, service_type, status, amount, details, reference_id,
            admin_comment, processed_by, created_at, updated_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
    ''', (
        transaction_id, user_id, service_type, str(getattr(status, 'value', status)),
        amount, json.dumps(details, default=str), reference_id,
        admin_comment, processed_by, timestamp, timestamp
    ))
    return transaction_id


# =============================================================================
# READ
# =============================================================================

def _row_to_dict(row) -> dict:
    if not row:
        return None
    transaction = dict(row)
    transaction['details'] = json.loads(transaction['details']) if transaction.get('details') else {}
    return transaction


def get_transaction_by_id(transaction_id: str) -> dict:
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM transactions WHERE id = ?', (transaction_id,))
    return _row_to_dict(cursor.fetchone())


def get_transaction_by_reference(reference_id: str, service_type: str = COURT_SERVICE_TYPE) -> dict:
    """
    Get the live transaction for a service request.

    Args:
        reference_id: ID of the service request (e.g. reservation ID)
        service_type: Ledger service type

    Returns:
        Transaction dict or None
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT * FROM transactions
        WHERE service_type = ? AND reference_id = ? AND deleted = 0
    ''', (service_type, reference_id))
    return _row_to_dict(cursor.fetchone())


def get_transactions(user_id: str = None, service_type: str = None, status: str = None,
                     limit: int = 100, offset: int = 0) -> list:
    """
    List live transactions, newest first.

    Args:
        user_id: Filter by owner
        service_type: Filter by service type
        status: Filter by ledger status
        limit: Page size
        offset: Rows to skip

    Returns:
        List of transaction dicts
    """
    query = 'SELECT * FROM transactions WHERE deleted = 0'
    params = []

    if user_id:
        query += ' AND user_id = ?'
        params.append(user_id)

    if service_type:
        query += ' AND service_type = ?'
        params.append(service_type)

    if status:
        query += ' AND status = ?'
        params.append(status)

    query += ' ORDER BY created_at DESC LIMIT ? OFFSET ?'
    params.extend([limit, offset])

    db = get_db()
    cursor = db.cursor()
    cursor.execute(query, params)
    return [_row_to_dict(row) for row in cursor.fetchall()]


# =============================================================================
# SYNC
# =============================================================================

def sync_transaction_status(
    reservation: dict,
    status,
    admin_comment: str = None,
    processed_by: str = None,
    evening_start_hour: int = EVENING_START_HOUR,
    hourly_rate: float = EVENING_HOURLY_RATE
) -> dict:
    """
    Mirror a court reservation status into its ledger row.

    Updates the live transaction when there is one; otherwise creates it,
    pricing it from the reservation as at creation time.

    Args:
        reservation: Reservation dict (as stored)
        status: TransactionStatus to record
        admin_comment: Comment to copy (None leaves it unchanged)
        processed_by: Admin ID to copy (None leaves it unchanged)

    Returns:
        dict: The transaction after the write
    """
    status_value = str(getattr(status, 'value', status))
    db = get_db()
    cursor = db.cursor()

    try:
        existing = get_transaction_by_reference(reservation['id'])

        if existing:
            sets = ['status = ?', 'updated_at = ?']
            params = [status_value, now_iso()]
            if admin_comment is not None:
                sets.append('admin_comment = ?')
                params.append(admin_comment)
            if processed_by:
                sets.append('processed_by = ?')
                params.append(processed_by)
            params.append(existing['id'])
            cursor.execute(f"UPDATE transactions SET {', '.join(sets)} WHERE id = ?", params)
            transaction_id = existing['id']
            logger.info(f"Transaction {transaction_id} updated with status: {status_value}")
        else:
            logger.info(f"No transaction found for court reservation {reservation['id']}; creating one")
            transaction_id = insert_transaction(
                cursor,
                user_id=reservation['booked_by'],
                reference_id=reservation['id'],
                amount=calculate_court_amount(
                    reservation['start_time'], reservation['duration'],
                    evening_start_hour, hourly_rate
                ),
                details=build_court_details(reservation),
                status=status_value,
                admin_comment=admin_comment,
                processed_by=processed_by
            )

        db.commit()

    except Exception:
        db.rollback()
        raise

    return get_transaction_by_id(transaction_id)


def serialize_transaction(transaction: dict) -> dict:
    return {
        'id': transaction['id'],
        'userId': transaction['user_id'],
        'serviceType': transaction['service_type'],
        'status': transaction['status'],
        'amount': transaction['amount'],
        'details': transaction['details'],
        'referenceId': transaction['reference_id'],
        'adminComment': transaction['admin_comment'],
        'processedBy': transaction['processed_by'],
        'createdAt': transaction['created_at'],
        'updatedAt': transaction['updated_at'],
    }

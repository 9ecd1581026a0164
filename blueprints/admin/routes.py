"""
Admin routes for reviewing the audit trail and the transaction ledger.
Admin and superadmin access only.
"""

from flask import request, Blueprint, current_app
from flask_login import login_required

from utils.api_response import api_success
from utils.decorators import admin_required

admin_bp = Blueprint('admin', __name__)


def _pagination():
    """(page, per_page, offset) from the query string, per_page capped at 100."""
    page = max(request.args.get('page', 1, type=int), 1)
    per_page = request.args.get('perPage', current_app.config.get('AUDIT_LOG_PAGE_SIZE', 50), type=int)
    per_page = min(max(per_page, 1), 100)
    return page, per_page, (page - 1) * per_page


@admin_bp.route('/logs')
@login_required
@admin_required
def audit_logs():
    """
    Admin action log, newest first.

    Query params:
        action, entityType, entityId, startDate, endDate, page, perPage
    """
    from models.audit_log import get_user_logs, count_user_logs, serialize_user_log

    filters = {
        'action': request.args.get('action', '').strip() or None,
        'entity_type': request.args.get('entityType', '').strip() or None,
        'entity_id': request.args.get('entityId', '').strip() or None,
        'start_date': request.args.get('startDate', '').strip() or None,
        'end_date': request.args.get('endDate', '').strip() or None,
    }
    page, per_page, offset = _pagination()

    logs = get_user_logs(limit=per_page, offset=offset, **filters)
    total = count_user_logs(**filters)
    total_pages = (total + per_page - 1) // per_page if total > 0 else 1

    return api_success(
        data=[serialize_user_log(log) for log in logs],
        total=total,
        page=page,
        pages=total_pages
    )


@admin_bp.route('/transactions')
@login_required
@admin_required
def transactions():
    """
    Live ledger rows, newest first.

    Query params:
        userId, serviceType, status, page, perPage
    """
    from models.transaction import get_transactions, serialize_transaction

    page, per_page, offset = _pagination()

    rows = get_transactions(
        user_id=request.args.get('userId', '').strip() or None,
        service_type=request.args.get('serviceType', '').strip() or None,
        status=request.args.get('status', '').strip() or None,
        limit=per_page,
        offset=offset
    )

    return api_success(
        data=[serialize_transaction(row) for row in rows],
        count=len(rows),
        page=page
    )

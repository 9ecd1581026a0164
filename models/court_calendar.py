"""
Court reservation calendar projection.
Turns stored reservations into generic calendar events, redacting
personal details for residents.
"""

import enum
import calendar
import logging
from datetime import date, datetime, time, timedelta

from database import get_db
from utils.datetime_helpers import parse_hhmm, to_day_key
from utils.errors import ValidationError
from .court_availability import SLOT_HOLDING_STATUSES

logger = logging.getLogger(__name__)

RESIDENT_TITLE = 'Reserved'
DEFAULT_PURPOSE = 'Court use'
ADMIN_ROLES = ('admin', 'superadmin')


class CalendarColor(str, enum.Enum):
    SUCCESS = 'success'  # approved
    WARNING = 'warning'  # pending


def resolve_calendar_range(
    start=None,
    end=None,
    start_date=None,
    end_date=None,
    month=None,
    year=None
) -> tuple:
    """
    Pick the date range for a calendar query.

    Precedence: explicit start/end, then startDate/endDate, then month+year
    (first to last day of the month). Anything else means no bounds.

    Returns:
        tuple: (first_day, last_day) ISO strings, or (None, None)

    Raises:
        ValidationError: If a supplied bound cannot be read
    """
    try:
        if start and end:
            return to_day_key(start), to_day_key(end)
        if start_date and end_date:
            return to_day_key(start_date), to_day_key(end_date)
        if month and year:
            month, year = int(month), int(year)
            last = calendar.monthrange(year, month)[1]
            return date(year, month, 1).isoformat(), date(year, month, last).isoformat()
    except ValueError as e:
        raise ValidationError(f'Invalid calendar range: {e}') from None

    return None, None


def _event_bounds(reservation_date: str, start_time: str, duration) -> tuple:
    hours, minutes = parse_hhmm(start_time)
    start = datetime.combine(date.fromisoformat(reservation_date), time(hours, minutes))
    end = start + timedelta(hours=float(duration or 1))
    return start, end


def to_calendar_event(reservation: dict, role: str) -> dict:
    """
    Project one reservation into a calendar event.

    Admins see "{representative} - {purpose}"; everyone else sees
    only "Reserved".
    """
    start, end = _event_bounds(
        reservation['reservation_date'], reservation['start_time'], reservation['duration']
    )

    if role in ADMIN_ROLES:
        title = (
            f"{reservation.get('representative_name') or RESIDENT_TITLE} - "
            f"{reservation.get('purpose') or DEFAULT_PURPOSE}"
        )
    else:
        title = RESIDENT_TITLE

    color = CalendarColor.SUCCESS if reservation['status'] == 'approved' else CalendarColor.WARNING

    return {
        'id': reservation['id'],
        'title': title,
        'start': start.isoformat(),
        'end': end.isoformat(),
        'status': reservation['status'],
        'colorTag': color.value,
    }


def get_court_calendar(date_range: tuple, role: str = 'resident') -> list:
    """
    Calendar events for pending and approved reservations in a range.

    Args:
        date_range: (first_day, last_day) as from resolve_calendar_range;
            None on either side leaves that side open
        role: Caller's user type (resident, admin, superadmin)

    Returns:
        list of event dicts ordered by start
    """
    first_day, last_day = date_range if date_range else (None, None)

    query = '''
        SELECT id, reservation_date, start_time, duration, status,
               representative_name, purpose
        FROM court_reservations
        WHERE status IN (?, ?)
    '''
    params = list(SLOT_HOLDING_STATUSES)

    if first_day:
        query += ' AND reservation_date >= ?'
        params.append(first_day)

    if last_day:
        query += ' AND reservation_date <= ?'
        params.append(last_day)

    query += ' ORDER BY reservation_date, start_time, id'

    db = get_db()
    cursor = db.cursor()
    cursor.execute(query, params)
    rows = cursor.fetchall()

    logger.debug(f"Calendar {first_day}..{last_day}: {len(rows)} reservations, role={role}")
    return [to_calendar_event(dict(row), role) for row in rows]

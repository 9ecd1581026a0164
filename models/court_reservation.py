"""
Court reservation data access functions.

This module re-exports the split court modules so callers have one import point:
- court_availability.py: Slot conflict detection
- court_state.py: Status vocabularies, transitions, status update and cancellation
- court_crud.py: Create and read
- court_calendar.py: Calendar projection
"""

# Conflict detection
from .court_availability import (
    SLOT_HOLDING_STATUSES,
    time_to_minutes,
    reservation_interval,
    intervals_overlap,
    has_time_conflict,
    find_slot_holding_reservations,
    check_court_conflict,
)

# Status management
from .court_state import (
    ReservationStatus,
    TransactionStatus,
    TERMINAL_STATUSES,
    VALID_TRANSITIONS,
    StatusUpdateOutcome,
    parse_reservation_status,
    to_transaction_status,
    get_allowed_transitions,
    validate_status_transition,
    update_court_reservation_status,
    cancel_court_reservation,
)

# CRUD
from .court_crud import (
    generate_service_id,
    create_court_reservation,
    get_court_reservation_by_id,
    get_court_reservations_filtered,
    serialize_court_reservation,
)

# Calendar
from .court_calendar import (
    CalendarColor,
    resolve_calendar_range,
    to_calendar_event,
    get_court_calendar,
)

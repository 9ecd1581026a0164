"""
Court calendar routes.
Calendar feed and conflict pre-check for the booking form.
"""

from flask import request, current_app
from flask_login import login_required, current_user

from utils.api_response import api_success, api_error
from utils.messages import MESSAGES


def register_routes(bp):
    """Register calendar routes on the blueprint."""

    @bp.route('/calendar', methods=['GET'])
    @login_required
    def calendar_events():
        """
        Pending and approved reservations as calendar events.

        Query params (first complete pair wins):
            start, end
            startDate, endDate
            month, year

        Residents get "Reserved" titles; admins see who booked and why.
        """
        from models.court_reservation import resolve_calendar_range, get_court_calendar

        date_range = resolve_calendar_range(
            start=request.args.get('start'),
            end=request.args.get('end'),
            start_date=request.args.get('startDate'),
            end_date=request.args.get('endDate'),
            month=request.args.get('month'),
            year=request.args.get('year')
        )

        events = get_court_calendar(date_range, role=current_user.user_type)

        return api_success(data=events, count=len(events))

    @bp.route('/check-conflict', methods=['GET'])
    @login_required
    def check_conflict():
        """
        Would a booking at date/startTime/duration overlap an active one?

        Query params:
            date, startTime, duration (required)
            excludeId: Reservation to ignore (when editing)

        Returns:
            {hasConflict: bool}. Lookup errors report a conflict.
        """
        from models.court_reservation import check_court_conflict

        reservation_date = request.args.get('date', '').strip()
        start_time = request.args.get('startTime', '').strip()
        duration = request.args.get('duration', '').strip()

        if not reservation_date or not start_time or not duration:
            return api_error(MESSAGES['missing_conflict_params'], status=400, hasConflict=False)

        try:
            duration = float(duration)
        except ValueError:
            return api_error(f'Invalid duration: {duration}', status=400, hasConflict=False)

        has_conflict = check_court_conflict(
            reservation_date, start_time, duration,
            exclude_id=request.args.get('excludeId') or None
        )
        current_app.logger.debug(
            f'Conflict check {reservation_date} {start_time} {duration}h: {has_conflict}'
        )

        return api_success(hasConflict=has_conflict)

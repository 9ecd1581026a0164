"""
Court reservation routes.
Booking, listing, detail, admin status changes and resident cancellation.
"""

from flask import request
from flask_login import login_required, current_user

from blueprints.court.forms import CourtReservationForm, StatusUpdateForm
from utils.api_response import api_success, api_error
from utils.decorators import admin_required
from utils.errors import NotFound, Forbidden
from utils.forms import json_formdata, first_form_error
from utils.messages import MESSAGES
from utils.validators import sanitize_input, validate_date_range


def _outcome_response(outcome, message):
    """Reservation plus ledger row; failed side effects become a warning."""
    from models.court_reservation import serialize_court_reservation
    from models.transaction import serialize_transaction

    failed = outcome.failed_side_effects
    warning = None
    if failed:
        warning = MESSAGES['side_effects_failed'].format(
            names=', '.join(effect.name for effect in failed)
        )

    transaction = outcome.transaction
    return api_success(
        data={
            'reservation': serialize_court_reservation(outcome.reservation),
            'transaction': serialize_transaction(transaction) if transaction else None,
            'previousStatus': outcome.previous_status,
        },
        message=message,
        warning=warning,
        sideEffects=[effect.to_dict() for effect in outcome.side_effects]
    )


def register_routes(bp):
    """Register reservation routes on the blueprint."""

    @bp.route('', methods=['POST'])
    @login_required
    def create_reservation():
        """
        Book the court for the logged-in user.

        Request body:
            representativeName, reservationDate, startTime, duration (required)
            contactNumber, purpose, numberOfPeople, additionalNotes (optional)

        Returns:
            201 with the reservation and its pending transaction
        """
        from models.court_reservation import create_court_reservation, serialize_court_reservation
        from models.transaction import serialize_transaction

        form = CourtReservationForm(formdata=json_formdata())
        if not form.validate_on_submit():
            return api_error(first_form_error(form), status=400)

        reservation, transaction = create_court_reservation(
            requester_id=current_user.id,
            reservation_date=form.reservationDate.data,
            start_time=form.startTime.data,
            duration=form.duration.data,
            representative_name=sanitize_input(form.representativeName.data, 200),
            contact_number=sanitize_input(form.contactNumber.data) or None,
            purpose=sanitize_input(form.purpose.data, 500) or None,
            number_of_people=form.numberOfPeople.data,
            additional_notes=sanitize_input(form.additionalNotes.data, 2000)
        )

        return api_success(
            data={
                'reservation': serialize_court_reservation(reservation),
                'transaction': serialize_transaction(transaction),
            },
            message=MESSAGES['reservation_created'],
            status=201
        )

    @bp.route('', methods=['GET'])
    @login_required
    def list_reservations():
        """
        List court reservations.

        Residents only ever see their own bookings. Admins may filter by
        userId.

        Query params:
            status, startDate, endDate, userId (admin only)
        """
        from models.court_reservation import get_court_reservations_filtered, serialize_court_reservation

        if current_user.is_admin:
            user_id = request.args.get('userId', '').strip() or None
        else:
            user_id = current_user.id

        start_date = request.args.get('startDate', '').strip() or None
        end_date = request.args.get('endDate', '').strip() or None
        if start_date and end_date and not validate_date_range(start_date, end_date):
            return api_error('Invalid date range', status=400)

        try:
            reservations = get_court_reservations_filtered(
                user_id=user_id,
                status=request.args.get('status', '').strip() or None,
                start_date=start_date,
                end_date=end_date
            )
        except ValueError as e:
            return api_error(f'Invalid date filter: {e}', status=400)

        return api_success(
            data=[serialize_court_reservation(r) for r in reservations],
            count=len(reservations)
        )

    @bp.route('/<reservation_id>', methods=['GET'])
    @login_required
    def get_reservation(reservation_id):
        """Single reservation with its live transaction."""
        from models.court_reservation import get_court_reservation_by_id, serialize_court_reservation
        from models.transaction import get_transaction_by_reference, serialize_transaction

        reservation = get_court_reservation_by_id(reservation_id)
        if not reservation:
            raise NotFound('Court reservation not found')

        if not current_user.is_admin and str(reservation['booked_by']) != str(current_user.id):
            raise Forbidden(MESSAGES['forbidden'])

        transaction = get_transaction_by_reference(reservation_id)
        return api_success(data={
            'reservation': serialize_court_reservation(reservation),
            'transaction': serialize_transaction(transaction) if transaction else None,
        })

    @bp.route('/<reservation_id>/status', methods=['PUT'])
    @login_required
    @admin_required
    def update_status(reservation_id):
        """
        Approve, reject or cancel a reservation.

        Request body:
            status: pending, approved, rejected or cancelled
            adminComment: Required (3+ characters) when rejecting; omit or
                send null to keep the stored comment, "" to clear it
        """
        from models.court_reservation import update_court_reservation_status

        formdata = json_formdata()
        form = StatusUpdateForm(formdata=formdata)
        if not form.validate_on_submit():
            return api_error(first_form_error(form), status=400)

        admin_comment = None
        if 'adminComment' in formdata:
            admin_comment = (form.adminComment.data or '').strip()

        outcome = update_court_reservation_status(
            reservation_id,
            form.status.data or None,
            admin_comment=admin_comment,
            actor_id=current_user.id,
            actor_name=current_user.full_name
        )

        return _outcome_response(outcome, MESSAGES['reservation_updated'])

    @bp.route('/<reservation_id>/cancel', methods=['POST'])
    @login_required
    def cancel_reservation(reservation_id):
        """Cancel one of the logged-in user's own reservations."""
        from models.court_reservation import cancel_court_reservation

        outcome = cancel_court_reservation(reservation_id, current_user.id)

        return _outcome_response(outcome, MESSAGES['reservation_cancelled'])

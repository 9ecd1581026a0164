"""
Domain error taxonomy.
Each error carries the HTTP status the API layer should answer with.
"""


class PortalError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 400

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context


class ValidationError(PortalError):
    """Malformed or insufficient input; the user can correct it."""

    status_code = 400


class MissingActor(ValidationError):
    """No requesting user or admin was supplied."""


class SlotConflict(PortalError):
    """Requested time overlaps an active reservation on the same day."""

    status_code = 409


class InvalidTransition(PortalError):
    """Status change not allowed from the reservation's current status."""

    status_code = 409

    def __init__(self, current_status: str, new_status: str = None, message: str = None):
        if message is None:
            message = f'Cannot change status of a {current_status} reservation'
            if new_status:
                message = f'Cannot change status from {current_status} to {new_status}'
        super().__init__(message, current_status=current_status, new_status=new_status)
        self.current_status = current_status
        self.new_status = new_status


class Forbidden(PortalError):
    """Caller is not allowed to act on this entity."""

    status_code = 403


class NotFound(PortalError):
    """Entity does not exist."""

    status_code = 404


class PersistenceFailure(PortalError):
    """Storage layer error. Not retried."""

    status_code = 500


__all__ = [
    'PortalError',
    'ValidationError',
    'MissingActor',
    'SlotConflict',
    'InvalidTransition',
    'Forbidden',
    'NotFound',
    'PersistenceFailure',
]

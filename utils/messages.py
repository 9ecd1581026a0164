"""
Centralized user-facing API messages.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Welcome {name}',
    'logout_success': 'Logged out successfully',
    'reservation_created': 'Court reservation created successfully',
    'reservation_updated': 'Court reservation updated successfully',
    'reservation_cancelled': 'Court reservation cancelled successfully',

    # Warning messages
    'side_effects_failed': 'Reservation saved, but some follow-up updates failed: {names}',

    # Error messages
    'invalid_credentials': 'Invalid email or password',
    'account_disabled': 'Your account has been disabled. Contact the administrator.',
    'login_required': 'Please log in to continue',
    'forbidden': 'You do not have permission to perform this action',
    'not_found': 'Resource not found',
    'server_error': 'An unexpected error occurred',
    'missing_conflict_params': 'Missing required parameters',
}

"""
Court blueprint initialization.
Registers the basketball court reservation routes.

Route logic is split by concern:
- routes/reservations.py - Booking, listing, status changes, cancellation
- routes/calendar.py - Calendar feed and conflict pre-check
"""

from flask import Blueprint

# Create the court blueprint
court_bp = Blueprint('court', __name__, url_prefix='/court-reservations')

# Import and register routes from submodules
from blueprints.court.routes import reservations, calendar

calendar.register_routes(court_bp)
reservations.register_routes(court_bp)

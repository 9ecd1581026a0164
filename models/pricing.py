"""
Court pricing rules.
Daytime use of the court is free; evening bookings are charged per hour.
"""

from utils.datetime_helpers import parse_hhmm

EVENING_START_HOUR = 18
EVENING_HOURLY_RATE = 200


def calculate_court_amount(
    start_time: str,
    duration: float,
    evening_start_hour: int = EVENING_START_HOUR,
    hourly_rate: float = EVENING_HOURLY_RATE
) -> float:
    """
    Compute the fee for a court reservation.

    Only the start hour decides the rate: a booking starting at or after
    the evening hour is charged for its whole duration, anything earlier is free.

    Args:
        start_time: Start time (HH:MM)
        duration: Duration in hours
        evening_start_hour: First charged hour of the day
        hourly_rate: Rate per hour once charged

    Returns:
        float: Amount in pesos

    Examples:
        calculate_court_amount('17:59', 2) -> 0
        calculate_court_amount('18:00', 2) -> 400
    """
    hour, _ = parse_hhmm(start_time)
    if hour >= evening_start_hour:
        return hourly_rate * float(duration)
    return 0

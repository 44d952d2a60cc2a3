"""
Booking and delivery date rules.

All functions are pure: the current moment is always passed in as ``now``.
Time-of-day thresholds are evaluated against ``now``, never against the
(possibly shifted) booking date.
"""

from datetime import datetime, time, timedelta
from typing import Dict, Optional

from ..models import DeliveryType
from .exceptions import BookingValidationError, ConfigurationMissingError

# Daily thresholds
SAME_DAY_CUTOFF = time(10, 30)
LATE_CUTOFF = time(18, 30)
OPENING_TIME = time(9, 0)

# datetime.weekday() of the shop's closed day
FRIDAY = 4


def _at(moment: datetime, at: time) -> datetime:
    return moment.replace(hour=at.hour, minute=at.minute, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)


def skip_fridays(moment: datetime) -> datetime:
    while moment.weekday() == FRIDAY:
        moment += timedelta(days=1)
    return moment


def is_after_late_cutoff(now: datetime) -> bool:
    """True strictly after 18:30; exactly 18:30 is still today."""
    return now > _at(now, LATE_CUTOFF)


def is_before_same_day_cutoff(now: datetime) -> bool:
    """True strictly before 10:30."""
    return now < _at(now, SAME_DAY_CUTOFF)


def is_same_day_urgent_available(now: datetime) -> bool:
    """Same-day urgent can be offered before 10:30 or after 18:30."""
    return is_before_same_day_cutoff(now) or is_after_late_cutoff(now)


def calculate_booking_date(now: datetime) -> datetime:
    """
    Effective booking moment for a booking made at ``now``.

    After 18:30 the booking moves to 09:00 the next day, or to Saturday
    09:00 when the next day is a Friday. Otherwise ``now`` is returned
    unchanged.
    """
    if not is_after_late_cutoff(now):
        return now

    booking_date = _at(now + timedelta(days=1), OPENING_TIME)
    if booking_date.weekday() == FRIDAY:
        booking_date += timedelta(days=1)
    return booking_date


def add_business_days(start: datetime, days: int) -> datetime:
    """
    Walk ``days`` calendar days forward from ``start`` one at a time,
    stepping over every Friday met on the way.

    The landing day is re-checked after every step, so a walk of 0 days
    still moves a Friday ``start`` to Saturday.
    """
    current = start
    for _ in range(days):
        current = skip_fridays(current + timedelta(days=1))
    return skip_fridays(current)


def calculate_delivery_date(
    booking_date: datetime,
    delivery_type: str,
    configuration,
    now: datetime,
) -> Optional[datetime]:
    """
    Promised delivery moment (end of day) for a booking.

    Args:
        booking_date: Result of ``calculate_booking_date(now)``
        delivery_type: One of DeliveryType values
        configuration: Object exposing number_of_days_for_normal and
            number_of_days_for_urgent
        now: Current moment

    Returns:
        End of the delivery day, or ``None`` when same-day urgent is not
        available at ``now`` (between 10:30 and 18:30 inclusive)

    Raises:
        ConfigurationMissingError: If configuration is None
        BookingValidationError: If delivery_type is unknown
    """
    if configuration is None:
        raise ConfigurationMissingError()

    late = is_after_late_cutoff(now)

    if delivery_type == DeliveryType.SAME_DAY_URGENT:
        if is_before_same_day_cutoff(now):
            # Delivered the day it is booked, Friday or not
            return end_of_day(booking_date)
        if not late:
            return None
        days = 1
    elif delivery_type == DeliveryType.NORMAL:
        days = configuration.number_of_days_for_normal + (1 if late else 0)
    elif delivery_type == DeliveryType.URGENT:
        days = configuration.number_of_days_for_urgent + (1 if late else 0)
    else:
        raise BookingValidationError({
            'delivery_type': f'"{delivery_type}" is not a valid delivery type.'
        })

    return end_of_day(add_business_days(booking_date, days))


def calculate_delivery_dates(
    booking_date: datetime,
    configuration,
    now: datetime,
) -> Dict[str, Optional[datetime]]:
    """Delivery date for every delivery type, keyed by type value."""
    return {
        delivery_type: calculate_delivery_date(booking_date, delivery_type, configuration, now)
        for delivery_type in DeliveryType.values
    }

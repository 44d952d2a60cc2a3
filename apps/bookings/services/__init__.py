"""Services for bookings business logic."""

from .exceptions import (
    BookingsServiceError,
    BookingValidationError,
    BookingNotFoundError,
    InvalidStatusTransitionError,
    ReceiptAllocationError,
    ConfigurationMissingError,
)
from .scheduling import (
    calculate_booking_date,
    calculate_delivery_date,
    calculate_delivery_dates,
    is_same_day_urgent_available,
)
from .pricing import (
    BookingQuote,
    QuoteLine,
    calculate_quote,
)
from .receipts import (
    format_receipt_number,
    parse_receipt_sequence,
    next_receipt_number,
    allocate_receipt_number,
)
from .booking_management import (
    resolve_booking_lines,
    get_booking_form_context,
    quote_booking,
    create_booking,
    get_booking_by_id,
    update_booking_status,
    filter_bookings,
)
from .statistics import get_booking_statistics

__all__ = [
    # Exceptions
    'BookingsServiceError',
    'BookingValidationError',
    'BookingNotFoundError',
    'InvalidStatusTransitionError',
    'ReceiptAllocationError',
    'ConfigurationMissingError',
    # Scheduling
    'calculate_booking_date',
    'calculate_delivery_date',
    'calculate_delivery_dates',
    'is_same_day_urgent_available',
    # Pricing
    'BookingQuote',
    'QuoteLine',
    'calculate_quote',
    # Receipts
    'format_receipt_number',
    'parse_receipt_sequence',
    'next_receipt_number',
    'allocate_receipt_number',
    # Booking Management
    'resolve_booking_lines',
    'get_booking_form_context',
    'quote_booking',
    'create_booking',
    'get_booking_by_id',
    'update_booking_status',
    'filter_bookings',
    # Statistics
    'get_booking_statistics',
]

"""
Booking workflow: form context, quote preview, creation and status updates.

Dates and prices come from the pure calculators in ``scheduling`` and
``pricing``; this module adds the database work around them.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from apps.catalog.models import Item, ItemStatus, Problem
from apps.catalog.services import get_active_items_by_ids
from apps.configuration.services import get_configuration
from apps.customers.services import (
    get_or_create_customer,
    increment_booking_count,
    normalize_phone,
)
from ..models import Booking, BookingItem, BookingStatus, DeliveryType
from . import clock
from .exceptions import (
    BookingValidationError,
    BookingNotFoundError,
    InvalidStatusTransitionError,
    ReceiptAllocationError,
)
from .pricing import BookingQuote, calculate_quote
from .receipts import allocate_receipt_number
from .scheduling import (
    calculate_booking_date,
    calculate_delivery_date,
    calculate_delivery_dates,
    is_same_day_urgent_available,
)

logger = logging.getLogger(__name__)

DEFAULT_RECEIPT_MAX_ATTEMPTS = 3


def resolve_booking_lines(
    *,
    selected_items: Iterable[Dict[str, Any]]
) -> List[Tuple[Item, int]]:
    """
    Turn ``[{'id': ..., 'units': ...}]`` into (item, units) pairs.

    Raises:
        BookingValidationError: If an id is unknown or the item is disabled
    """
    selected_items = list(selected_items)
    items = get_active_items_by_ids(item_ids=[entry['id'] for entry in selected_items])

    missing = [entry['id'] for entry in selected_items if entry['id'] not in items]
    if missing:
        raise BookingValidationError({
            'selected_items': [
                f'Item {item_id} does not exist or is disabled.' for item_id in missing
            ]
        })

    return [(items[entry['id']], entry['units']) for entry in selected_items]


def get_booking_form_context(*, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Everything the booking form needs before submission.

    Returns:
        Dict with booking_date, delivery_dates (per delivery type, None when
        unavailable), is_same_day_urgent_enabled, items, problems and
        configuration

    Raises:
        ConfigurationMissingError: If no configuration exists
    """
    now = now or clock.local_now()
    configuration = get_configuration()
    booking_date = calculate_booking_date(now)

    return {
        'booking_date': booking_date,
        'delivery_dates': calculate_delivery_dates(booking_date, configuration, now),
        'is_same_day_urgent_enabled': is_same_day_urgent_available(now),
        'items': Item.objects.filter(status=ItemStatus.ACTIVE).order_by('name'),
        'problems': Problem.objects.order_by('name'),
        'configuration': configuration,
    }


def quote_booking(
    *,
    selected_items: Iterable[Dict[str, Any]],
    delivery_type: str,
    hanger_units: int = 0,
    now: Optional[datetime] = None
) -> BookingQuote:
    """
    Price a booking without saving anything.

    ``delivery_date`` is None on the returned quote when same-day urgent
    is not available at ``now``.
    """
    now = now or clock.local_now()
    configuration = get_configuration()
    lines = resolve_booking_lines(selected_items=selected_items)

    quote = calculate_quote(lines, delivery_type, hanger_units, configuration)
    quote.booking_date = calculate_booking_date(now)
    quote.delivery_date = calculate_delivery_date(
        quote.booking_date, delivery_type, configuration, now
    )
    return quote


@transaction.atomic
def _persist_booking(
    *,
    quote: BookingQuote,
    customer_phone: str,
    delivery_type: str,
    notes: str,
    issues: List[str],
    branch,
    created_by,
    resync_receipts: bool
) -> Booking:
    customer = get_or_create_customer(phone=customer_phone)
    receipt_number = allocate_receipt_number(branch=branch, resync=resync_receipts)

    booking = Booking.objects.create(
        customer=customer,
        customer_phone=customer.phone,
        branch=branch,
        created_by=created_by,
        receipt_number=receipt_number,
        subtotal_amount=quote.subtotal_amount,
        surcharge_percentage=quote.surcharge_percentage,
        surcharge_amount=quote.surcharge_amount,
        amount_total=quote.amount_total,
        sales_tax_percentage=quote.sales_tax_percentage,
        sales_tax_amount=quote.sales_tax_amount,
        hanger_units=quote.hanger_units,
        hanger_amount=quote.hanger_amount,
        total_amount=quote.total_amount,
        number_of_units=quote.number_of_units,
        number_of_pieces=quote.number_of_pieces,
        delivery_type=delivery_type,
        booking_date=quote.booking_date,
        delivery_date=quote.delivery_date,
        status=BookingStatus.BOOKED,
        notes=notes,
        issues=issues,
    )

    BookingItem.objects.bulk_create([
        BookingItem(
            booking=booking,
            item=line.item,
            units=line.units,
            unit_price=line.unit_price,
            line_total=line.line_total,
        )
        for line in quote.lines
    ])

    increment_booking_count(customer=customer)

    return booking


def create_booking(
    *,
    customer_phone: str,
    selected_items: Iterable[Dict[str, Any]],
    delivery_type: str,
    branch,
    created_by=None,
    hanger_units: int = 0,
    notes: str = '',
    issues: Optional[List[str]] = None,
    now: Optional[datetime] = None
) -> Booking:
    """
    Create a booking with its lines.

    The customer (registered on first visit), the receipt number, the
    booking, its lines and the customer's booking counter are written in
    one transaction. A receipt collision rolls that transaction back and
    retries it, up to ``BOOKING_RECEIPT_MAX_ATTEMPTS`` times.

    Args:
        customer_phone: Customer's phone number
        selected_items: ``[{'id': item_id, 'units': quantity}]``
        delivery_type: One of DeliveryType values
        branch: Branch taking the booking
        created_by: User taking the booking
        hanger_units: Hangers to charge for
        notes: Free text
        issues: Problem labels noted on the garments
        now: Current moment (defaults to the shop's local time)

    Returns:
        Created Booking

    Raises:
        ConfigurationMissingError: If no pricing configuration exists
        BookingValidationError: If input is invalid or same-day urgent is
            not available at ``now``
        ReceiptAllocationError: If no unique receipt number could be committed
    """
    if branch is None:
        raise BookingValidationError({
            'branch': 'You must be assigned to a branch to take bookings.'
        })

    customer_phone = normalize_phone(customer_phone or '')
    if not customer_phone:
        raise BookingValidationError({'customer_id': 'Customer phone is required.'})

    now = now or clock.local_now()
    configuration = get_configuration()
    lines = resolve_booking_lines(selected_items=selected_items)

    booking_date = calculate_booking_date(now)
    delivery_date = calculate_delivery_date(booking_date, delivery_type, configuration, now)
    if delivery_type == DeliveryType.SAME_DAY_URGENT and delivery_date is None:
        raise BookingValidationError({
            'delivery_type': 'Same day urgent delivery is not available between 10:30 and 18:30.'
        })

    quote = calculate_quote(lines, delivery_type, hanger_units, configuration)
    quote.booking_date = booking_date
    quote.delivery_date = delivery_date

    issues = [issue.strip() for issue in (issues or []) if issue and issue.strip()]
    max_attempts = getattr(settings, 'BOOKING_RECEIPT_MAX_ATTEMPTS', DEFAULT_RECEIPT_MAX_ATTEMPTS)

    for attempt in range(1, max_attempts + 1):
        try:
            booking = _persist_booking(
                quote=quote,
                customer_phone=customer_phone,
                delivery_type=delivery_type,
                notes=notes or '',
                issues=issues,
                branch=branch,
                created_by=created_by,
                resync_receipts=attempt > 1,
            )
        except IntegrityError as exc:
            logger.warning(
                "Booking attempt %s/%s for branch %s failed: %s",
                attempt, max_attempts, branch.code, exc,
            )
            continue

        logger.info(
            "Booking %s created for %s (branch=%s, type=%s, total=%s)",
            booking.receipt_number,
            booking.customer_phone,
            branch.code,
            delivery_type,
            booking.total_amount,
        )
        return booking

    logger.error(
        "Could not allocate a receipt number for branch %s after %s attempts",
        branch.code, max_attempts,
    )
    raise ReceiptAllocationError(
        'Could not allocate a receipt number. Please try again.'
    )


def get_booking_by_id(*, booking_id: int) -> Booking:
    """
    Raises:
        BookingNotFoundError: If booking doesn't exist
    """
    try:
        return (
            Booking.objects
            .select_related('customer', 'branch', 'created_by')
            .prefetch_related('booking_items__item')
            .get(id=booking_id)
        )
    except Booking.DoesNotExist:
        raise BookingNotFoundError(f"Booking with id '{booking_id}' not found")


@transaction.atomic
def update_booking_status(
    *,
    booking_id: int,
    status: str,
    updated_by=None
) -> Booking:
    """
    Move a booking to a new status.

    Allowed: booked -> processing | cancelled, processing -> ready |
    cancelled, ready -> delivered.

    Raises:
        BookingNotFoundError: If booking doesn't exist
        InvalidStatusTransitionError: If the move is not allowed
    """
    try:
        booking = Booking.objects.select_for_update().get(id=booking_id)
    except Booking.DoesNotExist:
        raise BookingNotFoundError(f"Booking with id '{booking_id}' not found")

    if not booking.can_transition_to(status):
        raise InvalidStatusTransitionError(
            f"Cannot change booking {booking.receipt_number} from "
            f"'{booking.status}' to '{status}'"
        )

    previous = booking.status
    booking.status = status
    booking.save(update_fields=['status', 'updated_at'])

    logger.info(
        "Booking %s status %s -> %s (by %s)",
        booking.receipt_number,
        previous,
        status,
        getattr(updated_by, 'email', None),
    )
    return booking


def filter_bookings(
    *,
    queryset: Optional[QuerySet] = None,
    status: Optional[str] = None,
    delivery_type: Optional[str] = None,
    branch_id: Optional[int] = None,
    customer: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None
) -> QuerySet:
    """Narrow bookings by the list endpoint's filters; newest first."""
    if queryset is None:
        queryset = Booking.objects.all()

    if status:
        queryset = queryset.filter(status=status)

    if delivery_type:
        queryset = queryset.filter(delivery_type=delivery_type)

    if branch_id:
        queryset = queryset.filter(branch_id=branch_id)

    if customer:
        queryset = queryset.filter(customer_phone__icontains=normalize_phone(customer))

    if date_from:
        queryset = queryset.filter(booking_date__date__gte=date_from)

    if date_to:
        queryset = queryset.filter(booking_date__date__lte=date_to)

    return queryset.select_related('customer', 'branch').order_by('-booking_date', '-id')

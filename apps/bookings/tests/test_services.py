"""
Service layer tests for bookings.

Covers:
- Booking creation (pricing, dates, receipt numbers, customer bookkeeping)
- All-or-nothing behaviour and receipt collision retries
- Quote preview and booking form context
- Status transitions
- Statistics
"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from django.utils import timezone

from apps.bookings.models import Booking, BookingItem, BookingStatus, ReceiptSequence
from apps.bookings.services import (
    create_booking,
    quote_booking,
    get_booking_form_context,
    update_booking_status,
    get_booking_by_id,
    filter_bookings,
    get_booking_statistics,
    BookingValidationError,
    BookingNotFoundError,
    InvalidStatusTransitionError,
    ReceiptAllocationError,
    ConfigurationMissingError,
)
from apps.bookings.services import booking_management
from apps.branches.services import update_branch
from apps.customers.models import Customer, CustomerType


def local(*args):
    return timezone.make_aware(datetime(*args))


def end_of(*args):
    return timezone.make_aware(datetime(*args, 23, 59, 59, 999999))


def book(branch, items, delivery_type='normal', phone='0300-1234567', now=None, **kwargs):
    return create_booking(
        customer_phone=phone,
        selected_items=[{'id': item.id, 'units': units} for item, units in items],
        delivery_type=delivery_type,
        branch=branch,
        now=now or local(2024, 1, 8, 9, 0),
        **kwargs
    )


# ============================================================================
# Booking Creation
# ============================================================================

@pytest.mark.django_db
class TestCreateBooking:

    def test_creates_priced_booking(self, branch, configuration, shirt, pos_user):
        booking = book(
            branch, [(shirt, 2)], 'urgent',
            hanger_units=1, created_by=pos_user, notes='Light starch',
            issues=['Stain on collar', '  ', 'Missing button '],
        )

        assert booking.receipt_number == 'MAIN-0001'
        assert booking.status == BookingStatus.BOOKED
        assert booking.subtotal_amount == Decimal('200.00')
        assert booking.amount_total == Decimal('300.00')
        assert booking.sales_tax_amount == Decimal('15.00')
        assert booking.hanger_amount == Decimal('10.00')
        assert booking.total_amount == Decimal('325.00')
        assert booking.number_of_pieces == 2
        assert booking.number_of_units == 2
        assert booking.customer_phone == '03001234567'
        assert booking.created_by == pos_user
        assert booking.notes == 'Light starch'
        assert booking.issues == ['Stain on collar', 'Missing button']

    def test_dates_for_morning_booking(self, branch, configuration, shirt):
        """Mon 09:00, urgent 2 days -> Wed."""
        now = local(2024, 1, 8, 9, 0)
        booking = book(branch, [(shirt, 1)], 'urgent', now=now)

        assert booking.booking_date == now
        assert booking.delivery_date == end_of(2024, 1, 10)

    def test_late_thursday_booking_moves_to_saturday(self, branch, configuration, shirt):
        """Thu 19:00 books Sat 09:00; normal 4 + 1 days: Sun, Mon, Tue, Wed, Thu."""
        booking = book(branch, [(shirt, 1)], 'normal', now=local(2024, 1, 11, 19, 0))

        booking.refresh_from_db()
        assert booking.booking_date == local(2024, 1, 13, 9, 0)
        assert booking.delivery_date == end_of(2024, 1, 18)

    def test_same_day_urgent_before_cutoff(self, branch, configuration, shirt):
        booking = book(branch, [(shirt, 1)], 'same_day_urgent', now=local(2024, 1, 8, 10, 0))

        assert booking.delivery_date == end_of(2024, 1, 8)
        assert booking.amount_total == Decimal('200.00')

    def test_same_day_urgent_unavailable_at_noon(self, branch, configuration, shirt):
        with pytest.raises(BookingValidationError) as exc_info:
            book(branch, [(shirt, 1)], 'same_day_urgent', now=local(2024, 1, 8, 12, 0))

        assert 'delivery_type' in exc_info.value.errors
        assert Booking.objects.count() == 0
        assert Customer.objects.count() == 0

    def test_lines_capture_price_at_booking_time(self, branch, configuration, shirt, suit):
        booking = book(branch, [(shirt, 2), (suit, 1)])

        shirt.unit_price = Decimal('150.00')
        shirt.save()

        lines = list(BookingItem.objects.filter(booking=booking).order_by('id'))
        assert [(line.item_id, line.units) for line in lines] == [(shirt.id, 2), (suit.id, 1)]
        assert lines[0].unit_price == Decimal('100.00')
        assert lines[0].line_total == Decimal('200.00')
        assert lines[1].line_total == Decimal('250.00')

        booking.refresh_from_db()
        assert booking.subtotal_amount == Decimal('450.00')
        assert booking.number_of_units == 2 * 1 + 1 * 2

    def test_registers_new_customer(self, branch, configuration, shirt):
        booking = book(branch, [(shirt, 1)], phone='0321 555 0101')

        customer = Customer.objects.get(phone='03215550101')
        assert booking.customer == customer
        assert customer.customer_type == CustomerType.NORMAL
        assert customer.number_of_bookings == 1

    def test_existing_customer_count_increments(self, branch, configuration, shirt):
        Customer.objects.create(
            phone='03001234567',
            customer_type=CustomerType.REGULAR,
            number_of_bookings=5,
        )

        book(branch, [(shirt, 1)])
        book(branch, [(shirt, 3)])

        customer = Customer.objects.get(phone='03001234567')
        assert customer.number_of_bookings == 7
        assert customer.customer_type == CustomerType.REGULAR

    def test_receipts_are_sequential_per_branch(self, branch, other_branch, configuration, shirt):
        first = book(branch, [(shirt, 1)])
        second = book(branch, [(shirt, 1)])
        north = book(other_branch, [(shirt, 1)])

        assert first.receipt_number == 'MAIN-0001'
        assert second.receipt_number == 'MAIN-0002'
        assert north.receipt_number == 'NORTH-0001'

    def test_missing_configuration_creates_nothing(self, branch, shirt):
        with pytest.raises(ConfigurationMissingError):
            book(branch, [(shirt, 1)])

        assert Booking.objects.count() == 0
        assert Customer.objects.count() == 0
        assert ReceiptSequence.objects.count() == 0

    def test_unknown_item(self, branch, configuration, shirt):
        with pytest.raises(BookingValidationError) as exc_info:
            create_booking(
                customer_phone='03001234567',
                selected_items=[{'id': shirt.id, 'units': 1}, {'id': 999999, 'units': 1}],
                delivery_type='normal',
                branch=branch,
                now=local(2024, 1, 8, 9, 0),
            )

        assert exc_info.value.errors['selected_items'] == [
            'Item 999999 does not exist or is disabled.'
        ]
        assert Booking.objects.count() == 0

    def test_disabled_item(self, branch, configuration, disabled_item):
        with pytest.raises(BookingValidationError):
            book(branch, [(disabled_item, 1)])

    def test_zero_units(self, branch, configuration, shirt):
        with pytest.raises(BookingValidationError) as exc_info:
            book(branch, [(shirt, 0)])
        assert 'selected_items' in exc_info.value.errors

    def test_invalid_delivery_type(self, branch, configuration, shirt):
        with pytest.raises(BookingValidationError) as exc_info:
            book(branch, [(shirt, 1)], 'express')
        assert 'delivery_type' in exc_info.value.errors

    def test_requires_branch(self, configuration, shirt):
        with pytest.raises(BookingValidationError) as exc_info:
            book(None, [(shirt, 1)])
        assert 'branch' in exc_info.value.errors

    def test_requires_phone(self, branch, configuration, shirt):
        with pytest.raises(BookingValidationError) as exc_info:
            book(branch, [(shirt, 1)], phone=' - ')
        assert 'customer_id' in exc_info.value.errors

    def test_uses_shop_clock_by_default(self, branch, configuration, shirt, shop_now):
        now = shop_now(datetime(2024, 1, 9, 19, 45))

        booking = create_booking(
            customer_phone='03001234567',
            selected_items=[{'id': shirt.id, 'units': 1}],
            delivery_type='urgent',
            branch=branch,
        )

        assert now.hour == 19
        assert booking.booking_date == local(2024, 1, 10, 9, 0)

    def test_failure_rolls_everything_back(self, branch, configuration, shirt, monkeypatch):
        def explode(**kwargs):
            raise RuntimeError('counter unavailable')

        monkeypatch.setattr(booking_management, 'increment_booking_count', explode)

        with pytest.raises(RuntimeError):
            book(branch, [(shirt, 1)])

        assert Booking.objects.count() == 0
        assert BookingItem.objects.count() == 0
        assert Customer.objects.count() == 0
        assert ReceiptSequence.objects.count() == 0


@pytest.mark.django_db
class TestReceiptCollisions:

    def test_retries_after_collision(self, branch, configuration, shirt):
        """A counter that fell behind is resynced on the next attempt."""
        first = book(branch, [(shirt, 1)])
        ReceiptSequence.objects.filter(branch=branch).update(last_number=0)

        second = book(branch, [(shirt, 1)], phone='03110000000')

        assert first.receipt_number == 'MAIN-0001'
        assert second.receipt_number == 'MAIN-0002'
        assert Booking.objects.count() == 2
        assert Customer.objects.get(phone='03110000000').number_of_bookings == 1

    def test_gives_up_after_max_attempts(self, branch, configuration, shirt, settings):
        settings.BOOKING_RECEIPT_MAX_ATTEMPTS = 1
        book(branch, [(shirt, 1)])
        ReceiptSequence.objects.filter(branch=branch).update(last_number=0)

        with pytest.raises(ReceiptAllocationError):
            book(branch, [(shirt, 1)], phone='03110000000')

        assert Booking.objects.count() == 1
        assert not Customer.objects.filter(phone='03110000000').exists()

    def test_branch_code_change_restarts_numbering(self, branch, configuration, shirt):
        for _ in range(3):
            book(branch, [(shirt, 1)])

        renamed = update_branch(branch_id=branch.id, data={'code': 'hq'})
        booking = book(renamed, [(shirt, 1)])

        assert booking.receipt_number == 'HQ-0001'
        assert Booking.objects.filter(receipt_number__startswith='MAIN-').count() == 3


# ============================================================================
# Quote and Form
# ============================================================================

@pytest.mark.django_db
class TestQuoteBooking:

    def test_quote_saves_nothing(self, configuration, shirt):
        quote = quote_booking(
            selected_items=[{'id': shirt.id, 'units': 2}],
            delivery_type='urgent',
            hanger_units=1,
            now=local(2024, 1, 8, 9, 0),
        )

        assert quote.total_amount == Decimal('325.00')
        assert quote.booking_date == local(2024, 1, 8, 9, 0)
        assert quote.delivery_date == end_of(2024, 1, 10)
        assert quote.receipt_number is None
        assert Booking.objects.count() == 0
        assert Customer.objects.count() == 0

    def test_same_day_urgent_quote_at_noon_has_no_delivery_date(self, configuration, shirt):
        quote = quote_booking(
            selected_items=[{'id': shirt.id, 'units': 1}],
            delivery_type='same_day_urgent',
            now=local(2024, 1, 8, 12, 0),
        )

        assert quote.delivery_date is None
        assert quote.amount_total == Decimal('200.00')

    def test_quote_requires_configuration(self, shirt):
        with pytest.raises(ConfigurationMissingError):
            quote_booking(selected_items=[{'id': shirt.id, 'units': 1}], delivery_type='normal')


@pytest.mark.django_db
class TestBookingFormContext:

    def test_morning_context(self, configuration, shirt, disabled_item, problem):
        context = get_booking_form_context(now=local(2024, 1, 8, 9, 0))

        assert context['booking_date'] == local(2024, 1, 8, 9, 0)
        assert context['is_same_day_urgent_enabled'] is True
        assert context['delivery_dates'] == {
            'normal': end_of(2024, 1, 13),
            'urgent': end_of(2024, 1, 10),
            'same_day_urgent': end_of(2024, 1, 8),
        }
        assert list(context['items']) == [shirt]
        assert list(context['problems']) == [problem]
        assert context['configuration'] == configuration

    def test_midday_disables_same_day_urgent(self, configuration):
        context = get_booking_form_context(now=local(2024, 1, 8, 14, 0))

        assert context['is_same_day_urgent_enabled'] is False
        assert context['delivery_dates']['same_day_urgent'] is None

    def test_requires_configuration(self, db):
        with pytest.raises(ConfigurationMissingError):
            get_booking_form_context(now=local(2024, 1, 8, 9, 0))


# ============================================================================
# Status and Lookups
# ============================================================================

@pytest.mark.django_db
class TestUpdateBookingStatus:

    def test_full_lifecycle(self, branch, configuration, shirt):
        booking = book(branch, [(shirt, 1)])

        for new_status in ['processing', 'ready', 'delivered']:
            booking = update_booking_status(booking_id=booking.id, status=new_status)
            assert booking.status == new_status

        assert Booking.objects.get(id=booking.id).status == BookingStatus.DELIVERED

    def test_cancel_while_processing(self, branch, configuration, shirt):
        booking = book(branch, [(shirt, 1)])
        update_booking_status(booking_id=booking.id, status='processing')

        booking = update_booking_status(booking_id=booking.id, status='cancelled')
        assert booking.status == BookingStatus.CANCELLED

    @pytest.mark.parametrize('target', ['booked', 'ready', 'delivered'])
    def test_invalid_transitions_from_booked(self, branch, configuration, shirt, target):
        booking = book(branch, [(shirt, 1)])

        with pytest.raises(InvalidStatusTransitionError):
            update_booking_status(booking_id=booking.id, status=target)

        assert Booking.objects.get(id=booking.id).status == BookingStatus.BOOKED

    def test_delivered_is_final(self, branch, configuration, shirt):
        booking = book(branch, [(shirt, 1)])
        for new_status in ['processing', 'ready', 'delivered']:
            update_booking_status(booking_id=booking.id, status=new_status)

        with pytest.raises(InvalidStatusTransitionError):
            update_booking_status(booking_id=booking.id, status='cancelled')

    def test_not_found(self, db):
        with pytest.raises(BookingNotFoundError):
            update_booking_status(booking_id=999999, status='processing')


@pytest.mark.django_db
class TestBookingLookups:

    def test_get_booking_by_id(self, branch, configuration, shirt):
        booking = book(branch, [(shirt, 1)])
        assert get_booking_by_id(booking_id=booking.id) == booking

    def test_get_booking_by_id_not_found(self, db):
        with pytest.raises(BookingNotFoundError):
            get_booking_by_id(booking_id=999999)

    def test_filter_bookings(self, branch, other_branch, configuration, shirt):
        urgent = book(branch, [(shirt, 1)], 'urgent', phone='03001111111')
        book(branch, [(shirt, 1)], 'normal', phone='03002222222')
        book(other_branch, [(shirt, 1)], 'urgent', phone='03001111111',
             now=local(2024, 1, 10, 9, 0))

        assert list(filter_bookings(branch_id=branch.id, delivery_type='urgent')) == [urgent]
        assert filter_bookings(customer='0300-111').count() == 2
        assert filter_bookings(date_from=date(2024, 1, 9)).count() == 1
        assert filter_bookings(date_to=date(2024, 1, 8)).count() == 2
        assert filter_bookings(status='cancelled').count() == 0


# ============================================================================
# Statistics
# ============================================================================

@pytest.mark.django_db
class TestBookingStatistics:

    def test_totals_and_breakdowns(self, branch, other_branch, configuration, shirt):
        book(branch, [(shirt, 2)], 'urgent', hanger_units=1)            # 325.00
        normal = book(branch, [(shirt, 1)], 'normal')                    # 105.00
        book(other_branch, [(shirt, 1)], 'normal', now=local(2024, 1, 9, 9, 0))
        cancelled = book(branch, [(shirt, 1)], 'normal')
        update_booking_status(booking_id=cancelled.id, status='cancelled')

        stats = get_booking_statistics(branch_id=branch.id)

        assert stats['total_bookings'] == 3
        assert stats['total_revenue'] == '430.00'
        assert stats['total_sales_tax'] == '20.00'
        assert stats['total_hanger_amount'] == '10.00'
        assert stats['total_pieces'] == 3
        assert stats['by_delivery_type'] == {'normal': 2, 'urgent': 1, 'same_day_urgent': 0}
        assert stats['by_status']['booked'] == 2
        assert stats['by_status']['cancelled'] == 1
        assert stats['bookings_by_day'] == {
            '2024-01-08': {'count': 2, 'revenue': '430.00'},
        }
        assert normal.total_amount == Decimal('105.00')

    def test_date_range(self, branch, configuration, shirt):
        book(branch, [(shirt, 1)], now=local(2024, 1, 8, 9, 0))
        book(branch, [(shirt, 1)], now=local(2024, 1, 10, 9, 0))

        stats = get_booking_statistics(date_from=date(2024, 1, 9), date_to=date(2024, 1, 31))

        assert stats['total_bookings'] == 1
        assert list(stats['bookings_by_day']) == ['2024-01-10']

    def test_empty(self, db):
        stats = get_booking_statistics()

        assert stats['total_bookings'] == 0
        assert stats['total_revenue'] == '0.00'
        assert stats['bookings_by_day'] == {}

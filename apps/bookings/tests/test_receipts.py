import pytest
from decimal import Decimal
from django.db import transaction
from django.utils import timezone

from apps.bookings.models import Booking, ReceiptSequence
from apps.bookings.services import (
    format_receipt_number,
    parse_receipt_sequence,
    next_receipt_number,
    allocate_receipt_number,
)
from apps.customers.models import Customer


class TestReceiptHelpers:

    def test_format_pads_to_four_digits(self):
        assert format_receipt_number('MAIN', 1) == 'MAIN-0001'
        assert format_receipt_number('MAIN', 42) == 'MAIN-0042'

    def test_format_grows_past_four_digits(self):
        assert format_receipt_number('MAIN', 12345) == 'MAIN-12345'

    def test_parse_suffix(self):
        assert parse_receipt_sequence('MAIN-0042') == 42
        assert parse_receipt_sequence('MAIN-10000') == 10000

    def test_parse_non_numeric_suffix(self):
        assert parse_receipt_sequence('MAIN-ABCD') is None

    def test_fresh_branch_starts_at_one(self):
        assert next_receipt_number('MAIN', []) == 'MAIN-0001'

    def test_increments_highest(self):
        existing = ['MAIN-0001', 'MAIN-0009', 'MAIN-0010']
        assert next_receipt_number('MAIN', existing) == 'MAIN-0011'

    def test_consecutive_calls_increment_by_one(self):
        existing = []
        for expected in ['MAIN-0001', 'MAIN-0002', 'MAIN-0003']:
            receipt_number = next_receipt_number('MAIN', existing)
            assert receipt_number == expected
            existing.append(receipt_number)

    def test_compares_numerically(self):
        assert next_receipt_number('MAIN', ['MAIN-9999', 'MAIN-10000']) == 'MAIN-10001'

    def test_ignores_other_branches(self):
        existing = ['NORTH-0050', 'MAINX-0099', 'MAIN-0003']
        assert next_receipt_number('MAIN', existing) == 'MAIN-0004'

    def test_ignores_malformed_receipts(self):
        assert next_receipt_number('MAIN', ['MAIN-OLD1', 'MAIN-0002']) == 'MAIN-0003'


def make_booking(branch, receipt_number):
    customer, _ = Customer.objects.get_or_create(phone='03000000000')
    return Booking.objects.create(
        customer=customer,
        customer_phone=customer.phone,
        branch=branch,
        receipt_number=receipt_number,
        subtotal_amount=Decimal('10.00'),
        amount_total=Decimal('10.00'),
        sales_tax_amount=Decimal('0.00'),
        total_amount=Decimal('10.00'),
        booking_date=timezone.now(),
    )


@pytest.mark.django_db
class TestAllocateReceiptNumber:

    def test_fresh_branch(self, branch):
        with transaction.atomic():
            assert allocate_receipt_number(branch=branch) == 'MAIN-0001'
            assert allocate_receipt_number(branch=branch) == 'MAIN-0002'

        assert ReceiptSequence.objects.get(branch=branch).last_number == 2

    def test_branches_are_independent(self, branch, other_branch):
        with transaction.atomic():
            assert allocate_receipt_number(branch=branch) == 'MAIN-0001'
            assert allocate_receipt_number(branch=other_branch) == 'NORTH-0001'
            assert allocate_receipt_number(branch=branch) == 'MAIN-0002'

    def test_seeds_from_existing_receipts(self, branch):
        make_booking(branch, 'MAIN-0041')
        make_booking(branch, 'MAIN-0007')

        with transaction.atomic():
            assert allocate_receipt_number(branch=branch) == 'MAIN-0042'

    def test_resync_catches_up_with_existing_receipts(self, branch):
        ReceiptSequence.objects.create(branch=branch, branch_code='MAIN', last_number=3)
        make_booking(branch, 'MAIN-0010')

        with transaction.atomic():
            assert allocate_receipt_number(branch=branch, resync=True) == 'MAIN-0011'

    def test_resync_never_moves_backwards(self, branch):
        ReceiptSequence.objects.create(branch=branch, branch_code='MAIN', last_number=20)
        make_booking(branch, 'MAIN-0005')

        with transaction.atomic():
            assert allocate_receipt_number(branch=branch, resync=True) == 'MAIN-0021'

    def test_renamed_branch_starts_new_series(self, branch):
        with transaction.atomic():
            for _ in range(3):
                make_booking(branch, allocate_receipt_number(branch=branch))

        branch.code = 'HQ'
        branch.save()

        with transaction.atomic():
            assert allocate_receipt_number(branch=branch) == 'HQ-0001'
            assert allocate_receipt_number(branch=branch) == 'HQ-0002'

        assert ReceiptSequence.objects.get(branch=branch).branch_code == 'HQ'

    def test_renamed_back_continues_old_series(self, branch):
        make_booking(branch, 'MAIN-0005')
        ReceiptSequence.objects.create(branch=branch, branch_code='HQ', last_number=2)

        with transaction.atomic():
            assert allocate_receipt_number(branch=branch) == 'MAIN-0006'

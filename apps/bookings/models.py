from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal


class DeliveryType(models.TextChoices):
    NORMAL = 'normal', 'Normal'
    URGENT = 'urgent', 'Urgent'
    SAME_DAY_URGENT = 'same_day_urgent', 'Same Day Urgent'


class BookingStatus(models.TextChoices):
    BOOKED = 'booked', 'Booked'
    PROCESSING = 'processing', 'Processing'
    READY = 'ready', 'Ready'
    DELIVERED = 'delivered', 'Delivered'
    CANCELLED = 'cancelled', 'Cancelled'


# Allowed status moves; anything else is rejected by the service layer
STATUS_TRANSITIONS = {
    BookingStatus.BOOKED: {BookingStatus.PROCESSING, BookingStatus.CANCELLED},
    BookingStatus.PROCESSING: {BookingStatus.READY, BookingStatus.CANCELLED},
    BookingStatus.READY: {BookingStatus.DELIVERED},
    BookingStatus.DELIVERED: set(),
    BookingStatus.CANCELLED: set(),
}


def money_field(**kwargs):
    return models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        **kwargs
    )


class Booking(models.Model):
    """A customer's drop-off: priced lines, surcharges and promised dates."""

    customer = models.ForeignKey(
        'customers.Customer',
        on_delete=models.PROTECT,
        related_name='bookings'
    )
    customer_phone = models.CharField(max_length=20)
    branch = models.ForeignKey(
        'branches.Branch',
        on_delete=models.PROTECT,
        related_name='bookings'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='bookings_created'
    )

    # BRANCHCODE-NNNN, unique across the shop
    receipt_number = models.CharField(max_length=50, unique=True)

    # Amounts (captured at booking time)
    subtotal_amount = money_field()
    surcharge_percentage = models.DecimalField(max_digits=8, decimal_places=2, default=Decimal('0.00'))
    surcharge_amount = money_field(default=Decimal('0.00'))
    amount_total = money_field()
    sales_tax_percentage = models.DecimalField(max_digits=8, decimal_places=2, default=Decimal('0.00'))
    sales_tax_amount = money_field()
    hanger_units = models.PositiveIntegerField(default=0)
    hanger_amount = money_field(default=Decimal('0.00'))
    total_amount = money_field()

    number_of_pieces = models.PositiveIntegerField(default=0)
    number_of_units = models.PositiveIntegerField(default=0)

    delivery_type = models.CharField(
        max_length=20,
        choices=DeliveryType.choices,
        default=DeliveryType.NORMAL
    )
    booking_date = models.DateTimeField()
    delivery_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=BookingStatus.choices,
        default=BookingStatus.BOOKED
    )

    notes = models.TextField(blank=True)
    issues = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bookings'
        indexes = [
            models.Index(fields=['branch', 'booking_date'], name='bookings_branch__3f1a2c_idx'),
            models.Index(fields=['customer', 'booking_date'], name='bookings_custome_8b4d0e_idx'),
            models.Index(fields=['status'], name='bookings_status_5c7e91_idx'),
            models.Index(fields=['delivery_date'], name='bookings_deliver_a2f640_idx'),
        ]
        ordering = ['-booking_date', '-created_at']
        permissions = [
            ('access_pos', 'Can access point of sale'),
            ('update_booking_status', 'Can update booking status'),
            ('view_reports', 'Can view booking reports'),
        ]

    def __str__(self):
        return f"{self.receipt_number} - {self.customer_phone} ({self.total_amount})"

    def can_transition_to(self, new_status):
        return new_status in STATUS_TRANSITIONS.get(self.status, set())


class BookingItem(models.Model):
    """Booked line; keeps the unit price in force when it was booked."""

    booking = models.ForeignKey(
        Booking,
        on_delete=models.CASCADE,
        related_name='booking_items'
    )
    item = models.ForeignKey(
        'catalog.Item',
        on_delete=models.PROTECT,
        related_name='booking_items'
    )
    units = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = money_field()
    line_total = money_field()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'booking_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.booking.receipt_number}: {self.units} x {self.item.name}"


class ReceiptSequence(models.Model):
    """
    Per-branch receipt counter.

    Locked with SELECT ... FOR UPDATE while a booking is being created so
    concurrent bookings at one branch never read the same last number.
    """

    branch = models.OneToOneField(
        'branches.Branch',
        on_delete=models.CASCADE,
        related_name='receipt_sequence'
    )
    # Code the counter was seeded for; a renamed branch starts a new series
    branch_code = models.CharField(max_length=20, blank=True)
    last_number = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'receipt_sequences'

    def __str__(self):
        return f"{self.branch.code}: {self.last_number}"

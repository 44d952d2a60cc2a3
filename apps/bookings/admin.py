from django.contrib import admin
from apps.bookings.models import Booking, BookingItem, ReceiptSequence


class BookingItemInline(admin.TabularInline):
    model = BookingItem
    extra = 0
    readonly_fields = ['item', 'units', 'unit_price', 'line_total']
    can_delete = False


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    """Admin interface for bookings; amounts are read-only once booked."""

    list_display = [
        'receipt_number',
        'customer_phone',
        'branch',
        'delivery_type',
        'status',
        'total_amount',
        'booking_date',
        'delivery_date',
    ]
    list_filter = ['status', 'delivery_type', 'branch', 'booking_date']
    search_fields = ['receipt_number', 'customer_phone']
    date_hierarchy = 'booking_date'
    inlines = [BookingItemInline]
    readonly_fields = [
        'receipt_number',
        'customer',
        'customer_phone',
        'branch',
        'created_by',
        'subtotal_amount',
        'surcharge_percentage',
        'surcharge_amount',
        'amount_total',
        'sales_tax_percentage',
        'sales_tax_amount',
        'hanger_units',
        'hanger_amount',
        'total_amount',
        'number_of_pieces',
        'number_of_units',
        'delivery_type',
        'booking_date',
        'delivery_date',
        'created_at',
        'updated_at',
    ]


@admin.register(ReceiptSequence)
class ReceiptSequenceAdmin(admin.ModelAdmin):
    list_display = ['branch', 'branch_code', 'last_number', 'updated_at']
    readonly_fields = ['updated_at']

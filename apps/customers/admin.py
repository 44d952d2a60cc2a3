from django.contrib import admin
from apps.customers.models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """Admin interface for customers."""

    list_display = ['phone', 'customer_type', 'number_of_bookings', 'created_at']
    list_filter = ['customer_type', 'created_at']
    search_fields = ['phone']
    readonly_fields = ['number_of_bookings', 'created_at', 'updated_at']

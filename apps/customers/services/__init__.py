"""Services for customers business logic."""

from .exceptions import (
    CustomersServiceError,
    CustomerNotFoundError,
    DuplicateCustomerError,
    CustomerInUseError,
)
from .customer_management import (
    normalize_phone,
    create_customer,
    update_customer,
    delete_customer,
    get_or_create_customer,
    increment_booking_count,
    search_customers,
)

__all__ = [
    # Exceptions
    'CustomersServiceError',
    'CustomerNotFoundError',
    'DuplicateCustomerError',
    'CustomerInUseError',
    # Customer Management
    'normalize_phone',
    'create_customer',
    'update_customer',
    'delete_customer',
    'get_or_create_customer',
    'increment_booking_count',
    'search_customers',
]

"""Customer CRUD and booking-counter service."""

from typing import Any, Dict, Optional

from django.db import transaction
from django.db.models import F, ProtectedError, QuerySet

from ..models import Customer, CustomerType
from .exceptions import CustomerNotFoundError, DuplicateCustomerError, CustomerInUseError


def normalize_phone(phone: str) -> str:
    """Strip whitespace and common separators from a phone number."""
    return ''.join(ch for ch in phone.strip() if ch not in ' -()')


@transaction.atomic
def create_customer(
    *,
    phone: str,
    customer_type: str = CustomerType.NORMAL
) -> Customer:
    """
    Register a customer.

    Raises:
        DuplicateCustomerError: If the phone number is already registered
    """
    phone = normalize_phone(phone)
    if Customer.objects.filter(phone=phone).exists():
        raise DuplicateCustomerError(f"Customer with phone '{phone}' already exists")

    return Customer.objects.create(phone=phone, customer_type=customer_type)


@transaction.atomic
def update_customer(*, customer_id: int, data: Dict[str, Any]) -> Customer:
    """
    Update phone or type of a customer.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
        DuplicateCustomerError: If the new phone belongs to another customer
    """
    try:
        customer = Customer.objects.select_for_update().get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")

    if 'phone' in data:
        phone = normalize_phone(data['phone'])
        if Customer.objects.filter(phone=phone).exclude(id=customer.id).exists():
            raise DuplicateCustomerError(f"Customer with phone '{phone}' already exists")
        customer.phone = phone

    if 'customer_type' in data:
        customer.customer_type = data['customer_type']

    customer.save()
    return customer


@transaction.atomic
def delete_customer(*, customer_id: int) -> None:
    """
    Delete a customer without bookings.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
        CustomerInUseError: If bookings reference the customer
    """
    try:
        customer = Customer.objects.get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")

    try:
        customer.delete()
    except ProtectedError:
        raise CustomerInUseError(
            f"Customer '{customer.phone}' has bookings and cannot be deleted"
        )


def get_or_create_customer(*, phone: str) -> Customer:
    """
    Fetch the customer for a phone number, registering a normal customer
    on first visit.

    Must run inside the caller's transaction so a failed booking does not
    leave a half-registered customer behind.
    """
    customer, _ = Customer.objects.get_or_create(
        phone=normalize_phone(phone),
        defaults={
            'customer_type': CustomerType.NORMAL,
            'number_of_bookings': 0,
        }
    )
    return customer


def increment_booking_count(*, customer: Customer) -> None:
    """Atomically bump ``number_of_bookings`` and refresh the instance."""
    Customer.objects.filter(id=customer.id).update(
        number_of_bookings=F('number_of_bookings') + 1
    )
    customer.refresh_from_db(fields=['number_of_bookings'])


def search_customers(
    *,
    search: Optional[str] = None,
    customer_type: Optional[str] = None
) -> QuerySet:
    """Customers whose phone contains ``search``, newest first."""
    queryset = Customer.objects.all()

    if search:
        queryset = queryset.filter(phone__icontains=normalize_phone(search))

    if customer_type:
        queryset = queryset.filter(customer_type=customer_type)

    return queryset.order_by('-created_at')

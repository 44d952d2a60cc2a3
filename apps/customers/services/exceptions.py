"""Domain-specific exceptions for customers services."""


class CustomersServiceError(Exception):
    """Base exception for customers services."""
    pass


class CustomerNotFoundError(CustomersServiceError):
    """Raised when customer does not exist."""
    pass


class DuplicateCustomerError(CustomersServiceError):
    """Raised when phone number is already registered."""
    pass


class CustomerInUseError(CustomersServiceError):
    """Raised when deleting a customer with bookings."""
    pass

"""Domain-specific exceptions for bookings services."""

from apps.configuration.services.exceptions import ConfigurationMissingError


class BookingsServiceError(Exception):
    """Base exception for bookings services."""
    pass


class BookingValidationError(BookingsServiceError):
    """
    Raised when booking input is invalid.

    ``errors`` maps field names to lists of messages, the same shape DRF
    uses for serializer errors.
    """

    def __init__(self, errors):
        self.errors = {
            field: [messages] if isinstance(messages, str) else list(messages)
            for field, messages in errors.items()
        }
        super().__init__('; '.join(
            f"{field}: {' '.join(messages)}"
            for field, messages in self.errors.items()
        ))


class BookingNotFoundError(BookingsServiceError):
    """Raised when booking does not exist."""
    pass


class InvalidStatusTransitionError(BookingsServiceError):
    """Raised when a booking cannot move to the requested status."""
    pass


class ReceiptAllocationError(BookingsServiceError):
    """Raised when no unique receipt number could be committed."""
    pass


__all__ = [
    'BookingsServiceError',
    'BookingValidationError',
    'BookingNotFoundError',
    'InvalidStatusTransitionError',
    'ReceiptAllocationError',
    'ConfigurationMissingError',
]

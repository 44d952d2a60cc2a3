"""Domain-specific exceptions for catalog services."""


class CatalogServiceError(Exception):
    """Base exception for catalog services."""
    pass


class ItemNotFoundError(CatalogServiceError):
    """Raised when item does not exist."""
    pass


class DuplicateItemCodeError(CatalogServiceError):
    """Raised when another item already uses the code."""
    pass


class ItemInUseError(CatalogServiceError):
    """Raised when deleting an item referenced by bookings."""
    pass


class ProblemNotFoundError(CatalogServiceError):
    """Raised when problem label does not exist."""
    pass


class DuplicateProblemError(CatalogServiceError):
    """Raised when problem label already exists."""
    pass

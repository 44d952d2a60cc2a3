"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass


class DuplicateEmailError(AccountsServiceError):
    """Raised when email is already registered."""
    pass


class CannotDeleteSelfError(AccountsServiceError):
    """Raised when a user tries to delete their own account."""
    pass


class RoleNotFoundError(AccountsServiceError):
    """Raised when a role (auth group) does not exist."""
    pass


class DuplicateRoleError(AccountsServiceError):
    """Raised when role name is already taken."""
    pass


class UnknownPermissionError(AccountsServiceError):
    """Raised when a permission name does not match a shop permission."""
    pass

"""Domain-specific exceptions for branches services."""


class BranchesServiceError(Exception):
    """Base exception for branches services."""
    pass


class BranchNotFoundError(BranchesServiceError):
    """Raised when branch does not exist."""
    pass


class DuplicateBranchCodeError(BranchesServiceError):
    """Raised when another branch already uses the code."""
    pass


class BranchInUseError(BranchesServiceError):
    """Raised when deleting a branch that already issued receipts."""
    pass

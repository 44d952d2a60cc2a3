"""Services for branches business logic."""

from .exceptions import (
    BranchesServiceError,
    BranchNotFoundError,
    DuplicateBranchCodeError,
    BranchInUseError,
)
from .branch_management import (
    create_branch,
    update_branch,
    delete_branch,
    get_branch_by_code,
)

__all__ = [
    # Exceptions
    'BranchesServiceError',
    'BranchNotFoundError',
    'DuplicateBranchCodeError',
    'BranchInUseError',
    # Branch Management
    'create_branch',
    'update_branch',
    'delete_branch',
    'get_branch_by_code',
]

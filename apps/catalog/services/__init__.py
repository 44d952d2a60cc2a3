"""Services for catalog business logic."""

from .exceptions import (
    CatalogServiceError,
    ItemNotFoundError,
    DuplicateItemCodeError,
    ItemInUseError,
    ProblemNotFoundError,
    DuplicateProblemError,
)
from .item_management import (
    create_item,
    update_item,
    delete_item,
    search_items,
    get_active_items_by_ids,
)
from .problem_management import (
    create_problem,
    update_problem,
    delete_problem,
)

__all__ = [
    # Exceptions
    'CatalogServiceError',
    'ItemNotFoundError',
    'DuplicateItemCodeError',
    'ItemInUseError',
    'ProblemNotFoundError',
    'DuplicateProblemError',
    # Item Management
    'create_item',
    'update_item',
    'delete_item',
    'search_items',
    'get_active_items_by_ids',
    # Problem Management
    'create_problem',
    'update_problem',
    'delete_problem',
]

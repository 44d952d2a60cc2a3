"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserNotFoundError,
    DuplicateEmailError,
    CannotDeleteSelfError,
    RoleNotFoundError,
    DuplicateRoleError,
    UnknownPermissionError,
)
from .role_management import (
    SHOP_APPS,
    permission_name,
    list_shop_permissions,
    resolve_permissions,
    get_role,
    get_roles_by_name,
    create_role,
    update_role,
    delete_role,
)
from .user_management import (
    create_user_account,
    update_user_account,
    delete_user_account,
    search_users,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserNotFoundError',
    'DuplicateEmailError',
    'CannotDeleteSelfError',
    'RoleNotFoundError',
    'DuplicateRoleError',
    'UnknownPermissionError',
    # Role Management
    'SHOP_APPS',
    'permission_name',
    'list_shop_permissions',
    'resolve_permissions',
    'get_role',
    'get_roles_by_name',
    'create_role',
    'update_role',
    'delete_role',
    # User Management
    'create_user_account',
    'update_user_account',
    'delete_user_account',
    'search_users',
]

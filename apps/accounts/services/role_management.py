"""
Role management service.

Roles are ``django.contrib.auth`` groups. Permissions are addressed by
their ``app_label.codename`` name and limited to the shop apps.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from django.contrib.auth.models import Group, Permission
from django.db import transaction
from django.db.models import QuerySet

from .exceptions import RoleNotFoundError, DuplicateRoleError, UnknownPermissionError

logger = logging.getLogger(__name__)

SHOP_APPS = ['branches', 'catalog', 'customers', 'configuration', 'bookings', 'accounts']


def permission_name(permission: Permission) -> str:
    return f"{permission.content_type.app_label}.{permission.codename}"


def list_shop_permissions() -> QuerySet:
    """Every permission a role may be granted, ordered by app and codename."""
    return (
        Permission.objects
        .filter(content_type__app_label__in=SHOP_APPS)
        .select_related('content_type')
        .order_by('content_type__app_label', 'codename')
    )


def resolve_permissions(names: Iterable[str]) -> List[Permission]:
    """
    Look up permissions by ``app_label.codename``.

    Raises:
        UnknownPermissionError: Listing every name that did not resolve
    """
    names = list(dict.fromkeys(names))
    available = {permission_name(p): p for p in list_shop_permissions()}

    unknown = [name for name in names if name not in available]
    if unknown:
        raise UnknownPermissionError(f"Unknown permissions: {', '.join(unknown)}")

    return [available[name] for name in names]


def get_role(*, role_id: int) -> Group:
    try:
        return Group.objects.get(id=role_id)
    except Group.DoesNotExist:
        raise RoleNotFoundError(f"Role {role_id} not found")


def get_roles_by_name(names: Iterable[str]) -> List[Group]:
    """
    Roles for the given names, in the given order.

    Raises:
        RoleNotFoundError: If any name does not match a role
    """
    names = list(dict.fromkeys(names))
    roles = {group.name: group for group in Group.objects.filter(name__in=names)}

    missing = [name for name in names if name not in roles]
    if missing:
        raise RoleNotFoundError(f"Unknown roles: {', '.join(missing)}")

    return [roles[name] for name in names]


@transaction.atomic
def create_role(*, name: str, permissions: Optional[Iterable[str]] = None) -> Group:
    """
    Create a role with the given permissions.

    Raises:
        DuplicateRoleError: If name is taken
        UnknownPermissionError: If a permission name is unknown
    """
    name = name.strip()
    if Group.objects.filter(name__iexact=name).exists():
        raise DuplicateRoleError(f"Role '{name}' already exists")

    granted = resolve_permissions(permissions or [])

    role = Group.objects.create(name=name)
    role.permissions.set(granted)

    logger.info("Role '%s' created with %s permissions", name, len(granted))
    return role


@transaction.atomic
def update_role(*, role_id: int, data: Dict[str, Any]) -> Group:
    """
    Rename a role and/or replace its permissions.

    A ``permissions`` key syncs the role to exactly that list.

    Raises:
        RoleNotFoundError: If role doesn't exist
        DuplicateRoleError: If the new name belongs to another role
        UnknownPermissionError: If a permission name is unknown
    """
    try:
        role = Group.objects.select_for_update().get(id=role_id)
    except Group.DoesNotExist:
        raise RoleNotFoundError(f"Role {role_id} not found")

    if 'name' in data:
        name = data['name'].strip()
        if Group.objects.filter(name__iexact=name).exclude(id=role.id).exists():
            raise DuplicateRoleError(f"Role '{name}' already exists")
        role.name = name
        role.save(update_fields=['name'])

    if 'permissions' in data:
        role.permissions.set(resolve_permissions(data['permissions']))

    logger.info("Role %s updated (fields=%s)", role.id, sorted(data))
    return role


@transaction.atomic
def delete_role(*, role_id: int) -> None:
    """
    Delete a role. Members simply lose it.

    Raises:
        RoleNotFoundError: If role doesn't exist
    """
    role = get_role(role_id=role_id)
    logger.info("Role '%s' deleted", role.name)
    role.delete()

"""
User administration service.

Staff create shop accounts, assign each one a branch (by code) and a set
of roles, and remove accounts that are no longer needed.
"""

import logging
from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.branches.models import Branch
from apps.branches.services import get_branch_by_code

from ..models import User
from .exceptions import UserNotFoundError, DuplicateEmailError, CannotDeleteSelfError
from .role_management import get_roles_by_name

logger = logging.getLogger(__name__)


def _resolve_branch(branch_code: Optional[str]) -> Optional[Branch]:
    if not branch_code:
        return None
    return get_branch_by_code(code=branch_code)


@transaction.atomic
def create_user_account(
    *,
    email: str,
    password: str,
    display_name: str = '',
    branch_code: Optional[str] = None,
    roles: Optional[Iterable[str]] = None,
    is_staff: bool = False
) -> User:
    """
    Create a shop user.

    Args:
        email: Login email (unique, case-insensitive)
        password: Raw password, stored hashed
        display_name: Name shown on receipts and lists
        branch_code: Code of the branch the user books for
        roles: Role (group) names to assign
        is_staff: Grants every shop permission

    Raises:
        DuplicateEmailError: If email is taken
        BranchNotFoundError: If branch_code matches no branch
        RoleNotFoundError: If a role name is unknown
    """
    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise DuplicateEmailError(f"User with email '{email}' already exists")

    branch = _resolve_branch(branch_code)
    groups = get_roles_by_name(roles or [])

    user = User.objects.create_user(
        email=email,
        password=password,
        display_name=display_name,
        branch=branch,
        is_staff=is_staff,
    )
    user.groups.set(groups)

    logger.info(
        "User %s created (branch=%s, roles=%s)",
        email, branch.code if branch else None, [g.name for g in groups],
    )
    return user


@transaction.atomic
def update_user_account(*, user_id: UUID, data: Dict[str, Any]) -> User:
    """
    Update profile, branch, roles or password of a user.

    ``branch_code`` set to an empty value detaches the user from any
    branch. ``roles`` replaces the user's roles with exactly that list.

    Raises:
        UserNotFoundError: If user doesn't exist
        DuplicateEmailError: If the new email belongs to another user
        BranchNotFoundError: If branch_code matches no branch
        RoleNotFoundError: If a role name is unknown
    """
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User {user_id} not found")

    if 'email' in data:
        email = User.objects.normalize_email(data['email'])
        if User.objects.filter(email__iexact=email).exclude(id=user.id).exists():
            raise DuplicateEmailError(f"User with email '{email}' already exists")
        user.email = email

    if 'display_name' in data:
        user.display_name = data['display_name']

    if 'is_staff' in data:
        user.is_staff = data['is_staff']

    if 'is_active' in data:
        user.is_active = data['is_active']

    if 'branch_code' in data:
        user.branch = _resolve_branch(data['branch_code'])

    if data.get('password'):
        user.set_password(data['password'])

    user.save()

    if 'roles' in data:
        user.groups.set(get_roles_by_name(data['roles']))

    logger.info("User %s updated (fields=%s)", user.email, sorted(k for k in data if k != 'password'))
    return user


@transaction.atomic
def delete_user_account(*, user_id: UUID, deleted_by: User) -> None:
    """
    Delete a user. Bookings they created keep their data.

    Raises:
        UserNotFoundError: If user doesn't exist
        CannotDeleteSelfError: If deleted_by is the user being deleted
    """
    try:
        user = User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User {user_id} not found")

    if user.id == deleted_by.id:
        raise CannotDeleteSelfError("You cannot delete your own account")

    logger.info("User %s deleted by %s", user.email, deleted_by.email)
    user.delete()


def search_users(
    *,
    search: Optional[str] = None,
    branch_code: Optional[str] = None,
    role: Optional[str] = None
) -> QuerySet:
    """Users matching email or display name, ordered by email."""
    queryset = User.objects.select_related('branch').prefetch_related('groups')

    if search:
        queryset = queryset.filter(
            Q(email__icontains=search) | Q(display_name__icontains=search)
        )

    if branch_code:
        queryset = queryset.filter(branch__code=branch_code.strip().upper())

    if role:
        queryset = queryset.filter(groups__name=role)

    return queryset.order_by('email').distinct()

"""Branch CRUD operations service."""

from typing import Any, Dict

from django.db import transaction
from django.db.models import ProtectedError

from ..models import Branch
from .exceptions import BranchNotFoundError, DuplicateBranchCodeError, BranchInUseError


def _normalize_code(code: str) -> str:
    return code.strip().upper()


@transaction.atomic
def create_branch(
    *,
    name: str,
    code: str,
    address: str = '',
    mobile: str = ''
) -> Branch:
    """
    Create a new branch.

    Args:
        name: Branch display name
        code: Short unique code used as receipt prefix
        address: Street address
        mobile: Contact number

    Returns:
        Created Branch instance

    Raises:
        DuplicateBranchCodeError: If the code is already taken
    """
    code = _normalize_code(code)

    if Branch.objects.filter(code=code).exists():
        raise DuplicateBranchCodeError(f"Branch code '{code}' already exists")

    return Branch.objects.create(
        name=name,
        code=code,
        address=address,
        mobile=mobile,
    )


@transaction.atomic
def update_branch(*, branch_id: int, data: Dict[str, Any]) -> Branch:
    """
    Update an existing branch.

    Raises:
        BranchNotFoundError: If branch doesn't exist
        DuplicateBranchCodeError: If the new code belongs to another branch
    """
    try:
        branch = Branch.objects.select_for_update().get(id=branch_id)
    except Branch.DoesNotExist:
        raise BranchNotFoundError(f"Branch {branch_id} not found")

    if 'code' in data:
        code = _normalize_code(data['code'])
        if Branch.objects.filter(code=code).exclude(id=branch.id).exists():
            raise DuplicateBranchCodeError(f"Branch code '{code}' already exists")
        data = {**data, 'code': code}

    allowed_fields = ['name', 'code', 'address', 'mobile']

    for field, value in data.items():
        if field in allowed_fields:
            setattr(branch, field, value)

    branch.save()
    return branch


@transaction.atomic
def delete_branch(*, branch_id: int) -> None:
    """
    Delete a branch.

    Branches referenced by bookings are protected because their code is
    baked into issued receipt numbers.

    Raises:
        BranchNotFoundError: If branch doesn't exist
        BranchInUseError: If bookings reference the branch
    """
    try:
        branch = Branch.objects.get(id=branch_id)
    except Branch.DoesNotExist:
        raise BranchNotFoundError(f"Branch {branch_id} not found")

    try:
        branch.delete()
    except ProtectedError:
        raise BranchInUseError(
            f"Branch '{branch.code}' has bookings and cannot be deleted"
        )


def get_branch_by_code(*, code: str) -> Branch:
    """
    Get branch by its code (case-insensitive).

    Raises:
        BranchNotFoundError: If branch doesn't exist
    """
    try:
        return Branch.objects.get(code=_normalize_code(code))
    except Branch.DoesNotExist:
        raise BranchNotFoundError(f"Branch '{code}' not found")

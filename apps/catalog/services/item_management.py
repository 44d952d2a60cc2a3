"""Item CRUD and search service."""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

from django.db import transaction
from django.db.models import ProtectedError, Q, QuerySet

from ..models import Item, ItemStatus
from .exceptions import ItemNotFoundError, DuplicateItemCodeError, ItemInUseError


@transaction.atomic
def create_item(
    *,
    code: str,
    name: str,
    unit_price: Decimal,
    units_per_piece: int = 0,
    status: str = ItemStatus.ACTIVE,
    date_added: Optional[date] = None
) -> Item:
    """
    Create a new catalog item.

    Args:
        code: Exactly 4 characters, unique
        name: Display name
        unit_price: Price per piece
        units_per_piece: Secondary unit count used for reporting
        status: 'active' or 'disabled'
        date_added: Defaults to today

    Returns:
        Created Item instance

    Raises:
        DuplicateItemCodeError: If the code is already taken
    """
    if Item.objects.filter(code=code).exists():
        raise DuplicateItemCodeError(f"Item code '{code}' already exists")

    fields = {
        'code': code,
        'name': name,
        'unit_price': unit_price,
        'units_per_piece': units_per_piece,
        'status': status,
    }
    if date_added is not None:
        fields['date_added'] = date_added

    return Item.objects.create(**fields)


@transaction.atomic
def update_item(*, item_id: int, data: Dict[str, Any]) -> Item:
    """
    Update an existing item.

    Price changes never touch existing bookings; each booking line keeps
    the unit price captured when it was booked.

    Raises:
        ItemNotFoundError: If item doesn't exist
        DuplicateItemCodeError: If the new code belongs to another item
    """
    try:
        item = Item.objects.select_for_update().get(id=item_id)
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item {item_id} not found")

    code = data.get('code')
    if code and Item.objects.filter(code=code).exclude(id=item.id).exists():
        raise DuplicateItemCodeError(f"Item code '{code}' already exists")

    allowed_fields = [
        'code', 'name', 'unit_price', 'units_per_piece', 'status', 'date_added'
    ]

    for field, value in data.items():
        if field in allowed_fields:
            setattr(item, field, value)

    item.save()
    return item


@transaction.atomic
def delete_item(*, item_id: int) -> None:
    """
    Delete an item that has never been booked.

    Raises:
        ItemNotFoundError: If item doesn't exist
        ItemInUseError: If booking lines reference the item (disable it instead)
    """
    try:
        item = Item.objects.get(id=item_id)
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item {item_id} not found")

    try:
        item.delete()
    except ProtectedError:
        raise ItemInUseError(
            f"Item '{item.code}' is used by bookings; disable it instead"
        )


def search_items(
    *,
    search: Optional[str] = None,
    status: Optional[str] = None
) -> QuerySet:
    """
    Search items by name or code, optionally filtered by status.

    Returns:
        QuerySet of Item ordered by name
    """
    queryset = Item.objects.all()

    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) | Q(code__icontains=search)
        )

    if status:
        queryset = queryset.filter(status=status)

    return queryset.order_by('name')


def get_active_items_by_ids(*, item_ids: Iterable[int]) -> Dict[int, Item]:
    """Active items keyed by id; unknown or disabled ids are simply absent."""
    return Item.objects.filter(
        id__in=set(item_ids),
        status=ItemStatus.ACTIVE,
    ).in_bulk()

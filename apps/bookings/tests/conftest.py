import pytest
from datetime import datetime
from decimal import Decimal
from django.contrib.auth.models import Permission
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.branches.models import Branch
from apps.catalog.models import Item, ItemStatus, Problem
from apps.configuration.models import PricingConfiguration
from apps.bookings.services import clock


def grant(user, *codenames):
    """Give ``user`` the given bookings permissions."""
    for codename in codenames:
        user.user_permissions.add(
            Permission.objects.get(content_type__app_label='bookings', codename=codename)
        )
    return user


def authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def shop_now(monkeypatch):
    """
    Freeze the shop clock.

    Starts at Monday 2024-01-08 09:00 local time; call the returned
    function with a naive local datetime to move it.
    """
    def set_now(naive):
        moment = timezone.make_aware(naive)
        monkeypatch.setattr(clock, 'local_now', lambda: moment)
        return moment

    set_now(datetime(2024, 1, 8, 9, 0))
    return set_now


@pytest.fixture
def branch(db):
    """Create and return the main branch."""
    return Branch.objects.create(name='Main Branch', code='MAIN', mobile='0300-1111111')


@pytest.fixture
def other_branch(db):
    """Create and return a second branch."""
    return Branch.objects.create(name='North Branch', code='NORTH')


@pytest.fixture
def configuration(db):
    """Pricing configuration: 5% tax, 4/2 days, 50%/100% surcharges, 10.00 per hanger."""
    return PricingConfiguration.objects.create(
        sales_tax_percentage=Decimal('5.00'),
        number_of_days_for_normal=4,
        number_of_days_for_urgent=2,
        urgent_charges_percentage=Decimal('50.00'),
        same_day_urgent_charges_percentage=Decimal('100.00'),
        hanger_charge_per_unit=Decimal('10.00'),
        ntn_number='1234567-8',
    )


@pytest.fixture
def shirt(db):
    """Create and return an active item priced 100.00."""
    return Item.objects.create(
        code='SHRT',
        name='Shirt',
        units_per_piece=1,
        unit_price=Decimal('100.00'),
    )


@pytest.fixture
def suit(db):
    """Create and return an active two-unit item priced 250.00."""
    return Item.objects.create(
        code='SUIT',
        name='Two Piece Suit',
        units_per_piece=2,
        unit_price=Decimal('250.00'),
    )


@pytest.fixture
def disabled_item(db):
    """Create and return a disabled item."""
    return Item.objects.create(
        code='OLDX',
        name='Discontinued Item',
        units_per_piece=1,
        unit_price=Decimal('40.00'),
        status=ItemStatus.DISABLED,
    )


@pytest.fixture
def problem(db):
    """Create and return a problem label."""
    return Problem.objects.create(name='Stain on collar')


@pytest.fixture
def pos_user(branch):
    """Counter user at the main branch who can take bookings."""
    user = User.objects.create_user(
        email='counter@example.com',
        password='TestPass123!',
        display_name='Counter User',
        branch=branch,
    )
    return grant(user, 'access_pos')


@pytest.fixture
def manager_user(branch):
    """Manager at the main branch with every booking permission."""
    user = User.objects.create_user(
        email='manager@example.com',
        password='TestPass123!',
        display_name='Branch Manager',
        branch=branch,
    )
    return grant(user, 'access_pos', 'update_booking_status', 'view_reports')


@pytest.fixture
def plain_user(branch):
    """Main branch user without booking permissions."""
    return User.objects.create_user(
        email='plain@example.com',
        password='TestPass123!',
        display_name='Plain User',
        branch=branch,
    )


@pytest.fixture
def unassigned_user(db):
    """User with POS access but no branch."""
    user = User.objects.create_user(
        email='unassigned@example.com',
        password='TestPass123!',
        display_name='Unassigned User',
    )
    return grant(user, 'access_pos')


@pytest.fixture
def other_branch_user(other_branch):
    """Counter user at the north branch."""
    user = User.objects.create_user(
        email='north@example.com',
        password='TestPass123!',
        display_name='North Counter',
        branch=other_branch,
    )
    return grant(user, 'access_pos', 'update_booking_status', 'view_reports')


@pytest.fixture
def staff_user(db):
    """Staff user without a branch."""
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        display_name='Staff User',
        is_staff=True,
    )


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def pos_client(pos_user):
    return authenticate(APIClient(), pos_user)


@pytest.fixture
def manager_client(manager_user):
    return authenticate(APIClient(), manager_user)


@pytest.fixture
def plain_client(plain_user):
    return authenticate(APIClient(), plain_user)


@pytest.fixture
def unassigned_client(unassigned_user):
    return authenticate(APIClient(), unassigned_user)


@pytest.fixture
def other_branch_client(other_branch_user):
    return authenticate(APIClient(), other_branch_user)


@pytest.fixture
def staff_client(staff_user):
    return authenticate(APIClient(), staff_user)


@pytest.fixture
def booking_payload(shirt):
    """Valid booking request body: two shirts, urgent, one hanger."""
    return {
        'customer_id': '0300-1234567',
        'selected_items': [{'id': shirt.id, 'units': 2}],
        'delivery_type': 'urgent',
        'hanger_units': 1,
        'notes': 'Light starch',
        'issues': ['Stain on collar'],
    }

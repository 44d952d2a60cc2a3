import pytest
from decimal import Decimal
from django.contrib.auth.models import Permission
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.catalog.models import Item, ItemStatus, Problem


def authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def shirt(db):
    return Item.objects.create(
        code='SHRT',
        name='Shirt',
        units_per_piece=1,
        unit_price=Decimal('100.00'),
    )


@pytest.fixture
def suit(db):
    return Item.objects.create(
        code='SUIT',
        name='Two Piece Suit',
        units_per_piece=2,
        unit_price=Decimal('250.00'),
    )


@pytest.fixture
def disabled_item(db):
    return Item.objects.create(
        code='OLDX',
        name='Old Curtain',
        units_per_piece=1,
        unit_price=Decimal('40.00'),
        status=ItemStatus.DISABLED,
    )


@pytest.fixture
def problem(db):
    return Problem.objects.create(name='Stain on collar')


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        display_name='Staff User',
        is_staff=True,
    )


@pytest.fixture
def catalog_editor(db):
    """Non-staff user allowed to add and change items and problems."""
    user = User.objects.create_user(
        email='editor@example.com',
        password='TestPass123!',
        display_name='Catalog Editor',
    )
    user.user_permissions.add(*Permission.objects.filter(
        content_type__app_label='catalog',
        codename__in=['add_item', 'change_item', 'add_problem', 'change_problem'],
    ))
    return user


@pytest.fixture
def regular_user(db):
    return User.objects.create_user(
        email='regular@example.com',
        password='TestPass123!',
        display_name='Regular User',
    )


@pytest.fixture
def staff_client(staff_user):
    return authenticate(APIClient(), staff_user)


@pytest.fixture
def editor_client(catalog_editor):
    return authenticate(APIClient(), catalog_editor)


@pytest.fixture
def regular_client(regular_user):
    return authenticate(APIClient(), regular_user)

import pytest
from django.contrib.auth.models import Group, Permission
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.branches.models import Branch


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def branch(db):
    return Branch.objects.create(name='Main Branch', code='MAIN')


@pytest.fixture
def user(db, branch):
    """Create and return a counter user assigned to a branch."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
        branch=branch,
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        display_name='Inactive User',
        is_active=False,
    )


@pytest.fixture
def manager_role(db):
    """Role group granting the POS and status permissions."""
    group = Group.objects.create(name='manager')
    group.permissions.add(*Permission.objects.filter(
        content_type__app_label='bookings',
        codename__in=['access_pos', 'update_booking_status'],
    ))
    return group


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def second_branch(db):
    return Branch.objects.create(name='Gulberg', code='GLB')


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        display_name='Staff User',
        is_staff=True,
    )


@pytest.fixture
def staff_client(staff_user):
    client = APIClient()
    refresh = RefreshToken.for_user(staff_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client

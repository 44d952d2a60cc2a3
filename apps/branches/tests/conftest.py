import pytest
from django.contrib.auth.models import Permission
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.branches.models import Branch


def authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def branch(db):
    """Create and return the main branch."""
    return Branch.objects.create(
        name='Main Branch',
        code='MAIN',
        address='12 Mall Road',
        mobile='0300-1111111',
    )


@pytest.fixture
def second_branch(db):
    """Create and return another branch."""
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
def branch_admin(db):
    """Non-staff user holding the add/change/delete branch permissions."""
    user = User.objects.create_user(
        email='branchadmin@example.com',
        password='TestPass123!',
        display_name='Branch Admin',
    )
    user.user_permissions.add(*Permission.objects.filter(
        content_type__app_label='branches',
        codename__in=['add_branch', 'change_branch', 'delete_branch'],
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
def branch_admin_client(branch_admin):
    return authenticate(APIClient(), branch_admin)


@pytest.fixture
def regular_client(regular_user):
    return authenticate(APIClient(), regular_user)

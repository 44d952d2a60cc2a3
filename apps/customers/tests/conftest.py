import pytest
from django.contrib.auth.models import Permission
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.customers.models import Customer, CustomerType


def authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def customer(db):
    return Customer.objects.create(phone='03001234567')


@pytest.fixture
def corporate_customer(db):
    return Customer.objects.create(
        phone='04235550000',
        customer_type=CustomerType.CORPORATE,
        number_of_bookings=12,
    )


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        display_name='Staff User',
        is_staff=True,
    )


@pytest.fixture
def counter_user(db):
    """Non-staff user who may register and edit customers."""
    user = User.objects.create_user(
        email='counter@example.com',
        password='TestPass123!',
        display_name='Counter User',
    )
    user.user_permissions.add(*Permission.objects.filter(
        content_type__app_label='customers',
        codename__in=['add_customer', 'change_customer'],
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
def counter_client(counter_user):
    return authenticate(APIClient(), counter_user)


@pytest.fixture
def regular_client(regular_user):
    return authenticate(APIClient(), regular_user)

import pytest
from decimal import Decimal
from django.contrib.auth.models import Permission
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.configuration.models import PricingConfiguration


def authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def configuration_payload():
    return {
        'sales_tax_percentage': '5.00',
        'number_of_days_for_normal': 3,
        'number_of_days_for_urgent': 1,
        'urgent_charges_percentage': '50.00',
        'same_day_urgent_charges_percentage': '100.00',
        'hanger_charge_per_unit': '10.00',
        'ntn_number': '1234567-8',
    }


@pytest.fixture
def configuration(db):
    return PricingConfiguration.objects.create(
        sales_tax_percentage=Decimal('5.00'),
        number_of_days_for_normal=3,
        number_of_days_for_urgent=1,
        urgent_charges_percentage=Decimal('50.00'),
        same_day_urgent_charges_percentage=Decimal('100.00'),
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
def settings_manager(db):
    """Non-staff user allowed to change the pricing configuration."""
    user = User.objects.create_user(
        email='settings@example.com',
        password='TestPass123!',
        display_name='Settings Manager',
    )
    user.user_permissions.add(Permission.objects.get(
        content_type__app_label='configuration',
        codename='change_pricingconfiguration',
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
def settings_client(settings_manager):
    return authenticate(APIClient(), settings_manager)


@pytest.fixture
def regular_client(regular_user):
    return authenticate(APIClient(), regular_user)

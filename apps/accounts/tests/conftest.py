import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a cashier with a mobile number."""
    return User.objects.create_user(
        email='cashier@salon.example.com',
        password='TestPass123!',
        display_name='Test Cashier',
        mobile='9876543210',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@salon.example.com',
        password='TestPass123!',
        display_name='Inactive User',
        is_active=False,
    )


@pytest.fixture
def super_admin(db):
    return User.objects.create_user(
        email='admin@salon.example.com',
        password='AdminPass123!',
        display_name='Admin',
        role=UserRole.SUPER_ADMIN,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an API client authenticated as the cashier using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def admin_client(super_admin):
    client = APIClient()
    refresh = RefreshToken.for_user(super_admin)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client

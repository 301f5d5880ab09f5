import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.stores.models import Store, StoreStaff, StaffRole


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def super_admin(db):
    """Create and return a super admin."""
    return User.objects.create_user(
        email='admin@salon.example.com',
        password='TestPass123!',
        display_name='Owner',
        role=UserRole.SUPER_ADMIN,
    )


@pytest.fixture
def store_manager(db):
    """Create and return a store manager."""
    return User.objects.create_user(
        email='manager@salon.example.com',
        password='TestPass123!',
        display_name='Manager',
        role=UserRole.STORE_MANAGER,
    )


@pytest.fixture
def cashier(db):
    """Create and return a cashier."""
    return User.objects.create_user(
        email='cashier@salon.example.com',
        password='TestPass123!',
        display_name='Cashier',
    )


@pytest.fixture
def outsider(db):
    """Create and return a cashier not assigned to any store."""
    return User.objects.create_user(
        email='outsider@salon.example.com',
        password='TestPass123!',
        display_name='Outsider',
    )


@pytest.fixture
def store(db, store_manager, cashier):
    """Create a store with one manager and one cashier."""
    store = Store.objects.create(
        name='Glow Salon Indiranagar',
        city='Bengaluru',
        phone='9800000000',
        tax_enabled=True,
        tax_rate=Decimal('18.00'),
    )
    StoreStaff.objects.create(store=store, user=store_manager, role=StaffRole.STORE_MANAGER)
    StoreStaff.objects.create(store=store, user=cashier, role=StaffRole.CASHIER)
    return store


@pytest.fixture
def other_store(db):
    """Create a store nobody in the fixtures works at."""
    return Store.objects.create(name='Glow Salon Koramangala', city='Bengaluru')


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def admin_client(super_admin):
    """Return API client authenticated as super admin."""
    return _client_for(super_admin)


@pytest.fixture
def manager_client(store_manager):
    """Return API client authenticated as store manager."""
    return _client_for(store_manager)


@pytest.fixture
def cashier_client(cashier):
    """Return API client authenticated as cashier."""
    return _client_for(cashier)


@pytest.fixture
def outsider_client(outsider):
    """Return API client authenticated as outsider."""
    return _client_for(outsider)

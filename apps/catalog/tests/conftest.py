import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.stores.models import Store, StoreStaff, StaffRole
from apps.catalog.models import ServiceCategory, ProductCategory, Service, Product


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def catalog_manager(db):
    """Create and return a store manager."""
    return User.objects.create_user(
        email='manager@salon.example.com',
        password='TestPass123!',
        display_name='Manager',
    )


@pytest.fixture
def catalog_cashier(db):
    """Create and return a cashier."""
    return User.objects.create_user(
        email='cashier@salon.example.com',
        password='TestPass123!',
        display_name='Cashier',
    )


@pytest.fixture
def catalog_store(db, catalog_manager, catalog_cashier):
    """Create a store with a manager and a cashier."""
    store = Store.objects.create(name='Glow Salon Indiranagar')
    StoreStaff.objects.create(store=store, user=catalog_manager, role=StaffRole.STORE_MANAGER)
    StoreStaff.objects.create(store=store, user=catalog_cashier, role=StaffRole.CASHIER)
    return store


@pytest.fixture
def foreign_store(db):
    """Create a store none of the fixture users work at."""
    return Store.objects.create(name='Other Salon')


@pytest.fixture
def manager_client(catalog_manager):
    """Return API client authenticated as manager."""
    return _client_for(catalog_manager)


@pytest.fixture
def cashier_client(catalog_cashier):
    """Return API client authenticated as cashier."""
    return _client_for(catalog_cashier)


@pytest.fixture
def hair_category(catalog_store):
    return ServiceCategory.objects.create(store=catalog_store, name='Hair')


@pytest.fixture
def haircut(catalog_store, hair_category):
    """Create a haircut service."""
    return Service.objects.create(
        store=catalog_store,
        category=hair_category,
        name='Haircut',
        price=Decimal('500.00'),
        duration_minutes=45,
    )


@pytest.fixture
def shampoo(catalog_store):
    """Create a product with healthy stock."""
    category = ProductCategory.objects.create(store=catalog_store, name='Hair Care')
    return Product.objects.create(
        store=catalog_store,
        category=category,
        name='Argan Shampoo',
        price=Decimal('350.00'),
        cost=Decimal('200.00'),
        barcode='8901234567890',
        brand='Glow',
        stock=20,
        min_stock=5,
    )


@pytest.fixture
def serum(catalog_store):
    """Create a product that is low on stock."""
    return Product.objects.create(
        store=catalog_store,
        name='Hair Serum',
        price=Decimal('600.00'),
        barcode='8901234567891',
        stock=2,
        min_stock=5,
    )


@pytest.fixture
def foreign_product(foreign_store):
    return Product.objects.create(
        store=foreign_store,
        name='Foreign Wax',
        price=Decimal('100.00'),
        barcode='1111111111111',
        stock=10,
    )

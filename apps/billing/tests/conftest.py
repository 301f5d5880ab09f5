import pytest
from datetime import date, timedelta
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.stores.models import Store, StoreStaff, StaffRole
from apps.catalog.models import Service, Product
from apps.customers.models import Customer, MembershipPlan, CustomerMembership


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
def billing_cashier(db):
    """Create and return the cashier ringing up sales."""
    return User.objects.create_user(
        email='cashier@salon.example.com',
        password='TestPass123!',
        display_name='Cashier',
    )


@pytest.fixture
def billing_outsider(db):
    """Create and return a cashier of another store."""
    return User.objects.create_user(
        email='outsider@salon.example.com',
        password='TestPass123!',
        display_name='Outsider',
    )


@pytest.fixture
def billing_store(db, billing_cashier):
    """Store with 18% GST and default loyalty rules."""
    store = Store.objects.create(
        name='Glow Salon Indiranagar',
        tax_enabled=True,
        tax_rate=Decimal('18.00'),
    )
    StoreStaff.objects.create(store=store, user=billing_cashier, role=StaffRole.CASHIER)
    return store


@pytest.fixture
def untaxed_store(db, billing_cashier):
    store = Store.objects.create(name='Glow Salon Express', tax_enabled=False)
    StoreStaff.objects.create(store=store, user=billing_cashier, role=StaffRole.CASHIER)
    return store


@pytest.fixture
def cashier_client(billing_cashier):
    """Return API client authenticated as cashier."""
    return _client_for(billing_cashier)


@pytest.fixture
def outsider_client(billing_outsider):
    """Return API client authenticated as outsider."""
    return _client_for(billing_outsider)


@pytest.fixture
def haircut(billing_store):
    return Service.objects.create(store=billing_store, name='Haircut', price=Decimal('500.00'))


@pytest.fixture
def shampoo(billing_store):
    return Product.objects.create(
        store=billing_store,
        name='Argan Shampoo',
        price=Decimal('200.00'),
        barcode='8901234567890',
        stock=10,
    )


@pytest.fixture
def express_shampoo(untaxed_store):
    return Product.objects.create(
        store=untaxed_store,
        name='Argan Shampoo',
        price=Decimal('200.00'),
        stock=10,
    )


@pytest.fixture
def customer(db):
    """Customer holding 120 points."""
    return Customer.objects.create(
        first_name='Priya',
        last_name='Sharma',
        mobile='9845012345',
        loyalty_points=120,
    )


@pytest.fixture
def gold_member(customer, untaxed_store):
    """Give the customer a 10% / double points membership at the untaxed store."""
    plan = MembershipPlan.objects.create(
        store=untaxed_store,
        name='Gold',
        discount_percentage=Decimal('10.00'),
        points_multiplier=Decimal('2.00'),
    )
    start = date.today() - timedelta(days=1)
    CustomerMembership.objects.create(
        customer=customer,
        plan=plan,
        start_date=start,
        end_date=start + timedelta(days=365),
    )
    return customer

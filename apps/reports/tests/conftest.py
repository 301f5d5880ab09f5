import pytest
from datetime import date, timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.billing.services import checkout
from apps.catalog.models import Service, Product
from apps.customers.models import Customer, MembershipPlan, CustomerMembership
from apps.stores.models import Store, StoreStaff, StaffRole


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
def report_manager(db):
    return User.objects.create_user(
        email='manager@salon.example.com',
        password='TestPass123!',
        display_name='Manager',
    )


@pytest.fixture
def report_outsider(db):
    return User.objects.create_user(
        email='outsider@salon.example.com',
        password='TestPass123!',
    )


@pytest.fixture
def report_store(db, report_manager):
    """Untaxed store so that totals equal subtotals."""
    store = Store.objects.create(name='Glow Salon Koramangala', tax_enabled=False)
    StoreStaff.objects.create(store=store, user=report_manager, role=StaffRole.STORE_MANAGER)
    return store


@pytest.fixture
def other_store(db, report_manager):
    store = Store.objects.create(name='Glow Salon Whitefield', tax_enabled=False)
    StoreStaff.objects.create(store=store, user=report_manager, role=StaffRole.STORE_MANAGER)
    return store


@pytest.fixture
def manager_client(report_manager):
    return _client_for(report_manager)


@pytest.fixture
def outsider_client(report_outsider):
    return _client_for(report_outsider)


@pytest.fixture
def haircut(report_store):
    return Service.objects.create(store=report_store, name='Haircut', price=Decimal('500.00'))


@pytest.fixture
def facial(report_store):
    return Service.objects.create(store=report_store, name='Facial', price=Decimal('1200.00'))


@pytest.fixture
def shampoo(report_store):
    return Product.objects.create(
        store=report_store,
        name='Argan Shampoo',
        price=Decimal('200.00'),
        stock=20,
    )


@pytest.fixture
def member(report_store):
    """Customer with a plain membership (no discount) valid today."""
    customer = Customer.objects.create(first_name='Priya', last_name='Sharma', mobile='9845012345')
    plan = MembershipPlan.objects.create(
        store=report_store,
        name='Silver',
        discount_percentage=Decimal('0.00'),
        points_multiplier=Decimal('1.00'),
    )
    start = date.today() - timedelta(days=1)
    CustomerMembership.objects.create(
        customer=customer,
        plan=plan,
        start_date=start,
        end_date=start + timedelta(days=90),
    )
    return customer


@pytest.fixture
def todays_sales(report_store, report_manager, haircut, shampoo, member):
    """
    Two sales today:
    - member buys a haircut and two shampoos (900.00)
    - walk-in buys a haircut (500.00)
    """
    first = checkout(
        store=report_store,
        staff=report_manager,
        customer=member,
        items=[
            {'kind': 'service', 'item_id': haircut.id, 'quantity': 1},
            {'kind': 'product', 'item_id': shampoo.id, 'quantity': 2},
        ],
    )
    second = checkout(
        store=report_store,
        staff=report_manager,
        items=[{'kind': 'service', 'item_id': haircut.id, 'quantity': 1}],
    )
    return [first, second]


@pytest.fixture
def old_sale(report_store, report_manager, facial):
    """A facial (1200.00) sold ten days ago."""
    sale = checkout(
        store=report_store,
        staff=report_manager,
        items=[{'kind': 'service', 'item_id': facial.id, 'quantity': 1}],
    )
    sale.__class__.objects.filter(pk=sale.pk).update(
        created_at=timezone.now() - timedelta(days=10)
    )
    sale.refresh_from_db()
    return sale

import pytest
from datetime import date, timedelta
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.stores.models import Store, StoreStaff, StaffRole
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
def salon_manager(db):
    return User.objects.create_user(
        email='manager@salon.example.com',
        password='TestPass123!',
        display_name='Manager',
    )


@pytest.fixture
def salon_cashier(db):
    return User.objects.create_user(
        email='cashier@salon.example.com',
        password='TestPass123!',
        display_name='Cashier',
    )


@pytest.fixture
def salon_store(db, salon_manager, salon_cashier):
    """Create a store with a manager and a cashier."""
    store = Store.objects.create(name='Glow Salon Indiranagar')
    StoreStaff.objects.create(store=store, user=salon_manager, role=StaffRole.STORE_MANAGER)
    StoreStaff.objects.create(store=store, user=salon_cashier, role=StaffRole.CASHIER)
    return store


@pytest.fixture
def second_store(db):
    return Store.objects.create(name='Glow Salon Koramangala')


@pytest.fixture
def manager_client(salon_manager):
    """Return API client authenticated as manager."""
    return _client_for(salon_manager)


@pytest.fixture
def cashier_client(salon_cashier):
    """Return API client authenticated as cashier."""
    return _client_for(salon_cashier)


@pytest.fixture
def customer(db):
    """Create a customer with some loyalty points."""
    return Customer.objects.create(
        first_name='Priya',
        last_name='Sharma',
        mobile='9845012345',
        email='priya@example.com',
        loyalty_points=120,
    )


@pytest.fixture
def other_customer(db):
    return Customer.objects.create(
        first_name='Rahul',
        last_name='Verma',
        mobile='9900011122',
    )


@pytest.fixture
def gold_plan(salon_store):
    """Create a 10% / double points plan."""
    return MembershipPlan.objects.create(
        store=salon_store,
        name='Gold',
        discount_percentage=Decimal('10.00'),
        points_multiplier=Decimal('2.00'),
        validity_days=365,
        price=Decimal('2999.00'),
        benefits=['10% off all services', 'Double points'],
    )


@pytest.fixture
def silver_plan(salon_store):
    return MembershipPlan.objects.create(
        store=salon_store,
        name='Silver',
        discount_percentage=Decimal('5.00'),
        validity_days=180,
        price=Decimal('999.00'),
    )


@pytest.fixture
def gold_membership(customer, gold_plan):
    """Active gold enrolment started a month ago."""
    start = date.today() - timedelta(days=30)
    return CustomerMembership.objects.create(
        customer=customer,
        plan=gold_plan,
        start_date=start,
        end_date=start + timedelta(days=365),
    )

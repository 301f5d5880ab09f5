"""
Service layer unit tests for customers app.

Tests cover:
- Registration and search
- Membership validity windows and enrolment
- Loyalty ledger and balance guards
"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

from apps.billing.calculator import Membership
from apps.customers.models import Customer, CustomerMembership, LoyaltyLedgerEntry, LedgerKind
from apps.customers.services import (
    create_customer,
    get_customer,
    search_customers,
    get_active_membership,
    membership_terms,
    enroll_customer,
    apply_loyalty_delta,
    adjust_points,
)
from apps.customers.services.exceptions import (
    DuplicateCustomerError,
    InsufficientPointsError,
    InvalidPointsError,
    PlanNotAvailableError,
    CustomerNotFoundError,
    MembershipPlanNotFoundError,
)


# =============================================================================
# Customer Management Tests
# =============================================================================

@pytest.mark.django_db
class TestCustomerManagement:

    def test_create_customer(self):
        customer = create_customer(first_name='Anita', mobile=' 9811122233 ')
        assert customer.mobile == '9811122233'
        assert customer.loyalty_points == 0
        assert customer.total_spent == Decimal('0.00')

    def test_duplicate_mobile_rejected(self, customer):
        with pytest.raises(DuplicateCustomerError):
            create_customer(first_name='Copy', mobile=customer.mobile)

    def test_get_customer_not_found(self):
        with pytest.raises(CustomerNotFoundError):
            get_customer(customer_id=uuid4())

    def test_search_by_mobile_fragment(self, customer, other_customer):
        assert list(search_customers(query='98450')) == [customer]

    def test_search_by_name_is_case_insensitive(self, customer, other_customer):
        assert list(search_customers(query='rahul')) == [other_customer]

    def test_search_terms_combine(self, customer, other_customer):
        assert list(search_customers(query='priya 9845')) == [customer]
        assert list(search_customers(query='priya 9900')) == []

    def test_empty_search_returns_all(self, customer, other_customer):
        assert search_customers(query='').count() == 2


# =============================================================================
# Membership Tests
# =============================================================================

@pytest.mark.django_db
class TestMemberships:

    def test_active_membership_found(self, customer, salon_store, gold_membership):
        assert get_active_membership(customer=customer, store_id=salon_store.id) == gold_membership

    def test_membership_is_per_store(self, customer, second_store, gold_membership):
        assert get_active_membership(customer=customer, store_id=second_store.id) is None

    def test_membership_window_is_inclusive(self, customer, salon_store, gold_membership):
        on_end = get_active_membership(
            customer=customer,
            store_id=salon_store.id,
            on_date=gold_membership.end_date,
        )
        after_end = get_active_membership(
            customer=customer,
            store_id=salon_store.id,
            on_date=gold_membership.end_date + timedelta(days=1),
        )
        before_start = get_active_membership(
            customer=customer,
            store_id=salon_store.id,
            on_date=gold_membership.start_date - timedelta(days=1),
        )
        assert on_end == gold_membership
        assert after_end is None
        assert before_start is None

    def test_deactivated_membership_ignored(self, customer, salon_store, gold_membership):
        gold_membership.is_active = False
        gold_membership.save()
        assert get_active_membership(customer=customer, store_id=salon_store.id) is None

    def test_membership_terms(self, gold_membership):
        assert membership_terms(gold_membership) == Membership(
            discount_percentage=Decimal('10.00'),
            points_multiplier=Decimal('2.00'),
        )
        assert membership_terms(None) is None

    def test_enroll_sets_end_date(self, customer, silver_plan):
        membership = enroll_customer(
            customer_id=customer.id,
            plan_id=silver_plan.id,
            start_date=date(2025, 1, 1),
        )
        assert membership.end_date == date(2025, 6, 30)
        assert membership.is_active

    def test_enroll_replaces_previous_membership(self, customer, gold_membership, silver_plan):
        enroll_customer(customer_id=customer.id, plan_id=silver_plan.id)

        gold_membership.refresh_from_db()
        assert gold_membership.is_active is False
        assert CustomerMembership.objects.filter(customer=customer, is_active=True).count() == 1

    def test_enroll_in_inactive_plan(self, customer, silver_plan):
        silver_plan.is_active = False
        silver_plan.save()
        with pytest.raises(PlanNotAvailableError):
            enroll_customer(customer_id=customer.id, plan_id=silver_plan.id)

    def test_enroll_unknown_plan(self, customer):
        with pytest.raises(MembershipPlanNotFoundError):
            enroll_customer(customer_id=customer.id, plan_id=uuid4())


# =============================================================================
# Loyalty Tests
# =============================================================================

@pytest.mark.django_db
class TestLoyalty:

    def test_apply_delta_updates_counters(self, customer):
        updated = apply_loyalty_delta(
            customer_id=customer.id,
            points_earned=5,
            points_redeemed=20,
            amount_spent=Decimal('590.00'),
        )
        assert updated.loyalty_points == 105
        assert updated.total_visits == 1
        assert updated.total_spent == Decimal('590.00')

    def test_apply_delta_writes_ledger(self, customer):
        apply_loyalty_delta(
            customer_id=customer.id,
            points_earned=5,
            points_redeemed=20,
            amount_spent=Decimal('590.00'),
        )
        entries = {e.kind: e for e in LoyaltyLedgerEntry.objects.filter(customer=customer)}
        assert entries[LedgerKind.REDEEM].points == -20
        assert entries[LedgerKind.REDEEM].balance_after == 100
        assert entries[LedgerKind.EARN].points == 5
        assert entries[LedgerKind.EARN].balance_after == 105

    def test_no_ledger_rows_for_zero_points(self, customer):
        apply_loyalty_delta(
            customer_id=customer.id,
            points_earned=0,
            points_redeemed=0,
            amount_spent=Decimal('10.00'),
        )
        assert not LoyaltyLedgerEntry.objects.filter(customer=customer).exists()

    def test_redeem_more_than_balance_rejected(self, customer):
        with pytest.raises(InsufficientPointsError):
            apply_loyalty_delta(
                customer_id=customer.id,
                points_earned=0,
                points_redeemed=121,
                amount_spent=Decimal('0.00'),
            )
        customer.refresh_from_db()
        assert customer.loyalty_points == 120
        assert customer.total_visits == 0

    def test_negative_points_rejected(self, customer):
        with pytest.raises(InvalidPointsError):
            apply_loyalty_delta(
                customer_id=customer.id,
                points_earned=-1,
                points_redeemed=0,
                amount_spent=Decimal('0.00'),
            )

    def test_adjust_points(self, customer, salon_manager):
        updated = adjust_points(customer_id=customer.id, points=-20, note='Goodwill reversal', adjusted_by=salon_manager)
        assert updated.loyalty_points == 100

        entry = LoyaltyLedgerEntry.objects.get(customer=customer)
        assert entry.kind == LedgerKind.ADJUST
        assert entry.created_by == salon_manager

    def test_adjust_below_zero_rejected(self, customer):
        with pytest.raises(InsufficientPointsError):
            adjust_points(customer_id=customer.id, points=-121)

    def test_zero_adjustment_rejected(self, customer):
        with pytest.raises(InvalidPointsError):
            adjust_points(customer_id=customer.id, points=0)

"""Membership plan enrolment and lookup."""

import logging
from datetime import date, timedelta
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.billing.calculator import Membership
from ..models import Customer, CustomerMembership, MembershipPlan
from .exceptions import (
    CustomerNotFoundError,
    MembershipPlanNotFoundError,
    PlanNotAvailableError,
)

logger = logging.getLogger(__name__)


def get_active_membership(
    *,
    customer: Customer,
    store_id: UUID,
    on_date: Optional[date] = None
) -> Optional[CustomerMembership]:
    """
    Return the customer's membership valid at a store on a date.

    A membership counts when it is active and ``start_date <= on_date <= end_date``.
    When several overlap, the most recently started one wins.
    """
    on_date = on_date or timezone.localdate()
    return (
        CustomerMembership.objects
        .filter(
            customer=customer,
            plan__store_id=store_id,
            is_active=True,
            start_date__lte=on_date,
            end_date__gte=on_date,
        )
        .select_related('plan')
        .order_by('-start_date', '-created_at')
        .first()
    )


def membership_terms(membership: Optional[CustomerMembership]) -> Optional[Membership]:
    """Calculator view of an enrolment's plan."""
    if membership is None:
        return None
    return Membership(
        discount_percentage=membership.plan.discount_percentage,
        points_multiplier=membership.plan.points_multiplier,
    )


@transaction.atomic
def enroll_customer(
    *,
    customer_id: UUID,
    plan_id: UUID,
    start_date: Optional[date] = None
) -> CustomerMembership:
    """
    Enrol a customer in a membership plan.

    The enrolment ends ``validity_days`` after ``start_date``. Any previous
    active enrolment at the plan's store is deactivated.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
        MembershipPlanNotFoundError: If plan doesn't exist
        PlanNotAvailableError: If the plan is inactive
    """
    try:
        customer = Customer.objects.select_for_update().get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError()

    try:
        plan = MembershipPlan.objects.get(id=plan_id)
    except MembershipPlan.DoesNotExist:
        raise MembershipPlanNotFoundError()

    if not plan.is_active:
        raise PlanNotAvailableError(f"Plan {plan.name} is no longer offered")

    start_date = start_date or timezone.localdate()

    CustomerMembership.objects.filter(
        customer=customer,
        plan__store_id=plan.store_id,
        is_active=True,
    ).update(is_active=False)

    membership = CustomerMembership.objects.create(
        customer=customer,
        plan=plan,
        start_date=start_date,
        end_date=start_date + timedelta(days=plan.validity_days),
    )

    logger.info("Enrolled customer %s in plan %s until %s", customer.id, plan.id, membership.end_date)
    return membership

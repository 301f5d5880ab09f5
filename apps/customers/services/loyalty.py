"""
Loyalty balance service.

Every balance change locks the customer row and writes a ledger entry, so
concurrent checkouts for the same customer cannot spend the same points twice.
"""

import logging
from decimal import Decimal
from uuid import UUID

from django.db import transaction

from ..models import Customer, LoyaltyLedgerEntry, LedgerKind
from .exceptions import (
    CustomerNotFoundError,
    InsufficientPointsError,
    InvalidPointsError,
)

logger = logging.getLogger(__name__)


def _check_points(value, name):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidPointsError(f"{name} must be a non-negative whole number")


def _lock_customer(customer_id: UUID) -> Customer:
    try:
        return Customer.objects.select_for_update().get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError()


@transaction.atomic
def apply_loyalty_delta(
    *,
    customer_id: UUID,
    points_earned: int,
    points_redeemed: int,
    amount_spent: Decimal,
    sale=None
) -> Customer:
    """
    Apply a completed sale to a customer's loyalty record.

    Balance becomes ``balance + points_earned - points_redeemed``; visits go
    up by one and ``amount_spent`` is added to the lifetime total. Ledger
    entries are linked to ``sale`` when given.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
        InvalidPointsError: If either points value is negative
        InsufficientPointsError: If the customer holds fewer than
            ``points_redeemed`` points
    """
    _check_points(points_earned, 'points_earned')
    _check_points(points_redeemed, 'points_redeemed')

    customer = _lock_customer(customer_id)

    if points_redeemed > customer.loyalty_points:
        raise InsufficientPointsError(
            f"Customer has {customer.loyalty_points} points, {points_redeemed} requested"
        )

    balance = customer.loyalty_points

    if points_redeemed:
        balance -= points_redeemed
        LoyaltyLedgerEntry.objects.create(
            customer=customer,
            transaction=sale,
            kind=LedgerKind.REDEEM,
            points=-points_redeemed,
            balance_after=balance,
        )

    if points_earned:
        balance += points_earned
        LoyaltyLedgerEntry.objects.create(
            customer=customer,
            transaction=sale,
            kind=LedgerKind.EARN,
            points=points_earned,
            balance_after=balance,
        )

    customer.loyalty_points = balance
    customer.total_visits += 1
    customer.total_spent += amount_spent
    customer.save(update_fields=['loyalty_points', 'total_visits', 'total_spent', 'updated_at'])

    return customer


@transaction.atomic
def adjust_points(*, customer_id: UUID, points: int, note: str = '', adjusted_by=None) -> Customer:
    """
    Manually correct a customer's balance by a signed amount.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
        InvalidPointsError: If points is zero or not a whole number
        InsufficientPointsError: If the correction would go below zero
    """
    if isinstance(points, bool) or not isinstance(points, int) or points == 0:
        raise InvalidPointsError("Adjustment must be a non-zero whole number")

    customer = _lock_customer(customer_id)

    balance = customer.loyalty_points + points
    if balance < 0:
        raise InsufficientPointsError(
            f"Customer has {customer.loyalty_points} points, cannot remove {-points}"
        )

    customer.loyalty_points = balance
    customer.save(update_fields=['loyalty_points', 'updated_at'])

    LoyaltyLedgerEntry.objects.create(
        customer=customer,
        kind=LedgerKind.ADJUST,
        points=points,
        balance_after=balance,
        note=note,
        created_by=adjusted_by,
    )

    logger.info("Adjusted loyalty points of customer %s by %+d", customer.id, points)
    return customer

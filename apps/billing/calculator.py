"""
Bill Calculator
================

Pure computation turning a cart of service/product line items plus the
customer and store context into a :class:`Bill`.

Nothing here touches the database. The store's tax configuration and loyalty
rules are passed in explicitly, and applying ``points_earned`` /
``points_redeemed`` to a customer is the caller's job (see
``apps.billing.services.checkout``).

Order of application:
    1. membership discount
    2. loyalty point redemption
    3. tax

Example:
    Scenario with GST::

        from decimal import Decimal
        from apps.billing.calculator import (
            BillRequest, ItemKind, LineItem, TaxConfig, calculate_bill,
        )

        bill = calculate_bill(BillRequest(
            line_items=[LineItem(kind=ItemKind.SERVICE, unit_price=Decimal('500'), quantity=1)],
            tax_config=TaxConfig(enabled=True, rate=Decimal('18')),
        ))
        bill.total_amount  # Decimal('590.00')
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP, InvalidOperation
from enum import Enum
from typing import Any, Optional

from .exceptions import BillValidationError, RedemptionError


CENT = Decimal('0.01')
ZERO = Decimal('0.00')
HUNDRED = Decimal('100')


def round2(value: Decimal) -> Decimal:
    """Round a currency amount half-up to 2 decimal places."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class ItemKind(str, Enum):
    SERVICE = 'service'
    PRODUCT = 'product'


@dataclass(frozen=True)
class LineItem:
    """One billed unit: a service rendered or a product sold."""

    kind: ItemKind
    unit_price: Decimal
    quantity: int = 1
    name: str = ''
    item_id: Any = None

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Membership:
    """Loyalty tier granting a discount and a points-earning multiplier."""

    discount_percentage: Decimal = ZERO
    points_multiplier: Decimal = Decimal('1')


@dataclass(frozen=True)
class TaxConfig:
    """Per-store tax flag and percentage rate."""

    enabled: bool = False
    rate: Decimal = ZERO


@dataclass(frozen=True)
class LoyaltyRules:
    """Store-level loyalty conversion rates."""

    base_points_rate: Decimal = CENT  # 1 point per 100 currency units
    currency_per_point: Decimal = Decimal('1')
    min_redemption_points: int = 0
    max_redemption_percentage: Optional[Decimal] = None


@dataclass(frozen=True)
class BillRequest:
    """Cart plus context. ``customer_points_balance=None`` means no customer."""

    line_items: list
    tax_config: TaxConfig = field(default_factory=TaxConfig)
    membership: Optional[Membership] = None
    points_to_redeem: int = 0
    customer_points_balance: Optional[int] = None
    loyalty_rules: LoyaltyRules = field(default_factory=LoyaltyRules)


@dataclass(frozen=True)
class Bill:
    line_items: tuple
    subtotal: Decimal
    discount_amount: Decimal
    redemption_value: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    points_earned: int
    points_redeemed: int

    def as_dict(self) -> dict:
        """Output contract: currency fields as 2-decimal strings, points as ints."""
        return {
            'subtotal': f'{self.subtotal:.2f}',
            'discountAmount': f'{self.discount_amount:.2f}',
            'taxAmount': f'{self.tax_amount:.2f}',
            'totalAmount': f'{self.total_amount:.2f}',
            'pointsEarned': self.points_earned,
            'pointsRedeemed': self.points_redeemed,
        }


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate(request: BillRequest) -> None:
    if not request.line_items:
        raise BillValidationError("A bill needs at least one line item")

    for index, item in enumerate(request.line_items):
        if not isinstance(item.kind, ItemKind):
            raise BillValidationError(f"Line item {index}: unknown kind {item.kind!r}")
        if not _is_int(item.quantity) or item.quantity < 1:
            raise BillValidationError(f"Line item {index}: quantity must be a whole number of at least 1")
        if item.unit_price < 0:
            raise BillValidationError(f"Line item {index}: unit price cannot be negative")

    membership = request.membership
    if membership is not None:
        if not (ZERO <= membership.discount_percentage <= HUNDRED):
            raise BillValidationError("Membership discount must be between 0 and 100 percent")
        if membership.points_multiplier < 0:
            raise BillValidationError("Membership points multiplier cannot be negative")

    if request.tax_config.rate < 0:
        raise BillValidationError("Tax rate cannot be negative")

    points = request.points_to_redeem
    if not _is_int(points) or points < 0:
        raise BillValidationError("Points to redeem must be a non-negative whole number")
    if points == 0:
        return

    if request.customer_points_balance is None:
        raise RedemptionError("Cannot redeem points without a customer")
    if points > request.customer_points_balance:
        raise RedemptionError(
            f"Cannot redeem {points} points: customer balance is {request.customer_points_balance}"
        )
    if points < request.loyalty_rules.min_redemption_points:
        raise RedemptionError(
            f"At least {request.loyalty_rules.min_redemption_points} points must be redeemed at once"
        )


def calculate_bill(request: BillRequest) -> Bill:
    """
    Compute subtotal, discount, tax, total and loyalty point deltas.

    Args:
        request: Cart, optional membership, redemption request, tax config
            and loyalty rules.

    Returns:
        Bill with every currency field rounded to 2 decimal places.

    Raises:
        BillValidationError: Empty cart, quantity < 1, negative price,
            negative points or out-of-range membership/tax values.
        RedemptionError: Redemption without a customer, above the customer's
            balance, below the store minimum or above the store cap.
    """
    _validate(request)

    rules = request.loyalty_rules
    membership = request.membership

    subtotal = round2(sum((item.line_total for item in request.line_items), ZERO))

    discount_pct = membership.discount_percentage if membership else ZERO
    discount_amount = min(round2(subtotal * discount_pct / HUNDRED), subtotal)

    after_discount = subtotal - discount_amount
    redemption_value = round2(request.points_to_redeem * rules.currency_per_point)
    if request.points_to_redeem and rules.max_redemption_percentage is not None:
        max_redemption = round2(after_discount * rules.max_redemption_percentage / HUNDRED)
        if redemption_value > max_redemption:
            raise RedemptionError(
                f"Redemption of {redemption_value} exceeds the allowed {max_redemption} for this bill"
            )

    taxable_amount = max(ZERO, after_discount - redemption_value)

    tax = request.tax_config
    tax_amount = round2(taxable_amount * tax.rate / HUNDRED) if tax.enabled else ZERO

    total_amount = max(ZERO, round2(taxable_amount + tax_amount))

    multiplier = membership.points_multiplier if membership else Decimal('1')
    points_earned = int(
        (total_amount * multiplier * rules.base_points_rate).to_integral_value(rounding=ROUND_DOWN)
    )

    return Bill(
        line_items=tuple(request.line_items),
        subtotal=subtotal,
        discount_amount=discount_amount,
        redemption_value=redemption_value,
        taxable_amount=round2(taxable_amount),
        tax_amount=tax_amount,
        total_amount=total_amount,
        points_earned=points_earned,
        points_redeemed=request.points_to_redeem,
    )


def _decimal(value, field_name: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise BillValidationError(f"{field_name} must be a number")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise BillValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise BillValidationError(f"{field_name} must be a finite number")
    return result


def _flag(value, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise BillValidationError(f"{field_name} must be true or false")
    return value


def _whole(value, field_name: str) -> int:
    if _is_int(value):
        return value
    number = _decimal(value, field_name)
    if number != number.to_integral_value():
        raise BillValidationError(f"{field_name} must be a whole number")
    return int(number)


def calculate_bill_from_payload(payload: dict, loyalty_rules: Optional[LoyaltyRules] = None) -> Bill:
    """
    Calculate a bill from the JSON input contract.

    Payload shape::

        {
            "lineItems": [{"kind": "service", "unitPrice": 500, "quantity": 1}],
            "membership": {"discountPercentage": 10, "pointsMultiplier": 2},
            "pointsToRedeem": 0,
            "customerPointsBalance": 120,
            "taxConfig": {"enabled": true, "rate": 18}
        }

    Raises:
        BillValidationError: Malformed payload or any calculator rule violation.
    """
    if not isinstance(payload, dict):
        raise BillValidationError("Bill payload must be an object")

    raw_items = payload.get('lineItems')
    if not isinstance(raw_items, list):
        raise BillValidationError("lineItems must be a list")

    line_items = []
    for index, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            raise BillValidationError(f"Line item {index} must be an object")
        try:
            kind = ItemKind(str(raw.get('kind', '')).lower())
        except ValueError:
            raise BillValidationError(f"Line item {index}: kind must be 'service' or 'product'")
        line_items.append(LineItem(
            kind=kind,
            unit_price=_decimal(raw.get('unitPrice'), f"lineItems[{index}].unitPrice"),
            quantity=_whole(raw.get('quantity', 1), f"lineItems[{index}].quantity"),
            name=str(raw.get('name', '')),
            item_id=raw.get('id'),
        ))

    membership = None
    raw_membership = payload.get('membership')
    if raw_membership is not None:
        if not isinstance(raw_membership, dict):
            raise BillValidationError("membership must be an object")
        membership = Membership(
            discount_percentage=_decimal(raw_membership.get('discountPercentage', 0), 'membership.discountPercentage'),
            points_multiplier=_decimal(raw_membership.get('pointsMultiplier', 1), 'membership.pointsMultiplier'),
        )

    raw_tax = payload.get('taxConfig')
    if not isinstance(raw_tax, dict):
        raise BillValidationError("taxConfig is required")
    tax_config = TaxConfig(
        enabled=_flag(raw_tax.get('enabled', False), 'taxConfig.enabled'),
        rate=_decimal(raw_tax.get('rate', 0), 'taxConfig.rate'),
    )

    balance = payload.get('customerPointsBalance')
    if balance is not None:
        balance = _whole(balance, 'customerPointsBalance')

    return calculate_bill(BillRequest(
        line_items=line_items,
        tax_config=tax_config,
        membership=membership,
        points_to_redeem=_whole(payload.get('pointsToRedeem') or 0, 'pointsToRedeem'),
        customer_points_balance=balance,
        loyalty_rules=loyalty_rules or LoyaltyRules(),
    ))

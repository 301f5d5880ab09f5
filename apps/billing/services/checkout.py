"""
Checkout service.

Wraps the pure calculator with catalog lookups, membership resolution and
persistence. Everything in :func:`checkout` runs in one database
transaction: a stock or loyalty failure leaves no trace.
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.catalog.services import (
    get_billable_item,
    decrement_stock,
    ServiceNotFoundError,
    ProductNotFoundError,
)
from apps.customers.models import Customer
from apps.customers.services import (
    get_active_membership,
    membership_terms,
    apply_loyalty_delta,
)
from apps.stores.models import Store
from apps.stores.services import user_can_access_store

from ..calculator import Bill, BillRequest, ItemKind, LineItem, calculate_bill
from ..exceptions import (
    BillValidationError,
    RedemptionError,
    CatalogItemNotFoundError,
    StoreAccessError,
    TransactionNotFoundError,
)
from ..models import Transaction, TransactionItem
from .invoices import next_invoice_number

logger = logging.getLogger(__name__)


def _resolve_items(store: Store, items: Iterable[dict]) -> List[Tuple[LineItem, object]]:
    """Turn ``[{kind, item_id, quantity}]`` into calculator lines priced from the catalog."""
    resolved = []
    for index, item in enumerate(items):
        try:
            kind = ItemKind(item.get('kind'))
        except ValueError:
            raise BillValidationError(f"Line item {index}: kind must be 'service' or 'product'")

        try:
            catalog_item = get_billable_item(store_id=store.id, kind=kind, item_id=item.get('item_id'))
        except (ServiceNotFoundError, ProductNotFoundError) as e:
            raise CatalogItemNotFoundError(str(e))

        line = LineItem(
            kind=kind,
            unit_price=catalog_item.price,
            quantity=item.get('quantity', 1),
            name=catalog_item.name,
            item_id=catalog_item.id,
        )
        resolved.append((line, catalog_item))
    return resolved


def _build_bill(
    store: Store,
    resolved: List[Tuple[LineItem, object]],
    customer: Optional[Customer],
    points_to_redeem: int,
) -> Tuple[Bill, Optional[object]]:
    enrolment = None
    if customer is not None:
        enrolment = get_active_membership(customer=customer, store_id=store.id)

    bill = calculate_bill(BillRequest(
        line_items=[line for line, _ in resolved],
        tax_config=store.get_tax_config(),
        membership=membership_terms(enrolment),
        points_to_redeem=points_to_redeem,
        customer_points_balance=customer.loyalty_points if customer is not None else None,
        loyalty_rules=store.get_loyalty_rules(),
    ))
    return bill, enrolment


def quote_bill(
    *,
    store: Store,
    items: Iterable[dict],
    customer: Optional[Customer] = None,
    points_to_redeem: int = 0
) -> Bill:
    """
    Price a cart without saving anything.

    Args:
        store: Store whose catalog, tax configuration and loyalty rules apply
        items: ``[{"kind": "service", "item_id": ..., "quantity": 1}]``
        customer: Optional customer (membership and points balance)
        points_to_redeem: Loyalty points to spend on this bill

    Raises:
        BillValidationError: Invalid cart or redemption
        CatalogItemNotFoundError: Item unknown, inactive or from another store
    """
    bill, _ = _build_bill(store, _resolve_items(store, items), customer, points_to_redeem)
    return bill


@transaction.atomic
def checkout(
    *,
    store: Store,
    staff: User,
    items: Iterable[dict],
    customer: Optional[Customer] = None,
    points_to_redeem: int = 0,
    payment_method: str = 'cash',
    notes: str = ''
) -> Transaction:
    """
    Bill a cart and record the sale.

    Steps, all inside one transaction:
        1. Lock the store (invoice sequence) and the customer (points balance)
        2. Price the cart against the locked balance
        3. Save the transaction and its item snapshots
        4. Take sold products out of stock
        5. Apply earned and redeemed points to the customer

    Raises:
        StoreAccessError: If staff is not assigned to the store
        BillValidationError: Invalid cart or redemption
        CatalogItemNotFoundError: Item unknown, inactive or from another store
        InsufficientStockError: A product has fewer units than billed
    """
    if not user_can_access_store(user=staff, store=store):
        raise StoreAccessError(f"{staff.get_display_name()} is not assigned to {store.name}")

    store = Store.objects.select_for_update().get(id=store.id)
    if customer is not None:
        customer = Customer.objects.select_for_update().get(id=customer.id)

    resolved = _resolve_items(store, items)
    try:
        bill, enrolment = _build_bill(store, resolved, customer, points_to_redeem)
    except RedemptionError as e:
        logger.warning(
            "Rejected redemption of %s points at store %s: %s",
            points_to_redeem, store.id, e
        )
        raise

    sale = Transaction.objects.create(
        store=store,
        customer=customer,
        staff=staff,
        invoice_number=next_invoice_number(store_id=store.id, on_date=timezone.localdate()),
        subtotal=bill.subtotal,
        discount_amount=bill.discount_amount,
        membership_discount=enrolment.plan.discount_percentage if enrolment else Decimal('0.00'),
        redemption_value=bill.redemption_value,
        tax_amount=bill.tax_amount,
        total_amount=bill.total_amount,
        payment_method=payment_method,
        points_earned=bill.points_earned if customer is not None else 0,
        points_redeemed=bill.points_redeemed,
        notes=notes,
    )

    TransactionItem.objects.bulk_create([
        TransactionItem(
            transaction=sale,
            kind=line.kind.value,
            service=catalog_item if line.kind == ItemKind.SERVICE else None,
            product=catalog_item if line.kind == ItemKind.PRODUCT else None,
            item_name=line.name,
            quantity=line.quantity,
            unit_price=line.unit_price,
            total_price=line.line_total,
        )
        for line, catalog_item in resolved
    ])

    for line, catalog_item in resolved:
        if line.kind == ItemKind.PRODUCT:
            decrement_stock(product_id=catalog_item.id, quantity=line.quantity)

    if customer is not None:
        apply_loyalty_delta(
            customer_id=customer.id,
            points_earned=sale.points_earned,
            points_redeemed=sale.points_redeemed,
            amount_spent=sale.total_amount,
            sale=sale,
        )

    logger.info(
        "Completed transaction %s at store %s: total %s, %d points earned, %d redeemed",
        sale.invoice_number, store.id, sale.total_amount, sale.points_earned, sale.points_redeemed
    )
    return sale


def get_transaction(*, transaction_id: UUID) -> Transaction:
    """
    Raises:
        TransactionNotFoundError: If transaction doesn't exist
    """
    try:
        return (
            Transaction.objects
            .select_related('store', 'customer', 'staff')
            .prefetch_related('items')
            .get(id=transaction_id)
        )
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError(f"Transaction with ID {transaction_id} not found")


def list_store_transactions(
    *,
    store_ids,
    customer_id: Optional[UUID] = None,
    date_from=None,
    date_to=None,
    payment_method: Optional[str] = None
) -> QuerySet:
    """Transactions of the given stores, newest first, with optional filters."""
    queryset = (
        Transaction.objects
        .filter(store_id__in=store_ids)
        .select_related('store', 'customer', 'staff')
        .prefetch_related('items')
    )

    if customer_id:
        queryset = queryset.filter(customer_id=customer_id)
    if date_from:
        queryset = queryset.filter(created_at__date__gte=date_from)
    if date_to:
        queryset = queryset.filter(created_at__date__lte=date_to)
    if payment_method:
        queryset = queryset.filter(payment_method=payment_method)

    return queryset

"""
Product stock service.

Stock changes lock the product row so concurrent sales cannot oversell.
"""

import logging
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import F, QuerySet

from ..models import Product
from .exceptions import (
    ProductNotFoundError,
    InsufficientStockError,
    InvalidQuantityError,
)

logger = logging.getLogger(__name__)


def get_product_by_barcode(*, barcode: str, store_id: UUID = None) -> Product:
    """
    Look up an active product by its scanned barcode.

    Raises:
        ProductNotFoundError: If no active product carries the barcode
    """
    queryset = Product.objects.filter(barcode=barcode, is_active=True)
    if store_id is not None:
        queryset = queryset.filter(store_id=store_id)

    product = queryset.select_related('category').first()
    if product is None:
        raise ProductNotFoundError(f"No product with barcode {barcode}")
    return product


def get_low_stock_products(*, store_id: UUID) -> QuerySet:
    """Active products at or below their minimum stock level."""
    return Product.objects.filter(
        store_id=store_id,
        is_active=True,
        stock__lte=F('min_stock'),
    ).order_by('stock', 'name')


def _lock_product(product_id: UUID) -> Product:
    try:
        return Product.objects.select_for_update().get(id=product_id, is_active=True)
    except (Product.DoesNotExist, DjangoValidationError):
        raise ProductNotFoundError(f"Product with ID {product_id} not found")


def _check_quantity(quantity) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantityError("Quantity must be a whole number of at least 1")


@transaction.atomic
def restock_product(*, product_id: UUID, quantity: int) -> Product:
    """
    Add received units to a product's stock.

    Raises:
        ProductNotFoundError: If product doesn't exist
        InvalidQuantityError: If quantity < 1
    """
    _check_quantity(quantity)
    product = _lock_product(product_id)

    product.stock += quantity
    product.save(update_fields=['stock', 'updated_at'])

    logger.info("Restocked product %s by %d (now %d)", product.id, quantity, product.stock)
    return product


@transaction.atomic
def decrement_stock(*, product_id: UUID, quantity: int) -> Product:
    """
    Remove sold units from a product's stock.

    Must run inside the checkout transaction so a failed sale rolls the
    decrement back.

    Raises:
        ProductNotFoundError: If product doesn't exist
        InvalidQuantityError: If quantity < 1
        InsufficientStockError: If fewer than ``quantity`` units are in stock
    """
    _check_quantity(quantity)
    product = _lock_product(product_id)

    if product.stock < quantity:
        raise InsufficientStockError(
            f"Only {product.stock} unit(s) of {product.name} in stock, {quantity} requested"
        )

    product.stock -= quantity
    product.save(update_fields=['stock', 'updated_at'])

    if product.is_low_stock:
        logger.warning("Product %s is low on stock (%d left)", product.id, product.stock)
    return product

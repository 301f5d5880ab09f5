"""
Service layer unit tests for catalog app.

Tests cover:
- Barcode lookup
- Low stock detection
- Guarded stock decrements
- Resolving cart lines to catalog rows
"""

import pytest
from uuid import uuid4

from apps.catalog.models import Product
from apps.catalog.services import (
    get_product_by_barcode,
    get_low_stock_products,
    restock_product,
    decrement_stock,
    get_billable_item,
)
from apps.catalog.services.exceptions import (
    ServiceNotFoundError,
    ProductNotFoundError,
    InsufficientStockError,
    InvalidQuantityError,
)


@pytest.mark.django_db
class TestInventory:

    def test_get_product_by_barcode(self, shampoo):
        assert get_product_by_barcode(barcode='8901234567890') == shampoo

    def test_get_product_by_barcode_scoped_to_store(self, shampoo, foreign_store):
        with pytest.raises(ProductNotFoundError):
            get_product_by_barcode(barcode='8901234567890', store_id=foreign_store.id)

    def test_get_product_by_unknown_barcode(self, db):
        with pytest.raises(ProductNotFoundError):
            get_product_by_barcode(barcode='0000')

    def test_inactive_product_not_scannable(self, shampoo):
        shampoo.is_active = False
        shampoo.save()
        with pytest.raises(ProductNotFoundError):
            get_product_by_barcode(barcode=shampoo.barcode)

    def test_low_stock_products(self, catalog_store, shampoo, serum):
        assert list(get_low_stock_products(store_id=catalog_store.id)) == [serum]

    def test_stock_equal_to_minimum_is_low(self, catalog_store, shampoo):
        shampoo.stock = shampoo.min_stock
        shampoo.save()
        assert shampoo.is_low_stock
        assert shampoo in get_low_stock_products(store_id=catalog_store.id)

    def test_restock_product(self, serum):
        product = restock_product(product_id=serum.id, quantity=10)
        assert product.stock == 12
        assert not product.is_low_stock

    def test_restock_rejects_zero(self, serum):
        with pytest.raises(InvalidQuantityError):
            restock_product(product_id=serum.id, quantity=0)

    def test_decrement_stock(self, shampoo):
        decrement_stock(product_id=shampoo.id, quantity=3)
        shampoo.refresh_from_db()
        assert shampoo.stock == 17

    def test_decrement_to_zero(self, serum):
        product = decrement_stock(product_id=serum.id, quantity=2)
        assert product.stock == 0

    def test_decrement_beyond_stock_rejected(self, serum):
        with pytest.raises(InsufficientStockError):
            decrement_stock(product_id=serum.id, quantity=3)
        serum.refresh_from_db()
        assert serum.stock == 2

    def test_decrement_unknown_product(self, db):
        with pytest.raises(ProductNotFoundError):
            decrement_stock(product_id=uuid4(), quantity=1)


@pytest.mark.django_db
class TestBillableItems:

    def test_resolve_service(self, catalog_store, haircut):
        assert get_billable_item(store_id=catalog_store.id, kind='service', item_id=haircut.id) == haircut

    def test_resolve_product(self, catalog_store, shampoo):
        assert get_billable_item(store_id=catalog_store.id, kind='product', item_id=shampoo.id) == shampoo

    def test_item_from_other_store_rejected(self, catalog_store, foreign_product):
        with pytest.raises(ProductNotFoundError):
            get_billable_item(store_id=catalog_store.id, kind='product', item_id=foreign_product.id)

    def test_kind_mismatch_rejected(self, catalog_store, haircut):
        with pytest.raises(ProductNotFoundError):
            get_billable_item(store_id=catalog_store.id, kind='product', item_id=haircut.id)

    def test_inactive_service_rejected(self, catalog_store, haircut):
        haircut.is_active = False
        haircut.save()
        with pytest.raises(ServiceNotFoundError):
            get_billable_item(store_id=catalog_store.id, kind='service', item_id=haircut.id)

    def test_malformed_id_rejected(self, catalog_store):
        with pytest.raises(ServiceNotFoundError):
            get_billable_item(store_id=catalog_store.id, kind='service', item_id='not-a-uuid')

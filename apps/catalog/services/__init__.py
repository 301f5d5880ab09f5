"""
Catalog services - Business logic layer.

- Barcode lookup and stock management
- Resolving cart lines to services and products
"""

from .inventory import (
    get_product_by_barcode,
    get_low_stock_products,
    restock_product,
    decrement_stock,
)

from .billable_items import get_billable_item

from .exceptions import (
    CatalogServiceError,
    ServiceNotFoundError,
    ProductNotFoundError,
    InsufficientStockError,
    InvalidQuantityError,
)

__all__ = [
    # Inventory
    'get_product_by_barcode',
    'get_low_stock_products',
    'restock_product',
    'decrement_stock',
    # Billable items
    'get_billable_item',
    # Exceptions
    'CatalogServiceError',
    'ServiceNotFoundError',
    'ProductNotFoundError',
    'InsufficientStockError',
    'InvalidQuantityError',
]

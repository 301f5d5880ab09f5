"""
Billing services - Business logic layer.

- Quoting and checking out carts
- Invoice numbering
- Transaction lookup
"""

from .checkout import (
    quote_bill,
    checkout,
    get_transaction,
    list_store_transactions,
)

from .invoices import next_invoice_number

from ..exceptions import (
    BillingServiceError,
    BillValidationError,
    RedemptionError,
    CatalogItemNotFoundError,
    StoreAccessError,
    TransactionNotFoundError,
)

__all__ = [
    # Checkout
    'quote_bill',
    'checkout',
    'get_transaction',
    'list_store_transactions',
    # Invoices
    'next_invoice_number',
    # Exceptions
    'BillingServiceError',
    'BillValidationError',
    'RedemptionError',
    'CatalogItemNotFoundError',
    'StoreAccessError',
    'TransactionNotFoundError',
]

"""
Domain exceptions for billing app.

Exception Hierarchy:
    BillingServiceError (base)
    ├── BillValidationError
    │   └── RedemptionError
    ├── CatalogItemNotFoundError
    ├── StoreAccessError
    └── TransactionNotFoundError

Services raise these; views translate them into HTTP responses.
"""


class BillingServiceError(Exception):
    """Base exception for billing service errors."""
    pass


class BillValidationError(BillingServiceError):
    """Bad bill input: negative numbers, empty cart, invalid redemption."""
    pass


class RedemptionError(BillValidationError):
    """Loyalty point redemption cannot be honoured."""
    pass


class CatalogItemNotFoundError(BillingServiceError):
    """Billed service or product does not exist, is inactive or belongs to another store."""
    pass


class StoreAccessError(BillingServiceError):
    """Staff member is not assigned to the store being billed."""
    pass


class TransactionNotFoundError(BillingServiceError):
    """Transaction does not exist."""
    pass

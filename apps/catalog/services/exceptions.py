"""Domain-specific exceptions for catalog services."""


class CatalogServiceError(Exception):
    """Base exception for catalog services."""
    pass


class ServiceNotFoundError(CatalogServiceError):
    """Raised when a salon service does not exist or is inactive."""
    pass


class ProductNotFoundError(CatalogServiceError):
    """Raised when a product does not exist or is inactive."""
    pass


class InsufficientStockError(CatalogServiceError):
    """Raised when a sale would take stock below zero."""
    pass


class InvalidQuantityError(CatalogServiceError):
    """Raised when a stock quantity is not a positive whole number."""
    pass

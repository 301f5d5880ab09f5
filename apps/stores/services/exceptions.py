"""Domain-specific exceptions for stores services."""


class StoresServiceError(Exception):
    """Base exception for stores services."""
    pass


class StoreNotFoundError(StoresServiceError):
    """Store does not exist or is inactive."""
    pass


class StaffUserNotFoundError(StoresServiceError):
    """User being assigned does not exist or is inactive."""
    pass


class AlreadyAssignedError(StoresServiceError):
    """User is already assigned to this store."""
    pass


class NotAssignedError(StoresServiceError):
    """User is not assigned to this store."""
    pass


class InsufficientPermissionsError(StoresServiceError):
    """User lacks the store role required for this action."""
    pass

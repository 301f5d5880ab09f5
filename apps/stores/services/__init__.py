"""
Stores services - Business logic layer.

- Store access and configuration (tax, loyalty)
- Staff assignment
"""

from .store_management import (
    get_accessible_stores,
    user_can_access_store,
    get_store,
    update_tax_config,
    update_loyalty_settings,
    get_loyalty_rules,
)

from .staff_management import (
    assign_staff,
    remove_staff,
    get_store_staff,
)

from .exceptions import (
    StoresServiceError,
    StoreNotFoundError,
    StaffUserNotFoundError,
    AlreadyAssignedError,
    NotAssignedError,
    InsufficientPermissionsError,
)

__all__ = [
    # Store Management
    'get_accessible_stores',
    'user_can_access_store',
    'get_store',
    'update_tax_config',
    'update_loyalty_settings',
    'get_loyalty_rules',
    # Staff Management
    'assign_staff',
    'remove_staff',
    'get_store_staff',
    # Exceptions
    'StoresServiceError',
    'StoreNotFoundError',
    'StaffUserNotFoundError',
    'AlreadyAssignedError',
    'NotAssignedError',
    'InsufficientPermissionsError',
]

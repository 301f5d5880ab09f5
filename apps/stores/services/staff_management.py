"""
Store staff assignment service.

Handles staff assignment with concurrency protection.
"""

from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.stores.models import Store, StoreStaff, StaffRole

from .exceptions import (
    StoreNotFoundError,
    StaffUserNotFoundError,
    AlreadyAssignedError,
    NotAssignedError,
    InsufficientPermissionsError,
)


@transaction.atomic
def assign_staff(
    *,
    store_id: UUID,
    user_id: UUID,
    role: str = StaffRole.CASHIER,
    assigned_by: User
) -> StoreStaff:
    """
    Assign a user to a store.

    Args:
        store_id: UUID of the store
        user_id: UUID of the user being assigned
        role: Store role (store_manager or cashier)
        assigned_by: Manager or super admin performing the assignment

    Returns:
        Created StoreStaff instance

    Raises:
        StoreNotFoundError: If store doesn't exist
        StaffUserNotFoundError: If user doesn't exist or is inactive
        InsufficientPermissionsError: If assigned_by is not a manager
        AlreadyAssignedError: If user already works at the store
    """
    try:
        store = Store.objects.select_for_update().get(id=store_id, is_active=True)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    if not store.is_manager(assigned_by):
        raise InsufficientPermissionsError("Only store managers can assign staff")

    # Managers may not appoint other managers
    if role == StaffRole.STORE_MANAGER and not assigned_by.is_super_admin:
        raise InsufficientPermissionsError("Only super admins can appoint store managers")

    try:
        user = User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        raise StaffUserNotFoundError(f"User with ID {user_id} not found")

    if store.has_staff(user):
        raise AlreadyAssignedError(f"{user.get_display_name()} already works at {store.name}")

    try:
        return StoreStaff.objects.create(store=store, user=user, role=role)
    except IntegrityError:
        raise AlreadyAssignedError(f"{user.get_display_name()} already works at {store.name}")


@transaction.atomic
def remove_staff(*, store_id: UUID, user_id: UUID, removed_by: User) -> None:
    """
    Remove a staff assignment.

    Raises:
        StoreNotFoundError: If store doesn't exist
        InsufficientPermissionsError: If removed_by is not a manager
        NotAssignedError: If user is not assigned to the store
    """
    try:
        store = Store.objects.get(id=store_id, is_active=True)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    if not store.is_manager(removed_by):
        raise InsufficientPermissionsError("Only store managers can remove staff")

    deleted, _ = StoreStaff.objects.filter(store=store, user_id=user_id).delete()
    if not deleted:
        raise NotAssignedError("User is not assigned to this store")


def get_store_staff(*, store_id: UUID) -> QuerySet:
    """Return staff assignments of a store."""
    return StoreStaff.objects.filter(store_id=store_id).select_related('user')

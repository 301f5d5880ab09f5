"""Store lookup, access checks and configuration."""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.billing.calculator import LoyaltyRules
from apps.stores.models import Store, LoyaltySettings

from .exceptions import StoreNotFoundError, InsufficientPermissionsError


def get_accessible_stores(*, user: User) -> QuerySet:
    """
    Return active stores the user may work in.

    Super admins see every active store; other staff see the stores they
    are assigned to.
    """
    queryset = Store.objects.filter(is_active=True)
    if user.is_super_admin:
        return queryset
    return queryset.filter(staff__user=user).distinct()


def user_can_access_store(*, user: User, store: Store) -> bool:
    if user.is_super_admin:
        return True
    return store.has_staff(user)


def get_store(*, store_id: UUID, user: Optional[User] = None) -> Store:
    """
    Retrieve an active store, optionally checking the user's access.

    Raises:
        StoreNotFoundError: If store doesn't exist, is inactive, or the user
            has no access to it
    """
    try:
        store = Store.objects.get(id=store_id, is_active=True)
    except (Store.DoesNotExist, DjangoValidationError):
        raise StoreNotFoundError("Store not found")

    if user is not None and not user_can_access_store(user=user, store=store):
        raise StoreNotFoundError("Store not found")

    return store


@transaction.atomic
def update_tax_config(
    *,
    store_id: UUID,
    user: User,
    enabled: bool,
    rate: Decimal
) -> Store:
    """
    Change a store's tax flag and rate.

    Raises:
        StoreNotFoundError: If store doesn't exist
        InsufficientPermissionsError: If user is not a manager of the store
    """
    try:
        store = Store.objects.select_for_update().get(id=store_id, is_active=True)
    except Store.DoesNotExist:
        raise StoreNotFoundError("Store not found")

    if not store.is_manager(user):
        raise InsufficientPermissionsError("Only store managers can change tax settings")

    store.tax_enabled = enabled
    store.tax_rate = rate
    store.save(update_fields=['tax_enabled', 'tax_rate', 'updated_at'])
    return store


@transaction.atomic
def update_loyalty_settings(*, store_id: UUID, user: User, **values) -> LoyaltySettings:
    """
    Create or update a store's loyalty settings.

    Raises:
        StoreNotFoundError: If store doesn't exist
        InsufficientPermissionsError: If user is not a manager of the store
    """
    try:
        store = Store.objects.get(id=store_id, is_active=True)
    except Store.DoesNotExist:
        raise StoreNotFoundError("Store not found")

    if not store.is_manager(user):
        raise InsufficientPermissionsError("Only store managers can change loyalty settings")

    settings_obj, _ = LoyaltySettings.objects.select_for_update().get_or_create(store=store)
    for field_name, value in values.items():
        setattr(settings_obj, field_name, value)
    settings_obj.save()
    return settings_obj


def get_loyalty_rules(*, store_id: UUID) -> LoyaltyRules:
    """
    Loyalty rules used when billing at a store.

    Raises:
        StoreNotFoundError: If store doesn't exist
    """
    return get_store(store_id=store_id).get_loyalty_rules()

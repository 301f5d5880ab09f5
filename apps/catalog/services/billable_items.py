"""Resolve cart entries to catalog rows of a store."""

from typing import Union
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError

from apps.billing.calculator import ItemKind
from ..models import Service, Product
from .exceptions import ServiceNotFoundError, ProductNotFoundError


def get_billable_item(*, store_id: UUID, kind: str, item_id: UUID) -> Union[Service, Product]:
    """
    Return the active service or product a cart line refers to.

    Raises:
        ServiceNotFoundError: If kind is service and no active service of the
            store has this ID
        ProductNotFoundError: Same for products
    """
    if ItemKind(kind) == ItemKind.SERVICE:
        model, error = Service, ServiceNotFoundError
    else:
        model, error = Product, ProductNotFoundError

    try:
        return model.objects.get(id=item_id, store_id=store_id, is_active=True)
    except (model.DoesNotExist, DjangoValidationError):
        raise error(f"{model.__name__} with ID {item_id} not found in this store")

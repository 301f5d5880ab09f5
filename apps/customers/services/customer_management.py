"""Customer registration and lookup service."""

from datetime import date
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet

from ..models import Customer
from .exceptions import DuplicateCustomerError, CustomerNotFoundError


@transaction.atomic
def create_customer(
    *,
    first_name: str,
    mobile: str,
    last_name: str = '',
    email: str = '',
    date_of_birth: Optional[date] = None,
    address: str = '',
) -> Customer:
    """
    Register a new customer.

    Raises:
        DuplicateCustomerError: If the mobile number is already registered
    """
    mobile = mobile.strip()
    if Customer.objects.filter(mobile=mobile).exists():
        raise DuplicateCustomerError(f"Customer with mobile {mobile} already exists")

    try:
        return Customer.objects.create(
            first_name=first_name,
            last_name=last_name,
            mobile=mobile,
            email=email,
            date_of_birth=date_of_birth,
            address=address,
        )
    except IntegrityError:
        raise DuplicateCustomerError(f"Customer with mobile {mobile} already exists")


def get_customer(*, customer_id: UUID) -> Customer:
    """
    Raises:
        CustomerNotFoundError: If customer doesn't exist
    """
    try:
        return Customer.objects.get(id=customer_id)
    except (Customer.DoesNotExist, DjangoValidationError):
        raise CustomerNotFoundError()


def search_customers(*, query: Optional[str] = None) -> QuerySet:
    """
    Search customers by name, mobile or email.

    Every whitespace-separated term must match one of the fields, so
    "priya 98" finds Priya whose number contains 98.
    """
    queryset = Customer.objects.all()
    if not query:
        return queryset

    for term in query.split():
        queryset = queryset.filter(
            Q(first_name__icontains=term) |
            Q(last_name__icontains=term) |
            Q(mobile__icontains=term) |
            Q(email__icontains=term)
        )
    return queryset

"""Staff account creation service."""

from typing import Optional

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import UserRole
from .exceptions import DuplicateUserError

User = get_user_model()


@transaction.atomic
def create_staff_user(
    *,
    email: str,
    password: str,
    display_name: str = '',
    mobile: Optional[str] = None,
    role: str = UserRole.CASHIER,
) -> User:
    """
    Create a staff account.

    Raises:
        DuplicateUserError: If email or mobile is already registered
    """
    email = User.objects.normalize_email(email)

    if User.objects.filter(email__iexact=email).exists():
        raise DuplicateUserError(f"User with email {email} already exists")
    if mobile and User.objects.filter(mobile=mobile).exists():
        raise DuplicateUserError(f"User with mobile {mobile} already exists")

    try:
        return User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name,
            mobile=mobile or None,
            role=role,
            is_staff=(role == UserRole.SUPER_ADMIN),
        )
    except IntegrityError:
        raise DuplicateUserError("User with this email or mobile already exists")

"""User authentication service."""

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()


@transaction.atomic
def authenticate_user(*, login: str, password: str) -> User:
    """
    Authenticate staff member with email or mobile number and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Args:
        login: Email address (contains '@') or mobile number
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
    """
    lookup = {'email__iexact': login} if '@' in login else {'mobile': login}

    try:
        user = (
            User.objects
            .select_for_update()
            .get(**lookup)
        )
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid login or password")

    if not user.check_password(password):
        raise InvalidCredentialsError("Invalid login or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user

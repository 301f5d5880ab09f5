"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    DuplicateUserError,
)
from .user_authentication import authenticate_user
from .staff_management import create_staff_user

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'DuplicateUserError',
    # Services
    'authenticate_user',
    'create_staff_user',
]

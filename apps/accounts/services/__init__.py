"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    EmailAlreadyInUseError,
    UsernameAlreadyInUseError,
    InvalidCredentialsError,
    UserNotFoundError,
    InvalidTokenError,
    TokenExpiredError,
    InsufficientPermissionsError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user, open_session, close_session
from .password_reset import issue_token, consume_token
from .account_management import update_user

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'EmailAlreadyInUseError',
    'UsernameAlreadyInUseError',
    'InvalidCredentialsError',
    'UserNotFoundError',
    'InvalidTokenError',
    'TokenExpiredError',
    'InsufficientPermissionsError',
    # Services
    'register_user',
    'authenticate_user',
    'open_session',
    'close_session',
    'issue_token',
    'consume_token',
    'update_user',
]

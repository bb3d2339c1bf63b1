"""
Domain-specific exceptions for accounts services.

Each exception carries its HTTP status and machine-readable code, so views
can let them propagate to the project exception handler.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class AccountsServiceError(APIException):
    """Base exception for accounts services."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'BAD_REQUEST'


class EmailAlreadyInUseError(AccountsServiceError):
    """Raised when registering or updating with an email owned by someone else."""
    default_detail = 'Email already in use.'


class UsernameAlreadyInUseError(AccountsServiceError):
    """Raised when registering with a username owned by someone else."""
    default_detail = 'Username already in use.'


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are missing or invalid."""
    default_detail = 'Invalid credentials.'


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'User not found.'


class InvalidTokenError(AccountsServiceError):
    """Raised when a reset token does not exist or was already used."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Reset token not found.'


class TokenExpiredError(AccountsServiceError):
    """Raised when a reset token is older than the configured lifetime."""
    status_code = status.HTTP_410_GONE
    default_detail = 'Token has expired'
    default_code = 'TOKEN_EXPIRED'


class InsufficientPermissionsError(AccountsServiceError):
    """Raised when a user acts on an account that is not theirs."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'FORBIDDEN'

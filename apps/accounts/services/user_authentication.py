"""Session (sign in / sign out) service."""

import logging
from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from .exceptions import InvalidCredentialsError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Args:
        email: User's email
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid or the account is inactive
    """
    if not email or not password:
        raise InvalidCredentialsError("Email and password are required")

    try:
        user = (
            User.objects
            .select_for_update()
            .get(email=email.lower())
        )
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid email or password")

    if not user.check_password(password):
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InvalidCredentialsError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user


def open_session(*, email: str, password: str) -> tuple:
    """
    Sign a user in and issue a JWT pair.

    Returns:
        Tuple of (user, refresh token)
    """
    user = authenticate_user(email=email, password=password)
    refresh = RefreshToken.for_user(user)
    logger.info("Session opened for user %s", user.pk)
    return user, refresh


def close_session(*, user: User, refresh_token: str) -> None:
    """
    Sign a user out by blacklisting their refresh token.

    Raises:
        InvalidCredentialsError: If the refresh token is malformed, expired
            or belongs to another user
    """
    try:
        token = RefreshToken(refresh_token)
    except TokenError:
        raise InvalidCredentialsError("Invalid refresh token")

    if str(token.get('user_id')) != str(user.pk):
        raise InvalidCredentialsError("Invalid refresh token")

    token.blacklist()
    logger.info("Session closed for user %s", user.pk)

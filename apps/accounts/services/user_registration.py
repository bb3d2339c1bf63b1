"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import EmailAlreadyInUseError, UsernameAlreadyInUseError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    username: str,
    password: str,
    avatar: str = ""
) -> User:
    """
    Register a new user.

    Args:
        email: User's email address
        username: Public handle, unique
        password: User's password (will be hashed)
        avatar: Optional avatar URL

    Returns:
        Created User instance

    Raises:
        EmailAlreadyInUseError: If the email is taken
        UsernameAlreadyInUseError: If the username is taken
    """
    if User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyInUseError("Email already in use")

    if User.objects.filter(username__iexact=username).exists():
        raise UsernameAlreadyInUseError("Username already in use")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                username=username,
                password=password,
                avatar=avatar,
            )
    except IntegrityError:
        # Concurrent registration won the unique constraint
        raise EmailAlreadyInUseError("Email or Username already in use")

    logger.info("Registered user %s", user.pk)
    return user

"""Account management service."""

import logging
from typing import Optional

from django.db import transaction
from django.contrib.auth import get_user_model

from .exceptions import (
    EmailAlreadyInUseError,
    InsufficientPermissionsError,
    UserNotFoundError,
)

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def update_user(
    *,
    user_id: int,
    updated_by: User,
    email: str,
    password: str,
    avatar: Optional[str] = None
) -> User:
    """
    Update a user's email, password and avatar.

    Args:
        user_id: ID of the user to update
        updated_by: User performing the update (must be the same user)
        email: New email address
        password: New password (will be hashed)
        avatar: New avatar URL (optional)

    Returns:
        Updated User instance

    Raises:
        UserNotFoundError: If the user does not exist
        InsufficientPermissionsError: If updated_by is someone else
        EmailAlreadyInUseError: If the email belongs to another user
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(id=user_id)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    if user.pk != updated_by.pk:
        raise InsufficientPermissionsError("You can only update your own account")

    if User.objects.filter(email__iexact=email).exclude(pk=user.pk).exists():
        raise EmailAlreadyInUseError("Email already in use")

    update_fields = ['email', 'password', 'updated_at']
    user.email = email
    user.set_password(password)

    if avatar is not None:
        user.avatar = avatar
        update_fields.append('avatar')

    user.save(update_fields=update_fields)
    logger.info("Updated user %s", user.pk)

    return user

"""Password reset token lifecycle."""

import logging
import secrets
import smtplib
from typing import Tuple
from urllib.parse import urlencode, urlsplit, urlunsplit

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import EmailMultiAlternatives
from django.db import transaction
from django.template.loader import render_to_string
from django.utils import timezone

from apps.accounts.models import PasswordResetToken

from .exceptions import UserNotFoundError, InvalidTokenError, TokenExpiredError

User = get_user_model()

logger = logging.getLogger(__name__)

RESET_EMAIL_SUBJECT = 'RPGTableMaker: Recuperação de senha'
RESET_EMAIL_TEXT = 'Clique no link abaixo para redefinir sua senha'
TOKEN_BYTES = 24


def build_reset_link(reset_password_url: str, token: str) -> str:
    """Append the token to the caller supplied URL as a query parameter."""
    parts = urlsplit(reset_password_url)
    query = urlencode({'token': token})
    if parts.query:
        query = f'{parts.query}&{query}'
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def send_password_reset_email(*, user: User, link: str) -> None:
    """
    Send the reset instructions to ``user``.

    Delivery is best-effort: the token is already committed when this runs,
    so transport failures are logged instead of raised.
    """
    context = {'username': user.username, 'link': link}
    message = EmailMultiAlternatives(
        subject=RESET_EMAIL_SUBJECT,
        body=f'{RESET_EMAIL_TEXT}\n\n{link}',
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[user.email],
    )
    message.attach_alternative(
        render_to_string('emails/forgot_password.html', context),
        'text/html',
    )

    try:
        message.send()
    except (smtplib.SMTPException, OSError):
        logger.exception("Failed to send password reset email to user %s", user.pk)
    else:
        logger.info("Password reset email sent to user %s", user.pk)


@transaction.atomic
def issue_token(*, email: str, reset_password_url: str) -> Tuple[str, User]:
    """
    Issue a password reset token for the user owning ``email``.

    Any previous token of the user is overwritten, so only the latest value
    stays usable. The email goes out after the transaction commits.

    Args:
        email: User's email address
        reset_password_url: Frontend URL the token is appended to

    Returns:
        Tuple of (token, user)

    Raises:
        UserNotFoundError: If no user has that email
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email=email.lower())
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"No user with email: {email}")

    token = secrets.token_hex(TOKEN_BYTES)
    PasswordResetToken.objects.update_or_create(
        user=user,
        defaults={'token': token, 'created_at': timezone.now()},
    )
    logger.info("Password reset token issued for user %s", user.pk)

    link = build_reset_link(reset_password_url, token)
    transaction.on_commit(
        lambda: send_password_reset_email(user=user, link=link)
    )

    return token, user


@transaction.atomic
def consume_token(*, token: str, new_password: str) -> User:
    """
    Reset a user's password with a reset token.

    The token is deleted on success, so it works exactly once. An expired
    token is reported and left in place until the next ``issue_token``.

    Args:
        token: Reset token
        new_password: New password (will be hashed)

    Returns:
        User instance

    Raises:
        InvalidTokenError: If the token does not exist or was already used
        TokenExpiredError: If the token is older than the configured lifetime
    """
    try:
        reset_token = (
            PasswordResetToken.objects
            .select_for_update()
            .select_related('user')
            .get(token=token)
        )
    except PasswordResetToken.DoesNotExist:
        raise InvalidTokenError("Reset token not found")

    if reset_token.is_expired():
        logger.info("Expired password reset token used for user %s", reset_token.user_id)
        raise TokenExpiredError()

    user = reset_token.user
    user.set_password(new_password)
    user.save(update_fields=['password', 'updated_at'])
    reset_token.delete()
    logger.info("Password reset completed for user %s", user.pk)

    return user

from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, PasswordResetToken


RESET_URL = 'http://localhost:3000/reset-password'


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='testuser@example.com',
        username='testuser',
        password='TestPass123!',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        username='inactive',
        password='TestPass123!',
        is_active=False,
    )


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(
        email='otheruser@example.com',
        username='otheruser',
        password='OtherPass123!',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def reset_token(user):
    """A fresh password reset token for ``user``."""
    return PasswordResetToken.objects.create(user=user, token='test-token')


@pytest.fixture
def expired_reset_token(user):
    """A reset token issued 2 hours and 1 minute ago."""
    return PasswordResetToken.objects.create(
        user=user,
        token='expired-token',
        created_at=timezone.now() - timedelta(hours=2, minutes=1),
    )

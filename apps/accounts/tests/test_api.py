from datetime import timedelta

import pytest
from django.core import mail
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.accounts.models import User, PasswordResetToken

from .conftest import RESET_URL


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /users"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'email': 'newuser@example.com',
            'username': 'newuser',
            'password': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['email'] == 'newuser@example.com'
        assert response.data['user']['username'] == 'newuser'
        assert 'password' not in response.data['user']
        assert User.objects.filter(email='newuser@example.com').exists()

    def test_register_with_avatar(self, api_client):
        """Avatar is optional and stored when given."""
        url = reverse('users:register')
        data = {
            'email': 'avatar@example.com',
            'username': 'avatar',
            'password': 'SecurePass123!',
            'avatar': 'https://example.com/me.png',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['avatar'] == 'https://example.com/me.png'

    def test_register_duplicate_email(self, api_client, user):
        """Cannot register with existing email."""
        url = reverse('users:register')
        data = {
            'email': user.email,
            'username': 'someoneelse',
            'password': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'BAD_REQUEST'
        assert response.data['status'] == 400

    def test_register_duplicate_username(self, api_client, user):
        """Cannot register with existing username."""
        url = reverse('users:register')
        data = {
            'email': 'fresh@example.com',
            'username': user.username,
            'password': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_missing_fields(self, api_client):
        """Missing fields are a validation error."""
        url = reverse('users:register')
        response = api_client.post(url, {'email': 'partial@example.com'})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data['code'] == 'BAD_REQUEST'
        assert response.data['status'] == 422
        assert 'username' in response.data['errors']
        assert 'password' in response.data['errors']

    def test_register_weak_password(self, api_client):
        """Registration fails with weak password."""
        url = reverse('users:register')
        data = {
            'email': 'weak@example.com',
            'username': 'weak',
            'password': '123',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert 'password' in response.data['errors']


# =============================================================================
# Account Update Tests
# =============================================================================

@pytest.mark.django_db
class TestUpdateUser:
    """Tests for PUT /users/<id>"""

    def test_update_own_account(self, authenticated_client, user):
        """User can change their email, password and avatar."""
        url = reverse('users:update', kwargs={'pk': user.id})
        data = {
            'email': 'updated@example.com',
            'password': 'UpdatedPass123!',
            'avatar': 'https://example.com/new.png',
        }
        response = authenticated_client.put(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['email'] == 'updated@example.com'

        user.refresh_from_db()
        assert user.check_password('UpdatedPass123!')

    def test_update_other_account(self, authenticated_client, other_user):
        """Cannot update someone else's account."""
        url = reverse('users:update', kwargs={'pk': other_user.id})
        data = {'email': 'stolen@example.com', 'password': 'StolenPass123!'}
        response = authenticated_client.put(url, data)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'FORBIDDEN'

    def test_update_unknown_user(self, authenticated_client):
        """Unknown user id is 404."""
        url = reverse('users:update', kwargs={'pk': 999999})
        data = {'email': 'ghost@example.com', 'password': 'GhostPass123!'}
        response = authenticated_client.put(url, data)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_taken_email(self, authenticated_client, user, other_user):
        """Email of another account cannot be taken."""
        url = reverse('users:update', kwargs={'pk': user.id})
        data = {'email': other_user.email, 'password': 'UpdatedPass123!'}
        response = authenticated_client.put(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_unauthenticated(self, api_client, user):
        """Anonymous users cannot update accounts."""
        url = reverse('users:update', kwargs={'pk': user.id})
        data = {'email': 'anon@example.com', 'password': 'AnonPass123!'}
        response = api_client.put(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Session Tests
# =============================================================================

@pytest.mark.django_db
class TestSessions:
    """Tests for POST and DELETE /sessions"""

    def test_open_session(self, api_client, user):
        """Successfully sign in with valid credentials."""
        url = reverse('users:sessions')
        data = {'email': user.email, 'password': 'TestPass123!'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['id'] == user.id
        assert 'access' in response.data['token']
        assert 'refresh' in response.data['token']

    def test_open_session_wrong_password(self, api_client, user):
        """Sign in fails with wrong password."""
        url = reverse('users:sessions')
        data = {'email': user.email, 'password': 'WrongPassword123!'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'BAD_REQUEST'

    def test_open_session_missing_credentials(self, api_client, db):
        """Empty credentials are rejected like wrong ones."""
        url = reverse('users:sessions')
        response = api_client.post(url, {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_open_session_inactive_user(self, api_client, user_inactive):
        """Inactive accounts cannot sign in."""
        url = reverse('users:sessions')
        data = {'email': user_inactive.email, 'password': 'TestPass123!'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_close_session_blacklists_refresh(self, api_client, user):
        """Signed out refresh tokens can no longer be refreshed."""
        login = api_client.post(
            reverse('users:sessions'),
            {'email': user.email, 'password': 'TestPass123!'},
        )
        tokens = login.data['token']

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        response = api_client.delete(
            reverse('users:sessions'), {'refresh': tokens['refresh']}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {}

        api_client.credentials()
        refresh = api_client.post(reverse('token-refresh'), {'refresh': tokens['refresh']})
        assert refresh.status_code == status.HTTP_401_UNAUTHORIZED

    def test_close_session_requires_refresh(self, authenticated_client):
        """Signing out without the refresh token is a validation error."""
        response = authenticated_client.delete(reverse('users:sessions'), {}, format='json')

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert 'refresh' in response.data['errors']

    def test_close_session_unauthenticated(self, api_client):
        """Signing out requires a session."""
        response = api_client.delete(reverse('users:sessions'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Password Recovery Tests
# =============================================================================

@pytest.mark.django_db
class TestForgotPassword:
    """Tests for POST /forgot-password"""

    def test_forgot_password_sends_email(self, api_client, user, django_capture_on_commit_callbacks):
        """A reset link is emailed to the account owner."""
        url = reverse('users:forgot-password')
        data = {'email': user.email, 'resetPasswordUrl': RESET_URL}

        with django_capture_on_commit_callbacks(execute=True):
            response = api_client.post(url, data)

        assert response.status_code == status.HTTP_204_NO_CONTENT

        token = PasswordResetToken.objects.get(user=user)
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == [user.email]
        assert f'{RESET_URL}?token={token.token}' in mail.outbox[0].alternatives[0][0]

    def test_forgot_password_unknown_email(self, api_client, db):
        """Unknown addresses are reported as not found."""
        url = reverse('users:forgot-password')
        data = {'email': 'nobody@example.com', 'resetPasswordUrl': RESET_URL}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert len(mail.outbox) == 0

    def test_forgot_password_missing_url(self, api_client, user):
        """The reset page URL is required."""
        url = reverse('users:forgot-password')
        response = api_client.post(url, {'email': user.email})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert 'resetPasswordUrl' in response.data['errors']

    def test_forgot_password_invalid_email(self, api_client, db):
        """Malformed email is a validation error."""
        url = reverse('users:forgot-password')
        response = api_client.post(url, {'email': 'not-an-email', 'resetPasswordUrl': RESET_URL})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.django_db
class TestResetPassword:
    """Tests for POST /reset-password"""

    def test_reset_password(self, api_client, user, reset_token):
        """Password changes with a valid token."""
        url = reverse('users:reset-password')
        data = {'token': reset_token.token, 'password': 'NewValidPass123!'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_204_NO_CONTENT

        user.refresh_from_db()
        assert user.check_password('NewValidPass123!')

    def test_reset_password_token_is_single_use(self, api_client, reset_token):
        """A consumed token is gone."""
        url = reverse('users:reset-password')
        api_client.post(url, {'token': reset_token.token, 'password': 'NewValidPass123!'})

        response = api_client.post(url, {'token': reset_token.token, 'password': 'OtherValidPass123!'})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'BAD_REQUEST'

    def test_reset_password_expired_token(self, api_client, expired_reset_token):
        """Tokens older than two hours are refused with 410."""
        url = reverse('users:reset-password')
        data = {'token': expired_reset_token.token, 'password': 'NewValidPass123!'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_410_GONE
        assert response.data == {
            'code': 'TOKEN_EXPIRED',
            'message': 'Token has expired',
            'status': 410,
        }

    def test_reset_password_missing_fields(self, api_client, db):
        """Token and password are required."""
        url = reverse('users:reset-password')
        response = api_client.post(url, {})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_forgot_then_reset_after_three_hours(self, api_client, db, django_capture_on_commit_callbacks):
        """A link used three hours after it was sent has expired."""
        user = User.objects.create_user(email='a@b.com', username='ab', password='TestPass123!')

        with django_capture_on_commit_callbacks(execute=True):
            api_client.post(
                reverse('users:forgot-password'),
                {'email': 'a@b.com', 'resetPasswordUrl': RESET_URL},
            )

        token = PasswordResetToken.objects.get(user=user)
        PasswordResetToken.objects.filter(pk=token.pk).update(
            created_at=timezone.now() - timedelta(hours=3)
        )

        response = api_client.post(
            reverse('users:reset-password'),
            {'token': token.token, 'password': 'NewValidPass123!'},
        )

        assert response.status_code == status.HTTP_410_GONE
        assert response.data['code'] == 'TOKEN_EXPIRED'

from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'username',
            'avatar',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class UserPublicSerializer(serializers.ModelSerializer):
    """Public user info (for displaying in groups and requests)."""

    class Meta:
        model = User
        fields = ['id', 'username', 'avatar']
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(required=True, max_length=255)
    username = serializers.CharField(required=True, max_length=100)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    avatar = serializers.URLField(required=False, allow_blank=True, max_length=500)


class UserUpdateSerializer(serializers.Serializer):
    """Serializer for updating email, password and avatar."""

    email = serializers.EmailField(required=True, max_length=255)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    avatar = serializers.URLField(required=False, allow_blank=True, max_length=500)


class SessionSerializer(serializers.Serializer):
    """Credentials for opening a session."""

    email = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField(
        required=False,
        allow_blank=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class SessionCloseSerializer(serializers.Serializer):
    """Refresh token to revoke on sign out."""

    refresh = serializers.CharField(required=True)


class ForgotPasswordSerializer(serializers.Serializer):
    """Serializer for password reset request."""

    email = serializers.EmailField(required=True)
    resetPasswordUrl = serializers.URLField(required=True)


class ResetPasswordSerializer(serializers.Serializer):
    """Serializer for password reset confirmation."""

    token = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )

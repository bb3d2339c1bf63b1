from datetime import timedelta

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, username, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        if not username:
            raise ValueError('Username is required')

        email = self.normalize_email(email)
        user = self.model(email=email, username=username, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, username, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, username, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Player account, authenticated by email."""

    email = models.EmailField(unique=True, max_length=255, db_index=True)
    username = models.CharField(unique=True, max_length=100)
    avatar = models.URLField(max_length=500, blank=True)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['created_at'], name='users_created_at_idx'),
        ]

    def __str__(self):
        return self.username

    def save(self, *args, **kwargs):
        # Lookups by email match exactly against the lower-cased value
        if self.email:
            self.email = self.email.lower()
        super().save(*args, **kwargs)


class PasswordResetToken(models.Model):
    """
    Single-use password reset token.

    A user holds at most one token: issuing a new one overwrites the value
    and the creation time of the previous one.
    """

    user = models.OneToOneField(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='password_reset_token',
    )
    token = models.CharField(max_length=64, unique=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'password_reset_tokens'

    def __str__(self):
        return f"Reset token for {self.user.email}"

    def is_expired(self, now=None):
        """Token age is measured from ``created_at`` at read time."""
        now = now or timezone.now()
        ttl = timedelta(hours=settings.PASSWORD_RESET_TOKEN_TTL_HOURS)
        return abs(now - self.created_at) > ttl

# ==========================================
# apps/groups/models.py
# ==========================================

from django.db import models
from django.db.models import Q


class GroupRequestStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    ACCEPTED = 'ACCEPTED', 'Accepted'


class Group(models.Model):
    """Game table run by a master."""

    name = models.CharField(max_length=200)
    description = models.TextField()
    schedule = models.CharField(max_length=200)
    location = models.CharField(max_length=200)
    chronicle = models.TextField()
    master = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='mastered_groups')
    players = models.ManyToManyField(
        'accounts.User',
        through='GroupMembership',
        related_name='player_groups',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groups'
        indexes = [
            models.Index(fields=['master', 'created_at'], name='groups_master_created_idx'),
        ]
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.name

    def has_player(self, user_id):
        return self.memberships.filter(user_id=user_id).exists()

    def is_master(self, user):
        return user is not None and self.master_id == user.pk


class GroupMembership(models.Model):
    """A user playing in a group (join table)."""

    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='group_memberships')
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='memberships')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'groups_users'
        constraints = [
            models.UniqueConstraint(fields=['group', 'user'], name='unique_group_player'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user} in {self.group.name}"


class GroupRequest(models.Model):
    """Request of a user to join a group, approved by the master."""

    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='group_requests')
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='requests')
    status = models.CharField(
        max_length=20,
        choices=GroupRequestStatus.choices,
        default=GroupRequestStatus.PENDING,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'group_requests'
        constraints = [
            models.UniqueConstraint(
                fields=['group', 'user'],
                condition=Q(status='PENDING'),
                name='unique_pending_group_request',
            ),
        ]
        indexes = [
            models.Index(fields=['group', 'status'], name='group_requests_status_idx'),
        ]
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.user} -> {self.group.name} ({self.status})"

    @property
    def is_pending(self):
        return self.status == GroupRequestStatus.PENDING

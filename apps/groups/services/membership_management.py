"""
Membership management service.

Handles player removal with concurrency protection.
"""

import logging

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership

from .exceptions import (
    GroupNotFoundError,
    CannotRemoveMasterError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def remove_player(
    *,
    group_id: int,
    player_id: int,
    removed_by: User
) -> None:
    """
    Remove a player from a group.

    The master can never be removed, whoever asks. Other players may be
    removed by the master or may leave on their own. Removing a user who
    is not a player is a no-op.

    Args:
        group_id: ID of the group
        player_id: ID of the user to remove
        removed_by: User performing the removal

    Raises:
        GroupNotFoundError: If group doesn't exist
        CannotRemoveMasterError: If trying to remove the master
        InsufficientPermissionsError: If removed_by is neither the master nor the player
    """
    try:
        group = (
            Group.objects
            .select_for_update()
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if group.master_id == int(player_id):
        raise CannotRemoveMasterError("Cannot remove master from group")

    if not group.is_master(removed_by) and removed_by.pk != int(player_id):
        raise InsufficientPermissionsError("Only the group master can remove other players")

    deleted, _ = GroupMembership.objects.filter(group=group, user_id=player_id).delete()
    if deleted:
        logger.info("Player %s removed from group %s by %s", player_id, group.pk, removed_by.pk)


def get_group_players(*, group_id: int) -> QuerySet[User]:
    """
    Get all players of a group, in joining order.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    if not Group.objects.filter(id=group_id).exists():
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    return (
        User.objects
        .filter(group_memberships__group_id=group_id)
        .order_by('group_memberships__joined_at')
    )

"""
Group management service.

Handles group CRUD operations with proper transaction safety.
"""

import logging
from typing import Optional

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership

from .exceptions import (
    GroupNotFoundError,
    MasterNotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'description', 'schedule', 'location', 'chronicle')


@transaction.atomic
def create_group(
    *,
    name: str,
    description: str,
    schedule: str,
    location: str,
    chronicle: str,
    master_id: int
) -> Group:
    """
    Create a new group and add its master as the first player.

    Group and master membership are created in one transaction, so a
    group never exists without its master among the players.

    Args:
        name: Group name
        description: What the table plays
        schedule: When the table meets
        location: Where the table meets
        chronicle: Setting blurb
        master_id: ID of the user running the table

    Returns:
        Created Group instance

    Raises:
        MasterNotFoundError: If the master does not exist
    """
    try:
        master = User.objects.get(id=master_id)
    except User.DoesNotExist:
        raise MasterNotFoundError(f"User with ID {master_id} not found")

    group = Group.objects.create(
        name=name,
        description=description,
        schedule=schedule,
        location=location,
        chronicle=chronicle,
        master=master,
    )
    GroupMembership.objects.create(user=master, group=group)

    logger.info("Group %s created with master %s", group.pk, master.pk)
    return group


def get_group_by_id(*, group_id: int) -> Group:
    """
    Get a group by ID with its master and players loaded.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        return (
            Group.objects
            .select_related('master')
            .prefetch_related('players')
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")


def list_groups(*, player_id: Optional[int] = None, text: Optional[str] = None) -> QuerySet[Group]:
    """
    List groups, optionally narrowed by player and free text.

    Args:
        player_id: Keep groups where this user is a player
        text: Case-insensitive substring of name or description

    Returns:
        QuerySet of Group instances with master and players loaded
    """
    groups = Group.objects.select_related('master').prefetch_related('players')

    if player_id:
        groups = groups.filter(memberships__user_id=player_id)

    if text:
        groups = groups.filter(Q(name__icontains=text) | Q(description__icontains=text))

    return groups.distinct()


@transaction.atomic
def update_group(*, group_id: int, user: User, **changes) -> Group:
    """
    Update group details (master only).

    Only name, description, schedule, location and chronicle can change;
    the master is fixed for the lifetime of the group.

    Args:
        group_id: ID of the group
        user: User performing the update (must be master)
        **changes: New field values

    Returns:
        Updated Group instance

    Raises:
        GroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If user is not the master
    """
    try:
        group = (
            Group.objects
            .select_for_update()
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.is_master(user):
        raise InsufficientPermissionsError("Only the group master can update the group")

    update_fields = ['updated_at']
    for field in UPDATABLE_FIELDS:
        if changes.get(field) is not None:
            setattr(group, field, changes[field])
            update_fields.append(field)

    group.save(update_fields=update_fields)

    return group


@transaction.atomic
def delete_group(*, group_id: int, user: User) -> None:
    """
    Delete a group (master only).

    Cascading deletes will automatically remove:
    - All memberships
    - All group requests, pending or accepted

    Args:
        group_id: ID of the group
        user: User requesting deletion (must be master)

    Raises:
        GroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If user is not the master
    """
    try:
        group = (
            Group.objects
            .select_for_update()
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.is_master(user):
        raise InsufficientPermissionsError("Only the group master can delete the group")

    group.delete()
    logger.info("Group %s deleted by %s", group_id, user.pk)

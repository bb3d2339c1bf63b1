"""
Group request service.

Join requests go PENDING -> ACCEPTED on master approval. Accepting a
request and adding the player happen in one transaction, and the database
refuses a second pending request for the same user and group.
"""

import logging
from typing import Optional

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRequest, GroupRequestStatus

from .exceptions import (
    GroupNotFoundError,
    GroupRequestNotFoundError,
    DuplicateGroupRequestError,
    AlreadyPlayerError,
    MissingMasterFilterError,
    RequestAlreadyAcceptedError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def create_request(*, group_id: int, user: User) -> GroupRequest:
    """
    Ask to join a group.

    Args:
        group_id: ID of the group
        user: User asking to join

    Returns:
        Created GroupRequest with status PENDING

    Raises:
        GroupNotFoundError: If group doesn't exist
        DuplicateGroupRequestError: If a pending request already exists
        AlreadyPlayerError: If the user already plays in the group
    """
    try:
        group = Group.objects.get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if GroupRequest.objects.filter(
        group=group, user=user, status=GroupRequestStatus.PENDING
    ).exists():
        raise DuplicateGroupRequestError("Group request already exists")

    if group.has_player(user.pk):
        raise AlreadyPlayerError("User is already in the group")

    try:
        with transaction.atomic():
            group_request = GroupRequest.objects.create(
                group=group,
                user=user,
                status=GroupRequestStatus.PENDING,
            )
    except IntegrityError:
        # Concurrent request slipped in between the check and the insert
        raise DuplicateGroupRequestError("Group request already exists")

    logger.info("User %s requested to join group %s", user.pk, group.pk)
    return group_request


def list_requests(*, group_id: int, master_id: Optional[int]) -> QuerySet[GroupRequest]:
    """
    List the requests of a group, as seen by its master.

    Args:
        group_id: ID of the group
        master_id: ID of the group's master (required)

    Returns:
        QuerySet of GroupRequest with group and user loaded. Empty when
        ``master_id`` is not the group's master.

    Raises:
        MissingMasterFilterError: If master_id is not supplied
    """
    if not master_id:
        raise MissingMasterFilterError("master query parameter is required")

    return (
        GroupRequest.objects
        .select_related('group', 'user')
        .filter(group_id=group_id, group__master_id=master_id)
        .order_by('created_at', 'id')
    )


def _get_request_for_update(*, request_id: int, group_id: int) -> GroupRequest:
    try:
        return (
            GroupRequest.objects
            .select_for_update()
            .select_related('group')
            .get(id=request_id, group_id=group_id)
        )
    except GroupRequest.DoesNotExist:
        raise GroupRequestNotFoundError(f"Group request with ID {request_id} not found")


@transaction.atomic
def accept_request(*, request_id: int, group_id: int, accepted_by: User) -> GroupRequest:
    """
    Accept a join request and add the user to the group's players.

    The status change and the membership insert commit together.
    Accepting an already accepted request returns it unchanged.

    Args:
        request_id: ID of the request
        group_id: ID of the group the request belongs to
        accepted_by: User accepting (must be master)

    Returns:
        The accepted GroupRequest

    Raises:
        GroupRequestNotFoundError: If the request doesn't exist in the group
        InsufficientPermissionsError: If accepted_by is not the master
    """
    group_request = _get_request_for_update(request_id=request_id, group_id=group_id)

    if not group_request.group.is_master(accepted_by):
        raise InsufficientPermissionsError("Only the group master can accept requests")

    if not group_request.is_pending:
        return group_request

    group_request.status = GroupRequestStatus.ACCEPTED
    group_request.save(update_fields=['status', 'updated_at'])

    GroupMembership.objects.get_or_create(
        group_id=group_request.group_id,
        user_id=group_request.user_id,
    )

    logger.info(
        "Group request %s accepted, user %s joined group %s",
        group_request.pk, group_request.user_id, group_request.group_id,
    )
    return group_request


@transaction.atomic
def reject_request(*, request_id: int, group_id: int, rejected_by: User) -> None:
    """
    Reject a pending join request by deleting it.

    Args:
        request_id: ID of the request
        group_id: ID of the group the request belongs to
        rejected_by: User rejecting (must be master)

    Raises:
        GroupRequestNotFoundError: If the request doesn't exist in the group
        InsufficientPermissionsError: If rejected_by is not the master
        RequestAlreadyAcceptedError: If the request was already accepted
    """
    group_request = _get_request_for_update(request_id=request_id, group_id=group_id)

    if not group_request.group.is_master(rejected_by):
        raise InsufficientPermissionsError("Only the group master can reject requests")

    if not group_request.is_pending:
        raise RequestAlreadyAcceptedError("Group request was already accepted")

    group_request.delete()
    logger.info("Group request %s rejected", request_id)

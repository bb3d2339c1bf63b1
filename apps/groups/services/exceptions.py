"""
Domain-specific exceptions for groups app.

These exceptions represent business rule violations. They carry their HTTP
status and code, so views let them propagate to the project exception
handler instead of translating each one.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class GroupsServiceError(APIException):
    """Base exception for all groups service errors."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid group operation.'
    default_code = 'BAD_REQUEST'


class GroupNotFoundError(GroupsServiceError):
    """Raised when a group does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Group not found.'


class MasterNotFoundError(GroupsServiceError):
    """Raised when the master given for a new group does not exist."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = 'Master not found.'


class GroupRequestNotFoundError(GroupsServiceError):
    """Raised when a group request does not exist in the group."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Group request not found.'


class DuplicateGroupRequestError(GroupsServiceError):
    """Raised when a pending request already exists for the user and group."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Group request already exists.'


class AlreadyPlayerError(GroupsServiceError):
    """Raised when a user asks to join a group they already play in."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = 'User is already in the group.'


class MissingMasterFilterError(GroupsServiceError):
    """Raised when group requests are listed without the master filter."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = 'master query parameter is required.'


class RequestAlreadyAcceptedError(GroupsServiceError):
    """Raised when rejecting a request that was already accepted."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = 'Group request was already accepted.'


class CannotRemoveMasterError(GroupsServiceError):
    """Raised when attempting to remove the master from their group."""
    default_detail = 'Cannot remove master from group.'


class InsufficientPermissionsError(GroupsServiceError):
    """Raised when a user lacks required permissions for an action."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'FORBIDDEN'

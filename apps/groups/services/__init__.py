"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    GroupsServiceError,
    GroupNotFoundError,
    MasterNotFoundError,
    GroupRequestNotFoundError,
    DuplicateGroupRequestError,
    AlreadyPlayerError,
    MissingMasterFilterError,
    RequestAlreadyAcceptedError,
    CannotRemoveMasterError,
    InsufficientPermissionsError,
)

from .group_management import (
    create_group,
    update_group,
    delete_group,
    get_group_by_id,
    list_groups,
)

from .membership_management import (
    remove_player,
    get_group_players,
)

from .request_management import (
    create_request,
    list_requests,
    accept_request,
    reject_request,
)


__all__ = [
    # Exceptions
    'GroupsServiceError',
    'GroupNotFoundError',
    'MasterNotFoundError',
    'GroupRequestNotFoundError',
    'DuplicateGroupRequestError',
    'AlreadyPlayerError',
    'MissingMasterFilterError',
    'RequestAlreadyAcceptedError',
    'CannotRemoveMasterError',
    'InsufficientPermissionsError',

    # Group Management
    'create_group',
    'update_group',
    'delete_group',
    'get_group_by_id',
    'list_groups',

    # Membership Management
    'remove_player',
    'get_group_players',

    # Group Requests
    'create_request',
    'list_requests',
    'accept_request',
    'reject_request',
]

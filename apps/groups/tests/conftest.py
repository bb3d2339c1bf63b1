import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRequest, GroupRequestStatus


def make_client(user):
    """Return a fresh API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def master_user(db):
    """Create and return the user running the table."""
    return User.objects.create_user(
        email='master@example.com',
        username='master',
        password='TestPass123!',
    )


@pytest.fixture
def player_user(db):
    """Create and return a user already playing in the group."""
    return User.objects.create_user(
        email='player@example.com',
        username='player',
        password='TestPass123!',
    )


@pytest.fixture
def outsider_user(db):
    """Create and return a user with no relation to the group."""
    return User.objects.create_user(
        email='outsider@example.com',
        username='outsider',
        password='TestPass123!',
    )


@pytest.fixture
def group(db, master_user, player_user):
    """Create a group with its master and one more player."""
    group = Group.objects.create(
        name='Vampire Tuesdays',
        description='Vampire: The Masquerade, 5th edition',
        schedule='Tuesdays 20h',
        location='Discord',
        chronicle='Nights of Sao Paulo',
        master=master_user,
    )
    GroupMembership.objects.create(group=group, user=master_user)
    GroupMembership.objects.create(group=group, user=player_user)
    return group


@pytest.fixture
def other_group(db, outsider_user):
    """Create a second group mastered by the outsider."""
    group = Group.objects.create(
        name='Dragon Fridays',
        description='Dungeons and Dragons one-shots',
        schedule='Fridays 19h',
        location='Game store',
        chronicle='Sword Coast',
        master=outsider_user,
    )
    GroupMembership.objects.create(group=group, user=outsider_user)
    return group


@pytest.fixture
def pending_request(group, outsider_user):
    """A pending join request from the outsider."""
    return GroupRequest.objects.create(
        group=group,
        user=outsider_user,
        status=GroupRequestStatus.PENDING,
    )


@pytest.fixture
def master_client(master_user):
    return make_client(master_user)


@pytest.fixture
def player_client(player_user):
    return make_client(player_user)


@pytest.fixture
def outsider_client(outsider_user):
    return make_client(outsider_user)

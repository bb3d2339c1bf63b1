from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.serializers import UserPublicSerializer

from .models import Group

from .serializers import (
    GroupSerializer,
    GroupCreateSerializer,
    GroupUpdateSerializer,
    GroupRequestSerializer,
    GroupListFilterSerializer,
    GroupRequestListFilterSerializer,
)

from apps.groups.services import (
    create_group,
    update_group,
    delete_group,
    get_group_by_id,
    list_groups,
    remove_player,
    get_group_players,
    create_request,
    list_requests,
    accept_request,
    reject_request,
)


class GroupPagination(PageNumberPagination):
    """Page through groups with ?page= and ?limit=."""
    page_size = 5
    page_size_query_param = 'limit'
    max_page_size = 100

    def get_paginated_response(self, data):
        return Response({
            'groups': {
                'meta': {
                    'total': self.page.paginator.count,
                    'per_page': self.page.paginator.per_page,
                    'current_page': self.page.number,
                    'last_page': self.page.paginator.num_pages,
                },
                'data': data,
            }
        })


class GroupViewSet(viewsets.GenericViewSet):
    """
    ViewSet for groups, their join requests and players.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: List groups, filtered by ?user= and ?text=
    create: Create a group; its master becomes the first player
    retrieve: Get a group
    partial_update: Update a group (master only)
    destroy: Delete a group (master only)
    """

    serializer_class = GroupSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = GroupPagination
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return Group.objects.none()

        filters = GroupListFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return list_groups(
            player_id=filters.validated_data.get('user'),
            text=filters.validated_data.get('text'),
        )

    @extend_schema(
        parameters=[
            OpenApiParameter('user', int, description='Only groups where this user plays'),
            OpenApiParameter('text', str, description='Substring of name or description'),
            OpenApiParameter('limit', int, description='Page size (default 5)'),
        ],
        tags=['groups'],
    )
    def list(self, request):
        """List groups."""
        page = self.paginate_queryset(self.get_queryset())
        serializer = GroupSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(request=GroupCreateSerializer, responses={201: GroupSerializer}, tags=['groups'])
    def create(self, request):
        """Create a new group."""
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data.copy()
        master_id = data.pop('master')
        group = create_group(master_id=master_id, **data)

        output = GroupSerializer(get_group_by_id(group_id=group.id))
        return Response({'group': output.data}, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: GroupSerializer}, tags=['groups'])
    def retrieve(self, request, pk=None):
        """Get a group with its players."""
        group = get_group_by_id(group_id=pk)
        return Response({'group': GroupSerializer(group).data})

    @extend_schema(request=GroupUpdateSerializer, responses={200: GroupSerializer}, tags=['groups'])
    def partial_update(self, request, pk=None):
        """Update a group."""
        serializer = GroupUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = update_group(group_id=pk, user=request.user, **serializer.validated_data)

        output = GroupSerializer(get_group_by_id(group_id=group.id))
        return Response({'group': output.data})

    @extend_schema(responses={200: None}, tags=['groups'])
    def destroy(self, request, pk=None):
        """Delete a group."""
        delete_group(group_id=pk, user=request.user)
        return Response({})

    @extend_schema(
        parameters=[OpenApiParameter('master', int, description="ID of the group's master (required)")],
        responses={200: GroupRequestSerializer(many=True)},
        tags=['group requests'],
    )
    @action(detail=True, methods=['get'])
    def requests(self, request, pk=None):
        """List the group's join requests, for its master."""
        filters = GroupRequestListFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        group_requests = list_requests(group_id=pk, master_id=filters.validated_data.get('master'))

        serializer = GroupRequestSerializer(group_requests, many=True)
        return Response({'groupRequests': serializer.data})

    @extend_schema(request=None, responses={201: GroupRequestSerializer}, tags=['group requests'])
    @requests.mapping.post
    def create_request(self, request, pk=None):
        """Ask to join the group as the authenticated user."""
        group_request = create_request(group_id=pk, user=request.user)

        serializer = GroupRequestSerializer(group_request)
        return Response({'groupRequest': serializer.data}, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: GroupRequestSerializer}, tags=['group requests'])
    @action(
        detail=True,
        methods=['post'],
        url_path=r'requests/(?P<request_id>\d+)/accept',
        url_name='accept-request',
    )
    def accept_request(self, request, pk=None, request_id=None):
        """Accept a join request (master only)."""
        group_request = accept_request(request_id=request_id, group_id=pk, accepted_by=request.user)

        serializer = GroupRequestSerializer(group_request)
        return Response({'groupRequest': serializer.data})

    @extend_schema(responses={200: None}, tags=['group requests'])
    @action(
        detail=True,
        methods=['delete'],
        url_path=r'requests/(?P<request_id>\d+)',
        url_name='reject-request',
    )
    def reject_request(self, request, pk=None, request_id=None):
        """Reject a pending join request (master only)."""
        reject_request(request_id=request_id, group_id=pk, rejected_by=request.user)
        return Response({})

    @extend_schema(responses={200: UserPublicSerializer(many=True)}, tags=['players'])
    @action(detail=True, methods=['get'])
    def players(self, request, pk=None):
        """List the group's players."""
        players = get_group_players(group_id=pk)
        return Response({'players': UserPublicSerializer(players, many=True).data})

    @extend_schema(responses={200: None}, tags=['players'])
    @action(
        detail=True,
        methods=['delete'],
        url_path=r'players/(?P<player_id>\d+)',
        url_name='remove-player',
    )
    def remove_player(self, request, pk=None, player_id=None):
        """Remove a player, or leave the group as that player."""
        remove_player(group_id=pk, player_id=player_id, removed_by=request.user)
        return Response({})

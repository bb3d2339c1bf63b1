from rest_framework import serializers
from .models import Group, GroupRequest
from apps.accounts.serializers import UserPublicSerializer


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups, with master and players expanded."""

    master = serializers.IntegerField(source='master_id', read_only=True)
    masterUser = UserPublicSerializer(source='master', read_only=True)
    players = UserPublicSerializer(many=True, read_only=True)

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'schedule',
            'location',
            'chronicle',
            'master',
            'masterUser',
            'players',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class GroupCreateSerializer(serializers.Serializer):
    """Serializer for creating groups."""

    name = serializers.CharField(max_length=200)
    description = serializers.CharField()
    schedule = serializers.CharField(max_length=200)
    location = serializers.CharField(max_length=200)
    chronicle = serializers.CharField()
    master = serializers.IntegerField(min_value=1)


class GroupUpdateSerializer(serializers.Serializer):
    """Serializer for updating groups; every field is optional."""

    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False)
    schedule = serializers.CharField(max_length=200, required=False)
    location = serializers.CharField(max_length=200, required=False)
    chronicle = serializers.CharField(required=False)


class GroupMinimalSerializer(serializers.ModelSerializer):
    """Minimal group info for nested serialization."""

    master = serializers.IntegerField(source='master_id', read_only=True)

    class Meta:
        model = Group
        fields = ['id', 'name', 'master']
        read_only_fields = fields


class GroupRequestSerializer(serializers.ModelSerializer):
    """Join request with its group and user for display."""

    userId = serializers.IntegerField(source='user_id', read_only=True)
    groupId = serializers.IntegerField(source='group_id', read_only=True)
    group = GroupMinimalSerializer(read_only=True)
    user = UserPublicSerializer(read_only=True)

    class Meta:
        model = GroupRequest
        fields = [
            'id',
            'userId',
            'groupId',
            'status',
            'group',
            'user',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class GroupListFilterSerializer(serializers.Serializer):
    """Query string filters for listing groups."""

    user = serializers.IntegerField(required=False, min_value=1)
    text = serializers.CharField(required=False, allow_blank=True)


class GroupRequestListFilterSerializer(serializers.Serializer):
    """Query string filters for listing group requests."""

    master = serializers.IntegerField(required=False, min_value=1)

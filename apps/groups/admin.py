# ==========================================
# apps/groups/admin.py
# ==========================================

from django.contrib import admin
from apps.groups.models import Group, GroupMembership, GroupRequest


class GroupMembershipInline(admin.TabularInline):
    """Inline admin for group players."""
    model = GroupMembership
    extra = 0
    fields = ['user', 'joined_at']
    readonly_fields = ['joined_at']


class GroupRequestInline(admin.TabularInline):
    """Inline admin for join requests."""
    model = GroupRequest
    extra = 0
    fields = ['user', 'status', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Admin interface for Groups."""

    list_display = [
        'name',
        'master',
        'player_count',
        'schedule',
        'location',
        'created_at'
    ]
    list_filter = ['created_at']
    search_fields = ['name', 'description', 'master__email', 'master__username']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [GroupMembershipInline, GroupRequestInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'description', 'master')
        }),
        ('Table', {
            'fields': ('schedule', 'location', 'chronicle')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def player_count(self, obj):
        """Show number of players."""
        return obj.memberships.count()
    player_count.short_description = 'Players'


@admin.register(GroupRequest)
class GroupRequestAdmin(admin.ModelAdmin):
    """Admin interface for join requests."""

    list_display = ['user', 'group', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['user__email', 'user__username', 'group__name']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'group')

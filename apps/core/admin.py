# apps/core/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db.models import Count
from django.utils.html import format_html

from .models import (
    Attachment, Board, BoardMember, Comment, Label, Lane, Subtask, Task,
    User, Workspace, WorkspaceMember,
)

PRIORITY_COLORS = {
    'LOW': '#10B981',  # green
    'MEDIUM': '#3B82F6',  # blue
    'HIGH': '#F97316',  # orange
    'CRITICAL': '#EF4444',  # red
}


def badge(color, text):
    return format_html(
        '<span style="background-color: {}; color: white; '
        'padding: 3px 8px; border-radius: 4px; font-size: 11px;">{}</span>',
        color, text
    )


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Users log in with their email"""

    list_display = ['email', 'name', 'role_badge', 'is_active', 'date_joined']
    list_filter = ['role', 'is_staff', 'is_active', 'date_joined']
    search_fields = ['email', 'name', 'username']
    ordering = ['-date_joined']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Profile', {
            'fields': ('name', 'avatar_url', 'role')
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'username', 'name', 'password1', 'password2'),
        }),
    )

    def role_badge(self, obj):
        color = '#EF4444' if obj.role == 'ADMIN' else '#3B82F6'
        return badge(color, obj.get_role_display())

    role_badge.short_description = 'Role'


class WorkspaceMemberInline(admin.TabularInline):
    model = WorkspaceMember
    extra = 0
    fields = ['user', 'role', 'joined_at']
    readonly_fields = ['joined_at']
    autocomplete_fields = ['user']


class LabelInline(admin.TabularInline):
    model = Label
    extra = 0
    fields = ['name', 'color']


@admin.register(Workspace)
class WorkspaceAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'members_count', 'boards_count', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'description', 'owner__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [WorkspaceMemberInline, LabelInline]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            member_total=Count('members', distinct=True),
            board_total=Count('boards', distinct=True),
        )

    def members_count(self, obj):
        return obj.member_total

    members_count.short_description = 'Members'

    def boards_count(self, obj):
        return obj.board_total

    boards_count.short_description = 'Boards'


@admin.register(Label)
class LabelAdmin(admin.ModelAdmin):
    list_display = ['name', 'workspace', 'color_preview']
    list_filter = ['workspace']
    search_fields = ['name']

    def color_preview(self, obj):
        return format_html(
            '<div style="width: 20px; height: 20px; background-color: {}; '
            'border: 1px solid #ccc; border-radius: 3px;"></div>',
            obj.color
        )

    color_preview.short_description = 'Color'


class BoardMemberInline(admin.TabularInline):
    model = BoardMember
    extra = 0
    fields = ['user', 'role', 'joined_at']
    readonly_fields = ['joined_at']
    autocomplete_fields = ['user']


class LaneInline(admin.TabularInline):
    model = Lane
    extra = 0
    fields = ['name', 'position', 'wip_limit']
    ordering = ['position']


@admin.register(Board)
class BoardAdmin(admin.ModelAdmin):
    """Kanban boards"""

    list_display = ['name', 'workspace', 'lanes_count', 'tasks_count', 'created_at']
    list_filter = ['workspace', 'created_at']
    search_fields = ['name', 'description', 'workspace__name']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [BoardMemberInline, LaneInline]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            lane_total=Count('lanes', distinct=True),
            task_total=Count('tasks', distinct=True),
        )

    def lanes_count(self, obj):
        return obj.lane_total

    lanes_count.short_description = 'Lanes'

    def tasks_count(self, obj):
        return obj.task_total

    tasks_count.short_description = 'Tasks'


class TaskInline(admin.TabularInline):
    model = Task
    extra = 0
    fields = ['title', 'priority', 'position']
    ordering = ['position']
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        """Tasks are created from the API"""
        return False


@admin.register(Lane)
class LaneAdmin(admin.ModelAdmin):
    list_display = ['name', 'board', 'position', 'wip_usage']
    list_filter = ['board__workspace', 'board']
    search_fields = ['name', 'board__name']
    ordering = ['board', 'position']
    inlines = [TaskInline]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(task_total=Count('tasks'))

    def wip_usage(self, obj):
        """Task count against the WIP limit, red once the lane is full"""
        if obj.wip_limit is None:
            return obj.task_total

        if obj.task_total >= obj.wip_limit:
            return format_html(
                '<span style="color: red; font-weight: bold;">{}/{}</span>',
                obj.task_total, obj.wip_limit
            )
        return f"{obj.task_total}/{obj.wip_limit}"

    wip_usage.short_description = 'Tasks/WIP'


class SubtaskInline(admin.TabularInline):
    model = Subtask
    extra = 0
    fields = ['title', 'is_completed', 'position']
    ordering = ['position']


class CommentInline(admin.TabularInline):
    model = Comment
    extra = 0
    fields = ['user', 'content', 'created_at']
    readonly_fields = ['created_at']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['title', 'priority_badge', 'board', 'lane', 'position', 'due_date', 'created_by']
    list_filter = ['priority', 'board', 'created_at']
    search_fields = ['title', 'description']
    date_hierarchy = 'created_at'
    readonly_fields = ['created_at', 'updated_at', 'created_by']

    fieldsets = (
        (None, {
            'fields': ('title', 'description', 'priority', 'due_date', 'estimated_hours')
        }),
        ('Placement', {
            'fields': ('board', 'lane', 'position')
        }),
        ('Metadata', {
            'fields': ('created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    inlines = [SubtaskInline, CommentInline]

    def priority_badge(self, obj):
        return badge(PRIORITY_COLORS.get(obj.priority, '#6B7280'), obj.get_priority_display())

    priority_badge.short_description = 'Priority'


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ['user', 'task', 'content_summary', 'created_at']
    list_filter = ['created_at']
    search_fields = ['content', 'user__email']
    date_hierarchy = 'created_at'
    readonly_fields = ['created_at', 'updated_at']

    def content_summary(self, obj):
        if len(obj.content) > 50:
            return f"{obj.content[:50]}..."
        return obj.content

    content_summary.short_description = 'Comment'


@admin.register(Attachment)
class AttachmentAdmin(admin.ModelAdmin):
    list_display = ['file_name', 'task', 'uploaded_by', 'file_size', 'created_at']
    search_fields = ['file_name', 'task__title']
    readonly_fields = ['created_at']


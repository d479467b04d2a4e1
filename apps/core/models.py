# apps/core/models.py

import uuid

from django.contrib.auth.models import AbstractUser
from django.core.validators import MinValueValidator
from django.db import models


class User(AbstractUser):
    """
    Custom user - logs in with email

    `username` is kept because AbstractUser requires it; the registration
    flow fills it with the email.
    """

    ROLE_CHOICES = [
        ('ADMIN', 'Administrator'),
        ('MEMBER', 'Member'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=100)
    avatar_url = models.URLField(blank=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='MEMBER')

    # === METADATA ===
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        db_table = 'users'

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'avatarUrl': self.avatar_url or None,
            'role': self.role,
            'createdAt': self.date_joined,
            'updatedAt': self.updated_at,
        }

    def to_summary(self):
        """Short form embedded in members, assignees and comments"""
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'avatarUrl': self.avatar_url or None,
        }

    def __str__(self):
        return f"{self.name or self.username} <{self.email}>"


class Workspace(models.Model):
    """Tenant - groups boards, labels and members"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    owner = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name='owned_workspaces'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'workspace'
        ordering = ['-created_at']

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'ownerId': self.owner_id,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }

    def __str__(self):
        return self.name


class WorkspaceMember(models.Model):
    """Membership of a user in a workspace"""

    ROLE_CHOICES = [
        ('OWNER', 'Owner'),
        ('ADMIN', 'Administrator'),
        ('MEMBER', 'Member'),
    ]

    workspace = models.ForeignKey(
        Workspace,
        on_delete=models.CASCADE,
        related_name='members'
    )
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='workspace_memberships'
    )
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='MEMBER')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'workspace_member'
        ordering = ['joined_at']
        unique_together = ['workspace', 'user']

    def to_dict(self):
        return {
            'workspaceId': self.workspace_id,
            'userId': self.user_id,
            'role': self.role,
            'joinedAt': self.joined_at,
            'user': self.user.to_summary(),
        }

    def __str__(self):
        return f"{self.user} @ {self.workspace} ({self.role})"


class Label(models.Model):
    """Workspace-wide label applied to tasks"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    workspace = models.ForeignKey(
        Workspace,
        on_delete=models.CASCADE,
        related_name='labels'
    )
    name = models.CharField(max_length=50)
    color = models.CharField(max_length=7, default='#6B7280')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'label'
        ordering = ['name']
        unique_together = ['workspace', 'name']

    def to_dict(self):
        return {
            'id': self.id,
            'workspaceId': self.workspace_id,
            'name': self.name,
            'color': self.color,
            'createdAt': self.created_at,
        }

    def __str__(self):
        return self.name


class Board(models.Model):
    """Kanban board of a workspace"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    workspace = models.ForeignKey(
        Workspace,
        on_delete=models.CASCADE,
        related_name='boards'
    )
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'board'
        ordering = ['-created_at']

    def to_dict(self):
        return {
            'id': self.id,
            'workspaceId': self.workspace_id,
            'name': self.name,
            'description': self.description,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }

    def __str__(self):
        return f"{self.name} ({self.workspace.name})"


class BoardMember(models.Model):
    """Membership of a user in a board - role decides what they may change"""

    ROLE_CHOICES = [
        ('ADMIN', 'Administrator'),
        ('MEMBER', 'Member'),
        ('VIEWER', 'Viewer'),
    ]

    board = models.ForeignKey(
        Board,
        on_delete=models.CASCADE,
        related_name='members'
    )
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='board_memberships'
    )
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='MEMBER')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'board_member'
        ordering = ['joined_at']
        unique_together = ['board', 'user']

    def to_dict(self):
        return {
            'boardId': self.board_id,
            'userId': self.user_id,
            'role': self.role,
            'joinedAt': self.joined_at,
            'user': self.user.to_summary(),
        }

    def __str__(self):
        return f"{self.user} @ {self.board.name} ({self.role})"


class Lane(models.Model):
    """
    Column of the board

    `position` orders lanes inside the board. It is neither unique nor
    contiguous: deletes leave holes and concurrent appends may collide.
    `wip_limit` null means unlimited.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    board = models.ForeignKey(
        Board,
        on_delete=models.CASCADE,
        related_name='lanes'
    )
    name = models.CharField(max_length=50)
    position = models.IntegerField(default=0)
    wip_limit = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
        help_text="Work In Progress - empty = no limit"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'lane'
        ordering = ['position', 'created_at', 'id']
        indexes = [
            models.Index(fields=['board', 'position'], name='lane_board_position_idx'),
        ]

    def to_dict(self, tasks=None):
        data = {
            'id': self.id,
            'boardId': self.board_id,
            'name': self.name,
            'position': self.position,
            'wipLimit': self.wip_limit,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }
        if tasks is not None:
            data['tasks'] = tasks
        return data

    def __str__(self):
        return f"{self.name} - {self.board.name}"


class Task(models.Model):
    """Card on the board - always lives in a lane of its own board"""

    PRIORITY_CHOICES = [
        ('CRITICAL', 'Critical'),
        ('HIGH', 'High'),
        ('MEDIUM', 'Medium'),
        ('LOW', 'Low'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    board = models.ForeignKey(
        Board,
        on_delete=models.CASCADE,
        related_name='tasks'
    )
    lane = models.ForeignKey(
        Lane,
        on_delete=models.CASCADE,
        related_name='tasks'
    )
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='MEDIUM')
    due_date = models.DateTimeField(null=True, blank=True)
    estimated_hours = models.FloatField(null=True, blank=True)
    position = models.IntegerField(default=0)
    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_tasks'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'task'
        ordering = ['position', 'created_at', 'id']
        indexes = [
            models.Index(fields=['lane', 'position'], name='task_lane_position_idx'),
        ]

    def to_dict(self):
        return {
            'id': self.id,
            'boardId': self.board_id,
            'laneId': self.lane_id,
            'title': self.title,
            'description': self.description,
            'priority': self.priority,
            'dueDate': self.due_date,
            'estimatedHours': self.estimated_hours,
            'position': self.position,
            'createdById': self.created_by_id,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }

    def to_card(self):
        """Board-view form: task plus assignees, labels and counters"""
        data = self.to_dict()
        data['assignees'] = [
            {'userId': a.user_id, 'user': a.user.to_summary()}
            for a in self.assignees.all()
        ]
        data['labels'] = [tl.label.to_dict() for tl in self.labels.all()]
        data['_count'] = {
            'comments': self.comments.count(),
            'attachments': self.attachments.count(),
            'subtasks': self.subtasks.count(),
        }
        return data

    def __str__(self):
        return self.title


class TaskAssignee(models.Model):
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='assignees')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='assigned_tasks')
    assigned_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'task_assignee'
        unique_together = ['task', 'user']


class TaskLabel(models.Model):
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='labels')
    label = models.ForeignKey(Label, on_delete=models.CASCADE, related_name='task_labels')

    class Meta:
        db_table = 'task_label'
        unique_together = ['task', 'label']


class Comment(models.Model):
    """Comment on a task - only the author edits or deletes it"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='comments')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='comments')
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'comment'
        ordering = ['created_at']

    def to_dict(self):
        return {
            'id': self.id,
            'taskId': self.task_id,
            'userId': self.user_id,
            'content': self.content,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
            'user': self.user.to_summary(),
        }

    def __str__(self):
        return f"Comment by {self.user} on {self.created_at:%d/%m/%Y}"


class Attachment(models.Model):
    """Link to an uploaded file - storage itself is external"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='attachments')
    file_name = models.CharField(max_length=255)
    file_url = models.URLField(max_length=500)
    file_size = models.PositiveIntegerField()
    uploaded_by = models.ForeignKey(User, on_delete=models.CASCADE, related_name='attachments')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'attachment'
        ordering = ['-created_at']

    def to_dict(self):
        return {
            'id': self.id,
            'taskId': self.task_id,
            'fileName': self.file_name,
            'fileUrl': self.file_url,
            'fileSize': self.file_size,
            'uploadedBy': self.uploaded_by_id,
            'createdAt': self.created_at,
        }


class Subtask(models.Model):
    """Checklist entry of a task - ordered like tasks inside a lane"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='subtasks')
    title = models.CharField(max_length=200)
    is_completed = models.BooleanField(default=False)
    position = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'subtask'
        ordering = ['position', 'created_at']

    def to_dict(self):
        return {
            'id': self.id,
            'taskId': self.task_id,
            'title': self.title,
            'isCompleted': self.is_completed,
            'position': self.position,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }

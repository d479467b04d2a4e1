# apps/tasks/services.py

"""
Task service - tasks and everything hanging off them

Viewers may read and comment; every other write needs an ADMIN or MEMBER
board role. Position and WIP rules go through the OrderingEngine.
"""

import logging
from typing import Dict, List

from django.db import IntegrityError, transaction

from apps.board.ordering import OrderingEngine
from apps.core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from apps.core.models import (
    Attachment, BoardMember, Comment, Label, Lane, Subtask, Task, TaskAssignee, TaskLabel,
)
from apps.core.permissions import AccessControl

logger = logging.getLogger(__name__)


class TaskService:

    CARD_PREFETCH = ['assignees__user', 'labels__label', 'comments', 'attachments', 'subtasks']

    def __init__(self, ordering: OrderingEngine):
        self._ordering = ordering

    # === TASKS ===

    def create_task(self, user, data: Dict) -> Dict:
        board = AccessControl.get_board(data['board_id'])
        AccessControl.require_task_writer(board, user, 'create tasks')

        lane = Lane.objects.filter(id=data['lane_id'], board=board).first()
        if lane is None:
            raise BadRequestError('Lane not found in this board')

        position = data.get('position')
        if position is None:
            position = self._ordering.append_task_position(lane)

        task = Task.objects.create(
            board=board,
            lane=lane,
            title=data['title'],
            description=data.get('description') or '',
            priority=data.get('priority') or 'MEDIUM',
            due_date=data.get('due_date'),
            estimated_hours=data.get('estimated_hours'),
            position=position,
            created_by=user,
        )
        return self._card(task)

    def list_tasks(self, user, board_id=None, lane_id=None) -> List[Dict]:
        tasks = (
            Task.objects
            .filter(board__members__user=user)
            .prefetch_related(*self.CARD_PREFETCH)
        )
        if board_id:
            tasks = tasks.filter(board_id=board_id)
        if lane_id:
            tasks = tasks.filter(lane_id=lane_id)

        return [task.to_card() for task in tasks]

    def get_task(self, task_id, user) -> Dict:
        """Full task: card fields plus comments, attachments and subtasks"""
        task, _ = self._task_access(task_id, user)

        data = self._card(task)
        data['createdBy'] = task.created_by.to_summary() if task.created_by else None
        data['comments'] = [c.to_dict() for c in task.comments.select_related('user')]
        data['attachments'] = [a.to_dict() for a in task.attachments.all()]
        data['subtasks'] = [s.to_dict() for s in task.subtasks.all()]
        return data

    def update_task(self, task_id, user, data: Dict) -> Dict:
        task, _ = self._task_access(task_id, user, 'update tasks')

        if data.get('title'):
            task.title = data['title']
        if 'description' in data:
            task.description = data['description'] or ''
        if data.get('priority'):
            task.priority = data['priority']
        if 'due_date' in data:
            task.due_date = data['due_date']
        if 'estimated_hours' in data:
            task.estimated_hours = data['estimated_hours']
        if data.get('position') is not None:
            task.position = data['position']
        task.save()

        return self._card(task)

    def delete_task(self, task_id, user) -> Dict:
        task, _ = self._task_access(task_id, user, 'delete tasks')
        task.delete()
        return {'message': 'Task deleted successfully'}

    def move_task(self, task_id, user, lane_id, position: int) -> Dict:
        task, _ = self._task_access(task_id, user, 'move tasks')
        self._ordering.move_task(task, lane_id, position)
        return self._card(task)

    # === ASSIGNEES ===

    def assign_user(self, task_id, user, assignee_id) -> Dict:
        task, _ = self._task_access(task_id, user, 'assign users')

        membership = (
            BoardMember.objects
            .select_related('user')
            .filter(board_id=task.board_id, user_id=assignee_id)
            .first()
        )
        if membership is None:
            raise BadRequestError('User is not a member of this board')

        try:
            with transaction.atomic():
                TaskAssignee.objects.create(task=task, user=membership.user)
        except IntegrityError:
            raise ConflictError('User is already assigned to this task')

        return {'message': 'User assigned successfully'}

    def unassign_user(self, task_id, user, assignee_id) -> Dict:
        task, _ = self._task_access(task_id, user, 'unassign users')

        deleted, _ = TaskAssignee.objects.filter(task=task, user_id=assignee_id).delete()
        if not deleted:
            raise NotFoundError('User is not assigned to this task')

        return {'message': 'User unassigned successfully'}

    # === LABELS ===

    def add_label(self, task_id, user, label_id) -> Dict:
        task, _ = self._task_access(task_id, user, 'add labels')

        label = Label.objects.filter(id=label_id, workspace_id=task.board.workspace_id).first()
        if label is None:
            raise BadRequestError('Label not found in this workspace')

        try:
            with transaction.atomic():
                TaskLabel.objects.create(task=task, label=label)
        except IntegrityError:
            raise ConflictError('Label already added to this task')

        return {'message': 'Label added successfully'}

    def remove_label(self, task_id, user, label_id) -> Dict:
        task, _ = self._task_access(task_id, user, 'remove labels')

        deleted, _ = TaskLabel.objects.filter(task=task, label_id=label_id).delete()
        if not deleted:
            raise NotFoundError('Label not found on this task')

        return {'message': 'Label removed successfully'}

    # === COMMENTS ===

    def create_comment(self, task_id, user, content: str) -> Dict:
        task, _ = self._task_access(task_id, user)
        comment = Comment.objects.create(task=task, user=user, content=content)
        return comment.to_dict()

    def update_comment(self, task_id, comment_id, user, content: str) -> Dict:
        comment = self._get_comment(task_id, comment_id)
        if comment.user_id != user.id:
            raise ForbiddenError('You can only edit your own comments')

        comment.content = content
        comment.save()
        return comment.to_dict()

    def delete_comment(self, task_id, comment_id, user) -> Dict:
        comment = self._get_comment(task_id, comment_id)
        if comment.user_id != user.id:
            raise ForbiddenError('You can only delete your own comments')

        comment.delete()
        return {'message': 'Comment deleted successfully'}

    # === ATTACHMENTS ===

    def create_attachment(self, task_id, user, data: Dict) -> Dict:
        task, _ = self._task_access(task_id, user, 'add attachments')
        attachment = Attachment.objects.create(
            task=task,
            file_name=data['file_name'],
            file_url=data['file_url'],
            file_size=data['file_size'],
            uploaded_by=user,
        )
        return attachment.to_dict()

    def delete_attachment(self, task_id, attachment_id, user) -> Dict:
        task, membership = self._task_access(task_id, user)

        attachment = Attachment.objects.filter(id=attachment_id, task=task).first()
        if attachment is None:
            raise NotFoundError('Attachment not found')

        if attachment.uploaded_by_id != user.id and membership.role != 'ADMIN':
            raise ForbiddenError('You can only delete your own attachments')

        attachment.delete()
        return {'message': 'Attachment deleted successfully'}

    # === SUBTASKS ===

    def create_subtask(self, task_id, user, data: Dict) -> Dict:
        task, _ = self._task_access(task_id, user, 'create subtasks')

        position = data.get('position')
        if position is None:
            position = self._ordering.append_subtask_position(task)

        subtask = Subtask.objects.create(task=task, title=data['title'], position=position)
        return subtask.to_dict()

    def update_subtask(self, task_id, subtask_id, user, data: Dict) -> Dict:
        task, _ = self._task_access(task_id, user, 'update subtasks')
        subtask = self._get_subtask(task, subtask_id)

        if data.get('title'):
            subtask.title = data['title']
        if data.get('is_completed') is not None:
            subtask.is_completed = data['is_completed']
        if data.get('position') is not None:
            subtask.position = data['position']
        subtask.save()

        return subtask.to_dict()

    def delete_subtask(self, task_id, subtask_id, user) -> Dict:
        task, _ = self._task_access(task_id, user, 'delete subtasks')
        self._get_subtask(task, subtask_id).delete()
        return {'message': 'Subtask deleted successfully'}

    # =================== PRIVATE METHODS ===================

    def _task_access(self, task_id, user, write_action: str = None):
        """
        Task plus the caller's board membership

        With `write_action` viewers are refused, e.g. 'Viewers cannot move tasks'.
        """
        task = Task.objects.select_related('board', 'created_by').filter(id=task_id).first()
        if task is None:
            raise NotFoundError('Task not found')

        membership = AccessControl.board_membership(task.board, user)
        if membership is None:
            raise ForbiddenError('You do not have access to this task')

        if write_action and membership.role == 'VIEWER':
            raise ForbiddenError(f'Viewers cannot {write_action}')

        return task, membership

    def _get_comment(self, task_id, comment_id) -> Comment:
        comment = Comment.objects.select_related('user').filter(id=comment_id, task_id=task_id).first()
        if comment is None:
            raise NotFoundError('Comment not found')
        return comment

    def _get_subtask(self, task, subtask_id) -> Subtask:
        subtask = Subtask.objects.filter(id=subtask_id, task=task).first()
        if subtask is None:
            raise NotFoundError('Subtask not found')
        return subtask

    def _card(self, task) -> Dict:
        fresh = Task.objects.prefetch_related(*self.CARD_PREFETCH).get(pk=task.pk)
        return fresh.to_card()

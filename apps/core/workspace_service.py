# apps/core/workspace_service.py

"""Workspaces, their members and their labels"""

import logging
from typing import Dict, List

from django.db import IntegrityError, transaction
from django.db.models import Count

from .exceptions import BadRequestError, ConflictError, NotFoundError
from .models import Label, User, Workspace, WorkspaceMember
from .permissions import AccessControl

logger = logging.getLogger(__name__)


class WorkspaceService:

    def create_workspace(self, user, data: Dict) -> Dict:
        with transaction.atomic():
            workspace = Workspace.objects.create(
                name=data['name'],
                description=data.get('description', ''),
                owner=user,
            )
            WorkspaceMember.objects.create(workspace=workspace, user=user, role='OWNER')

        logger.info("Workspace %s created by %s", workspace.id, user.email)
        return self._detail(workspace)

    def list_workspaces(self, user) -> List[Dict]:
        workspaces = (
            Workspace.objects
            .annotate(board_count=Count('boards', distinct=True),
                      member_count=Count('members', distinct=True))
            .filter(members__user=user)
            .select_related('owner')
            .order_by('-created_at')
        )

        result = []
        for workspace in workspaces:
            data = workspace.to_dict()
            data['owner'] = workspace.owner.to_summary()
            data['_count'] = {
                'boards': workspace.board_count,
                'members': workspace.member_count,
            }
            result.append(data)
        return result

    def get_workspace(self, workspace_id, user) -> Dict:
        workspace = AccessControl.get_workspace(workspace_id)
        AccessControl.require_workspace_member(workspace, user)

        data = self._detail(workspace)
        data['owner'] = workspace.owner.to_summary()
        data['boards'] = []
        boards = (
            workspace.boards
            .annotate(task_count=Count('tasks', distinct=True),
                      lane_count=Count('lanes', distinct=True))
            .order_by('-created_at')
        )
        for board in boards:
            entry = board.to_dict()
            entry['_count'] = {'tasks': board.task_count, 'lanes': board.lane_count}
            data['boards'].append(entry)
        return data

    def update_workspace(self, workspace_id, user, data: Dict) -> Dict:
        workspace = AccessControl.get_workspace(workspace_id)
        AccessControl.require_workspace_role(workspace, user, AccessControl.WORKSPACE_MANAGERS)

        if data.get('name'):
            workspace.name = data['name']
        if 'description' in data:
            workspace.description = data['description'] or ''
        workspace.save()

        return self._detail(workspace)

    def delete_workspace(self, workspace_id, user) -> Dict:
        workspace = AccessControl.get_workspace(workspace_id)
        AccessControl.require_workspace_role(workspace, user, ['OWNER'])

        workspace.delete()
        logger.info("Workspace %s deleted by %s", workspace_id, user.email)
        return {'message': 'Workspace deleted successfully'}

    # === MEMBERS ===

    def get_members(self, workspace_id, user) -> List[Dict]:
        workspace = AccessControl.get_workspace(workspace_id)
        AccessControl.require_workspace_member(workspace, user)
        return [m.to_dict() for m in workspace.members.select_related('user')]

    def add_member(self, workspace_id, user, data: Dict) -> Dict:
        workspace = AccessControl.get_workspace(workspace_id)
        AccessControl.require_workspace_role(workspace, user, AccessControl.WORKSPACE_MANAGERS)

        new_user = self._get_user(data['user_id'])
        if AccessControl.workspace_membership(workspace, new_user) is not None:
            raise ConflictError('User is already a member of this workspace')

        try:
            with transaction.atomic():
                member = WorkspaceMember.objects.create(
                    workspace=workspace,
                    user=new_user,
                    role=data.get('role') or 'MEMBER',
                )
        except IntegrityError:
            raise ConflictError('User is already a member of this workspace')

        return member.to_dict()

    def remove_member(self, workspace_id, user, member_user_id) -> Dict:
        workspace = AccessControl.get_workspace(workspace_id)
        AccessControl.require_workspace_role(workspace, user, AccessControl.WORKSPACE_MANAGERS)

        member = self._get_member(workspace, member_user_id)
        if member.role == 'OWNER':
            raise BadRequestError('Cannot remove workspace owner')

        member.delete()
        return {'message': 'Member removed successfully'}

    def update_member_role(self, workspace_id, user, member_user_id, role: str) -> Dict:
        workspace = AccessControl.get_workspace(workspace_id)
        AccessControl.require_workspace_role(workspace, user, ['OWNER'])

        member = self._get_member(workspace, member_user_id)
        member.role = role
        member.save(update_fields=['role'])
        return member.to_dict()

    # === LABELS ===

    def get_labels(self, workspace_id, user) -> List[Dict]:
        workspace = AccessControl.get_workspace(workspace_id)
        AccessControl.require_workspace_member(workspace, user)
        return [label.to_dict() for label in workspace.labels.all()]

    def create_label(self, workspace_id, user, data: Dict) -> Dict:
        workspace = AccessControl.get_workspace(workspace_id)
        AccessControl.require_workspace_role(workspace, user, AccessControl.WORKSPACE_MANAGERS)

        if workspace.labels.filter(name=data['name']).exists():
            raise ConflictError('Label with this name already exists in this workspace')

        label = Label.objects.create(
            workspace=workspace,
            name=data['name'],
            color=data.get('color') or Label._meta.get_field('color').default,
        )
        return label.to_dict()

    # =================== PRIVATE METHODS ===================

    def _detail(self, workspace) -> Dict:
        data = workspace.to_dict()
        data['members'] = [m.to_dict() for m in workspace.members.select_related('user')]
        return data

    def _get_user(self, user_id) -> User:
        try:
            return User.objects.get(id=user_id)
        except User.DoesNotExist:
            raise NotFoundError('User not found')

    def _get_member(self, workspace, member_user_id) -> WorkspaceMember:
        member = (
            WorkspaceMember.objects
            .select_related('user')
            .filter(workspace=workspace, user_id=member_user_id)
            .first()
        )
        if member is None:
            raise NotFoundError('Member not found in this workspace')
        return member

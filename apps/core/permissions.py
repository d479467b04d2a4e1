# apps/core/permissions.py

from functools import wraps

from .exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from .models import Board, BoardMember, Workspace, WorkspaceMember


class AccessControl:
    """
    Membership checks for workspaces and boards

    Every check either returns the membership row or raises, so services
    can call them as guards before touching positions or counts.
    """

    WORKSPACE_MANAGERS = ['OWNER', 'ADMIN']
    BOARD_EDITORS = ['ADMIN', 'MEMBER']

    # === WORKSPACE ===

    @staticmethod
    def get_workspace(workspace_id):
        try:
            return Workspace.objects.get(id=workspace_id)
        except Workspace.DoesNotExist:
            raise NotFoundError('Workspace not found')

    @staticmethod
    def workspace_membership(workspace, user):
        """Membership row of `user` in `workspace`, or None"""
        return WorkspaceMember.objects.filter(workspace=workspace, user=user).first()

    @staticmethod
    def require_workspace_member(workspace, user) -> WorkspaceMember:
        membership = AccessControl.workspace_membership(workspace, user)
        if membership is None:
            raise ForbiddenError('You do not have access to this workspace')
        return membership

    @staticmethod
    def require_workspace_role(workspace, user, roles) -> WorkspaceMember:
        membership = AccessControl.require_workspace_member(workspace, user)
        if membership.role not in roles:
            raise ForbiddenError('You do not have permission to perform this action')
        return membership

    # === BOARD ===

    @staticmethod
    def get_board(board_id):
        try:
            return Board.objects.select_related('workspace').get(id=board_id)
        except Board.DoesNotExist:
            raise NotFoundError('Board not found')

    @staticmethod
    def board_membership(board, user):
        return BoardMember.objects.filter(board=board, user=user).first()

    @staticmethod
    def require_board_member(board, user) -> BoardMember:
        membership = AccessControl.board_membership(board, user)
        if membership is None:
            raise ForbiddenError('You do not have access to this board')
        return membership

    @staticmethod
    def require_board_role(board, user, roles) -> BoardMember:
        membership = AccessControl.require_board_member(board, user)
        if membership.role not in roles:
            raise ForbiddenError('You do not have permission to perform this action')
        return membership

    @staticmethod
    def require_board_admin(board, user) -> BoardMember:
        return AccessControl.require_board_role(board, user, ['ADMIN'])

    @staticmethod
    def require_board_editor(board, user) -> BoardMember:
        return AccessControl.require_board_role(board, user, AccessControl.BOARD_EDITORS)

    @staticmethod
    def require_task_writer(board, user, action: str) -> BoardMember:
        """Any board member except viewers - `action` names the refused verb"""
        membership = AccessControl.require_board_member(board, user)
        if membership.role == 'VIEWER':
            raise ForbiddenError(f'Viewers cannot {action}')
        return membership


# Decorators for views

def token_required(view_func):
    """Rejects requests whose bearer token did not resolve to a user"""

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        if not request.user.is_authenticated:
            raise UnauthorizedError(getattr(request, 'auth_error', None) or 'No token provided')
        return view_func(request, *args, **kwargs)

    return wrapped_view

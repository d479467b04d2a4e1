# apps/board/services.py

"""
Board service - boards, board members and lanes

Every public method receives the acting user, checks membership through
AccessControl, and only then delegates positions, WIP limits and deletes
to the OrderingEngine.
"""

import logging
from typing import Dict, List

from django.db import IntegrityError, transaction
from django.db.models import Count, Prefetch

from apps.core.exceptions import ConflictError, NotFoundError
from apps.core.models import Board, BoardMember, Lane, Task, User
from apps.core.permissions import AccessControl

from . import events
from .ordering import OrderingEngine

logger = logging.getLogger(__name__)


class BoardService:

    def __init__(self, ordering: OrderingEngine):
        self._ordering = ordering

    # === BOARDS ===

    def create_board(self, user, data: Dict) -> Dict:
        workspace = AccessControl.get_workspace(data['workspace_id'])
        AccessControl.require_workspace_member(workspace, user)

        with transaction.atomic():
            board = Board.objects.create(
                workspace=workspace,
                name=data['name'],
                description=data.get('description') or '',
            )
            BoardMember.objects.create(board=board, user=user, role='ADMIN')

            if data.get('create_default_lanes', True):
                self._ordering.bootstrap_default_lanes(board)

        logger.info("Board %s created in workspace %s by %s", board.id, workspace.id, user.email)
        return self._summary(board)

    def list_boards(self, user, workspace_id=None) -> List[Dict]:
        boards = (
            Board.objects
            .annotate(task_count=Count('tasks', distinct=True),
                      member_count=Count('members', distinct=True))
            .filter(members__user=user)
            .select_related('workspace')
            .prefetch_related(Prefetch(
                'lanes',
                queryset=(
                    Lane.objects
                    .annotate(task_count=Count('tasks'))
                    .order_by('position', 'created_at', 'id')
                ),
            ))
            .order_by('-created_at')
        )
        if workspace_id:
            boards = boards.filter(workspace_id=workspace_id)

        result = []
        for board in boards:
            data = board.to_dict()
            data['workspace'] = {'id': board.workspace.id, 'name': board.workspace.name}
            data['lanes'] = [
                dict(lane.to_dict(), _count={'tasks': lane.task_count})
                for lane in board.lanes.all()
            ]
            data['_count'] = {'tasks': board.task_count, 'members': board.member_count}
            result.append(data)
        return result

    def get_board(self, board_id, user) -> Dict:
        """Board with its lanes, each carrying its ordered task cards"""
        board = AccessControl.get_board(board_id)
        AccessControl.require_board_member(board, user)

        tasks = Task.objects.prefetch_related(
            'assignees__user', 'labels__label', 'comments', 'attachments', 'subtasks',
        ).order_by('position', 'created_at', 'id')
        lanes = (
            board.lanes
            .prefetch_related(Prefetch('tasks', queryset=tasks))
            .order_by('position', 'created_at', 'id')
        )

        data = board.to_dict()
        data['workspace'] = {'id': board.workspace.id, 'name': board.workspace.name}
        data['lanes'] = [
            lane.to_dict(tasks=[task.to_card() for task in lane.tasks.all()])
            for lane in lanes
        ]
        data['members'] = self._members(board)
        return data

    def update_board(self, board_id, user, data: Dict) -> Dict:
        board = AccessControl.get_board(board_id)
        AccessControl.require_board_admin(board, user)

        if data.get('name'):
            board.name = data['name']
        if 'description' in data:
            board.description = data['description'] or ''
        board.save()

        return self._summary(board)

    def delete_board(self, board_id, user) -> Dict:
        board = AccessControl.get_board(board_id)
        AccessControl.require_board_admin(board, user)

        board.delete()
        logger.info("Board %s deleted by %s", board_id, user.email)
        return {'message': 'Board deleted successfully'}

    # === MEMBERS ===

    def get_members(self, board_id, user) -> List[Dict]:
        board = AccessControl.get_board(board_id)
        AccessControl.require_board_member(board, user)
        return self._members(board)

    def add_member(self, board_id, user, data: Dict) -> Dict:
        board = AccessControl.get_board(board_id)
        AccessControl.require_board_admin(board, user)

        try:
            new_user = User.objects.get(id=data['user_id'])
        except User.DoesNotExist:
            raise NotFoundError('User not found')

        if AccessControl.board_membership(board, new_user) is not None:
            raise ConflictError('User is already a member of this board')

        try:
            with transaction.atomic():
                member = BoardMember.objects.create(
                    board=board,
                    user=new_user,
                    role=data.get('role') or 'MEMBER',
                )
        except IntegrityError:
            raise ConflictError('User is already a member of this board')

        return member.to_dict()

    def remove_member(self, board_id, user, member_user_id) -> Dict:
        board = AccessControl.get_board(board_id)
        AccessControl.require_board_admin(board, user)

        deleted, _ = BoardMember.objects.filter(board=board, user_id=member_user_id).delete()
        if not deleted:
            raise NotFoundError('Member not found in this board')

        return {'message': 'Member removed successfully'}

    # === LANES ===

    def create_lane(self, board_id, user, data: Dict) -> Dict:
        board = AccessControl.get_board(board_id)
        AccessControl.require_board_editor(board, user)

        position = data.get('position')
        if position is None:
            position = self._ordering.append_lane_position(board)

        lane = Lane.objects.create(
            board=board,
            name=data['name'],
            position=position,
            wip_limit=data.get('wip_limit'),
        )
        return lane.to_dict()

    def update_lane(self, board_id, lane_id, user, data: Dict) -> Dict:
        board = AccessControl.get_board(board_id)
        AccessControl.require_board_editor(board, user)

        lane = self._get_lane(board, lane_id)

        if data.get('name'):
            lane.name = data['name']
        if data.get('position') is not None:
            lane.position = data['position']
        if 'wip_limit' in data:
            # Lowering the limit below the current count is allowed
            lane.wip_limit = data['wip_limit']
        lane.save()

        return lane.to_dict()

    def delete_lane(self, board_id, lane_id, user) -> Dict:
        board = AccessControl.get_board(board_id)
        AccessControl.require_board_admin(board, user)

        lane = self._get_lane(board, lane_id)
        self._ordering.delete_lane(lane)
        return {'message': 'Lane deleted successfully'}

    def reorder_lanes(self, board_id, user, assignments) -> Dict:
        board = AccessControl.get_board(board_id)
        AccessControl.require_board_editor(board, user)

        self._ordering.reorder_lanes(board, assignments)

        if assignments:
            events.publish_on_commit(board.id, events.LANES_REORDERED, {
                'lanes': [{'id': lane_id, 'position': pos} for lane_id, pos in assignments],
            })
        return {'message': 'Lanes reordered successfully'}

    # =================== PRIVATE METHODS ===================

    def _get_lane(self, board, lane_id) -> Lane:
        lane = Lane.objects.filter(id=lane_id, board=board).first()
        if lane is None:
            raise NotFoundError('Lane not found in this board')
        return lane

    def _members(self, board) -> List[Dict]:
        return [m.to_dict() for m in board.members.select_related('user')]

    def _summary(self, board) -> Dict:
        data = board.to_dict()
        data['lanes'] = [lane.to_dict() for lane in board.lanes.all()]
        data['members'] = self._members(board)
        return data

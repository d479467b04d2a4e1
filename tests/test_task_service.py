"""Tests for TaskService."""

import uuid

import pytest

from apps.core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from apps.core.models import Lane, Task


@pytest.mark.django_db
class TestCreateTask:
    """Tests for task creation."""

    def test_defaults(self, lanes, make_task, owner):
        card = make_task(lanes['To Do'], 'Write docs')

        assert card['title'] == 'Write docs'
        assert card['priority'] == 'MEDIUM'
        assert card['laneId'] == lanes['To Do'].id
        assert card['position'] == 0

    def test_lane_from_other_board(self, task_service, board_service, board, workspace, owner):
        other = board_service.create_board(owner, {'workspace_id': workspace['id'], 'name': 'Other'})
        foreign = Lane.objects.filter(board_id=other['id']).first()

        with pytest.raises(BadRequestError) as excinfo:
            task_service.create_task(owner, {
                'board_id': board['id'], 'lane_id': foreign.id, 'title': 'X',
            })
        assert excinfo.value.message == 'Lane not found in this board'

    def test_viewer_cannot_create(self, task_service, board, lanes, viewer):
        with pytest.raises(ForbiddenError) as excinfo:
            task_service.create_task(viewer, {
                'board_id': board['id'], 'lane_id': lanes['To Do'].id, 'title': 'X',
            })
        assert excinfo.value.message == 'Viewers cannot create tasks'

    def test_unknown_board(self, task_service, lanes, owner):
        with pytest.raises(NotFoundError):
            task_service.create_task(owner, {
                'board_id': uuid.uuid4(), 'lane_id': lanes['To Do'].id, 'title': 'X',
            })


@pytest.mark.django_db
class TestMoveTask:
    """Moves go through the WIP check."""

    def test_in_progress_limit_scenario(self, task_service, board_service, board, lanes, make_task, owner):
        board_service.update_lane(board['id'], lanes['In Progress'].id, owner, {'wip_limit': 2})
        make_task(lanes['In Progress'], 'A')
        make_task(lanes['In Progress'], 'B')
        c = make_task(lanes['To Do'], 'C')

        with pytest.raises(BadRequestError) as excinfo:
            task_service.move_task(c['id'], owner, lanes['In Progress'].id, 0)

        assert excinfo.value.message == 'Cannot move task. Lane has reached WIP limit of 2'
        assert Task.objects.get(id=c['id']).lane_id == lanes['To Do'].id

    def test_move_returns_card(self, task_service, lanes, make_task, member):
        card = make_task(lanes['To Do'])

        moved = task_service.move_task(card['id'], member, lanes['Review'].id, 3)

        assert moved['laneId'] == lanes['Review'].id
        assert moved['position'] == 3

    def test_viewer_forbidden_before_wip_check(self, task_service, lanes, make_task, viewer):
        card = make_task(lanes['To Do'])

        with pytest.raises(ForbiddenError) as excinfo:
            task_service.move_task(card['id'], viewer, lanes['Review'].id, 0)

        assert excinfo.value.message == 'Viewers cannot move tasks'
        assert Task.objects.get(id=card['id']).lane_id == lanes['To Do'].id

    def test_outsider_forbidden(self, task_service, lanes, make_task, outsider):
        card = make_task(lanes['To Do'])
        with pytest.raises(ForbiddenError):
            task_service.move_task(card['id'], outsider, lanes['Review'].id, 0)

    def test_unknown_task(self, task_service, lanes, owner):
        with pytest.raises(NotFoundError):
            task_service.move_task(uuid.uuid4(), owner, lanes['Review'].id, 0)


@pytest.mark.django_db
class TestTaskDetail:
    """Tests for reads, updates and deletes."""

    def test_get_task_includes_children(self, task_service, lanes, make_task, owner):
        card = make_task(lanes['To Do'])
        task_service.create_comment(card['id'], owner, 'Looks good')
        task_service.create_subtask(card['id'], owner, {'title': 'Step one'})

        task = task_service.get_task(card['id'], owner)

        assert [c['content'] for c in task['comments']] == ['Looks good']
        assert [s['title'] for s in task['subtasks']] == ['Step one']
        assert task['attachments'] == []

    def test_update_partial(self, task_service, lanes, make_task, owner):
        card = make_task(lanes['To Do'], description='keep me')

        updated = task_service.update_task(card['id'], owner, {'priority': 'HIGH'})

        assert updated['priority'] == 'HIGH'
        assert Task.objects.get(id=card['id']).description == 'keep me'

    def test_list_filtered_by_lane(self, task_service, board, lanes, make_task, owner):
        make_task(lanes['To Do'], 'A')
        make_task(lanes['Done'], 'B')

        tasks = task_service.list_tasks(owner, board_id=board['id'], lane_id=lanes['Done'].id)

        assert [t['title'] for t in tasks] == ['B']

    def test_list_hides_other_boards(self, task_service, lanes, make_task, outsider):
        make_task(lanes['To Do'])
        assert task_service.list_tasks(outsider) == []

    def test_delete(self, task_service, lanes, make_task, member):
        card = make_task(lanes['To Do'])
        task_service.delete_task(card['id'], member)
        assert not Task.objects.filter(id=card['id']).exists()


@pytest.mark.django_db
class TestAssigneesAndLabels:
    """Tests for assignees and labels."""

    def test_assign_board_member(self, task_service, lanes, make_task, owner, member):
        card = make_task(lanes['To Do'])

        task_service.assign_user(card['id'], owner, member.id)

        assignees = task_service.get_task(card['id'], owner)['assignees']
        assert [a['userId'] for a in assignees] == [member.id]

    def test_assign_non_member(self, task_service, lanes, make_task, owner, outsider):
        card = make_task(lanes['To Do'])
        with pytest.raises(BadRequestError):
            task_service.assign_user(card['id'], owner, outsider.id)

    def test_assign_twice(self, task_service, lanes, make_task, owner, member):
        card = make_task(lanes['To Do'])
        task_service.assign_user(card['id'], owner, member.id)
        with pytest.raises(ConflictError):
            task_service.assign_user(card['id'], owner, member.id)

    def test_unassign_missing(self, task_service, lanes, make_task, owner, member):
        card = make_task(lanes['To Do'])
        with pytest.raises(NotFoundError):
            task_service.unassign_user(card['id'], owner, member.id)

    def test_label_from_workspace(self, task_service, workspace_service, workspace, lanes, make_task, owner):
        label = workspace_service.create_label(workspace['id'], owner, {'name': 'bug', 'color': '#FF0000'})
        card = make_task(lanes['To Do'])

        task_service.add_label(card['id'], owner, label['id'])

        with pytest.raises(ConflictError):
            task_service.add_label(card['id'], owner, label['id'])
        task_service.remove_label(card['id'], owner, label['id'])

    def test_label_from_other_workspace(self, task_service, workspace_service, lanes, make_task, owner):
        other = workspace_service.create_workspace(owner, {'name': 'Other'})
        label = workspace_service.create_label(other['id'], owner, {'name': 'bug'})
        card = make_task(lanes['To Do'])

        with pytest.raises(BadRequestError):
            task_service.add_label(card['id'], owner, label['id'])


@pytest.mark.django_db
class TestCommentsAttachmentsSubtasks:
    """Tests for the records hanging off a task."""

    def test_viewer_can_comment(self, task_service, lanes, make_task, viewer):
        card = make_task(lanes['To Do'])
        comment = task_service.create_comment(card['id'], viewer, 'Question')
        assert comment['content'] == 'Question'

    def test_only_author_edits_comment(self, task_service, lanes, make_task, owner, member):
        card = make_task(lanes['To Do'])
        comment = task_service.create_comment(card['id'], member, 'Mine')

        with pytest.raises(ForbiddenError):
            task_service.update_comment(card['id'], comment['id'], owner, 'Hijacked')
        with pytest.raises(ForbiddenError):
            task_service.delete_comment(card['id'], comment['id'], owner)

        assert task_service.update_comment(card['id'], comment['id'], member, 'Edited')['content'] == 'Edited'

    def test_board_admin_deletes_any_attachment(self, task_service, lanes, make_task, owner, member):
        card = make_task(lanes['To Do'])
        attachment = task_service.create_attachment(card['id'], member, {
            'file_name': 'spec.pdf', 'file_url': 'https://files.example.com/spec.pdf', 'file_size': 1024,
        })

        result = task_service.delete_attachment(card['id'], attachment['id'], owner)

        assert result == {'message': 'Attachment deleted successfully'}

    def test_member_cannot_delete_others_attachment(self, task_service, lanes, make_task, owner, member):
        card = make_task(lanes['To Do'])
        attachment = task_service.create_attachment(card['id'], owner, {
            'file_name': 'a.png', 'file_url': 'https://files.example.com/a.png', 'file_size': 10,
        })

        with pytest.raises(ForbiddenError):
            task_service.delete_attachment(card['id'], attachment['id'], member)

    def test_subtask_update_and_delete(self, task_service, lanes, make_task, owner):
        card = make_task(lanes['To Do'])
        subtask = task_service.create_subtask(card['id'], owner, {'title': 'Step'})

        updated = task_service.update_subtask(card['id'], subtask['id'], owner, {'is_completed': True})
        assert updated['isCompleted'] is True

        task_service.delete_subtask(card['id'], subtask['id'], owner)
        with pytest.raises(NotFoundError):
            task_service.update_subtask(card['id'], subtask['id'], owner, {'title': 'Gone'})

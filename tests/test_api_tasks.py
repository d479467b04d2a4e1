"""HTTP tests for tasks and moves."""

import pytest

from apps.core.models import Task


@pytest.mark.django_db
class TestTaskEndpoints:
    """Tests for /api/tasks."""

    def test_create_appends_position(self, owner_api, board, lanes):
        payload = {'boardId': str(board['id']), 'laneId': str(lanes['To Do'].id), 'title': 'First'}

        first = owner_api.post('/api/tasks', payload).json()
        second = owner_api.post('/api/tasks', dict(payload, title='Second')).json()

        assert first['data']['position'] == 0
        assert second['data']['position'] == 1
        assert second['message'] == 'Task created successfully'

    def test_create_in_foreign_lane(self, owner_api, board_service, board, workspace, owner):
        other = board_service.create_board(owner, {'workspace_id': workspace['id'], 'name': 'Other'})
        foreign_lane_id = other['lanes'][0]['id']

        response = owner_api.post('/api/tasks', {
            'boardId': str(board['id']), 'laneId': str(foreign_lane_id), 'title': 'X',
        })

        assert response.status_code == 400
        assert response.json()['message'] == 'Lane not found in this board'

    def test_create_invalid_priority(self, owner_api, board, lanes):
        response = owner_api.post('/api/tasks', {
            'boardId': str(board['id']), 'laneId': str(lanes['To Do'].id), 'title': 'X', 'priority': 'ASAP',
        })
        assert response.status_code == 400

    def test_negative_position_rejected(self, owner_api, board, lanes):
        response = owner_api.post('/api/tasks', {
            'boardId': str(board['id']), 'laneId': str(lanes['To Do'].id), 'title': 'X', 'position': -1,
        })
        assert response.status_code == 400

    def test_list_by_board(self, owner_api, board, lanes, make_task):
        make_task(lanes['To Do'], 'A')

        response = owner_api.get(f"/api/tasks?boardId={board['id']}")

        assert [t['title'] for t in response.json()['data']] == ['A']


@pytest.mark.django_db
class TestMoveEndpoint:
    """Tests for POST /api/tasks/<id>/move."""

    def test_wip_limit_reached(self, owner_api, board, lanes, make_task):
        owner_api.put(f"/api/boards/{board['id']}/lanes/{lanes['In Progress'].id}", {'wipLimit': 2})
        make_task(lanes['In Progress'], 'A')
        make_task(lanes['In Progress'], 'B')
        c = make_task(lanes['To Do'], 'C')

        response = owner_api.post(f"/api/tasks/{c['id']}/move", {
            'laneId': str(lanes['In Progress'].id), 'position': 0,
        })

        assert response.status_code == 400
        assert response.json() == {
            'success': False,
            'error': 'BadRequestError',
            'message': 'Cannot move task. Lane has reached WIP limit of 2',
        }
        assert Task.objects.get(id=c['id']).lane_id == lanes['To Do'].id

    def test_move(self, owner_api, lanes, make_task):
        card = make_task(lanes['To Do'])

        response = owner_api.post(f"/api/tasks/{card['id']}/move", {
            'laneId': str(lanes['Review'].id), 'position': 0,
        })

        body = response.json()
        assert response.status_code == 200
        assert body['message'] == 'Task moved successfully'
        assert body['data']['laneId'] == str(lanes['Review'].id)

    def test_position_required(self, owner_api, lanes, make_task):
        card = make_task(lanes['To Do'])
        response = owner_api.post(f"/api/tasks/{card['id']}/move", {'laneId': str(lanes['Review'].id)})
        assert response.status_code == 400

    def test_viewer_forbidden(self, viewer_api, lanes, make_task):
        card = make_task(lanes['To Do'])

        response = viewer_api.post(f"/api/tasks/{card['id']}/move", {
            'laneId': str(lanes['Review'].id), 'position': 0,
        })

        assert response.status_code == 403
        assert response.json()['message'] == 'Viewers cannot move tasks'

    def test_foreign_lane_not_found(self, owner_api, board_service, workspace, owner, lanes, make_task):
        other = board_service.create_board(owner, {'workspace_id': workspace['id'], 'name': 'Other'})
        card = make_task(lanes['To Do'])

        response = owner_api.post(f"/api/tasks/{card['id']}/move", {
            'laneId': str(other['lanes'][0]['id']), 'position': 0,
        })

        assert response.status_code == 404

    def test_requires_token(self, api, lanes, make_task):
        card = make_task(lanes['To Do'])
        response = api.post(f"/api/tasks/{card['id']}/move", {'laneId': str(lanes['Review'].id), 'position': 0})
        assert response.status_code == 401

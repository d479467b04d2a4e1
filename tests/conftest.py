"""Shared fixtures: users, a workspace and a board built through the services."""

import json

import pytest

from apps.core.models import Lane, User
from apps.core.utils import get_service


@pytest.fixture
def auth_service():
    return get_service('core', 'auth_service')


@pytest.fixture
def workspace_service():
    return get_service('core', 'workspace_service')


@pytest.fixture
def board_service():
    return get_service('board')


@pytest.fixture
def task_service():
    return get_service('tasks')


@pytest.fixture
def ordering():
    return get_service('board', 'ordering')


def make_user(email: str, name: str = 'Test User') -> User:
    return User.objects.create_user(username=email, email=email, password='password123', name=name)


@pytest.fixture
def owner(db) -> User:
    return make_user('owner@example.com', 'Owner')


@pytest.fixture
def member(db) -> User:
    return make_user('member@example.com', 'Member')


@pytest.fixture
def viewer(db) -> User:
    return make_user('viewer@example.com', 'Viewer')


@pytest.fixture
def outsider(db) -> User:
    return make_user('outsider@example.com', 'Outsider')


@pytest.fixture
def workspace(owner, member, viewer, workspace_service) -> dict:
    """Workspace owned by `owner` with `member` and `viewer` joined"""
    workspace = workspace_service.create_workspace(owner, {'name': 'Acme'})
    workspace_service.add_member(workspace['id'], owner, {'user_id': member.id})
    workspace_service.add_member(workspace['id'], owner, {'user_id': viewer.id})
    return workspace


@pytest.fixture
def board(workspace, owner, member, viewer, board_service) -> dict:
    """Board with the default lanes; owner is ADMIN, member MEMBER, viewer VIEWER"""
    board = board_service.create_board(
        owner, {'workspace_id': workspace['id'], 'name': 'Roadmap', 'create_default_lanes': True}
    )
    board_service.add_member(board['id'], owner, {'user_id': member.id, 'role': 'MEMBER'})
    board_service.add_member(board['id'], owner, {'user_id': viewer.id, 'role': 'VIEWER'})
    return board


@pytest.fixture
def lanes(board) -> dict:
    """Default lanes keyed by name"""
    return {lane.name: lane for lane in Lane.objects.filter(board_id=board['id'])}


@pytest.fixture
def make_task(task_service, board, owner):
    def _make(lane, title='Task', **extra):
        data = {'board_id': board['id'], 'lane_id': lane.id, 'title': title}
        data.update(extra)
        return task_service.create_task(owner, data)
    return _make


class ApiClient:
    """Django test client speaking JSON with a bearer token"""

    def __init__(self, client, token=None):
        self._client = client
        self._token = token

    def _headers(self):
        if self._token:
            return {'HTTP_AUTHORIZATION': f'Bearer {self._token}'}
        return {}

    def request(self, method, path, body=None):
        kwargs = dict(self._headers())
        if body is not None:
            kwargs['data'] = json.dumps(body)
            kwargs['content_type'] = 'application/json'
        return getattr(self._client, method)(path, **kwargs)

    def get(self, path):
        return self.request('get', path)

    def post(self, path, body=None):
        return self.request('post', path, body if body is not None else {})

    def put(self, path, body=None):
        return self.request('put', path, body if body is not None else {})

    def delete(self, path):
        return self.request('delete', path)


def token_for(user: User) -> str:
    return get_service('core', 'auth_service').login(user.email, 'password123')['accessToken']


@pytest.fixture
def api(client):
    """Anonymous API client"""
    return ApiClient(client)


@pytest.fixture
def owner_api(client, owner):
    return ApiClient(client, token_for(owner))


@pytest.fixture
def viewer_api(client, viewer):
    return ApiClient(client, token_for(viewer))

# apps/core/views.py

import logging

from django.core.cache import cache
from django.db import connection
from django.utils import timezone
from django.views import defaults

from apps import __version__

from .forms import (
    ChangePasswordForm, LabelForm, LoginForm, RefreshTokenForm, RegisterForm,
    UpdateProfileForm, WorkspaceCreateForm, WorkspaceMemberForm, WorkspaceRoleForm,
    WorkspaceUpdateForm,
)
from .middleware import is_api_path
from .permissions import token_required
from .responses import send_error, send_success
from .utils import api_view, get_service, parse_json_body

logger = logging.getLogger(__name__)


def _auth():
    return get_service('core', 'auth_service')


def _workspaces():
    return get_service('core', 'workspace_service')


# === AUTHENTICATION ===

@api_view(['POST'])
def register(request):
    """Creates an account and returns {user, accessToken, refreshToken}"""
    data = RegisterForm(parse_json_body(request)).validated()
    return send_success(_auth().register(data), 'User registered successfully', status=201)


@api_view(['POST'])
def login(request):
    data = LoginForm(parse_json_body(request)).validated()
    result = _auth().login(data['email'], data['password'])
    return send_success(result, 'Login successful')


@api_view(['POST'])
def refresh(request):
    data = RefreshTokenForm(parse_json_body(request)).validated()
    return send_success(_auth().refresh(data['refresh_token']), 'Token refreshed successfully')


@api_view(['GET', 'PUT'])
@token_required
def profile(request):
    if request.method == 'PUT':
        data = UpdateProfileForm(parse_json_body(request)).validated()
        user = _auth().update_profile(request.user.id, data)
        return send_success(user, 'Profile updated successfully')

    return send_success(_auth().get_profile(request.user.id))


@api_view(['PUT'])
@token_required
def change_password(request):
    data = ChangePasswordForm(parse_json_body(request)).validated()
    result = _auth().change_password(request.user.id, data['current_password'], data['new_password'])
    return send_success(result)


# === WORKSPACES ===

@api_view(['GET', 'POST'])
@token_required
def workspaces(request):
    if request.method == 'POST':
        data = WorkspaceCreateForm(parse_json_body(request)).validated()
        workspace = _workspaces().create_workspace(request.user, data)
        return send_success(workspace, 'Workspace created successfully', status=201)

    return send_success(_workspaces().list_workspaces(request.user))


@api_view(['GET', 'PUT', 'DELETE'])
@token_required
def workspace_detail(request, workspace_id):
    if request.method == 'PUT':
        data = WorkspaceUpdateForm(parse_json_body(request)).validated()
        workspace = _workspaces().update_workspace(workspace_id, request.user, data)
        return send_success(workspace, 'Workspace updated successfully')

    if request.method == 'DELETE':
        return send_success(_workspaces().delete_workspace(workspace_id, request.user))

    return send_success(_workspaces().get_workspace(workspace_id, request.user))


@api_view(['GET', 'POST'])
@token_required
def workspace_members(request, workspace_id):
    if request.method == 'POST':
        data = WorkspaceMemberForm(parse_json_body(request)).validated()
        member = _workspaces().add_member(workspace_id, request.user, data)
        return send_success(member, 'Member added successfully', status=201)

    return send_success(_workspaces().get_members(workspace_id, request.user))


@api_view(['DELETE'])
@token_required
def workspace_member_detail(request, workspace_id, user_id):
    return send_success(_workspaces().remove_member(workspace_id, request.user, user_id))


@api_view(['PUT'])
@token_required
def workspace_member_role(request, workspace_id, user_id):
    data = WorkspaceRoleForm(parse_json_body(request)).validated()
    member = _workspaces().update_member_role(workspace_id, request.user, user_id, data['role'])
    return send_success(member, 'Member role updated successfully')


@api_view(['GET', 'POST'])
@token_required
def workspace_labels(request, workspace_id):
    if request.method == 'POST':
        data = LabelForm(parse_json_body(request)).validated()
        label = _workspaces().create_label(workspace_id, request.user, data)
        return send_success(label, 'Label created successfully', status=201)

    return send_success(_workspaces().get_labels(workspace_id, request.user))


# === MONITORING ===

@api_view(['GET'])
def health_check(request):
    """
    Health check for monitoring
    Touches the database and the cache
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')

        cache.set('health_check', 'ok', 60)
        cache.get('health_check')
    except Exception as exc:
        logger.exception("Health check failed")
        return send_error('ServiceUnavailable', f'Unhealthy: {exc}', status=503)

    return send_success({
        'status': 'healthy',
        'database': 'ok',
        'cache': 'ok',
        'timestamp': timezone.now().isoformat(),
        'version': __version__,
    })


# === FALLBACK HANDLERS ===

def not_found(request, exception=None):
    """JSON 404 under the API prefix, Django's page elsewhere"""
    if not is_api_path(request.path):
        return defaults.page_not_found(request, exception)
    return send_error('NotFound', f'Route {request.path} not found', status=404)


def server_error(request):
    if not is_api_path(request.path):
        return defaults.server_error(request)
    return send_error('InternalServerError', 'Internal server error', status=500)

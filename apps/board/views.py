# apps/board/views.py

from apps.core.permissions import token_required
from apps.core.responses import send_success
from apps.core.utils import api_view, get_service, parse_json_body

from .forms import (
    BoardCreateForm, BoardFilterForm, BoardMemberForm, BoardUpdateForm,
    LaneCreateForm, LaneReorderForm, LaneUpdateForm,
)


def _service():
    return get_service('board')


# === BOARDS ===

@api_view(['GET', 'POST'])
@token_required
def boards(request):
    """POST creates a board (default lanes unless disabled); GET lists them"""
    if request.method == 'POST':
        data = BoardCreateForm(parse_json_body(request)).validated()
        board = _service().create_board(request.user, data)
        return send_success(board, 'Board created successfully', status=201)

    filters = BoardFilterForm(request.GET.dict()).validated()
    return send_success(_service().list_boards(request.user, filters.get('workspace_id')))


@api_view(['GET', 'PUT', 'DELETE'])
@token_required
def board_detail(request, board_id):
    if request.method == 'PUT':
        data = BoardUpdateForm(parse_json_body(request)).validated()
        board = _service().update_board(board_id, request.user, data)
        return send_success(board, 'Board updated successfully')

    if request.method == 'DELETE':
        return send_success(_service().delete_board(board_id, request.user))

    return send_success(_service().get_board(board_id, request.user))


# === MEMBERS ===

@api_view(['GET', 'POST'])
@token_required
def board_members(request, board_id):
    if request.method == 'POST':
        data = BoardMemberForm(parse_json_body(request)).validated()
        member = _service().add_member(board_id, request.user, data)
        return send_success(member, 'Member added successfully', status=201)

    return send_success(_service().get_members(board_id, request.user))


@api_view(['DELETE'])
@token_required
def board_member_detail(request, board_id, user_id):
    return send_success(_service().remove_member(board_id, request.user, user_id))


# === LANES ===

@api_view(['POST'])
@token_required
def lanes(request, board_id):
    """Creates a lane - appended after the last one when position is omitted"""
    data = LaneCreateForm(parse_json_body(request)).validated()
    lane = _service().create_lane(board_id, request.user, data)
    return send_success(lane, 'Lane created successfully', status=201)


@api_view(['PUT', 'DELETE'])
@token_required
def lane_detail(request, board_id, lane_id):
    if request.method == 'DELETE':
        return send_success(_service().delete_lane(board_id, lane_id, request.user))

    data = LaneUpdateForm(parse_json_body(request)).validated()
    lane = _service().update_lane(board_id, lane_id, request.user, data)
    return send_success(lane, 'Lane updated successfully')


@api_view(['POST'])
@token_required
def reorder_lanes(request, board_id):
    """Applies the whole {lanes: [{id, position}]} batch atomically"""
    data = LaneReorderForm(parse_json_body(request)).validated()
    return send_success(_service().reorder_lanes(board_id, request.user, data['lanes']))

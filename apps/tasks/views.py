# apps/tasks/views.py

from apps.core.permissions import token_required
from apps.core.responses import send_success
from apps.core.utils import api_view, get_service, parse_json_body

from .forms import (
    AddLabelForm, AssignUserForm, AttachmentForm, CommentForm,
    SubtaskCreateForm, SubtaskUpdateForm,
    TaskCreateForm, TaskFilterForm, TaskMoveForm, TaskUpdateForm,
)


def _service():
    return get_service('tasks')


# === TASKS ===

@api_view(['GET', 'POST'])
@token_required
def tasks(request):
    if request.method == 'POST':
        data = TaskCreateForm(parse_json_body(request)).validated()
        task = _service().create_task(request.user, data)
        return send_success(task, 'Task created successfully', status=201)

    filters = TaskFilterForm(request.GET.dict()).validated()
    return send_success(_service().list_tasks(
        request.user, filters.get('board_id'), filters.get('lane_id'),
    ))


@api_view(['GET', 'PUT', 'DELETE'])
@token_required
def task_detail(request, task_id):
    if request.method == 'PUT':
        data = TaskUpdateForm(parse_json_body(request)).validated()
        task = _service().update_task(task_id, request.user, data)
        return send_success(task, 'Task updated successfully')

    if request.method == 'DELETE':
        return send_success(_service().delete_task(task_id, request.user))

    return send_success(_service().get_task(task_id, request.user))


@api_view(['POST'])
@token_required
def move_task(request, task_id):
    """
    Moves a task to {laneId, position}

    Refused with 400 when the target lane is a different lane already at
    its WIP limit; the task then stays where it was.
    """
    data = TaskMoveForm(parse_json_body(request)).validated()
    task = _service().move_task(task_id, request.user, data['lane_id'], data['position'])
    return send_success(task, 'Task moved successfully')


# === ASSIGNEES ===

@api_view(['POST'])
@token_required
def assignees(request, task_id):
    data = AssignUserForm(parse_json_body(request)).validated()
    return send_success(_service().assign_user(task_id, request.user, data['user_id']))


@api_view(['DELETE'])
@token_required
def assignee_detail(request, task_id, user_id):
    return send_success(_service().unassign_user(task_id, request.user, user_id))


# === LABELS ===

@api_view(['POST'])
@token_required
def labels(request, task_id):
    data = AddLabelForm(parse_json_body(request)).validated()
    return send_success(_service().add_label(task_id, request.user, data['label_id']))


@api_view(['DELETE'])
@token_required
def label_detail(request, task_id, label_id):
    return send_success(_service().remove_label(task_id, request.user, label_id))


# === COMMENTS ===

@api_view(['POST'])
@token_required
def comments(request, task_id):
    data = CommentForm(parse_json_body(request)).validated()
    comment = _service().create_comment(task_id, request.user, data['content'])
    return send_success(comment, 'Comment created successfully', status=201)


@api_view(['PUT', 'DELETE'])
@token_required
def comment_detail(request, task_id, comment_id):
    if request.method == 'DELETE':
        return send_success(_service().delete_comment(task_id, comment_id, request.user))

    data = CommentForm(parse_json_body(request)).validated()
    comment = _service().update_comment(task_id, comment_id, request.user, data['content'])
    return send_success(comment, 'Comment updated successfully')


# === ATTACHMENTS ===

@api_view(['POST'])
@token_required
def attachments(request, task_id):
    data = AttachmentForm(parse_json_body(request)).validated()
    attachment = _service().create_attachment(task_id, request.user, data)
    return send_success(attachment, 'Attachment created successfully', status=201)


@api_view(['DELETE'])
@token_required
def attachment_detail(request, task_id, attachment_id):
    return send_success(_service().delete_attachment(task_id, attachment_id, request.user))


# === SUBTASKS ===

@api_view(['POST'])
@token_required
def subtasks(request, task_id):
    data = SubtaskCreateForm(parse_json_body(request)).validated()
    subtask = _service().create_subtask(task_id, request.user, data)
    return send_success(subtask, 'Subtask created successfully', status=201)


@api_view(['PUT', 'DELETE'])
@token_required
def subtask_detail(request, task_id, subtask_id):
    if request.method == 'DELETE':
        return send_success(_service().delete_subtask(task_id, subtask_id, request.user))

    data = SubtaskUpdateForm(parse_json_body(request)).validated()
    subtask = _service().update_subtask(task_id, subtask_id, request.user, data)
    return send_success(subtask, 'Subtask updated successfully')

# apps/tasks/urls.py

from django.urls import path
from . import views

app_name = 'tasks'

urlpatterns = [
    path('tasks', views.tasks, name='tasks'),
    path('tasks/<uuid:task_id>', views.task_detail, name='task_detail'),
    path('tasks/<uuid:task_id>/move', views.move_task, name='move'),

    # === ASSIGNEES / LABELS ===
    path('tasks/<uuid:task_id>/assignees', views.assignees, name='assignees'),
    path('tasks/<uuid:task_id>/assignees/<uuid:user_id>', views.assignee_detail, name='assignee_detail'),
    path('tasks/<uuid:task_id>/labels', views.labels, name='labels'),
    path('tasks/<uuid:task_id>/labels/<uuid:label_id>', views.label_detail, name='label_detail'),

    # === COMMENTS ===
    path('tasks/<uuid:task_id>/comments', views.comments, name='comments'),
    path('tasks/<uuid:task_id>/comments/<uuid:comment_id>', views.comment_detail, name='comment_detail'),

    # === ATTACHMENTS ===
    path('tasks/<uuid:task_id>/attachments', views.attachments, name='attachments'),
    path('tasks/<uuid:task_id>/attachments/<uuid:attachment_id>', views.attachment_detail, name='attachment_detail'),

    # === SUBTASKS ===
    path('tasks/<uuid:task_id>/subtasks', views.subtasks, name='subtasks'),
    path('tasks/<uuid:task_id>/subtasks/<uuid:subtask_id>', views.subtask_detail, name='subtask_detail'),
]

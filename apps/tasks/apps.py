# apps/tasks/apps.py

from django.apps import AppConfig, apps


class TasksConfig(AppConfig):
    """Tasks app - cards, assignees, labels, comments, attachments, subtasks"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.tasks'
    verbose_name = 'Tasks'

    def ready(self):
        from .services import TaskService

        # Shares the engine built by the board app
        self.service = TaskService(apps.get_app_config('board').ordering)

# apps/core/apps.py

from datetime import timedelta

from django.apps import AppConfig
from django.conf import settings


class CoreConfig(AppConfig):
    """Core app configuration"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core - Users and Workspaces'

    def ready(self):
        """
        Builds the process-wide services
        Views fetch them through the app registry
        """
        from .auth_service import AuthenticationService
        from .workspace_service import WorkspaceService

        self.auth_service = AuthenticationService(
            secret=settings.TRACKBOARD_JWT_SECRET,
            algorithm=settings.TRACKBOARD_JWT_ALGORITHM,
            access_lifetime=timedelta(minutes=settings.TRACKBOARD_ACCESS_TOKEN_MINUTES),
            refresh_lifetime=timedelta(days=settings.TRACKBOARD_REFRESH_TOKEN_DAYS),
        )
        self.workspace_service = WorkspaceService()

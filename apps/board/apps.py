# apps/board/apps.py

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class BoardConfig(AppConfig):
    """Board app - boards, lanes and the ordering engine"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.board'
    verbose_name = 'Board - Kanban'

    def ready(self):
        """
        Builds the ordering engine and the board service, and connects the
        signals that publish live board events
        """
        from . import signals  # noqa: F401
        from .ordering import OrderingEngine
        from .services import BoardService

        self.ordering = OrderingEngine(settings.TRACKBOARD_DEFAULT_LANES)
        self.service = BoardService(self.ordering)

        logger.debug("Board app ready - %d default lanes", len(self.ordering.default_lanes))

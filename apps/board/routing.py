# apps/board/routing.py

from django.urls import re_path
from . import consumers

# WebSocket routes of the board app
websocket_urlpatterns = [
    # Live updates of one board
    re_path(
        r'ws/boards/(?P<board_id>[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})/$',
        consumers.BoardConsumer.as_asgi(),
    ),
]

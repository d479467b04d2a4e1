# config/asgi.py

import os
from django.core.asgi import get_asgi_application
from channels.routing import ProtocolTypeRouter, URLRouter
from channels.security.websocket import AllowedHostsOriginValidator

# Configure Django settings
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

# Load apps before importing WebSocket routes
django_asgi_app = get_asgi_application()

from apps.board.routing import websocket_urlpatterns  # noqa: E402
from apps.core.middleware import JwtWebsocketMiddleware  # noqa: E402

# ASGI configuration
application = ProtocolTypeRouter({
    # Plain HTTP
    "http": django_asgi_app,

    # WebSocket authenticated with ?token=<accessToken>
    "websocket": AllowedHostsOriginValidator(
        JwtWebsocketMiddleware(
            URLRouter(websocket_urlpatterns)
        )
    ),
})

# apps/core/middleware.py

import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.apps import apps
from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.http import Http404

from .exceptions import AppError
from .responses import send_error

logger = logging.getLogger(__name__)


def is_api_path(path: str) -> bool:
    return path.startswith(settings.TRACKBOARD_API_PREFIX)


def get_auth_service():
    return apps.get_app_config('core').auth_service


class BearerTokenMiddleware:
    """
    Resolves request.user from `Authorization: Bearer <token>` on API paths

    Sessions never authenticate API calls. A malformed or expired token
    leaves the user anonymous and records why in request.auth_error, which
    token_required reports back to the client.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if is_api_path(request.path):
            request.user = AnonymousUser()
            request.auth_error = None

            header = request.META.get('HTTP_AUTHORIZATION', '')
            if header.startswith('Bearer '):
                user = get_auth_service().authenticate_token(header[7:].strip())
                if user is None:
                    request.auth_error = 'Invalid or expired token'
                else:
                    request.user = user

        return self.get_response(request)


class ApiErrorMiddleware:
    """
    Single top-level handler for API errors

    AppError subclasses become the {success: false, error, message}
    envelope with their own status; anything else is logged with its
    traceback and answered with a generic 500.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if not is_api_path(request.path):
            return None

        if isinstance(exception, AppError):
            if exception.status_code >= 500:
                logger.error("%s %s: %s", request.method, request.path, exception.message)
            return send_error(exception.error, exception.message, exception.status_code)

        if isinstance(exception, Http404):
            return send_error('NotFoundError', str(exception) or 'Resource not found', 404)

        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return send_error('InternalServerError', 'Internal server error', 500)


class JwtWebsocketMiddleware(BaseMiddleware):
    """Authenticates WebSocket connections with `?token=<accessToken>`"""

    async def __call__(self, scope, receive, send):
        query = parse_qs(scope.get('query_string', b'').decode())
        token = (query.get('token') or [None])[0]

        scope['user'] = AnonymousUser()
        if token:
            user = await database_sync_to_async(get_auth_service().authenticate_token)(token)
            if user is not None:
                scope['user'] = user

        return await super().__call__(scope, receive, send)

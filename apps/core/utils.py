# apps/core/utils.py

import json
from functools import wraps
from typing import Dict

from django.apps import apps
from django.views.decorators.csrf import csrf_exempt

from .exceptions import MethodNotAllowedError, ValidationError


def parse_json_body(request) -> Dict:
    """
    Decodes the JSON body of a request

    An empty body counts as `{}`; anything that is not valid JSON is a
    ValidationError so the client gets a 400 envelope.
    """
    if not request.body:
        return {}

    try:
        return json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError('Malformed JSON body')


def get_service(app_label: str, name: str = 'service'):
    """Service object built by the AppConfig.ready() of `app_label`"""
    return getattr(apps.get_app_config(app_label), name)


def api_view(methods):
    """
    Marks a function view as a JSON endpoint

    CSRF checks are skipped; a method outside `methods` answers with the
    error envelope.
    """
    allowed = [m.upper() for m in methods]

    def decorator(view_func):
        @wraps(view_func)
        def wrapped_view(request, *args, **kwargs):
            if request.method not in allowed:
                raise MethodNotAllowedError(f'Method {request.method} not allowed')
            return view_func(request, *args, **kwargs)

        return csrf_exempt(wrapped_view)

    return decorator

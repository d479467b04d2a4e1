# apps/core/responses.py

from django.http import JsonResponse


def send_success(data=None, message: str = None, status: int = 200) -> JsonResponse:
    """Success envelope: {success, data, message?}"""
    payload = {
        'success': True,
        'data': data,
    }

    if message:
        payload['message'] = message

    return JsonResponse(payload, status=status)


def send_error(error: str, message: str, status: int = 500) -> JsonResponse:
    """Error envelope: {success: false, error, message}"""
    return JsonResponse({
        'success': False,
        'error': error,
        'message': message,
    }, status=status)

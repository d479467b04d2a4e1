# apps/core/exceptions.py

"""
Typed errors raised by the service layer.

Each error carries the HTTP status it maps to; ApiErrorMiddleware turns
them into the JSON envelope. The `error` field of the envelope is the
class name.
"""


class AppError(Exception):
    """Base for every error that is reported to the caller verbatim"""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def error(self) -> str:
        return type(self).__name__


class ValidationError(AppError):
    """Malformed or missing input fields"""

    status_code = 400

    def __init__(self, message: str, errors: dict = None):
        super().__init__(message)
        self.errors = errors or {}


class BadRequestError(AppError):
    """Domain rule violation"""

    status_code = 400


class WipLimitExceeded(BadRequestError):
    """Target lane is full"""

    # Reported to clients as a plain bad request
    error = 'BadRequestError'

    def __init__(self, limit: int):
        super().__init__(f'Cannot move task. Lane has reached WIP limit of {limit}')
        self.limit = limit


class UnauthorizedError(AppError):
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class MethodNotAllowedError(AppError):
    status_code = 405

"""Domain error taxonomy.

Services raise these; the handlers registered in ``jobboard.main`` turn them
into the standard error envelope with the matching HTTP status.
"""
from __future__ import annotations

from fastapi import status


class AppError(Exception):
    kind: str = "Unexpected"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationFailure(AppError):
    kind = "AuthenticationFailure"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class AuthorizationFailure(AppError):
    kind = "AuthorizationFailure"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to perform this action"


class NotFound(AppError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Conflict(AppError):
    kind = "Conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class RuleViolation(AppError):
    kind = "RuleViolation"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Business rule violated"


# status HTTP -> kind, para HTTPException do Starlette (404 de rota, 405, ...)
KIND_BY_STATUS = {
    400: RuleViolation.kind,
    401: AuthenticationFailure.kind,
    403: AuthorizationFailure.kind,
    404: NotFound.kind,
    409: Conflict.kind,
}


def kind_for_status(status_code: int) -> str:
    return KIND_BY_STATUS.get(status_code, "HttpError" if status_code < 500 else AppError.kind)

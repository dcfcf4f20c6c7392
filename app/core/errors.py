"""Error taxonomy and the uniform error response body."""

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.core.logger import logger
from app.core.notifications import Notification, Severity, notify


class ErrorCode:
    """Centralized error codes for API responses."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    EMPTY_FIELD = "EMPTY_FIELD"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_AUTHENTICATED = "ALREADY_AUTHENTICATED"
    INVALID_INPUT = "INVALID_INPUT"


class ErrorResponse(BaseModel):
    """Error body: code, message, optional per-field details and the toast."""
    error: str
    message: str
    details: dict | None = None
    notification: Notification


class PortalError(Exception):
    status_code = 400
    code = "PORTAL_ERROR"
    title = "Ошибка"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=self.code,
            message=self.message,
            details=self.details,
            notification=notify(self.title, self.message, Severity.ERROR),
        )


class ValidationError(PortalError):
    """Registration form rejected; details maps field name to message."""
    status_code = 422
    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, errors: dict[str, str]):
        super().__init__("Проверьте правильность заполнения полей", details=errors)


class AuthError(PortalError):
    status_code = 401
    code = ErrorCode.AUTH_ERROR

    def __init__(self):
        super().__init__("Неверный логин или пароль")


class EmptyFieldError(PortalError):
    status_code = 422
    code = ErrorCode.EMPTY_FIELD

    def __init__(self):
        super().__init__("Заполните все поля")


class NotAuthenticatedError(PortalError):
    status_code = 401
    code = ErrorCode.NOT_AUTHENTICATED

    def __init__(self):
        super().__init__("Войдите в систему")


class ForbiddenError(PortalError):
    status_code = 403
    code = ErrorCode.FORBIDDEN

    def __init__(self, message: str = "Недостаточно прав"):
        super().__init__(message)


class StatusTransitionError(PortalError):
    status_code = 409
    code = ErrorCode.INVALID_TRANSITION

    def __init__(self, application_id: int, status: str):
        super().__init__(
            "Заявка уже рассмотрена",
            details={"application_id": application_id, "status": status},
        )


class NotFoundError(PortalError):
    status_code = 404
    code = ErrorCode.NOT_FOUND

    def __init__(self, message: str = "Заявка не найдена", details: dict | None = None):
        super().__init__(message, details=details)


class AlreadyAuthenticatedError(PortalError):
    """Login and registration are only reachable from the signed-out screen."""
    status_code = 409
    code = ErrorCode.ALREADY_AUTHENTICATED

    def __init__(self, user_id: int):
        super().__init__("Сначала выйдите из системы", details={"user_id": user_id})


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.code} {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} rejected: malformed request")
    body = ErrorResponse(
        error=ErrorCode.INVALID_INPUT,
        message="Некорректные данные запроса",
        details={"errors": jsonable_encoder(exc.errors())},
        notification=notify("Ошибка", "Некорректные данные запроса", Severity.ERROR),
    )
    return JSONResponse(status_code=422, content=body.model_dump(mode="json"))

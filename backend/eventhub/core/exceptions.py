"""
Error taxonomy and the FastAPI handlers that render it.

Every failure is terminal for its request and is rendered as
``{"message": ..., **extra}``. Validation failures carry an ``errors`` list
with one entry per offending field.
"""

from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from eventhub.core.logging import get_logger

logger = get_logger(__name__)


class DomainError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: Optional[int] = None, **extra: Any):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra
        super().__init__(message)

    def to_content(self) -> dict:
        return {"message": self.message, **self.extra}


class ValidationError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, errors: list[dict]):
        super().__init__(message, errors=errors)


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationRequiredError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class PermissionDeniedError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message)


class BusinessRuleViolation(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT


class InternalError(DomainError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def format_issues(errors) -> list[dict]:
    """Flatten pydantic error dicts into ``{field, message, type}`` entries."""
    issues = []
    for error in errors:
        # Drop the "body"/"query" location prefix FastAPI adds
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        issues.append({
            "field": ".".join(loc),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        })
    return issues


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("domain_error", message=exc.message, status_code=exc.status_code)
    else:
        logger.info("request_rejected", message=exc.message, status_code=exc.status_code)
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_content(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError("Invalid request data", format_issues(exc.errors()))
    logger.info("request_validation_failed", issues=error.extra["errors"])
    return JSONResponse(status_code=error.status_code, content=error.to_content())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


EXCEPTION_HANDLERS = {
    DomainError: domain_error_handler,
    RequestValidationError: request_validation_handler,
    Exception: unhandled_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)

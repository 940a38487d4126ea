from __future__ import annotations

from fastapi import HTTPException


def error_body(code: str, message: str, detail: dict | None = None, **extra) -> dict:
    return {"error": {"code": code, "message": message, "detail": detail or {}}, **extra}


def err(code: str, message: str, detail: dict | None = None, status_code: int = 400, **extra) -> HTTPException:
    return HTTPException(status_code=status_code, detail=error_body(code, message, detail, **extra))


class ServiceError(Exception):
    """Base for errors raised below the HTTP layer and rendered by one handler in main."""

    code = "INTERNAL_ERROR"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, detail: dict | None = None):
        self.message = message or self.default_message
        self.detail = detail or {}
        super().__init__(self.message)

    def extra(self) -> dict:
        return {}

    def to_body(self) -> dict:
        return error_body(self.code, self.message, self.detail, **self.extra())


class ValidationFailed(ServiceError):
    code = "VALIDATION_FAILED"
    status_code = 400
    default_message = "Invalid request"


class ToolNotFound(ValidationFailed):
    code = "TOOL_NOT_FOUND"
    status_code = 404
    default_message = "Tool not found"


class DuplicateRequest(ValidationFailed):
    code = "DUPLICATE_REQUEST"
    status_code = 409
    default_message = "This request is already being processed"


class QuotaExceeded(ServiceError):
    code = "DAILY_LIMIT_REACHED"
    status_code = 429
    default_message = "Daily limit reached. Upgrade to Pro for unlimited generations."

    def extra(self) -> dict:
        return {"remainingUses": 0}


class Unauthenticated(ServiceError):
    code = "AUTH_REQUIRED"
    status_code = 401
    default_message = "Authentication required"


class StoreUnavailable(ServiceError):
    """Persistence collaborator failed or is not configured. Safe to retry."""

    code = "STORE_UNAVAILABLE"
    status_code = 503
    default_message = "Storage is temporarily unavailable, please retry"


class BestEffortFailure(ServiceError):
    """History or notification side effect failed. Logged, never returned to the caller."""

    code = "BEST_EFFORT_FAILURE"


class CatalogError(LookupError):
    """Template catalog is inconsistent: unknown key or a placeholder with no value source."""

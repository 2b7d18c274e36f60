"""Service errors and the result envelope returned by every service operation.

Services never let an exception escape: they return ``ServiceResult.ok(...)``
or ``ServiceResult.failure(...)``, and the HTTP layer turns the result into
``{"status": ..., "error": ..., "payload": ...}``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class ServiceError(Exception):
    """Base for all typed service failures."""

    code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(self, message: str, service: str | None = None, function_name: str | None = None):
        super().__init__(message)
        self.message = message
        self.service = service
        self.function_name = function_name

    def tagged(self, service: str, function_name: str) -> "ServiceError":
        """Attach the originating service/operation (first tag wins)."""
        self.service = self.service or service
        self.function_name = self.function_name or function_name
        return self

    @property
    def public_message(self) -> str:
        return self.message

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.public_message,
            "service": self.service,
            "function_name": self.function_name,
        }


# 4xx: caller can fix the request or this is a business outcome

class ValidationError(ServiceError):
    """Malformed or out-of-range input."""
    code = "VALIDATION_ERROR"
    http_status = 400

    def __init__(self, message: str, field: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field


class AuthenticationError(ServiceError):
    code = "AUTHENTICATION_ERROR"
    http_status = 401


class NotFoundError(ServiceError):
    code = "NOT_FOUND"
    http_status = 404


class DomainError(ServiceError):
    """Business rule rejected the operation (e.g. shift already started today)."""
    code = "DOMAIN_REJECTION"
    http_status = 409


class ConflictError(ServiceError):
    """Write lost a race or would violate uniqueness."""
    code = "CONFLICT"
    http_status = 409


# 5xx

class ControllerError(ServiceError):
    """Record store reported a failure."""
    code = "CONTROLLER_ERROR"
    http_status = 500


class InternalError(ServiceError):
    """Unexpected exception; details stay in the logs."""
    code = "INTERNAL_ERROR"
    http_status = 500

    @property
    def public_message(self) -> str:
        return "An unexpected error occurred"


@dataclass
class ServiceResult:
    """Success payload or typed error. Exactly one of them is set."""
    payload: Any = None
    error: Optional[ServiceError] = None
    status: int = 200

    @classmethod
    def ok(cls, payload: Any, status: int = 200) -> "ServiceResult":
        return cls(payload=payload, status=status)

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult":
        return cls(error=error, status=error.http_status)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def to_response(self) -> dict:
        """Uniform envelope body."""
        return {
            "status": self.status,
            "error": None if self.is_ok else self.error.public_message,
            "payload": self.payload if self.is_ok else None,
        }

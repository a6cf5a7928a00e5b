"""
Scheduling Core Exceptions

Base error types shared by the shift, availability and reschedule code.
Each carries a machine-readable code and a message that can be shown to
clinic staff as is.
"""

from typing import Any


class DomainException(Exception):
    """
    Base class for every error raised by the scheduling core.

    Attributes:
        message: Text shown to the user.
        code: Stable machine-readable code, e.g. "SHIFT_FINALIZED".
        details: Extra context for logs and UI hints.
    """

    default_code = "SCHEDULING_ERROR"

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = dict(details or {})

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Error payload for display or structured logging."""
        return {"error": self.code, "message": self.message, "details": self.details}


class ValidationException(DomainException):
    """A request was malformed and was refused before reaching the backend."""

    default_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        self.field = field
        merged = dict(details or {})
        if field:
            merged.setdefault("field", field)
        super().__init__(message, details=merged)


class IntegrationException(DomainException):
    """The clinic backend could not be reached or answered with an unreadable body.

    Never retried: the caller decides whether to submit again.
    """

    default_code = "INTEGRATION_ERROR"

    def __init__(
        self,
        service: str,
        message: str,
        original_error: Exception | None = None,
        status_code: int | None = None,
    ):
        self.service = service
        self.original_error = original_error
        self.status_code = status_code
        details: dict[str, Any] = {"service": service}
        if status_code is not None:
            details["status_code"] = status_code
        if original_error is not None:
            details["cause"] = f"{original_error.__class__.__name__}: {original_error}"
        super().__init__(message, details=details)

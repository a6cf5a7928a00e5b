# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Scheduling exceptions.
# ============================================================================
"""Scheduling Exceptions.

Raised by the shift store, the availability resolver and the reschedule
coordinator. None of them is retried.
"""

from typing import TYPE_CHECKING, Any

from clinic_scheduling.core.domain.exceptions import DomainException, ValidationException

if TYPE_CHECKING:
    from .services.conflict_classifier import ClassifiedConflict


class SchedulingError(DomainException):
    """A scheduling operation was rejected, by the backend or by the client-side guard.

    Attributes:
        conflict: The classified rejection.
        sent: Whether the request reached the backend.
    """

    def __init__(self, conflict: "ClassifiedConflict", sent: bool = True):
        self.conflict = conflict
        self.sent = sent
        details: dict[str, Any] = {
            "kind": conflict.kind.value,
            "category": conflict.category.value,
            "backend_code": conflict.code,
            "backend_message": conflict.raw_message,
            "sent": sent,
        }
        super().__init__(conflict.user_message, conflict.kind.value, details)

    @property
    def kind(self):
        return self.conflict.kind

    @property
    def category(self):
        return self.conflict.category


class ReschedulePreconditionError(ValidationException):
    """A reschedule request failed client-side checks and was never sent."""


class RescheduleInProgressError(DomainException):
    """A reschedule for the same appointment is still outstanding."""

    def __init__(self, appointment_code: str):
        self.appointment_code = appointment_code
        super().__init__(
            f"A reschedule of appointment {appointment_code} is already being processed",
            "RESCHEDULE_IN_PROGRESS",
            {"appointment_code": appointment_code},
        )


class RescheduleIntegrityError(DomainException):
    """The backend reported success but the returned pair breaks the reschedule contract."""

    def __init__(self, appointment_code: str, reason: str):
        self.appointment_code = appointment_code
        self.reason = reason
        super().__init__(
            f"Reschedule of {appointment_code} returned an inconsistent result: {reason}",
            "RESCHEDULE_INTEGRITY_ERROR",
            {"appointment_code": appointment_code, "reason": reason},
        )

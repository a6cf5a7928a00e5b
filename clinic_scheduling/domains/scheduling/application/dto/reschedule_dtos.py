# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Data Transfer Objects for appointment rescheduling.
# ============================================================================
"""Reschedule DTOs."""

from dataclasses import dataclass
from datetime import datetime

from ...domain.entities.appointment import Appointment
from ...domain.value_objects.reason_code import AppointmentReasonCode


@dataclass(frozen=True)
class RescheduleAppointmentRequest:
    """Request DTO for replacing an appointment with a new one.

    ``new_service_ids`` left as None reuses the original services.
    ``new_participant_codes`` left as None books the new appointment
    without participants.
    """

    appointment_code: str
    new_start_time: datetime
    new_employee_code: str
    new_room_code: str
    reason_code: AppointmentReasonCode
    new_participant_codes: tuple[str, ...] | None = None
    new_service_ids: tuple[int, ...] | None = None
    cancel_notes: str | None = None


@dataclass(frozen=True)
class RescheduleResult:
    """The paired outcome of a successful reschedule."""

    cancelled_appointment: Appointment
    new_appointment: Appointment

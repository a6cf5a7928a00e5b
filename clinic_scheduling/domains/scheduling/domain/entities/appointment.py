"""Appointment Entity.

Read projection of a booked appointment as returned by the clinic backend.
The backend owns the record; this client never mutates it locally.
"""

from dataclasses import dataclass, field
from datetime import datetime

from ..value_objects.appointment_status import AppointmentStatus


@dataclass(frozen=True)
class PatientRef:
    patient_code: str
    full_name: str = ""


@dataclass(frozen=True)
class EmployeeRef:
    """Doctor or participant reference."""

    employee_code: str
    full_name: str = ""
    role: str | None = None


@dataclass(frozen=True)
class RoomRef:
    room_code: str
    room_name: str = ""


@dataclass(frozen=True)
class ServiceRef:
    service_code: str
    service_name: str = ""
    service_id: int | None = None


@dataclass
class Appointment:
    """Booked appointment with its patient, doctor, room, services and participants."""

    appointment_code: str
    status: AppointmentStatus
    start_time: datetime
    end_time: datetime | None = None
    patient: PatientRef | None = None
    doctor: EmployeeRef | None = None
    room: RoomRef | None = None
    services: list[ServiceRef] = field(default_factory=list)
    participants: list[EmployeeRef] = field(default_factory=list)
    cancellation_reason: str | None = None
    notes: str | None = None

    @property
    def service_codes(self) -> list[str]:
        """Service codes in backend order."""
        return [service.service_code for service in self.services]

    @property
    def participant_codes(self) -> list[str]:
        return [participant.employee_code for participant in self.participants]

    def is_active(self) -> bool:
        """Can this appointment still be rescheduled?"""
        return self.status.can_be_rescheduled()

    def is_cancelled(self) -> bool:
        return self.status == AppointmentStatus.CANCELLED

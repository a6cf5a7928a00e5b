# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Pydantic models for clinic backend payloads.
# ============================================================================
"""Clinic API Wire Models.

Parse backend JSON into domain entities. Shift endpoints answer in
snake_case and appointment endpoints in camelCase, so every field accepts both.
"""

from datetime import date, datetime, time
from typing import Any, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from clinic_scheduling.core.domain.exceptions import IntegrationException

from ...domain.entities.appointment import Appointment, EmployeeRef, PatientRef, RoomRef, ServiceRef
from ...domain.entities.shift import EmployeeShift, EmployeeSummary, ShiftSummaryRow, WorkShiftTemplate
from ...domain.value_objects.appointment_status import AppointmentStatus
from ...domain.value_objects.shift_status import ShiftSource, ShiftStatus


def _either(snake: str, camel: str, *extra: str) -> AliasChoices:
    return AliasChoices(snake, camel, *extra)


class WireModel(BaseModel):
    """Base for backend payloads. Unknown fields are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


M = TypeVar("M", bound=WireModel)


def parse_wire(model: type[M], data: Any, what: str) -> M:
    """Validate a backend payload.

    Raises:
        IntegrationException: The payload does not match the expected shape.
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise IntegrationException("clinic_api", f"Malformed {what} payload from the clinic server", e) from e


# =============================================================================
# Shifts
# =============================================================================


class WorkShiftWire(WireModel):
    work_shift_id: str = Field(validation_alias=_either("work_shift_id", "workShiftId", "shift_id", "shiftId"))
    shift_name: str = Field("", validation_alias=_either("shift_name", "shiftName"))
    start_time: time = Field(validation_alias=_either("start_time", "startTime"))
    end_time: time = Field(validation_alias=_either("end_time", "endTime"))

    def to_entity(self) -> WorkShiftTemplate:
        return WorkShiftTemplate(
            shift_id=self.work_shift_id,
            shift_name=self.shift_name,
            start_time=self.start_time,
            end_time=self.end_time,
        )


class EmployeeWire(WireModel):
    employee_id: int = Field(validation_alias=_either("employee_id", "employeeId"))
    full_name: str = Field("", validation_alias=_either("full_name", "fullName"))
    position: str | None = None

    def to_entity(self) -> EmployeeSummary:
        return EmployeeSummary(employee_id=self.employee_id, full_name=self.full_name, position=self.position)


class EmployeeShiftWire(WireModel):
    employee_shift_id: str = Field(validation_alias=_either("employee_shift_id", "employeeShiftId"))
    work_date: date = Field(validation_alias=_either("work_date", "workDate"))
    status: ShiftStatus = ShiftStatus.SCHEDULED
    source: ShiftSource = Field(ShiftSource.MANUAL_ENTRY, validation_alias=_either("source", "shiftType", "shift_type"))
    notes: str | None = None
    employee: EmployeeWire
    work_shift: WorkShiftWire = Field(validation_alias=_either("work_shift", "workShift"))
    created_at: datetime | None = Field(None, validation_alias=_either("created_at", "createdAt"))
    updated_at: datetime | None = Field(None, validation_alias=_either("updated_at", "updatedAt"))

    @field_validator("employee_shift_id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("source", mode="before")
    @classmethod
    def normalize_source(cls, v: Any) -> Any:
        """Map legacy shift type names onto ShiftSource. Unknown values count as manual."""
        if v is None:
            return ShiftSource.MANUAL_ENTRY
        value = str(v).strip().upper()
        if value == "BATCH_DEFAULT":
            return ShiftSource.BATCH_JOB
        if value in ShiftSource.__members__:
            return ShiftSource(value)
        return ShiftSource.MANUAL_ENTRY

    def to_entity(self) -> EmployeeShift:
        return EmployeeShift(
            employee_shift_id=self.employee_shift_id,
            employee=self.employee.to_entity(),
            work_date=self.work_date,
            work_shift=self.work_shift.to_entity(),
            status=self.status,
            source=self.source,
            notes=self.notes,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class ShiftSummaryWire(WireModel):
    work_date: date = Field(validation_alias=_either("work_date", "workDate"))
    total_shifts: int = Field(0, validation_alias=_either("total_shifts", "totalShifts"))
    status_breakdown: dict[str, int] = Field(
        default_factory=dict, validation_alias=_either("status_breakdown", "statusBreakdown")
    )

    def to_entity(self) -> ShiftSummaryRow:
        return ShiftSummaryRow(
            work_date=self.work_date,
            total_shifts=self.total_shifts,
            status_breakdown=dict(self.status_breakdown),
        )


class PageWire(WireModel):
    """Page envelope shared by every list endpoint."""

    content: list[dict[str, Any]] = Field(default_factory=list)
    total_elements: int = Field(0, validation_alias=_either("total_elements", "totalElements"))
    total_pages: int = Field(0, validation_alias=_either("total_pages", "totalPages"))
    first: bool = True
    last: bool = True
    number: int = 0
    size: int = 0


# =============================================================================
# Appointments
# =============================================================================


class PatientWire(WireModel):
    patient_code: str = Field(validation_alias=_either("patient_code", "patientCode"))
    full_name: str = Field("", validation_alias=_either("full_name", "fullName"))


class EmployeeRefWire(WireModel):
    employee_code: str = Field(validation_alias=_either("employee_code", "employeeCode"))
    full_name: str = Field("", validation_alias=_either("full_name", "fullName"))
    role: str | None = None


class RoomWire(WireModel):
    room_code: str = Field(validation_alias=_either("room_code", "roomCode"))
    room_name: str = Field("", validation_alias=_either("room_name", "roomName"))


class ServiceWire(WireModel):
    service_code: str = Field(validation_alias=_either("service_code", "serviceCode"))
    service_name: str = Field("", validation_alias=_either("service_name", "serviceName"))
    service_id: int | None = Field(None, validation_alias=_either("service_id", "serviceId"))


class AppointmentWire(WireModel):
    appointment_code: str = Field(validation_alias=_either("appointment_code", "appointmentCode"))
    status: AppointmentStatus
    appointment_start_time: datetime = Field(
        validation_alias=_either("appointment_start_time", "appointmentStartTime")
    )
    appointment_end_time: datetime | None = Field(
        None, validation_alias=_either("appointment_end_time", "appointmentEndTime")
    )
    patient: PatientWire | None = None
    doctor: EmployeeRefWire | None = None
    room: RoomWire | None = None
    services: list[ServiceWire] = Field(default_factory=list)
    participants: list[EmployeeRefWire] = Field(default_factory=list)
    cancellation_reason: str | None = Field(None, validation_alias=_either("cancellation_reason", "cancellationReason"))
    notes: str | None = None

    @field_validator("services", "participants", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def to_entity(self) -> Appointment:
        return Appointment(
            appointment_code=self.appointment_code,
            status=self.status,
            start_time=self.appointment_start_time,
            end_time=self.appointment_end_time,
            patient=PatientRef(self.patient.patient_code, self.patient.full_name) if self.patient else None,
            doctor=(
                EmployeeRef(self.doctor.employee_code, self.doctor.full_name, self.doctor.role)
                if self.doctor
                else None
            ),
            room=RoomRef(self.room.room_code, self.room.room_name) if self.room else None,
            services=[ServiceRef(s.service_code, s.service_name, s.service_id) for s in self.services],
            participants=[EmployeeRef(p.employee_code, p.full_name, p.role) for p in self.participants],
            cancellation_reason=self.cancellation_reason,
            notes=self.notes,
        )


class RescheduleResponseWire(WireModel):
    cancelled_appointment: AppointmentWire = Field(
        validation_alias=_either("cancelled_appointment", "cancelledAppointment")
    )
    new_appointment: AppointmentWire = Field(validation_alias=_either("new_appointment", "newAppointment"))

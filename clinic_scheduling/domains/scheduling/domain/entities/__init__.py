# Domain Entities
from .appointment import Appointment, EmployeeRef, PatientRef, RoomRef, ServiceRef
from .shift import EmployeeShift, EmployeeSummary, Holiday, ShiftSummaryRow, WorkShiftTemplate

__all__ = [
    "Appointment",
    "EmployeeRef",
    "EmployeeShift",
    "EmployeeSummary",
    "Holiday",
    "PatientRef",
    "RoomRef",
    "ServiceRef",
    "ShiftSummaryRow",
    "WorkShiftTemplate",
]

"""Appointment Reason Code Value Object."""

from enum import Enum


class AppointmentReasonCode(str, Enum):
    """Justification recorded when an appointment is cancelled or rescheduled."""

    PREVIOUS_CASE_OVERRUN = "PREVIOUS_CASE_OVERRUN"
    DOCTOR_UNAVAILABLE = "DOCTOR_UNAVAILABLE"
    EQUIPMENT_FAILURE = "EQUIPMENT_FAILURE"
    PATIENT_REQUEST = "PATIENT_REQUEST"
    OPERATIONAL_REDIRECT = "OPERATIONAL_REDIRECT"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        """Human readable label."""
        labels = {
            "PREVIOUS_CASE_OVERRUN": "Previous case ran over",
            "DOCTOR_UNAVAILABLE": "Doctor unexpectedly unavailable",
            "EQUIPMENT_FAILURE": "Equipment failure or maintenance",
            "PATIENT_REQUEST": "Patient requested a change",
            "OPERATIONAL_REDIRECT": "Operational redirect",
            "OTHER": "Other reason",
        }
        return labels.get(self.value, self.value)

    @property
    def requires_notes(self) -> bool:
        """OTHER is the only reason that needs free-text notes."""
        return self == AppointmentReasonCode.OTHER

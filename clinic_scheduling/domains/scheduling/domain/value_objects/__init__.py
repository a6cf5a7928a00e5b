# Domain Value Objects
from .appointment_status import AppointmentStatus
from .capability import Capability, CapabilitySet
from .conflict_kind import ConflictCategory, ConflictKind
from .reason_code import AppointmentReasonCode
from .shift_status import ShiftSource, ShiftStatus

__all__ = [
    "AppointmentReasonCode",
    "AppointmentStatus",
    "Capability",
    "CapabilitySet",
    "ConflictCategory",
    "ConflictKind",
    "ShiftSource",
    "ShiftStatus",
]

# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Data Transfer Objects exports.
# ============================================================================
"""Application DTOs for the Scheduling domain."""

from .reschedule_dtos import RescheduleAppointmentRequest, RescheduleResult
from .shift_dtos import AvailabilityResult, CreateShiftRequest, ListShiftsQuery, UpdateShiftRequest

__all__ = [
    # Request DTOs
    "CreateShiftRequest",
    "ListShiftsQuery",
    "RescheduleAppointmentRequest",
    "UpdateShiftRequest",
    # Response DTOs
    "AvailabilityResult",
    "RescheduleResult",
]

# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use Cases exports.
# ============================================================================
"""Application Use Cases for the Scheduling domain."""

from .reschedule_appointment import RescheduleAppointmentUseCase

__all__ = [
    "RescheduleAppointmentUseCase",
]

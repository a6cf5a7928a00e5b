# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Ports (interfaces) for the clinic backend.
# ============================================================================
"""Scheduling Application Ports.

Segregated Interfaces:
- IShiftGateway: Employee shift and work shift template operations
- IAppointmentGateway: Appointment detail and reschedule
"""

from .appointment_port import IAppointmentGateway
from .response import ExternalResponse
from .shift_port import IShiftGateway

__all__ = [
    "ExternalResponse",
    "IAppointmentGateway",
    "IShiftGateway",
]

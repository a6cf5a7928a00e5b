# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Appointment port (ISP compliant).
# ============================================================================
"""Appointment Port.

Defines the interface for the appointment operations the scheduling core needs.
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .response import ExternalResponse


@runtime_checkable
class IAppointmentGateway(Protocol):
    """Interface for appointment operations.

    Implementations: ClinicApiClient
    """

    async def get_appointment(self, appointment_code: str) -> "ExternalResponse":
        """Get appointment detail by code.

        Args:
            appointment_code: Appointment code (e.g. "APT-20250401-001").

        Returns:
            ExternalResponse with the appointment detail or error.
        """
        ...

    async def reschedule_appointment(self, appointment_code: str, payload: dict[str, Any]) -> "ExternalResponse":
        """Atomically cancel an appointment and create its replacement.

        Args:
            appointment_code: Code of the appointment being replaced.
            payload: Request body, already stripped of omitted optional fields.

        Returns:
            ExternalResponse with ``{cancelledAppointment, newAppointment}`` or error.
        """
        ...

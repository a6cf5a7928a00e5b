# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Employee shift port (ISP compliant).
# ============================================================================
"""Employee Shift Port.

Defines the interface for employee shift and work shift template operations.
"""

from datetime import date
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .response import ExternalResponse


@runtime_checkable
class IShiftGateway(Protocol):
    """Interface for employee shift operations.

    Implementations: ClinicApiClient
    """

    async def list_shifts(
        self,
        start_date: date,
        end_date: date,
        employee_id: int | None = None,
        status: str | None = None,
        page: int = 0,
        size: int = 50,
        sort: str | None = None,
    ) -> "ExternalResponse":
        """List one page of shifts in a date range.

        Returns:
            ExternalResponse whose data is a page envelope.
        """
        ...

    async def get_shift(self, shift_id: str) -> "ExternalResponse":
        """Get one shift by id."""
        ...

    async def get_shift_summary(
        self,
        start_date: date,
        end_date: date,
        employee_id: int | None = None,
    ) -> "ExternalResponse":
        """Get per-date shift counts for a date range."""
        ...

    async def create_shift(
        self,
        employee_id: int,
        work_date: date,
        work_shift_id: str,
        notes: str | None = None,
    ) -> "ExternalResponse":
        """Create a manual shift.

        Returns:
            ExternalResponse with the created shift, or HOLIDAY_CONFLICT,
            SLOT_CONFLICT, RELATED_RESOURCE_NOT_FOUND, FORBIDDEN.
        """
        ...

    async def update_shift(
        self,
        shift_id: str,
        status: str | None = None,
        notes: str | None = None,
    ) -> "ExternalResponse":
        """Update status and/or notes of a shift.

        Returns:
            ExternalResponse with the updated shift, or SHIFT_FINALIZED,
            INVALID_STATUS_TRANSITION, FORBIDDEN, SHIFT_NOT_FOUND.
        """
        ...

    async def delete_shift(self, shift_id: str) -> "ExternalResponse":
        """Cancel a shift (soft delete).

        Returns:
            ExternalResponse with no data, or CANNOT_CANCEL_BATCH,
            CANNOT_CANCEL_COMPLETED, FORBIDDEN, SHIFT_NOT_FOUND.
        """
        ...

    async def list_work_shifts(self) -> "ExternalResponse":
        """List work shift templates."""
        ...

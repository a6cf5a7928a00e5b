# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Data Transfer Objects for shift operations.
# ============================================================================
"""Shift DTOs.

Data Transfer Objects for listing, creating, updating and cancelling
employee shifts, and for availability lookups.
"""

from dataclasses import dataclass, field
from datetime import date

from ...domain.entities.shift import EmployeeShift
from ...domain.value_objects.shift_status import ShiftStatus

# =============================================================================
# Request DTOs
# =============================================================================


@dataclass(frozen=True)
class ListShiftsQuery:
    """Query DTO for listing shifts in a date range."""

    start_date: date
    end_date: date
    employee_id: int | None = None
    status: ShiftStatus | None = None
    sort: str | None = "workDate,asc"


@dataclass(frozen=True)
class CreateShiftRequest:
    """Request DTO for creating a manual shift."""

    employee_id: int
    work_date: date
    work_shift_id: str
    notes: str | None = None


@dataclass(frozen=True)
class UpdateShiftRequest:
    """Request DTO for updating a shift's status and/or notes."""

    shift_id: str
    status: ShiftStatus | None = None
    notes: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.status is None and self.notes is None


# =============================================================================
# Response DTOs
# =============================================================================


@dataclass
class AvailabilityResult:
    """Bookable shift windows of one employee on one date.

    Attributes:
        employee_id: Employee the windows belong to.
        target_date: Date that was asked for.
        shifts: SCHEDULED shifts on that date, ordered by start time.
        dates_with_shifts: Every date of the containing month that has a SCHEDULED shift.
        outside_shift: True when a requested start time falls outside every window.
    """

    employee_id: int
    target_date: date
    shifts: list[EmployeeShift] = field(default_factory=list)
    dates_with_shifts: list[date] = field(default_factory=list)
    outside_shift: bool = False

    @property
    def no_shift_scheduled(self) -> bool:
        """Hard warning: the employee has no shift on the date."""
        return not self.shifts

    @property
    def warnings(self) -> list[str]:
        messages: list[str] = []
        if self.no_shift_scheduled:
            messages.append(f"Employee {self.employee_id} has no shift scheduled on {self.target_date.isoformat()}")
        elif self.outside_shift:
            messages.append(f"The selected time is outside the shifts of employee {self.employee_id}")
        return messages

"""Shift Entities.

Work shift templates and the per-employee, per-date shift assignments
that reference them.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from ..value_objects.shift_status import ShiftSource, ShiftStatus


@dataclass(frozen=True)
class WorkShiftTemplate:
    """Reusable named time-of-day window (e.g. "Morning", 08:00-12:00).

    Immutable reference data. Assignments point at it, they never copy it.
    """

    shift_id: str
    shift_name: str
    start_time: time
    end_time: time

    @property
    def is_overnight(self) -> bool:
        return self.end_time <= self.start_time

    def contains(self, moment: time) -> bool:
        """Check whether a wall-clock time falls inside the window.

        The window is half-open: start inclusive, end exclusive.
        """
        if self.is_overnight:
            return moment >= self.start_time or moment < self.end_time
        return self.start_time <= moment < self.end_time

    @property
    def label(self) -> str:
        """Label for calendars, e.g. "Morning (08:00 - 12:00)"."""
        return f"{self.shift_name} ({self.start_time.strftime('%H:%M')} - {self.end_time.strftime('%H:%M')})"


@dataclass(frozen=True)
class EmployeeSummary:
    """Employee summary embedded in shift payloads."""

    employee_id: int
    full_name: str = ""
    position: str | None = None


@dataclass
class EmployeeShift:
    """One employee's assignment to one work shift template on one date.

    The backend allows at most one non-cancelled shift per
    (employee, work date, template). Shifts are never physically deleted:
    cancelling is a status transition.
    """

    employee_shift_id: str
    employee: EmployeeSummary
    work_date: date
    work_shift: WorkShiftTemplate
    status: ShiftStatus = ShiftStatus.SCHEDULED
    source: ShiftSource = ShiftSource.MANUAL_ENTRY
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def employee_id(self) -> int:
        return self.employee.employee_id

    @property
    def work_shift_id(self) -> str:
        return self.work_shift.shift_id

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.work_date, self.work_shift.start_time)

    @property
    def ends_at(self) -> datetime:
        """End of the shift. Overnight shifts end on the following day."""
        end = datetime.combine(self.work_date, self.work_shift.end_time)
        if self.work_shift.is_overnight:
            end += timedelta(days=1)
        return end

    def is_finalized(self) -> bool:
        return self.status.is_finalized()

    def is_bookable(self) -> bool:
        """Only SCHEDULED shifts make the employee available."""
        return self.status.is_bookable()

    def covers(self, moment: datetime) -> bool:
        """Check whether a moment falls inside the shift, start inclusive, end exclusive.

        Overnight shifts cover the early hours of the following day.
        """
        return self.starts_at <= moment < self.ends_at


@dataclass(frozen=True)
class ShiftSummaryRow:
    """Per-date shift counts returned by the summary endpoint."""

    work_date: date
    total_shifts: int
    status_breakdown: dict[str, int] = field(default_factory=dict)

    def count(self, status: ShiftStatus) -> int:
        return self.status_breakdown.get(status.value, 0)


@dataclass(frozen=True)
class Holiday:
    """Declared clinic holiday, read from the holiday calendar."""

    holiday_date: date
    holiday_name: str = ""
    definition_id: str | None = None

# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Projects shifts and holidays into calendar events.
# ============================================================================
"""Calendar Projector.

Converts shifts into time-blocked calendar events colored by status, and
holidays into all-day background events.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Any, Iterable

from ...domain.entities.shift import EmployeeShift, Holiday
from ...domain.value_objects.shift_status import ShiftStatus

logger = logging.getLogger(__name__)

STATUS_COLORS: dict[ShiftStatus, str] = {
    ShiftStatus.SCHEDULED: "#3b82f6",
    ShiftStatus.COMPLETED: "#10b981",
    ShiftStatus.CANCELLED: "#6b7280",
    ShiftStatus.ON_LEAVE: "#f59e0b",
    ShiftStatus.ABSENT: "#ef4444",
}

HOLIDAY_BACKGROUND = "#fef3c7"
HOLIDAY_BORDER = "#f59e0b"

# Every status must be colored before anything is rendered
_uncolored = [status.value for status in ShiftStatus if status not in STATUS_COLORS]
if _uncolored:
    raise RuntimeError(f"Shift statuses without a calendar color: {_uncolored}")


@dataclass(frozen=True)
class CalendarEvent:
    """Renderable calendar event."""

    event_id: str
    title: str
    start: datetime
    end: datetime | None
    background_color: str
    border_color: str
    text_color: str = "#ffffff"
    all_day: bool = False
    display: str = "auto"
    extended_props: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Event in the field names calendar widgets expect."""
        return {
            "id": self.event_id,
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat() if self.end else None,
            "allDay": self.all_day,
            "backgroundColor": self.background_color,
            "borderColor": self.border_color,
            "textColor": self.text_color,
            "display": self.display,
            "extendedProps": self.extended_props,
        }


class CalendarProjector:
    """Builds calendar events from shifts and holidays."""

    def project(self, shifts: Iterable[EmployeeShift]) -> list[CalendarEvent]:
        """Project shifts into events, ordered by start.

        Args:
            shifts: Shifts of any status.

        Returns:
            One event per shift.
        """
        events = [self._shift_event(shift) for shift in shifts]
        events.sort(key=lambda event: (event.start, event.event_id))
        logger.debug(f"Projected {len(events)} shift events")
        return events

    def project_holidays(self, holidays: Iterable[Holiday]) -> list[CalendarEvent]:
        """Project holidays into all-day background events."""
        return [
            CalendarEvent(
                event_id=f"holiday-{holiday.holiday_date.isoformat()}-{holiday.definition_id or ''}",
                title=holiday.holiday_name or "Holiday",
                start=datetime.combine(holiday.holiday_date, time.min),
                end=None,
                background_color=HOLIDAY_BACKGROUND,
                border_color=HOLIDAY_BORDER,
                text_color="#000000",
                all_day=True,
                display="background",
                extended_props={"is_holiday": True, "holiday_date": holiday.holiday_date.isoformat()},
            )
            for holiday in holidays
        ]

    def project_calendar(
        self,
        shifts: Iterable[EmployeeShift],
        holidays: Iterable[Holiday] = (),
    ) -> list[CalendarEvent]:
        """Shift events followed by holiday background events."""
        return self.project(shifts) + self.project_holidays(holidays)

    @staticmethod
    def color_for(status: ShiftStatus) -> str:
        return STATUS_COLORS[status]

    def _shift_event(self, shift: EmployeeShift) -> CalendarEvent:
        employee_name = shift.employee.full_name or f"Employee {shift.employee_id}"
        color = self.color_for(shift.status)
        return CalendarEvent(
            event_id=shift.employee_shift_id,
            title=f"{employee_name} - {shift.work_shift.shift_name or shift.work_shift_id}",
            start=shift.starts_at,
            end=shift.ends_at,
            background_color=color,
            border_color=color,
            extended_props={
                "is_holiday": False,
                "employee_id": shift.employee_id,
                "status": shift.status.value,
                "source": shift.source.value,
                "work_shift_id": shift.work_shift_id,
            },
        )

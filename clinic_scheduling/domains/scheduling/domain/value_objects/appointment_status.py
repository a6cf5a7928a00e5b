"""Appointment Status Value Object.

Appointment lifecycle states as reported by the clinic backend.
"""

from enum import Enum


class AppointmentStatus(str, Enum):
    """Appointment states."""

    SCHEDULED = "SCHEDULED"
    CHECKED_IN = "CHECKED_IN"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"

    @property
    def display_name(self) -> str:
        """Display name."""
        return self.value.replace("_", " ").capitalize()

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        """Validate a status transition.

        State machine:
        - SCHEDULED -> CHECKED_IN, CANCELLED, NO_SHOW
        - CHECKED_IN -> IN_PROGRESS, CANCELLED
        - IN_PROGRESS -> COMPLETED, CANCELLED
        - COMPLETED, CANCELLED, NO_SHOW -> (final state)
        """
        transitions: dict[str, list[str]] = {
            "SCHEDULED": ["CHECKED_IN", "CANCELLED", "NO_SHOW"],
            "CHECKED_IN": ["IN_PROGRESS", "CANCELLED"],
            "IN_PROGRESS": ["COMPLETED", "CANCELLED"],
            "COMPLETED": [],
            "CANCELLED": [],
            "NO_SHOW": [],
        }
        return new_status.value in transitions.get(self.value, [])

    def is_final(self) -> bool:
        """Is this a final state?"""
        return self in (AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED, AppointmentStatus.NO_SHOW)

    def can_be_rescheduled(self) -> bool:
        """Only appointments that have not started may be rescheduled."""
        return self in (AppointmentStatus.SCHEDULED, AppointmentStatus.CHECKED_IN)

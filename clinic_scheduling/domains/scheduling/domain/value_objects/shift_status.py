"""Shift Status Value Objects.

Defines the employee shift lifecycle states, their manual transitions,
and where a shift came from.
"""

from enum import Enum


class ShiftStatus(str, Enum):
    """Employee shift states with the manual-edit state machine."""

    SCHEDULED = "SCHEDULED"  # Initial state
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    ON_LEAVE = "ON_LEAVE"  # Only set by the leave-request workflow
    ABSENT = "ABSENT"

    @property
    def display_name(self) -> str:
        """Display name for calendars and lists."""
        names = {
            "SCHEDULED": "Scheduled",
            "COMPLETED": "Completed",
            "CANCELLED": "Cancelled",
            "ON_LEAVE": "On leave",
            "ABSENT": "Absent",
        }
        return names.get(self.value, self.value)

    def can_transition_to(self, new_status: "ShiftStatus") -> bool:
        """Check whether a manual status update is allowed.

        State machine (manual edits only):
        - SCHEDULED -> COMPLETED, CANCELLED, ABSENT
        - COMPLETED -> (final state)
        - CANCELLED -> (final state)
        - ON_LEAVE  -> (terminal for manual edits)
        - ABSENT    -> (terminal for manual edits)

        ON_LEAVE is never a valid manual target.
        """
        transitions: dict[str, list[str]] = {
            "SCHEDULED": ["COMPLETED", "CANCELLED", "ABSENT"],
            "COMPLETED": [],
            "CANCELLED": [],
            "ON_LEAVE": [],
            "ABSENT": [],
        }
        return new_status.value in transitions.get(self.value, [])

    def is_finalized(self) -> bool:
        """Is the shift closed to any further edit?"""
        return self in (ShiftStatus.COMPLETED, ShiftStatus.CANCELLED)

    def is_bookable(self) -> bool:
        """Does this status make the employee available for appointments?"""
        return self == ShiftStatus.SCHEDULED


class ShiftSource(str, Enum):
    """Origin of an employee shift record."""

    BATCH_JOB = "BATCH_JOB"  # Full-time default roster
    REGISTRATION_JOB = "REGISTRATION_JOB"  # Generated from an approved fixed registration
    MANUAL_ENTRY = "MANUAL_ENTRY"
    OT_APPROVAL = "OT_APPROVAL"  # Approved overtime request

    @property
    def is_batch_default(self) -> bool:
        """Batch-generated defaults cannot be cancelled directly, only via a leave request."""
        return self in (ShiftSource.BATCH_JOB, ShiftSource.REGISTRATION_JOB)

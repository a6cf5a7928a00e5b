"""Shift Transition Policy.

Advisory client-side guard for shift edits. It mirrors the backend's
rule order and reports the same error code the backend would answer with,
so a blocked edit classifies exactly like a backend rejection.
"""

from dataclasses import dataclass

from ..entities.shift import EmployeeShift
from ..value_objects.shift_status import ShiftStatus


@dataclass(frozen=True)
class ShiftRuleViolation:
    """Rule a shift edit would break.

    Attributes:
        code: Backend error code the request would be rejected with.
        message: Human readable explanation.
    """

    code: str
    message: str


class ShiftTransitionPolicy:
    """Evaluates manual shift edits against the shift state machine."""

    @staticmethod
    def check_update(shift: EmployeeShift, new_status: ShiftStatus | None) -> ShiftRuleViolation | None:
        """Check a PATCH of status and/or notes.

        Rule order:
        1. COMPLETED or CANCELLED shifts are finalized, whatever the target.
        2. ON_LEAVE is never a manual target.
        3. Any other status change must be an allowed transition.

        A notes-only edit (``new_status`` None) passes once the shift is not finalized.

        Returns:
            The violation, or None when the edit may be sent.
        """
        if shift.is_finalized():
            return ShiftRuleViolation(
                code="SHIFT_FINALIZED",
                message=f"Shift {shift.employee_shift_id} is {shift.status.value} and can no longer be updated",
            )

        if new_status is None:
            return None

        if new_status == ShiftStatus.ON_LEAVE:
            return ShiftRuleViolation(
                code="INVALID_STATUS_TRANSITION",
                message="ON_LEAVE can only be set through an approved leave request",
            )

        if new_status == shift.status:
            return None

        if not shift.status.can_transition_to(new_status):
            return ShiftRuleViolation(
                code="INVALID_STATUS_TRANSITION",
                message=f"Cannot change shift status from {shift.status.value} to {new_status.value}",
            )

        return None

    @staticmethod
    def check_cancel(shift: EmployeeShift) -> ShiftRuleViolation | None:
        """Check a DELETE (cancel) of a shift.

        Rule order:
        1. COMPLETED shifts cannot be cancelled.
        2. CANCELLED shifts are already cancelled.
        3. Batch-generated defaults are protected even while SCHEDULED.
        4. ON_LEAVE and ABSENT are terminal for manual edits.
        """
        if shift.status == ShiftStatus.COMPLETED:
            return ShiftRuleViolation(
                code="CANNOT_CANCEL_COMPLETED",
                message=f"Shift {shift.employee_shift_id} is completed and cannot be cancelled",
            )

        if shift.status == ShiftStatus.CANCELLED:
            return ShiftRuleViolation(
                code="INVALID_STATUS_TRANSITION",
                message=f"Shift {shift.employee_shift_id} is already cancelled",
            )

        if shift.source.is_batch_default:
            return ShiftRuleViolation(
                code="CANNOT_CANCEL_BATCH",
                message="Default shifts of full-time staff cannot be cancelled. Submit a leave request instead",
            )

        if not shift.status.can_transition_to(ShiftStatus.CANCELLED):
            return ShiftRuleViolation(
                code="INVALID_STATUS_TRANSITION",
                message=f"Cannot cancel a shift in status {shift.status.value}",
            )

        return None

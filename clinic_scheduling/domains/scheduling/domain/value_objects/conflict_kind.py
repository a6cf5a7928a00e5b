"""Conflict Kind Value Objects.

Closed taxonomy of scheduling rejections. Every kind belongs to exactly one
category and carries exactly one user-facing message.
"""

from enum import Enum


class ConflictCategory(str, Enum):
    """Coarse grouping of conflict kinds."""

    SCHEDULING_CONFLICT = "scheduling_conflict"
    ILLEGAL_STATE_TRANSITION = "illegal_state_transition"
    POLICY_VIOLATION = "policy_violation"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    UNCLASSIFIED = "unclassified"


class ConflictKind(str, Enum):
    """Classified rejection of a scheduling operation."""

    HOLIDAY_CONFLICT = "HOLIDAY_CONFLICT"
    SLOT_CONFLICT = "SLOT_CONFLICT"
    SHIFT_FINALIZED = "SHIFT_FINALIZED"
    ILLEGAL_STATUS_TRANSITION = "ILLEGAL_STATUS_TRANSITION"
    CANNOT_CANCEL_BATCH = "CANNOT_CANCEL_BATCH"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNCLASSIFIED = "UNCLASSIFIED"

    @property
    def category(self) -> ConflictCategory:
        return _CATEGORIES[self]

    @property
    def user_message(self) -> str | None:
        """Fixed message shown to the user. None for UNCLASSIFIED, which shows the raw message."""
        return _USER_MESSAGES.get(self)


_CATEGORIES: dict[ConflictKind, ConflictCategory] = {
    ConflictKind.HOLIDAY_CONFLICT: ConflictCategory.SCHEDULING_CONFLICT,
    ConflictKind.SLOT_CONFLICT: ConflictCategory.SCHEDULING_CONFLICT,
    ConflictKind.SHIFT_FINALIZED: ConflictCategory.ILLEGAL_STATE_TRANSITION,
    ConflictKind.ILLEGAL_STATUS_TRANSITION: ConflictCategory.ILLEGAL_STATE_TRANSITION,
    ConflictKind.CANNOT_CANCEL_BATCH: ConflictCategory.POLICY_VIOLATION,
    ConflictKind.RESOURCE_NOT_FOUND: ConflictCategory.NOT_FOUND,
    ConflictKind.FORBIDDEN: ConflictCategory.AUTHORIZATION,
    ConflictKind.VALIDATION_FAILED: ConflictCategory.VALIDATION,
    ConflictKind.UNCLASSIFIED: ConflictCategory.UNCLASSIFIED,
}

_USER_MESSAGES: dict[ConflictKind, str] = {
    ConflictKind.HOLIDAY_CONFLICT: "The selected date is a clinic holiday.",
    ConflictKind.SLOT_CONFLICT: "The selected time slot is already taken.",
    ConflictKind.SHIFT_FINALIZED: "This shift is finalized and can no longer be changed.",
    ConflictKind.ILLEGAL_STATUS_TRANSITION: "This status change is not allowed.",
    ConflictKind.CANNOT_CANCEL_BATCH: (
        "Default shifts of full-time staff cannot be cancelled. Submit a leave request instead."
    ),
    ConflictKind.RESOURCE_NOT_FOUND: "The requested record no longer exists.",
    ConflictKind.FORBIDDEN: "You do not have permission to perform this action.",
    ConflictKind.VALIDATION_FAILED: "Some of the submitted values are invalid.",
}

# Every kind must resolve to a category at import
_missing = [kind.value for kind in ConflictKind if kind not in _CATEGORIES]
if _missing:
    raise RuntimeError(f"Conflict kinds without a category: {_missing}")

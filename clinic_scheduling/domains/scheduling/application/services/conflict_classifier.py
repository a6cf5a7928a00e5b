# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Maps backend rejections onto the closed conflict taxonomy.
# ============================================================================
"""Conflict Classifier.

Turns a backend rejection (machine-readable code plus human message) into a
ClassifiedConflict. Only the code is matched. The message is carried for
display and is never parsed.
"""

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...domain.value_objects.conflict_kind import ConflictCategory, ConflictKind

if TYPE_CHECKING:
    from ..ports.response import ExternalResponse

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


@dataclass(frozen=True)
class ClassifiedConflict:
    """A backend or client-side rejection placed in the conflict taxonomy.

    Attributes:
        kind: Conflict kind.
        code: Normalized error code that produced the kind.
        raw_message: Message from the backend (or the client-side guard).
        status_code: HTTP status, when the rejection came over the wire.
    """

    kind: ConflictKind
    code: str | None = None
    raw_message: str | None = None
    status_code: int | None = None

    @property
    def category(self) -> ConflictCategory:
        return self.kind.category

    @property
    def user_message(self) -> str:
        """Fixed message for the kind. Unclassified rejections show the raw message."""
        fixed = self.kind.user_message
        if fixed:
            return fixed
        return self.raw_message or self.code or "The clinic server rejected the request."

    @property
    def is_outside_shift(self) -> bool:
        """Was the slot rejected because the employee has no covering shift?"""
        return bool(self.code) and self.code in ConflictClassifier.OUTSIDE_SHIFT_CODES


class ConflictClassifier:
    """Classifies backend error codes into conflict kinds."""

    CODE_KINDS: dict[str, ConflictKind] = {
        # Scheduling conflicts
        "HOLIDAY_CONFLICT": ConflictKind.HOLIDAY_CONFLICT,
        "SLOT_CONFLICT": ConflictKind.SLOT_CONFLICT,
        "TIME_OVERLAP_CONFLICT": ConflictKind.SLOT_CONFLICT,
        "ROOM_SLOT_TAKEN": ConflictKind.SLOT_CONFLICT,
        "EMPLOYEE_SLOT_TAKEN": ConflictKind.SLOT_CONFLICT,
        "PARTICIPANT_SLOT_TAKEN": ConflictKind.SLOT_CONFLICT,
        "PATIENT_HAS_CONFLICT": ConflictKind.SLOT_CONFLICT,
        "EMPLOYEE_NOT_SCHEDULED": ConflictKind.SLOT_CONFLICT,
        "EMPLOYEE_SHIFT_NOT_COVERING": ConflictKind.SLOT_CONFLICT,
        "PARTICIPANT_NOT_SCHEDULED": ConflictKind.SLOT_CONFLICT,
        "PARTICIPANT_SHIFT_NOT_COVERING": ConflictKind.SLOT_CONFLICT,
        # Illegal state transitions
        "SHIFT_FINALIZED": ConflictKind.SHIFT_FINALIZED,
        "CANNOT_CANCEL_COMPLETED": ConflictKind.SHIFT_FINALIZED,
        "INVALID_STATUS_TRANSITION": ConflictKind.ILLEGAL_STATUS_TRANSITION,
        "APPOINTMENT_NOT_RESCHEDULABLE": ConflictKind.ILLEGAL_STATUS_TRANSITION,
        # Policy
        "CANNOT_CANCEL_BATCH": ConflictKind.CANNOT_CANCEL_BATCH,
        # Authorization
        "FORBIDDEN": ConflictKind.FORBIDDEN,
        "ACCESS_DENIED": ConflictKind.FORBIDDEN,
        # Not found
        "RELATED_RESOURCE_NOT_FOUND": ConflictKind.RESOURCE_NOT_FOUND,
        "SHIFT_NOT_FOUND": ConflictKind.RESOURCE_NOT_FOUND,
        # Validation
        "VALIDATION_ERROR": ConflictKind.VALIDATION_FAILED,
        "BAD_REQUEST": ConflictKind.VALIDATION_FAILED,
        "PAST_DATE_NOT_ALLOWED": ConflictKind.VALIDATION_FAILED,
        "EXCEEDS_MAX_HOURS": ConflictKind.VALIDATION_FAILED,
        "START_TIME_IN_PAST": ConflictKind.VALIDATION_FAILED,
        "INVALID_START_TIME": ConflictKind.VALIDATION_FAILED,
    }

    OUTSIDE_SHIFT_CODES: frozenset[str] = frozenset(
        {
            "EMPLOYEE_NOT_SCHEDULED",
            "EMPLOYEE_SHIFT_NOT_COVERING",
            "PARTICIPANT_NOT_SCHEDULED",
            "PARTICIPANT_SHIFT_NOT_COVERING",
        }
    )

    @staticmethod
    def normalize_code(code: str | None) -> str | None:
        """Normalize a backend code for lookup.

        Strips the Spring-style ``error.`` prefix and converts dotted or
        camelCase codes to upper snake case, e.g.
        ``error.invalid.status.transition`` -> ``INVALID_STATUS_TRANSITION``.
        """
        if code is None:
            return None
        normalized = code.strip()
        if not normalized:
            return None
        if normalized.lower().startswith("error."):
            normalized = normalized[len("error.") :]
        normalized = _CAMEL_BOUNDARY.sub("_", normalized)
        normalized = re.sub(r"[.\-\s]+", "_", normalized)
        return normalized.upper()

    def classify(
        self,
        code: str | None,
        message: str | None = None,
        status_code: int | None = None,
    ) -> ClassifiedConflict:
        """Classify a rejection by its code.

        Args:
            code: Machine-readable error code from the backend.
            message: Human-readable message, kept verbatim.
            status_code: HTTP status of the rejection, if any.

        Returns:
            ClassifiedConflict. Unknown codes yield UNCLASSIFIED with the raw message.
        """
        normalized = self.normalize_code(code)
        kind = self._lookup(normalized)

        if kind == ConflictKind.UNCLASSIFIED:
            logger.warning(f"Unclassified backend rejection: code={code!r} status={status_code} message={message!r}")
        else:
            logger.debug(f"Classified {normalized} as {kind.value}")

        return ClassifiedConflict(kind=kind, code=normalized, raw_message=message, status_code=status_code)

    def classify_response(self, response: "ExternalResponse") -> ClassifiedConflict:
        """Classify a failed ExternalResponse."""
        return self.classify(response.error_code, response.error_message, response.status_code)

    def _lookup(self, normalized: str | None) -> ConflictKind:
        if not normalized:
            return ConflictKind.UNCLASSIFIED
        kind = self.CODE_KINDS.get(normalized)
        if kind is not None:
            return kind
        # PATIENT_NOT_FOUND, ROOM_NOT_FOUND, EMPLOYEE_NOT_FOUND, SERVICE_NOT_FOUND, ...
        if normalized.endswith("_NOT_FOUND"):
            return ConflictKind.RESOURCE_NOT_FOUND
        return ConflictKind.UNCLASSIFIED

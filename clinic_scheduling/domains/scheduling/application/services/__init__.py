# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Application services exports.
# ============================================================================
"""Application Services for the Scheduling domain."""

from .availability_resolver import DOCTOR_SLOT, AvailabilityResolver, participant_slot
from .calendar_projector import STATUS_COLORS, CalendarEvent, CalendarProjector
from .conflict_classifier import ClassifiedConflict, ConflictClassifier
from .projection_cache import MonthKey, RequestSequencer, ShiftProjectionCache
from .shift_store import ShiftStore

__all__ = [
    "AvailabilityResolver",
    "CalendarEvent",
    "CalendarProjector",
    "ClassifiedConflict",
    "ConflictClassifier",
    "DOCTOR_SLOT",
    "MonthKey",
    "RequestSequencer",
    "STATUS_COLORS",
    "ShiftProjectionCache",
    "ShiftStore",
    "participant_slot",
]

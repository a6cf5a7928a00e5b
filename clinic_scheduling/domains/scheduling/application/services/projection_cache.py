# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Month projection cache with request supersession.
# ============================================================================
"""Shift Projection Cache.

Read-mostly cache of one employee's shifts for one calendar month. Every
fetch takes a sequence number for its key; a response is applied only when
it carries the latest number issued for that key, so a slow, superseded
response can never overwrite a newer one.
"""

import itertools
import logging
from collections.abc import Hashable
from dataclasses import dataclass
from datetime import date

from ...domain.entities.shift import EmployeeShift

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthKey:
    """Cache key: one employee, one calendar month."""

    employee_id: int
    year: int
    month: int

    @classmethod
    def of(cls, employee_id: int, day: date) -> "MonthKey":
        return cls(employee_id=employee_id, year=day.year, month=day.month)

    def __str__(self) -> str:
        return f"employee={self.employee_id} month={self.year:04d}-{self.month:02d}"


class RequestSequencer:
    """Issues monotonically increasing sequence numbers per key."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest: dict[Hashable, int] = {}

    def issue(self, key: Hashable) -> int:
        """Issue a new sequence number, superseding every earlier one for the key."""
        sequence = next(self._counter)
        self._latest[key] = sequence
        return sequence

    def is_latest(self, key: Hashable, sequence: int) -> bool:
        return self._latest.get(key) == sequence

    def forget(self, key: Hashable) -> None:
        self._latest.pop(key, None)


class ShiftProjectionCache:
    """Month projections keyed by MonthKey."""

    def __init__(self) -> None:
        self._entries: dict[MonthKey, list[EmployeeShift]] = {}
        self._sequencer = RequestSequencer()

    def get(self, key: MonthKey) -> list[EmployeeShift] | None:
        entry = self._entries.get(key)
        return list(entry) if entry is not None else None

    def begin(self, key: MonthKey) -> int:
        """Register a fetch for the key and return its sequence number."""
        return self._sequencer.issue(key)

    def apply(self, key: MonthKey, sequence: int, shifts: list[EmployeeShift]) -> bool:
        """Store a fetch result if it is still the latest for the key.

        Returns:
            True when applied, False when the result was superseded and dropped.
        """
        if not self._sequencer.is_latest(key, sequence):
            logger.debug(f"Dropping superseded shift projection for {key} (sequence {sequence})")
            return False
        self._entries[key] = list(shifts)
        return True

    def invalidate(self, key: MonthKey) -> None:
        """Drop a projection. Fetches already in flight for it are superseded."""
        self._entries.pop(key, None)
        self._sequencer.issue(key)

    def invalidate_employee(self, employee_id: int) -> None:
        for key in [key for key in self._entries if key.employee_id == employee_id]:
            self.invalidate(key)

    def clear(self) -> None:
        for key in list(self._entries):
            self.invalidate(key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
